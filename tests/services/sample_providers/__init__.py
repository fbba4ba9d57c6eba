"""Fixture providers scanned by the discovery tests.

Each provider adds one GET route and records its name on app.state.provider_calls,
so tests can assert both which routes exist and in what order providers ran.
"""


def record_call(app, name):
    calls = getattr(app.state, "provider_calls", None)
    if calls is None:
        calls = app.state.provider_calls = []
    calls.append(name)


async def ok():
    return {"status": "ok"}
