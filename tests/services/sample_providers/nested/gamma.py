from fastapi import FastAPI

from endpoint_providers.core.provider import BaseEndpointProvider
from endpoint_providers.core.service_container import ServiceProvider
from tests.services.sample_providers import ok, record_call

__all__ = ["GammaEndpoints"]


class GammaEndpoints(BaseEndpointProvider):
    def __init__(self, provider: ServiceProvider):
        super().__init__(provider)

    def add_endpoints(self, app: FastAPI) -> FastAPI:
        app.add_api_route("/nested/gamma", ok, methods=["GET"])
        record_call(app, "nested.gamma")
        return app


class HiddenEndpoints(BaseEndpointProvider):
    """Not listed in __all__, so never discovered."""

    def __init__(self, provider: ServiceProvider):
        super().__init__(provider)

    def add_endpoints(self, app: FastAPI) -> FastAPI:
        record_call(app, "nested.hidden")
        return app
