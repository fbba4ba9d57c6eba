from fastapi import FastAPI

from endpoint_providers.core.service_container import ServiceProvider
from tests.services.sample_providers import ok, record_call


class BetaEndpoints:
    def __init__(self, provider: ServiceProvider):
        self.provider = provider

    def add_endpoints(self, app: FastAPI) -> FastAPI:
        app.add_api_route("/beta", ok, methods=["GET"])
        record_call(app, "beta")
        return app
