"""Mixed module: two valid providers, two skipped shapes, and non-provider noise."""

from abc import abstractmethod

from fastapi import FastAPI

from endpoint_providers.core.provider import BaseEndpointProvider
from endpoint_providers.core.service_container import ServiceProvider
from tests.services.sample_providers import ok, record_call


class AlphaFirstEndpoints(BaseEndpointProvider):
    def __init__(self, provider: ServiceProvider):
        super().__init__(provider)

    def add_endpoints(self, app: FastAPI) -> FastAPI:
        app.add_api_route("/alpha/first", ok, methods=["GET"])
        record_call(app, "alpha.first")
        return app


class WrongConstructorEndpoints(BaseEndpointProvider):
    def __init__(self, provider: ServiceProvider, retries: int):
        super().__init__(provider)
        self.retries = retries

    def add_endpoints(self, app: FastAPI) -> FastAPI:
        record_call(app, "alpha.wrong")
        return app


class AbstractEndpoints(BaseEndpointProvider):
    @abstractmethod
    def prefix(self) -> str: ...


class AlphaSecondEndpoints(BaseEndpointProvider):
    # inherits BaseEndpointProvider.__init__(provider=None)

    def add_endpoints(self, app: FastAPI) -> FastAPI:
        app.add_api_route("/alpha/second", ok, methods=["GET"])
        record_call(app, "alpha.second")
        return app


class NoConstructorEndpoints:
    def add_endpoints(self, app: FastAPI) -> FastAPI:
        record_call(app, "alpha.no_constructor")
        return app


class NotAProvider:
    def __init__(self, provider: ServiceProvider):
        self.provider = provider


class _PrivateEndpoints(BaseEndpointProvider):
    def add_endpoints(self, app: FastAPI) -> FastAPI:
        record_call(app, "alpha.private")
        return app
