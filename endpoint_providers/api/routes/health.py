"""Health Endpoints — liveness probe, discovered like any other provider.

Invariants:
    - GET /health always returns 200 if the process is up
"""

from fastapi import FastAPI, status

from endpoint_providers.config import Settings
from endpoint_providers.core.service_container import ServiceProvider


class HealthEndpoints:
    """Structural provider: satisfies EndpointProvider without inheriting the base class."""

    def __init__(self, provider: ServiceProvider):
        self._settings = provider.get_required_service(Settings)

    def add_endpoints(self, app: FastAPI) -> FastAPI:
        app.add_api_route(
            "/health",
            self.health_check,
            methods=["GET"],
            status_code=status.HTTP_200_OK,
            name="HealthCheck",
            tags=["health"],
        )
        return app

    async def health_check(self):
        """Basic liveness probe. Returns 200 if the process is up."""
        return {
            "status": "healthy",
            "service": self._settings.app_name,
            "version": self._settings.app_version,
        }
