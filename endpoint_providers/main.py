"""Endpoint Providers Demo Host — FastAPI application entry point.

Invariants:
    - Routes are never included explicitly: the api.routes package is the scan marker
    - Discovery runs exactly once per app, after the container is attached
    - Exception middleware registered last (outermost user middleware)
    - CORS configured from settings (not hardcoded)

Design Decisions:
    - create_app() factory over a bare module-level app: tests build isolated apps
      with their own settings and container
    - Scan uses an explicit scope owned by the app's lifespan, closed on shutdown

Usage:
    uvicorn endpoint_providers.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from endpoint_providers.api import routes
from endpoint_providers.api.error_handlers import register_error_handlers
from endpoint_providers.api.exception_middleware import add_exception_middleware
from endpoint_providers.config import Settings, get_settings
from endpoint_providers.core.service_container import ServiceCollection
from endpoint_providers.infrastructure.observability import setup_logging
from endpoint_providers.services.dependency_injection import (
    add_endpoint_provider_factory, attach_service_provider, get_app_services,
)
from endpoint_providers.services.provider_scanner import add_endpoints_from_endpoint_providers
from endpoint_providers.services.weather_forecasts import WeatherForecastRepository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    logger.info(f"{app.title} started")
    try:
        yield
    finally:
        logger.info(f"{app.title} shutting down")
        try:
            app.state.scan_scope.close()
        finally:
            get_app_services(app).close()


def configure_services(settings: Settings) -> ServiceCollection:
    services = ServiceCollection()
    services.add_singleton(Settings, instance=settings)
    services.add_scoped(WeatherForecastRepository)
    add_endpoint_provider_factory(services)
    return services


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)

    services = configure_services(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url="/redoc" if settings.docs_enabled else None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
    )
    attach_service_provider(app, services.build_service_provider())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Discovery — every provider under api/routes adds its own routes
    app.state.scan_scope = get_app_services(app).create_scope()
    add_endpoints_from_endpoint_providers(app, routes, scope=app.state.scan_scope)

    register_error_handlers(app)
    add_exception_middleware(app)
    return app


app = create_app()
