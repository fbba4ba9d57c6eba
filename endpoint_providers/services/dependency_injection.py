"""DI Wiring — registers the provider factory and binds a container to a FastAPI app.

Invariants:
    - EndpointProviderFactory is scoped: each scope builds providers with its own handle
    - app.state.services holds the root ServiceProvider (set exactly once by the host)

Design Decisions:
    - app.state over a module global: one container per app, tests build many apps
"""

from fastapi import FastAPI

from endpoint_providers.core.errors import ServiceProviderMissingError
from endpoint_providers.core.service_container import ServiceCollection, ServiceProvider
from endpoint_providers.services.provider_factory import EndpointProviderFactory


def add_endpoint_provider_factory(services: ServiceCollection) -> ServiceCollection:
    """Register EndpointProviderFactory (scoped) bound to the resolving provider."""
    return services.add_scoped(
        EndpointProviderFactory, lambda provider: EndpointProviderFactory(provider),
    )


def attach_service_provider(app: FastAPI, provider: ServiceProvider) -> FastAPI:
    app.state.services = provider
    return app


def get_app_services(app: FastAPI) -> ServiceProvider:
    provider = getattr(app.state, "services", None)
    if provider is None:
        raise ServiceProviderMissingError()
    return provider
