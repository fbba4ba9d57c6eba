"""Endpoint Provider Registry — explicit, ordered registration as an alternative to scanning.

Invariants:
    - Registration order is invocation order
    - Only concrete EndpointProvider classes are accepted (TypeError otherwise)
    - Registering the same class twice raises DuplicateProviderError
    - Providers are built through EndpointProviderFactory, same as the scanner

Design Decisions:
    - Decorator registration at import time into a module-level default registry
      (ADR: same pattern as task handler / health check registries)
    - Registry holds classes, not instances: construction stays a startup concern
      owned by the DI scope
"""

import logging
from typing import Callable, TypeVar

from fastapi import FastAPI

from endpoint_providers.core.errors import DuplicateProviderError
from endpoint_providers.core.provider import is_endpoint_provider_type
from endpoint_providers.core.service_container import ServiceScope
from endpoint_providers.services.provider_factory import EndpointProviderFactory
from endpoint_providers.services.provider_scanner import (
    build_endpoint_providers, get_scan_scope,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)


class EndpointProviderRegistry:
    """Ordered set of endpoint provider classes."""

    def __init__(self):
        self._providers: list[type] = []

    def register(self, provider_type: type) -> type:
        if not is_endpoint_provider_type(provider_type):
            raise TypeError(
                f"{provider_type!r} is not a concrete endpoint provider class",
            )
        if provider_type in self._providers:
            raise DuplicateProviderError(provider_type)
        self._providers.append(provider_type)
        logger.debug(
            f"Registered endpoint provider: {provider_type.__qualname__}",
            extra={"provider": provider_type.__qualname__},
        )
        return provider_type

    def unregister(self, provider_type: type) -> bool:
        if provider_type in self._providers:
            self._providers.remove(provider_type)
            return True
        return False

    def get_all(self) -> list[type]:
        return list(self._providers)

    def clear(self) -> None:
        self._providers.clear()

    def __len__(self) -> int:
        return len(self._providers)

    def __contains__(self, provider_type: type) -> bool:
        return provider_type in self._providers


# ─── Default registry & decorator ───────────────────────────────

_registry: EndpointProviderRegistry | None = None


def get_registry() -> EndpointProviderRegistry:
    """Get the default endpoint provider registry."""
    global _registry
    if _registry is None:
        _registry = EndpointProviderRegistry()
    return _registry


def register_endpoint_provider(
    provider_type: T | None = None,
    *,
    registry: EndpointProviderRegistry | None = None,
) -> T | Callable[[T], T]:
    """Class decorator; usable bare or as register_endpoint_provider(registry=...).

    Example:
        @register_endpoint_provider
        class OrdersEndpoints(BaseEndpointProvider):
            def add_endpoints(self, app):
                ...
    """
    def decorator(cls: T) -> T:
        (get_registry() if registry is None else registry).register(cls)
        return cls

    if provider_type is not None:
        return decorator(provider_type)
    return decorator


def add_endpoints_from_registry(
    app: FastAPI,
    registry: EndpointProviderRegistry | None = None,
    *,
    scope: ServiceScope | None = None,
) -> FastAPI:
    """Build every registered provider and let it add its routes, in registration order."""
    if registry is None:
        registry = get_registry()
    scope = scope or get_scan_scope(app)
    factory = scope.service_provider.get_required_service(EndpointProviderFactory)

    providers = build_endpoint_providers(factory, registry.get_all())
    for provider in providers:
        provider.add_endpoints(app)

    logger.info(
        f"Registered {len(providers)} endpoint provider(s) from registry",
        extra={"provider_count": len(providers)},
    )
    return app
