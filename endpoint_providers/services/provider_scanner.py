"""Endpoint Provider Scanner — discovers provider classes in marker modules and registers their routes.

Invariants:
    - Each discovered provider's add_endpoints(app) is called exactly once per scan
    - Order: marker order, then module attribute order, then submodule walk order
    - Types without a single-ServiceProvider constructor contribute zero routes (skipped, logged)
    - Unimportable markers raise ProviderDiscoveryError; provider exceptions propagate unmodified
    - Repeated scans re-register every route (no dedup); call once per process

Design Decisions:
    - Registration order is stable for a given build but carries no meaning;
      providers must add disjoint routes
    - Process-wide scan scope created lazily under a lock, reused across scans
      by default; pass scope= to own the lifecycle instead
    - Only classes defined in the scanned module count, so package re-exports
      are not discovered twice (importlib/pkgutil walk mirrors route-module autoloaders)
"""

import importlib
import inspect
import logging
import pkgutil
import sys
import threading
from types import ModuleType
from typing import Iterator

from fastapi import FastAPI

from endpoint_providers.core.errors import ProviderDiscoveryError
from endpoint_providers.core.provider import EndpointProvider, is_endpoint_provider_type
from endpoint_providers.core.service_container import ServiceScope
from endpoint_providers.services.dependency_injection import get_app_services
from endpoint_providers.services.provider_factory import EndpointProviderFactory

logger = logging.getLogger(__name__)

Marker = type | ModuleType | str

# Process-wide scan scope (created on first scan)
_current_scope: ServiceScope | None = None
_scope_lock = threading.Lock()


def get_scan_scope(app: FastAPI) -> ServiceScope:
    """Return the cached scan scope, creating it from app's services on first use."""
    global _current_scope
    with _scope_lock:
        if _current_scope is None:
            _current_scope = get_app_services(app).create_scope()
        return _current_scope


def reset_scan_scope() -> None:
    """Close and forget the cached scan scope."""
    global _current_scope
    with _scope_lock:
        scope, _current_scope = _current_scope, None
    if scope is not None:
        scope.close()


def add_endpoints_from_endpoint_providers(
    app: FastAPI, *markers: Marker, scope: ServiceScope | None = None,
) -> FastAPI:
    """Discover providers in every marker's module and let each add its routes to app."""
    if scope is None:
        scope = get_scan_scope(app)
    factory = scope.service_provider.get_required_service(EndpointProviderFactory)

    providers = collect_endpoint_providers(factory, markers)
    for provider in providers:
        provider.add_endpoints(app)

    logger.info(
        f"Registered {len(providers)} endpoint provider(s) from {len(markers)} marker(s)",
        extra={
            "provider_count": len(providers),
            "marker": [_marker_name(m) for m in markers],
        },
    )
    return app


def collect_endpoint_providers(
    factory: EndpointProviderFactory, markers: tuple[Marker, ...] | list[Marker],
) -> list[EndpointProvider]:
    """Build every constructible provider across markers, in discovery order."""
    provider_types = [
        provider_type
        for marker in markers
        for provider_type in discover_provider_types(marker)
    ]
    return build_endpoint_providers(factory, provider_types)


def build_endpoint_providers(
    factory: EndpointProviderFactory, provider_types: list[type],
) -> list[EndpointProvider]:
    """Construct each type through the factory, dropping the ones it cannot build."""
    providers: list[EndpointProvider] = []
    for provider_type in provider_types:
        provider = factory.get_endpoint_provider(provider_type)
        if provider is None:
            logger.warning(
                f"Skipping {provider_type.__qualname__}: no "
                f"{provider_type.__name__}(provider: ServiceProvider) constructor",
                extra={"provider": provider_type.__qualname__},
            )
            continue
        providers.append(provider)
    return providers


def discover_provider_types(marker: Marker) -> list[type]:
    """Concrete EndpointProvider classes exported by the marker's module (and submodules)."""
    found = []
    for module in _iter_modules(marker):
        for candidate in exported_classes(module):
            if is_endpoint_provider_type(candidate):
                logger.debug(
                    f"Discovered endpoint provider {candidate.__qualname__}",
                    extra={"provider": candidate.__qualname__, "marker": module.__name__},
                )
                found.append(candidate)
    return found


def exported_classes(module: ModuleType) -> list[type]:
    """Public classes defined in module, in attribute order."""
    exported = getattr(module, "__all__", None)
    if exported is not None:
        names = [name for name in exported if hasattr(module, name)]
    else:
        names = [name for name in vars(module) if not name.startswith("_")]
    return [
        obj for obj in (getattr(module, name) for name in names)
        if inspect.isclass(obj) and obj.__module__ == module.__name__
    ]


def _iter_modules(marker: Marker) -> Iterator[ModuleType]:
    module = _resolve_module(marker)
    yield module
    if not hasattr(module, "__path__"):
        return
    for info in pkgutil.walk_packages(
        module.__path__, prefix=f"{module.__name__}.", onerror=_raise_walk_error,
    ):
        try:
            submodule = importlib.import_module(info.name)
        except Exception as e:
            raise ProviderDiscoveryError(marker, f"cannot import {info.name}: {e}") from e
        yield submodule


def _resolve_module(marker: Marker) -> ModuleType:
    if isinstance(marker, ModuleType):
        return marker
    if isinstance(marker, str):
        try:
            return importlib.import_module(marker)
        except Exception as e:
            raise ProviderDiscoveryError(marker, f"cannot import module: {e}") from e
    if inspect.isclass(marker):
        module = sys.modules.get(marker.__module__)
        if module is None:
            raise ProviderDiscoveryError(
                marker, f"module '{marker.__module__}' is not loaded",
            )
        return module
    raise ProviderDiscoveryError(marker, "marker must be a class, module, or module name")


def _raise_walk_error(name: str) -> None:
    raise ProviderDiscoveryError(name, "cannot import package during walk")


def _marker_name(marker: Marker) -> str:
    if isinstance(marker, str):
        return marker
    return getattr(marker, "__qualname__", None) or getattr(marker, "__name__", repr(marker))
