"""Endpoint Provider Contract — the single capability every route-registering unit satisfies.

Invariants:
    - add_endpoints(app) mutates the shared app and returns that same app
    - Satisfaction is structural: any class with add_endpoints qualifies,
      inheriting BaseEndpointProvider is optional
    - A provider is constructed with exactly one ServiceProvider argument

Design Decisions:
    - runtime_checkable Protocol over ABC-only: the scanner filters classes with
      issubclass() without forcing an inheritance hierarchy on callers
    - BaseEndpointProvider keeps the injected handle on .provider for subclasses
      that resolve lazily (inside handlers) instead of in __init__
"""

import inspect
from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

from fastapi import FastAPI

from endpoint_providers.core.service_container import ServiceProvider


@runtime_checkable
class EndpointProvider(Protocol):
    """Anything that can attach routes to a FastAPI app."""

    def add_endpoints(self, app: FastAPI) -> FastAPI: ...


class BaseEndpointProvider(ABC):
    """Convenience base: stores the injected provider, leaves add_endpoints abstract."""

    def __init__(self, provider: ServiceProvider | None = None):
        self._provider = provider

    @property
    def provider(self) -> ServiceProvider | None:
        return self._provider

    @provider.setter
    def provider(self, value: ServiceProvider | None) -> None:
        self._provider = value

    @abstractmethod
    def add_endpoints(self, app: FastAPI) -> FastAPI:
        """Attach this provider's routes to app and return app."""


def is_endpoint_provider_type(candidate: object) -> bool:
    """True for concrete classes satisfying EndpointProvider (not abstract, not a Protocol)."""
    if not isinstance(candidate, type):
        return False
    if getattr(candidate, "_is_protocol", False):
        return False
    if inspect.isabstract(candidate):
        return False
    return issubclass(candidate, EndpointProvider)
