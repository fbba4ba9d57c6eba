"""Service Container — minimal DI with singleton, scoped, and transient lifetimes.

Invariants:
    - Singletons are cached on the root provider; scoped instances per scope
    - Transient services are built on every resolve, never cached
    - ServiceProvider resolves to the provider doing the resolving
    - A closed scope refuses every resolve (ServiceScopeClosedError)
    - Closing a scope closes the instances it created, newest first

Design Decisions:
    - Hand-rolled over a DI library: FastAPI's Depends is request-scoped and has
      no constructor injection; providers need one handle at startup
    - Factories receive the resolving provider (not the collection): lets
      scoped factories capture the scope they were built in
    - Last registration wins: the host may override library defaults
    - RLock per provider: factories resolve their own dependencies re-entrantly
"""

import inspect
import logging
import threading
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from endpoint_providers.core.errors import (
    ServiceNotRegisteredError, ServiceScopeClosedError,
)

logger = logging.getLogger(__name__)

ServiceFactory = Callable[["ServiceProvider"], Any]


class ServiceLifetime(str, Enum):
    """How long a resolved instance lives."""
    SINGLETON = "singleton"
    SCOPED = "scoped"
    TRANSIENT = "transient"


@dataclass(frozen=True)
class ServiceDescriptor:
    """One registration: which type, how long it lives, how to build it."""
    service_type: type
    lifetime: ServiceLifetime
    factory: ServiceFactory | None = None
    instance: Any = None


class ServiceCollection:
    """Mutable registration list — built once into a ServiceProvider."""

    def __init__(self):
        self._descriptors: dict[type, ServiceDescriptor] = {}

    def add_singleton(
        self,
        service_type: type,
        factory: ServiceFactory | None = None,
        *,
        instance: Any = None,
    ) -> "ServiceCollection":
        if instance is not None:
            return self._add(ServiceDescriptor(
                service_type, ServiceLifetime.SINGLETON, instance=instance,
            ))
        return self._add(ServiceDescriptor(
            service_type, ServiceLifetime.SINGLETON,
            factory or _autowire(service_type),
        ))

    def add_scoped(
        self, service_type: type, factory: ServiceFactory | None = None,
    ) -> "ServiceCollection":
        return self._add(ServiceDescriptor(
            service_type, ServiceLifetime.SCOPED,
            factory or _autowire(service_type),
        ))

    def add_transient(
        self, service_type: type, factory: ServiceFactory | None = None,
    ) -> "ServiceCollection":
        return self._add(ServiceDescriptor(
            service_type, ServiceLifetime.TRANSIENT,
            factory or _autowire(service_type),
        ))

    def _add(self, descriptor: ServiceDescriptor) -> "ServiceCollection":
        if descriptor.service_type in self._descriptors:
            logger.debug(
                f"Replacing registration for {descriptor.service_type.__qualname__}",
            )
        self._descriptors[descriptor.service_type] = descriptor
        return self

    def __contains__(self, service_type: type) -> bool:
        return service_type in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def build_service_provider(self) -> "ServiceProvider":
        """Freeze registrations into the root provider."""
        return ServiceProvider(dict(self._descriptors))


class ServiceProvider:
    """Resolves registered services. The root provider doubles as its own scope."""

    def __init__(
        self,
        descriptors: dict[type, ServiceDescriptor],
        root: "ServiceProvider | None" = None,
    ):
        self._descriptors = descriptors
        self._root = root or self
        self._instances: dict[type, Any] = {}
        self._created: list[Any] = []
        self._closed = False
        self._lock = threading.RLock()

    @property
    def is_root(self) -> bool:
        return self._root is self

    @property
    def closed(self) -> bool:
        return self._closed

    def is_registered(self, service_type: type) -> bool:
        return service_type is ServiceProvider or service_type in self._descriptors

    def get_service(self, service_type: type) -> Any:
        """Resolve service_type, or None when it is not registered."""
        if self._closed:
            raise ServiceScopeClosedError()
        if service_type is ServiceProvider:
            return self
        descriptor = self._descriptors.get(service_type)
        if descriptor is None:
            return None
        if descriptor.instance is not None:
            return descriptor.instance
        if descriptor.lifetime is ServiceLifetime.TRANSIENT:
            return descriptor.factory(self)
        if descriptor.lifetime is ServiceLifetime.SINGLETON:
            return self._root._get_or_create(descriptor)
        return self._get_or_create(descriptor)

    def get_required_service(self, service_type: type) -> Any:
        service = self.get_service(service_type)
        if service is None:
            raise ServiceNotRegisteredError(service_type)
        return service

    def create_scope(self) -> "ServiceScope":
        if self._closed:
            raise ServiceScopeClosedError()
        return ServiceScope(ServiceProvider(self._descriptors, root=self._root))

    def close(self) -> None:
        """Close every instance this provider created, newest first."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            created, self._created = self._created, []
            self._instances.clear()
        for instance in reversed(created):
            close = getattr(instance, "close", None)
            if callable(close):
                close()

    def _get_or_create(self, descriptor: ServiceDescriptor) -> Any:
        with self._lock:
            if self._closed:
                raise ServiceScopeClosedError()
            if descriptor.service_type in self._instances:
                return self._instances[descriptor.service_type]
            instance = descriptor.factory(self)
            self._instances[descriptor.service_type] = instance
            self._created.append(instance)
            return instance


class ServiceScope:
    """Owns a scoped ServiceProvider; close() ends its lifetime."""

    def __init__(self, provider: ServiceProvider):
        self._provider = provider

    @property
    def service_provider(self) -> ServiceProvider:
        return self._provider

    @property
    def closed(self) -> bool:
        return self._provider.closed

    def close(self) -> None:
        self._provider.close()

    def __enter__(self) -> "ServiceScope":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


# ─── Auto-wiring ────────────────────────────────────────────────

def _autowire(service_type: type) -> ServiceFactory:
    """Build a factory that resolves constructor parameters by annotation."""

    def factory(provider: ServiceProvider) -> Any:
        kwargs = {}
        for name, annotation, default in _constructor_parameters(service_type):
            dependency = (
                provider.get_service(annotation)
                if isinstance(annotation, type) else None
            )
            if dependency is not None:
                kwargs[name] = dependency
            elif default is inspect.Parameter.empty:
                if not isinstance(annotation, type):
                    raise TypeError(
                        f"Cannot auto-wire {service_type.__qualname__}: "
                        f"parameter '{name}' has no class annotation",
                    )
                raise ServiceNotRegisteredError(annotation)
        return service_type(**kwargs)

    return factory


def _constructor_parameters(service_type: type) -> list[tuple[str, Any, Any]]:
    """(name, resolved annotation, default) for each injectable parameter."""
    init = service_type.__init__
    if init is object.__init__:
        return []
    hints = typing.get_type_hints(init)
    return [
        (p.name, hints.get(p.name), p.default)
        for p in list(inspect.signature(init).parameters.values())[1:]
        if p.kind not in (p.VAR_POSITIONAL, p.VAR_KEYWORD)
    ]
