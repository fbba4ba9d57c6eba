"""Endpoint Provider Factory — builds providers through their single-handle constructor.

Invariants:
    - Only constructors taking exactly one positional ServiceProvider parameter qualify
    - Non-qualifying types yield None — never an exception
    - Exceptions raised inside a qualifying constructor propagate unmodified
    - Results that do not satisfy EndpointProvider yield None

Design Decisions:
    - Annotation-based probing (typing.get_type_hints) over try-call: calling a
      constructor with the wrong shape would run arbitrary code before failing
    - Optional[ServiceProvider] accepted: BaseEndpointProvider's own constructor
      defaults the handle to None, subclasses inherit it
"""

import inspect
import logging
import typing
from typing import TypeVar

from endpoint_providers.core.provider import EndpointProvider
from endpoint_providers.core.service_container import ServiceProvider

logger = logging.getLogger(__name__)

P = TypeVar("P")


class EndpointProviderFactory:
    """Constructs endpoint providers with the service provider it was built with."""

    def __init__(self, provider: ServiceProvider):
        self._provider = provider

    @property
    def service_provider(self) -> ServiceProvider:
        return self._provider

    def get_endpoint_provider_for(self, provider_type: type[P]) -> P | None:
        """Typed convenience form of get_endpoint_provider."""
        return self.get_endpoint_provider(provider_type)

    def get_endpoint_provider(self, provider_type: type) -> EndpointProvider | None:
        if not accepts_service_provider(provider_type):
            return None
        instance = provider_type(self._provider)
        if not isinstance(instance, EndpointProvider):
            logger.warning(
                f"{provider_type.__qualname__} built but is not an endpoint provider",
                extra={"provider": provider_type.__qualname__},
            )
            return None
        return instance


def accepts_service_provider(provider_type: type) -> bool:
    """True when provider_type(ServiceProvider) matches its constructor exactly."""
    init = provider_type.__init__
    if init is object.__init__:
        return False
    try:
        parameters = list(inspect.signature(init).parameters.values())[1:]
    except (TypeError, ValueError):
        return False
    if len(parameters) != 1:
        return False
    parameter = parameters[0]
    if parameter.kind not in (
        parameter.POSITIONAL_ONLY, parameter.POSITIONAL_OR_KEYWORD,
    ):
        return False
    try:
        hints = typing.get_type_hints(init)
    except (NameError, TypeError) as e:
        logger.debug(
            f"Unresolvable annotations on {provider_type.__qualname__}: {e}",
        )
        return False
    return _annotation_accepts(hints.get(parameter.name))


def _annotation_accepts(annotation: object) -> bool:
    if isinstance(annotation, type) and not typing.get_args(annotation):
        return issubclass(ServiceProvider, annotation) and annotation is not object
    return any(
        _annotation_accepts(arg)
        for arg in typing.get_args(annotation)
        if arg is not type(None)
    )
