"""Provider Registry — tests for explicit registration as an alternative to scanning.

Tests cover:
    - Registration order is invocation order
    - Duplicates raise DuplicateProviderError; non-providers raise TypeError
    - Decorator works bare and with an explicit registry
    - Wrong constructor shapes skipped, provider exceptions propagate
"""

import pytest

from endpoint_providers.core.errors import DuplicateProviderError
from endpoint_providers.services.provider_registry import (
    EndpointProviderRegistry,
    add_endpoints_from_registry,
    get_registry,
    register_endpoint_provider,
)
from tests.services import failing_providers
from tests.services.sample_providers import alpha, beta
from tests.services.sample_providers.nested import gamma


@pytest.fixture
def registry():
    return EndpointProviderRegistry()


@pytest.fixture
def default_registry():
    registry = get_registry()
    saved = registry.get_all()
    registry.clear()
    yield registry
    registry.clear()
    for provider_type in saved:
        registry.register(provider_type)


def test_register_preserves_order(registry):
    registry.register(gamma.GammaEndpoints)
    registry.register(beta.BetaEndpoints)
    assert registry.get_all() == [gamma.GammaEndpoints, beta.BetaEndpoints]
    assert len(registry) == 2
    assert beta.BetaEndpoints in registry


def test_duplicate_registration_raises(registry):
    registry.register(beta.BetaEndpoints)
    with pytest.raises(DuplicateProviderError) as exc_info:
        registry.register(beta.BetaEndpoints)
    assert exc_info.value.code == "DUPLICATE_PROVIDER"


@pytest.mark.parametrize("candidate", [alpha.NotAProvider, alpha.AbstractEndpoints, "beta"])
def test_non_provider_rejected(registry, candidate):
    with pytest.raises(TypeError):
        registry.register(candidate)


def test_unregister(registry):
    registry.register(beta.BetaEndpoints)
    assert registry.unregister(beta.BetaEndpoints)
    assert not registry.unregister(beta.BetaEndpoints)
    assert len(registry) == 0


def test_decorator_with_explicit_registry(registry):
    decorated = register_endpoint_provider(registry=registry)(beta.BetaEndpoints)
    assert decorated is beta.BetaEndpoints
    assert registry.get_all() == [beta.BetaEndpoints]


def test_bare_decorator_uses_default_registry(default_registry):
    register_endpoint_provider(gamma.GammaEndpoints)
    assert default_registry.get_all() == [gamma.GammaEndpoints]


def test_add_endpoints_from_registry_in_registration_order(app, registry):
    for provider_type in (
        gamma.GammaEndpoints, alpha.NoConstructorEndpoints, beta.BetaEndpoints,
    ):
        registry.register(provider_type)

    result = add_endpoints_from_registry(app, registry)

    assert result is app
    assert app.state.provider_calls == ["nested.gamma", "beta"]


def test_empty_registry_is_not_replaced_by_default(app, registry, default_registry):
    default_registry.register(beta.BetaEndpoints)
    add_endpoints_from_registry(app, registry)
    assert getattr(app.state, "provider_calls", []) == []


def test_failing_provider_propagates(app, registry):
    registry.register(failing_providers.BeforeEndpoints)
    registry.register(failing_providers.ExplodingEndpoints)
    registry.register(failing_providers.AfterEndpoints)
    with pytest.raises(RuntimeError, match="route table exploded"):
        add_endpoints_from_registry(app, registry)
    assert app.state.provider_calls == ["before"]
