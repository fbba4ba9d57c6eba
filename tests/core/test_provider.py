"""Endpoint Provider Contract — tests for structural satisfaction and the base class."""

import pytest
from fastapi import FastAPI

from endpoint_providers.core.provider import (
    BaseEndpointProvider, EndpointProvider, is_endpoint_provider_type,
)
from endpoint_providers.core.service_container import ServiceCollection


class Structural:
    def add_endpoints(self, app: FastAPI) -> FastAPI:
        return app


class Derived(BaseEndpointProvider):
    def add_endpoints(self, app: FastAPI) -> FastAPI:
        return app


class Unrelated:
    def add_routes(self, app):
        return app


def test_structural_class_satisfies_protocol():
    assert isinstance(Structural(), EndpointProvider)
    assert is_endpoint_provider_type(Structural)


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        BaseEndpointProvider()
    assert not is_endpoint_provider_type(BaseEndpointProvider)


def test_protocol_itself_is_not_a_provider_type():
    assert not is_endpoint_provider_type(EndpointProvider)


def test_non_classes_and_unrelated_classes_rejected():
    assert not is_endpoint_provider_type(Structural())
    assert not is_endpoint_provider_type(Unrelated)


def test_provider_property_round_trips():
    provider = ServiceCollection().build_service_provider()
    derived = Derived()
    assert derived.provider is None
    derived.provider = provider
    assert derived.provider is provider
    assert Derived(provider).provider is provider
