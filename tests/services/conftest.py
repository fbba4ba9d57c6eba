"""Service test fixtures — container with the provider factory, bare FastAPI app.

Invariants:
    - app has a root ServiceProvider attached but no routes beyond FastAPI's docs
    - services is built per test (no registrations leak between tests)
"""

import pytest
from fastapi import FastAPI

from endpoint_providers.core.service_container import ServiceCollection
from endpoint_providers.services.dependency_injection import (
    add_endpoint_provider_factory, attach_service_provider,
)


@pytest.fixture
def services():
    services = ServiceCollection()
    add_endpoint_provider_factory(services)
    return services


@pytest.fixture
def app(services):
    app = FastAPI()
    attach_service_provider(app, services.build_service_provider())
    return app
