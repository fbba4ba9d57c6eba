"""Root conftest — shared test configuration."""

import os

import pytest

# Human-readable logs in test output; the demo host reads this via get_settings()
os.environ.setdefault("LOG_FORMAT", "text")

from endpoint_providers.services.provider_scanner import reset_scan_scope  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_scan_scope():
    """Every test starts without a cached process-wide scan scope."""
    reset_scan_scope()
    yield
    reset_scan_scope()
