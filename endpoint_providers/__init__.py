"""Endpoint Providers — convention-based route registration for FastAPI.

Invariants:
    - Package root contains no executable code beyond the version string
    - Public entry points are imported from their own modules (services/, api/)

Design Decisions:
    - No star exports: callers import add_endpoints_from_endpoint_providers,
      add_endpoint_provider_factory, add_exception_middleware explicitly
"""

__version__ = "1.0.0"
