"""Error Hierarchy — typed, categorized exceptions for discovery and dependency resolution.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Discovery errors are fatal at startup; nothing in this package retries them
    - Exceptions raised by provider code (constructors, add_endpoints) are never
      wrapped in these types — they propagate unmodified

Design Decisions:
    - Single hierarchy with EndpointProvidersError base: the exception middleware
      surfaces error_code in logs for any package error (ADR: uniform error shape)
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    DISCOVERY = "discovery"
    DEPENDENCY_RESOLUTION = "dependency_resolution"
    INTERNAL = "internal"


class EndpointProvidersError(Exception):
    """Base exception for all endpoint provider errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity


# ─── Discovery Errors (fatal at startup) ────────────────────────

class ProviderDiscoveryError(EndpointProvidersError):
    """A marker's module could not be resolved or imported."""
    def __init__(self, marker: object, reason: str):
        super().__init__(
            f"Cannot scan marker {marker!r}: {reason}",
            "PROVIDER_DISCOVERY_FAILED", ErrorCategory.DISCOVERY,
            ErrorSeverity.CRITICAL,
        )
        self.marker = marker


class DuplicateProviderError(EndpointProvidersError):
    """Provider class registered twice in the same registry."""
    def __init__(self, provider_type: type):
        super().__init__(
            f"Endpoint provider already registered: {provider_type.__qualname__}",
            "DUPLICATE_PROVIDER", ErrorCategory.DISCOVERY,
        )
        self.provider_type = provider_type


# ─── Dependency Resolution Errors ───────────────────────────────

class ServiceNotRegisteredError(EndpointProvidersError):
    """Required service has no registration in the container."""
    def __init__(self, service_type: type):
        name = getattr(service_type, "__qualname__", repr(service_type))
        super().__init__(
            f"No service registered for type '{name}'",
            "SERVICE_NOT_REGISTERED", ErrorCategory.DEPENDENCY_RESOLUTION,
        )
        self.service_type = service_type


class ServiceProviderMissingError(EndpointProvidersError):
    """Application has no service provider attached to app.state."""
    def __init__(self):
        super().__init__(
            "Application has no service provider attached. "
            "Call attach_service_provider(app, provider) first.",
            "SERVICE_PROVIDER_MISSING", ErrorCategory.DEPENDENCY_RESOLUTION,
            ErrorSeverity.CRITICAL,
        )


class ServiceScopeClosedError(EndpointProvidersError):
    """Service resolved from a scope that was already closed."""
    def __init__(self):
        super().__init__(
            "Cannot resolve services from a closed scope",
            "SERVICE_SCOPE_CLOSED", ErrorCategory.DEPENDENCY_RESOLUTION,
        )
