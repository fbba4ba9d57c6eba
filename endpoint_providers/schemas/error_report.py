"""Error Report — the fixed-shape JSON envelope written for failed requests.

Invariants:
    - Wire shape: {"validation": {"errors": [{"propertyName", "errorMessage"}, ...]}}
    - Unhandled-fault entries use the literal label "application/json" as propertyName
    - Inner (cause) message precedes the outer message when both exist

Design Decisions:
    - Literal "application/json" label kept for wire compatibility with existing
      clients, even though it is not a real field name
    - Inner error follows Python's own chaining rules: __cause__, else __context__
      unless suppressed (same error the traceback would show as "during handling")
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

GENERIC_PROPERTY_NAME = "application/json"


class ValidationFailure(BaseModel):
    """One (field, message) failure pair."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    property_name: str
    error_message: str


class ValidationResult(BaseModel):
    errors: list[ValidationFailure] = Field(default_factory=list)


class ErrorReport(BaseModel):
    """Top-level error body."""
    validation: ValidationResult = Field(default_factory=ValidationResult)

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True)


def inner_error(exc: BaseException) -> BaseException | None:
    """The error exc was raised from, if any."""
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__context__ is not None and not exc.__suppress_context__:
        return exc.__context__
    return None


def error_message(exc: BaseException) -> str:
    """str(exc), or the class name when the exception has no printable message."""
    try:
        message = str(exc)
    except Exception:
        return type(exc).__name__
    return message or type(exc).__name__


def build_error_report(exc: BaseException) -> ErrorReport:
    """Inner message first (when present), then the outer message."""
    failures = []
    inner = inner_error(exc)
    if inner is not None:
        failures.append(ValidationFailure(
            property_name=GENERIC_PROPERTY_NAME, error_message=error_message(inner),
        ))
    failures.append(ValidationFailure(
        property_name=GENERIC_PROPERTY_NAME, error_message=error_message(exc),
    ))
    return ErrorReport(validation=ValidationResult(errors=failures))
