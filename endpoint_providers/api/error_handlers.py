"""Error Handlers — maps request validation failures to 400 error reports.

Invariants:
    - RequestValidationError → HTTP 400 with the ErrorReport envelope
    - propertyName is the dotted error location (e.g. "query.count"), errorMessage its message
    - Unhandled faults are NOT handled here (see exception_middleware)

Design Decisions:
    - 400 over FastAPI's default 422: clients treat a missing or ill-typed query
      parameter the same as an out-of-range one (bad request)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from endpoint_providers.schemas.error_report import (
    ErrorReport, ValidationFailure, ValidationResult,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> FastAPI:
    """Register all request-level error handlers on the FastAPI app."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_validation_report(exc).to_response(),
        )

    return app


def build_validation_report(exc: RequestValidationError) -> ErrorReport:
    return ErrorReport(validation=ValidationResult(errors=[
        ValidationFailure(
            property_name=".".join(str(loc) for loc in e["loc"]),
            error_message=e["msg"],
        )
        for e in exc.errors()
    ]))
