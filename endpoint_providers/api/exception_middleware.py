"""Exception Middleware — converts any unhandled request error into a JSON 500 error report.

Invariants:
    - Normal responses pass through untouched
    - Every Exception escaping the pipeline is logged once at ERROR, then answered with
      HTTP 500 + application/json + ErrorReport (inner message first, then outer)
    - The middleware never raises: if the report itself cannot be built, a bare
      500 with an empty body is sent instead; a fault that cannot be described
      is logged by class name
    - The anyio.EndOfStream that call_next re-raises under is never reported as
      the inner error
    - Holds no mutable state; safe across concurrent requests

Design Decisions:
    - BaseHTTPMiddleware over @app.exception_handler(Exception): Starlette routes
      Exception handlers to ServerErrorMiddleware, which re-raises after responding
    - Registered last via add_exception_middleware so it wraps every other user middleware
    - Some Starlette releases re-raise the app error inside `except anyio.EndOfStream`,
      chaining the stream sentinel as __context__; it is detached before reporting
"""

import logging

import anyio
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from endpoint_providers.core.errors import EndpointProvidersError
from endpoint_providers.schemas.error_report import (
    build_error_report, error_message, inner_error,
)

logger = logging.getLogger(__name__)


class ExceptionMiddleware(BaseHTTPMiddleware):
    """Outermost catch-all for request faults."""

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            _detach_stream_context(exc)
            _log_request_fault(request, exc)
            return _error_response(exc)


def add_exception_middleware(app: FastAPI) -> FastAPI:
    """Register ExceptionMiddleware as the outermost user middleware."""
    app.add_middleware(ExceptionMiddleware)
    return app


def _detach_stream_context(exc: Exception) -> None:
    if exc.__cause__ is None and isinstance(exc.__context__, anyio.EndOfStream):
        exc.__suppress_context__ = True


def _log_request_fault(request: Request, exc: Exception) -> None:
    try:
        message = f"Something went wrong: {error_message(exc)}"
        inner = inner_error(exc)
        if inner is not None:
            message += f" | inner: {error_message(inner)}"
        extra = {"path": request.url.path}
        if isinstance(exc, EndpointProvidersError):
            extra["error_code"] = exc.code
        logger.error(message, extra=extra, exc_info=exc)
    except Exception:
        logger.exception(f"Something went wrong: {type(exc).__name__}")


def _error_response(exc: Exception) -> Response:
    try:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=build_error_report(exc).to_response(),
        )
    except Exception as e:
        logger.critical(
            f"Failed to serialize error report: {error_message(e)}", exc_info=True,
        )
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
