"""Error Handlers: render every failure as a GradbookError envelope.

Invariants:
    - Every error body has the shape produced by GradbookError.to_response()
    - Malformed request bodies become RecordValidationError (400, VALIDATION_ERROR)
      with one "field: message" detail per violation, like repository validation
    - Unhandled exceptions become InternalOperationError (500); the cause is logged,
      never returned
    - context.record_id carries the {record_id} path parameter when the route has one

Design Decisions:
    - Request-level failures are converted to domain errors first, then share one
      renderer: clients parse a single envelope regardless of which layer rejected
    - Extracted from main.py to keep the app module small
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from gradbook.core.errors import (
    ErrorContext,
    GradbookError,
    InternalOperationError,
    RecordValidationError,
)

logger = logging.getLogger(__name__)

# Location prefixes FastAPI adds in front of the offending field name.
_REQUEST_PARTS = {"body", "query", "path", "header", "cookie"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(GradbookError)
    async def gradbook_error_handler(request: Request, exc: GradbookError):
        return render_error(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        error = RecordValidationError(
            [_describe(e) for e in exc.errors()], _request_context(request),
        )
        return render_error(request, error)

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}", exc_info=True,
        )
        context = _request_context(request)
        return render_error(request, InternalOperationError(context.operation, context))


def render_error(request: Request, exc: GradbookError) -> JSONResponse:
    """Log at a level matching the status and return the envelope."""
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{exc.code}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "record_id": exc.context.record_id,
            "details": exc.details or None,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def _request_context(request: Request) -> ErrorContext:
    return ErrorContext(
        record_id=request.path_params.get("record_id"),
        operation=f"{request.method} {request.url.path}",
    )


def _describe(error: dict) -> str:
    """'major: Input should be a valid string' from a pydantic error entry."""
    loc = [str(part) for part in error.get("loc", ()) if part not in _REQUEST_PARTS]
    field_name = ".".join(loc) or "body"
    return f"{field_name}: {error['msg']}"
