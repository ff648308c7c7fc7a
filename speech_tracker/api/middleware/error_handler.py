"""
Global error handling middleware for the FastAPI application.

Catches SpeechTrackerError subclasses, HTTP errors raised by routing,
Pydantic validation errors, and unhandled exceptions, converting them into
a consistent JSON envelope with an ``error`` message the UI can display
directly.
"""

import logging
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from speech_tracker.core.exceptions import SpeechTrackerError
from speech_tracker.core.models import ErrorResponse

logger = logging.getLogger(__name__)

_HTTP_ERROR_CODES = {
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def _envelope(
    status_code: int,
    error: str,
    code: str,
    timestamp: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        code=code,
        timestamp=timestamp or datetime.now(UTC).isoformat(),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application.

    Registers four handlers in priority order:
    1. ``SpeechTrackerError`` — maps domain errors to structured JSON responses.
    2. ``HTTPException`` — unknown routes (404) and wrong methods (405).
    3. ``RequestValidationError`` — malformed body/params become ``INVALID_INPUT`` (400).
    4. ``Exception`` — catch-all for unexpected server errors (500).

    Args:
        app: The FastAPI application instance to register handlers on.
    """

    @app.exception_handler(SpeechTrackerError)
    async def speech_tracker_error_handler(
        request: Request, exc: SpeechTrackerError
    ) -> JSONResponse:
        """Convert domain-specific errors into a JSON error envelope."""
        logger.warning(
            "%s %s -> %s %s: %s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.code,
            exc.detail,
        )
        return _envelope(exc.status_code, exc.detail, exc.code, timestamp=exc.timestamp)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Wrap routing errors (404, 405, ...) in the same envelope."""
        logger.warning(
            "%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.detail
        )
        return _envelope(
            exc.status_code,
            str(exc.detail),
            _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle Pydantic request validation errors (malformed body/params)."""
        logger.warning("Invalid request to %s: %s", request.url.path, exc.errors())
        return _envelope(400, "Invalid request body", "INVALID_INPUT")

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all handler — prevents stack traces from leaking to clients."""
        logger.exception("Unhandled error on %s", request.url.path, exc_info=exc)
        return _envelope(500, "Internal server error", "INTERNAL_ERROR")
