# backend/boothmedia/middleware/error_handler.py
"""
Error handling middleware for the booth API.

Catches exceptions that escape the routers, logs them with a correlation id,
and maps the booth error taxonomy onto HTTP status codes.
"""

import uuid
from datetime import datetime, timezone

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..exceptions import (
    BoothMediaError,
    ExtractionError,
    UploadError,
    UpstreamError,
    ValidationError,
)


def status_for_exception(exc: Exception) -> int:
    """HTTP status for an exception that escaped a request handler."""
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, (UpstreamError, ExtractionError, UploadError)):
        return 502
    return 500


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Centralized handler for booth errors and anything unexpected."""

    def __init__(self, app: ASGIApp, debug_mode: bool = False):
        super().__init__(app)
        self.debug_mode = debug_mode

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        try:
            return await call_next(request)
        except Exception as exc:
            status_code = status_for_exception(exc)
            logger.error(
                f"Unhandled {type(exc).__name__} in {request.method} {request.url.path} "
                f"[{correlation_id}]: {exc}"
            )

            # Booth errors carry safe messages; anything else stays opaque
            # outside debug mode.
            if isinstance(exc, BoothMediaError) or self.debug_mode:
                message = str(exc)
            else:
                message = "An unexpected error occurred"

            return JSONResponse(
                status_code=status_code,
                content={
                    "error": {
                        "type": type(exc).__name__,
                        "message": message,
                        "status_code": status_code,
                        "correlation_id": correlation_id,
                        "timestamp": datetime.now(timezone.utc).isoformat(),
                    }
                },
            )
