"""
Error Sanitization Middleware

Sanitizes error responses to prevent information leakage.
"""

from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from focusguard.config import logger


def _internal_error(request_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "request_id": request_id},
    )


class ErrorSanitizationMiddleware(BaseHTTPMiddleware):
    """
    Sanitizes error responses to prevent information leakage.

    Unless debugging:
    - Replaces 5xx bodies with a generic JSON message
    - Logs full errors server-side
    """

    def __init__(self, app: ASGIApp, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            response = await call_next(request)
        except Exception as exc:
            request_id = getattr(request.state, "request_id", "unknown")
            logger.exception("Unhandled exception in request %s: %s", request_id, exc)

            if self.debug:
                raise

            return _internal_error(request_id)

        if response.status_code >= 500 and not self.debug:
            return _internal_error(getattr(request.state, "request_id", "unknown"))

        return response
