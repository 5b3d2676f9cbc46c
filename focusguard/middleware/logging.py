"""
Request Logging Middleware

Assigns each request its ID and logs request/response information.
"""

import time
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from focusguard.config import logger
from focusguard.core.security.constants import REQUEST_ID_HEADER
from focusguard.core.security.utils import get_client_identifier, get_request_id, hash_token


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status, duration and request ID.

    The ID comes from a well-formed X-Request-ID header or is generated, is
    stored on ``request.state`` for security events and error bodies, and is
    echoed on every response, health checks included. Client addresses are
    logged hashed, never raw.
    """

    def __init__(self, app: ASGIApp, exclude_paths: Optional[set] = None):
        super().__init__(app)
        self.exclude_paths = exclude_paths or {"/health", "/healthz", "/ready"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = get_request_id(request)
        request.state.request_id = request_id

        # Skip logging for health checks
        if request.url.path in self.exclude_paths:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response

        start_time = time.perf_counter()
        client = hash_token(get_client_identifier(request))

        logger.info(
            "Request: %s %s | client=%s | request_id=%s",
            request.method,
            request.url.path,
            client,
            request_id,
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "Request failed: %s %s | error=%s | duration=%.2fms | request_id=%s",
                request.method,
                request.url.path,
                type(exc).__name__,
                duration_ms,
                request_id,
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Response: %s %s | status=%d | duration=%.2fms | request_id=%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            request_id,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
