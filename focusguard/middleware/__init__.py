"""
Middleware stack for focusguard.

Provides:
- Request ID assignment and request/response logging
- Error sanitization
"""

from focusguard.middleware.logging import RequestLoggingMiddleware
from focusguard.middleware.error_sanitization import ErrorSanitizationMiddleware

__all__ = [
    "RequestLoggingMiddleware",
    "ErrorSanitizationMiddleware",
]
