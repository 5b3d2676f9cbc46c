"""
Security exceptions.

Validation failures are returned as error codes; these are raised only for
contract violations by the calling code.
"""

from focusguard.core.security.models import ErrorCode


class SecurityError(Exception):
    """Base exception for all security engine errors."""
    pass


class InvalidReferenceError(SecurityError, ValueError):
    """Raised when an embed URL is requested for a malformed reference."""

    code = ErrorCode.INVALID_REFERENCE

    def __init__(self, message: str = "Invalid video reference"):
        self.message = message
        super().__init__(message)


class PolicyError(SecurityError):
    """Raised when a security policy is inconsistent."""
    pass
