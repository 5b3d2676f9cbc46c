"""
Security Utilities

Request ID tracking, client identification, hashing, masking, and security
event logging.
"""

import hashlib
import re
import secrets
from typing import Any, Dict, Optional

from starlette.requests import HTTPConnection

from focusguard.config import logger
from focusguard.core.security.constants import REQUEST_ID_HEADER


def generate_request_id() -> str:
    """Generate a unique request ID."""
    return secrets.token_hex(16)


def get_request_id(request: HTTPConnection) -> str:
    """Get or generate request ID from request."""
    request_id = request.headers.get(REQUEST_ID_HEADER)
    if request_id and len(request_id) <= 64 and re.match(r"^[a-zA-Z0-9_-]+$", request_id):
        return request_id
    return generate_request_id()


def get_client_identifier(request: HTTPConnection) -> str:
    """Rate limit identifier for a request: the client IP."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take first IP in chain (client IP)
        client_ip = forwarded.split(",")[0].strip()
    else:
        client_ip = request.client.host if request.client else "unknown"
    return f"ip:{client_ip or 'unknown'}"


def hash_token(token: str) -> str:
    """
    Create a secure hash of a token for logging.

    Never log raw tokens or identifiers - use this for audit trails.
    """
    return hashlib.sha256(token.encode()).hexdigest()[:16]


def mask_sensitive_data(
    data: Dict[str, Any],
    sensitive_keys: frozenset = frozenset({"token", "password", "secret", "key", "authorization"})
) -> Dict[str, Any]:
    """
    Mask sensitive data in dictionaries for safe logging.
    """
    masked = {}
    for key, value in data.items():
        key_lower = key.lower()
        if any(s in key_lower for s in sensitive_keys):
            masked[key] = "[REDACTED]"
        elif isinstance(value, dict):
            masked[key] = mask_sensitive_data(value, sensitive_keys)
        else:
            masked[key] = value
    return masked


def log_security_event(
    event_type: str,
    identifier: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    level: str = "warning",
    request_id: Optional[str] = None,
) -> None:
    """
    Log a security-relevant event with structured data.

    The caller identifier is hashed; ``request_id`` ties the event to the
    request log lines.
    """
    log_data: Dict[str, Any] = {
        "security_event": event_type,
        "caller": hash_token(identifier) if identifier else None,
    }
    if request_id:
        log_data["request_id"] = request_id

    if details:
        log_data["details"] = mask_sensitive_data(details)

    log_func = getattr(logger, level, logger.warning)
    log_func("Security event: %s | %s", event_type, log_data)
