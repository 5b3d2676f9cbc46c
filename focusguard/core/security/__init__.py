"""
Security module for focusguard.

Provides:
- Sliding window rate limiting
- Input sanitization and dangerous content detection
- Upload metadata validation
- Video reference extraction and embed URL construction
- Random tokens, request IDs and security event logging
"""

from focusguard.core.security.constants import (
    ALLOWED_UPLOAD_EXTENSIONS,
    ALLOWED_UPLOAD_TYPES,
    ALLOWED_VIDEO_DOMAINS,
    BLOCKED_PROTOCOLS,
    DEFAULT_RATE_LIMIT,
    DEFAULT_RATE_WINDOW,
    MAX_INPUT_LENGTH,
    MAX_TOKEN_LENGTH,
    MAX_UPLOAD_SIZE,
    MAX_URL_LENGTH,
    REQUEST_ID_HEADER,
)
from focusguard.core.security.exceptions import (
    InvalidReferenceError,
    PolicyError,
    SecurityError,
)
from focusguard.core.security.models import (
    ERROR_MESSAGES,
    ErrorCode,
    FileCandidate,
    GeneratedToken,
    InputKind,
    RateLimitDecision,
    SubmissionResult,
    TokenStrength,
    ValidationResult,
)
from focusguard.core.security.policy import (
    DEFAULT_POLICY,
    SecurityPolicy,
    load_security_policy,
)
from focusguard.core.security.rate_limiting import RateLimiter
from focusguard.core.security.sanitization import sanitize_input
from focusguard.core.security.detection import contains_dangerous_content
from focusguard.core.security.tokens import TokenGenerator, generate_token
from focusguard.core.security.files import validate_file
from focusguard.core.security.locator import ResourceLocator, is_valid_reference
from focusguard.core.security.embed import EmbedUrlBuilder
from focusguard.core.security.facade import ValidationFacade, get_validation_facade
from focusguard.core.security.utils import (
    generate_request_id,
    get_client_identifier,
    get_request_id,
    hash_token,
    log_security_event,
    mask_sensitive_data,
)

__all__ = [
    # Constants
    "ALLOWED_UPLOAD_EXTENSIONS",
    "ALLOWED_UPLOAD_TYPES",
    "ALLOWED_VIDEO_DOMAINS",
    "BLOCKED_PROTOCOLS",
    "DEFAULT_RATE_LIMIT",
    "DEFAULT_RATE_WINDOW",
    "MAX_INPUT_LENGTH",
    "MAX_TOKEN_LENGTH",
    "MAX_UPLOAD_SIZE",
    "MAX_URL_LENGTH",
    "REQUEST_ID_HEADER",
    # Errors
    "InvalidReferenceError",
    "PolicyError",
    "SecurityError",
    # Models
    "ERROR_MESSAGES",
    "ErrorCode",
    "FileCandidate",
    "GeneratedToken",
    "InputKind",
    "RateLimitDecision",
    "SubmissionResult",
    "TokenStrength",
    "ValidationResult",
    # Policy
    "DEFAULT_POLICY",
    "SecurityPolicy",
    "load_security_policy",
    # Engine
    "RateLimiter",
    "sanitize_input",
    "contains_dangerous_content",
    "TokenGenerator",
    "generate_token",
    "validate_file",
    "ResourceLocator",
    "is_valid_reference",
    "EmbedUrlBuilder",
    "ValidationFacade",
    "get_validation_facade",
    # Utils
    "generate_request_id",
    "get_client_identifier",
    "get_request_id",
    "hash_token",
    "log_security_event",
    "mask_sensitive_data",
]
