"""
Security Models

Result and candidate types shared by the validators.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ErrorCode(str, Enum):
    """Machine-readable validation error codes."""
    RATE_LIMITED = "RateLimited"
    DANGEROUS_CONTENT = "DangerousContent"
    INVALID_PROTOCOL = "InvalidProtocol"
    URL_TOO_LONG = "UrlTooLong"
    INVALID_URL = "InvalidUrl"
    DOMAIN_NOT_ALLOWED = "DomainNotAllowed"
    NO_REFERENCE_FOUND = "NoReferenceFound"
    MISSING_INPUT = "MissingInput"
    INPUT_TOO_LONG = "InputTooLong"
    INVALID_FILE_SIZE = "InvalidFileSize"
    INVALID_FILE_TYPE = "InvalidFileType"
    INVALID_FILE_NAME = "InvalidFileName"
    INVALID_FILE_EXTENSION = "InvalidFileExtension"
    MISSING_FILE = "MissingFile"
    INVALID_REFERENCE = "InvalidReference"


# Plain-text defaults for UI layers. Never markup.
ERROR_MESSAGES = {
    ErrorCode.RATE_LIMITED: "Too many requests. Please wait a moment and try again.",
    ErrorCode.DANGEROUS_CONTENT: "Input contains potentially dangerous content.",
    ErrorCode.INVALID_PROTOCOL: "URL must start with http:// or https://.",
    ErrorCode.URL_TOO_LONG: "URL is too long.",
    ErrorCode.INVALID_URL: "Invalid URL format.",
    ErrorCode.DOMAIN_NOT_ALLOWED: "Only YouTube links are supported.",
    ErrorCode.NO_REFERENCE_FOUND: "Could not find a video ID in the URL.",
    ErrorCode.MISSING_INPUT: "Input is required.",
    ErrorCode.INPUT_TOO_LONG: "Input is too long.",
    ErrorCode.INVALID_FILE_SIZE: "File size exceeds the maximum allowed size.",
    ErrorCode.INVALID_FILE_TYPE: "File type is not allowed.",
    ErrorCode.INVALID_FILE_NAME: "Invalid filename detected.",
    ErrorCode.INVALID_FILE_EXTENSION: "File extension is not allowed.",
    ErrorCode.MISSING_FILE: "No file provided.",
    ErrorCode.INVALID_REFERENCE: "Invalid video ID.",
}


class InputKind(str, Enum):
    """Input classes understood by the sanitizer."""
    URL = "url"
    TEXT = "text"
    FILENAME = "filename"


class TokenStrength(str, Enum):
    """Randomness source used for a generated token."""
    CRYPTOGRAPHIC = "cryptographic"
    PSEUDO_RANDOM = "pseudo_random"  # not suitable for CSRF tokens


@dataclass
class ValidationResult:
    """Outcome of a validation call. Errors accumulate in check order."""
    accepted: bool = False
    sanitized_value: str = ""
    errors: List[ErrorCode] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.accepted

    def add_error(self, code: ErrorCode) -> None:
        self.errors.append(code)

    def finalize(self) -> "ValidationResult":
        self.accepted = not self.errors
        return self


@dataclass
class SubmissionResult(ValidationResult):
    """Validation result for a video link submission."""
    reference: Optional[str] = None
    rate_limit: Optional["RateLimitDecision"] = None


@dataclass(frozen=True)
class FileCandidate:
    """Caller-declared upload metadata. Content is never inspected."""
    declared_size: int
    declared_mime_type: str
    name: str


@dataclass(frozen=True)
class RateLimitDecision:
    """Result of an atomic rate-limit check."""
    allowed: bool
    remaining: int
    reset_after: float  # seconds until the oldest live request leaves the window


@dataclass(frozen=True)
class GeneratedToken:
    value: str
    strength: TokenStrength
