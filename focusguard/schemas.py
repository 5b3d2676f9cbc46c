"""
Pydantic models for request/response validation.

Request models only bound sizes and shapes; the security engine makes the
accept/reject decision and reports it through error codes.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from focusguard.core.security import (
    DEFAULT_POLICY,
    ERROR_MESSAGES,
    ErrorCode,
    FileCandidate,
    InputKind,
    TokenStrength,
    ValidationResult,
)

# Generous transport bound; the engine applies the real length limits
_MAX_BODY_FIELD_LENGTH = DEFAULT_POLICY.max_url_length * 4


# -----------------------------------------------------------------------------
# Base Models
# -----------------------------------------------------------------------------

class BaseSchema(BaseModel):
    """Base schema with common configuration."""
    model_config = ConfigDict(
        str_min_length=0,
        extra="forbid",
    )


class ErrorDetail(BaseSchema):
    """A single validation error."""
    code: ErrorCode
    message: str

    @classmethod
    def from_code(cls, code: ErrorCode) -> "ErrorDetail":
        return cls(code=code, message=ERROR_MESSAGES[code])


class ValidationResponse(BaseSchema):
    """Generic validation outcome."""
    accepted: bool
    sanitized: str = ""
    errors: List[ErrorDetail] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidationResponse":
        return cls(
            accepted=result.accepted,
            sanitized=result.sanitized_value,
            errors=[ErrorDetail.from_code(code) for code in result.errors],
        )


# -----------------------------------------------------------------------------
# Submissions
# -----------------------------------------------------------------------------

class SubmissionRequest(BaseSchema):
    """Video link submitted by a client."""
    url: str = Field(..., max_length=_MAX_BODY_FIELD_LENGTH, description="Video URL")


class SubmissionResponse(ValidationResponse):
    """Submission outcome with the resolved video reference."""
    reference: Optional[str] = Field(default=None, description="11 character video ID")
    embed_url: Optional[str] = Field(default=None, description="Safety-constrained embed URL")


# -----------------------------------------------------------------------------
# Uploads & Text
# -----------------------------------------------------------------------------

class UploadMetadataRequest(BaseSchema):
    """Declared upload metadata. All fields absent means no file was provided."""
    name: Optional[str] = Field(default=None, max_length=1024)
    size: Optional[int] = Field(default=None, description="Declared size in bytes")
    mime_type: Optional[str] = Field(default=None, max_length=255)

    def to_candidate(self) -> Optional[FileCandidate]:
        if self.name is None and self.size is None and self.mime_type is None:
            return None
        return FileCandidate(
            declared_size=self.size if self.size is not None else 0,
            declared_mime_type=self.mime_type or "",
            name=self.name or "",
        )


class TextValidationRequest(BaseSchema):
    """Free-form input to validate and sanitize."""
    value: str = Field(..., max_length=_MAX_BODY_FIELD_LENGTH)
    kind: InputKind = Field(default=InputKind.TEXT, description="Input class: url, text, filename")


# -----------------------------------------------------------------------------
# Tokens & Embeds
# -----------------------------------------------------------------------------

class TokenResponse(BaseSchema):
    token: str
    strength: TokenStrength


class EmbedResponse(BaseSchema):
    reference: str
    embed_url: str


# -----------------------------------------------------------------------------
# Health
# -----------------------------------------------------------------------------

class HealthResponse(BaseSchema):
    """Health check response."""
    status: str
    version: str
    timestamp: datetime
