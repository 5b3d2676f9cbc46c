"""
Security policy.

Immutable allow-lists and limits consumed by every validator. Loaded once at
process start; tests construct their own instances.
"""

from typing import FrozenSet, Tuple
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from focusguard.core.security.constants import (
    ALLOWED_UPLOAD_EXTENSIONS,
    ALLOWED_UPLOAD_TYPES,
    ALLOWED_URL_SCHEMES,
    ALLOWED_VIDEO_DOMAINS,
    BLOCKED_PROTOCOLS,
    DEFAULT_APP_ORIGIN,
    DEFAULT_RATE_LIMIT,
    DEFAULT_RATE_WINDOW,
    EMBED_BASE_URL,
    MAX_INPUT_LENGTH,
    MAX_UPLOAD_SIZE,
    MAX_URL_LENGTH,
)
from focusguard.core.security.exceptions import PolicyError


class SecurityPolicy(BaseModel):
    """Configuration for the validation engine."""

    model_config = ConfigDict(frozen=True)

    # URL policy
    allowed_domains: FrozenSet[str] = Field(
        default=ALLOWED_VIDEO_DOMAINS,
        min_length=1,
        description="Hosts accepted for submissions (case-insensitive)",
    )
    blocked_protocols: FrozenSet[str] = Field(
        default=BLOCKED_PROTOCOLS,
        description="Schemes rejected outright, with trailing colon",
    )
    allowed_schemes: FrozenSet[str] = Field(
        default=ALLOWED_URL_SCHEMES,
        min_length=1,
        description="Schemes a submission may use",
    )
    strict_domain_match: bool = Field(
        default=False,
        description="Require exact host or dot-suffix match instead of containment",
    )
    max_url_length: int = Field(default=MAX_URL_LENGTH, ge=1)
    max_input_length: int = Field(default=MAX_INPUT_LENGTH, ge=1)

    # Rate limiting
    rate_limit: int = Field(
        default=DEFAULT_RATE_LIMIT, ge=1, description="Requests per window"
    )
    rate_window: float = Field(
        default=DEFAULT_RATE_WINDOW, gt=0, description="Window length in seconds"
    )

    # Uploads
    max_upload_size: int = Field(default=MAX_UPLOAD_SIZE, ge=0)
    allowed_upload_types: FrozenSet[str] = Field(default=ALLOWED_UPLOAD_TYPES)
    allowed_upload_extensions: Tuple[str, ...] = Field(default=ALLOWED_UPLOAD_EXTENSIONS)

    # Embedding
    embed_base_url: str = Field(default=EMBED_BASE_URL)
    app_origin: str = Field(
        default=DEFAULT_APP_ORIGIN,
        description="Origin of this application, pinned into embed URLs",
    )

    @field_validator("allowed_domains", "allowed_schemes")
    @classmethod
    def normalize_lowercase(cls, v: FrozenSet[str]) -> FrozenSet[str]:
        normalized = frozenset(item.strip().lower() for item in v if item and item.strip())
        if not normalized:
            raise ValueError("At least one non-empty entry is required")
        return normalized

    @field_validator("allowed_upload_types")
    @classmethod
    def normalize_upload_types(cls, v: FrozenSet[str]) -> FrozenSet[str]:
        # Empty means any declared type is accepted
        return frozenset(item.strip().lower() for item in v if item and item.strip())

    @field_validator("blocked_protocols")
    @classmethod
    def normalize_protocols(cls, v: FrozenSet[str]) -> FrozenSet[str]:
        normalized = set()
        for protocol in v:
            protocol = protocol.strip().lower()
            if not protocol:
                continue
            if not protocol.endswith(":"):
                protocol += ":"
            normalized.add(protocol)
        return frozenset(normalized)

    @field_validator("allowed_upload_extensions")
    @classmethod
    def normalize_extensions(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        extensions = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            if not ext.startswith("."):
                ext = "." + ext
            if ext not in extensions:
                extensions.append(ext)
        return tuple(extensions)

    @field_validator("app_origin")
    @classmethod
    def validate_origin(cls, v: str) -> str:
        parts = urlsplit(v.strip())
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError("app_origin must be an http(s) origin, e.g. 'https://example.com'")
        if parts.path not in ("", "/") or parts.query or parts.fragment:
            raise ValueError("app_origin must not contain a path, query or fragment")
        return f"{parts.scheme}://{parts.netloc.lower()}"

    @field_validator("embed_base_url")
    @classmethod
    def validate_embed_base(cls, v: str) -> str:
        parts = urlsplit(v)
        if parts.scheme != "https" or not parts.netloc:
            raise ValueError("embed_base_url must be an https URL")
        if parts.query or parts.fragment:
            raise ValueError("embed_base_url must not carry a query or fragment")
        return v if v.endswith("/") else v + "/"


DEFAULT_POLICY = SecurityPolicy()


def load_security_policy() -> SecurityPolicy:
    """
    Build the process policy from environment configuration.

    Raises:
        PolicyError: If the configured values are inconsistent.
    """
    from focusguard import config

    try:
        policy = SecurityPolicy(
            allowed_domains=config.ALLOWED_VIDEO_DOMAINS,
            blocked_protocols=config.BLOCKED_PROTOCOLS,
            strict_domain_match=config.STRICT_DOMAIN_MATCH,
            max_url_length=config.MAX_URL_LENGTH,
            max_input_length=config.MAX_INPUT_LENGTH,
            rate_limit=config.RATE_LIMIT_REQUESTS,
            rate_window=config.RATE_LIMIT_WINDOW,
            max_upload_size=config.MAX_UPLOAD_SIZE,
            allowed_upload_types=config.ALLOWED_UPLOAD_TYPES,
            allowed_upload_extensions=config.ALLOWED_UPLOAD_EXTENSIONS,
            app_origin=config.APP_ORIGIN,
        )
    except ValidationError as exc:
        config.logger.error("Invalid security configuration: %s", exc)
        raise PolicyError(f"Invalid security configuration: {exc}") from exc

    config.logger.info(
        "Loaded security policy: domains=%s rate_limit=%d/%ss",
        sorted(policy.allowed_domains),
        policy.rate_limit,
        policy.rate_window,
    )
    return policy
