"""
Validation Facade

Single entry point combining rate limiting, danger detection, sanitization,
origin checks and reference extraction.
"""

from typing import Any, Optional, Union

from focusguard.core.security.detection import contains_dangerous_content
from focusguard.core.security.embed import EmbedUrlBuilder
from focusguard.core.security.files import has_traversal_markers, validate_file
from focusguard.core.security.locator import ResourceLocator
from focusguard.core.security.models import (
    ErrorCode,
    FileCandidate,
    GeneratedToken,
    InputKind,
    RateLimitDecision,
    SubmissionResult,
    ValidationResult,
)
from focusguard.core.security.policy import DEFAULT_POLICY, SecurityPolicy, load_security_policy
from focusguard.core.security.rate_limiting import RateLimiter
from focusguard.core.security.sanitization import sanitize_input
from focusguard.core.security.tokens import TokenGenerator
from focusguard.core.security.utils import log_security_event


class ValidationFacade:
    """
    Answers: is this caller allowed to submit, is the submission safe, and
    which resource does it point to?

    All collaborators are injectable; defaults are built from the policy.
    """

    def __init__(
        self,
        policy: SecurityPolicy = DEFAULT_POLICY,
        rate_limiter: Optional[RateLimiter] = None,
        locator: Optional[ResourceLocator] = None,
        embed_builder: Optional[EmbedUrlBuilder] = None,
        token_generator: Optional[TokenGenerator] = None,
    ):
        self.policy = policy
        self.rate_limiter = rate_limiter or RateLimiter(
            limit=policy.rate_limit, window=policy.rate_window
        )
        self.locator = locator or ResourceLocator(policy)
        self.embed_builder = embed_builder or EmbedUrlBuilder(
            embed_base_url=policy.embed_base_url, app_origin=policy.app_origin
        )
        self.token_generator = token_generator or TokenGenerator()

    def check_rate_limit(
        self,
        identifier: str,
        now: Optional[float] = None,
        request_id: Optional[str] = None,
    ) -> RateLimitDecision:
        decision = self.rate_limiter.check(identifier, now)
        if not decision.allowed:
            log_security_event(
                "rate_limit_exceeded",
                identifier=identifier,
                details={"reset_seconds": round(decision.reset_after, 3)},
                request_id=request_id,
            )
        return decision

    def validate_submission(
        self,
        raw_input: Any,
        identifier: str,
        now: Optional[float] = None,
        request_id: Optional[str] = None,
    ) -> SubmissionResult:
        """
        Validate a submitted video link for ``identifier``.

        A rate-limited caller gets only RATE_LIMITED. Otherwise every check
        runs and all failures are reported. The reference is returned only
        for accepted submissions. ``request_id`` is attached to the security
        events this call logs.
        """
        result = SubmissionResult()

        decision = self.check_rate_limit(identifier, now, request_id)
        result.rate_limit = decision
        if not decision.allowed:
            result.add_error(ErrorCode.RATE_LIMITED)
            return result.finalize()

        if not raw_input or not isinstance(raw_input, str) or not raw_input.strip():
            result.add_error(ErrorCode.MISSING_INPUT)
            return result.finalize()

        if contains_dangerous_content(raw_input):
            result.add_error(ErrorCode.DANGEROUS_CONTENT)

        sanitized = sanitize_input(raw_input, InputKind.URL)
        result.sanitized_value = sanitized

        for code in self.locator.check_protocol(raw_input.strip()):
            result.add_error(code)
        for code in self.locator.check_origin(sanitized):
            result.add_error(code)

        reference = self.locator.extract_reference(sanitized)
        if reference is None:
            result.add_error(ErrorCode.NO_REFERENCE_FOUND)

        result.finalize()
        if result.accepted:
            result.reference = reference
        else:
            log_security_event(
                "submission_rejected",
                identifier=identifier,
                details={"errors": [code.value for code in result.errors]},
                level="info",
                request_id=request_id,
            )
        return result

    def validate_text(self, value: Any, kind: Union[InputKind, str] = InputKind.TEXT) -> ValidationResult:
        """Generic input validation for free text, links and filenames."""
        result = ValidationResult()

        if not value or not isinstance(value, str):
            result.add_error(ErrorCode.MISSING_INPUT)
            return result.finalize()

        if len(value) > self.policy.max_input_length:
            result.add_error(ErrorCode.INPUT_TOO_LONG)

        if contains_dangerous_content(value):
            result.add_error(ErrorCode.DANGEROUS_CONTENT)

        result.sanitized_value = sanitize_input(value, kind)

        if kind == InputKind.URL:
            if not result.sanitized_value.startswith(("http://", "https://")):
                result.add_error(ErrorCode.INVALID_PROTOCOL)
        elif kind == InputKind.FILENAME:
            if has_traversal_markers(result.sanitized_value):
                result.add_error(ErrorCode.INVALID_FILE_NAME)

        return result.finalize()

    def validate_file_upload(
        self,
        file: Optional[FileCandidate],
        request_id: Optional[str] = None,
    ) -> ValidationResult:
        result = validate_file(
            file,
            allowed_types=self.policy.allowed_upload_types,
            max_size_bytes=self.policy.max_upload_size,
            allowed_extensions=self.policy.allowed_upload_extensions,
        )
        if not result.accepted and ErrorCode.MISSING_FILE not in result.errors:
            log_security_event(
                "upload_rejected",
                details={"errors": [code.value for code in result.errors]},
                level="info",
                request_id=request_id,
            )
        return result

    def generate_token(self, length: int = 32) -> GeneratedToken:
        return self.token_generator.generate(length)

    def build_embed_url(self, reference: Any) -> str:
        return self.embed_builder.build_embed_url(reference)


# Process-wide facade, built on first use from the environment policy
_facade: Optional[ValidationFacade] = None


def get_validation_facade() -> ValidationFacade:
    """Get the global validation facade."""
    global _facade
    if _facade is None:
        _facade = ValidationFacade(policy=load_security_policy())
    return _facade
