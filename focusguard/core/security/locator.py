"""
Resource location.

Extracts the canonical 11 character video reference from a submitted link
and checks the link's origin against the domain allow-list.
"""

import re
from typing import Any, List, Optional
from urllib.parse import SplitResult, urlsplit

from focusguard.core.security.constants import REFERENCE_LENGTH, REFERENCE_PATTERN
from focusguard.core.security.models import ErrorCode
from focusguard.core.security.policy import DEFAULT_POLICY, SecurityPolicy

# Priority order: the first valid capture wins.
REFERENCE_PATTERNS = (
    # watch-query, short-link and embed-path forms
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\n?#]+)"),
    re.compile(r"youtube\.com/v/([^&\n?#]+)"),
    # v= as a later query parameter
    re.compile(r"youtube\.com/watch\?.*&v=([^&\n?#]+)"),
)

_REFERENCE_RE = re.compile(REFERENCE_PATTERN)
# Plain DNS labels only; IDNA hosts arrive in xn-- form
_HOSTNAME_RE = re.compile(r"[a-z0-9.-]+")
_SUSPICIOUS_MARKERS = ("<script", "javascript:", "data:")


def is_valid_reference(value: Any) -> bool:
    return isinstance(value, str) and _REFERENCE_RE.fullmatch(value) is not None


def _parse(url: str) -> Optional[SplitResult]:
    try:
        return urlsplit(url)
    except ValueError:
        # e.g. unbalanced IPv6 brackets
        return None


class ResourceLocator:
    """Reference extraction and origin checks for submitted video links."""

    def __init__(self, policy: SecurityPolicy = DEFAULT_POLICY):
        self._policy = policy

    def extract_reference(self, url: Any) -> Optional[str]:
        """
        Extract the video reference from ``url``.

        Returns None unless a pattern captures exactly 11 characters from
        ``[a-zA-Z0-9_-]``. Longer or malformed captures are never truncated.
        """
        if not url or not isinstance(url, str):
            return None

        lowered = url.lower()
        if any(marker in lowered for marker in _SUSPICIOUS_MARKERS):
            return None

        for pattern in REFERENCE_PATTERNS:
            match = pattern.search(url)
            if not match:
                continue
            candidate = match.group(1)
            if len(candidate) == REFERENCE_LENGTH and is_valid_reference(candidate):
                return candidate

        return None

    def is_blocked_protocol(self, url: str) -> bool:
        lowered = url.strip().lower()
        return any(lowered.startswith(protocol) for protocol in self._policy.blocked_protocols)

    def is_allowed_host(self, hostname: Optional[str]) -> bool:
        if not hostname:
            return False
        hostname = hostname.lower()
        if self._policy.strict_domain_match:
            return any(
                hostname == domain or hostname.endswith("." + domain)
                for domain in self._policy.allowed_domains
            )
        return any(domain in hostname for domain in self._policy.allowed_domains)

    def check_protocol(self, url: str) -> List[ErrorCode]:
        """Length and scheme checks on the raw link."""
        errors: List[ErrorCode] = []
        if len(url) > self._policy.max_url_length:
            errors.append(ErrorCode.URL_TOO_LONG)

        if self.is_blocked_protocol(url):
            errors.append(ErrorCode.INVALID_PROTOCOL)
        else:
            parts = _parse(url)
            scheme = parts.scheme.lower() if parts else ""
            if scheme not in self._policy.allowed_schemes:
                errors.append(ErrorCode.INVALID_PROTOCOL)
        return errors

    def check_origin(self, url: str) -> List[ErrorCode]:
        """Parse and domain allow-list checks."""
        parts = _parse(url)
        if parts is None or not parts.hostname:
            return [ErrorCode.INVALID_URL]
        # Browsers treat a backslash as a path separator; userinfo hides the real host
        if "\\" in parts.netloc or "@" in parts.netloc:
            return [ErrorCode.INVALID_URL]
        if not _HOSTNAME_RE.fullmatch(parts.hostname):
            return [ErrorCode.INVALID_URL]
        if not self.is_allowed_host(parts.hostname):
            return [ErrorCode.DOMAIN_NOT_ALLOWED]
        return []

    def check_url(self, url: Any) -> List[ErrorCode]:
        """Every failing URL check, in order."""
        if not url or not isinstance(url, str):
            return [ErrorCode.MISSING_INPUT]
        return self.check_protocol(url) + self.check_origin(url)

    def is_allowed_url(self, url: Any) -> bool:
        """
        True if ``url`` is short enough, uses a permitted scheme and its
        parsed hostname is on the allow-list.
        """
        return not self.check_url(url)
