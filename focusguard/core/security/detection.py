"""
Dangerous content detection.

Read-only classifier; callers decide whether to reject outright or to
sanitize. The checks are a best-effort denylist. The event-handler pattern
also matches harmless query keys with "on" anywhere before the `=`, such
as `&controls=0` or `&session_token=`, so a normal link carrying them is
flagged.
"""

import re
from typing import Any

_DANGEROUS_PATTERNS = (
    re.compile(r"<script\b[^>]*>", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"data:", re.IGNORECASE),
    re.compile(r"vbscript:", re.IGNORECASE),
    re.compile(r"on\w+\s*=", re.IGNORECASE),
    re.compile(r"<iframe\b[^>]*>", re.IGNORECASE),
    re.compile(r"<object\b[^>]*>", re.IGNORECASE),
    re.compile(r"<embed\b[^>]*>", re.IGNORECASE),
)


def contains_dangerous_content(value: Any) -> bool:
    """Return True if ``value`` contains script, protocol or embedding constructs."""
    if not value or not isinstance(value, str):
        return False
    return any(pattern.search(value) for pattern in _DANGEROUS_PATTERNS)
