"""
Content Sanitization

Pattern-based neutralization of dangerous substrings, per input kind.

These are best-effort denylists for URL, plain text and filename inputs.
They are not an HTML sanitizer and must not be used to make untrusted markup
safe to render.

The event-handler rule removes any `on...=` run, including harmless query
keys such as `controls=` or `session_token=`.
"""

import re
from typing import Any, Dict, Tuple, Union

from focusguard.core.security.models import InputKind

_FLAGS = re.IGNORECASE

_SCRIPT_BLOCK = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", _FLAGS)
_EVENT_HANDLER = re.compile(r"on\w+\s*=", _FLAGS)
_JAVASCRIPT_PROTOCOL = re.compile(r"javascript:", _FLAGS)

_RULES: Dict[InputKind, Tuple[re.Pattern, ...]] = {
    InputKind.URL: (
        _JAVASCRIPT_PROTOCOL,
        re.compile(r"data:", _FLAGS),
        re.compile(r"vbscript:", _FLAGS),
        _SCRIPT_BLOCK,
        _EVENT_HANDLER,
    ),
    InputKind.FILENAME: (
        re.compile(r"\.\."),
        re.compile(r'[<>:"|?*]'),
        re.compile(r"[/\\]"),
    ),
    InputKind.TEXT: (
        re.compile(r"<[^>]*>"),
        _JAVASCRIPT_PROTOCOL,
        _EVENT_HANDLER,
    ),
}


def _coerce_kind(kind: Union[InputKind, str]) -> InputKind:
    try:
        return InputKind(kind)
    except ValueError:
        return InputKind.TEXT


def _single_pass(value: str, kind: InputKind) -> str:
    value = value.strip()
    for pattern in _RULES[kind]:
        value = pattern.sub("", value)
    return value.strip()


def sanitize_input(value: Any, kind: Union[InputKind, str] = InputKind.TEXT) -> str:
    """
    Neutralize dangerous substrings in ``value``.

    Unknown kinds fall back to ``text``. Non-string or empty input yields an
    empty string. Passes repeat until the value is stable, so removals that
    splice a new match together are removed too and the result is idempotent.
    """
    if not value or not isinstance(value, str):
        return ""

    kind = _coerce_kind(kind)
    sanitized = _single_pass(value, kind)
    while True:
        again = _single_pass(sanitized, kind)
        if again == sanitized:
            return sanitized
        sanitized = again
