"""
Upload validation.

Metadata-only checks on a caller-declared upload. Size and type are trusted
as declared; file content is never read.
"""

from typing import Iterable, Optional

from focusguard.core.security.models import (
    ErrorCode,
    FileCandidate,
    InputKind,
    ValidationResult,
)
from focusguard.core.security.sanitization import sanitize_input

_TRAVERSAL_MARKERS = ("..", "/", "\\")


def has_traversal_markers(name: str) -> bool:
    return any(marker in name for marker in _TRAVERSAL_MARKERS)


def validate_file(
    file: Optional[FileCandidate],
    allowed_types: Iterable[str],
    max_size_bytes: int,
    allowed_extensions: Iterable[str] = (),
) -> ValidationResult:
    """
    Validate upload metadata.

    Every check runs and every violation is reported, except a missing
    candidate, which is reported alone.

    Args:
        file: Declared upload metadata, or None if nothing was provided
        allowed_types: Permitted MIME types; empty allows any type
        max_size_bytes: Largest permitted declared size
        allowed_extensions: Permitted filename suffixes; empty allows any

    Returns:
        ValidationResult whose sanitized_value is the filename sanitized
        as a filename.
    """
    result = ValidationResult()

    if file is None:
        result.add_error(ErrorCode.MISSING_FILE)
        return result.finalize()

    name = file.name if isinstance(file.name, str) else ""
    allowed_types = frozenset(t.lower() for t in allowed_types)
    allowed_extensions = tuple(e.lower() for e in allowed_extensions)

    if file.declared_size < 0 or file.declared_size > max_size_bytes:
        result.add_error(ErrorCode.INVALID_FILE_SIZE)

    mime_type = (file.declared_mime_type or "").strip().lower()
    if allowed_types and mime_type not in allowed_types:
        result.add_error(ErrorCode.INVALID_FILE_TYPE)

    if not name or has_traversal_markers(name):
        result.add_error(ErrorCode.INVALID_FILE_NAME)

    if allowed_extensions and not name.lower().endswith(allowed_extensions):
        result.add_error(ErrorCode.INVALID_FILE_EXTENSION)

    result.sanitized_value = sanitize_input(name, InputKind.FILENAME)
    return result.finalize()
