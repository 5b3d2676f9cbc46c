"""
Tests for upload metadata validation.
"""

import pytest

from focusguard.core.security import ErrorCode, FileCandidate, validate_file

MB = 1024 * 1024
VIDEO_TYPES = {"video/mp4", "video/webm"}


def candidate(size=5 * MB, mime="video/mp4", name="clip.mp4"):
    return FileCandidate(declared_size=size, declared_mime_type=mime, name=name)


class TestValidateFile:

    def test_accepts_valid_upload(self):
        result = validate_file(candidate(), VIDEO_TYPES, 100 * MB)
        assert result.accepted is True
        assert result.is_valid is True
        assert result.errors == []
        assert result.sanitized_value == "clip.mp4"

    def test_missing_file_reported_alone(self):
        result = validate_file(None, VIDEO_TYPES, 100 * MB)
        assert result.accepted is False
        assert result.errors == [ErrorCode.MISSING_FILE]

    def test_oversized_file(self):
        result = validate_file(candidate(size=101 * MB), VIDEO_TYPES, 100 * MB)
        assert result.errors == [ErrorCode.INVALID_FILE_SIZE]

    def test_size_at_limit_is_allowed(self):
        assert validate_file(candidate(size=100 * MB), VIDEO_TYPES, 100 * MB).accepted

    def test_negative_size_is_invalid(self):
        result = validate_file(candidate(size=-1), VIDEO_TYPES, 100 * MB)
        assert ErrorCode.INVALID_FILE_SIZE in result.errors

    def test_disallowed_type(self):
        result = validate_file(candidate(mime="application/x-msdownload"), VIDEO_TYPES, 100 * MB)
        assert result.errors == [ErrorCode.INVALID_FILE_TYPE]

    def test_type_match_is_case_insensitive(self):
        assert validate_file(candidate(mime="Video/MP4"), VIDEO_TYPES, 100 * MB).accepted

    def test_empty_allow_list_accepts_any_type(self):
        assert validate_file(candidate(mime="application/zip"), set(), 100 * MB).accepted

    @pytest.mark.parametrize("name", ["../clip.mp4", "dir/clip.mp4", "dir\\clip.mp4", "clip..mp4"])
    def test_traversal_names(self, name):
        result = validate_file(candidate(name=name), VIDEO_TYPES, 100 * MB)
        assert result.errors == [ErrorCode.INVALID_FILE_NAME]

    def test_all_violations_reported(self):
        bad = candidate(size=200 * MB, mime="text/html", name="../../evil.html")
        result = validate_file(bad, VIDEO_TYPES, 100 * MB, allowed_extensions=(".mp4",))
        assert result.errors == [
            ErrorCode.INVALID_FILE_SIZE,
            ErrorCode.INVALID_FILE_TYPE,
            ErrorCode.INVALID_FILE_NAME,
            ErrorCode.INVALID_FILE_EXTENSION,
        ]
        assert result.sanitized_value == "evil.html"

    def test_extension_allow_list(self):
        ok = validate_file(candidate(name="CLIP.MOV"), set(), 100 * MB, allowed_extensions=(".mov",))
        bad = validate_file(candidate(name="clip.exe"), set(), 100 * MB, allowed_extensions=(".mov",))
        assert ok.accepted is True
        assert bad.errors == [ErrorCode.INVALID_FILE_EXTENSION]
