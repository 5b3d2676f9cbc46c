"""
Tests for input sanitization and dangerous content detection.

Run with: pytest tests/test_sanitization.py -v
"""

import pytest

from focusguard.core.security import InputKind, contains_dangerous_content, sanitize_input


class TestUrlSanitization:

    def test_strips_dangerous_protocols(self):
        assert sanitize_input("javascript:alert(1)", InputKind.URL) == "alert(1)"
        assert sanitize_input("DATA:text/html,hi", InputKind.URL) == "text/html,hi"
        assert sanitize_input("VbScript:msgbox", InputKind.URL) == "msgbox"

    def test_strips_script_blocks(self):
        value = "https://youtu.be/x<script type='a'>alert(1)</script>end"
        assert sanitize_input(value, InputKind.URL) == "https://youtu.be/xend"

    def test_script_removal_is_non_greedy(self):
        value = "a<script>1</script>b<script>2</script>c"
        assert sanitize_input(value, InputKind.URL) == "abc"

    def test_strips_event_handlers(self):
        assert sanitize_input('x" onerror=alert(1)', InputKind.URL) == 'x" alert(1)'

    def test_trims_whitespace(self):
        assert sanitize_input("  https://youtu.be/dQw4w9WgXcQ \n", InputKind.URL) == "https://youtu.be/dQw4w9WgXcQ"

    def test_plain_url_unchanged(self):
        url = "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42"
        assert sanitize_input(url, InputKind.URL) == url


class TestFilenameSanitization:

    def test_strips_traversal(self):
        assert sanitize_input("../../etc/passwd", InputKind.FILENAME) == "etcpasswd"

    def test_strips_reserved_characters(self):
        assert sanitize_input('my<clip>:"|?*.mp4', InputKind.FILENAME) == "myclip.mp4"

    def test_strips_backslashes(self):
        assert sanitize_input("C:\\videos\\clip.mp4", InputKind.FILENAME) == "Cvideosclip.mp4"

    def test_nested_dots_are_removed(self):
        # Dots are removed in pairs; an odd one survives
        assert sanitize_input("a.....b", InputKind.FILENAME) == "a.b"


class TestTextSanitization:

    def test_strips_tags(self):
        assert sanitize_input("<b>bold</b> text", InputKind.TEXT) == "bold text"

    def test_strips_javascript_and_handlers(self):
        assert sanitize_input("click javascript:go() onclick=x", InputKind.TEXT) == "click go() x"

    def test_text_is_the_default_kind(self):
        assert sanitize_input("<i>hi</i>") == "hi"

    def test_unknown_kind_falls_back_to_text(self):
        assert sanitize_input("<i>hi</i>", "markdown") == "hi"


class TestSanitizeEdgeCases:

    @pytest.mark.parametrize("value", [None, "", 42, b"bytes", ["list"]])
    def test_non_string_or_empty_yields_empty(self, value):
        assert sanitize_input(value, InputKind.URL) == ""

    def test_never_raises_on_odd_input(self):
        value = "<" * 500 + "script" + ">" * 500
        assert sanitize_input(value, InputKind.TEXT) == ">" * 499

    def test_spliced_matches_are_removed(self):
        assert sanitize_input("javajavascript:script:alert(1)", InputKind.URL) == "alert(1)"
        assert sanitize_input("oonclick=nclick=x", InputKind.TEXT) == "x"

    @pytest.mark.parametrize("kind", list(InputKind))
    @pytest.mark.parametrize(
        "value",
        [
            "  javascript:alert(1)  ",
            "javajavascript:script:x",
            "<scr<script>x</script>ipt>alert(1)</script>",
            " a javascript:",
            "onclick=onload= x",
            "../..//\\..",
            "<<b>>text<</b>>",
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        ],
    )
    def test_idempotent(self, value, kind):
        once = sanitize_input(value, kind)
        assert sanitize_input(once, kind) == once


class TestDangerDetection:

    @pytest.mark.parametrize(
        "value",
        [
            "<script>alert(1)</script>",
            "<SCRIPT src='x.js'>",
            "javascript:alert(1)",
            "JavaScript:void(0)",
            "data:text/html;base64,AAAA",
            "vbscript:msgbox",
            '<img src=x onerror="alert(1)">',
            "<iframe src='https://evil.example'></iframe>",
            "<IFRAME>",
            "<object data='x'>",
            "<embed type='application/x-shockwave-flash' src='x'>",
        ],
    )
    def test_flags_dangerous_constructs(self, value):
        assert contains_dangerous_content(value) is True

    @pytest.mark.parametrize(
        "value",
        [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ",
            "just some text",
            "",
            None,
            123,
        ],
    )
    def test_accepts_benign_input(self, value):
        assert contains_dangerous_content(value) is False

    @pytest.mark.parametrize("key", ["controls=0", "session_token=abc"])
    def test_event_handler_rule_matches_on_query_keys(self, key):
        url = f"https://www.youtube.com/watch?v=dQw4w9WgXcQ&{key}"
        assert contains_dangerous_content(url) is True
        assert "=" not in sanitize_input(url, InputKind.URL).split("&", 1)[1]

    def test_does_not_mutate_input(self):
        value = "<script>x</script>"
        contains_dangerous_content(value)
        assert value == "<script>x</script>"
