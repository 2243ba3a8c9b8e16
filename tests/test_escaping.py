"""Tests for escaping and unescaping of keys and values."""

import logging

import pytest

from propfile.escaping import (
    comment_out,
    escape_key,
    escape_unicode,
    escape_unicode_char,
    escape_value,
    unescape,
    unescape_unicode_only,
)


class TestUnescape:
    """Tests for unescape."""

    def test_plain_text(self):
        """Test text without escapes."""
        assert unescape("plain value") == "plain value"

    def test_trailing_backslash_is_dropped(self):
        """Test a lone backslash at the end."""
        assert unescape("escaped newline \\") == "escaped newline "

    def test_unknown_escapes_drop_backslash(self):
        """Test that unknown escapes lose their backslash."""
        assert unescape("\\a\\b\\c\\d\\e") == "abcde"

    def test_escaped_backslash(self):
        """Test an escaped backslash."""
        assert unescape("C:\\\\temp") == "C:\\temp"

    def test_escaped_line_breaks(self):
        """Test escaped line break characters."""
        assert unescape("line1\\nline2") == "line1\nline2"
        assert unescape("a\\r\\nb") == "a\r\nb"

    def test_real_line_break_removes_following_whitespace(self):
        """Test joining of continued lines."""
        assert unescape("first line \n\tsecond line") == "first line second line"

    def test_continuation(self):
        """Test an escaped line break with indentation."""
        assert unescape("va\\\n  lueA") == "valueA"
        assert unescape("One\\\r\n   Two") == "OneTwo"

    def test_escaped_whitespace_after_continuation_is_kept(self):
        """Test escaped whitespace after a continuation."""
        assert unescape("a\\\n  \\ b") == "a b"

    def test_leading_whitespace_at_start_is_kept(self):
        """Test that leading whitespace is kept."""
        assert unescape("  x") == "  x"

    def test_unicode_escape(self):
        """Test unicode escapes."""
        assert unescape("Gr\\u00fc\\u00DFe") == "Grüße"

    def test_unicode_escape_uses_exactly_four_digits(self):
        """Test that a unicode escape reads four hex digits."""
        assert unescape("Nudel\\u123456") == "Nudel" + chr(0x1234) + "56"

    def test_surrogate_pair(self):
        """Test that surrogate pairs are combined."""
        assert unescape("\\ud83d\\ude00") == "\U0001F600"

    @pytest.mark.parametrize("text", [
        "Nudel\\u123",
        "hinzuf\\uTTTTgen",
        "hinzuf\\uu00fcgen",
    ])
    def test_invalid_unicode_escape_is_kept(self, text):
        """Test that invalid unicode escapes are left as they are."""
        assert unescape(text) == text

    def test_escaped_backslash_before_u(self):
        """Test that an escaped backslash does not start a unicode escape."""
        result = unescape("Soll nicht ersetzt werden: \\\\u00fc!")
        assert result == "Soll nicht ersetzt werden: \\u00fc!"

    def test_invalid_unicode_escape_is_reported(self):
        """Test diagnostics for invalid unicode escapes."""
        diagnostics = []
        unescape("bad \\uZZZZ escape", diagnostics)

        assert len(diagnostics) == 1
        assert diagnostics[0].sequence == "\\uZZZZ"
        assert diagnostics[0].position == 4
        assert "\\uZZZZ" in diagnostics[0].message

    def test_invalid_escape_position_is_in_escaped_text(self):
        """Test that the reported position counts escaped characters."""
        diagnostics = []
        unescape("ab\\\n   \\uZZZZ", diagnostics)
        assert diagnostics[0].position == 7

    def test_truncated_unicode_escape_is_reported(self):
        """Test a unicode escape cut short."""
        diagnostics = []
        unescape("Nudel\\u123", diagnostics)
        assert diagnostics[0].sequence == "\\u123"

    def test_invalid_unicode_escape_is_logged(self, caplog):
        """Test logging of invalid unicode escapes."""
        with caplog.at_level(logging.WARNING, logger="propfile.escaping.codec"):
            unescape("\\uXYZW")
        assert "invalid unicode escape sequence" in caplog.text

    @pytest.mark.parametrize("value", [
        "",
        "plain",
        "  leading",
        "trailing  ",
        "multi\nline\r\nvalue",
        "line\n  indented",
        "back\\slash",
        "\\u00fc literal",
        "Grüße",
        "tab\tand\fformfeed",
        "a = b: c # not a comment",
    ])
    def test_unescape_inverts_escape_value(self, value):
        """Test unescaping escaped values."""
        assert unescape(escape_value(value)) == value

    @pytest.mark.parametrize("key", [
        "simple",
        "key with spaces",
        " leading",
        "a=b:c",
        "#comment!",
        "back\\slash",
    ])
    def test_unescape_inverts_escape_key(self, key):
        """Test unescaping escaped keys."""
        assert unescape(escape_key(key)) == key


class TestUnescapeUnicodeOnly:
    """Tests for unescape_unicode_only."""

    def test_other_escapes_untouched(self):
        """Test that only unicode escapes are decoded."""
        result = unescape_unicode_only("\\u00fc und \\n und \\= bleiben")
        assert result == "ü und \\n und \\= bleiben"

    def test_escaped_backslash_before_u(self):
        """Test that an escaped backslash is kept."""
        assert unescape_unicode_only("\\\\u00fc") == "\\\\u00fc"

    def test_min_codepoint(self):
        """Test that low code points stay escaped."""
        result = unescape_unicode_only("\\u0041\\u00fc", min_codepoint=0x80)
        assert result == "\\u0041ü"

    def test_lone_surrogate_stays_escaped(self):
        """Test a surrogate without its pair."""
        assert unescape_unicode_only("\\ud83d!") == "\\ud83d!"

    def test_surrogate_pair(self):
        """Test that surrogate pairs are combined."""
        assert unescape_unicode_only("\\ud83d\\ude00") == "\U0001F600"

    def test_invalid_escape(self):
        """Test that invalid escapes are reported."""
        diagnostics = []
        assert unescape_unicode_only("\\uTTTT", diagnostics) == "\\uTTTT"
        assert len(diagnostics) == 1


class TestEscapeKey:
    """Tests for escape_key."""

    def test_whitespace_and_line_breaks(self):
        """Test escaping whitespace and line breaks in keys."""
        assert escape_key("key with \r\nnewline") == "key\\ with\\ \\\r\nnewline"

    def test_separators(self):
        """Test escaping separators in keys."""
        assert escape_key("key with :=") == "key\\ with\\ \\:\\="

    def test_backslash(self):
        """Test escaping a backslash in keys."""
        assert escape_key("my\\key") == "my\\\\key"

    def test_comment_chars(self):
        """Test escaping comment characters in keys."""
        assert escape_key("#!") == "\\#\\!"

    def test_unicode_untouched(self):
        """Test that non-ASCII keys are not escaped."""
        assert escape_key("schlüssel") == "schlüssel"


class TestEscapeValue:
    """Tests for escape_value."""

    def test_line_breaks(self):
        """Test escaping line breaks in values."""
        assert escape_value("value with \r\nnewline") == "value with \\r\\nnewline"

    def test_separators_untouched(self):
        """Test that separators in values are kept."""
        assert escape_value("a = b: c") == "a = b: c"

    def test_backslash(self):
        """Test escaping a backslash in values."""
        assert escape_value("back\\slash") == "back\\\\slash"


class TestEscapeUnicode:
    """Tests for escape_unicode and escape_unicode_char."""

    def test_ascii_untouched(self):
        """Test that ASCII text is not escaped."""
        assert escape_unicode("plain ascii ~") == "plain ascii ~"

    def test_lowercase_hex(self):
        """Test lowercase hex digits in escapes."""
        assert escape_unicode("Grüße") == "Gr\\u00fc\\u00dfe"

    def test_supplementary_character(self):
        """Test escaping characters outside the BMP."""
        assert escape_unicode("\U0001F600") == "\\ud83d\\ude00"

    def test_escape_char_is_unconditional(self):
        """Test escaping single characters."""
        assert escape_unicode_char("A") == "\\u0041"
        assert escape_unicode_char("ü") == "\\u00fc"


class TestCommentOut:
    """Tests for comment_out."""

    def test_single_line(self):
        """Test commenting out a single line."""
        assert comment_out("key = value\n") == "#key = value\n"

    def test_continued_line(self):
        """Test commenting out a continued line."""
        assert comment_out("key = va\\\n  lue\n") == "#key = va\\\n#  lue\n"

    def test_crlf(self):
        """Test commenting out CRLF lines."""
        assert comment_out("a\r\nb") == "#a\r\n#b"

    def test_empty(self):
        """Test commenting out empty text."""
        assert comment_out("") == "#"
