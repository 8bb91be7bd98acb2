"""Tests for the text coercions shared by every converter."""

from decimal import Decimal

from archive_convert.domain.text import (
    UNSPECIFIED,
    UNSPECIFIED_URL,
    fix_empty_string,
    fix_url,
    is_blank,
    non_blank,
    number_text,
    put,
)


class TestFixEmptyString:
    """Blank-to-placeholder rule for required target strings."""

    def test_blank_without_fallback_is_unspecified(self):
        assert fix_empty_string(" ", None) == "unspecified"

    def test_blank_with_fallback_uses_fallback(self):
        assert fix_empty_string(" ", "fallback") == "fallback"

    def test_non_blank_is_unchanged(self):
        assert fix_empty_string("Title", "fallback") == "Title"

    def test_none_is_blank(self):
        assert fix_empty_string(None) == UNSPECIFIED

    def test_surrounding_whitespace_is_kept(self):
        assert fix_empty_string("  Title ") == "  Title "

    def test_empty_fallback_is_honoured(self):
        assert fix_empty_string("", "") == ""


class TestFixUrl:

    def test_blank_url_becomes_placeholder(self):
        assert fix_url("") == UNSPECIFIED_URL
        assert fix_url(None) == UNSPECIFIED_URL

    def test_full_url_is_unchanged(self):
        assert fix_url("https://archives.example.edu/") == "https://archives.example.edu/"

    def test_bare_host_gets_http(self):
        assert fix_url("archives.example.edu") == "http://archives.example.edu"

    def test_absolute_path_gets_file_scheme(self):
        assert fix_url("/mnt/finding_aids/ms1.xml") == "file:///mnt/finding_aids/ms1.xml"

    def test_windows_path_gets_file_scheme(self):
        assert fix_url("C:\\aids\\ms1.xml") == "file://C:\\aids\\ms1.xml"


class TestSmallHelpers:

    def test_is_blank(self):
        assert is_blank(None)
        assert is_blank("  \t")
        assert not is_blank("x")

    def test_non_blank(self):
        assert non_blank("   ") is None
        assert non_blank("A") == "A"

    def test_put_skips_none(self):
        doc = {}
        put(doc, "a", None)
        put(doc, "b", False)
        put(doc, "c", "")
        assert doc == {"b": False, "c": ""}

    def test_number_text(self):
        assert number_text(None, "0") == "0"
        assert number_text(Decimal("2.5"), "0") == "2.5"
