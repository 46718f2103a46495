"""Tests for input sanitization utilities."""
import pytest

from officeops.core.sanitization import (
    sanitize_text,
    sanitize_title,
    sanitize_file_url,
    parse_bool,
    parse_id_list,
    MAX_TITLE_LENGTH,
    MAX_URL_LENGTH,
)


class TestSanitizeText:
    """Tests for sanitize_text function."""

    def test_sanitize_with_html_tags(self):
        result = sanitize_text("<b>Quarterly</b> review")
        assert result == "Quarterly review"

    def test_sanitize_collapses_whitespace(self):
        assert sanitize_text("  Board   meeting \n today ") == "Board meeting today"

    def test_sanitize_rejects_leftover_brackets(self):
        with pytest.raises(ValueError, match="invalid HTML-like patterns"):
            sanitize_text("a < b")

    def test_sanitize_enforces_max_length(self):
        with pytest.raises(ValueError, match="maximum length"):
            sanitize_text("x" * 11, max_length=10)

    def test_sanitize_rejects_non_strings(self):
        with pytest.raises(ValueError, match="must be a string"):
            sanitize_text(123)


class TestSanitizeTitle:
    """Tests for sanitize_title function."""

    def test_valid_title(self):
        assert sanitize_title("  Fire drill  ") == "Fire drill"

    def test_empty_title(self):
        with pytest.raises(ValueError, match="Title cannot be empty"):
            sanitize_title("<p></p>")

    def test_title_too_long(self):
        with pytest.raises(ValueError):
            sanitize_title("x" * (MAX_TITLE_LENGTH + 1))


class TestSanitizeFileUrl:
    """Tests for sanitize_file_url function."""

    def test_absolute_and_relative_urls(self):
        assert sanitize_file_url(" https://files.example.org/a.pdf ") == "https://files.example.org/a.pdf"
        assert sanitize_file_url("/uploads/sop/a.pdf") == "/uploads/sop/a.pdf"

    def test_empty_url(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            sanitize_file_url("   ")

    def test_url_with_whitespace(self):
        with pytest.raises(ValueError, match="whitespace"):
            sanitize_file_url("/uploads/my file.pdf")

    def test_url_too_long(self):
        with pytest.raises(ValueError, match="maximum length"):
            sanitize_file_url("/" + "a" * MAX_URL_LENGTH)


class TestParseBool:
    """Tests for parse_bool function."""

    @pytest.mark.parametrize("value", [True, 1, "1", "true", "Yes", "on"])
    def test_truthy(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", [False, 0, "0", "no", "", None, "off"])
    def test_falsy(self, value):
        assert parse_bool(value) is False


class TestParseIdList:
    """Tests for parse_id_list function."""

    def test_none_means_unchanged(self):
        assert parse_id_list(None) is None

    def test_empty_values_mean_clear(self):
        assert parse_id_list([]) == []
        assert parse_id_list("") == []

    def test_single_id(self):
        assert parse_id_list(9) == [9]
        assert parse_id_list("9") == [9]

    def test_comma_separated_string(self):
        assert parse_id_list("9, 3,9") == [9, 3]

    def test_list_with_mixed_entries(self):
        assert parse_id_list([9, "3", "abc", 0, -4, None, 9, True]) == [9, 3]

    def test_keeps_first_seen_order(self):
        assert parse_id_list([5, 7, 5]) == [5, 7]

    def test_integral_floats_are_ids(self):
        assert parse_id_list([3.0, 4, 2.5, float("nan")]) == [3, 4]
        assert parse_id_list(7.0) == [7]

    def test_rejects_unsupported_shapes(self):
        with pytest.raises(ValueError):
            parse_id_list({"id": 1})
