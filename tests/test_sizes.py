"""Tests for human-readable size parsing and formatting."""

import pytest

from s3mgr.core.exceptions import InvalidSizeError
from s3mgr.path.sizes import format_human_size, parse_human_size


class TestParseHumanSize:
    """Test parse_human_size."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("2M", 2 * 1024 * 1024),
            ("1.5K", 1536),
            ("5MB", 5 * 1024 * 1024),
            ("512k", 512 * 1024),
            ("512kb", 512 * 1024),
            ("1G", 1024**3),
            ("1.5g", int(1.5 * 1024**3)),
            ("100", 100),
            ("100B", 100),
            ("  3m  ", 3 * 1024 * 1024),
            (".5K", 512),
            ("0", 0),
            ("1e3", 1000),
            ("+5M", 5 * 1024 * 1024),
            ("2.5E1K", 25 * 1024),
        ],
    )
    def test_valid_sizes(self, text, expected):
        """Test accepted size strings."""
        assert parse_human_size(text) == expected

    def test_fraction_truncates(self):
        """Test fractional byte counts are truncated."""
        assert parse_human_size("1.7") == 1

    @pytest.mark.parametrize(
        "text",
        ["", "   ", "K", "MB", "abc", "-5M", "1.2.3K", "5T", "inf", "nan", "1e", "--5"],
    )
    def test_invalid_sizes(self, text):
        """Test rejected size strings."""
        with pytest.raises(InvalidSizeError):
            parse_human_size(text)

    def test_largest_value(self):
        """Test the unsigned 64-bit maximum is accepted exactly."""
        assert parse_human_size("18446744073709551615") == 2**64 - 1
        assert parse_human_size("16G") == 16 * 1024**3

    def test_one_past_largest_value(self):
        with pytest.raises(InvalidSizeError, match="out of range"):
            parse_human_size("18446744073709551616")

    def test_large_integers_are_exact(self):
        """Test integers beyond float precision keep every digit."""
        assert parse_human_size("9007199254740993") == 2**53 + 1
        assert parse_human_size("17179869183G") == (2**34 - 1) * 1024**3

    def test_huge_exponent_out_of_range(self):
        with pytest.raises(InvalidSizeError, match="out of range"):
            parse_human_size("1e999999999K")

    def test_out_of_range(self):
        """Test sizes beyond the unsigned 64-bit range."""
        with pytest.raises(InvalidSizeError, match="out of range"):
            parse_human_size("99999999999G")

    def test_error_kind(self):
        """Test the error carries its taxonomy kind."""
        with pytest.raises(InvalidSizeError) as exc_info:
            parse_human_size("")
        assert exc_info.value.kind == "invalid_size"


class TestFormatHumanSize:
    """Test format_human_size."""

    @pytest.mark.parametrize(
        "size, expected",
        [
            (0, "0 B"),
            (512, "512 B"),
            (1023, "1023 B"),
            (1024, "1.00 KB"),
            (1536, "1.50 KB"),
            (2 * 1024 * 1024, "2.00 MB"),
            (3 * 1024**3, "3.00 GB"),
            (2048 * 1024**3, "2048.00 GB"),
        ],
    )
    def test_format(self, size, expected):
        """Test unit selection and precision."""
        assert format_human_size(size) == expected

    def test_formatted_sizes_parse_back_approximately(self):
        """Test formatting is lossy but parses back to a nearby value."""
        size = 1234567
        parsed = parse_human_size(format_human_size(size).replace(" ", ""))
        assert abs(parsed - size) < 1024 * 10
