"""Unit tests for size and timestamp formatting."""

from datetime import datetime

import pytest
from findctl.core.sizes import format_file_size, format_timestamp, parse_file_size


class TestFormatFileSize:
    """Tests for format_file_size()."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, "0 B"),
            (10, "10 B"),
            (1023, "1023 B"),
            (1024, "1 KB"),
            (1536, "1.5 KB"),
            (2048, "2 KB"),
            (1048576, "1 MB"),
            (1530000, "1.46 MB"),
            (1024**3, "1 GB"),
            (1024**4, "1 TB"),
            (5 * 1024**5, "5120 TB"),
        ],
    )
    def test_labels(self, size: int, expected: str) -> None:
        assert format_file_size(size) == expected


class TestParseFileSize:
    """Tests for parse_file_size()."""

    @pytest.mark.parametrize(
        ("label", "expected"),
        [
            ("10 B", 10),
            ("2 KB", 2048),
            ("1.5 KB", 1536),
            ("1 MB", 1048576),
            ("1 gb", 1024**3),
        ],
    )
    def test_valid_labels(self, label: str, expected: int) -> None:
        assert parse_file_size(label) == expected

    @pytest.mark.parametrize(
        "label",
        [None, "", "<DIR>", "10", "10 PB", "ten KB", "1  KB", "nan KB", "inf KB"],
    )
    def test_unparsable_labels_are_zero(self, label: str | None) -> None:
        """Anything that is not a size label parses to 0 without raising."""
        assert parse_file_size(label) == 0

    def test_inverse_within_rounding(self) -> None:
        """Parsing a formatted size lands within rounding distance."""
        size = 1530000
        assert abs(parse_file_size(format_file_size(size)) - size) < 0.01 * 1024**2


class TestFormatTimestamp:
    """Tests for format_timestamp()."""

    def test_local_time_format(self) -> None:
        moment = datetime(2026, 1, 19, 14, 30, 5)
        assert format_timestamp(moment.timestamp()) == "2026-01-19 14:30:05"
