"""Unit tests for the built-in string parsers and the shipped custom parsers."""

import re
from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from tzrender.parsing.builtin import (
    DMY_FORMAT_PATTERN,
    DOT_FORMAT_PATTERN,
    SHIPPED_PARSERS,
    AmbiguousDateError,
    builtin_parsers,
    parse_date_only,
    parse_dmy_format,
    parse_dot_format,
    parse_eu_datetime,
    parse_iso8601,
    parse_iso_datetime,
    parse_rfc3339,
    parse_slash_datetime_strict,
    parse_standard_datetime,
    parse_us_datetime,
)

pytestmark = pytest.mark.unit


class TestZonedParsers:
    """Test ISO 8601 / RFC 3339 parsing with zone designators."""

    def test_parse_iso8601_when_z_suffix_then_utc(self) -> None:
        parsed = parse_iso8601("2024-01-15T14:30:00Z")

        assert parsed == datetime(2024, 1, 15, 14, 30, tzinfo=UTC)
        assert parsed.utcoffset() == timedelta(0)

    def test_parse_rfc3339_when_numeric_offset_then_offset_kept(self) -> None:
        parsed = parse_rfc3339("2024-01-15T14:30:00+05:30")

        assert parsed.utcoffset() == timedelta(hours=5, minutes=30)
        assert parsed == datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize("text", ["2024-01-15T14:30:00", "2024-01-15", "2024-01-15 14:30:00"])
    def test_parse_iso8601_when_no_zone_then_raises(self, text) -> None:
        with pytest.raises(ValueError):
            parse_iso8601(text)

    def test_parse_iso8601_when_garbage_then_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_iso8601("invalid")


class TestNaiveParsers:
    """Test the fixed-layout parsers producing naive values."""

    def test_parse_date_only_when_valid_then_date(self) -> None:
        assert parse_date_only("2024-01-15") == date(2024, 1, 15)

    def test_parse_date_only_when_impossible_date_then_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_date_only("2024-02-30")

    def test_parse_standard_datetime_when_valid_then_naive_datetime(self) -> None:
        assert parse_standard_datetime("2024-01-15 14:30:00") == datetime(2024, 1, 15, 14, 30)

    def test_parse_standard_datetime_when_month_13_then_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_standard_datetime("2024-13-15 14:30:00")

    def test_parse_us_and_eu_when_same_text_then_swap_fields(self) -> None:
        assert parse_us_datetime("03/04/2024 10:00:00") == datetime(2024, 3, 4, 10, 0)
        assert parse_eu_datetime("03/04/2024 10:00:00") == datetime(2024, 4, 3, 10, 0)

    def test_parse_iso_datetime_when_fraction_then_microseconds_padded(self) -> None:
        assert parse_iso_datetime("2024-01-15T14:30:00.123") == datetime(
            2024, 1, 15, 14, 30, 0, 123000
        )

    def test_parse_iso_datetime_when_offset_present_then_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_iso_datetime("2024-01-15T14:30:00+01:00")

    @pytest.mark.parametrize(
        "parser,text",
        [
            (parse_date_only, "２０２４-01-15"),
            (parse_standard_datetime, "2024-01-15T14:30:00"),
            (parse_us_datetime, "1/15/2024 14:30:00"),
        ],
    )
    def test_fixed_layout_parsers_when_layout_differs_then_raise(self, parser, text) -> None:
        with pytest.raises(ValueError):
            parser(text)


class TestStrictSlashParser:
    """Test the conflict-rejecting slash date reading."""

    def test_strict_when_only_eu_reading_valid_then_eu(self) -> None:
        assert parse_slash_datetime_strict("15/01/2024 14:30:00") == datetime(2024, 1, 15, 14, 30)

    def test_strict_when_only_us_reading_valid_then_us(self) -> None:
        assert parse_slash_datetime_strict("01/15/2024 14:30:00") == datetime(2024, 1, 15, 14, 30)

    def test_strict_when_readings_agree_then_accepted(self) -> None:
        assert parse_slash_datetime_strict("05/05/2024 08:00:00") == datetime(2024, 5, 5, 8, 0)

    def test_strict_when_readings_differ_then_raises_ambiguous(self) -> None:
        with pytest.raises(AmbiguousDateError) as exc_info:
            parse_slash_datetime_strict("03/04/2024 10:00:00")

        assert exc_info.value.readings == (datetime(2024, 3, 4, 10, 0), datetime(2024, 4, 3, 10, 0))

    def test_strict_when_neither_valid_then_value_error(self) -> None:
        with pytest.raises(ValueError) as exc_info:
            parse_slash_datetime_strict("13/13/2024 10:00:00")

        assert not isinstance(exc_info.value, AmbiguousDateError)


class TestBuiltinParserChain:
    """Test the chain order for each slash_date_order mode."""

    def test_builtin_parsers_when_strict_then_single_slash_parser(self) -> None:
        names = [name for name, _ in builtin_parsers("strict")]

        assert names == [
            "iso8601",
            "rfc3339",
            "date_only",
            "standard_datetime",
            "slash_datetime",
            "iso_datetime",
        ]

    def test_builtin_parsers_when_us_then_us_before_eu(self) -> None:
        names = [name for name, _ in builtin_parsers("us")]

        assert names.index("us_datetime") < names.index("eu_datetime")
        assert names[-1] == "iso_datetime"

    def test_builtin_parsers_when_eu_then_eu_before_us(self) -> None:
        names = [name for name, _ in builtin_parsers("eu")]

        assert names.index("eu_datetime") < names.index("us_datetime")

    def test_builtin_parsers_when_unknown_mode_then_raises(self) -> None:
        with pytest.raises(ValueError, match="slash_date_order"):
            builtin_parsers("iso")  # type: ignore[arg-type]


class TestShippedParsers:
    """Test parsers that configuration can reference by name."""

    def test_shipped_parsers_when_listed_then_names_map_to_functions(self) -> None:
        assert SHIPPED_PARSERS == {"dot_format": parse_dot_format, "dmy_format": parse_dmy_format}

    def test_parse_dot_format_when_matching_then_naive_datetime(self) -> None:
        pattern = re.compile(DOT_FORMAT_PATTERN)

        assert parse_dot_format("2024.01.15 14:30:00", pattern) == datetime(2024, 1, 15, 14, 30)

    def test_parse_dmy_format_when_matching_then_day_first(self) -> None:
        pattern = re.compile(DMY_FORMAT_PATTERN)

        assert parse_dmy_format("15-01-2024 14:30:00", pattern) == datetime(2024, 1, 15, 14, 30)

    def test_parse_dot_format_when_pattern_has_wrong_groups_then_raises(self) -> None:
        with pytest.raises(ValueError, match="six groups"):
            parse_dot_format("2024.01.15", re.compile(r"^(\d{4})\.(\d{2})\.(\d{2})$"))
