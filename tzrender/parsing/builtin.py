"""Built-in string timestamp parsers.

Built-in parsers take the trimmed string and return a ``datetime`` (aware or
naive) or a ``date``. They raise ``ValueError`` when the string does not
match or when the matched fields are not a valid calendar value, which lets
the normalizer fall through to the next parser.

The module also ships two parsers meant for registration as custom formats
(``parse_dot_format`` and ``parse_dmy_format``). These follow the custom
parser calling convention ``(text, pattern)``.
"""

import re
from datetime import date, datetime
from typing import Callable

from dateutil.parser import isoparse

from ..models import ParsedValue, SlashDateOrder, is_zoned

BuiltinParser = Callable[[str], ParsedValue]
CustomParser = Callable[[str, "re.Pattern[str]"], object]

_DATE_ONLY_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$", re.ASCII)
_STANDARD_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})\s+(\d{2}):(\d{2}):(\d{2})$", re.ASCII)
_SLASH_RE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})\s+(\d{2}):(\d{2}):(\d{2})$", re.ASCII)
_ISO_NAIVE_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d{1,6}))?$", re.ASCII
)

# Patterns for the shipped custom parsers
DOT_FORMAT_PATTERN = r"^(\d{4})\.(\d{2})\.(\d{2})\s+(\d{2}):(\d{2}):(\d{2})$"
DMY_FORMAT_PATTERN = r"^(\d{2})-(\d{2})-(\d{4})\s+(\d{2}):(\d{2}):(\d{2})$"


class AmbiguousDateError(ValueError):
    """Slash-separated string is valid as both MM/DD/YYYY and DD/MM/YYYY."""

    def __init__(self, text: str, readings: tuple[datetime, ...]) -> None:
        super().__init__(f"{text!r} is ambiguous between US and EU readings")
        self.text = text
        self.readings = readings


def _groups(regex: "re.Pattern[str]", text: str) -> list[int]:
    match = regex.match(text)
    if match is None:
        raise ValueError(f"{text!r} does not match {regex.pattern}")
    return [int(group) for group in match.groups()]


def parse_iso8601(text: str) -> datetime:
    """Parse ISO 8601 with a zone designator: "2024-01-15T14:30:00Z"."""
    parsed = isoparse(text)
    if not is_zoned(parsed):
        raise ValueError(f"{text!r} has no zone designator")
    return parsed


def parse_rfc3339(text: str) -> datetime:
    """Parse RFC 3339: "2024-01-15T14:30:00+00:00".

    RFC 3339 is a profile of ISO 8601, so this shares the zone-aware parse.
    """
    return parse_iso8601(text)


def parse_date_only(text: str) -> date:
    """Parse a calendar date: "2024-01-15"."""
    year, month, day = _groups(_DATE_ONLY_RE, text)
    return date(year, month, day)


def parse_standard_datetime(text: str) -> datetime:
    """Parse "2024-01-15 14:30:00"."""
    year, month, day, hour, minute, second = _groups(_STANDARD_RE, text)
    return datetime(year, month, day, hour, minute, second)


def parse_us_datetime(text: str) -> datetime:
    """Parse US order "01/15/2024 14:30:00"."""
    month, day, year, hour, minute, second = _groups(_SLASH_RE, text)
    return datetime(year, month, day, hour, minute, second)


def parse_eu_datetime(text: str) -> datetime:
    """Parse EU order "15/01/2024 14:30:00"."""
    day, month, year, hour, minute, second = _groups(_SLASH_RE, text)
    return datetime(year, month, day, hour, minute, second)


def parse_slash_datetime_strict(text: str) -> datetime:
    """Parse a slash date only when the US and EU readings agree.

    Raises:
        AmbiguousDateError: If both readings are valid and differ.
        ValueError: If neither reading is valid.
    """
    readings: list[datetime] = []
    for parser in (parse_us_datetime, parse_eu_datetime):
        try:
            reading = parser(text)
        except ValueError:
            continue
        if reading not in readings:
            readings.append(reading)

    if not readings:
        raise ValueError(f"{text!r} is not a valid slash-separated datetime")
    if len(readings) > 1:
        raise AmbiguousDateError(text, tuple(readings))
    return readings[0]


def parse_iso_datetime(text: str) -> datetime:
    """Parse ISO 8601 without zone: "2024-01-15T14:30:00"."""
    match = _ISO_NAIVE_RE.match(text)
    if match is None:
        raise ValueError(f"{text!r} is not an ISO datetime without zone")
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    fraction = match.group(7)
    microsecond = int(fraction.ljust(6, "0")) if fraction else 0
    return datetime(year, month, day, hour, minute, second, microsecond)


def builtin_parsers(slash_date_order: SlashDateOrder = "strict") -> list[tuple[str, BuiltinParser]]:
    """Get the built-in parser chain in trial order.

    Args:
        slash_date_order: How "NN/NN/YYYY" strings are read. "us" tries
            month-first then day-first, "eu" the reverse, and "strict" only
            accepts strings whose readings do not conflict.

    Returns:
        List of (name, parser) pairs.
    """
    if slash_date_order == "us":
        slash: list[tuple[str, BuiltinParser]] = [
            ("us_datetime", parse_us_datetime),
            ("eu_datetime", parse_eu_datetime),
        ]
    elif slash_date_order == "eu":
        slash = [
            ("eu_datetime", parse_eu_datetime),
            ("us_datetime", parse_us_datetime),
        ]
    elif slash_date_order == "strict":
        slash = [("slash_datetime", parse_slash_datetime_strict)]
    else:
        raise ValueError(f"Unknown slash_date_order: {slash_date_order!r}")

    return [
        ("iso8601", parse_iso8601),
        ("rfc3339", parse_rfc3339),
        ("date_only", parse_date_only),
        ("standard_datetime", parse_standard_datetime),
        *slash,
        ("iso_datetime", parse_iso_datetime),
    ]


def _six_groups(text: str, pattern: "re.Pattern[str]") -> list[int]:
    match = pattern.search(text)
    if match is None or len(match.groups()) != 6:
        raise ValueError(f"{text!r} does not yield six groups from {pattern.pattern}")
    return [int(group) for group in match.groups()]


def parse_dot_format(text: str, pattern: "re.Pattern[str]") -> datetime:
    """Custom parser for year, month, day, hour, minute, second groups.

    Intended for "2024.01.15 14:30:00" with ``DOT_FORMAT_PATTERN`` but works
    with any pattern declaring the six groups in that order.
    """
    year, month, day, hour, minute, second = _six_groups(text, pattern)
    return datetime(year, month, day, hour, minute, second)


def parse_dmy_format(text: str, pattern: "re.Pattern[str]") -> datetime:
    """Custom parser for day, month, year, hour, minute, second groups."""
    day, month, year, hour, minute, second = _six_groups(text, pattern)
    return datetime(year, month, day, hour, minute, second)


# Parsers that configuration files may reference by name
SHIPPED_PARSERS: dict[str, CustomParser] = {
    "dot_format": parse_dot_format,
    "dmy_format": parse_dmy_format,
}
