"""String parsing and timestamp normalization."""

from .builtin import (
    DMY_FORMAT_PATTERN,
    DOT_FORMAT_PATTERN,
    SHIPPED_PARSERS,
    builtin_parsers,
    parse_dmy_format,
    parse_dot_format,
)
from .normalizer import TimestampNormalizer
from .registry import FormatEntry, FormatRegistry

__all__ = [
    "DMY_FORMAT_PATTERN",
    "DOT_FORMAT_PATTERN",
    "SHIPPED_PARSERS",
    "FormatEntry",
    "FormatRegistry",
    "TimestampNormalizer",
    "builtin_parsers",
    "parse_dmy_format",
    "parse_dot_format",
]
