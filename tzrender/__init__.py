"""
tzrender - convert database timestamps into a viewer's timezone.

Accepts datetimes, dates, Unix epoch numbers and a set of textual formats,
normalizes them to a timezone-aware instant, shifts that instant to the target
timezone and renders it with a strftime format.

Example usage:
    >>> import tzrender
    >>> tzrender.convert("2024-01-15T14:30:00Z", "America/Los_Angeles").value
    '2024-01-15 06:30:00 PST'
    >>> tzrender.convert(1705329000, "Europe/London").value
    '2024-01-15 14:30:00 GMT'
    >>> tzrender.convert("invalid", "UTC").error_kind
    'unparseable_timestamp'
"""

from importlib.metadata import PackageNotFoundError, version

from .config import ConfigStore, TzRenderSettings, load_settings
from .converter import (
    TimestampConverter,
    add_custom_format,
    available_timezones,
    convert,
    convert_batch,
    get_default_converter,
    set_default_converter,
    valid_timezone,
)
from .exceptions import (
    AmbiguousTimestampError,
    ConfigurationError,
    ConversionError,
    DateConversionError,
    DatetimeConversionError,
    FormattingError,
    InvalidCustomFormatError,
    InvalidDbTimezoneConfigError,
    InvalidSlashDateOrderConfigError,
    InvalidTimezoneError,
    InvalidUserTimezoneConfigError,
    TimezoneConversionError,
    UnixConversionError,
    UnparseableTimestampError,
    UnsupportedTimestampFormatError,
)
from .formatting import Formatter
from .models import ConversionResult
from .parsing import FormatRegistry, TimestampNormalizer
from .timezone import TimezoneDatabase

try:
    __version__ = version("tzrender")
except PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    "AmbiguousTimestampError",
    "ConfigStore",
    "ConfigurationError",
    "ConversionError",
    "ConversionResult",
    "DateConversionError",
    "DatetimeConversionError",
    "FormatRegistry",
    "Formatter",
    "FormattingError",
    "InvalidCustomFormatError",
    "InvalidDbTimezoneConfigError",
    "InvalidSlashDateOrderConfigError",
    "InvalidTimezoneError",
    "InvalidUserTimezoneConfigError",
    "TimestampConverter",
    "TimestampNormalizer",
    "TimezoneConversionError",
    "TimezoneDatabase",
    "TzRenderSettings",
    "UnixConversionError",
    "UnparseableTimestampError",
    "UnsupportedTimestampFormatError",
    "add_custom_format",
    "available_timezones",
    "convert",
    "convert_batch",
    "get_default_converter",
    "load_settings",
    "set_default_converter",
    "valid_timezone",
]
