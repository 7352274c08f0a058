"""Exception hierarchy for timestamp conversion errors.

Every failure the conversion pipeline can report is a subclass of
``ConversionError``. Each class carries a stable ``kind`` string (used by the
CLI and by callers that prefer string matching) and the pipeline ``stage``
that produced it.
"""

from typing import Any, Optional


class ConversionError(Exception):
    """Base exception for all conversion pipeline errors."""

    kind = "conversion_error"
    stage = "unknown"

    def __init__(self, message: str, raw: Any = None) -> None:
        """Initialize ConversionError.

        Args:
            message: Human readable description
            raw: The offending input value, if any
        """
        super().__init__(message)
        self.message = message
        self.raw = raw

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for logging or JSON output."""
        return {
            "kind": self.kind,
            "stage": self.stage,
            "message": self.message,
            "raw": None if self.raw is None else repr(self.raw),
        }


class ConfigurationError(ConversionError):
    """Process configuration holds an unusable value."""

    stage = "config"


class InvalidDbTimezoneConfigError(ConfigurationError):
    """Configured database timezone is not a known timezone identifier."""

    kind = "invalid_db_timezone_config"

    def __init__(self, value: Any) -> None:
        super().__init__(f"Invalid default_db_timezone configuration: {value!r}", raw=value)


class InvalidUserTimezoneConfigError(ConfigurationError):
    """Configured default user timezone is not a string."""

    kind = "invalid_user_timezone_config"

    def __init__(self, value: Any) -> None:
        super().__init__(f"Invalid default_user_timezone configuration: {value!r}", raw=value)


class InvalidSlashDateOrderConfigError(ConfigurationError):
    """Configured slash_date_order is not one of strict, us or eu."""

    kind = "invalid_slash_date_order_config"

    def __init__(self, value: Any) -> None:
        super().__init__(f"Invalid slash_date_order configuration: {value!r}", raw=value)


class InvalidTimezoneError(ConversionError):
    """Timezone identifier is not in the timezone database."""

    kind = "invalid_timezone"
    stage = "validation"

    def __init__(self, timezone: Any) -> None:
        super().__init__(f"Invalid timezone: {timezone!r}", raw=timezone)
        self.timezone = timezone


class UnparseableTimestampError(ConversionError):
    """No parser in the chain accepted the string."""

    kind = "unparseable_timestamp"
    stage = "normalize"

    def __init__(self, raw: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"Unparseable timestamp: {raw!r}", raw=raw)


class AmbiguousTimestampError(UnparseableTimestampError):
    """Slash-separated date reads validly as both MM/DD and DD/MM."""

    kind = "ambiguous_timestamp"

    def __init__(self, raw: str, readings: tuple[Any, ...]) -> None:
        choices = " or ".join(reading.isoformat(sep=" ") for reading in readings)
        super().__init__(
            raw,
            f"Ambiguous timestamp {raw!r}: could be {choices}; "
            "set slash_date_order to 'us' or 'eu' to disambiguate",
        )
        self.readings = readings


class UnsupportedTimestampFormatError(ConversionError):
    """Input value is not one of the accepted timestamp types."""

    kind = "unsupported_timestamp_format"
    stage = "normalize"

    def __init__(self, raw: Any) -> None:
        super().__init__(
            f"Unsupported timestamp type: {type(raw).__name__}",
            raw=raw,
        )


class TimestampConversionError(ConversionError):
    """Timezone database rejected an anchor or shift operation."""

    stage = "normalize"

    def __init__(self, reason: str, raw: Any = None) -> None:
        super().__init__(f"{self.kind}: {reason}", raw=raw)
        self.reason = reason


class DatetimeConversionError(TimestampConversionError):
    kind = "datetime_conversion_failed"


class DateConversionError(TimestampConversionError):
    kind = "date_conversion_failed"


class UnixConversionError(TimestampConversionError):
    kind = "unix_conversion_failed"


class TimezoneConversionError(TimestampConversionError):
    kind = "timezone_conversion_failed"
    stage = "convert"


class FormattingError(ConversionError):
    """Renderer raised while formatting an instant."""

    kind = "formatting_failed"
    stage = "render"

    def __init__(self, detail: str, raw: Any = None) -> None:
        super().__init__(f"Formatting failed: {detail}", raw=raw)
        self.detail = detail


class InvalidCustomFormatError(ConversionError, ValueError):
    """Custom format registration was rejected."""

    kind = "invalid_custom_format"
    stage = "register"
