"""Value types shared across the conversion pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Generic, Literal, Optional, TypeVar, Union

from .exceptions import ConversionError

# Accepted caller inputs: zoned instant, naive local time, calendar date,
# integer or float epoch seconds, raw string.
TimestampInput = Union[datetime, date, int, float, str]

# What a string parser may produce before anchoring.
ParsedValue = Union[datetime, date]

SlashDateOrder = Literal["strict", "us", "eu"]

DEFAULT_DB_TIMEZONE = "UTC"
DEFAULT_USER_TIMEZONE = "UTC"
DEFAULT_FORMAT = "%Y-%m-%d %H:%M:%S %Z"
DEFAULT_SLASH_DATE_ORDER: SlashDateOrder = "strict"

T = TypeVar("T")


@dataclass(frozen=True)
class ConversionDefaults:
    """Configuration snapshot taken once per conversion call."""

    db_timezone: Any = DEFAULT_DB_TIMEZONE
    user_timezone: Any = DEFAULT_USER_TIMEZONE
    format: Any = DEFAULT_FORMAT
    slash_date_order: SlashDateOrder = DEFAULT_SLASH_DATE_ORDER


@dataclass(frozen=True)
class ConversionResult(Generic[T]):
    """Outcome of a conversion: either a value or a typed error, never both."""

    value: Optional[T] = None
    error: Optional[ConversionError] = None

    @classmethod
    def ok(cls, value: T) -> ConversionResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ConversionError) -> ConversionResult[T]:
        return cls(error=error)

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> Optional[str]:
        return None if self.error is None else self.error.kind

    def unwrap(self) -> T:
        """Return the value or raise the stored error.

        Raises:
            ConversionError: If the conversion failed.
        """
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def is_zoned(value: datetime) -> bool:
    """Return True if a datetime carries a usable UTC offset."""
    return value.tzinfo is not None and value.utcoffset() is not None
