"""Conversion façade: normalize, shift and render timestamps.

``TimestampConverter`` wires the pipeline together around an explicit
configuration store and format registry. The module-level functions delegate
to a lazily created default converter built from the process settings, for
callers that just want ``convert(value, "Europe/Paris")``.
"""

import logging
import re
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Union

from .config.settings import TzRenderSettings, load_settings
from .config.store import ConfigStore
from .exceptions import (
    ConversionError,
    InvalidDbTimezoneConfigError,
    InvalidSlashDateOrderConfigError,
    InvalidTimezoneError,
    InvalidUserTimezoneConfigError,
    TimezoneConversionError,
)
from .formatting import Formatter
from .models import ConversionDefaults, ConversionResult, SlashDateOrder, TimestampInput
from .parsing.normalizer import TimestampNormalizer
from .parsing.registry import CustomParserFunc, FormatEntry, FormatRegistry
from .timezone.service import TimezoneDatabase, TimezoneError, get_timezone_database

logger = logging.getLogger(__name__)

SLASH_DATE_ORDERS = ("strict", "us", "eu")


@dataclass(frozen=True)
class ResolvedOptions:
    """Per-call options after defaults have been applied and validated."""

    db_timezone: str
    target_timezone: str
    format: Any
    slash_date_order: SlashDateOrder


class TimestampConverter:
    """Converts stored timestamps into formatted text in a viewer's timezone."""

    def __init__(
        self,
        config: Optional[ConfigStore] = None,
        registry: Optional[FormatRegistry] = None,
        tz_database: Optional[TimezoneDatabase] = None,
        formatter: Optional[Formatter] = None,
    ) -> None:
        """Initialize the converter.

        Args:
            config: Store providing default timezones and format.
            registry: Custom format registry consulted before built-in parsers.
            tz_database: Timezone database collaborator.
            formatter: Renderer wrapper.
        """
        self.config = config if config is not None else ConfigStore()
        self.registry = registry if registry is not None else FormatRegistry()
        self.tz_database = tz_database or get_timezone_database()
        self.formatter = formatter or Formatter()
        self.normalizer = TimestampNormalizer(self.registry, self.tz_database)

    @classmethod
    def from_settings(cls, settings: TzRenderSettings, **kwargs: Any) -> "TimestampConverter":
        """Build a converter from loaded settings.

        Custom formats listed in the settings are registered so that the
        first one listed is tried first.

        Raises:
            InvalidCustomFormatError: If a configured format is invalid.
        """
        registry = kwargs.pop("registry", None)
        if registry is None:
            registry = FormatRegistry()
        for custom_format in reversed(settings.custom_formats):
            registry.register_named(custom_format.pattern, custom_format.parser)
        return cls(config=ConfigStore.from_settings(settings), registry=registry, **kwargs)

    def resolve(self, user_timezone: Optional[str] = None, fmt: Optional[str] = None) -> ResolvedOptions:
        """Apply configured defaults and validate them.

        Raises:
            ConfigurationError: If a configured default is unusable.
            InvalidTimezoneError: If the target timezone is unknown.
        """
        defaults = self.config.snapshot()
        return ResolvedOptions(
            db_timezone=self._resolve_db_timezone(defaults),
            target_timezone=self._resolve_user_timezone(user_timezone, defaults),
            format=defaults.format if fmt is None else fmt,
            slash_date_order=self._resolve_slash_date_order(defaults),
        )

    def _resolve_db_timezone(self, defaults: ConversionDefaults) -> str:
        db_timezone = defaults.db_timezone
        if not self.tz_database.is_valid(db_timezone):
            raise InvalidDbTimezoneConfigError(db_timezone)
        return db_timezone

    def _resolve_user_timezone(self, user_timezone: Any, defaults: ConversionDefaults) -> str:
        if user_timezone is None:
            user_timezone = defaults.user_timezone
            if not isinstance(user_timezone, str):
                raise InvalidUserTimezoneConfigError(user_timezone)
        if not self.tz_database.is_valid(user_timezone):
            raise InvalidTimezoneError(user_timezone)
        return user_timezone

    def _resolve_slash_date_order(self, defaults: ConversionDefaults) -> SlashDateOrder:
        if defaults.slash_date_order not in SLASH_DATE_ORDERS:
            raise InvalidSlashDateOrderConfigError(defaults.slash_date_order)
        return defaults.slash_date_order

    def normalize(self, timestamp: Any, source_timezone: Optional[str] = None) -> datetime:
        """Normalize a timestamp to an aware datetime without shifting it.

        Args:
            timestamp: Any accepted timestamp input.
            source_timezone: Zone for naive values; configured db timezone if None.

        Raises:
            ConversionError: If the timestamp cannot be normalized.
        """
        defaults = self.config.snapshot()
        if source_timezone is None:
            source_timezone = self._resolve_db_timezone(defaults)
        return self.normalizer.normalize(
            timestamp, source_timezone, self._resolve_slash_date_order(defaults)
        )

    def shift(self, instant: datetime, target_timezone: str) -> datetime:
        """Re-anchor an aware datetime to the target timezone.

        Raises:
            TimezoneConversionError: If the timezone database rejects the shift.
        """
        try:
            return self.tz_database.shift(instant, target_timezone)
        except TimezoneError as e:
            raise TimezoneConversionError(e.reason, raw=instant) from e

    def _convert_one(self, timestamp: Any, options: ResolvedOptions) -> str:
        instant = self.normalizer.normalize(timestamp, options.db_timezone, options.slash_date_order)
        converted = self.shift(instant, options.target_timezone)
        return self.formatter.render(converted, options.format)

    def convert(
        self,
        timestamp: TimestampInput,
        user_timezone: Optional[str] = None,
        fmt: Optional[str] = None,
    ) -> ConversionResult[str]:
        """Convert one timestamp to formatted text in the user's timezone.

        Args:
            timestamp: datetime, date, epoch int/float, or string.
            user_timezone: Target timezone; configured default if None.
            fmt: strftime format; configured default if None.

        Returns:
            ConversionResult with the formatted string or the first error.

        Example:
            >>> TimestampConverter().convert("2024-01-15T14:30:00Z", "America/Los_Angeles").value
            '2024-01-15 06:30:00 PST'
        """
        try:
            options = self.resolve(user_timezone, fmt)
            return ConversionResult.ok(self._convert_one(timestamp, options))
        except ConversionError as e:
            logger.debug("Conversion of %r failed: %s", timestamp, e)
            return ConversionResult.failure(e)

    def convert_batch(
        self,
        timestamps: Iterable[TimestampInput],
        user_timezone: Optional[str] = None,
        fmt: Optional[str] = None,
    ) -> ConversionResult[list[str]]:
        """Convert timestamps in order; all succeed or the first error is returned.

        Configuration is resolved once and shared by every element.

        Raises:
            TypeError: If ``timestamps`` is a string rather than a collection.
        """
        if isinstance(timestamps, (str, bytes)):
            raise TypeError("convert_batch expects a collection of timestamps, not a string")

        try:
            options = self.resolve(user_timezone, fmt)
        except ConversionError as e:
            logger.debug("Batch conversion configuration failed: %s", e)
            return ConversionResult.failure(e)

        converted: list[str] = []
        for index, timestamp in enumerate(timestamps):
            try:
                converted.append(self._convert_one(timestamp, options))
            except ConversionError as e:
                logger.debug("Batch conversion failed at index %d (%r): %s", index, timestamp, e)
                return ConversionResult.failure(e)

        return ConversionResult.ok(converted)

    def add_custom_format(
        self, pattern: Union[str, "re.Pattern[str]"], parser: CustomParserFunc
    ) -> FormatEntry:
        """Register a custom string format tried before the built-in parsers.

        Raises:
            InvalidCustomFormatError: If the pattern or parser is invalid.
        """
        return self.registry.register(pattern, parser)

    def available_timezones(self) -> list[str]:
        return self.tz_database.available_timezones()

    def valid_timezone(self, timezone: Any) -> bool:
        return self.tz_database.is_valid(timezone)


_default_converter: Optional[TimestampConverter] = None
_default_converter_lock = threading.Lock()


def get_default_converter() -> TimestampConverter:
    """Get the process-wide converter, creating it from settings on first use."""
    global _default_converter
    converter = _default_converter
    if converter is None:
        with _default_converter_lock:
            # Another thread may have built it while this one waited
            if _default_converter is None:
                _default_converter = TimestampConverter.from_settings(load_settings())
            converter = _default_converter
    return converter


def set_default_converter(converter: Optional[TimestampConverter]) -> None:
    """Replace the process-wide converter (None recreates it lazily)."""
    global _default_converter
    with _default_converter_lock:
        _default_converter = converter


def convert(
    timestamp: TimestampInput, timezone: Optional[str] = None, fmt: Optional[str] = None
) -> ConversionResult[str]:
    """Convert a timestamp with the default converter."""
    return get_default_converter().convert(timestamp, timezone, fmt)


def convert_batch(
    timestamps: Iterable[TimestampInput], timezone: Optional[str] = None, fmt: Optional[str] = None
) -> ConversionResult[list[str]]:
    """Convert timestamps with the default converter."""
    return get_default_converter().convert_batch(timestamps, timezone, fmt)


def add_custom_format(pattern: Union[str, "re.Pattern[str]"], parser: CustomParserFunc) -> FormatEntry:
    """Register a custom format with the default converter."""
    return get_default_converter().add_custom_format(pattern, parser)


def available_timezones() -> list[str]:
    """Get all known timezone identifiers, sorted."""
    return get_default_converter().available_timezones()


def valid_timezone(timezone: Any) -> bool:
    """Check whether a value is a known timezone identifier."""
    return get_default_converter().valid_timezone(timezone)
