"""Timestamp normalization: any accepted input to a timezone-aware datetime."""

import logging
import math
from datetime import date, datetime
from typing import Any, Optional

from ..exceptions import (
    AmbiguousTimestampError,
    DateConversionError,
    DatetimeConversionError,
    UnixConversionError,
    UnparseableTimestampError,
    UnsupportedTimestampFormatError,
)
from ..models import ParsedValue, SlashDateOrder, is_zoned
from ..timezone.service import TimezoneDatabase, TimezoneError, get_timezone_database
from .builtin import AmbiguousDateError, builtin_parsers
from .registry import FormatRegistry

logger = logging.getLogger(__name__)


class TimestampNormalizer:
    """Turns caller-supplied timestamps into timezone-aware datetimes.

    Typed inputs take a direct path. Strings go through the parser chain:
    matching custom formats first (newest registration first), then the
    built-in parsers in fixed order. The first parser to produce a valid
    calendar value wins.
    """

    def __init__(
        self,
        registry: Optional[FormatRegistry] = None,
        tz_database: Optional[TimezoneDatabase] = None,
    ) -> None:
        self.registry = registry if registry is not None else FormatRegistry()
        self.tz_database = tz_database or get_timezone_database()

    def normalize(
        self,
        value: Any,
        source_timezone: str,
        slash_date_order: SlashDateOrder = "strict",
    ) -> datetime:
        """Normalize a timestamp to an aware datetime.

        Args:
            value: datetime, date, int, float or str.
            source_timezone: Zone used to anchor naive values.
            slash_date_order: Reading order for "NN/NN/YYYY" strings.

        Returns:
            Timezone-aware datetime.

        Raises:
            ConversionError: A subclass describing why normalization failed.
        """
        # bool is an int subclass but never an epoch value
        if isinstance(value, bool):
            raise UnsupportedTimestampFormatError(value)
        if isinstance(value, datetime):
            if is_zoned(value):
                return value
            return self._anchor_datetime(value, source_timezone)
        if isinstance(value, date):
            return self._anchor_date(value, source_timezone)
        if isinstance(value, int):
            return self._from_unix(value)
        if isinstance(value, float):
            if not math.isfinite(value):
                raise UnixConversionError(f"epoch value {value} is not finite", raw=value)
            return self._from_unix(math.trunc(value), raw=value)
        if isinstance(value, str):
            return self._normalize_string(value, source_timezone, slash_date_order)

        raise UnsupportedTimestampFormatError(value)

    def _anchor_datetime(self, value: datetime, source_timezone: str) -> datetime:
        try:
            return self.tz_database.anchor(value, source_timezone)
        except TimezoneError as e:
            raise DatetimeConversionError(e.reason, raw=value) from e

    def _anchor_date(self, value: date, source_timezone: str) -> datetime:
        midnight = datetime(value.year, value.month, value.day)
        try:
            return self.tz_database.anchor(midnight, source_timezone)
        except TimezoneError as e:
            raise DateConversionError(e.reason, raw=value) from e

    def _from_unix(self, seconds: int, raw: Any = None) -> datetime:
        try:
            return self.tz_database.from_unix(seconds)
        except TimezoneError as e:
            raise UnixConversionError(e.reason, raw=seconds if raw is None else raw) from e

    def _normalize_string(
        self, raw: str, source_timezone: str, slash_date_order: SlashDateOrder
    ) -> datetime:
        text = raw.strip()
        parsed = self.parse_string(text, slash_date_order)

        if isinstance(parsed, datetime):
            if is_zoned(parsed):
                return parsed
            return self._anchor_datetime(parsed, source_timezone)
        return self._anchor_date(parsed, source_timezone)

    def parse_string(self, text: str, slash_date_order: SlashDateOrder = "strict") -> ParsedValue:
        """Run the parser chain over an already trimmed string.

        Returns:
            The first parser result: aware datetime, naive datetime or date.

        Raises:
            AmbiguousTimestampError: If only an ambiguous slash reading matched.
            UnparseableTimestampError: If no parser matched.
        """
        for entry in self.registry.matching(text):
            try:
                result = entry.parser(text, entry.pattern)
            except Exception as e:
                logger.debug("Custom parser %s failed for %r: %s", entry.name, text, e)
                continue
            if isinstance(result, (datetime, date)):
                logger.debug("Custom parser %s accepted %r", entry.name, text)
                return result
            logger.debug(
                "Custom parser %s returned %s for %r; trying next parser",
                entry.name,
                type(result).__name__,
                text,
            )

        ambiguity: Optional[AmbiguousDateError] = None
        for name, parser in builtin_parsers(slash_date_order):
            try:
                result = parser(text)
            except AmbiguousDateError as e:
                ambiguity = e
                continue
            except (ValueError, OverflowError) as e:
                logger.debug("Parser %s rejected %r: %s", name, text, e)
                continue
            logger.debug("Parser %s accepted %r", name, text)
            return result

        if ambiguity is not None:
            raise AmbiguousTimestampError(text, ambiguity.readings)
        raise UnparseableTimestampError(text)
