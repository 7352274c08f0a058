"""Timezone database service for tzrender.

Wraps the IANA timezone database exposed by ``zoneinfo`` (backed by the
``tzdata`` package when the host has no system zone files). All anchoring
and shifting of datetimes goes through this service so that gap and overlap
detection is applied consistently.
"""

import logging
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

logger = logging.getLogger(__name__)

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class TimezoneError(Exception):
    """Raised when a timezone database operation fails."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


@lru_cache(maxsize=1)
def _load_identifiers() -> frozenset[str]:
    identifiers = frozenset(available_timezones())
    if not identifiers:
        logger.warning("Timezone database returned no identifiers; is tzdata installed?")
    else:
        logger.debug("Loaded %d timezone identifiers", len(identifiers))
    return identifiers


class TimezoneDatabase:
    """Timezone lookup, validation, anchoring and shifting.

    Instances are stateless apart from the cached identifier list, so a single
    instance may be shared between threads.
    """

    def list_identifiers(self) -> frozenset[str]:
        """Get every timezone identifier known to the database."""
        return _load_identifiers()

    def available_timezones(self) -> list[str]:
        """Get the identifiers as a sorted list."""
        return sorted(self.list_identifiers())

    def is_valid(self, identifier: Any) -> bool:
        """Check an identifier against the database's identifier list."""
        return isinstance(identifier, str) and identifier in self.list_identifiers()

    def get_zone(self, identifier: str) -> ZoneInfo:
        """Get the tzinfo object for an identifier.

        Raises:
            TimezoneError: If the identifier cannot be loaded.
        """
        try:
            return ZoneInfo(identifier)
        except (ZoneInfoNotFoundError, ValueError, TypeError) as e:
            raise TimezoneError(f"unknown timezone {identifier!r}: {e}") from e

    def anchor(self, naive: datetime, identifier: str) -> datetime:
        """Attach a timezone to a naive local time.

        Local times that do not exist (spring-forward gap) or occur twice
        (fall-back overlap) are reported rather than resolved silently.

        Args:
            naive: Datetime without tzinfo.
            identifier: IANA timezone identifier.

        Returns:
            Timezone-aware datetime for the same wall-clock fields.

        Raises:
            TimezoneError: If the local time is nonexistent or ambiguous, or
                the zone cannot be loaded.
        """
        if naive.tzinfo is not None:
            raise TimezoneError(f"expected naive datetime, got {naive.isoformat()}")

        zone = self.get_zone(identifier)
        earlier = naive.replace(tzinfo=zone, fold=0)
        later = naive.replace(tzinfo=zone, fold=1)

        try:
            if earlier.utcoffset() != later.utcoffset():
                round_trip = earlier.astimezone(UTC).astimezone(zone).replace(tzinfo=None)
                if round_trip != naive.replace(fold=0):
                    raise TimezoneError(
                        f"nonexistent local time {naive.isoformat(sep=' ')} in {identifier}"
                    )
                raise TimezoneError(
                    f"ambiguous local time {naive.isoformat(sep=' ')} in {identifier}"
                )
            # Offsets near year 1 or 9999 can push the instant out of range.
            earlier.astimezone(UTC)
        except OverflowError as e:
            raise TimezoneError(
                f"local time {naive.isoformat(sep=' ')} out of range in {identifier}"
            ) from e

        return earlier

    def shift(self, instant: datetime, identifier: str) -> datetime:
        """Re-anchor an aware datetime to another timezone.

        Raises:
            TimezoneError: If the shift cannot be performed.
        """
        zone = self.get_zone(identifier)
        try:
            return instant.astimezone(zone)
        except (OverflowError, ValueError) as e:
            raise TimezoneError(f"cannot shift {instant.isoformat()} to {identifier}: {e}") from e

    def from_unix(self, seconds: int) -> datetime:
        """Convert whole epoch seconds to a UTC datetime.

        Raises:
            TimezoneError: If the value is outside the representable range.
        """
        try:
            return UNIX_EPOCH + timedelta(seconds=seconds)
        except OverflowError as e:
            raise TimezoneError(f"epoch value {seconds} out of range") from e


_timezone_database: Optional[TimezoneDatabase] = None


def get_timezone_database() -> TimezoneDatabase:
    """Get the shared timezone database instance."""
    if "_timezone_database" not in globals() or globals()["_timezone_database"] is None:
        globals()["_timezone_database"] = TimezoneDatabase()
    return globals()["_timezone_database"]


def available_timezones_list() -> list[str]:
    """Get all timezone identifiers, sorted."""
    return get_timezone_database().available_timezones()


def is_valid_timezone(identifier: Any) -> bool:
    """Check whether an identifier is a known timezone."""
    return get_timezone_database().is_valid(identifier)
