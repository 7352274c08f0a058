"""In-memory key/value store holding process-wide conversion defaults."""

import logging
import threading
from typing import Any, Optional

from ..models import (
    DEFAULT_DB_TIMEZONE,
    DEFAULT_FORMAT,
    DEFAULT_SLASH_DATE_ORDER,
    DEFAULT_USER_TIMEZONE,
    ConversionDefaults,
)
from .settings import TzRenderSettings

logger = logging.getLogger(__name__)

DB_TIMEZONE_KEY = "default_db_timezone"
USER_TIMEZONE_KEY = "default_user_timezone"
FORMAT_KEY = "default_format"
SLASH_DATE_ORDER_KEY = "slash_date_order"


class ConfigStore:
    """Thread-safe store for conversion defaults.

    Values are not validated on ``put``; a misconfigured value surfaces as a
    configuration error on the next conversion, not at write time.
    """

    def __init__(self, values: Optional[dict[str, Any]] = None) -> None:
        self._lock = threading.Lock()
        self._values: dict[str, Any] = dict(values or {})

    @classmethod
    def from_settings(cls, settings: TzRenderSettings) -> "ConfigStore":
        """Seed a store from loaded settings."""
        return cls(
            {
                DB_TIMEZONE_KEY: settings.default_db_timezone,
                USER_TIMEZONE_KEY: settings.default_user_timezone,
                FORMAT_KEY: settings.default_format,
                SLASH_DATE_ORDER_KEY: settings.slash_date_order,
            }
        )

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(key, default)

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            self._values[key] = value
        logger.debug("Config %s set to %r", key, value)

    def snapshot(self) -> ConversionDefaults:
        """Get a consistent copy of the defaults for one conversion call."""
        with self._lock:
            values = dict(self._values)
        return ConversionDefaults(
            db_timezone=values.get(DB_TIMEZONE_KEY, DEFAULT_DB_TIMEZONE),
            user_timezone=values.get(USER_TIMEZONE_KEY, DEFAULT_USER_TIMEZONE),
            format=values.get(FORMAT_KEY, DEFAULT_FORMAT),
            slash_date_order=values.get(SLASH_DATE_ORDER_KEY, DEFAULT_SLASH_DATE_ORDER),
        )
