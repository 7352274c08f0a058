"""
Timezone package for tzrender.

Provides the timezone database collaborator: identifier listing and
validation, anchoring naive local times and shifting instants between zones.

Example usage:
    >>> from datetime import datetime
    >>> from tzrender.timezone import get_timezone_database
    >>>
    >>> db = get_timezone_database()
    >>> db.is_valid("Europe/Paris")
    True
    >>> db.anchor(datetime(2024, 1, 15, 14, 30), "Europe/Paris").tzname()
    'CET'
"""

from .service import (
    TimezoneDatabase,
    TimezoneError,
    available_timezones_list,
    get_timezone_database,
    is_valid_timezone,
)

__all__ = [
    "TimezoneDatabase",
    "TimezoneError",
    "available_timezones_list",
    "get_timezone_database",
    "is_valid_timezone",
]
