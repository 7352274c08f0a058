"""Rendering of timezone-aware datetimes to text."""

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from .exceptions import FormattingError

logger = logging.getLogger(__name__)

RenderFunc = Callable[[datetime, str], str]


def strftime_renderer(instant: datetime, fmt: str) -> str:
    """Render with ``datetime.strftime``."""
    return instant.strftime(fmt)


class Formatter:
    """Renders datetimes, converting renderer faults into FormattingError."""

    def __init__(self, renderer: Optional[RenderFunc] = None) -> None:
        self.renderer = renderer or strftime_renderer

    def render(self, instant: datetime, fmt: Any) -> str:
        """Render an instant with a strftime-style format string.

        Raises:
            FormattingError: If the renderer raises for any reason.
        """
        try:
            return self.renderer(instant, fmt)
        except Exception as e:
            logger.debug("Rendering %s with %r failed: %s", instant.isoformat(), fmt, e)
            raise FormattingError(f"{type(e).__name__}: {e}", raw=fmt) from e
