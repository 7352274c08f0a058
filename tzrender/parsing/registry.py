"""Runtime registry of custom string timestamp formats."""

import inspect
import logging
import re
import threading
from dataclasses import dataclass
from typing import Any, Callable, Union

from ..exceptions import InvalidCustomFormatError
from .builtin import SHIPPED_PARSERS

logger = logging.getLogger(__name__)

CustomParserFunc = Callable[[str, "re.Pattern[str]"], Any]


@dataclass(frozen=True)
class FormatEntry:
    """A registered (pattern, parser) pair."""

    pattern: "re.Pattern[str]"
    parser: CustomParserFunc

    @property
    def name(self) -> str:
        return getattr(self.parser, "__name__", type(self.parser).__name__)

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def _compile_pattern(pattern: Union[str, "re.Pattern[str]"]) -> "re.Pattern[str]":
    if isinstance(pattern, re.Pattern):
        if not isinstance(pattern.pattern, str):
            raise InvalidCustomFormatError("Custom format pattern must be a text pattern, not bytes")
        return pattern
    if not isinstance(pattern, str):
        raise InvalidCustomFormatError(
            f"Custom format pattern must be a regex or string, got {type(pattern).__name__}",
            raw=pattern,
        )
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidCustomFormatError(f"Invalid custom format pattern {pattern!r}: {e}", raw=pattern) from e


def _check_parser_arity(parser: Any) -> None:
    """Require a callable accepting exactly (text, pattern).

    Raises:
        InvalidCustomFormatError: If the parser has a different signature.
    """
    if not callable(parser):
        raise InvalidCustomFormatError(
            f"Custom parser must be callable, got {type(parser).__name__}", raw=parser
        )
    try:
        signature = inspect.signature(parser)
    except (TypeError, ValueError) as e:
        raise InvalidCustomFormatError(f"Cannot inspect custom parser {parser!r}: {e}", raw=parser) from e

    try:
        signature.bind("text", "pattern")
    except TypeError as e:
        raise InvalidCustomFormatError(
            f"Custom parser must accept (text, pattern): {signature}", raw=parser
        ) from e

    try:
        signature.bind("text", "pattern", "extra")
    except TypeError:
        return
    raise InvalidCustomFormatError(
        f"Custom parser must accept exactly two arguments: {signature}", raw=parser
    )


class FormatRegistry:
    """Ordered, append-only list of custom string formats.

    The most recently registered entry is tried first. Entries are held in an
    immutable tuple which is swapped under a lock on registration, so readers
    always see a complete list without taking the lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: tuple[FormatEntry, ...] = ()

    def register(self, pattern: Union[str, "re.Pattern[str]"], parser: CustomParserFunc) -> FormatEntry:
        """Add a custom format in front of all existing ones.

        Args:
            pattern: Regex (or regex source) the trimmed string must match.
            parser: Callable invoked as ``parser(text, pattern)``; returns a
                datetime or date, or None / raises when it cannot parse.

        Returns:
            The stored entry.

        Raises:
            InvalidCustomFormatError: If the pattern does not compile or the
                parser does not take exactly (text, pattern).
        """
        try:
            compiled = _compile_pattern(pattern)
            _check_parser_arity(parser)
        except InvalidCustomFormatError as e:
            logger.warning("Rejected custom format registration: %s", e.message)
            raise
        entry = FormatEntry(pattern=compiled, parser=parser)

        with self._lock:
            if any(existing.pattern.pattern == compiled.pattern for existing in self._entries):
                logger.debug("Pattern %r already registered; newest entry takes precedence", compiled.pattern)
            self._entries = (entry, *self._entries)

        logger.debug("Registered custom format %r -> %s", compiled.pattern, entry.name)
        return entry

    def register_named(self, pattern: Union[str, "re.Pattern[str]"], parser_name: str) -> FormatEntry:
        """Register one of the parsers shipped with tzrender by name.

        Raises:
            InvalidCustomFormatError: If no shipped parser has that name.
        """
        parser = SHIPPED_PARSERS.get(parser_name)
        if parser is None:
            raise InvalidCustomFormatError(
                f"Unknown parser {parser_name!r}; available: {', '.join(sorted(SHIPPED_PARSERS))}",
                raw=parser_name,
            )
        return self.register(pattern, parser)

    def entries(self) -> tuple[FormatEntry, ...]:
        """Get a snapshot of all entries, most recent first."""
        return self._entries

    def matching(self, text: str) -> list[FormatEntry]:
        """Get entries whose pattern matches the text, most recent first."""
        return [entry for entry in self._entries if entry.matches(text)]

    def __len__(self) -> int:
        return len(self._entries)
