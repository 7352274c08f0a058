"""CLI module for tzrender.

Thin command-line wrapper around ``TimestampConverter``: every command
builds a converter from the loaded settings and prints results to stdout and
errors to stderr.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import yaml

from ..config.settings import load_settings
from ..converter import TimestampConverter
from ..exceptions import ConversionError
from ..models import ConversionResult
from ..utils.logging import configure_logging
from .parser import create_parser, parse_epoch

logger = logging.getLogger(__name__)


def _build_converter(args: argparse.Namespace) -> TimestampConverter:
    config_file = Path(args.config) if args.config else None
    overrides: dict[str, Any] = {}
    if getattr(args, "db_timezone", None):
        overrides["default_db_timezone"] = args.db_timezone
    settings = load_settings(config_file, **overrides)
    configure_logging(
        debug_mode=args.debug or settings.logging.debug, level=settings.logging.level
    )
    return TimestampConverter.from_settings(settings)


def _timestamps(args: argparse.Namespace) -> list[Any]:
    raw_values = [args.timestamp] if args.command == "convert" else list(args.timestamps)
    if args.epoch:
        return [parse_epoch(value) for value in raw_values]
    return raw_values


def _report(result: ConversionResult[Any]) -> int:
    if result.error is not None:
        print(f"error [{result.error.kind}]: {result.error.message}", file=sys.stderr)
        return 1
    values = result.value if isinstance(result.value, list) else [result.value]
    for value in values:
        print(value)
    return 0


def main_entry(argv: Optional[list[str]] = None) -> int:
    """Main entry point with argument parsing.

    Returns:
        Exit code (0 for success, 1 for conversion or configuration failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    values: list[Any] = []
    if args.command in ("convert", "batch"):
        try:
            values = _timestamps(args)
        except argparse.ArgumentTypeError as e:
            parser.error(str(e))

    try:
        converter = _build_converter(args)
    except ConversionError as e:
        # A configured custom format was rejected
        print(f"error [{e.kind}]: {e.message}", file=sys.stderr)
        return 1
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.debug("Configuration loading failed", exc_info=True)
        print(f"error [config]: {e}", file=sys.stderr)
        return 1

    if args.command == "convert":
        return _report(converter.convert(values[0], args.timezone, args.fmt))

    if args.command == "batch":
        return _report(converter.convert_batch(values, args.timezone, args.fmt))

    if args.command == "zones":
        for identifier in converter.available_timezones():
            if identifier.startswith(args.prefix):
                print(identifier)
        return 0

    if converter.valid_timezone(args.timezone):
        print(f"{args.timezone}: valid")
        return 0
    print(f"{args.timezone}: invalid", file=sys.stderr)
    return 1


__all__ = ["create_parser", "main_entry", "parse_epoch"]
