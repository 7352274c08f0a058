"""Command-line argument parsing for tzrender."""

import argparse
from typing import Union


def parse_epoch(value: str) -> Union[int, float]:
    """Parse a command-line epoch value.

    Raises:
        argparse.ArgumentTypeError: If the value is not numeric.
    """
    try:
        return float(value) if "." in value else int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid epoch value: {value!r}") from e


def _add_conversion_options(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument("--tz", dest="timezone", help="Target timezone (IANA identifier)")
    subparser.add_argument("--format", dest="fmt", help="strftime format string")
    subparser.add_argument(
        "--db-tz", dest="db_timezone", help="Timezone that naive timestamps are stored in"
    )
    subparser.add_argument(
        "--epoch",
        action="store_true",
        help="Treat timestamps as Unix epoch seconds instead of strings",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser.

    Returns:
        argparse.ArgumentParser with convert, batch, zones and check commands

    Example:
        >>> parser = create_parser()
        >>> args = parser.parse_args(["convert", "2024-01-15T14:30:00Z", "--tz", "Asia/Tokyo"])
        >>> args.timezone
        'Asia/Tokyo'
    """
    parser = argparse.ArgumentParser(
        prog="tzrender",
        description="tzrender - convert stored timestamps into a viewer's timezone",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s convert "2024-01-15T14:30:00Z" --tz America/Los_Angeles
  %(prog)s convert 1705329000 --epoch --tz Europe/London
  %(prog)s batch "2024-01-15 14:30:00" "2024-01-15 15:45:00" --tz Europe/Paris
  %(prog)s zones --prefix Europe/
  %(prog)s check Asia/Tokyo
        """,
    )
    parser.add_argument("--config", type=str, help="Path to YAML configuration file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_parser = subparsers.add_parser("convert", help="Convert a single timestamp")
    convert_parser.add_argument("timestamp", help="Timestamp to convert")
    _add_conversion_options(convert_parser)

    batch_parser = subparsers.add_parser(
        "batch", help="Convert several timestamps; fails on the first bad one"
    )
    batch_parser.add_argument("timestamps", nargs="+", help="Timestamps to convert")
    _add_conversion_options(batch_parser)

    zones_parser = subparsers.add_parser("zones", help="List available timezones")
    zones_parser.add_argument("--prefix", default="", help="Only list identifiers with this prefix")

    check_parser = subparsers.add_parser("check", help="Check whether a timezone is valid")
    check_parser.add_argument("timezone", help="Timezone identifier to check")

    return parser
