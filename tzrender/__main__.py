"""Entry point for `python -m tzrender` and the `tzrender` console script."""

import sys

from tzrender.cli import main_entry


def main() -> None:
    """Run the CLI and exit with its status code."""
    try:
        sys.exit(main_entry())
    except KeyboardInterrupt:
        print("Operation cancelled by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
