"""Utility helpers for tzrender."""

from .logging import configure_logging, get_logging_status

__all__ = ["configure_logging", "get_logging_status"]
