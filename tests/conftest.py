"""Shared fixtures for tzrender tests."""

import logging
import os
from collections.abc import Iterator
from datetime import date
from typing import Any

import pytest

from tzrender.config import settings as settings_module
from tzrender.config.store import ConfigStore
from tzrender.converter import TimestampConverter, set_default_converter
from tzrender.parsing.registry import FormatRegistry
from tzrender.timezone.service import TimezoneDatabase


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove TZRENDER_* variables and on-disk config so tests see defaults."""
    for key in list(os.environ):
        if key.upper().startswith("TZRENDER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(settings_module, "find_config_file", lambda: None)
    set_default_converter(None)
    yield
    set_default_converter(None)


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Restore root and tzrender logger state after a test reconfigures logging."""
    root = logging.getLogger()
    saved_level = root.level
    saved_handlers = list(root.handlers)
    saved_module_levels = {
        name: logging.getLogger(name).level
        for name in ("tzrender", "tzrender.converter", "tzrender.parsing", "tzrender.timezone", "tzrender.config")
    }
    yield
    for handler in list(root.handlers):
        if handler not in saved_handlers:
            root.removeHandler(handler)
    root.setLevel(saved_level)
    for name, level in saved_module_levels.items():
        logging.getLogger(name).setLevel(level)


@pytest.fixture(scope="session")
def tz_database() -> TimezoneDatabase:
    """Shared timezone database; instances are stateless."""
    return TimezoneDatabase()


@pytest.fixture
def registry() -> FormatRegistry:
    """Fresh, empty custom format registry."""
    return FormatRegistry()


@pytest.fixture
def config_store() -> ConfigStore:
    """Store with UTC defaults."""
    return ConfigStore({"default_db_timezone": "UTC", "default_user_timezone": "UTC"})


@pytest.fixture
def converter(
    config_store: ConfigStore, registry: FormatRegistry, tz_database: TimezoneDatabase
) -> TimestampConverter:
    """Converter wired to the fresh store and registry fixtures."""
    return TimestampConverter(config=config_store, registry=registry, tz_database=tz_database)


def date_parser(text: str, pattern: Any) -> date:
    """Custom parser for "YYYY|MM|DD" style patterns with three groups."""
    match = pattern.search(text)
    year, month, day = (int(group) for group in match.groups())
    return date(year, month, day)


@pytest.fixture
def pipe_date_parser():
    return date_parser


def pytest_configure(config: Any) -> None:
    """Register markers used across the suite."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Tests exercising the full pipeline")
