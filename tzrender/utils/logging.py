"""
Central logging configuration for tzrender.

Library modules only create module-level loggers; this module is used by the
command-line entry point (and by applications that want the same setup) to
install a handler and pick levels.
"""

import logging
import os
from typing import Optional

LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(name)s - %(message)s"

TZRENDER_MODULES = [
    "tzrender",
    "tzrender.converter",
    "tzrender.parsing",
    "tzrender.timezone",
    "tzrender.config",
]


def configure_logging(
    debug_mode: bool = False,
    force_debug: Optional[bool] = None,
    level: Optional[str] = None,
) -> None:
    """
    Configure logging levels for tzrender.

    Args:
        debug_mode: Whether to enable debug logging for tzrender modules
        force_debug: Override debug mode setting (None to use env var detection)
        level: Root log level name from configuration (env var still wins)

    Environment Variables:
        TZRENDER_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        TZRENDER_LOG_LEVEL: Override root log level (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("TZRENDER_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = os.getenv("TZRENDER_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    root_level = logging.DEBUG if final_debug else logging.INFO
    if not final_debug and level and level.upper() in ("DEBUG", "INFO", "WARNING", "ERROR"):
        root_level = getattr(logging, level.upper())
    if env_log_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
        root_level = getattr(logging, env_log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)

    # Keep handlers an embedding application already installed
    if not root_logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(root_level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)

    module_level = logging.DEBUG if final_debug else root_level
    for module in TZRENDER_MODULES:
        logging.getLogger(module).setLevel(module_level)

    root_logger.debug("tzrender logging configured (debug=%s)", final_debug)


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for logger_name in TZRENDER_MODULES:
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)
    return status
