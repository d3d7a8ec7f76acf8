"""Centralized logging configuration for summitt.

Report rows are written to stdout, so every log record goes to stderr.
"""

import logging
import sys
from typing import Optional

# Flag to track if we've already set up the root logger
_ROOT_LOGGER_CONFIGURED = False

#: Level names accepted on the command line, most verbose first.
LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Set up the root summitt logger with a single handler.

    This should only be called once to avoid duplicate handlers.

    Args:
        level: Logging level (default: INFO).
        format_string: Custom format string (optional).
        handler: Custom handler (optional, defaults to a stderr StreamHandler).
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger("summitt")
    root_logger.setLevel(level)

    root_logger.handlers.clear()

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # stdout carries report rows only
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)

    formatter = logging.Formatter(format_string)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Let logs propagate to root logger so pytest can capture them
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger that inherits the package root configuration.

    Args:
        name: Logger name (typically __name__ from calling module).

    Returns:
        Configured logger instance.
    """
    setup_root_logger()

    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)  # Inherit from parent

    return logger


def set_global_log_level(level: int) -> None:
    """Set the log level for all summitt loggers.

    Args:
        level: Logging level (e.g., logging.DEBUG, logging.WARNING).
    """
    setup_root_logger()

    root_logger = logging.getLogger("summitt")
    root_logger.setLevel(level)

    for handler in root_logger.handlers:
        handler.setLevel(level)


def set_log_level_by_name(name: str) -> int:
    """Set the global level from a CLI name (``debug``, ``info``, ``warning``, ``error``).

    Returns:
        The numeric level that was applied.

    Raises:
        ValueError: If the name is not one of ``LOG_LEVELS``.
    """
    try:
        level = LOG_LEVELS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Invalid log level '{name}'. Valid values are: {', '.join(LOG_LEVELS)}"
        ) from None
    set_global_log_level(level)
    return level


def reset_logging() -> None:
    """Reset logging configuration (mainly for testing)."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger("summitt")
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
