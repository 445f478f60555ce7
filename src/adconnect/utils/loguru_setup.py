#!/usr/bin/env python3
"""Loguru-based logging for adconnect.

The package logs through a single wrapper around loguru so that the log level,
file output and colors can be controlled from one place.

Basic Usage Examples:
    from adconnect.utils.loguru_setup import logger

    logger.configure_level("DEBUG")
    logger.debug("Dispatching GET https://example.com")

Environment Variables:
    ADC_LOG_LEVEL: Global log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    ADC_LOG_FILE: Optional log file path for file output
    ADC_DISABLE_COLORS: Set to "true" to disable colored output
"""

import logging
import os
import sys
from pathlib import Path

from loguru import logger as _loguru_logger

_loguru_logger.remove()

DEFAULT_LOG_LEVEL = os.getenv("ADC_LOG_LEVEL", "ERROR").upper()
LOG_FILE = os.getenv("ADC_LOG_FILE")
DISABLE_COLORS = os.getenv("ADC_DISABLE_COLORS", "false").lower() == "true"

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

SIMPLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"

_LEVEL_NAMES = {10: "DEBUG", 20: "INFO", 30: "WARNING", 40: "ERROR", 50: "CRITICAL"}
_LEVEL_HIERARCHY = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class FacadeLogger:
    """Thin wrapper around loguru with environment-driven configuration."""

    def __init__(self) -> None:
        self._current_level = DEFAULT_LOG_LEVEL
        self._log_file = LOG_FILE
        self._disable_colors = DISABLE_COLORS
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Rebuild the loguru handlers from the current settings."""
        _loguru_logger.remove()

        format_template = SIMPLE_FORMAT if self._disable_colors else LOG_FORMAT

        _loguru_logger.add(
            sys.stderr,
            level=self._current_level,
            format=format_template,
            colorize=not self._disable_colors,
            backtrace=True,
            diagnose=False,
        )

        if self._log_file:
            log_path = Path(self._log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            _loguru_logger.add(
                str(log_path),
                level=self._current_level,
                format=SIMPLE_FORMAT,
                rotation="10 MB",
                retention="1 week",
                compression="zip",
                backtrace=True,
                diagnose=False,
            )

    def configure_level(self, level: str | int) -> "FacadeLogger":
        """Configure the log level.

        Args:
            level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL) or
                its numeric stdlib value

        Returns:
            Self for method chaining
        """
        if isinstance(level, int):
            level = _LEVEL_NAMES.get(level, "INFO")
        self._current_level = level.upper()
        self._setup_logger()
        return self

    def configure_file(self, log_file: str | Path | None) -> "FacadeLogger":
        """Configure file logging, or disable it with ``None``."""
        self._log_file = str(log_file) if log_file else None
        self._setup_logger()
        return self

    def disable_colors(self, disable: bool = True) -> "FacadeLogger":
        """Enable or disable colored console output."""
        self._disable_colors = disable
        self._setup_logger()
        return self

    def debug(self, message: str, *args, **kwargs):
        _loguru_logger.opt(depth=1).debug(message, *args, **kwargs)
        return self

    def info(self, message: str, *args, **kwargs):
        _loguru_logger.opt(depth=1).info(message, *args, **kwargs)
        return self

    def warning(self, message: str, *args, **kwargs):
        _loguru_logger.opt(depth=1).warning(message, *args, **kwargs)
        return self

    def error(self, message: str, *args, **kwargs):
        _loguru_logger.opt(depth=1).error(message, *args, **kwargs)
        return self

    def exception(self, message: str, *args, **kwargs):
        """Log an error message with the active exception's traceback."""
        _loguru_logger.opt(depth=1, exception=True).error(message, *args, **kwargs)
        return self

    def getEffectiveLevel(self) -> str:
        """Get the effective log level."""
        return self._current_level

    def isEnabledFor(self, level: str | int) -> bool:
        """Check if logging is enabled for the given level."""
        if isinstance(level, int):
            level = _LEVEL_NAMES.get(level, "INFO")
        current_index = _LEVEL_HIERARCHY.index(self._current_level)
        return _LEVEL_HIERARCHY.index(level.upper()) >= current_index

    def opt(self, **kwargs):
        """Configure loguru options (exception, depth, lazy) for one call."""
        return _loguru_logger.opt(**kwargs)

    def bind(self, **kwargs):
        """Bind additional context to the underlying loguru logger."""
        return _loguru_logger.bind(**kwargs)


logger = FacadeLogger()


def configure_level(level: str) -> None:
    """Configure the global logger level."""
    logger.configure_level(level)


def configure_file(log_file: str | Path | None) -> None:
    """Configure global file logging."""
    logger.configure_file(log_file)


def disable_colors(disable: bool = True) -> None:
    """Enable or disable colored output globally."""
    logger.disable_colors(disable)


def suppress_http_logging(suppress: bool = True) -> None:
    """Control HTTP library logging globally.

    httpx and httpcore log through the standard library, so their levels are
    set on the stdlib loggers directly.

    Args:
        suppress: If True, set to WARNING (quiet). If False, set to DEBUG (verbose).
    """
    level = logging.WARNING if suppress else logging.DEBUG
    for logger_name in ("httpcore", "httpx"):
        logging.getLogger(logger_name).setLevel(level)
