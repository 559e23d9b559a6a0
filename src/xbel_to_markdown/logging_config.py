"""Logging configuration for the converter.

The console only shows short warnings unless ``--verbose`` is given, since the
CLI already prints a notice after every run. The optional log file keeps the
full history in the format from settings, which is where ``watch`` runs are
best followed.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from xbel_to_markdown.config import Settings

PACKAGE_LOGGER = "xbel_to_markdown"


class ConsoleFormatter(logging.Formatter):
    """Formats records as ``<TAG> message`` with a four-letter level tag."""

    TAGS = {
        logging.DEBUG: "DEBG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERRR",
        logging.CRITICAL: "CRIT",
    }

    def format(self, record: logging.LogRecord) -> str:
        tag = self.TAGS.get(record.levelno, record.levelname)
        return f"{tag} {super().format(record)}"


def resolve_level(name: str) -> int:
    """Map a level name to its number, falling back to INFO."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(settings: Settings, verbose: bool = False) -> logging.Logger:
    """Attach console and file handlers to the package logger.

    Earlier handlers are closed and replaced, so calling this again (for
    example after ``config set``) doesn't duplicate output.

    Args:
        settings: Application settings containing logging config.
        verbose: If True, log at DEBUG and show everything on the console.

    Returns:
        The configured package logger.
    """
    log_settings = settings.logging
    level = logging.DEBUG if verbose else resolve_level(log_settings.level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(ConsoleFormatter("%(message)s"))
    logger.addHandler(console_handler)

    if log_settings.file:
        log_path = Path(log_settings.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(log_settings.format))
        logger.addHandler(file_handler)

    return logger
