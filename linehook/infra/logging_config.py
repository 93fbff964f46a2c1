"""Logging setup shared by the linehook modules."""

from __future__ import annotations

import logging
from typing import Optional

ROOT_LOGGER_NAME = "linehook"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def configure_logging(level: str = "INFO") -> None:
    """
    Attach a stream handler to the linehook logger.

    Call once at startup (LineBot.listen does it). Replaces handlers set by a
    previous call so repeated calls do not duplicate output.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: {level}. Valid: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level_upper)
    root.handlers = [handler]


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the linehook logger, or a child of it when name is given."""
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(f"{ROOT_LOGGER_NAME}.") or name == ROOT_LOGGER_NAME:
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
