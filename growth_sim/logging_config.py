"""Logging configuration for the Cash-Cycle Growth Simulator.

Usage:
    from growth_sim.logging_config import configure_logging

    configure_logging("DEBUG")
"""

from __future__ import annotations

import logging
import os
import sys

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "growth_sim"


def resolve_level(level: str | None = None) -> str:
    """Pick the log level from the argument, then LOG_LEVEL, falling back to INFO."""
    raw = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return raw if raw in VALID_LOG_LEVELS else "INFO"


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Calling it again replaces the handler so it writes to the current
    ``sys.stderr``. The old stream is never flushed, it may already be closed.
    """
    log_level = getattr(logging, resolve_level(level))
    logger = logging.getLogger("growth_sim")
    logger.setLevel(log_level)

    for old in [h for h in logger.handlers if h.get_name() == _HANDLER_NAME]:
        logger.removeHandler(old)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT, datefmt=TIMESTAMP_FORMAT))
    handler.setLevel(log_level)
    logger.addHandler(handler)
    return logger
