"""Logging utilities shared by the map and puzzle engines."""

from __future__ import annotations

import logging
from typing import IO, Optional


PACKAGE_LOGGER = "warword"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


class _WarwordHandler(logging.StreamHandler):
    """Marker type so reconfiguring only replaces handlers installed here."""


def configure_logging(level: int = logging.INFO, stream: Optional[IO[str]] = None) -> logging.Logger:
    """Attach a formatted stream handler to the ``warword`` package logger.

    The host application's root logger is left alone. Calling this again
    swaps the previous warword handler for a new one, so tests and hosts can
    redirect output or change the level at any time. Chaos ticks are never
    logged; word selections, board renders and map redraws go out at DEBUG.
    """

    handler = _WarwordHandler(stream)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in [h for h in logger.handlers if isinstance(h, _WarwordHandler)]:
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``warword`` namespace, configuring defaults once."""

    package = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(h, _WarwordHandler) for h in package.handlers):
        configure_logging()
    if not name or name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name or PACKAGE_LOGGER)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
