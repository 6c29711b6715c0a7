"""Logging setup for the tagger command line."""

from __future__ import annotations

import logging
from logging import Logger


def configure_logging(level: int | str = logging.WARNING, *, name: str = "image_tagger") -> Logger:
    """Send the tagger's log records to stderr at ``level``.

    Parameters
    ----------
    level: int | str
        Numeric level or a level name such as ``"debug"``.
    name: str
        Root of the logger namespace to configure; records stop there instead
        of reaching the host application's root logger.
    """

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"unknown log level {level!r}")
        level = resolved

    logger = logging.getLogger(name)
    if not any(isinstance(existing, logging.StreamHandler) for existing in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
