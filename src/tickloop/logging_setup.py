# src/tickloop/logging_setup.py

"""
Opt-in log output for hosts embedding tickloop.

Only the "tickloop" logger is touched; the host's root configuration is left alone.
Calling setup_logging() again replaces the handlers it installed before.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from .config import Settings, get_settings

LOGGER_NAME = "tickloop"
LOG_FILE_NAME = "tickloop.log"

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _TickloopHandlerMixin:
    """Marks handlers installed by setup_logging()."""


class _ConsoleHandler(_TickloopHandlerMixin, logging.StreamHandler):
    pass


class _FileHandler(_TickloopHandlerMixin, logging.FileHandler):
    pass


def setup_logging(
    *,
    level: int = logging.INFO,
    log_dir: str | Path | None = None,
    propagate: bool = False,
) -> logging.Logger:
    """
    Send tickloop records to stderr (and to <log_dir>/tickloop.log when given).

    propagate=False keeps records from being printed twice when the host also
    logs from the root logger.
    """
    logger = logging.getLogger(LOGGER_NAME)

    for h in list(logger.handlers):
        if isinstance(h, _TickloopHandlerMixin):
            logger.removeHandler(h)
            h.close()

    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    ch = _ConsoleHandler(sys.stderr)
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = _FileHandler(str(log_dir / LOG_FILE_NAME), encoding="utf-8")
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    logger.setLevel(level)
    logger.propagate = propagate
    return logger


def setup_logging_from_settings(settings: Settings | None = None) -> logging.Logger:
    """Same as setup_logging(), with level and directory taken from Settings."""
    if settings is None:
        settings = get_settings()

    level = logging.getLevelName(str(settings.log_level).upper())
    if not isinstance(level, int):
        level = logging.INFO

    return setup_logging(level=level, log_dir=settings.log_dir)
