"""Logger helpers for metabexplorer.

Modules get their logger with ``get_logger(__name__)`` and never install
handlers. Only the explorer app (or a script driving the pages) calls
``configure_logging()``, which attaches one stderr handler to the
``metabexplorer`` logger and leaves the root logger alone. Nothing is
written to disk.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "metabexplorer"
LOG_LEVEL_ENV = "METABEXPLORER_LOG_LEVEL"


def _is_stderr_handler(handler: logging.Handler) -> bool:
    return isinstance(handler, logging.StreamHandler) and handler.stream is sys.stderr


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """Attach a stderr handler to the metabexplorer logger.

    Args:
        level: Level name or number. Falls back to METABEXPLORER_LOG_LEVEL,
            then INFO. Unknown names also give INFO.
        fmt: Record format; DEFAULT_FMT when None.
        datefmt: Timestamp format; DEFAULT_DATEFMT when None.
        force: Drop the logger's existing handlers first. Without it a second
            call is a no-op once a stderr handler is attached.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    if force:
        for h in list(logger.handlers):
            h.close()
            logger.removeHandler(h)
    elif any(_is_stderr_handler(h) for h in logger.handlers):
        return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT))
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for name; the package logger when name is None."""
    if name is None:
        name = ROOT_LOGGER_NAME
    return logging.getLogger(name)
