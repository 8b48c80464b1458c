"""
acc16emu — Logging Setup

Library modules only create loggers (logging.getLogger(__name__)); the
CLI calls setup_logging() once to attach handlers to the package logger.

  Console: rich.logging.RichHandler (WARNING+ by default)
  File:    optional, everything DEBUG+, <log_dir>/acc16emu_YYYYMMDD_HHMMSS.log
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

from .config import (
    LOGGER_NAME, FILE_LOG_FORMAT, CONSOLE_LOG_FORMAT, LOG_DATE_FORMAT,
)


def setup_logging(
    name: str = LOGGER_NAME,
    level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
    log_dir: Optional[Path] = None,
    rich_console: bool = True,
) -> logging.Logger:
    """Configure and return the package logger.

    Calling it again replaces the handlers from the previous call.
    """
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)

    # ── File handler: captures everything (DEBUG+) ──
    log_file = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"{name}_{ts}.log"
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(fh)

    # ── Console handler ──
    if rich_console:
        ch = RichHandler(
            level=console_level,
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
        )
    else:
        ch = logging.StreamHandler(sys.stderr)
        ch.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT, datefmt="%H:%M:%S"))
    ch.setLevel(console_level)
    logger.addHandler(ch)

    if log_file is not None:
        logger.info("Log file: %s", log_file)

    return logger
