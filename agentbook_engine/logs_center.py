"""
Logging setup for AgentBook.

All loggers are children of the ``"agentbook"`` logger. :func:`init_logging`
attaches handlers without duplicating them; engine modules only call :func:`get_logger`.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

ROOT_LOGGER_NAME = "agentbook"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def init_logging(level: int | str = logging.INFO, log_file: Path | None = None) -> logging.Logger:
    """
    Configure and return the application root logger.

    Parameters
    ----------
    level:
        Logging level, as an int or a level name such as ``"DEBUG"``.
    log_file:
        Optional path to a log file. If None, logs go to stderr only.

    Returns
    -------
    logging.Logger
        The ``"agentbook"`` logger.

    Notes
    -----
    The stderr handler is attached on the first call only. A later call adds a
    file handler for any ``log_file`` not already being written to.
    """
    log = logging.getLogger(ROOT_LOGGER_NAME)
    log.setLevel(level)
    fmt = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    if not log.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(fmt)
        log.addHandler(h)

    if log_file is not None:
        log_file = Path(log_file)
        target = os.path.abspath(log_file)
        attached = {
            h.baseFilename for h in log.handlers if isinstance(h, logging.FileHandler)
        }
        if target not in attached:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(log_file, encoding="utf-8")
            fh.setFormatter(fmt)
            log.addHandler(fh)

    return log


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``"agentbook"`` hierarchy."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
