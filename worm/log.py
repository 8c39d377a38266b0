"""worm logging configuration.

Centralised logger setup. All modules import from here:
    from worm.log import logger

Every process in the tree logs its fork and detach steps, tagged with its
PID, to ~/.worm/worm.log (rotating, 5 MB max, 3 backups). Warnings also go
to stderr as "worm: <message>"; that is the only console output the fixture
produces.
"""

from __future__ import annotations

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler

from worm.config import LOG_DIR

LOG_FILE = LOG_DIR / "worm.log"

_logger_lock = threading.Lock()


def _warn_handler() -> logging.Handler:
    """stderr handler in the shape of warn(3)."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.WARNING)
    handler.setFormatter(logging.Formatter("worm: %(message)s"))
    return handler


def _file_handler() -> logging.Handler:
    """Rotating debug log; a NullHandler when ~/.worm is not writable."""
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            str(LOG_FILE),
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=3,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"worm: {LOG_FILE}: {e.strerror}, file logging disabled\n")
        return logging.NullHandler()

    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s.%(funcName)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    return handler


def _setup_logger() -> logging.Logger:
    log = logging.getLogger("worm")

    with _logger_lock:
        if not log.handlers:
            log.setLevel(logging.DEBUG)
            log.propagate = False
            log.addHandler(_warn_handler())
            log.addHandler(_file_handler())

    return log


logger = _setup_logger()
