"""
logger.py
=========
Logging setup for hand_pointer: console output plus an optional rotating log
file. Modules log through `logging.getLogger(__name__)`, which places them
under the "hand_pointer" logger configured here.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

LOGGER_NAME = "hand_pointer"
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 3


def setup_logging(debug: bool = False, log_file: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.handlers.clear()

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(fmt)
    logger.addHandler(console)

    if log_file:
        file_handler = RotatingFileHandler(log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)
        logger.debug("Logging to file: %s", log_file)

    return logger
