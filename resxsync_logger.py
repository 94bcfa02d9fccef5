# -*- coding: utf-8 -*-
"""
ResxSync Central Logging Module

Provides the standard logging configuration for the whole engine.
Log files are stored in ~/.resxsync/logs/.

Handlers are only configured on the root 'resxsync' logger.
Child loggers propagate to root and do not add handlers themselves.
"""

import logging
from pathlib import Path
from datetime import datetime

# Log directory
LOG_DIR = Path.home() / ".resxsync" / "logs"

# Log file name (dated)
LOG_FILE = LOG_DIR / f"resxsync_{datetime.now().strftime('%Y%m%d')}.log"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_root_configured = False


def _create_file_handler():
    """Return a DEBUG file handler, or None when the log directory is not writable."""
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
    except OSError:
        return None
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    return file_handler


def _configure_root_logger():
    """Configure the root 'resxsync' logger with handlers (once only)."""
    global _root_configured
    if _root_configured:
        return

    root_logger = logging.getLogger("resxsync")
    root_logger.setLevel(logging.DEBUG)

    # Prevent propagation to Python's root logger to avoid duplicates
    root_logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root_logger.addHandler(console_handler)

    file_handler = _create_file_handler()
    if file_handler is not None:
        root_logger.addHandler(file_handler)
    else:
        root_logger.warning(f"Log directory not writable, file logging disabled: {LOG_DIR}")

    _root_configured = True


_configure_root_logger()
logger = logging.getLogger("resxsync")


def get_logger(name: str) -> logging.Logger:
    """
    Return a child logger for a module.

    Child loggers do NOT add handlers - they propagate to the root 'resxsync' logger.

    Args:
        name: Module name, e.g. "models.resource_holder"

    Returns:
        Logger named resxsync.{name}
    """
    _configure_root_logger()
    return logging.getLogger(f"resxsync.{name}")
