"""Logging configuration for the command line entry point."""

import logging
import sys
from typing import Optional

from .constants import Constants


def configure_logging(level: str = Constants.DEFAULT_LOG_LEVEL, logfile: Optional[str] = None) -> None:
    """Route log records to ``logfile`` or stderr.

    Stdout is reserved for the check response, so the console handler always
    writes to stderr.
    """
    handler: logging.Handler
    if logfile:
        handler = logging.FileHandler(logfile, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def is_debug_enabled(logger: logging.Logger) -> bool:
    return logger.isEnabledFor(logging.DEBUG)
