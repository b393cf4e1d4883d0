# dirvec/logging/logger.py
"""
Central logger factory.

All modules call get_logger(__name__). The CLI calls configure_logging()
once per invocation to attach a stderr handler to the package root logger;
library users that never call it keep full control over routing.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "dirvec"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_handler: Optional[logging.StreamHandler] = None


def _to_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def configure_logging(level: str | int = "WARNING") -> None:
    """
    Attach a stderr handler to the dirvec root logger and set its level.

    Safe to call repeatedly: the previous handler is replaced by one bound
    to the current sys.stderr.
    """
    global _handler

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(_to_level(level))

    if _handler is not None:
        root.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(_handler)


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the dirvec namespace."""
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
