"""Application logging helpers.

One stream handler per named logger, level taken from ``LOG_LEVEL``.
"""
from __future__ import annotations

import logging
import threading

from mangashelf import config as app_config

_LOCK = threading.Lock()
_CONFIGURED: set = set()


def get_logger(name: str = "mangashelf") -> logging.Logger:
    if name in _CONFIGURED:
        return logging.getLogger(name)
    with _LOCK:
        logger = logging.getLogger(name)
        if name in _CONFIGURED:
            return logger
        level = getattr(logging, app_config.log_level_name(), logging.INFO)
        logger.setLevel(level)
        if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("[mangashelf] %(asctime)s %(levelname)s %(name)s %(message)s"))
            logger.addHandler(handler)
        logger.propagate = False
        _CONFIGURED.add(name)
        return logger


__all__ = ["get_logger"]
