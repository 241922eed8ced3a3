"""Observability layer: process-wide log setup shared by webhook, dialog and engine code."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")
_NOISY_LOGGERS = ("httpx", "httpcore")


def _coerce_level(level: str) -> str:
    normalized = (level or "").strip().upper()
    if normalized in logging.getLevelNamesMapping():
        return normalized
    return "INFO"


def setup_logging(level: str = "INFO") -> None:
    """Route bot and server logs through one single-line console handler."""
    normalized = _coerce_level(level)
    logging.basicConfig(level=normalized, format=LOG_FORMAT, force=True)
    for name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.setLevel(normalized)
        server_logger.propagate = True
    # Test client transport chatter drowns out webhook traces at DEBUG.
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
