"""Structured logging for kubescope, built on structlog.

Output goes to stderr so a caller printing listed objects on stdout keeps a
clean stream.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

# Libraries that log through the stdlib and get chatty at DEBUG.
_NOISY_LOGGERS = ("kubernetes_asyncio", "aiohttp", "urllib3")


def setup_logging(level: str = "info", stream: TextIO | None = None) -> None:
    """Configure structlog to emit one JSON object per line.

    Each event carries ``level``, an ISO-8601 UTC ``ts`` and the
    ``component`` bound by :func:`get_logger`.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=True,
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Return a logger bound with ``component`` (for example ``client.lister``)."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]
