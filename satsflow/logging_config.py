"""Structured logging configuration.

Events are logged as snake_case names with keyword fields. Amounts, rates and
quantities are never logged; only counts, row indices and error kinds.

Until an application calls ``configure_logging``, events are dropped instead
of going to structlog's default console output.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Configure structlog with JSON output.

    Args:
        level: Minimum level name, e.g. ``"INFO"`` or ``"DEBUG"``.
    """
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.PrintLoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        cache_logger_on_first_use=False,
    )


def configure_quiet_logging() -> None:
    """Render events into the void; the library default."""
    structlog.configure(logger_factory=structlog.ReturnLoggerFactory())


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.
    """
    return structlog.get_logger(name)


if not structlog.is_configured():
    configure_quiet_logging()
