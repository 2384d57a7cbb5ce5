"""Logging for the bot — structlog, one logger per component.

Every module asks for its logger with ``get_logger("<component>")``. Log lines
go to stderr so ``placement-bot check`` output on stdout stays clean, and every
event carries ``service`` plus, during a dispatch, the ``message_id``.
"""

from __future__ import annotations

import sys
from typing import TextIO

import structlog

from placement_bot.config import settings

SERVICE_NAME = "ju-placement-bot"

_LEVELS = {"debug": 10, "info": 20, "warning": 30, "warn": 30, "error": 40, "critical": 50}


def _add_service(logger, method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def setup_logging(
    level: str | None = None,
    log_format: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog; arguments default to ``settings.log_level`` / ``log_format``.

    ``json`` is for the deployed bot (one object per line), anything else
    renders for a terminal.
    """
    log_format = log_format or settings.log_format
    stream = stream or sys.stderr

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            _add_service,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _LEVELS.get((level or settings.log_level).lower(), 20)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def get_logger(component: str):
    """Lazy logger bound to *component*; resolves the configuration on first use."""
    return structlog.get_logger(component=component)
