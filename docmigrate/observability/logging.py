"""Structured logging configuration using structlog.

Migration runs are usually launched from a deploy job or a terminal, so
output is JSON lines by default and a console renderer on request.  Events
of a run carry the target database and ledger collection through
structlog's contextvars.
"""

from __future__ import annotations

import logging
import sys
from contextlib import AbstractContextManager

import structlog


def setup_logging(level: str = "info", *, json_output: bool = True) -> None:
    """Configure structlog output to stderr."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def bind_run_context(database: str, collection: str) -> AbstractContextManager[None]:
    """Attach the run's target to log events emitted inside the ``with`` block.

    Context bound by the host before the block is restored on exit.
    """
    return structlog.contextvars.bound_contextvars(database=database, ledger=collection)


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]
