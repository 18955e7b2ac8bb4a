"""Structured logging setup using structlog.

The library only emits events; the host decides where they go. Transactions
log at ``debug`` (``input_masked``, ``value_committed``, ``key_suppressed``)
and clamping at commit logs at ``info`` (``value_clamped``).
"""

from __future__ import annotations

import logging
import sys

import structlog

from number_mask.config import get_settings


def setup_logging(log_level: str | None = None, *, json_output: bool = True):
    """Configure structlog output to stdout.

    *log_level* defaults to ``NUMBER_MASK_LOG_LEVEL``. Pass
    ``json_output=False`` for human-readable lines in interactive tools.
    """
    level_name = (log_level or get_settings().log_level).upper()
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level_name)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a bound logger for the given component *name*."""
    return structlog.get_logger(name)
