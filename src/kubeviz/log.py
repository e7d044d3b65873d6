"""Structured logging configuration using structlog."""

from __future__ import annotations

import logging
import sys

import structlog

ROOT_LOGGER = "kubeviz"


def setup_logging(level: str = "warning") -> None:
    """
    Configure structlog for human-readable output to stderr.

    Events go through the stdlib ``kubeviz`` logger. Without this call that
    logger has no handler, so only warnings and above reach stderr through
    the logging module's last resort handler.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger(ROOT_LOGGER)
    root.handlers = [handler]
    root.setLevel(log_level)
    root.propagate = False

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """
    Get a logger bound with a component name.

    The event is handed to ``logging.getLogger(component)``; components are
    named below ``kubeviz``.
    """
    return structlog.wrap_logger(  # type: ignore[return-value]
        logging.getLogger(component),
        wrapper_class=structlog.stdlib.BoundLogger,
        component=component,
    )
