"""structlog configuration for the adpackage CLI and embedding services."""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(production: bool = False, log_level: str | None = None) -> None:
    """Configure structlog for production (JSON) or development (console).

    Production mode (*production=True*): JSON rendering at INFO level.
    Development mode: colored console rendering at DEBUG level.
    Output goes to stderr so command output on stdout stays parseable.

    Args:
        production: Enable production mode if ``True``.
        log_level: Optional level name (e.g. ``"WARNING"``) overriding the
            mode default.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if production:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        level = logging.INFO
    else:
        renderer = structlog.dev.ConsoleRenderer()
        level = logging.DEBUG

    if log_level:
        level = logging.getLevelNamesMapping().get(log_level.upper(), level)

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.bind_contextvars(service="adpackage")
