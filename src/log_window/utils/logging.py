"""
Logging configuration for log-window.

Routes structlog events through the stdlib logging handlers so library users
that configure plain logging still receive window events.
"""

import logging
import sys

import structlog

from log_window.config import settings


def configure_logging(level: str | None = None, log_format: str | None = None) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Logging level name; defaults to ``settings.log_level``.
        log_format: ``json`` or ``console``; defaults to ``settings.log_format``.
    """
    level_name = (level or settings.log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    if (log_format or settings.log_format) == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    # Logs go to stderr; stdout carries CLI output.
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    logging.getLogger("asyncio").setLevel(logging.WARNING)

    structlog.contextvars.bind_contextvars(service="log-window")
