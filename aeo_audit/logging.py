"""Structured logging configuration.

The engine never configures logging on import. Applications call
setup_logging() once; until then structlog's defaults apply.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TextIO

import structlog

from aeo_audit.config import Settings, get_settings


def _renderer(settings: Settings) -> Any:
    if settings.is_production:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=not settings.is_test,
        exception_formatter=structlog.dev.plain_traceback,
    )


def setup_logging(settings: Settings | None = None, stream: TextIO = sys.stderr) -> None:
    """
    Configure structlog for the audit engine.

    Args:
        settings: Settings to read env and log level from; defaults to the cached ones
        stream: Where log lines are written
    """
    settings = settings or get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            _renderer(settings),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=stream, level=log_level)

    # bs4 warns on markup that looks like a filename or URL
    logging.getLogger("bs4").setLevel(logging.ERROR)


@contextmanager
def audit_context(url: str, **values: Any) -> Iterator[None]:
    """
    Bind the audited URL to every log line emitted inside the block.

    Worker threads started with asyncio.to_thread inherit the binding.
    """
    with structlog.contextvars.bound_contextvars(audit_url=url, **values):
        yield


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)
