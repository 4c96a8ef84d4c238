"""structlog setup for the timer.

Events are snake_case names with keyword context, e.g.
log.info("status_changed", status="active", period="1교시").
Output goes to stderr: stdout belongs to the CLI's status lines and JSON.
"""

import logging
import sys
from typing import TextIO

import structlog


def _processors(json_output: bool) -> list:
    chain = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if json_output:
        chain.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        chain.append(structlog.dev.ConsoleRenderer())
    return chain


def _route_stdlib(level: int, stream: TextIO) -> None:
    """Send records from stdlib loggers (pydantic-settings, asyncio) to the same stream."""
    root = logging.getLogger()
    root.handlers = [logging.StreamHandler(stream)]
    root.setLevel(level)


def setup_logging(
    json_output: bool = False,
    log_level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Configure structlog for the CLI.

    Args:
        json_output: JSON lines when True, colored console lines otherwise.
        log_level: Minimum level name; unknown names fall back to INFO.
        stream: Destination (default: stderr).
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    stream = stream or sys.stderr

    structlog.configure(
        processors=_processors(json_output),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )
    _route_stdlib(level, stream)


def get_logger(name: str) -> structlog.BoundLogger:
    """Module-level logger; call as get_logger(__name__)."""
    return structlog.get_logger(name)
