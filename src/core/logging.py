"""
Structured logging for the catalog search service (structlog over stdlib).

configure_logging() runs once from the FastAPI lifespan. Modules then log
key/value events:

    logger = get_logger(__name__)
    logger.info("Search completed", total=42, time_ms=17)
    logger.warning("Category search failed", category="gemstone", error=str(e))

Development output is a coloured console line; production output is one JSON
object per line. Context bound with bind_context() (request id, path, search
text) is merged into every event until clear_context().
"""

import logging
import sys
from typing import Any, List, Optional

import structlog
from structlog.types import Processor

# Client libraries that log every HTTP round trip at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "hpack", "postgrest", "uvicorn.access")


def _processors(json_logs: bool, include_timestamp: bool) -> List[Processor]:
    processors: List[Processor] = []
    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    processors += [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_logs:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        ))
    return processors


def configure_logging(
    json_logs: bool = False,
    log_level: str = "INFO",
    include_timestamp: bool = True,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        json_logs: JSON lines (production) instead of console output
        log_level: Minimum level name (DEBUG, INFO, WARNING, ...)
        include_timestamp: Prefix events with an ISO timestamp
    """
    structlog.configure(
        processors=_processors(json_logs, include_timestamp),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, usually get_logger(__name__)."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach key/value pairs to every following event in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop all bound context (end of request)."""
    structlog.contextvars.clear_contextvars()
