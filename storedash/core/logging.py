"""
Structured logging setup for storedash.

All output goes through structlog straight to stderr, so command output on
stdout stays clean for piping.
"""

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Optional

import structlog

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """Tag every following log entry with ``correlation_id`` (a short random id if omitted)."""
    value = correlation_id or uuid.uuid4().hex[:8]
    _correlation_id.set(value)
    return value


def get_correlation_id() -> Optional[str]:
    return _correlation_id.get()


def add_correlation_id(logger, method_name, event_dict):
    value = _correlation_id.get()
    if value:
        event_dict["correlation_id"] = value
    return event_dict


def setup_logging(debug: bool = False, rich_output: bool = True) -> None:
    """
    Configure structlog for the CLI.

    Args:
        debug: Also emit debug events (request/response traces)
        rich_output: Colored console lines with rich tracebacks; JSON lines otherwise
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        add_correlation_id,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.dev.set_exc_info,
    ]
    if rich_output:
        renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(), exception_formatter=structlog.dev.rich_traceback
        )
        processors.append(renderer)
    else:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.INFO),
        logger_factory=structlog.WriteLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
