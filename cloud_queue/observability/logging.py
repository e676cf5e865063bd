"""
Structured logging setup using structlog.

Queue and API modules log through the standard library
(`logging.getLogger(__name__)` with `extra=`). Those records are rendered by
structlog together with the request context bound by the API (method, path,
job_id) and the active trace ids.
"""

import logging
import sys
from typing import Any

import structlog
from opentelemetry import trace

from cloud_queue.config import Settings, get_settings

# Third-party loggers that would otherwise repeat what the metrics middleware records
QUIET_LOGGERS = ("uvicorn.access",)


def add_trace_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Attach the current trace and span ids, when a span is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        ctx = span.get_span_context()
        event_dict["trace_id"] = format(ctx.trace_id, "032x")
        event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict


def _pre_chain() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        add_trace_context,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ExtraAdder(),
    ]


def _renderer(settings: Settings) -> Any:
    if settings.log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=True)
    return structlog.processors.JSONRenderer()


def setup_logging(settings: Settings | None = None) -> None:
    """
    Route structlog and standard library logging to stdout.

    Args:
        settings: Settings to use. Defaults to the cached application settings.
    """
    settings = settings or get_settings()
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(settings),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger for keyword-style log calls."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Add fields to every log line emitted for the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop fields bound for a previous request."""
    structlog.contextvars.clear_contextvars()
