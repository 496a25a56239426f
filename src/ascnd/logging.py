"""Logging setup for applications built on the client, and for the example programs.

The client only emits structlog events. setup_logging() routes them, together
with stdlib records from grpc, to stdout.

LOG_FORMAT selects "json" or "console" (the default) rendering and LOG_LEVEL
the threshold (INFO unless set).
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING

import grpc
import structlog

if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from typing import Any

LOG_FORMATS = ("console", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _render_status_codes(
    _logger: object,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Log grpc.StatusCode values by name; their raw values are (int, str) tuples."""
    for key, value in event_dict.items():
        if isinstance(value, grpc.StatusCode):
            event_dict[key] = value.name
    return event_dict


def log_format_from_env() -> str:
    value = os.environ.get("LOG_FORMAT", "").lower() or "console"
    if value not in LOG_FORMATS:
        msg = f"Invalid LOG_FORMAT={value!r}. Must be one of {', '.join(LOG_FORMATS)}."
        raise ValueError(msg)
    return value


def log_level_from_env() -> int:
    value = os.environ.get("LOG_LEVEL", "INFO").upper()
    if value not in LOG_LEVELS:
        msg = f"Invalid LOG_LEVEL={value!r}. Must be one of {', '.join(LOG_LEVELS)}."
        raise ValueError(msg)
    return getattr(logging, value)


def setup_logging(level: int | None = None) -> None:
    """Send structlog and stdlib logging to stdout, replacing any existing root handlers."""
    if level is None:
        level = log_level_from_env()
    if log_format_from_env() == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _render_status_codes,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                renderer,
            ],
        ),
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # grpc logs connectivity chatter at DEBUG/INFO
    logging.getLogger("grpc").setLevel(logging.WARNING)
