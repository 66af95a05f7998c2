"""
Structured logging setup for the alert pipeline.

Configures structlog for JSON-formatted structured logging. Every log line
includes timestamp, level, service name, and event. Per-message context
(correlation_id, source, key) is bound at processing time.
"""

from __future__ import annotations

import logging

import structlog


def configure_logging(
    level: str = "INFO",
    *,
    json: bool = True,
    service: str | None = None,
) -> None:
    """Configure structlog for the current process.

    Args:
        level: Minimum level name; lower-level calls are dropped.
        json: Render lines as JSON (``False`` gives the console renderer).
        service: Optional service name bound into every line.

    Raises:
        ValueError: If *level* is not a known logging level name.
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level {level!r}")

    renderer: structlog.types.Processor
    if json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
    )

    structlog.contextvars.clear_contextvars()
    if service:
        structlog.contextvars.bind_contextvars(service=service)
