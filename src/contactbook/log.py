"""structlog setup.

Learn: structlog's contextvars processor merges whatever was bound for
the current request (request_id, user_email) into every log entry, so
handlers only log the event name and its own fields.
"""

import logging

import structlog

from contactbook.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure structlog once at startup."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
