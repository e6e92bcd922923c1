"""Logging configuration for applications using the client.

Client modules log through ``logging.getLogger(__name__)`` with context in
``extra=``. ``configure_logging`` installs a root handler whose
``structlog.stdlib.ProcessorFormatter`` renders those records, extra fields
included, as JSON lines; structlog loggers share the same pipeline.
"""

from __future__ import annotations

import logging
from typing import IO

import structlog

_HANDLER_NAME = "dragoneye.json"


def configure_logging(
    level: int | str = logging.INFO,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Render stdlib and structlog records as JSON on ``stream`` (stderr by default).

    Calling it again replaces the handler installed by the previous call.
    """

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[*shared_processors, structlog.stdlib.ExtraAdder()],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(),
        ],
    )

    handler = logging.StreamHandler(stream)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
    return handler


__all__ = ["configure_logging"]
