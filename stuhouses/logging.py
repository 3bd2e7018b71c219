"""
JSON logging for the migrate and seed commands.

structlog events and stdlib records (Alembic's "Running upgrade ..." lines) go through one
handler, so a single run prints a single format. Every line carries `service` plus whatever
context the command binds (the subcommand, the seed being run).
"""

from __future__ import annotations

import logging
import sys

import structlog


SERVICE = "stuhouses-db"
_HANDLER_NAME = "stuhouses"

_SHARED_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.add_log_level,
]


def configure_logging(log_level: str, **context: str) -> None:
    level = logging.getLevelName(log_level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.dict_tracebacks,
                structlog.processors.JSONRenderer(),
            ],
        )
    )
    root = logging.getLogger()
    # Re-configuring replaces our handler instead of stacking a second one.
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(service=SERVICE, **context)


logger = structlog.get_logger()
