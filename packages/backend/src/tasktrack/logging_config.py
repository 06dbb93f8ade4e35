"""structlog setup.

Called once from create_app(). Request-scoped values (request_id) are
merged in from contextvars, bound by RequestIdMiddleware.
"""

import logging
import sys
from typing import Optional

import structlog

from tasktrack.config import settings


def configure_logging(
    level: Optional[str] = None, json_output: Optional[bool] = None
) -> None:
    level = level or settings.log_level
    json_output = settings.log_json if json_output is None else json_output

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        # ConsoleRenderer pretty-prints exc_info itself
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
    )
