"""
Structured logging setup.

All modules log through structlog with keyword context, e.g.::

    logger = get_logger(__name__)
    logger.info("Task created", task_id=task.id, user_id=user_id)

Output is one JSON object per line by default (timestamp, level, event,
logger name plus the keyword fields). Set LOG_FORMAT=console for a
human-readable renderer during development.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def setup_logger(log_level: str = "INFO", log_format: str = "json") -> None:
    """Configure stdlib logging and structlog once for the whole process."""
    level = getattr(logging, (log_level or "INFO").upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)

    renderer: Any
    if (log_format or "").lower() == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to ``name``."""
    return structlog.get_logger(name)
