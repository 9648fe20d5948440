"""Structured logging configuration for equisplit-core.

The engine logs through ``structlog.get_logger()`` and never configures
logging on import. Hosts and demos call ``configure_logging`` once.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import EquiSplitSettings


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure structlog rendering for the process.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Render JSON lines instead of console output
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


def configure_from_settings(settings: Optional[EquiSplitSettings] = None) -> None:
    """Configure logging from EQUISPLIT_LOG_LEVEL / EQUISPLIT_LOG_JSON."""
    settings = settings or EquiSplitSettings()
    configure_logging(settings.log_level, json_output=settings.log_json)
