"""
Logging Utilities

structlog loggers layered over the standard library logging module.
"""

import logging
import sys
from typing import Any, Optional

import structlog

_SHARED_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def get_logger(name: str) -> Any:
    """
    Get a logger for the specified name

    Args:
        name: Logger name (usually module name)

    Returns:
        structlog bound logger
    """
    if not structlog.is_configured():
        structlog.configure(
            processors=_SHARED_PROCESSORS
            + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    return structlog.get_logger(name)


def configure_logging(level: str = "WARNING", format_string: Optional[str] = None) -> None:
    """
    Configure logging for the command line tool

    Logs go to stderr so they never mix with the emitted document.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string for the stdlib handler
    """
    structlog.configure(
        processors=_SHARED_PROCESSORS + [structlog.dev.ConsoleRenderer()],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_string or "%(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
