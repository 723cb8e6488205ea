"""
Structured Logging

DESIGN DECISION: Every module logs through structlog with snake_case event
names and key/value context, e.g.

    logger.info("password_created", password_id=entry.id)

This keeps log lines machine-readable and makes it easy to grep for a
single operation across the storage and service layers.

Importing this module only configures structlog. The stdlib side (level
and output handler) is set up by an explicit ``configure_logging`` call,
and only on the ``myhub`` logger, so a host application keeps its own
root logging untouched.

Secret values (passwords, 2FA codes) are NEVER passed to the logger.
"""

import logging
import sys
from typing import Optional

import structlog

from myhub.config import LoggingSettings

PACKAGE_LOGGER = "myhub"

_handler = logging.StreamHandler(sys.stderr)
_handler.setFormatter(logging.Formatter("%(message)s"))


def _configure_structlog(json_output: bool) -> None:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # configure_logging may swap the renderer after loggers exist
        cache_logger_on_first_use=False,
    )


# Configure structlog for local logging
_configure_structlog(json_output=True)


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Route myhub log lines to stderr at the configured level.

    Only the ``myhub`` logger is touched; it stops propagating to the root
    logger so lines are not printed twice. Safe to call more than once;
    the last call wins.
    """
    settings = settings or LoggingSettings()
    _configure_structlog(settings.json_output)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, settings.level))
    if _handler not in package_logger.handlers:
        package_logger.addHandler(_handler)
    package_logger.propagate = False


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger."""
    return structlog.get_logger(name)
