"""
Logging Package
Structured logging with credential redaction

Provides a drop-in replacement for logging.getLogger so every module
logs through the same configured handlers.
"""
import logging
from typing import Optional

from couchsession.logging.logger_config import (
    LoggerConfig,
    JSONFormatter,
    SensitiveDataFilter
)

__all__ = [
    'LoggerConfig',
    'JSONFormatter',
    'SensitiveDataFilter',
    'getLogger',
    'INFO',
    'DEBUG',
    'WARNING',
    'ERROR',
    'CRITICAL',
]

# Export logging levels for convenience
INFO = logging.INFO
DEBUG = logging.DEBUG
WARNING = logging.WARNING
ERROR = logging.ERROR
CRITICAL = logging.CRITICAL


def getLogger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance (drop-in replacement for logging.getLogger)

    Only allows logger names that are:
    - None (root logger)
    - Listed in app.ALLOWED_LOGGING_HANDLERS (e.g., 'couchsession', 'security')
    - Module-based names (containing '.') like 'couchsession.http.gateway'

    Args:
        name: Logger name

    Returns:
        Logger instance

    Example:
        from couchsession.logging import getLogger
        logger = getLogger(__name__)
        logger.warning("Write failed", extra={'session_id': session_id})
    """
    if name is not None and '.' not in name and name != 'couchsession':
        from couchsession.support import Config
        allowed_handlers = Config.get('app.ALLOWED_LOGGING_HANDLERS', {})

        allowed_names = [
            handler_config.get('name')
            for handler_config in allowed_handlers.values()
            if handler_config.get('name') is not None
        ]

        if name not in allowed_names:
            # Force arbitrary names to use root logger
            name = None

    return logging.getLogger(name)
