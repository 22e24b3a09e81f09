"""
Logging Package
Structured logging with sensitive data filtering
"""
from larasanic_api.logging.logger_config import (
    LoggerConfig,
    JSONFormatter,
    SensitiveDataFilter
)
import logging
from typing import Optional

__all__ = [
    'LoggerConfig',
    'JSONFormatter',
    'SensitiveDataFilter',
    'getLogger',
    'INFO',
    'DEBUG',
    'WARNING',
    'ERROR',
]

INFO = logging.INFO
DEBUG = logging.DEBUG
WARNING = logging.WARNING
ERROR = logging.ERROR

# Root of every logger this package creates
PACKAGE_LOGGER = 'larasanic_api'


def getLogger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance (drop-in replacement for logging.getLogger)

    Names outside the package namespace are nested under it, so a single
    LoggerConfig.setup_logger('larasanic_api') call configures every
    logger the package hands out.

    Example:
        from larasanic_api.logging import getLogger
        logger = getLogger(__name__)
        logger.debug("Applying filters", extra={'parameters': params})
    """
    if not name:
        return logging.getLogger(PACKAGE_LOGGER)

    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + '.'):
        name = f"{PACKAGE_LOGGER}.{name}"

    return logging.getLogger(name)
