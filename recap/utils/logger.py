"""
Logging helpers for the Recap service.

Every module gets its logger through get_logger(__name__) so that all output
shares one format and one set of handlers.
"""
import logging
import os
from logging.handlers import RotatingFileHandler

from recap.config import LOG_DIR, LOG_LEVEL

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_handlers = None


def _build_handlers():
    """Create the shared console and file handlers once per process."""
    global _handlers
    if _handlers is not None:
        return _handlers

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    handlers = [console_handler]

    try:
        os.makedirs(LOG_DIR, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(LOG_DIR, "recap.log"),
            maxBytes=5 * 1024 * 1024,
            backupCount=3
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)
    except OSError as e:
        # Read-only deployments still get console logging
        logging.getLogger(__name__).warning(f"File logging disabled: {e}")

    _handlers = handlers
    return _handlers


def setup_logger(name, level=None):
    """
    Configure and return a logger.

    Args:
        name: Logger name
        level: Optional level name, defaults to LOG_LEVEL

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level or LOG_LEVEL)

    if not logger.handlers:
        for handler in _build_handlers():
            logger.addHandler(handler)
        logger.propagate = False

    return logger


def get_logger(name):
    """Get a logger using the shared Recap configuration."""
    return setup_logger(name)


def get_handlers():
    """Return the shared handlers (used to route Flask's logger)."""
    return list(_build_handlers())
