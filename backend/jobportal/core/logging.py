"""
Logging setup.

Every module asks for a named logger under the ``jobportal`` namespace; the
handler and level are attached once, on the namespace root.
"""

import logging

from jobportal.core.config import settings

ROOT_LOGGER_NAME = "jobportal"


def setup_logging(level: str | None = None) -> logging.Logger:
    """Attach a console handler to the ``jobportal`` logger (idempotent)."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    # Console handler for terminal output
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        ))
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the ``jobportal`` logger, e.g. ``jobportal.jobs``."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
