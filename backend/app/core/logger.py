"""
Custom logging configuration.

Responsibilities:
- Setup console logging
- Configure log levels and formats
- Expose the shared application logger
"""

import logging
import sys

from app.core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(level: str = settings.LOG_LEVEL) -> logging.Logger:
    """Configures the application logger."""
    app_logger = logging.getLogger("dupeit")
    app_logger.setLevel(level.upper())

    if not app_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        app_logger.addHandler(handler)

    return app_logger


logger = setup_logger()
