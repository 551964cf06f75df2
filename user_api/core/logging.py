"""
Logging setup for the User Directory API.

Modules log through the standard library:

    import logging

    logger = logging.getLogger(__name__)

``setup_logging`` is called once by the application factory.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured_handler: logging.Handler | None = None


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the ``user_api`` logger hierarchy.

    Safe to call more than once (every test builds its own application);
    the stdout handler is attached a single time and only the level changes.
    """
    global _configured_handler

    logger = logging.getLogger("user_api")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if _configured_handler is None:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        _configured_handler = handler

    return logger
