"""Logging setup for the academy backend."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stream handler to the ``hagwon`` logger tree."""
    global _configured
    logger = logging.getLogger("hagwon")
    logger.setLevel(level.upper())
    if not _configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        _configured = True
    return logger
