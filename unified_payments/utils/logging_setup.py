"""
Gateway logger construction

Builds an explicit logger for callers that want the gateway's own console
format. Nothing here is cached: every call returns a configured logger that
the caller passes to the clients it constructs.
"""

import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: str = "unified_payments",
    level: int = logging.INFO,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Return a logger writing `[timestamp] LEVEL: message` lines to a stream"""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    handler_stream = stream or sys.stdout
    already_attached = any(
        isinstance(handler, logging.StreamHandler) and getattr(handler, "stream", None) is handler_stream
        for handler in logger.handlers
    )

    if not already_attached:
        handler = logging.StreamHandler(handler_stream)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
