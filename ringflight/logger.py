"""Logging setup for ringflight entry points.

Library modules only create loggers with logging.getLogger(__name__); the CLI
and example scripts call setup_logging() once to attach a handler.
"""

import logging
from io import TextIOBase

from ringflight.typecheck import beartype

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HANDLER_NAME = "ringflight"


@beartype
def setup_logging(level: int = logging.INFO, stream: TextIOBase | None = None) -> logging.Logger:
    """Attach a stream handler to the ringflight package logger.

    Calling this again only updates the level; it never stacks handlers.

    Args:
        level: Logging level for the package logger
        stream: Destination stream (default: stderr)

    Returns:
        The ringflight package logger
    """
    package_logger = logging.getLogger("ringflight")

    if not any(handler.get_name() == HANDLER_NAME for handler in package_logger.handlers):
        handler = logging.StreamHandler(stream)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        package_logger.addHandler(handler)

    package_logger.setLevel(level)
    return package_logger
