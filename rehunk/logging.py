import logging
import sys
from typing import TextIO

LOGGER_NAME = "rehunk"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_ATTR = "_rehunk_handler"


def setup_logging(level: int | str = logging.WARNING, stream: TextIO | None = None) -> logging.Logger:
    """
    Configure the package logger.

    Installs a single stream handler (stderr by default) on the "rehunk"
    logger. Calling it again replaces that handler instead of stacking a
    second one.
    """
    logger = logging.getLogger(LOGGER_NAME)

    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_ATTR, False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(handler, _HANDLER_ATTR, True)

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
