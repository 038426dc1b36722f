"""
Logging helpers for timelang.

Every module logs through ``logging.getLogger(__name__)`` and the library
never installs handlers on import. ``setup_logging`` is for scripts and
interactive sessions that want to see the parser's debug output.
"""

import logging
import sys
from typing import Union

LOGGER_NAME = "timelang"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: Union[int, str] = logging.DEBUG) -> logging.Logger:
    """
    Send timelang log records to stderr.

    Calling this more than once only changes the level.

    Args:
        level: Logging level, as a number or a name such as ``"INFO"``

    Returns:
        The ``timelang`` package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(stream_handler)

    return logger
