"""
Logging Configuration
=====================
Console (and optional file) logging for the ``beliefgraph`` package.

Every module logs through ``logging.getLogger(__name__)``, so configuring the
package logger here covers the IO layer, the graph builder, the engine and
the GUI. Lifecycle transitions log at INFO, drag gestures at DEBUG and the
numeric guards at WARNING; ``--log-level DEBUG`` on the command line shows
all of them.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "beliefgraph"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach handlers to the package logger and return it.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path; the file is truncated on every start.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    # main() may run more than once per process (tests, embedding), handlers must not stack
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug(f"Logging initialized at level {logging.getLevelName(level)}.")
    return logger
