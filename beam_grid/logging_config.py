"""Console and file logging for the ``beam_grid`` command line tools."""

import logging
import sys
from typing import Optional


LOGGER_NAME = "beam_grid"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Attach stdout (and optionally file) handlers to the package logger.

    Engine and search modules log through child loggers, so their run
    summaries and search progress end up here. Calling this again replaces
    the handlers from the previous call.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for old_handler in list(logger.handlers):
        logger.removeHandler(old_handler)
        old_handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging to %d handler(s) at level %s", len(handlers), logging.getLevelName(level))
    return logger
