"""Logging setup.

Curses owns the terminal while the rain runs, so records only go to a file
when a debug log is requested.
"""

import logging
from typing import Optional

PACKAGE_LOGGER = "digirain"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(debug_path: Optional[str] = None) -> logging.Logger:
    """Attach a file handler to the package logger, or a NullHandler if no path is given."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if debug_path is None:
        logger.addHandler(logging.NullHandler())
        logger.propagate = True
        return logger

    handler = logging.FileHandler(debug_path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    # Banner goes in unformatted so separate runs are easy to find
    handler.stream.write("=== digirain debug log started ===\n")
    handler.flush()
    return logger
