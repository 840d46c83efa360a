"""Logging helpers shared by every todoserver module."""

import logging
from typing import Optional

ROOT_LOGGER_NAME = "todoserver"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the todoserver hierarchy."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: str = "INFO", handler: Optional[logging.Handler] = None) -> logging.Logger:
    """
    Install a single stream handler on the todoserver root logger.

    Calling this more than once replaces the previous handler instead of
    stacking duplicates.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        handler: Optional handler to use instead of a stderr StreamHandler

    Returns:
        The configured todoserver root logger
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = handler or logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level.upper())
    root.propagate = False
    return root
