"""Minimal logging utilities for exactcat.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from exactcat.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Concatenating 3 elements")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "exactcat." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'exactcat.mymodule'
    """
    if not (name == "exactcat" or name.startswith("exactcat.")):
        name = f"exactcat.{name}"
    return logging.getLogger(name)
