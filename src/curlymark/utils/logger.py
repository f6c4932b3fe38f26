"""Minimal logging utilities for curlymark.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; applications configure logging.

Example:
    >>> from curlymark.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Parsing template")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "curlymark." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'curlymark.mymodule'
    """
    if not (name == "curlymark" or name.startswith("curlymark.")):
        name = f"curlymark.{name}"
    return logging.getLogger(name)
