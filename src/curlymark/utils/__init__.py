"""Shared utilities for curlymark.

- logger: get_logger for logging
"""

from curlymark.utils.logger import get_logger

__all__ = [
    "get_logger",
]
