"""Utility modules for exactcat.

Provides:
- logger: get_logger for logging
"""

from exactcat.utils.logger import get_logger

__all__ = [
    "get_logger",
]
