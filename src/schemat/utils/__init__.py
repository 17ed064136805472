"""Utility modules for schemat.

Provides:
- logger: get_logger for logging
"""

from schemat.utils.logger import get_logger

__all__ = [
    "get_logger",
]
