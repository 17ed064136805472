"""Minimal logging utilities for schemat.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from schemat.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Formatting %s", "main.scm")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "schemat." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'schemat.mymodule'
    """
    # Ensure schemat prefix for consistent namespacing
    if not (name == "schemat" or name.startswith("schemat.")):
        name = f"schemat.{name}"
    return logging.getLogger(name)
