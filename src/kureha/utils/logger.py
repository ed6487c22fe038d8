"""Minimal logging utilities for Kureha.

Provides a simple get_logger function that wraps the standard library logging.
Kureha never installs handlers; applications configure the ``kureha`` logger.

Example:
    >>> from kureha.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Rendering program")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "kureha." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'kureha.mymodule'
    """
    if not (name == "kureha" or name.startswith("kureha.")):
        name = f"kureha.{name}"
    return logging.getLogger(name)
