"""Utility modules for Kureha.

Provides:
- logger: get_logger for logging
"""

from kureha.utils.logger import get_logger

__all__ = [
    "get_logger",
]
