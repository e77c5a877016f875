"""
Logging setup for poke_fetch.

This module provides console and rotating file output with colored or
structured JSON formatting.
"""

from .formatters import ColoredFormatter, StructuredFormatter
from .manager import LoggingManager, cleanup_logging, get_logger, setup_logging

__all__ = [
    "LoggingManager",
    "setup_logging",
    "cleanup_logging",
    "get_logger",
    "StructuredFormatter",
    "ColoredFormatter",
]
