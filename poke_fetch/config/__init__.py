"""
Configuration management for poke_fetch.

This module provides configuration loading from environment variables and
configuration files, and the models they are validated into.
"""

from .loader import ConfigLoader, load_config
from .models import GlobalConfig, LoggingConfig, LogLevel

__all__ = [
    "ConfigLoader",
    "GlobalConfig",
    "LogLevel",
    "LoggingConfig",
    "load_config",
]
