"""
Logging manager for poke_fetch.

This module provides centralized logging configuration for applications and
the command line tool. The library itself only emits records through
``logging.getLogger(__name__)`` and never configures handlers on import.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, Optional, Union

from ..config.models import LoggingConfig, LogLevel
from .formatters import ColoredFormatter, StructuredFormatter

LIBRARY_LOGGER = "poke_fetch"


def _level(level: Union[LogLevel, str]) -> int:
    value = level.value if isinstance(level, LogLevel) else str(level).upper()
    return getattr(logging, value)


class LoggingManager:
    """Centralized logging manager."""

    def __init__(self, logger_name: str = LIBRARY_LOGGER) -> None:
        """
        Initialize logging manager.

        Args:
            logger_name: Logger the handlers are attached to. Defaults to the
                library's root logger so host applications keep their own
                root configuration.
        """
        self.logger_name = logger_name
        self._configured = False
        self._handlers: Dict[str, logging.Handler] = {}
        self._loggers: Dict[str, logging.Logger] = {}

    @property
    def _target(self) -> logging.Logger:
        return logging.getLogger(self.logger_name)

    def setup_logging(self, config: LoggingConfig) -> None:
        """
        Setup logging based on configuration.

        Args:
            config: Logging configuration
        """
        if self._configured:
            self.cleanup()

        target = self._target
        target.setLevel(_level(config.level))

        if config.enable_console:
            self._setup_console_handler(config)

        if config.enable_file and config.file_path:
            self._setup_file_handler(config)

        self._setup_component_loggers(config)

        self._configured = True
        logging.getLogger(__name__).debug("Logging system configured")

    def _setup_console_handler(self, config: LoggingConfig) -> None:
        """Setup console logging handler."""
        handler = logging.StreamHandler(sys.stderr)

        formatter: logging.Formatter
        if config.enable_structured:
            formatter = StructuredFormatter()
        else:
            formatter = ColoredFormatter(config.format)

        handler.setFormatter(formatter)
        handler.setLevel(_level(config.level))
        self.add_handler("console", handler)

    def _setup_file_handler(self, config: LoggingConfig) -> None:
        """Setup rotating file logging handler."""
        if not config.file_path:
            return

        log_path = Path(str(config.file_path))
        log_path.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.handlers.RotatingFileHandler(
            filename=str(log_path),
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
            encoding="utf-8",
        )

        formatter: logging.Formatter
        if config.enable_structured:
            formatter = StructuredFormatter()
        else:
            formatter = logging.Formatter(config.format)

        handler.setFormatter(formatter)
        handler.setLevel(_level(config.level))
        self.add_handler("file", handler)

    def _setup_component_loggers(self, config: LoggingConfig) -> None:
        """Setup component-specific loggers."""
        for component, level in config.component_levels.items():
            logger = logging.getLogger(component)
            logger.setLevel(_level(level))
            self._loggers[component] = logger

    def set_level(self, level: LogLevel, component: Optional[str] = None) -> None:
        """
        Set logging level.

        Args:
            level: New logging level
            component: Specific component (None for the managed logger)
        """
        log_level = _level(level)

        if component:
            logging.getLogger(component).setLevel(log_level)
        else:
            self._target.setLevel(log_level)
            for handler in self._handlers.values():
                handler.setLevel(log_level)

    def add_handler(self, name: str, handler: logging.Handler) -> None:
        """Attach a named handler to the managed logger."""
        self.remove_handler(name)
        self._target.addHandler(handler)
        self._handlers[name] = handler

    def remove_handler(self, name: str) -> None:
        handler = self._handlers.pop(name, None)
        if handler is not None:
            self._target.removeHandler(handler)
            handler.close()

    def cleanup(self) -> None:
        """Remove and close every handler installed by this manager."""
        for name in list(self._handlers):
            self.remove_handler(name)

        for logger in self._loggers.values():
            logger.setLevel(logging.NOTSET)

        self._loggers.clear()
        self._configured = False

    @property
    def handlers(self) -> Dict[str, logging.Handler]:
        return dict(self._handlers)

    def is_configured(self) -> bool:
        """Check if logging is configured."""
        return self._configured


# Global logging manager instance
_logging_manager = LoggingManager()


def setup_logging(config: Optional[LoggingConfig] = None) -> LoggingManager:
    """
    Setup logging with configuration.

    Args:
        config: Logging configuration; defaults to ``LoggingConfig()``

    Returns:
        The global logging manager
    """
    _logging_manager.setup_logging(config or LoggingConfig())
    return _logging_manager


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def cleanup_logging() -> None:
    """Cleanup logging system."""
    _logging_manager.cleanup()


__all__ = ["LoggingManager", "cleanup_logging", "get_logger", "setup_logging"]
