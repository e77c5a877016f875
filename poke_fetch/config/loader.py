"""
Configuration loader for poke_fetch.

This module handles loading configuration from environment variables and
YAML or JSON configuration files.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import yaml

from ..exceptions import ConfigurationError
from .models import GlobalConfig

logger = logging.getLogger(__name__)

DEFAULT_ENV_PREFIX = "POKE_FETCH_"


def default_config_paths() -> List[Path]:
    return [
        Path("poke_fetch.yaml"),
        Path("poke_fetch.yml"),
        Path("poke_fetch.json"),
        Path.home() / ".poke_fetch" / "config.yaml",
        Path.home() / ".poke_fetch" / "config.yml",
        Path.home() / ".poke_fetch" / "config.json",
    ]


class ConfigLoader:
    """
    Configuration loader with support for multiple sources.

    Sources are merged in order of precedence: built-in defaults, then the
    first configuration file found, then ``POKE_FETCH_*`` environment
    variables.
    """

    # Environment variable suffix -> path inside GlobalConfig
    ENV_MAPPINGS: Dict[str, Tuple[str, ...]] = {
        # Client
        "BASE_URL": ("client", "base_url"),
        "TIMEOUT": ("client", "total_timeout"),
        "CONNECT_TIMEOUT": ("client", "connect_timeout"),
        "READ_TIMEOUT": ("client", "read_timeout"),
        "MAX_CONCURRENT_REQUESTS": ("client", "max_concurrent_requests"),
        "MAX_CONNECTIONS_PER_HOST": ("client", "max_connections_per_host"),
        "MAX_RESPONSE_SIZE": ("client", "max_response_size"),
        "VERIFY_SSL": ("client", "verify_ssl"),
        "USER_AGENT": ("client", "headers", "user_agent"),
        # Logging
        "LOG_LEVEL": ("logging", "level"),
        "LOG_FILE": ("logging", "file_path"),
        "LOG_FORMAT": ("logging", "format"),
        "LOG_STRUCTURED": ("logging", "enable_structured"),
    }

    def __init__(
        self,
        env_prefix: str = DEFAULT_ENV_PREFIX,
        config_paths: Optional[Sequence[Path]] = None,
    ) -> None:
        self.env_prefix = env_prefix
        self.config_paths = (
            list(config_paths) if config_paths is not None else default_config_paths()
        )

    def load_config(
        self, config_file: Optional[Union[str, Path]] = None
    ) -> GlobalConfig:
        """
        Load configuration from all available sources.

        Args:
            config_file: Specific config file to load instead of searching
                the default locations

        Returns:
            GlobalConfig instance with merged configuration

        Raises:
            ConfigurationError: If the file is missing, unreadable or in an
                unsupported format
            pydantic.ValidationError: If a value is out of range
        """
        config_data: Dict[str, Any] = {}

        file_config = self._load_from_file(config_file)
        if file_config:
            config_data = self._deep_merge(config_data, file_config)

        env_config = self._load_from_environment()
        if env_config:
            config_data = self._deep_merge(config_data, env_config)

        return GlobalConfig(**config_data)

    def _load_from_file(
        self, config_file: Optional[Union[str, Path]] = None
    ) -> Optional[Dict[str, Any]]:
        """Load configuration from file."""
        if config_file:
            config_path = Path(config_file)
            if not config_path.exists():
                raise ConfigurationError(f"Config file not found: {config_path}")
            return self._parse_config_file(config_path)

        for config_path in self.config_paths:
            if config_path.exists():
                logger.debug(f"Using config file {config_path}")
                return self._parse_config_file(config_path)

        return None

    def _parse_config_file(self, config_path: Path) -> Dict[str, Any]:
        """Parse configuration file based on extension."""
        suffix = config_path.suffix.lower()
        if suffix not in (".yaml", ".yml", ".json"):
            raise ConfigurationError(
                f"Unsupported config file format: {config_path.suffix}"
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to parse config file {config_path}: {e}"
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {config_path} must contain a mapping at the top level"
            )
        return data

    def _load_from_environment(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config: Dict[str, Any] = {}

        for suffix, config_path in self.ENV_MAPPINGS.items():
            value = os.getenv(f"{self.env_prefix}{suffix}")
            if value is None:
                continue

            # Values stay strings; pydantic coerces them to the field types
            current = config
            for key in config_path[:-1]:
                current = current.setdefault(key, {})
            current[config_path[-1]] = value

        return config

    def _deep_merge(
        self, base: Dict[str, Any], override: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def save_config(self, config: GlobalConfig, config_file: Union[str, Path]) -> None:
        """Save configuration to a YAML or JSON file."""
        config_path = Path(config_file)
        suffix = config_path.suffix.lower()
        if suffix not in (".yaml", ".yml", ".json"):
            raise ConfigurationError(
                f"Unsupported config file format: {config_path.suffix}"
            )

        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_data = config.model_dump(mode="json")

        with open(config_path, "w", encoding="utf-8") as f:
            if suffix == ".json":
                json.dump(config_data, f, indent=2)
            else:
                yaml.safe_dump(config_data, f, default_flow_style=False, indent=2)


def load_config(config_file: Optional[Union[str, Path]] = None) -> GlobalConfig:
    """Load configuration using the default search paths and environment."""
    return ConfigLoader().load_config(config_file)


__all__ = ["ConfigLoader", "DEFAULT_ENV_PREFIX", "default_config_paths", "load_config"]
