#!/usr/bin/env python3
"""Layered configuration manager for FabricFS.

This module provides configuration management with:
- Precedence hierarchy (defaults < file < environment < CLI < runtime)
- YAML config files
- Environment variable overrides (FABRICFS_SECTION_KEY=value)
- Dot-path access and deep merging
- Thread-safe operations

Example:
    >>> config = ConfigManager()
    >>> config.load_file("fabricfs.yaml")
    >>> config.get("fabricfs.browser.base_url")
"""

import copy
import os
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from fabricfs.core.constants import DEFAULT_CONFIG, ConfigKey, ErrorCode
from fabricfs.core.validators import ValidationError, validate_config

ENV_PREFIX = "FABRICFS_"


class ConfigSource(Enum):
    """Configuration source precedence levels."""

    COMPILED_DEFAULTS = 1  # Lowest precedence
    USER_CONFIG = 2
    ENVIRONMENT = 3
    CLI_ARGS = 4
    RUNTIME = 5  # Highest precedence


class ConfigError(Exception):
    """Configuration error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ConfigManager:
    """Thread-safe layered configuration manager.

    Lookups search sources from highest to lowest precedence:
    1. Runtime updates (highest)
    2. CLI arguments
    3. Environment variables (FABRICFS_*)
    4. User config file
    5. Compiled defaults (lowest)
    """

    def __init__(self, config_file: Optional[str] = None, load_environment: bool = True):
        """Initialize configuration manager.

        Args:
            config_file: Optional config file to load
            load_environment: Read FABRICFS_* variables
        """
        self._config: Dict[ConfigSource, Dict[str, Any]] = {}
        self._lock = threading.RLock()

        self._config[ConfigSource.COMPILED_DEFAULTS] = copy.deepcopy(DEFAULT_CONFIG)

        if config_file:
            self.load_file(config_file)

        if load_environment:
            self._load_environment()

    def load_file(self, file_path: str, source: ConfigSource = ConfigSource.USER_CONFIG) -> None:
        """Load configuration from YAML file.

        Args:
            file_path: Path to YAML config file
            source: Configuration source level

        Raises:
            ConfigError: If file cannot be loaded, parsed or validated
        """
        path = Path(file_path).expanduser().resolve()

        if not path.exists():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}", ErrorCode.INVALID_INPUT)
        except OSError as e:
            raise ConfigError(f"Error loading config {file_path}: {e}", ErrorCode.INTERNAL_ERROR)

        if not isinstance(config_data, dict):
            raise ConfigError(f"Invalid config format in {file_path}", ErrorCode.INVALID_INPUT)

        self.load_dict(config_data, source)

    def load_dict(self, config_data: Dict[str, Any], source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Load configuration from dictionary.

        Data without a top-level ``fabricfs`` key is wrapped in one.

        Raises:
            ConfigError: If the ``fabricfs`` section fails validation
        """
        if ConfigKey.ROOT not in config_data:
            config_data = {ConfigKey.ROOT: config_data}

        try:
            validate_config(config_data[ConfigKey.ROOT])
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}", e.error_code)

        with self._lock:
            self._config[source] = copy.deepcopy(config_data)

    def _load_environment(self) -> None:
        """Load configuration from environment variables.

        Format: FABRICFS_<SECTION>_<KEY>=value, where KEY may itself contain
        underscores. Example: FABRICFS_BROWSER_TENANT_ID=...

        Values are kept as strings, so identifiers like "0123" survive
        intact.

        Raises:
            ConfigError: If the resulting section fails validation
        """
        env_config: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            section, _, name = key[len(ENV_PREFIX):].lower().partition("_")
            if not section or not name:
                continue

            env_config.setdefault(section, {})[name] = value

        if env_config:
            try:
                validate_config(env_config)
            except ValidationError as e:
                raise ConfigError(f"Invalid environment configuration: {e}", e.error_code)

            with self._lock:
                self._config[ConfigSource.ENVIRONMENT] = {ConfigKey.ROOT: env_config}

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Dot-separated key path (e.g., "fabricfs.browser.base_url")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        with self._lock:
            for source in sorted(self._config.keys(), key=lambda s: s.value, reverse=True):
                value = self._get_nested(self._config[source], key)
                if value is not None:
                    return value

            return default

    def _get_nested(self, config: Dict[str, Any], key: str) -> Optional[Any]:
        current = config

        for part in key.split("."):
            if not isinstance(current, dict):
                return None
            if part not in current:
                return None
            current = current[part]

        return current

    def set(self, key: str, value: Any, source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Set configuration value.

        Args:
            key: Dot-separated key path
            value: Value to set
            source: Configuration source level
        """
        with self._lock:
            current = self._config.setdefault(source, {})

            parts = key.split(".")
            for part in parts[:-1]:
                current = current.setdefault(part, {})

            current[parts[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        """Get merged configuration from all sources.

        Returns:
            Merged configuration dictionary
        """
        with self._lock:
            merged: Dict[str, Any] = {}

            for source in sorted(self._config.keys(), key=lambda s: s.value):
                merged = self._deep_merge(merged, self._config[source])

            return merged

    def section(self) -> Dict[str, Any]:
        """Get the merged ``fabricfs`` section."""
        return self.get_all().get(ConfigKey.ROOT, {})

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def clear(self, source: Optional[ConfigSource] = None) -> None:
        """Clear configuration.

        Args:
            source: Specific source to clear, or None for all except defaults
        """
        with self._lock:
            if source:
                if source in self._config and source != ConfigSource.COMPILED_DEFAULTS:
                    del self._config[source]
            else:
                for s in [s for s in self._config if s != ConfigSource.COMPILED_DEFAULTS]:
                    del self._config[s]

