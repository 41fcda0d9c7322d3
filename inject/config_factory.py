"""
Configuration Factory - Container settings for inject
Provides typed configuration with validation, loaded from the environment,
a dictionary or a YAML file.
"""

import os
import logging
from typing import Any, Dict, Optional, Type
from dataclasses import dataclass, fields

import yaml


DEFAULT_SELF_TOKEN = '$Inject'
LOG_LEVELS = ('debug', 'info', 'warning', 'error', 'critical')


class ConfigError(Exception):
    """Configuration-related errors"""
    pass


@dataclass
class ContainerConfig:
    """Container configuration with type safety and validation"""

    # Token that always resolves to the container itself
    self_token: str = DEFAULT_SELF_TOKEN

    # Guard registry and cache with a lock
    thread_safe: bool = True

    # Level applied by configure_logging()
    log_level: str = 'warning'

    def __post_init__(self):
        """Validate configuration after initialization"""
        self._validate()

    def _validate(self):
        """Validate configuration values"""
        if not isinstance(self.self_token, str) or not self.self_token:
            raise ConfigError(f"Invalid self_token: {self.self_token!r}")

        if not isinstance(self.thread_safe, bool):
            raise ConfigError(f"Invalid thread_safe: {self.thread_safe!r}")

        if not isinstance(self.log_level, str) or self.log_level.lower() not in LOG_LEVELS:
            raise ConfigError(f"Invalid log_level: {self.log_level!r}")


class ConfigurationFactory:
    """
    Factory for creating container configuration.

    Features:
    - Environment variable loading with type conversion
    - YAML file loading
    - Configuration validation
    """

    def __init__(self):
        self._logger = logging.getLogger(__name__)
        self._config: Optional[ContainerConfig] = None

    def load_from_environment(self, env_prefix: str = 'INJECT_') -> ContainerConfig:
        """
        Load configuration from environment variables.

        Args:
            env_prefix: Prefix for environment variables

        Returns:
            Configured ContainerConfig instance
        """
        def get_env_var(key: str, default: Any = None, var_type: Type = str) -> Any:
            """Get environment variable with type conversion"""
            env_key = f"{env_prefix}{key}"
            value = os.environ.get(env_key)

            if value is None:
                return default

            if var_type == bool:
                lowered = value.lower()
                if lowered in ('true', '1', 'yes', 'on'):
                    return True
                if lowered in ('false', '0', 'no', 'off'):
                    return False
                self._logger.warning(f"Invalid boolean value for {env_key}: {value}, using default: {default}")
                return default
            return value

        config = ContainerConfig(
            self_token=get_env_var('SELF_TOKEN', DEFAULT_SELF_TOKEN),
            thread_safe=get_env_var('THREAD_SAFE', True, bool),
            log_level=get_env_var('LOG_LEVEL', 'warning'),
        )

        self._config = config
        self._logger.debug(f"Container configuration loaded from environment (prefix={env_prefix})")
        return config

    def load_from_dict(self, config_dict: Dict[str, Any]) -> ContainerConfig:
        """
        Load configuration from dictionary.

        Args:
            config_dict: Dictionary of configuration values

        Returns:
            Configured ContainerConfig instance

        Raises:
            ConfigError: If the dictionary holds unknown keys
        """
        known = {f.name for f in fields(ContainerConfig)}
        unknown = set(config_dict) - known
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {sorted(unknown)}")

        self._config = ContainerConfig(**config_dict)
        return self._config

    def load_from_yaml(self, yaml_file_path: str) -> ContainerConfig:
        """
        Load configuration from a YAML file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigError: If the YAML structure is invalid
            yaml.YAMLError: If YAML parsing fails
        """
        try:
            with open(yaml_file_path, 'r', encoding='utf-8') as file:
                data = yaml.safe_load(file)
        except FileNotFoundError:
            self._logger.error(f"Configuration file not found: {yaml_file_path}")
            raise
        except yaml.YAMLError as e:
            self._logger.error(f"YAML parsing error: {e}")
            raise

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("YAML root must be a dictionary")

        config = self.load_from_dict(data)
        self._logger.debug(f"Container configuration loaded from {yaml_file_path}")
        return config

    def get_config(self) -> ContainerConfig:
        """
        Get the current configuration.

        Raises:
            ConfigError: If no configuration has been loaded
        """
        if self._config is None:
            raise ConfigError("Configuration not loaded. Call load_from_environment(), load_from_dict() or load_from_yaml() first.")
        return self._config

    def reset(self) -> 'ConfigurationFactory':
        """Reset the factory (useful for testing)"""
        self._config = None
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert current configuration to dictionary"""
        if self._config is None:
            raise ConfigError("Configuration not loaded")

        return {f.name: getattr(self._config, f.name) for f in fields(self._config)}


def configure_logging(config: ContainerConfig) -> logging.Logger:
    """Apply the configured log level to the package logger."""
    logger = logging.getLogger('inject')
    logger.setLevel(config.log_level.upper())
    return logger
