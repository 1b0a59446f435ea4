"""Configuration Management for the Hospitable client

Handles loading and validation of client configuration. Supports
hierarchical YAML files with environment variable overrides.
"""

import os
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic import ValidationError as PydanticValidationError

from .error_handler import ConfigurationError

DEFAULT_BASE_URL = "https://public.api.hospitable.com/v2"


class APIConfig(BaseModel):
    """Configuration for the remote API."""
    base_url: str = Field(default=DEFAULT_BASE_URL)
    timeout: int = Field(default=30000, ge=1)
    recv_timeout: int = Field(default=30000, ge=1)
    max_redirects: int = Field(default=3, ge=0)
    validation_path: str = Field(default="/properties")
    user_agent: str = Field(default="hospitable-client/0.1.0")

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v):
        """Validate base URL scheme"""
        if not v.startswith(('http://', 'https://')):
            raise ValueError("Base URL must start with http:// or https://")
        return v.rstrip('/')


class PaginationConfig(BaseModel):
    """Limits for the page-draining helpers."""
    max_per_page: int = Field(default=100, ge=1, le=100)
    properties_max_pages: int = Field(default=50, ge=1)
    reservations_max_pages: int = Field(default=20, ge=1)


class AuthConfig(BaseModel):
    """Configuration for token handling."""
    access_token: Optional[SecretStr] = None
    load_token_from_env: bool = Field(default=True)
    periodic_validation: bool = Field(default=True)
    validation_interval_seconds: float = Field(default=900, gt=0)
    max_validation_attempts: int = Field(default=3, ge=1)


class LoggingConfig(BaseModel):
    """Configuration for logging."""
    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_to_console: bool = Field(default=True)
    file_path: Optional[str] = None
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)
    backup_count: int = Field(default=5, ge=1, le=20)

    @field_validator('level', mode='before')
    @classmethod
    def normalize_level(cls, v):
        return str(v).upper()


class ClientConfig(BaseModel):
    """Main client configuration."""
    environment: str = Field(default="development")
    api: APIConfig = Field(default_factory=APIConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(validate_assignment=True)


class ConfigManager:
    """Manages client configuration loading and validation."""

    # Environment variable -> dotted configuration path
    ENV_MAPPING = {
        'HOSPITABLE_ACCESS_TOKEN': 'auth.access_token',
        'HOSPITABLE_BASE_URL': 'api.base_url',
        'HOSPITABLE_TIMEOUT': 'api.timeout',
        'HOSPITABLE_RECV_TIMEOUT': 'api.recv_timeout',
        'HOSPITABLE_LOG_LEVEL': 'logging.level',
    }

    INTEGER_FIELDS = {'api.timeout', 'api.recv_timeout'}

    def __init__(self, config_path: Optional[Path] = None, environment: Optional[str] = None,
                 env: Optional[Dict[str, str]] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional directory holding YAML configuration files
            environment: Environment name (development, staging, production)
            env: Environment mapping to read overrides from (defaults to os.environ)
        """
        self.env = os.environ if env is None else env
        self.config_base_path = Path(config_path) if config_path else self._get_default_config_path()
        self.environment = environment or self.env.get('HOSPITABLE_ENV', 'development')
        self._config: Optional[ClientConfig] = None
        self._lock = threading.Lock()
        self.logger = logging.getLogger(__name__)

        self.config_files = self._get_config_files()

    def _get_default_config_path(self) -> Path:
        """Get the default configuration directory."""
        config_locations = [
            Path("config"),
            Path.home() / ".hospitable",
        ]

        for location in config_locations:
            if location.exists() and location.is_dir():
                return location

        return Path("config")

    def _get_config_files(self) -> Dict[str, Path]:
        """Get configuration file paths for hierarchical loading."""
        base_dir = self.config_base_path

        return {
            'default': base_dir / 'default_config.yaml',
            'environment': base_dir / f'{self.environment}.yaml',
            'local': base_dir / 'local.yaml'
        }

    def load_config(self) -> ClientConfig:
        """Load and validate configuration with hierarchical overrides.

        Returns:
            Validated client configuration

        Raises:
            ConfigurationError: If a file cannot be parsed or validation fails
        """
        with self._lock:
            if self._config:
                return self._config

            config_data: Dict[str, Any] = {'environment': self.environment}

            for config_type, config_file in self.config_files.items():
                if config_file.exists():
                    self.logger.info(f"Loading {config_type} config from {config_file}")
                    self._deep_merge(config_data, self._load_yaml_file(config_file))

            env_overrides = self._get_env_overrides()
            if env_overrides:
                self.logger.info(f"Applying environment overrides: {sorted(env_overrides.keys())}")
                self._deep_merge(config_data, env_overrides)

            try:
                self._config = ClientConfig(**config_data)
            except PydanticValidationError as e:
                self.logger.error(f"Configuration validation failed: {e}")
                raise ConfigurationError(f"Invalid configuration: {e}") from e

            return self._config

    def reload_config(self) -> ClientConfig:
        """Drop the cached configuration and load it again."""
        with self._lock:
            self._config = None
        return self.load_config()

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        try:
            with open(file_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            self.logger.error(f"Failed to parse YAML file {file_path}: {e}")
            raise ConfigurationError(f"Invalid YAML in {file_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {file_path} must contain a mapping")
        return data

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Get configuration overrides from environment variables.

        Example: HOSPITABLE_BASE_URL -> api.base_url
        """
        overrides: Dict[str, Any] = {}

        for env_name, config_path in self.ENV_MAPPING.items():
            value = self.env.get(env_name)
            if value is None or value.strip() == "":
                continue

            parts = config_path.split('.')
            current = overrides
            for part in parts[:-1]:
                current = current.setdefault(part, {})
            current[parts[-1]] = self._convert_env_value(config_path, value.strip())

        return overrides

    def _convert_env_value(self, config_path: str, value: str) -> Union[str, int]:
        """Convert environment variable string to appropriate type."""
        if config_path in self.INTEGER_FIELDS and value.isdigit():
            return int(value)
        return value

    def _deep_merge(self, base_dict: Dict[str, Any], update_dict: Dict[str, Any]):
        for key, value in update_dict.items():
            if isinstance(value, dict) and isinstance(base_dict.get(key), dict):
                self._deep_merge(base_dict[key], value)
            else:
                base_dict[key] = value
