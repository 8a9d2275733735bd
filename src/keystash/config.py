"""Configuration loading and management for keystash"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from keystash.exceptions import ConfigError

CONFIG_FILENAME = ".keystash.yaml"


class DriverConfig(BaseModel):
    """Cache driver configuration"""

    driver: str = Field(default="memory", description="Cache driver (memory, redis, fake_redis)")
    ttl: int = Field(default=300, description="Maximum entry lifetime in seconds")
    namespace: str | None = Field(None, description="Key namespace for this install")
    install_id: str | None = Field(
        None, description="Installation identifier the namespace is derived from"
    )
    redis_url: str = Field(default="redis://localhost:6379", description="Redis URL")
    redis_db: int = Field(default=0, description="Redis database number")

    @field_validator("ttl")
    @classmethod
    def validate_ttl(cls, v: int) -> int:
        """Validate maximum TTL"""
        if v <= 0:
            msg = "ttl must be a positive number of seconds"
            raise ValueError(msg)
        return v

    def driver_options(self) -> dict[str, Any]:
        """Build the option mapping passed to ``Driver.set_options``"""
        options: dict[str, Any] = {"ttl": self.ttl}
        if self.namespace:
            options["namespace"] = self.namespace
        if self.install_id is not None:
            options["install_id"] = self.install_id
        if self.driver == "redis":
            options["url"] = self.redis_url
            options["db"] = self.redis_db
        return options


class KeystashConfig(BaseModel):
    """Application configuration"""

    cache: DriverConfig = DriverConfig()


def find_config_file() -> Path | None:
    """Find .keystash.yaml config file in current or parent directories"""
    current = Path.cwd()

    # Check current directory and up to 5 parent directories
    for _ in range(6):
        config_path = current / CONFIG_FILENAME
        if config_path.exists():
            return config_path

        # Stop at root directory
        if current.parent == current:
            break
        current = current.parent

    return None


def load_config(config_path: Path | None = None) -> KeystashConfig:
    """Load configuration from YAML file

    Args:
        config_path: Path to config file. If None, searches for .keystash.yaml
            and falls back to defaults when none exists

    Returns:
        Loaded configuration object

    Raises:
        ConfigError: If the file cannot be read or is invalid
    """
    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            return KeystashConfig()

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in config file: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read config file: {e}"
        raise ConfigError(msg) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = "Config file must contain a YAML object"
        raise ConfigError(msg)

    try:
        return KeystashConfig(**data)
    except ValidationError as e:
        msg = f"Invalid configuration: {e}"
        raise ConfigError(msg) from e


class _ConfigStore:
    """Singleton store for configuration"""

    _instance: KeystashConfig | None = None

    @classmethod
    def get(cls) -> KeystashConfig:
        """Get the configuration instance (loads on first call)"""
        if cls._instance is None:
            cls._instance = load_config()
        return cls._instance

    @classmethod
    def set_instance(cls, config: KeystashConfig) -> None:
        """Set the configuration instance (mainly for testing)"""
        cls._instance = config

    @classmethod
    def clear(cls) -> None:
        """Clear the configuration instance (mainly for testing)"""
        cls._instance = None


def get_config() -> KeystashConfig:
    """Get the global configuration instance

    Returns:
        Global config object (loads on first call)
    """
    return _ConfigStore.get()


def set_config(config: KeystashConfig) -> None:
    """Set the global configuration instance (mainly for testing)"""
    _ConfigStore.set_instance(config)


def clear_config() -> None:
    """Forget the global configuration instance"""
    _ConfigStore.clear()
