"""Configuration module for the Product API.

Loads settings from environment-specific config files:
- APP_ENV=dev  → config_dev.yaml
- APP_ENV=test → config_test.yaml
- Default      → config.yaml

The connection string may be overridden through the DEFAULT_CONNECTION
environment variable (read from .env as well).
Fails fast with clear error messages if required configuration is missing.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _get_project_root() -> Path:
    """Get the project root directory (where config.yaml lives)."""
    # Navigate from src/product_api/config/ up to project root
    return Path(__file__).parent.parent.parent.parent


def _get_config_filename() -> str:
    """Get config filename based on APP_ENV environment variable."""
    app_env = os.environ.get("APP_ENV", "").lower()

    if app_env == "dev":
        return "config_dev.yaml"
    elif app_env == "test":
        return "config_test.yaml"
    else:
        return "config.yaml"


def _load_yaml_config() -> dict:
    """Load configuration from environment-specific config file."""
    config_filename = _get_config_filename()
    config_path = _get_project_root() / config_filename

    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}. "
            f"Set APP_ENV to 'dev' or 'test', or create {config_filename}."
        )

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def _get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get optional environment variable with default."""
    return os.environ.get(key, default)


@dataclass(frozen=True)
class DatabaseConfig:
    """Relational store configuration."""
    connection_string: str


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server configuration."""
    host: str
    port: int
    cors_origins: List[str]


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration container."""
    database: DatabaseConfig
    logging: LoggingConfig
    server: ServerConfig


def load_config() -> AppConfig:
    """
    Load and validate all application configuration.

    Loads from the YAML config file for settings and .env for overrides.
    Fails fast if the connection string is missing.

    Returns:
        AppConfig: Validated application configuration.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    # Load environment variables from .env file
    load_dotenv()

    yaml_config = _load_yaml_config()

    # Build Database config
    connection_section = yaml_config.get("connection_strings", {})
    connection_string = _get_optional_env(
        "DEFAULT_CONNECTION", connection_section.get("default_connection")
    )
    if not connection_string:
        raise ConfigurationError(
            "No connection string configured. Set connection_strings.default_connection "
            "in the config file or DEFAULT_CONNECTION in your .env file."
        )

    database_config = DatabaseConfig(connection_string=connection_string)

    # Build Logging config
    logging_section = yaml_config.get("logging", {})

    logging_config = LoggingConfig(
        level=logging_section.get("level", "INFO"),
    )

    # Build Server config
    server_section = yaml_config.get("server", {})

    server_config = ServerConfig(
        host=server_section.get("host", "127.0.0.1"),
        port=int(server_section.get("port", 8000)),
        cors_origins=list(server_section.get("cors_origins", ["*"])),
    )

    return AppConfig(
        database=database_config,
        logging=logging_config,
        server=server_config,
    )


# Module-level singleton for convenience
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the application configuration singleton.

    Lazy-loads configuration on first access.
    Config file is selected based on APP_ENV environment variable.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_environment() -> str:
    """Get current environment name.

    Returns:
        'dev', 'test', or 'default' based on APP_ENV.
    """
    app_env = os.environ.get("APP_ENV", "").lower()
    return app_env if app_env in ("dev", "test") else "default"


def reset_config() -> None:
    """Reset the config singleton. Useful for testing."""
    global _config
    _config = None
