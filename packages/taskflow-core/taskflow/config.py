"""
Taskflow Configuration

Loads settings from ~/.taskflow/config.yaml with environment variable overrides.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional, List
import os
import logging

import yaml

from taskflow import __version__

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".taskflow"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

_TRUTHY = ("1", "true", "yes", "on")


def _parse_bool(value) -> bool:
    """Read a flag that may arrive as a YAML bool or as a quoted string."""
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


@dataclass
class ServerConfig:
    """HTTP server settings."""

    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass
class StoreConfig:
    """Task store settings."""

    seed_demo_tasks: bool = True


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class AppConfig:
    """Application identity reported by the health check."""

    environment: str = "development"
    version: str = __version__


@dataclass
class TaskflowConfig:
    """
    Complete Taskflow configuration.

    Loaded from ~/.taskflow/config.yaml with environment variable overrides.
    """

    server: ServerConfig = field(default_factory=ServerConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    app: AppConfig = field(default_factory=AppConfig)

    # Convenience accessors
    @property
    def environment(self) -> str:
        return self.app.environment

    @property
    def version(self) -> str:
        return self.app.version

    def to_dict(self) -> dict:
        """Convert to dictionary for display."""
        return asdict(self)


def _parse_server_config(data: dict) -> ServerConfig:
    """Parse server configuration from YAML data."""
    server_data = data.get("server", {})

    origins = server_data.get("cors_origins", ["*"])
    if isinstance(origins, str):
        origins = [o.strip() for o in origins.split(",") if o.strip()]

    return ServerConfig(
        host=server_data.get("host", "127.0.0.1"),
        port=int(server_data.get("port", 8000)),
        cors_origins=origins,
    )


def _parse_store_config(data: dict) -> StoreConfig:
    """Parse store configuration from YAML data."""
    store_data = data.get("store", {})

    return StoreConfig(
        seed_demo_tasks=_parse_bool(store_data.get("seed_demo_tasks", True)),
    )


def _parse_logging_config(data: dict) -> LoggingConfig:
    """Parse logging configuration from YAML data."""
    logging_data = data.get("logging", {})

    return LoggingConfig(
        level=str(logging_data.get("level", "INFO")).upper(),
        file=logging_data.get("file"),
    )


def _parse_app_config(data: dict) -> AppConfig:
    """Parse application identity from YAML data."""
    app_data = data.get("app", {})

    return AppConfig(
        environment=app_data.get("environment", "development"),
        version=str(app_data.get("version", __version__)),
    )


def load_config(config_path: Optional[Path] = None) -> TaskflowConfig:
    """
    Load configuration from file with environment variable overrides.

    Args:
        config_path: Optional path to config file. Defaults to ~/.taskflow/config.yaml

    Returns:
        TaskflowConfig instance
    """
    config_file = config_path or CONFIG_FILE
    config = TaskflowConfig()

    if config_file.exists():
        try:
            with open(config_file, 'r') as f:
                data = yaml.safe_load(f) or {}

            config.server = _parse_server_config(data)
            config.store = _parse_store_config(data)
            config.logging = _parse_logging_config(data)
            config.app = _parse_app_config(data)

        except yaml.YAMLError as e:
            logger.warning(f"Could not parse config file at {config_file}: {e}")
        except (OSError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Unexpected error loading config from {config_file}: {e}")

    # Environment variable overrides
    if os.environ.get("TASKFLOW_HOST"):
        config.server.host = os.environ["TASKFLOW_HOST"]

    if os.environ.get("TASKFLOW_PORT"):
        try:
            config.server.port = int(os.environ["TASKFLOW_PORT"])
        except ValueError:
            logger.warning(f"Ignoring non-numeric TASKFLOW_PORT: {os.environ['TASKFLOW_PORT']}")

    if os.environ.get("TASKFLOW_ENV"):
        config.app.environment = os.environ["TASKFLOW_ENV"]

    if os.environ.get("TASKFLOW_LOG_LEVEL"):
        config.logging.level = os.environ["TASKFLOW_LOG_LEVEL"].upper()

    if os.environ.get("TASKFLOW_LOG_FILE"):
        config.logging.file = os.environ["TASKFLOW_LOG_FILE"]

    if os.environ.get("TASKFLOW_SEED_DEMO"):
        config.store.seed_demo_tasks = os.environ["TASKFLOW_SEED_DEMO"].lower() in _TRUTHY

    return config


def save_config(config: TaskflowConfig, config_path: Optional[Path] = None) -> None:
    """
    Save configuration to file.

    Args:
        config: TaskflowConfig instance to save
        config_path: Optional path to config file. Defaults to ~/.taskflow/config.yaml
    """
    config_file = config_path or CONFIG_FILE

    # Ensure config directory exists
    config_file.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "server": {
            "host": config.server.host,
            "port": config.server.port,
            "cors_origins": config.server.cors_origins,
        },
        "store": {
            "seed_demo_tasks": config.store.seed_demo_tasks,
        },
        "logging": {
            "level": config.logging.level,
        },
        "app": {
            "environment": config.app.environment,
        },
    }

    if config.logging.file:
        data["logging"]["file"] = config.logging.file

    with open(config_file, 'w') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Configuration saved to {config_file}")


def ensure_config_dir() -> Path:
    """Ensure config directory exists and return its path."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return CONFIG_DIR


# Cached config instance
_config: Optional[TaskflowConfig] = None


def get_config() -> TaskflowConfig:
    """Get cached config instance, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> TaskflowConfig:
    """Force reload config from file."""
    global _config
    _config = load_config()
    return _config
