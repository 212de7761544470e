"""
Configuration management.
Defaults cover a local run; an optional settings.yaml overrides them.
"""

import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .exceptions import ConfigError

# Load environment variables
load_dotenv()

PACKAGE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_STATIC_DIR = PACKAGE_DIR / "static"
SETTINGS_ENV_VAR = "CHATROOM_SETTINGS"


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000


class StorageSettings(BaseModel):
    data_dir: str = "data"
    static_dir: str = str(DEFAULT_STATIC_DIR)

    @property
    def accounts_file(self) -> Path:
        return Path(self.data_dir) / "users.json"

    @property
    def messages_file(self) -> Path:
        return Path(self.data_dir) / "messages.jsonl"


class LoggingSettings(BaseModel):
    level: str = "INFO"
    format: str = Field(default="console", pattern="^(console|json)$")
    file_path: Optional[str] = None
    max_bytes: int = 10485760
    backup_count: int = 5


class Settings(BaseModel):
    server: ServerSettings = Field(default_factory=ServerSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def _substitute_env_vars(value: Any) -> Any:
    """Recursively substitute ${VAR} and ${VAR:default} strings"""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            var_expr = value[2:-1]
            if ":" in var_expr:
                var_name, default = var_expr.split(":", 1)
                return os.getenv(var_name.strip(), default.strip())
            return os.getenv(var_expr, value)
    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_substitute_env_vars(item) for item in value]
    return value


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load settings.

    The YAML path comes from the argument, then CHATROOM_SETTINGS. With no
    path at all the defaults are returned; a path that does not exist is an
    error.
    """
    path = path or os.getenv(SETTINGS_ENV_VAR)
    if not path:
        return Settings()

    settings_path = Path(path)
    if not settings_path.exists():
        raise ConfigError(f"Settings file not found: {settings_path}")

    try:
        with open(settings_path, "r", encoding="utf-8") as f:
            raw_data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {settings_path}: {e}")

    try:
        return Settings(**_substitute_env_vars(raw_data))
    except ValueError as e:
        raise ConfigError(f"Invalid settings in {settings_path}: {e}")
