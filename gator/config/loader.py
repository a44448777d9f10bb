"""Configuration loader."""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..exceptions import ConfigError
from .models import ConfigModel

CONFIG_FILE_NAME = ".gatorconfig.json"
CONFIG_PATH_ENV = "GATOR_CONFIG"
DB_URL_ENV = "GATOR_DB_URL"


def default_config_path() -> Path:
    """Get the config file path, honouring $GATOR_CONFIG."""
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_FILE_NAME


class Config:
    """Configuration manager."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize config manager."""
        if config_path is None:
            config_path = default_config_path()
        self.config_path = config_path
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config."""
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    @property
    def db_url(self) -> str:
        """Get the database URL; $GATOR_DB_URL wins over the file."""
        return os.environ.get(DB_URL_ENV) or self.config.db_url

    @property
    def current_user_name(self) -> str:
        """Get the logged-in user name ("" when anonymous)."""
        return self.config.current_user_name

    def set_user(self, user_name: str) -> None:
        """Set the current user and rewrite the config file."""
        self.config.current_user_name = user_name
        save_config(self.config, self.config_path)


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from a JSON file.

    A missing file is not an error: it yields an empty configuration.
    """
    if not config_path.exists():
        return ConfigModel()

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    if config_data is None:
        config_data = {}

    try:
        return ConfigModel(**config_data)
    except (TypeError, ValidationError) as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to a JSON file."""
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config.model_dump(), f, indent=2)
            f.write("\n")
    except OSError as e:
        raise ConfigError(f"Cannot write config file {config_path}: {e}") from e
