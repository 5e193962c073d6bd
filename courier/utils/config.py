"""Configuration manager for persistent settings stored as JSON."""

import json
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, PositiveFloat, PositiveInt

from .errors import (
    ConfigurationError,
    CourierError,
    FileSystemError,
    InvalidConfigError,
    MissingConfigError,
)
from .logging import get_logger, log_call
from .paths import CONFIG_PATH

logger = get_logger(__name__)


class ComposeConfig(BaseModel):
    """Pydantic model for compose session settings."""

    autosave_enabled: bool = True
    autosave_interval: PositiveFloat = 30.0  # in seconds
    save_timeout: PositiveFloat = 30.0
    send_timeout: PositiveFloat = 30.0
    cleanup_timeout: PositiveFloat = 10.0
    body_char_limit: PositiveInt = 50_000
    field_char_limit: PositiveInt = 500


class ApiConfig(BaseModel):
    """Pydantic model for mail service settings."""

    grant_id: str = ""
    requests_per_second: PositiveFloat = 2.0


class LoggingConfig(BaseModel):
    """Pydantic model for logging settings."""

    log_level: str = "INFO"
    console_level: str = "WARNING"
    max_file_size: int = 5_242_880  # 5 MB
    backup_count: int = 5


class AppConfig(BaseModel):
    """Pydantic model for overall application configuration."""

    version: str = "0.1.0"
    compose: ComposeConfig = Field(default_factory=ComposeConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigManager:
    """Manages persistent application configuration."""

    _instance = None
    _initialized = False

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None):
        if not ConfigManager._initialized:
            self.path = Path(config_path) if config_path else CONFIG_PATH
            self.config = self._load_or_create_config()
            logger.info(f"Configuration loaded from {self.path}")
            ConfigManager._initialized = True

    @classmethod
    def reset(cls) -> None:
        """Drop the shared instance so the next construction reloads from disk."""
        cls._instance = None
        cls._initialized = False

    def _load_or_create_config(self) -> AppConfig:
        """Load configuration from file or create default if not present."""

        from pydantic import ValidationError

        if not self.path.exists():
            logger.info("No config file found, creating default configuration.")
            config = AppConfig()
            self._save_config(config)
            return config

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            config = AppConfig(**data)
            logger.debug("Configuration successfully loaded and validated.")
            return config

        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse config file: {e}")
            raise InvalidConfigError(f"Configuration file is not valid JSON: {str(e)}") from e
        except ValidationError as e:
            logger.error(f"Failed to validate config file: {e}")
            raise InvalidConfigError(f"Configuration data does not match expected schema: {str(e)}") from e
        except OSError as e:
            raise FileSystemError(f"Failed to read configuration file: {self.path}") from e

    def _save_config(self, config: Optional[AppConfig] = None):
        """Save the current configuration to file."""

        config = config or self.config

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(
                    config.model_dump(),
                    f,
                    indent=2,
                    ensure_ascii=False
                )
            logger.debug("Configuration successfully saved.")
        except OSError as e:
            raise FileSystemError(f"Failed to write configuration file: {str(e)}") from e

    @log_call
    def get_config(self, key_path: str, default: Any = None) -> Any:
        """Retrieve a configuration value using dot-separated key path."""
        obj: Any = self.config

        for key in key_path.split("."):
            if not hasattr(obj, key):
                return default
            obj = getattr(obj, key)

        return obj

    @log_call
    def set_config(self, key_path: str, value: Any, persist: bool = True):
        """Set a configuration value using dot-separated key path."""

        from pydantic import ValidationError

        try:
            keys = key_path.split(".")
            obj = self.config

            for key in keys[:-1]:
                if not hasattr(obj, key):
                    raise MissingConfigError(f"Configuration path '{key_path}' is invalid: '{key}' not found")
                obj = getattr(obj, key)

            if not hasattr(obj, keys[-1]):
                raise MissingConfigError(f"Configuration key '{keys[-1]}' does not exist in path '{key_path}'")

            # Re-validate the section so bad values never reach disk
            updated = obj.model_validate({**obj.model_dump(), keys[-1]: value})
            setattr(obj, keys[-1], getattr(updated, keys[-1]))

            if persist:
                self._save_config()

            logger.info(f"Config key '{key_path}' updated and saved.")

        except CourierError:
            raise
        except ValidationError as e:
            raise InvalidConfigError(f"Invalid value for '{key_path}': {str(e)}") from e
        except Exception as e:
            raise ConfigurationError(f"Failed to set configuration key '{key_path}': {str(e)}") from e
