"""Configuration management for Focus Companion CLI.

Settings live in one JSON file per profile under the platform config
directory; the bearer token for that profile sits in the data directory.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, Field, ValidationError

APP_DIR_NAME = "focus-companion"
API_URL_ENV_VAR = "FOCUS_COMPANION_API_URL"
DEFAULT_API_ENDPOINT = "http://localhost:8080"

logger = logging.getLogger(__name__)


class APIConfig(BaseModel):
    """Session store connection settings."""

    endpoint: str = Field(default=DEFAULT_API_ENDPOINT)
    timeout: int = Field(default=30, gt=0)


class TimerConfig(BaseModel):
    """Focus timer settings."""

    default_minutes: int = Field(default=5, gt=0)


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="table")
    color: bool = Field(default=True)


class Config(BaseModel):
    """All settings for one profile."""

    api: APIConfig = Field(default_factory=APIConfig)
    timer: TimerConfig = Field(default_factory=TimerConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


class Credentials(BaseModel):
    """Bearer token issued by the identity provider."""

    token: str = ""


def split_key(key: str) -> tuple[str, str]:
    """Split a ``section.field`` key, checking that it names a real setting.

    Raises:
        KeyError: If *key* does not name a setting.
    """
    section, _, field = key.partition(".")
    section_field = Config.model_fields.get(section)
    if section_field is None or field not in section_field.annotation.model_fields:
        raise KeyError(key)
    return section, field


class ConfigManager:
    """Settings and stored credentials for one profile."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir(APP_DIR_NAME))
        self.data_dir = Path(user_data_dir(APP_DIR_NAME))
        self.config_file = self.config_dir / f"{profile}.json"
        self.credentials_file = self.data_dir / f"{profile}.credentials.json"

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def api_endpoint(self) -> str:
        """Base URL of the API. ``FOCUS_COMPANION_API_URL`` wins over the profile."""
        return os.environ.get(API_URL_ENV_VAR) or self.config.api.endpoint

    def load_config(self) -> Config:
        """Read the profile file; missing or unreadable files give the defaults."""
        if not self.config_file.exists():
            return Config()
        try:
            return Config.model_validate_json(self.config_file.read_text())
        except ValidationError as e:
            logger.warning("Ignoring unreadable config %s: %s", self.config_file, e)
            return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        """Write *config* (or the current settings) to the profile file."""
        if config is not None:
            self._config = config
        self.config_file.write_text(self.config.model_dump_json(indent=2))

    def get(self, key: str) -> Any:
        """Value of a dotted key, or None when no such setting exists."""
        try:
            section, field = split_key(key)
        except KeyError:
            return None
        return getattr(getattr(self.config, section), field)

    def set(self, key: str, value: Any) -> None:
        """Validate and store one setting.

        Raises:
            KeyError: If *key* does not name a setting.
            ValidationError: If *value* is not valid for the setting.
        """
        section, field = split_key(key)
        data = self.config.model_dump()
        data[section][field] = value

        self._config = Config.model_validate(data)
        self.save_config()
        logger.info("Config %s set for profile %s", key, self.profile)

    def reset(self, key: Optional[str] = None) -> None:
        """Restore one setting, or the whole profile, to the defaults."""
        if key is None:
            self.save_config(Config())
            logger.info("Config reset for profile %s", self.profile)
            return
        section, field = split_key(key)
        self.set(key, getattr(getattr(Config(), section), field))

    def save_credentials(self, token: str) -> None:
        """Store the bearer token, readable by the owner only."""
        self.credentials_file.write_text(Credentials(token=token).model_dump_json(indent=2))
        self.credentials_file.chmod(0o600)

    def load_credentials(self) -> Optional[Credentials]:
        """Read the stored credentials, if there are any."""
        if not self.credentials_file.exists():
            return None
        try:
            return Credentials.model_validate_json(self.credentials_file.read_text())
        except ValidationError as e:
            logger.warning("Could not read credentials: %s", e)
            return None

    def get_token(self) -> Optional[str]:
        """Return the stored bearer token, if any."""
        credentials = self.load_credentials()
        if credentials and credentials.token:
            return credentials.token
        return None

    def clear_credentials(self) -> None:
        """Forget the stored bearer token."""
        self.credentials_file.unlink(missing_ok=True)


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
