"""Configuration management for the calendar engine."""

from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .engine.registry import CalendarRegistry
from .utils.exceptions import CalendarEngineError, ConfigurationError

load_dotenv()


class AppConfig(BaseSettings):
    """Application configuration."""

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: Optional[Path] = Field(default=None, validation_alias="LOG_FILE")

    # Export
    export_dir: Path = Field(default=Path("exports"), validation_alias="CALENDAR_EXPORT_DIR")

    # Calendar created at startup
    default_calendar_name: str = Field(default="Default", validation_alias="DEFAULT_CALENDAR_NAME")
    default_timezone: str = Field(default="UTC", validation_alias="DEFAULT_TIMEZONE")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        env_parse_none_str="",  # Treat empty string as None
    )


class CalendarEntry:
    """A calendar to create at startup."""

    def __init__(self, name: str, data: Optional[dict[str, Any]], default_timezone: str = "UTC"):
        data = data or {}
        self.name = name
        self.timezone: str = data.get("timezone", default_timezone)


class StartupConfig:
    """Startup calendars loaded from YAML."""

    def __init__(
        self,
        config_path: Path = Path("calendars.yaml"),
        default_timezone: str = "UTC",
    ):
        self.calendars: dict[str, CalendarEntry] = {}
        self.use: Optional[str] = None

        if config_path.exists():
            with open(config_path) as f:
                try:
                    data = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e

            if not isinstance(data, dict):
                raise ConfigurationError(f"Invalid config file {config_path}: expected a mapping")

            for name, entry in (data.get("calendars") or {}).items():
                self.calendars[str(name)] = CalendarEntry(str(name), entry, default_timezone)
            self.use = data.get("use")

    @property
    def has_config(self) -> bool:
        return len(self.calendars) > 0 or self.use is not None

    def apply(self, registry: CalendarRegistry) -> None:
        """
        Create the configured calendars and activate the selected one.

        Calendars already present in the registry are left as they are.

        Raises:
            ConfigurationError: If a calendar cannot be created or the
                calendar to use does not exist
        """
        for entry in self.calendars.values():
            if entry.name in registry:
                continue
            try:
                registry.add_calendar(entry.name, entry.timezone)
            except CalendarEngineError as e:
                raise ConfigurationError(f"Calendar '{entry.name}': {e}") from e

        if self.use is not None:
            if self.use not in registry:
                raise ConfigurationError(f"Calendar to use is not configured: {self.use}")
            registry.use_calendar(self.use)


# Global config instance
config = AppConfig()
