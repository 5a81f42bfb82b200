"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .domain.exceptions import ConfigError, InvalidTimezone
from .domain.models import WorkSchedulePattern
from .domain.parsing import LOCAL, resolve_timezone

CONFIG_FILE_NAME = "calendarkit.yaml"


class ScheduleDefaults(BaseModel):
    """Default work/off pattern for the schedule command."""
    work_days: int = 1
    off_days: int = 3

    @field_validator("work_days")
    @classmethod
    def validate_work_days(cls, value: int) -> int:
        """Ensure a cycle has at least one working day."""
        if value <= 0:
            raise ValueError("work_days must be greater than zero")
        return value

    @field_validator("off_days")
    @classmethod
    def validate_off_days(cls, value: int) -> int:
        """Ensure days off are not negative."""
        if value < 0:
            raise ValueError("off_days must not be negative")
        return value

    def to_pattern(self) -> WorkSchedulePattern:
        """Get the defaults as a domain pattern."""
        return WorkSchedulePattern(work_days=self.work_days, off_days=self.off_days)


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = LOCAL
    schedule: ScheduleDefaults = Field(default_factory=ScheduleDefaults)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone name can be resolved."""
        try:
            resolve_timezone(value)
        except InvalidTimezone as exc:
            raise ValueError(str(exc)) from exc
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            ConfigError: If the file is missing, not valid YAML or fails validation
        """
        if not config_path.exists():
            raise ConfigError(
                f"Config file not found: {config_path}\n"
                f"Create a {CONFIG_FILE_NAME} file or omit --config to use the defaults."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError("Config file must contain a mapping at the root level.")

        try:
            return cls(**data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration in {config_path}:\n{exc}") from exc

    @classmethod
    def load_or_default(cls, config_path: Path) -> "AppConfig":
        """Load configuration, falling back to the defaults when the file is absent."""
        if not config_path.exists():
            return cls()
        return cls.load_from_yaml(config_path)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for the config in the current directory
    config_path = Path.cwd() / CONFIG_FILE_NAME

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / CONFIG_FILE_NAME

    return config_path
