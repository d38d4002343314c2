"""
Configuration management for the Git commit tracker.

This module provides centralized configuration with:
- Tracker file locations (ledger, log, global hooks directory)
- Type validation and defaults
- Logging configuration
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import BaseSettings as PydanticBaseSettings


class TrackerSettings(BaseSettings):
    """Tracker file and hook configuration settings."""

    tracker_dir: Path = Field(
        default=Path("~/.git-commit-tracker"), description="Per-user tracker directory"
    )
    ledger_filename: str = Field(
        default="daily_commits.json", description="Daily commit counts file name"
    )
    log_filename: str = Field(default="tracker.log", description="Tracker log file name")
    hooks_dir: Path = Field(
        default=Path("~/.git-hooks"), description="Global git hooks directory"
    )
    log_limit: int = Field(default=20, ge=1, description="Log lines shown by the log report")
    top_days: int = Field(default=5, ge=1, description="Busiest days shown by the stats report")

    model_config = {"env_prefix": "COMMIT_TRACKER_", "extra": "ignore"}

    @field_validator("tracker_dir", "hooks_dir")
    @classmethod
    def expand_home(cls, v):
        return Path(v).expanduser()

    @field_validator("ledger_filename", "log_filename")
    @classmethod
    def validate_filename(cls, v):
        if not v or "/" in v or "\\" in v:
            raise ValueError("File name must be a bare name without directories")
        return v

    @property
    def ledger_path(self) -> Path:
        return self.tracker_dir / self.ledger_filename

    @property
    def log_path(self) -> Path:
        return self.tracker_dir / self.log_filename


class MonitoringSettings(BaseSettings):
    """Logging configuration settings."""

    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format string",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()


class Settings(PydanticBaseSettings):
    """
    Main application settings.

    Values come from defaults, a local ``.env`` file, or environment variables
    (nested fields use ``__``, e.g. ``MONITORING__LOG_LEVEL=DEBUG``).
    """

    app_name: str = Field(default="Git Commit Tracker", description="Application name")
    version: str = Field(default="1.0.0", description="Application version")

    tracker: TrackerSettings = Field(default_factory=TrackerSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration object

    Example:
        >>> settings = get_settings()
        >>> print(settings.tracker.ledger_path)
    """
    return Settings()


# Global settings instance
settings = get_settings()


def export_config() -> Dict[str, Any]:
    """Export the effective configuration for display."""
    return {
        "app_name": settings.app_name,
        "version": settings.version,
        "tracker": {
            "tracker_dir": str(settings.tracker.tracker_dir),
            "ledger_path": str(settings.tracker.ledger_path),
            "log_path": str(settings.tracker.log_path),
            "hooks_dir": str(settings.tracker.hooks_dir),
        },
        "monitoring": {
            "log_level": settings.monitoring.log_level,
        },
    }


if __name__ == "__main__":
    import json

    print("Configuration Export:")
    print(json.dumps(export_config(), indent=2))
