"""Configuration settings for casekeeper."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


def _default_home() -> Path:
    return Path.home() / ".casekeeper"


@dataclass
class Settings:
    """Main settings container."""

    # Paths
    data_file: Path = field(default_factory=lambda: _default_home() / "database.json")
    timer_ref_file: Path = field(default_factory=lambda: _default_home() / "timer_ref.yaml")
    export_dir: Path = field(default_factory=lambda: Path("./exports"))

    # Seconds between timer display refreshes
    tick_interval: float = 1.0

    # Logging
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        settings = cls()

        if data_file := os.getenv("CASEKEEPER_DATA_FILE"):
            settings.data_file = Path(data_file)

        if ref_file := os.getenv("CASEKEEPER_TIMER_REF_FILE"):
            settings.timer_ref_file = Path(ref_file)

        if export_dir := os.getenv("CASEKEEPER_EXPORT_DIR"):
            settings.export_dir = Path(export_dir)

        if interval := os.getenv("CASEKEEPER_TICK_INTERVAL"):
            try:
                settings.tick_interval = float(interval)
            except ValueError:
                pass

        if log_level := os.getenv("LOG_LEVEL"):
            settings.log_level = log_level

        if log_file := os.getenv("CASEKEEPER_LOG_FILE"):
            settings.log_file = Path(log_file)

        return settings


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def configure(settings: Optional[Settings]) -> None:
    """Set (or with None, reset) the global settings instance."""
    global _settings
    _settings = settings
