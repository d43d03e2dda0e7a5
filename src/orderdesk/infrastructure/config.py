"""Application configuration.

Values come from environment variables and an optional ``.env`` file.
Only the composition root reads settings; everything else receives
plain values through its constructor.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for orderdesk.

    Fields are type-checked and validated by pydantic.  Defaults are
    suitable for a single shop counter with one USB receipt printer.
    """

    # Storage
    data_dir: Path = Path("data")

    # Printer
    printer_device_path: str = "/dev/usb/lp0"
    receipt_timezone: Optional[str] = None

    # Application
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the Settings instance (created on first use)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings_for_test(**kwargs) -> Settings:
    """For testing only: replace the Settings instance with new values."""
    global _settings
    _settings = Settings(**kwargs)
    return _settings
