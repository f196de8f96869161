"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Clinic Health Tools server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Loopback by default; there is no auth layer in front of the tools.
    clinic_host: str = "127.0.0.1"
    clinic_port: int = 8010
    clinic_log_level: str = "info"
    clinic_allow_insecure_bind: bool = False

    # Vaccination timetable windows (days)
    vaccination_due_window_days: int = 30
    vaccination_catch_up_days: int = 30

    # Usage tracking (in-memory only)
    usage_tracking_enabled: bool = True
    usage_recent_events: int = 200


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
