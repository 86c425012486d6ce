from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from attendance_dashboard.config.user_settings_store import UserSettingsStore

BASE_DIR = Path(__file__).resolve().parents[2]
ENV_PATH = BASE_DIR / ".env"
load_dotenv(ENV_PATH)

APP_NAME = os.getenv("APP_NAME", "Attendance Dashboard")
user_settings_store = UserSettingsStore()


@dataclass(frozen=True)
class Settings:
    app_name: str = APP_NAME
    api_base_url: str = (
        os.getenv("API_BASE_URL") or user_settings_store.get("api_url")
    ).rstrip("/")
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "15"))
    language: str = os.getenv("DASHBOARD_LANGUAGE") or user_settings_store.get("language", "en")
    appearance_mode: str = user_settings_store.get("appearance_mode", "dark")
    access_token: str | None = os.getenv("ACCESS_TOKEN") or user_settings_store.get("access_token")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_file: Path | None = (
        Path(log_path) if (log_path := os.getenv("LOG_FILE")) else None
    )

    def __repr__(self) -> str:
        return (
            f"Settings(app_name={self.app_name}, "
            f"api_base_url={self.api_base_url}, "
            f"request_timeout={self.request_timeout}, "
            f"language={self.language}, "
            f"appearance_mode={self.appearance_mode}, "
            f"access_token={'set' if self.access_token else 'unset'}, "
            f"log_level={self.log_level}, "
            f"log_file={self.log_file})"
        )


settings = Settings()


def refresh_settings_from_store() -> Settings:
    """Rebuild the settings object from the current user store values."""

    global settings  # noqa: PLW0603 - module-level singleton

    user_settings_store.reload()

    settings = Settings(
        app_name=APP_NAME,
        api_base_url=(os.getenv("API_BASE_URL") or user_settings_store.get("api_url")).rstrip("/"),
        request_timeout=settings.request_timeout,
        language=os.getenv("DASHBOARD_LANGUAGE") or user_settings_store.get("language", "en"),
        appearance_mode=user_settings_store.get("appearance_mode", "dark"),
        access_token=os.getenv("ACCESS_TOKEN") or user_settings_store.get("access_token"),
        log_level=settings.log_level,
        log_file=settings.log_file,
    )
    return settings
