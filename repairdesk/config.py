"""Application configuration loaded from config.yaml + environment variables."""

from __future__ import annotations

import yaml
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///data/repairdesk.db"


def _load_yaml() -> dict:
    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH) as f:
            return yaml.safe_load(f) or {}
    return {}


_yaml = _load_yaml()


class LineConfig(BaseSettings):
    push_url: str = "https://api.line.me/v2/bot/message/push"
    access_token: str = ""
    group_id: str = ""


class ApprovalConfig(BaseSettings):
    url: str = ""
    api_key: str = ""


class NotificationConfig(BaseSettings):
    buddhist_era: bool = True
    date_format: str = "%d/%m/%Y %H:%M"


class Settings(BaseSettings):
    database_url: str = DEFAULT_DATABASE_URL
    public_base_url: str = "http://localhost:8000"
    http_timeout: float = 10.0
    log_level: str = "INFO"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    line: LineConfig = Field(default_factory=LineConfig)
    approval: ApprovalConfig = Field(default_factory=ApprovalConfig)
    notification: NotificationConfig = Field(default_factory=NotificationConfig)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment beats the YAML values passed in as init kwargs.
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def get_settings() -> Settings:
    """Build Settings by merging YAML defaults with env overrides."""
    y = _yaml
    values: dict = {
        "database_url": y.get("database", {}).get("url", DEFAULT_DATABASE_URL),
    }
    for key in ("public_base_url", "http_timeout", "log_level", "cors_origins"):
        if key in y:
            values[key] = y[key]
    for section in ("line", "approval", "notification"):
        if y.get(section):
            values[section] = y[section]
    return Settings(**values)
