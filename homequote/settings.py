from __future__ import annotations

import os
from dataclasses import dataclass

from homequote.presets import FLORIDA_COUNTIES

VALID_ENVS = {"local", "dev", "prod"}
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}
VALID_LOG_FORMATS = {"json", "text"}


@dataclass(frozen=True)
class Settings:
    app_name: str = "homequote"
    app_env: str = "local"
    state_file: str = "session_data.json"
    rates_file: str = ""
    log_level: str = "INFO"
    log_format: str = "json"
    default_county: str = "Broward"


_settings: Settings | None = None


def _validate_settings(settings: Settings) -> None:
    if settings.app_env not in VALID_ENVS:
        allowed = ", ".join(sorted(VALID_ENVS))
        raise ValueError(
            f"Invalid HOMEQUOTE_ENV '{settings.app_env}'. Expected one of: {allowed}."
        )

    if not settings.state_file.strip():
        raise ValueError("HOMEQUOTE_STATE_FILE must be set and non-empty.")

    if settings.log_level not in VALID_LOG_LEVELS:
        raise ValueError("HOMEQUOTE_LOG_LEVEL must be one of: DEBUG, INFO, WARNING, ERROR.")

    if settings.log_format not in VALID_LOG_FORMATS:
        raise ValueError("HOMEQUOTE_LOG_FORMAT must be 'json' or 'text'.")

    if settings.default_county not in FLORIDA_COUNTIES:
        raise ValueError(
            f"HOMEQUOTE_DEFAULT_COUNTY '{settings.default_county}' is not a Florida county."
        )


def get_settings() -> Settings:
    global _settings

    if _settings is None:
        candidate = Settings(
            app_env=os.getenv("HOMEQUOTE_ENV", "local"),
            state_file=os.getenv("HOMEQUOTE_STATE_FILE", "session_data.json"),
            rates_file=os.getenv("HOMEQUOTE_RATES_FILE", ""),
            log_level=os.getenv("HOMEQUOTE_LOG_LEVEL", "INFO").upper(),
            log_format=os.getenv("HOMEQUOTE_LOG_FORMAT", "json").lower(),
            default_county=os.getenv("HOMEQUOTE_DEFAULT_COUNTY", "Broward"),
        )
        _validate_settings(candidate)
        _settings = candidate

    return _settings


def clear_settings_cache() -> None:
    global _settings
    _settings = None
