# taskboard/config.py

"""Settings loaded from environment variables (+ optional .env).

Every variable carries the TASKBOARD_ prefix. Nothing is required at import
time; the app factory reads a Settings object once and keeps it on app.state.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

ENV_PREFIX = "TASKBOARD"

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


@dataclass(frozen=True)
class Settings:
    # ---- App / logging ----
    app_name: str = "taskboard"
    log_level: str = "INFO"
    secret_key: str = "dev-secret-change-me"
    cors_origins: tuple = ("*",)
    dev_login: bool = True

    # ---- Database ----
    database_url: str = "sqlite:///./taskboard.db"

    # ---- AI recommender ----
    ai_api_key: Optional[str] = None
    ai_base_url: str = GEMINI_OPENAI_BASE_URL
    ai_model: str = "gemini-1.5-flash"
    ai_timeout_seconds: float = 15.0
    ai_rate_limit: int = 10
    ai_rate_window_seconds: float = 60.0

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            app_name=_env(_k("APP_NAME"), "taskboard"),
            log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
            secret_key=_env(_k("SECRET_KEY"), "dev-secret-change-me"),
            cors_origins=tuple(_env_list(_k("CORS_ORIGINS"), ["*"])),
            dev_login=_env_bool(_k("DEV_LOGIN"), True),
            database_url=_env(_k("DATABASE_URL"), "sqlite:///./taskboard.db"),
            ai_api_key=_first_env(_k("AI_API_KEY"), "GEMINI_API_KEY", "OPENAI_API_KEY", default=None),
            ai_base_url=_env(_k("AI_BASE_URL"), GEMINI_OPENAI_BASE_URL),
            ai_model=_env(_k("AI_MODEL"), "gemini-1.5-flash"),
            ai_timeout_seconds=_env_float(_k("AI_TIMEOUT_SECONDS"), 15.0),
            ai_rate_limit=max(1, _env_int(_k("AI_RATE_LIMIT"), 10)),
            ai_rate_window_seconds=max(1.0, _env_float(_k("AI_RATE_WINDOW_SECONDS"), 60.0)),
        )
