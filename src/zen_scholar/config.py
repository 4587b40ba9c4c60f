# src/zen_scholar/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "ZEN"

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_MODELS = ["gemini-2.5-flash"]


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


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


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    user_name: str
    console_color: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    kv_db_path: Path

    # ---- LLM (OpenAI-compatible endpoint) ----
    llm_api_key: str | None
    llm_base_url: str
    llm_models: list[str]
    llm_timeout_seconds: float
    llm_connect_timeout_seconds: float

    @staticmethod
    def from_env() -> Settings:
        app_name = _env(_k("APP_NAME"), "Zen Scholar")
        log_level = _env(_k("LOG_LEVEL"), "WARNING")
        user_name = _env(_k("USER_NAME"), "Student")
        console_color = _env_bool(_k("CONSOLE_COLOR"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/zen_scholar"))
        kv_db_path = _env_path(_k("KV_DB_PATH"), data_dir / "storage.sqlite3")

        # Also accept the generic names used by Gemini quickstarts.
        llm_api_key = _first_env(_k("LLM_API_KEY"), "GEMINI_API_KEY", "API_KEY", default=None)
        llm_base_url = _env(_k("LLM_BASE_URL"), DEFAULT_BASE_URL)
        llm_models = _env_list(_k("LLM_MODELS"), DEFAULT_MODELS)

        llm_timeout_seconds = max(1.0, _env_float(_k("LLM_TIMEOUT_SECONDS"), 30.0))
        llm_connect_timeout_seconds = max(
            0.5, _env_float(_k("LLM_CONNECT_TIMEOUT_SECONDS"), 5.0)
        )

        return Settings(
            app_name=app_name,
            log_level=log_level,
            user_name=user_name,
            console_color=console_color,
            data_dir=data_dir,
            kv_db_path=kv_db_path,
            llm_api_key=llm_api_key,
            llm_base_url=llm_base_url,
            llm_models=llm_models,
            llm_timeout_seconds=llm_timeout_seconds,
            llm_connect_timeout_seconds=llm_connect_timeout_seconds,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
