from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return float(raw)


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here. Values are read when
    the instance is built, so a fresh ``get_settings()`` after
    ``get_settings.cache_clear()`` picks up environment changes.
    """

    def __init__(self) -> None:
        self.app_env: str = os.getenv("APP_ENV", "development")
        self.google_api_key: Optional[str] = os.getenv("GEMINI_API_KEY") or os.getenv(
            "GOOGLE_API_KEY"
        )
        self.gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
        self.temperature: Optional[float] = _env_float("MODEL_TEMPERATURE")
        self.prompt_include_history: bool = _env_flag("PROMPT_INCLUDE_HISTORY")
        self.history_turns: int = int(os.getenv("PROMPT_HISTORY_TURNS", "5"))
        self.chat_api_url: str = os.getenv("CHAT_API_URL", "http://127.0.0.1:8000")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
