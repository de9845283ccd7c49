"""
Environment settings (.env is loaded once on import).
"""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _optional_env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


class Settings:
    DEFAULT_GAMMA_API_URL = "https://public-api.gamma.app"
    DEFAULT_STORAGE_DIR = os.path.join("data", "presentations")

    def __init__(
        self,
        gamma_api_key: Optional[str] = None,
        gamma_api_url: str = DEFAULT_GAMMA_API_URL,
        gamma_theme_id: Optional[str] = None,
        storage_dir: Optional[str] = DEFAULT_STORAGE_DIR,
        public_base_url: Optional[str] = None,
        poll_attempts: int = 60,
        poll_interval_sec: int = 5,
        log_level: str = "INFO",
    ) -> None:
        self.gamma_api_key = gamma_api_key
        self.gamma_api_url = gamma_api_url.rstrip("/")
        self.gamma_theme_id = gamma_theme_id
        self.storage_dir = storage_dir
        self.public_base_url = public_base_url
        self.poll_attempts = poll_attempts
        self.poll_interval_sec = poll_interval_sec
        self.log_level = log_level

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            gamma_api_key=_optional_env("GAMMA_API_KEY") or _optional_env("GAMMA_API"),
            gamma_api_url=_optional_env("GAMMA_API_URL") or cls.DEFAULT_GAMMA_API_URL,
            gamma_theme_id=_optional_env("GAMMA_THEME_ID"),
            storage_dir=_optional_env("PRESENTATION_STORAGE_DIR") or cls.DEFAULT_STORAGE_DIR,
            public_base_url=_optional_env("PRESENTATION_PUBLIC_BASE_URL"),
            poll_attempts=_int_env("GAMMA_POLL_ATTEMPTS", 60),
            poll_interval_sec=_int_env("GAMMA_POLL_INTERVAL_SEC", 5),
            log_level=(_optional_env("LOG_LEVEL") or "INFO").upper(),
        )
