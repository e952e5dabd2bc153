# shared/config.py
from __future__ import annotations

import json
import logging
import os
import socket
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from shared.version import __version__

logger = logging.getLogger(__name__)

# Project root (where .env and config.json live)
BASE_DIR = Path(__file__).resolve().parents[1]

load_dotenv(BASE_DIR / ".env")
load_dotenv()

DEFAULT_API_BASE_URL = "https://api.fastly.com"
DEFAULT_TIMEOUT = 15.0
DEFAULT_LOG_LEVEL = "WARNING"


def _load_cfg() -> Dict[str, Any]:
    """
    Load the optional config.json from the project root (or cwd). Missing -> {}.
    """
    candidates = [BASE_DIR / "config.json", Path.cwd() / "config.json"]
    for p in candidates:
        try:
            if p.exists():
                data = json.loads(p.read_text(encoding="utf-8"))
                return data if isinstance(data, dict) else {}
        except (OSError, json.JSONDecodeError) as e:
            logger.exception("Could not load configuration %s: %s", p, e)
    return {}


def default_scheme() -> str:
    """Metric prefix used when none is configured: ``<hostname>.fastly``."""

    return f"{socket.gethostname()}.fastly"


class Settings:
    def __init__(self) -> None:
        cfg = _load_cfg()

        # --- Identity / headers ---
        self.USER_AGENT: str = os.getenv(
            "USER_AGENT", cfg.get("USER_AGENT", f"metrics-fastly/{__version__}")
        )

        # --- Fastly API ---
        self.FASTLY_API_BASE_URL: str = os.getenv(
            "FASTLY_API_BASE_URL", cfg.get("FASTLY_API_BASE_URL", DEFAULT_API_BASE_URL)
        )
        self.FASTLY_TIMEOUT: float = self._coerce_positive_float(
            os.getenv("FASTLY_TIMEOUT", cfg.get("FASTLY_TIMEOUT", DEFAULT_TIMEOUT)),
            DEFAULT_TIMEOUT,
        )

        # --- Credentials ---
        self.FASTLY_API_KEY: Optional[str] = self._env_or_cfg("FASTLY_API_KEY", cfg)
        self.FASTLY_USER: Optional[str] = self._env_or_cfg("FASTLY_USER", cfg)
        self.FASTLY_PASSWORD: Optional[str] = self._env_or_cfg("FASTLY_PASSWORD", cfg)

        # --- Metrics ---
        self.FASTLY_SCHEME: str = (
            self._env_or_cfg("FASTLY_SCHEME", cfg) or default_scheme()
        )

        # --- Logging ---
        self.LOG_LEVEL: str = str(
            os.getenv("LOG_LEVEL", cfg.get("LOG_LEVEL", DEFAULT_LOG_LEVEL))
        ).upper()

    @staticmethod
    def _env_or_cfg(key: str, cfg: Dict[str, Any]) -> Optional[str]:
        value = os.getenv(key)
        if value is None:
            value = cfg.get(key)
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @staticmethod
    def _coerce_positive_float(value: Any, default: float) -> float:
        try:
            number = float(value)
        except (TypeError, ValueError):
            logger.warning("Invalid numeric setting %r, using %s", value, default)
            return default
        if number <= 0:
            return default
        return number


settings = Settings()

__all__ = ["BASE_DIR", "Settings", "default_scheme", "settings"]
