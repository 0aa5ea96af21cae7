"""
Configuração do serviço via variáveis de ambiente (.env opcional).

Keys for the upstream news APIs are optional: a missing key disables the
corresponding provider branch regardless of the admin toggle.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

MEMORY_STORE = ":memory:"
DEFAULT_STORE_PATH = Path(__file__).resolve().parent.parent / "storage" / "data" / "store.json"


@dataclass
class AppConfig:
    newsapi_key: Optional[str] = None
    newsdata_key: Optional[str] = None
    store_path: str = str(DEFAULT_STORE_PATH)
    timezone: str = "UTC"
    http_timeout: int = 10
    max_requests_per_day: int = 100
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    app_env: str = "production"
    log_level: str = "INFO"


def _int_from_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        value = int(raw)
        return value if value > 0 else default
    except ValueError:
        logger.warning("Invalid int value for %s=%s; using default %s", key, raw, default)
        return default


def _key_from_env(key: str) -> Optional[str]:
    value = (os.getenv(key) or "").strip()
    # template default deixado no .env.example
    if not value or value == "your_key_here":
        return None
    return value


def _timezone_from_env(key: str, default: str = "UTC") -> str:
    raw = (os.getenv(key) or "").strip()
    if not raw:
        return default
    try:
        ZoneInfo(raw)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Invalid timezone for %s=%s; using default %s", key, raw, default)
        return default
    return raw


def _origins_from_env(raw: Optional[str]) -> List[str]:
    if not raw:
        return ["*"]
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


def load_config(load_env: bool = True) -> AppConfig:
    if load_env:
        load_dotenv(override=False)
    return AppConfig(
        newsapi_key=_key_from_env("NEWSAPI_KEY"),
        newsdata_key=_key_from_env("NEWSDATA_KEY"),
        store_path=os.getenv("HEADLINES_STORE_PATH") or str(DEFAULT_STORE_PATH),
        timezone=_timezone_from_env("HEADLINES_TIMEZONE"),
        http_timeout=_int_from_env("HEADLINES_HTTP_TIMEOUT", 10),
        max_requests_per_day=_int_from_env("HEADLINES_MAX_REQUESTS_PER_DAY", 100),
        cors_origins=_origins_from_env(os.getenv("CORS_ALLOWED_ORIGINS")),
        app_env=os.getenv("APP_ENV") or "production",
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
