# courtside/core/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from courtside.core.errors import ConfigError

DEFAULT_BASE_URL = "https://api.opticodds.com/api/v3"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


def _env_timezone(name: str, default: str) -> str:
    tz = (os.getenv(name) or default).strip()
    try:
        ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigError(f"{name} is not a known IANA timezone: {tz!r}")
    return tz


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str]
    base_url: str
    sport: str
    league: str
    sportsbook: str
    odds_format: str
    batch_size: int
    timezone: str
    http_timeout: float
    refresh_seconds: int
    log_level: str

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigError("OPTICODDS_API_KEY is not set")
        return self.api_key


def load_settings() -> Settings:
    batch_size = _env_int("COURTSIDE_BATCH_SIZE", 5)
    if batch_size < 1:
        raise ValueError("COURTSIDE_BATCH_SIZE must be >= 1")

    return Settings(
        api_key=os.getenv("OPTICODDS_API_KEY") or None,
        base_url=(os.getenv("OPTICODDS_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
        sport=os.getenv("COURTSIDE_SPORT", "basketball"),
        league=os.getenv("COURTSIDE_LEAGUE", "nba"),
        sportsbook=os.getenv("COURTSIDE_SPORTSBOOK", "FanDuel"),
        odds_format=os.getenv("COURTSIDE_ODDS_FORMAT", "AMERICAN"),
        batch_size=batch_size,
        timezone=_env_timezone("COURTSIDE_TIMEZONE", "America/Los_Angeles"),
        http_timeout=_env_float("COURTSIDE_HTTP_TIMEOUT", 10.0),
        refresh_seconds=_env_int("COURTSIDE_REFRESH_SECONDS", 30),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


def _reset_settings_cache_for_tests() -> None:
    get_settings.cache_clear()
