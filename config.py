"""
Service configuration loaded from the environment (and a local .env file).

Environment variables:
    NASA_API_KEY           NeoWs API key (API_KEY is accepted as a fallback)
    NASA_NEO_BASE_URL      NeoWs base URL              (default https://api.nasa.gov)
    APP_TIMEZONE           zone that defines "today"   (default America/Toronto)
    NEO_CACHE_TTL_SECONDS  lifetime of a cached day    (default 3600)
    NEO_CACHE_MAX_SIZE     max cached (date, zone) keys (default 10)
    NASA_TIMEOUT_SECONDS   upstream request timeout    (default 10)
    LOG_LEVEL              root log level              (default INFO)
    LOG_FILE               also log to this file       (default: stdout only)

A missing API key is not an error here; NeoWsClient reports it per request.
"""

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.nasa.gov"
DEFAULT_TIMEZONE = "America/Toronto"
DEFAULT_CACHE_TTL_SECONDS = 3600.0
DEFAULT_CACHE_MAX_SIZE = 10
DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class Settings:
    nasa_api_key: str
    nasa_base_url: str
    timezone: ZoneInfo
    cache_ttl_seconds: float
    cache_max_size: int
    timeout_seconds: float
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @property
    def timezone_id(self) -> str:
        return self.timezone.key


def _positive_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if not value > 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def _positive_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def _zone(zone_id: str) -> ZoneInfo:
    try:
        return ZoneInfo(zone_id)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"APP_TIMEZONE is not a known timezone: {zone_id!r}") from exc


def load_settings() -> Settings:
    """Read Settings from the process environment, after loading .env."""
    load_dotenv()

    api_key = os.getenv("NASA_API_KEY") or os.getenv("API_KEY") or ""
    base_url = os.getenv("NASA_NEO_BASE_URL", "").strip() or DEFAULT_BASE_URL
    zone_id = os.getenv("APP_TIMEZONE", "").strip() or DEFAULT_TIMEZONE

    return Settings(
        nasa_api_key=api_key.strip(),
        nasa_base_url=base_url.rstrip("/"),
        timezone=_zone(zone_id),
        cache_ttl_seconds=_positive_float("NEO_CACHE_TTL_SECONDS", DEFAULT_CACHE_TTL_SECONDS),
        cache_max_size=_positive_int("NEO_CACHE_MAX_SIZE", DEFAULT_CACHE_MAX_SIZE),
        timeout_seconds=_positive_float("NASA_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        log_level=os.getenv("LOG_LEVEL", "").strip() or "INFO",
        log_file=os.getenv("LOG_FILE", "").strip() or None,
    )


def system_clock(zone: ZoneInfo) -> Callable[[], datetime]:
    """Clock returning the current wall time in the given zone."""
    return lambda: datetime.now(zone)
