"""Configuration layer: load bot runtime settings from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

PACKAGE_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_DISTRICT_LEVELS = ("administrative_area_level_3", "administrative_area_level_2")


def _resolve_path(path_like: str) -> Path:
    candidate = Path(path_like)
    if candidate.is_absolute():
        return candidate
    if candidate.exists():
        return candidate
    rooted = PACKAGE_ROOT / candidate
    if rooted.exists():
        return rooted
    return candidate


def _env_optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return int(raw)


def _env_levels(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    levels = tuple(item.strip() for item in raw.split(",") if item.strip())
    return levels or default


@dataclass(frozen=True)
class Settings:
    """Immutable bot settings shared by the container, dialog and API layers."""

    app_name: str = "Taiwan Store Bot"
    app_version: str = "0.1.0"
    env: str = "dev"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000
    store_jsonl_path: Path = Path("data/stores.jsonl")
    region_catalog_path: Path = Path("data/regions.yaml")
    timezone: str = "Asia/Taipei"
    recommendation_count: int = 3
    recommendation_seed: int | None = None
    geocode_district_levels: tuple[str, ...] = DEFAULT_DISTRICT_LEVELS
    google_maps_api_key: str = ""
    google_maps_base_url: str = "https://maps.googleapis.com"
    google_maps_language: str = "zh-TW"
    google_maps_timeout_seconds: float = 5.0
    line_channel_access_token: str = ""
    line_api_base_url: str = "https://api.line.me"
    line_timeout_seconds: float = 5.0
    session_ttl_seconds: int = 900

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from process env with deterministic defaults."""
        return cls(
            app_name=os.getenv("APP_NAME", cls.app_name),
            app_version=os.getenv("APP_VERSION", cls.app_version),
            env=os.getenv("APP_ENV", cls.env),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", str(cls.port))),
            store_jsonl_path=_resolve_path(os.getenv("STORE_DATA_JSONL", str(cls.store_jsonl_path))),
            region_catalog_path=_resolve_path(
                os.getenv("REGION_CATALOG_PATH", str(cls.region_catalog_path))
            ),
            timezone=os.getenv("BOT_TIMEZONE", cls.timezone),
            recommendation_count=int(
                os.getenv("RECOMMENDATION_COUNT", str(cls.recommendation_count))
            ),
            recommendation_seed=_env_optional_int("RECOMMENDATION_SEED"),
            geocode_district_levels=_env_levels(
                "GEOCODE_DISTRICT_LEVELS", cls.geocode_district_levels
            ),
            google_maps_api_key=os.getenv("GOOGLE_MAPS_API_KEY", cls.google_maps_api_key),
            google_maps_base_url=os.getenv("GOOGLE_MAPS_BASE_URL", cls.google_maps_base_url),
            google_maps_language=os.getenv("GOOGLE_MAPS_LANGUAGE", cls.google_maps_language),
            google_maps_timeout_seconds=float(
                os.getenv("GOOGLE_MAPS_TIMEOUT_SECONDS", str(cls.google_maps_timeout_seconds))
            ),
            line_channel_access_token=os.getenv(
                "LINE_CHANNEL_ACCESS_TOKEN", cls.line_channel_access_token
            ),
            line_api_base_url=os.getenv("LINE_API_BASE_URL", cls.line_api_base_url),
            line_timeout_seconds=float(
                os.getenv("LINE_TIMEOUT_SECONDS", str(cls.line_timeout_seconds))
            ),
            session_ttl_seconds=int(
                os.getenv("SESSION_TTL_SECONDS", str(cls.session_ttl_seconds))
            ),
        )
