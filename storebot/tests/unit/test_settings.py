"""Unit tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

from storebot.core.config import DEFAULT_DISTRICT_LEVELS, Settings


def test_settings_reads_bot_env(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("STORE_DATA_JSONL", "custom/stores.jsonl")
    monkeypatch.setenv("BOT_TIMEZONE", "Asia/Tokyo")
    monkeypatch.setenv("RECOMMENDATION_COUNT", "5")
    monkeypatch.setenv("RECOMMENDATION_SEED", "42")
    monkeypatch.setenv("GEOCODE_DISTRICT_LEVELS", "administrative_area_level_2, locality")
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "maps-key")
    monkeypatch.setenv("GOOGLE_MAPS_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("LINE_CHANNEL_ACCESS_TOKEN", "line-token")
    monkeypatch.setenv("SESSION_TTL_SECONDS", "60")

    settings = Settings.from_env()

    assert settings.port == 8080
    assert settings.store_jsonl_path == Path("custom/stores.jsonl")
    assert settings.timezone == "Asia/Tokyo"
    assert settings.recommendation_count == 5
    assert settings.recommendation_seed == 42
    assert settings.geocode_district_levels == ("administrative_area_level_2", "locality")
    assert settings.google_maps_api_key == "maps-key"
    assert settings.google_maps_timeout_seconds == 2.5
    assert settings.line_channel_access_token == "line-token"
    assert settings.session_ttl_seconds == 60


def test_settings_defaults_point_at_packaged_data(monkeypatch) -> None:
    for name in (
        "STORE_DATA_JSONL",
        "REGION_CATALOG_PATH",
        "RECOMMENDATION_COUNT",
        "RECOMMENDATION_SEED",
        "GEOCODE_DISTRICT_LEVELS",
        "BOT_TIMEZONE",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.recommendation_count == 3
    assert settings.recommendation_seed is None
    assert settings.timezone == "Asia/Taipei"
    assert settings.geocode_district_levels == DEFAULT_DISTRICT_LEVELS
    assert settings.region_catalog_path.exists()
    assert settings.store_jsonl_path.exists()
