"""Geo infra: Google reverse-geocoding over plain HTTP, failing soft to None."""

from __future__ import annotations

import http.client
import json
from dataclasses import dataclass
from typing import Any
from urllib import error, parse, request

from storebot.infra.observability.logger import get_logger
from storebot.recommend.models import Coordinate

logger = get_logger(__name__)


@dataclass(frozen=True)
class GeocodingConfig:
    """Runtime config for the Google Geocoding web service."""

    api_key: str
    base_url: str = "https://maps.googleapis.com"
    language: str = "zh-TW"
    timeout_seconds: float = 5.0


class GoogleGeocodingClient:
    """Reverse geocoder returning the address components of the best result."""

    def __init__(self, config: GeocodingConfig) -> None:
        self._config = config

    @property
    def enabled(self) -> bool:
        return bool(self._config.api_key.strip())

    def reverse_geocode(self, coordinate: Coordinate) -> list[dict[str, Any]] | None:
        if not self.enabled:
            logger.warning("geo.reverse.skipped reason=missing_api_key")
            return None

        query = parse.urlencode(
            {
                "latlng": f"{coordinate.lat},{coordinate.lng}",
                "key": self._config.api_key,
                "language": self._config.language,
            }
        )
        url = self._config.base_url.rstrip("/") + "/maps/api/geocode/json?" + query
        req = request.Request(url, method="GET")
        try:
            with request.urlopen(req, timeout=self._config.timeout_seconds) as resp:
                raw = resp.read().decode("utf-8", errors="replace")
        except (error.URLError, http.client.HTTPException, OSError) as exc:
            logger.warning("geo.reverse.failed lat=%s lng=%s error=%s", coordinate.lat, coordinate.lng, exc)
            return None

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("geo.reverse.failed reason=bad_json")
            return None

        if not isinstance(payload, dict):
            return None
        status = payload.get("status")
        results = payload.get("results")
        if status != "OK" or not isinstance(results, list) or not results:
            logger.info("geo.reverse.no_result status=%s", status)
            return None
        first = results[0] if isinstance(results[0], dict) else {}
        components = first.get("address_components")
        if not isinstance(components, list):
            return None
        return components
