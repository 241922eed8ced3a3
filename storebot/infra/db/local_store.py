"""Data layer: local JSONL-backed read store keyed by (city, district)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from storebot.recommend.address_resolver import normalize_address_text
from storebot.recommend.models import Business


@dataclass(frozen=True)
class LoadStats:
    """Basic diagnostics collected while loading source JSONL."""

    total_lines: int
    loaded_rows: int
    bad_lines: int


def _region_key(city: str | None, district: str | None) -> tuple[str, str] | None:
    if not city or not district:
        return None
    return normalize_address_text(city), normalize_address_text(district)


class LocalBusinessStore:
    """Read-only in-memory snapshot of business documents from `stores.jsonl`."""

    def __init__(self, businesses: list[Business], stats: LoadStats) -> None:
        self._businesses = businesses
        self._stats = stats
        self._by_id = {item.id: item for item in businesses}
        self._by_region: dict[tuple[str, str], list[Business]] = {}
        for item in businesses:
            key = _region_key(item.city, item.district)
            if key is not None:
                self._by_region.setdefault(key, []).append(item)

    @classmethod
    def from_jsonl(cls, path: Path) -> "LocalBusinessStore":
        if not path.exists():
            raise FileNotFoundError(f"Business data file not found: {path}")

        businesses: list[Business] = []
        seen: set[str] = set()
        bad_lines = 0
        total = 0

        with path.open("r", encoding="utf-8") as handle:
            for line in handle:
                total += 1
                raw_line = line.strip()
                if not raw_line:
                    bad_lines += 1
                    continue
                try:
                    payload = json.loads(raw_line)
                except json.JSONDecodeError:
                    bad_lines += 1
                    continue
                if not isinstance(payload, dict):
                    bad_lines += 1
                    continue
                business = Business.from_record(payload)
                if business is None or business.id in seen:
                    bad_lines += 1
                    continue
                seen.add(business.id)
                businesses.append(business)

        return cls(
            businesses,
            stats=LoadStats(total_lines=total, loaded_rows=len(businesses), bad_lines=bad_lines),
        )

    def health(self) -> dict[str, int]:
        """Expose basic load/quality stats for health endpoint."""
        return {
            "total_lines": self._stats.total_lines,
            "loaded_rows": self._stats.loaded_rows,
            "bad_lines": self._stats.bad_lines,
        }

    def list_by_region(self, city: str, district: str) -> list[Business]:
        """Return a fresh list with every business filed under one city/district."""
        key = _region_key(city, district)
        if key is None:
            return []
        return list(self._by_region.get(key, []))

    def get_business(self, business_id: str) -> Business | None:
        return self._by_id.get(business_id)
