"""Engine layer: static table of supported cities, their districts and browse categories."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

import yaml


class RegionCatalogError(ValueError):
    """Raised when the catalog source violates uniqueness or shape rules."""


class RegionCatalog:
    """Immutable city -> districts mapping, constructed once at startup.

    Lookups are exact string matches; callers normalize variant characters
    before asking.
    """

    def __init__(
        self,
        regions: Mapping[str, Iterable[str]],
        categories: Iterable[str] = (),
    ) -> None:
        ordered: dict[str, tuple[str, ...]] = {}
        for city, districts in regions.items():
            city_name = str(city).strip()
            if not city_name:
                raise RegionCatalogError("empty city name")
            if city_name in ordered:
                raise RegionCatalogError(f"duplicate city: {city_name}")
            names = tuple(str(item).strip() for item in districts)
            if len(set(names)) != len(names):
                raise RegionCatalogError(f"duplicate district under {city_name}")
            if any(not name for name in names):
                raise RegionCatalogError(f"empty district name under {city_name}")
            ordered[city_name] = names
        self._ordered = MappingProxyType(ordered)
        self._district_sets = MappingProxyType(
            {city: frozenset(names) for city, names in ordered.items()}
        )
        self._categories = tuple(dict.fromkeys(str(item).strip() for item in categories if str(item).strip()))

    @classmethod
    def from_yaml(cls, path: Path) -> "RegionCatalog":
        if not path.exists():
            raise FileNotFoundError(f"Region catalog file not found: {path}")
        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise RegionCatalogError(f"invalid catalog yaml: {path}") from exc
        if not isinstance(raw, dict) or not isinstance(raw.get("cities"), dict):
            raise RegionCatalogError(f"catalog must define a 'cities' mapping: {path}")
        regions: dict[str, list[str]] = {}
        for city, districts in raw["cities"].items():
            if not isinstance(districts, list):
                raise RegionCatalogError(f"districts of {city} must be a list")
            regions[str(city)] = [str(item) for item in districts]
        categories = raw.get("categories") or []
        if not isinstance(categories, list):
            raise RegionCatalogError("categories must be a list")
        return cls(regions, categories)

    def is_supported_city(self, name: str | None) -> bool:
        return bool(name) and name in self._district_sets

    def is_supported_district(self, city: str | None, name: str | None) -> bool:
        if not city or not name:
            return False
        districts = self._district_sets.get(city)
        return districts is not None and name in districts

    def cities(self) -> list[str]:
        """Supported cities in catalog order."""
        return list(self._ordered.keys())

    def districts(self, city: str) -> list[str]:
        """Districts of one city in catalog order; empty for unsupported cities."""
        return list(self._ordered.get(city, ()))

    def categories(self) -> list[str]:
        return list(self._categories)

    def is_supported_category(self, name: str | None) -> bool:
        return bool(name) and name in self._categories
