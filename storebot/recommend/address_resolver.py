"""Engine layer: resolve free-text addresses and reverse-geocode results to catalog regions."""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Sequence
from typing import Any

from storebot.recommend.models import ResolvedLocation
from storebot.recommend.region_catalog import RegionCatalog

CITY_LEVEL = "administrative_area_level_1"
DISTRICT_SUFFIXES = "區鄉鎮市"

# Variant glyphs that name the same city token; applied after NFKC folding.
_VARIANT_GLYPHS = str.maketrans({"臺": "台"})


def normalize_address_text(text: str) -> str:
    """Fold full-width forms and variant glyphs into the catalog's canonical spelling."""
    return unicodedata.normalize("NFKC", text).translate(_VARIANT_GLYPHS)


def _component_name(component: Any) -> str | None:
    if not isinstance(component, dict):
        return None
    for key in ("long_name", "longText", "short_name", "shortText"):
        value = component.get(key)
        if isinstance(value, str) and value.strip():
            return normalize_address_text(value.strip())
    return None


def _component_types(component: Any) -> list[str]:
    if not isinstance(component, dict):
        return []
    types = component.get("types")
    if not isinstance(types, list):
        return []
    return [item for item in types if isinstance(item, str)]


class AddressRegionResolver:
    """Map addresses to (city, district) pairs, validated against one catalog."""

    def __init__(
        self,
        catalog: RegionCatalog,
        *,
        district_levels: Sequence[str] = ("administrative_area_level_3", "administrative_area_level_2"),
    ) -> None:
        self._catalog = catalog
        self._district_levels = tuple(district_levels)
        # Longest city first so a shorter city that prefixes a longer one cannot steal the match.
        cities = sorted(catalog.cities(), key=len, reverse=True)
        if cities:
            alternation = "|".join(re.escape(city) for city in cities)
            self._pattern: re.Pattern[str] | None = re.compile(
                rf"(?P<city>{alternation})(?P<district>.{{1,4}}[{DISTRICT_SUFFIXES}])"
            )
        else:
            self._pattern = None

    def resolve_from_address_text(self, text: str | None) -> ResolvedLocation | None:
        """Offline heuristic: first city+district match in the text, or None."""
        if not text or self._pattern is None:
            return None
        match = self._pattern.search(normalize_address_text(text))
        if match is None:
            return None
        return self._validated(match.group("city"), match.group("district"))

    def resolve_from_geocode_result(self, components: Any) -> ResolvedLocation | None:
        """Pick city and district from address components tagged by administrative level."""
        if not isinstance(components, list):
            return None
        city: str | None = None
        for component in components:
            if CITY_LEVEL in _component_types(component):
                city = _component_name(component)
                if city:
                    break
        if not city or not self._catalog.is_supported_city(city):
            return None
        for level in self._district_levels:
            for component in components:
                if level not in _component_types(component):
                    continue
                resolved = self._validated(city, _component_name(component))
                if resolved is not None:
                    return resolved
        return None

    def _validated(self, city: str | None, district: str | None) -> ResolvedLocation | None:
        if not city or not district:
            return None
        if not self._catalog.is_supported_city(city):
            return None
        if not self._catalog.is_supported_district(city, district):
            return None
        return ResolvedLocation(city=city, district=district)
