"""Unit tests for resolution fallback and open-status annotation in the service layer."""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone

import pytest

from storebot.recommend.address_resolver import AddressRegionResolver
from storebot.recommend.models import Business, Coordinate, ResolvedLocation
from storebot.recommend.region_catalog import RegionCatalog
from storebot.recommend.service import RecommendationService
from storebot.tests.factories import make_business

TAIPEI = timezone(timedelta(hours=8))
# Monday 10:00 in Taipei.
MONDAY_MORNING = datetime(2026, 10, 19, 10, 0, tzinfo=TAIPEI)
DAAN = ResolvedLocation("台北市", "大安區")
WEEKDAY_HOURS = [{"open": {"day": 1, "time": "0900"}, "close": {"day": 1, "time": "1700"}}]


class _ListStore:
    def __init__(self, businesses: list[Business]) -> None:
        self._businesses = businesses
        self.calls: list[tuple[str, str]] = []

    def list_by_region(self, city: str, district: str) -> list[Business]:
        self.calls.append((city, district))
        return [item for item in self._businesses if (item.city, item.district) == (city, district)]


class _StubGeocoder:
    def __init__(self, components: list[dict] | None) -> None:
        self._components = components
        self.calls = 0

    def reverse_geocode(self, coordinate: Coordinate) -> list[dict] | None:
        self.calls += 1
        return self._components


def _service(
    catalog: RegionCatalog,
    businesses: list[Business],
    components: list[dict] | None = None,
) -> tuple[RecommendationService, _StubGeocoder]:
    geocoder = _StubGeocoder(components)
    service = RecommendationService(
        store=_ListStore(businesses),
        resolver=AddressRegionResolver(catalog),
        geocoder=geocoder,
        tz=TAIPEI,
        target_count=3,
        rng=random.Random(3),
    )
    return service, geocoder


def test_address_text_short_circuits_the_geocoder(catalog: RegionCatalog) -> None:
    service, geocoder = _service(catalog, [])

    resolved = service.resolve_location(Coordinate(25.03, 121.53), "106台北市大安區信義路")

    assert resolved == DAAN
    assert geocoder.calls == 0


def test_geocoder_is_used_when_text_does_not_resolve(catalog: RegionCatalog) -> None:
    components = [
        {"long_name": "臺北市", "types": ["administrative_area_level_1"]},
        {"long_name": "信義區", "types": ["administrative_area_level_3"]},
    ]
    service, geocoder = _service(catalog, [], components)

    resolved = service.resolve_location(Coordinate(25.03, 121.56), "somewhere near the tower")

    assert resolved == ResolvedLocation("台北市", "信義區")
    assert geocoder.calls == 1


def test_geocoder_failure_is_a_plain_no_match(catalog: RegionCatalog) -> None:
    service, _ = _service(catalog, [], None)
    assert service.resolve_location(Coordinate(24.99, 121.30), None) is None


def test_region_recommendations_are_annotated(catalog: RegionCatalog) -> None:
    businesses = [
        make_business("cafe", category="咖啡廳", opening_hours=WEEKDAY_HOURS),
        make_business("food", category="餐廳", opening_hours=[]),
        make_business("late", category="餐廳", opening_hours=[
            {"open": {"day": 1, "time": "1800"}, "close": {"day": 2, "time": "0200"}}
        ]),
    ]
    service, _ = _service(catalog, businesses)

    items = service.recommend_by_region(DAAN, "咖啡廳", now=MONDAY_MORNING)

    assert items[0].business.id == "cafe"
    statuses = {item.business.id: item.open_status for item in items}
    assert statuses == {"cafe": "open", "food": "unknown", "late": "closed"}
    assert all(item.distance_km is None for item in items)


def test_count_override_and_empty_region(catalog: RegionCatalog) -> None:
    businesses = [make_business(f"s{idx}") for idx in range(5)]
    service, _ = _service(catalog, businesses)

    assert len(service.recommend_by_region(DAAN, None, now=MONDAY_MORNING, count=1)) == 1
    assert service.recommend_by_region(ResolvedLocation("台北市", "信義區"), None) == []


def test_nearby_recommendations_carry_distances(catalog: RegionCatalog) -> None:
    origin = Coordinate(25.0330, 121.5300)
    businesses = [
        make_business("far", coordinate=(25.0500, 121.5600)),
        make_business("near", coordinate=(25.0331, 121.5301), opening_hours=WEEKDAY_HOURS),
        make_business("nowhere"),
    ]
    service, _ = _service(catalog, businesses)

    items = service.recommend_nearby(DAAN, origin, now=MONDAY_MORNING)

    assert [item.business.id for item in items] == ["near", "far"]
    assert items[0].open_status == "open"
    assert items[0].distance_km == pytest.approx(0.0148, abs=0.002)
    assert items[0].distance_km < items[1].distance_km
