"""Service layer: fetch a region's pool, select, and annotate with live open status."""

from __future__ import annotations

import random
from datetime import datetime, tzinfo
from typing import Any, Protocol

from storebot.infra.observability.logger import get_logger
from storebot.recommend.address_resolver import AddressRegionResolver
from storebot.recommend.models import Business, Coordinate, Recommendation, ResolvedLocation
from storebot.recommend.opening_hours import status_at
from storebot.recommend.selector import rank_nearest, select_by_region_and_category

logger = get_logger(__name__)


class BusinessSource(Protocol):
    def list_by_region(self, city: str, district: str) -> list[Business]: ...


class ReverseGeocoder(Protocol):
    def reverse_geocode(self, coordinate: Coordinate) -> list[dict[str, Any]] | None: ...


class RecommendationService:
    """Per-request orchestration around the pure selection engine."""

    def __init__(
        self,
        *,
        store: BusinessSource,
        resolver: AddressRegionResolver,
        geocoder: ReverseGeocoder,
        tz: tzinfo,
        target_count: int = 3,
        rng: random.Random | None = None,
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._geocoder = geocoder
        self._tz = tz
        self._target_count = max(0, target_count)
        self._rng = rng if rng is not None else random.Random()

    @property
    def target_count(self) -> int:
        return self._target_count

    def resolve_location(
        self,
        coordinate: Coordinate,
        address_text: str | None = None,
    ) -> ResolvedLocation | None:
        """Text fast path first, then the geocoder; None means ask the user to pick."""
        resolved = self._resolver.resolve_from_address_text(address_text)
        if resolved is not None:
            logger.info("recommend.resolve source=text city=%s district=%s", resolved.city, resolved.district)
            return resolved
        components = self._geocoder.reverse_geocode(coordinate)
        if components is None:
            return None
        resolved = self._resolver.resolve_from_geocode_result(components)
        if resolved is None:
            logger.info("recommend.resolve.unsupported lat=%s lng=%s", coordinate.lat, coordinate.lng)
        else:
            logger.info("recommend.resolve source=geocode city=%s district=%s", resolved.city, resolved.district)
        return resolved

    def recommend_by_region(
        self,
        location: ResolvedLocation,
        category: str | None = None,
        *,
        now: datetime | None = None,
        count: int | None = None,
    ) -> list[Recommendation]:
        pool = self._store.list_by_region(location.city, location.district)
        picked = select_by_region_and_category(
            pool,
            category,
            self._count(count),
            rng=self._rng,
        )
        logger.info(
            "recommend.region city=%s district=%s category=%s pool=%s picked=%s",
            location.city,
            location.district,
            category or "*",
            len(pool),
            len(picked),
        )
        moment = self._now(now)
        return [
            Recommendation(business=item, open_status=status_at(item.opening_hours, moment, self._tz))
            for item in picked
        ]

    def recommend_nearby(
        self,
        location: ResolvedLocation,
        origin: Coordinate,
        *,
        now: datetime | None = None,
        count: int | None = None,
    ) -> list[Recommendation]:
        pool = self._store.list_by_region(location.city, location.district)
        ranked = rank_nearest(pool, origin, self._count(count))
        logger.info(
            "recommend.nearby city=%s district=%s pool=%s picked=%s",
            location.city,
            location.district,
            len(pool),
            len(ranked),
        )
        moment = self._now(now)
        return [
            Recommendation(
                business=item,
                open_status=status_at(item.opening_hours, moment, self._tz),
                distance_km=distance,
            )
            for item, distance in ranked
        ]

    def _count(self, count: int | None) -> int:
        return self._target_count if count is None else max(0, count)

    def _now(self, now: datetime | None) -> datetime:
        return now if now is not None else datetime.now(self._tz)
