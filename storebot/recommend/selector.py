"""Engine layer: bounded, randomized or proximity-ranked picks from a region's pool."""

from __future__ import annotations

import random
from collections.abc import Sequence

from storebot.recommend.distance import distance_km
from storebot.recommend.models import Business, Coordinate

DEFAULT_TARGET_COUNT = 3


def select_by_region_and_category(
    pool: Sequence[Business],
    category: str | None,
    target_count: int = DEFAULT_TARGET_COUNT,
    rng: random.Random | None = None,
) -> list[Business]:
    """Pick up to ``target_count`` businesses, preferring ``category`` when given.

    Matching and non-matching businesses are shuffled separately so every
    match outranks every non-match; the remainder only fills the gap.
    """
    if target_count <= 0 or not pool:
        return []
    source = rng if rng is not None else random.Random()

    if not category:
        shuffled = list(pool)
        source.shuffle(shuffled)
        return shuffled[:target_count]

    matching = [item for item in pool if item.category == category]
    others = [item for item in pool if item.category != category]
    source.shuffle(matching)
    source.shuffle(others)
    picked = matching[:target_count]
    remaining = target_count - len(picked)
    if remaining > 0:
        picked.extend(others[:remaining])
    return picked


def rank_nearest(
    pool: Sequence[Business],
    origin: Coordinate,
    target_count: int = DEFAULT_TARGET_COUNT,
) -> list[tuple[Business, float]]:
    """Closest ``target_count`` businesses with a coordinate, paired with their distance."""
    if target_count <= 0:
        return []
    ranked = [
        (item, distance_km(origin, item.coordinate))
        for item in pool
        if item.coordinate is not None
    ]
    ranked.sort(key=lambda pair: pair[1])
    return ranked[:target_count]


def select_nearest(
    pool: Sequence[Business],
    origin: Coordinate,
    target_count: int = DEFAULT_TARGET_COUNT,
) -> list[Business]:
    return [item for item, _ in rank_nearest(pool, origin, target_count)]
