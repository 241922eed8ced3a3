"""Unit tests for haversine distance."""

from __future__ import annotations

import math

from storebot.recommend.distance import distance_km
from storebot.recommend.models import Coordinate

TAIPEI_101 = Coordinate(lat=25.0340, lng=121.5645)
TAIPEI_MAIN_STATION = Coordinate(lat=25.0478, lng=121.5170)


def test_identical_points_are_exactly_zero() -> None:
    assert distance_km(TAIPEI_101, Coordinate(lat=25.0340, lng=121.5645)) == 0.0


def test_distance_is_symmetric() -> None:
    forward = distance_km(TAIPEI_101, TAIPEI_MAIN_STATION)
    backward = distance_km(TAIPEI_MAIN_STATION, TAIPEI_101)
    assert math.isclose(forward, backward, rel_tol=1e-12)


def test_known_city_distance() -> None:
    assert 4.9 < distance_km(TAIPEI_101, TAIPEI_MAIN_STATION) < 5.15


def test_one_degree_of_latitude() -> None:
    assert math.isclose(distance_km(Coordinate(0.0, 0.0), Coordinate(1.0, 0.0)), 111.195, abs_tol=0.01)


def test_antipodal_points_stay_finite() -> None:
    result = distance_km(Coordinate(0.0, 0.0), Coordinate(0.0, 180.0))
    assert math.isclose(result, math.pi * 6371.0, rel_tol=1e-9)
