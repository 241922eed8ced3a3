"""Test fixtures shared by unit/integration tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from storebot.recommend.region_catalog import RegionCatalog

CATALOG_PATH = Path(__file__).resolve().parents[1] / "data" / "regions.yaml"


@pytest.fixture
def catalog() -> RegionCatalog:
    return RegionCatalog.from_yaml(CATALOG_PATH)
