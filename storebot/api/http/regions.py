"""HTTP API layer: supported region and category lists for menus and clients."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from storebot.api.deps import get_container
from storebot.core.container import AppContainer
from storebot.protocol.messages import RegionItemDto
from storebot.recommend.address_resolver import normalize_address_text

router = APIRouter(prefix="/api/v1/regions", tags=["regions"])


@router.get("/cities", response_model=list[RegionItemDto])
def list_cities(container: AppContainer = Depends(get_container)) -> list[RegionItemDto]:
    return [RegionItemDto(name=name) for name in container.catalog.cities()]


@router.get("/districts", response_model=list[RegionItemDto])
def list_districts(
    city: str = Query(..., min_length=1),
    container: AppContainer = Depends(get_container),
) -> list[RegionItemDto]:
    canonical = normalize_address_text(city.strip())
    if not container.catalog.is_supported_city(canonical):
        raise HTTPException(status_code=404, detail=f"city '{city}' is not supported")
    return [RegionItemDto(name=name) for name in container.catalog.districts(canonical)]


@router.get("/categories", response_model=list[str])
def list_categories(container: AppContainer = Depends(get_container)) -> list[str]:
    return container.catalog.categories()
