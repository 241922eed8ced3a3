"""HTTP API layer: direct recommendation queries outside the chat flow."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from storebot.api.deps import get_container
from storebot.core.container import AppContainer
from storebot.protocol.messages import RecommendationDto, RecommendationResponse
from storebot.recommend.address_resolver import normalize_address_text
from storebot.recommend.models import Coordinate, ResolvedLocation

router = APIRouter(prefix="/api/v1/recommendations", tags=["recommendations"])


@router.get("", response_model=RecommendationResponse)
def recommend_by_region(
    city: str = Query(..., min_length=1),
    district: str = Query(..., min_length=1),
    category: str | None = Query(default=None),
    count: int | None = Query(default=None, ge=1, le=20),
    container: AppContainer = Depends(get_container),
) -> RecommendationResponse:
    location = ResolvedLocation(
        city=normalize_address_text(city.strip()),
        district=normalize_address_text(district.strip()),
    )
    if not container.catalog.is_supported_district(location.city, location.district):
        raise HTTPException(status_code=404, detail=f"region '{city}{district}' is not supported")
    wanted = category.strip() if category and category.strip() else None
    items = container.recommender.recommend_by_region(location, wanted, count=count)
    return RecommendationResponse(
        city=location.city,
        district=location.district,
        category=wanted,
        items=[RecommendationDto.from_recommendation(item) for item in items],
    )


@router.get("/nearby", response_model=RecommendationResponse)
def recommend_nearby(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    address: str | None = Query(default=None),
    count: int | None = Query(default=None, ge=1, le=20),
    container: AppContainer = Depends(get_container),
) -> RecommendationResponse:
    origin = Coordinate(lat=lat, lng=lng)
    location = container.recommender.resolve_location(origin, address)
    if location is None:
        raise HTTPException(status_code=404, detail="location is outside the supported regions")
    items = container.recommender.recommend_nearby(location, origin, count=count)
    return RecommendationResponse(
        city=location.city,
        district=location.district,
        items=[RecommendationDto.from_recommendation(item) for item in items],
    )
