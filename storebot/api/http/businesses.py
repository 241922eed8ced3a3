"""HTTP API layer: single business lookup."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from storebot.api.deps import get_container
from storebot.core.container import AppContainer
from storebot.protocol.messages import BusinessDto

router = APIRouter(prefix="/api/v1/businesses", tags=["businesses"])


@router.get("/{business_id}", response_model=BusinessDto)
def get_business_detail(
    business_id: str,
    container: AppContainer = Depends(get_container),
) -> BusinessDto:
    business = container.store.get_business(business_id)
    if business is None:
        raise HTTPException(status_code=404, detail=f"business id={business_id} not found")
    return BusinessDto.from_business(business)
