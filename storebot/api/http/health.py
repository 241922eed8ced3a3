"""HTTP API layer: health and readiness endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from storebot.api.deps import get_container
from storebot.core.container import AppContainer

router = APIRouter(tags=["health"])


@router.get("/health")
def health(container: AppContainer = Depends(get_container)) -> dict:
    return {
        "status": "ok",
        "store": container.store.health(),
        "cities": len(container.catalog.cities()),
        "geocoder_enabled": container.geocoder.enabled,
        "env": container.settings.env,
    }
