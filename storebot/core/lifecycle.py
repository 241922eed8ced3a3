"""Lifecycle hooks for startup diagnostics."""

from __future__ import annotations

from storebot.core.container import AppContainer
from storebot.infra.observability.logger import get_logger

logger = get_logger(__name__)


def on_startup(container: AppContainer) -> None:
    logger.info("Business store loaded: %s", container.store.health())
    logger.info(
        "Region catalog loaded: cities=%s categories=%s",
        len(container.catalog.cities()),
        len(container.catalog.categories()),
    )
    if not container.geocoder.enabled:
        logger.warning("GOOGLE_MAPS_API_KEY is not set; shared locations resolve from address text only.")
    if not container.reply_client.enabled:
        logger.warning("LINE_CHANNEL_ACCESS_TOKEN is not set; replies are logged but not delivered.")


def on_shutdown() -> None:
    logger.info("Store bot shutdown complete.")
