"""Composition layer: build and hold long-lived service objects for dependency injection."""

from __future__ import annotations

import random
from dataclasses import dataclass
from zoneinfo import ZoneInfo

from storebot.core.config import Settings
from storebot.dialog.conversation import ConversationHandler
from storebot.dialog.session_state import SessionStore
from storebot.infra.db.local_store import LocalBusinessStore
from storebot.infra.geo.geocoding_client import GeocodingConfig, GoogleGeocodingClient
from storebot.infra.line.reply_client import LineReplyClient, LineReplyConfig
from storebot.recommend.address_resolver import AddressRegionResolver
from storebot.recommend.region_catalog import RegionCatalog
from storebot.recommend.service import RecommendationService


@dataclass
class AppContainer:
    """Container object attached to FastAPI app state."""

    settings: Settings
    catalog: RegionCatalog
    store: LocalBusinessStore
    resolver: AddressRegionResolver
    geocoder: GoogleGeocodingClient
    recommender: RecommendationService
    sessions: SessionStore
    conversation: ConversationHandler
    reply_client: LineReplyClient


def build_container(settings: Settings) -> AppContainer:
    """Construct runtime dependencies in one place."""
    catalog = RegionCatalog.from_yaml(settings.region_catalog_path)
    store = LocalBusinessStore.from_jsonl(settings.store_jsonl_path)
    resolver = AddressRegionResolver(catalog, district_levels=settings.geocode_district_levels)
    geocoder = GoogleGeocodingClient(
        GeocodingConfig(
            api_key=settings.google_maps_api_key,
            base_url=settings.google_maps_base_url,
            language=settings.google_maps_language,
            timeout_seconds=settings.google_maps_timeout_seconds,
        )
    )
    recommender = RecommendationService(
        store=store,
        resolver=resolver,
        geocoder=geocoder,
        tz=ZoneInfo(settings.timezone),
        target_count=settings.recommendation_count,
        rng=random.Random(settings.recommendation_seed),
    )
    sessions = SessionStore(ttl_seconds=settings.session_ttl_seconds)
    conversation = ConversationHandler(
        service=recommender,
        catalog=catalog,
        resolver=resolver,
        sessions=sessions,
    )
    reply_client = LineReplyClient(
        LineReplyConfig(
            channel_access_token=settings.line_channel_access_token,
            base_url=settings.line_api_base_url,
            timeout_seconds=settings.line_timeout_seconds,
        )
    )
    return AppContainer(
        settings=settings,
        catalog=catalog,
        store=store,
        resolver=resolver,
        geocoder=geocoder,
        recommender=recommender,
        sessions=sessions,
        conversation=conversation,
        reply_client=reply_client,
    )
