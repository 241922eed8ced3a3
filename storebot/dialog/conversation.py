"""Dialog layer: guided city -> district -> category flow and share-location flow."""

from __future__ import annotations

from typing import Any

from storebot.dialog.replies import (
    QUICK_REPLY_LIMIT,
    quick_reply_message,
    recommendation_carousel,
    text_message,
)
from storebot.dialog.session_state import DialogSession, SessionStore
from storebot.infra.observability.logger import get_logger
from storebot.protocol.messages import EventMessage, WebhookEvent
from storebot.recommend.address_resolver import AddressRegionResolver, normalize_address_text
from storebot.recommend.models import Coordinate, Recommendation, ResolvedLocation
from storebot.recommend.region_catalog import RegionCatalog
from storebot.recommend.service import RecommendationService

logger = get_logger(__name__)

START_KEYWORD = "推薦"
NEARBY_KEYWORD = "推薦附近店家"
ALL_CATEGORIES = "所有店家"

GREETING_TEXT = f"您好！請試著傳送「{START_KEYWORD}」，讓我為您尋找附近的好去處！"
OUT_OF_AREA_TEXT = "抱歉，您目前的位置似乎不在我們的服務範圍內喔，請傳送「推薦」手動選擇地區。"
FAILURE_TEXT = "哎呀，推薦功能好像出了一點問題，請稍後再試。"

Reply = list[dict[str, Any]]


class ConversationHandler:
    """Turn one inbound chat event into reply messages, tracking dialog stage per user."""

    def __init__(
        self,
        *,
        service: RecommendationService,
        catalog: RegionCatalog,
        resolver: AddressRegionResolver,
        sessions: SessionStore,
    ) -> None:
        self._service = service
        self._catalog = catalog
        self._resolver = resolver
        self._sessions = sessions

    def handle_event(self, event: WebhookEvent) -> Reply:
        if event.type != "message" or event.message is None:
            return []
        user_id = event.source.user_id or f"anonymous:{event.reply_token or ''}"
        message = event.message
        if message.type == "location":
            return self._on_location(user_id, message)
        if message.type == "text" and message.text is not None:
            return self._on_text(user_id, message.text.strip())
        return []

    def _on_location(self, user_id: str, message: EventMessage) -> Reply:
        if message.latitude is None or message.longitude is None:
            return [text_message(OUT_OF_AREA_TEXT)]
        coordinate = Coordinate(lat=message.latitude, lng=message.longitude)
        resolved = self._service.resolve_location(coordinate, message.address)
        if resolved is None:
            return [text_message(OUT_OF_AREA_TEXT)]
        self._sessions.start(
            user_id,
            "location_received",
            city=resolved.city,
            district=resolved.district,
            coordinate=coordinate,
        )
        return [
            quick_reply_message(
                f"您目前在「{resolved.city}{resolved.district}」，要為您推薦附近的店家嗎？",
                [NEARBY_KEYWORD],
            )
        ]

    def _on_text(self, user_id: str, text: str) -> Reply:
        session = self._sessions.get(user_id)
        normalized = normalize_address_text(text)

        if text == NEARBY_KEYWORD and session is not None and session.stage == "location_received":
            self._sessions.clear(user_id)
            return self._nearby_reply(session)

        if text == START_KEYWORD:
            self._sessions.start(user_id, "selecting_city")
            return [quick_reply_message("請選擇您想探索的城市：", self._catalog.cities())]

        if session is not None:
            reply = self._continue_flow(session, text, normalized)
            if reply is not None:
                return reply

        typed = self._resolver.resolve_from_address_text(text)
        if typed is not None:
            self._sessions.start(user_id, "selecting_category", city=typed.city, district=typed.district)
            return [self._category_prompt(typed.district)]

        return [text_message(GREETING_TEXT)]

    def _continue_flow(self, session: DialogSession, text: str, normalized: str) -> Reply | None:
        if session.stage == "selecting_city" and self._catalog.is_supported_city(normalized):
            self._sessions.advance(session, "selecting_district", city=normalized)
            districts = self._catalog.districts(normalized)
            prompt = f"您選了「{normalized}」，請選擇行政區："
            if len(districts) > QUICK_REPLY_LIMIT:
                prompt += "\n也可以直接輸入行政區名稱：" + "、".join(districts)
            return [quick_reply_message(prompt, districts)]

        if session.stage == "selecting_district" and self._catalog.is_supported_district(
            session.city, normalized
        ):
            self._sessions.advance(session, "selecting_category", district=normalized)
            return [self._category_prompt(normalized)]

        if session.stage == "selecting_category" and (
            text == ALL_CATEGORIES or self._catalog.is_supported_category(text)
        ):
            self._sessions.clear(session.user_id)
            category = None if text == ALL_CATEGORIES else text
            location = ResolvedLocation(city=session.city or "", district=session.district or "")
            return self._region_reply(location, category)
        return None

    def _category_prompt(self, district: str) -> dict[str, Any]:
        return quick_reply_message(
            f"您選了「{district}」。想找什麼樣的分類呢？",
            [*self._catalog.categories(), ALL_CATEGORIES],
        )

    def _region_reply(self, location: ResolvedLocation, category: str | None) -> Reply:
        try:
            items = self._service.recommend_by_region(location, category)
        except Exception:
            logger.exception("dialog.recommend.failed city=%s district=%s", location.city, location.district)
            return [text_message(FAILURE_TEXT)]
        if not items:
            scope = f"的「{category}」分類中" if category else ""
            return [text_message(f"抱歉，在「{location.district}」{scope}找不到可推薦的店家。")]
        return [recommendation_carousel(items, location.district)]

    def _nearby_reply(self, session: DialogSession) -> Reply:
        if session.coordinate is None or not session.city or not session.district:
            return [text_message(OUT_OF_AREA_TEXT)]
        location = ResolvedLocation(city=session.city, district=session.district)
        try:
            items: list[Recommendation] = self._service.recommend_nearby(location, session.coordinate)
        except Exception:
            logger.exception("dialog.nearby.failed city=%s district=%s", session.city, session.district)
            return [text_message(FAILURE_TEXT)]
        if not items:
            return [text_message("抱歉，在您附近找不到可推薦的店家。")]
        return [recommendation_carousel(items, "您附近")]
