"""Protocol layer: webhook payloads and API response DTOs."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from storebot.recommend.models import Business, Recommendation

OpenStatusType = Literal["open", "closed", "unknown"]


class EventSource(BaseModel):
    """Sender of a webhook event; only the user id matters to the dialog."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: str = "user"
    user_id: str | None = Field(default=None, alias="userId")


class EventMessage(BaseModel):
    """Text or location message body; other message types are carried but ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = None
    type: str
    text: str | None = None
    title: str | None = None
    address: str | None = None
    latitude: float | None = None
    longitude: float | None = None


class WebhookEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: str
    reply_token: str | None = Field(default=None, alias="replyToken")
    source: EventSource = Field(default_factory=EventSource)
    message: EventMessage | None = None


class WebhookRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    destination: str | None = None
    events: list[WebhookEvent] = Field(default_factory=list)


class EventReplyDto(BaseModel):
    """What the bot answered for one webhook event."""

    reply_token: str | None = None
    delivered: bool = False
    messages: list[dict[str, Any]] = Field(default_factory=list)


class WebhookResponse(BaseModel):
    replies: list[EventReplyDto] = Field(default_factory=list)


class RegionItemDto(BaseModel):
    """Standardized region item for city/district endpoints."""

    name: str


class BusinessDto(BaseModel):
    id: str
    name: str
    city: str | None = None
    district: str | None = None
    category: str | None = None
    address: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    highlight: str | None = None

    @classmethod
    def from_business(cls, business: Business) -> "BusinessDto":
        coordinate = business.coordinate
        return cls(
            id=business.id,
            name=business.name,
            city=business.city,
            district=business.district,
            category=business.category,
            address=business.address,
            latitude=coordinate.lat if coordinate else None,
            longitude=coordinate.lng if coordinate else None,
            highlight=business.highlight,
        )


class RecommendationDto(BaseModel):
    business: BusinessDto
    open_status: OpenStatusType
    distance_km: float | None = None

    @classmethod
    def from_recommendation(cls, item: Recommendation) -> "RecommendationDto":
        return cls(
            business=BusinessDto.from_business(item.business),
            open_status=item.open_status,
            distance_km=item.distance_km,
        )


class RecommendationResponse(BaseModel):
    city: str
    district: str
    category: str | None = None
    items: list[RecommendationDto] = Field(default_factory=list)
