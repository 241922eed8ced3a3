"""HTTP API layer: chat platform webhook feeding the guided recommendation dialog."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from storebot.api.deps import get_container
from storebot.core.container import AppContainer
from storebot.dialog.conversation import FAILURE_TEXT
from storebot.dialog.replies import text_message
from storebot.infra.observability.logger import get_logger
from storebot.protocol.messages import EventReplyDto, WebhookRequest, WebhookResponse

router = APIRouter(tags=["webhook"])
logger = get_logger(__name__)


@router.post("/webhook", response_model=WebhookResponse)
def webhook(
    payload: WebhookRequest,
    container: AppContainer = Depends(get_container),
) -> WebhookResponse:
    replies: list[EventReplyDto] = []
    for event in payload.events:
        logger.info(
            "webhook.event type=%s message=%s user=%s",
            event.type,
            event.message.type if event.message else "-",
            event.source.user_id or "-",
        )
        try:
            messages = container.conversation.handle_event(event)
        except Exception:
            # One bad event must not drop replies to the rest of the batch.
            logger.exception("webhook.event.failed type=%s", event.type)
            messages = [text_message(FAILURE_TEXT)] if event.type == "message" else []
        delivered = False
        if messages and event.reply_token:
            delivered = container.reply_client.reply(event.reply_token, messages)
        replies.append(
            EventReplyDto(reply_token=event.reply_token, delivered=delivered, messages=messages)
        )
    return WebhookResponse(replies=replies)
