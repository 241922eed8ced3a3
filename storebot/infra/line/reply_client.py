"""Messaging infra: LINE reply API client via standard HTTP payload."""

from __future__ import annotations

import http.client
import json
from dataclasses import dataclass
from typing import Any
from urllib import error, request

from storebot.infra.observability.logger import get_logger

logger = get_logger(__name__)

# LINE accepts at most five message objects per reply.
MAX_MESSAGES_PER_REPLY = 5


@dataclass(frozen=True)
class LineReplyConfig:
    channel_access_token: str
    base_url: str = "https://api.line.me"
    timeout_seconds: float = 5.0


class LineReplyClient:
    """Minimal sync client for `/v2/bot/message/reply`."""

    def __init__(self, config: LineReplyConfig) -> None:
        self._config = config

    @property
    def enabled(self) -> bool:
        return bool(self._config.channel_access_token.strip())

    def reply(self, reply_token: str, messages: list[dict[str, Any]]) -> bool:
        if not messages:
            return False
        if not self.enabled:
            logger.info("line.reply.skipped reason=missing_token messages=%s", len(messages))
            return False

        endpoint = self._config.base_url.rstrip("/") + "/v2/bot/message/reply"
        body = json.dumps(
            {"replyToken": reply_token, "messages": messages[:MAX_MESSAGES_PER_REPLY]},
            ensure_ascii=False,
        ).encode("utf-8")
        headers = {
            "Authorization": f"Bearer {self._config.channel_access_token}",
            "Content-Type": "application/json",
        }
        req = request.Request(endpoint, data=body, headers=headers, method="POST")
        try:
            with request.urlopen(req, timeout=self._config.timeout_seconds) as resp:
                status = getattr(resp, "status", 200)
        except (error.URLError, http.client.HTTPException, OSError) as exc:
            logger.warning("line.reply.failed error=%s", exc)
            return False
        return 200 <= status < 300
