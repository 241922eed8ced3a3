"""Reply builders: LINE message payloads for prompts and recommendation cards."""

from __future__ import annotations

from typing import Any
from urllib import parse

from storebot.recommend.models import OpenStatus, Recommendation

# LINE caps quick reply buttons at 13 and labels at 20 characters.
QUICK_REPLY_LIMIT = 13
_LABEL_LIMIT = 20

OPEN_STATUS_LABELS: dict[OpenStatus, str] = {
    "open": "營業中",
    "closed": "休息中",
    "unknown": "營業時間未知",
}


def text_message(text: str) -> dict[str, Any]:
    return {"type": "text", "text": text}


def quick_reply_message(text: str, options: list[str]) -> dict[str, Any]:
    """Text message with one message-action button per option."""
    items = [
        {
            "type": "action",
            "action": {"type": "message", "label": option[:_LABEL_LIMIT], "text": option},
        }
        for option in options[:QUICK_REPLY_LIMIT]
    ]
    message = text_message(text)
    if items:
        message["quickReply"] = {"items": items}
    return message


def format_distance(distance_km: float) -> str:
    if distance_km < 1:
        return f"{round(distance_km * 1000)} 公尺"
    return f"{distance_km:.1f} 公里"


def maps_search_url(query: str) -> str:
    return "https://www.google.com/maps/search/?" + parse.urlencode({"api": "1", "query": query})


def _field_row(label: str, value: str) -> dict[str, Any]:
    return {
        "type": "box",
        "layout": "baseline",
        "spacing": "sm",
        "contents": [
            {"type": "text", "text": label, "color": "#aaaaaa", "size": "sm", "flex": 1},
            {"type": "text", "text": value, "wrap": True, "color": "#666666", "size": "sm", "flex": 3},
        ],
    }


def recommendation_bubble(item: Recommendation) -> dict[str, Any]:
    business = item.business
    rows = [
        _field_row("地址", business.address or "未提供"),
        _field_row("營業", OPEN_STATUS_LABELS[item.open_status]),
    ]
    if business.highlight:
        rows.append(_field_row("特色", business.highlight))
    if item.distance_km is not None:
        rows.append(_field_row("距離", format_distance(item.distance_km)))

    return {
        "type": "bubble",
        "size": "kilo",
        "header": {
            "type": "box",
            "layout": "vertical",
            "contents": [
                {"type": "text", "text": business.name, "weight": "bold", "size": "lg", "wrap": True},
                {"type": "text", "text": business.category or "未分類", "size": "md", "color": "#666666"},
            ],
        },
        "body": {"type": "box", "layout": "vertical", "spacing": "md", "contents": rows},
        "footer": {
            "type": "box",
            "layout": "vertical",
            "contents": [
                {
                    "type": "button",
                    "style": "link",
                    "height": "sm",
                    "action": {
                        "type": "uri",
                        "label": "在 Google 地圖上查看",
                        "uri": maps_search_url(business.address or business.name),
                    },
                }
            ],
        },
    }


def recommendation_carousel(items: list[Recommendation], place_label: str) -> dict[str, Any]:
    return {
        "type": "flex",
        "altText": f"為您從「{place_label}」推薦了 {len(items)} 間店！",
        "contents": {
            "type": "carousel",
            "contents": [recommendation_bubble(item) for item in items],
        },
    }
