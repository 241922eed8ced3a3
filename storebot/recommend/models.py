"""Engine value types: coordinates, resolved regions and read-only business snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

OpenStatus = Literal["open", "closed", "unknown"]


def _as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class Coordinate:
    """WGS84 point in decimal degrees."""

    lat: float
    lng: float


@dataclass(frozen=True)
class ResolvedLocation:
    """A (city, district) pair that exists together in the region catalog."""

    city: str
    district: str


def _coordinate_from_record(raw: dict[str, Any]) -> Coordinate | None:
    lat = _as_float(raw.get("latitude"))
    lng = _as_float(raw.get("longitude"))
    nested = raw.get("location")
    if (lat is None or lng is None) and isinstance(nested, dict):
        lat = _as_float(nested.get("lat", nested.get("latitude")))
        lng = _as_float(nested.get("lng", nested.get("longitude")))
    if lat is None or lng is None:
        return None
    return Coordinate(lat=lat, lng=lng)


def _schedule_from_record(raw: dict[str, Any]) -> tuple[Any, ...] | None:
    hours = raw.get("opening_hours")
    if isinstance(hours, dict):
        hours = hours.get("periods")
    if not isinstance(hours, list):
        return None
    return tuple(hours)


@dataclass(frozen=True)
class Business:
    """One candidate business as fetched from the document store."""

    id: str
    name: str
    city: str | None = None
    district: str | None = None
    category: str | None = None
    address: str | None = None
    coordinate: Coordinate | None = None
    highlight: str | None = None
    opening_hours: tuple[Any, ...] | None = None

    @classmethod
    def from_record(cls, raw: dict[str, Any]) -> "Business | None":
        """Build a business from a raw store document; None when id or name is missing."""
        business_id = _as_text(raw.get("id"))
        name = _as_text(raw.get("name"))
        if business_id is None or name is None:
            return None
        return cls(
            id=business_id,
            name=name,
            city=_as_text(raw.get("city")),
            district=_as_text(raw.get("district")),
            category=_as_text(raw.get("category")),
            address=_as_text(raw.get("address")),
            coordinate=_coordinate_from_record(raw),
            highlight=_as_text(raw.get("highlight", raw.get("dishes"))),
            opening_hours=_schedule_from_record(raw),
        )


@dataclass(frozen=True)
class Recommendation:
    """A selected business annotated for rendering."""

    business: Business
    open_status: OpenStatus
    distance_km: float | None = None
