from __future__ import annotations

import json
import logging
import math
from datetime import date
from typing import Any, Iterable

from hotel_booking.booking.models import RoomSelection

logger = logging.getLogger(__name__)

_TRUE_TOKENS = {"1", "true", "yes", "on"}


def to_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return int(value)
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        return default


def to_float(value: Any, default: float = 0.0) -> float:
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUE_TOKENS


def parse_date(value: Any) -> date | None:
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def parse_room(raw: Any, *, fallback_id: int) -> RoomSelection | None:
    if not isinstance(raw, dict):
        return None
    room_type = raw.get("type")
    if not isinstance(room_type, str) or not room_type.strip():
        return None
    room = RoomSelection(
        id=to_int(raw.get("id"), default=fallback_id) or fallback_id,
        adults=max(1, to_int(raw.get("adults"), default=1)),
        children=max(0, to_int(raw.get("children"), default=0)),
        type=room_type.strip(),
        infant_under_2=to_bool(raw.get("infantUnder2", raw.get("infant_under_2"))),
    )
    if room.children == 0:
        room.infant_under_2 = False
    return room


def parse_room_breakdown(raw: Any) -> list[RoomSelection]:
    """Accepts a list or a JSON string; anything unparseable becomes []."""

    items: Iterable[Any]
    if isinstance(raw, list):
        items = raw
    elif isinstance(raw, str):
        try:
            parsed = json.loads(raw) if raw.strip() else []
        except json.JSONDecodeError:
            logger.warning("Unparseable roomBreakdown, treating as empty")
            return []
        if not isinstance(parsed, list):
            return []
        items = parsed
    else:
        return []

    rooms: list[RoomSelection] = []
    seen_ids: set[int] = set()
    for index, item in enumerate(items, start=1):
        room = parse_room(item, fallback_id=index)
        if room is None:
            logger.debug("Skipping malformed room entry #%d: %r", index, item)
            continue
        if room.id in seen_ids:
            room.id = max(seen_ids) + 1
        seen_ids.add(room.id)
        rooms.append(room)
    return rooms


__all__ = [
    "to_int",
    "to_float",
    "to_bool",
    "parse_date",
    "parse_room",
    "parse_room_breakdown",
]
