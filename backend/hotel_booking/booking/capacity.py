from __future__ import annotations

import math

from hotel_booking.booking.catalog import RoomCatalog
from hotel_booking.booking.models import ADULTS, CHILDREN, GUEST_FIELDS, RoomSelection

MIN_ADULTS = 1
MIN_CHILDREN = 0


def _check_field(field: str) -> None:
    if field not in GUEST_FIELDS:
        raise ValueError(f"Unknown guest field: {field!r}")


def can_increment(room: RoomSelection, field: str, catalog: RoomCatalog) -> bool:
    """Whether one more adult or child fits the room type's capacity."""

    _check_field(field)
    caps = catalog.capacity_for(room.type)
    adults = room.adults + 1 if field == ADULTS else room.adults
    children = room.children + 1 if field == CHILDREN else room.children

    if children > caps.max_children:
        return False
    if adults + children > caps.max_total:
        return False
    return True


def fits_capacity(room: RoomSelection, catalog: RoomCatalog) -> bool:
    caps = catalog.capacity_for(room.type)
    return room.children <= caps.max_children and room.adults + room.children <= caps.max_total


def increment(room: RoomSelection, field: str, catalog: RoomCatalog) -> bool:
    if not can_increment(room, field, catalog):
        return False
    setattr(room, field, getattr(room, field) + 1)
    return True


def decrement(room: RoomSelection, field: str) -> bool:
    _check_field(field)
    minimum = MIN_ADULTS if field == ADULTS else MIN_CHILDREN
    current = getattr(room, field)
    if current <= minimum:
        return False
    setattr(room, field, current - 1)
    sync_infant_flag(room)
    return True


def sync_infant_flag(room: RoomSelection) -> None:
    # An infant can only be declared among the children.
    if room.children <= 0:
        room.infant_under_2 = False


def clamp_to_capacity(room: RoomSelection, catalog: RoomCatalog) -> bool:
    """Reduces guests to the room type's limits; returns True if anything changed.

    Children over ``max_children`` are dropped first. When the room is still
    over ``max_total``, children are reduced to what is left after the adults,
    and only if the adults alone overflow is the adult count cut (never below 1).
    """

    caps = catalog.capacity_for(room.type)
    changed = False

    if room.children > caps.max_children:
        room.children = int(caps.max_children)
        changed = True

    if room.adults + room.children > caps.max_total:
        allowed_children = max(MIN_CHILDREN, caps.max_total - room.adults)
        if room.children > allowed_children:
            room.children = int(allowed_children)
            changed = True

    if room.adults + room.children > caps.max_total:
        allowed_adults = max(MIN_ADULTS, caps.max_total - room.children)
        if room.adults > allowed_adults:
            room.adults = int(allowed_adults)
            changed = True

    sync_infant_flag(room)
    return changed


def change_room_type(room: RoomSelection, room_type: str, catalog: RoomCatalog) -> bool:
    room.type = room_type
    return clamp_to_capacity(room, catalog)


def capacity_notice(room: RoomSelection, catalog: RoomCatalog) -> str:
    return catalog.capacity_for(room.type).message


def max_guests(room_type: str, catalog: RoomCatalog) -> int | None:
    caps = catalog.capacity_for(room_type)
    if math.isinf(caps.max_total):
        return None
    return int(caps.max_total)


def can_add_room(rooms: list[RoomSelection], catalog: RoomCatalog) -> bool:
    return len(rooms) < catalog.max_rooms


def room_limit_notice(catalog: RoomCatalog) -> str:
    return f"To add more than {catalog.max_rooms} rooms, please call the hotel or contact us."


def add_room(rooms: list[RoomSelection], catalog: RoomCatalog) -> RoomSelection | None:
    """Appends a default room (1 adult, default type) unless the limit is reached."""

    if not can_add_room(rooms, catalog):
        return None
    next_id = max((room.id for room in rooms), default=0) + 1
    room = RoomSelection(id=next_id, adults=1, children=0, type=catalog.default_room_type)
    rooms.append(room)
    return room


def remove_room(rooms: list[RoomSelection], room_id: int) -> bool:
    if len(rooms) <= 1:
        return False
    for index, room in enumerate(rooms):
        if room.id == room_id:
            del rooms[index]
            return True
    return False


__all__ = [
    "can_increment",
    "fits_capacity",
    "increment",
    "decrement",
    "sync_infant_flag",
    "clamp_to_capacity",
    "change_room_type",
    "capacity_notice",
    "max_guests",
    "can_add_room",
    "room_limit_notice",
    "add_room",
    "remove_room",
]
