from __future__ import annotations

from datetime import date
from typing import Mapping, Sequence

from hotel_booking.booking.catalog import RoomCatalog
from hotel_booking.booking.models import Quote, RoomSelection

DEFAULT_TAX_PER_ROOM_NIGHT = 2.0


def chargeable_guests(room: RoomSelection) -> int:
    """Guests that are charged for: a declared infant is free, minimum 1."""

    count = room.adults + room.children - (1 if room.infant_under_2 else 0)
    return max(1, count)


def lookup_price(prices: Mapping[int, float], guests: int) -> float:
    # Fall back to the next-lower guest count that has a price; counts above
    # the largest table entry can only land on that entry or below it.
    guests = min(guests, max(prices, default=0))
    while guests > 0 and not prices.get(guests):
        guests -= 1
    return prices.get(guests, 0) if guests > 0 else 0


def room_price_per_night(room: RoomSelection, catalog: RoomCatalog) -> float:
    return lookup_price(catalog.price_table(room.type), chargeable_guests(room))


def count_nights(check_in: date | None, check_out: date | None) -> int:
    if not check_in or not check_out:
        return 0
    return max(0, (check_out - check_in).days)


def nightly_subtotal(rooms: Sequence[RoomSelection], catalog: RoomCatalog) -> float:
    return sum(room_price_per_night(room, catalog) for room in rooms)


def compute_quote(
    rooms: Sequence[RoomSelection],
    check_in: date | None,
    check_out: date | None,
    catalog: RoomCatalog,
    *,
    tax_per_room_night: float = DEFAULT_TAX_PER_ROOM_NIGHT,
) -> Quote:
    """Builds the quote for a stay: (room prices + tax per room) x nights."""

    nights = count_nights(check_in, check_out)
    subtotal = nightly_subtotal(rooms, catalog)
    tax = tax_per_room_night * len(rooms)
    total = (subtotal + tax) * nights if nights else 0.0
    return Quote(
        nights=nights,
        nightly_subtotal=round(subtotal, 2),
        tax=round(tax, 2),
        total=round(total, 2),
    )


__all__ = [
    "DEFAULT_TAX_PER_ROOM_NIGHT",
    "chargeable_guests",
    "lookup_price",
    "room_price_per_night",
    "count_nights",
    "nightly_subtotal",
    "compute_quote",
]
