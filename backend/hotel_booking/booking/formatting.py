from __future__ import annotations

from datetime import date, datetime
from typing import Sequence

from hotel_booking.booking.models import BookingForm, OrderSummary, Quote, RoomSelection

BOOKING_PREFIX = "AH"
CONTACT_PREFIX = "CT"


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def format_money(amount: float, symbol: str = "€") -> str:
    return f"{symbol}{amount:.2f}"


def format_date(value: date | None) -> str:
    return value.isoformat() if value else "-"


def room_type_summary(rooms: Sequence[RoomSelection]) -> str:
    counts: dict[str, int] = {}
    for room in rooms:
        counts[room.type] = counts.get(room.type, 0) + 1
    return ", ".join(
        f"{room_type} x{count}" if count > 1 else room_type
        for room_type, count in counts.items()
    )


def guests_text(adults: int, children: int, infants: int) -> str:
    text = _plural(adults, "Adult", "Adults")
    if children > 0:
        text += ", " + _plural(children, "Child", "Children")
    if infants > 0:
        text += f" ({_plural(infants, 'Infant', 'Infants')})"
    return text


def toggle_label(rooms: Sequence[RoomSelection]) -> str:
    adults = sum(room.adults for room in rooms)
    children = sum(room.children for room in rooms)
    text = f"{_plural(len(rooms), 'Room', 'Rooms')} | {_plural(adults, 'Adult', 'Adults')}"
    if children > 0:
        text += ", " + _plural(children, "Child", "Children")
    return text


def build_order_summary(rooms: Sequence[RoomSelection]) -> OrderSummary:
    adults = sum(room.adults for room in rooms)
    children = sum(room.children for room in rooms)
    infants = sum(1 for room in rooms if room.infant_under_2)
    return OrderSummary(
        room_types=room_type_summary(rooms),
        guests_text=guests_text(adults, children, infants),
        toggle_label=toggle_label(rooms),
        adults=adults,
        children=children,
        infants=infants,
    )


def _signature(hotel_name: str, hotel_address: str) -> list[str]:
    if not hotel_address.strip():
        return []
    return ["", "--", hotel_name, hotel_address.strip()]


def make_reference(prefix: str, now: datetime | None = None) -> str:
    """Request reference such as ``AH-20240110-12345``."""

    now = now or datetime.now()
    millis = int(now.timestamp() * 1000)
    return f"{prefix}-{now:%Y%m%d}-{str(millis)[-5:]}"


def room_lines(rooms: Sequence[RoomSelection]) -> list[str]:
    lines = []
    for index, room in enumerate(rooms, start=1):
        line = f"Room {index}: {room.type or '-'}, {room.adults} Adult(s), {room.children} Child(ren)"
        if room.infant_under_2:
            line += " (1 Infant)"
        lines.append(line)
    return lines


def booking_text_summary(
    *,
    hotel_name: str,
    reference: str,
    form: BookingForm,
    summary: OrderSummary,
    quote: Quote,
    currency_symbol: str = "€",
    hotel_address: str = "",
) -> str:
    parts = [
        f"Booking Request - {hotel_name}",
        f"Reference: {reference}",
        "",
        f"Room type(s): {summary.room_types or '-'}",
        f"Guests: {summary.guests_text if form.rooms else '-'}",
        f"Check-in: {format_date(form.check_in)}",
        f"Check-out: {format_date(form.check_out)}",
        f"Nights: {quote.nights}",
        f"Rooms price/night: {format_money(quote.nightly_subtotal, currency_symbol)}",
        f"Fees/night: {format_money(quote.tax, currency_symbol)}",
        f"Total: {format_money(quote.total, currency_symbol)}",
        "",
    ]
    if len(form.rooms) > 1:
        parts.extend(room_lines(form.rooms))
        parts.append("")
    parts.extend(
        [
            f"Guest: {form.full_name or '-'}",
            f"Email: {form.email or '-'}",
            f"Phone: {form.phone or '-'}",
        "",
        ]
    )
    if form.message.strip():
        parts.extend(["Message:", form.message.strip(), ""])
    parts.append(
        "This is a confirmation that we received your request. It is not a final booking."
    )
    parts.extend(_signature(hotel_name, hotel_address))
    return "\n".join(parts)


def contact_text_message(
    *, hotel_name: str, reference: str, name: str, message: str, hotel_address: str = ""
) -> str:
    lines = [
        f"Hello {name or 'there'},",
        "",
        f"Thank you for contacting {hotel_name}.",
        "We have received your message and our team will get back to you as soon as possible.",
        "",
        "Your message:",
        message or "-",
        "",
        f"Ref: {reference}",
    ]
    lines.extend(_signature(hotel_name, hotel_address))
    return "\n".join(lines)


__all__ = [
    "BOOKING_PREFIX",
    "CONTACT_PREFIX",
    "format_money",
    "format_date",
    "room_type_summary",
    "guests_text",
    "toggle_label",
    "build_order_summary",
    "make_reference",
    "room_lines",
    "booking_text_summary",
    "contact_text_message",
]
