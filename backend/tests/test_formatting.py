import sys
from datetime import date, datetime
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from hotel_booking.booking.formatting import (
    booking_text_summary,
    build_order_summary,
    contact_text_message,
    format_money,
    guests_text,
    make_reference,
    room_type_summary,
)
from hotel_booking.booking.models import BookingForm, Quote, RoomSelection


def test_room_type_summary_groups_in_first_seen_order():
    rooms = [
        RoomSelection(id=1, type="Deluxe Room"),
        RoomSelection(id=2, type="Economy Room"),
        RoomSelection(id=3, type="Deluxe Room"),
    ]
    assert room_type_summary(rooms) == "Deluxe Room x2, Economy Room"


def test_guests_text_handles_plurals_and_infants():
    assert guests_text(1, 0, 0) == "1 Adult"
    assert guests_text(2, 1, 1) == "2 Adults, 1 Child (1 Infant)"
    assert guests_text(3, 2, 2) == "3 Adults, 2 Children (2 Infants)"


def test_order_summary_totals_and_label():
    rooms = [
        RoomSelection(id=1, adults=2, children=1, type="Deluxe Room", infant_under_2=True),
        RoomSelection(id=2, adults=1, type="Single Room"),
    ]

    summary = build_order_summary(rooms)

    assert summary.adults == 3
    assert summary.children == 1
    assert summary.infants == 1
    assert summary.guests == 4
    assert summary.toggle_label == "2 Rooms | 3 Adults, 1 Child"
    assert summary.guests_text == "3 Adults, 1 Child (1 Infant)"


def test_make_reference_format():
    now = datetime(2024, 1, 10, 12, 30, 45)
    reference = make_reference("AH", now)

    prefix, day, suffix = reference.split("-")
    assert prefix == "AH"
    assert day == "20240110"
    assert len(suffix) == 5 and suffix.isdigit()


def test_format_money():
    assert format_money(142) == "€142.00"
    assert format_money(7.5, "$") == "$7.50"


def test_booking_text_summary_contains_quote_and_contact():
    rooms = [
        RoomSelection(id=1, adults=2, type="Deluxe Room"),
        RoomSelection(id=2, adults=1, type="Economy Room"),
    ]
    form = BookingForm(
        first_name="Maria",
        last_name="Papadopoulou",
        email="maria@example.com",
        phone="+302104949930",
        check_in=date(2024, 1, 10),
        check_out=date(2024, 1, 12),
        message="Late arrival",
        rooms=rooms,
    )
    quote = Quote(nights=2, nightly_subtotal=134, tax=4, total=276)

    text = booking_text_summary(
        hotel_name="Hotel Maroussi",
        reference="AH-20240110-12345",
        form=form,
        summary=build_order_summary(rooms),
        quote=quote,
    )

    assert "Reference: AH-20240110-12345" in text
    assert "Room type(s): Deluxe Room, Economy Room" in text
    assert "Check-in: 2024-01-10" in text
    assert "Nights: 2" in text
    assert "Rooms price/night: €134.00" in text
    assert "Fees/night: €4.00" in text
    assert "Total: €276.00" in text
    assert "Room 2: Economy Room, 1 Adult(s), 0 Child(ren)" in text
    assert "Guest: Maria Papadopoulou" in text
    assert "Message:\nLate arrival" in text
    assert text.endswith("It is not a final booking.")


def test_booking_text_summary_is_signed_with_hotel_address():
    rooms = [RoomSelection(id=1, adults=1, type="Single Room")]
    form = BookingForm(first_name="Maria", email="maria@example.com", rooms=rooms)

    text = booking_text_summary(
        hotel_name="Hotel Maroussi",
        reference="AH-20240110-12345",
        form=form,
        summary=build_order_summary(rooms),
        quote=Quote(nights=1, nightly_subtotal=62, tax=2, total=64),
        hotel_address="Olympias 10, Maroussi",
    )

    assert text.endswith("--\nHotel Maroussi\nOlympias 10, Maroussi")


def test_contact_text_message():
    text = contact_text_message(
        hotel_name="Hotel Maroussi",
        reference="CT-20240110-12345",
        name="Nikos",
        message="Parking?",
        hotel_address="Olympias 10, Maroussi",
    )

    assert text.startswith("Hello Nikos,")
    assert "Your message:\nParking?" in text
    assert "Ref: CT-20240110-12345" in text
    assert text.endswith("Hotel Maroussi\nOlympias 10, Maroussi")

    unsigned = contact_text_message(hotel_name="Hotel Maroussi", reference="CT-1", name="", message="")
    assert unsigned.startswith("Hello there,")
    assert unsigned.endswith("Ref: CT-1")
