import sys
from datetime import date
from pathlib import Path

import pytest

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from hotel_booking.booking.catalog import RoomCatalog
from hotel_booking.booking.models import BookingForm, ContactForm, RoomSelection
from hotel_booking.booking.validation import (
    BOOKING_FIELDS,
    DATE_ORDER,
    OVER_CAPACITY,
    TOO_MANY_ROOMS,
    UNKNOWN_ROOM_TYPE,
    first_error,
    is_valid_email,
    is_valid_phone,
    validate_booking,
    validate_contact,
    validate_rooms,
)


def _valid_form(**overrides) -> BookingForm:
    values = dict(
        first_name="Maria",
        last_name="Papadopoulou",
        email="maria@example.com",
        phone="+30 210 494-9930",
        check_in=date(2024, 1, 10),
        check_out=date(2024, 1, 12),
        guests=2,
        policy_accepted=True,
        captcha_token="token",
    )
    values.update(overrides)
    return BookingForm(**values)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("a@b", False),
        ("a@b.com", True),
        ("  a@b.com ", True),
        ("a b@c.com", False),
        ("", False),
    ],
)
def test_email_pattern(value, expected):
    assert is_valid_email(value) is expected


@pytest.mark.parametrize(
    "value,expected",
    [
        ("12345", False),
        ("123456", True),
        ("+30 (210) 494-9930", True),
        ("1" * 15, True),
        ("1" * 16, False),
        ("phone", False),
    ],
)
def test_phone_digit_count(value, expected):
    assert is_valid_phone(value) is expected


def test_valid_form_has_no_errors():
    assert validate_booking(_valid_form()) == []


def test_errors_follow_declared_field_order():
    form = BookingForm(
        policy_accepted=False,
        rooms=[RoomSelection(id=1, adults=4, type="Single Room")],
    )

    errors = validate_booking(form, RoomCatalog())

    assert [error.field for error in errors] == list(BOOKING_FIELDS)
    assert first_error(errors).field == "firstName"


def test_first_error_points_at_first_invalid_field():
    form = _valid_form(phone="12", captcha_token="")

    errors = validate_booking(form)

    assert [error.field for error in errors] == ["phone", "captchaToken"]
    assert first_error(errors).field == "phone"


def test_checkout_must_be_after_checkin():
    form = _valid_form(check_out=date(2024, 1, 10))

    errors = validate_booking(form)

    assert len(errors) == 1
    assert errors[0].field == "dates"
    assert errors[0].kind == DATE_ORDER


def test_policy_is_only_checked_when_present():
    assert validate_booking(_valid_form(policy_accepted=None)) == []
    errors = validate_booking(_valid_form(policy_accepted=False))
    assert [error.field for error in errors] == ["policy"]


def test_zero_guests_is_rejected():
    errors = validate_booking(_valid_form(guests=0))
    assert [error.field for error in errors] == ["guests"]


def test_contact_form_allows_missing_phone():
    form = ContactForm(name="Nikos", email="nikos@example.com", message="Is parking available?")
    assert validate_contact(form) == []


def test_contact_form_reports_missing_fields():
    form = ContactForm(email="nikos@", phone="12")

    errors = validate_contact(form)

    assert [error.field for error in errors] == ["name", "email", "phone", "message"]


def test_room_rules_are_skipped_without_a_catalog():
    form = _valid_form(rooms=[RoomSelection(id=1, adults=9, type="Penthouse")])

    assert validate_booking(form) == []


@pytest.mark.parametrize(
    "rooms,kind",
    [
        (
            [RoomSelection(id=index, adults=1, type="Single Room") for index in range(1, 5)],
            TOO_MANY_ROOMS,
        ),
        ([RoomSelection(id=1, adults=2, type="Penthouse")], UNKNOWN_ROOM_TYPE),
        ([RoomSelection(id=1, adults=2, type="Single Room")], OVER_CAPACITY),
        ([RoomSelection(id=1, adults=1, children=2, type="Double Room")], OVER_CAPACITY),
    ],
)
def test_rooms_breaking_catalog_rules_are_rejected(rooms, kind):
    errors = validate_booking(_valid_form(rooms=rooms), RoomCatalog())

    assert [(error.field, error.kind) for error in errors] == [("rooms", kind)]


def test_over_capacity_error_names_room_and_limit():
    rooms = [
        RoomSelection(id=1, adults=1, type="Economy Room"),
        RoomSelection(id=2, adults=3, children=1, type="Deluxe Room"),
    ]

    error = validate_rooms(rooms, RoomCatalog())

    assert error.message == "Room 2: Deluxe Room max capacity is 3 Guests."


def test_rooms_within_catalog_rules_pass():
    rooms = [
        RoomSelection(id=1, adults=2, children=1, type="Deluxe Room"),
        RoomSelection(id=2, adults=1, type="Single Room"),
    ]

    assert validate_rooms(rooms, RoomCatalog()) is None
