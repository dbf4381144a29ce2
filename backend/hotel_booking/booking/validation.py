from __future__ import annotations

import re
from typing import Sequence

from hotel_booking.booking.capacity import fits_capacity, room_limit_notice
from hotel_booking.booking.catalog import RoomCatalog
from hotel_booking.booking.models import BookingForm, ContactForm, FieldError, RoomSelection

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NON_DIGIT_RE = re.compile(r"\D")
PHONE_DIGITS_RE = re.compile(r"^\d{6,15}$")

REQUIRED = "required"
INVALID = "invalid"
DATE_ORDER = "date_order"
TOO_MANY_ROOMS = "too_many_rooms"
UNKNOWN_ROOM_TYPE = "unknown_room_type"
OVER_CAPACITY = "over_capacity"

# Fields are checked and reported in this order; the first error is the
# field a UI should focus.
BOOKING_FIELDS = (
    "firstName",
    "lastName",
    "email",
    "phone",
    "dates",
    "guests",
    "rooms",
    "policy",
    "captchaToken",
)


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_RE.match((value or "").strip()))


def phone_digits(value: str) -> str:
    return NON_DIGIT_RE.sub("", value or "")


def is_valid_phone(value: str) -> bool:
    return bool(PHONE_DIGITS_RE.match(phone_digits(value)))


def validate_rooms(rooms: Sequence[RoomSelection], catalog: RoomCatalog) -> FieldError | None:
    """First rule the room list breaks against the catalog, if any."""

    if len(rooms) > catalog.max_rooms:
        return FieldError("rooms", TOO_MANY_ROOMS, room_limit_notice(catalog))
    for index, room in enumerate(rooms, start=1):
        if room.type not in catalog.room_types:
            return FieldError(
                "rooms", UNKNOWN_ROOM_TYPE, f"Room {index}: please choose a room type from the list."
            )
        if not fits_capacity(room, catalog):
            notice = catalog.capacity_for(room.type).message
            return FieldError(
                "rooms",
                OVER_CAPACITY,
                f"Room {index}: {notice or 'too many guests for this room type.'}",
            )
    return None


def validate_booking(form: BookingForm, catalog: RoomCatalog | None = None) -> list[FieldError]:
    errors: list[FieldError] = []

    if not form.first_name.strip():
        errors.append(FieldError("firstName", REQUIRED, "Please enter your first name."))
    if not form.last_name.strip():
        errors.append(FieldError("lastName", REQUIRED, "Please enter your last name."))

    if not is_valid_email(form.email):
        errors.append(FieldError("email", INVALID, "Enter a valid email (name@example.com)."))

    if not is_valid_phone(form.phone):
        errors.append(FieldError("phone", INVALID, "Enter a valid phone (6–15 digits)."))

    if not form.check_in or not form.check_out:
        errors.append(
            FieldError("dates", REQUIRED, "Choose your check-in and check-out dates.")
        )
    elif not form.check_out > form.check_in:
        errors.append(FieldError("dates", DATE_ORDER, "Check-out must be after check-in."))

    if form.guests < 1:
        errors.append(FieldError("guests", REQUIRED, "Select room(s) and guests."))

    if catalog is not None:
        room_error = validate_rooms(form.rooms, catalog)
        if room_error:
            errors.append(room_error)

    if form.policy_accepted is False:
        errors.append(FieldError("policy", REQUIRED, "Please accept the Privacy Policy."))

    if not form.captcha_token.strip():
        errors.append(
            FieldError("captchaToken", REQUIRED, "Please complete the verification.")
        )

    return errors


def validate_contact(form: ContactForm) -> list[FieldError]:
    errors: list[FieldError] = []

    if not form.name.strip():
        errors.append(FieldError("name", REQUIRED, "Please enter your name."))
    if not is_valid_email(form.email):
        errors.append(FieldError("email", INVALID, "Enter a valid email (name@example.com)."))
    if form.phone.strip() and not is_valid_phone(form.phone):
        errors.append(FieldError("phone", INVALID, "Enter a valid phone (6–15 digits)."))
    if not form.message.strip():
        errors.append(FieldError("message", REQUIRED, "Please enter your message."))

    return errors


def first_error(errors: list[FieldError]) -> FieldError | None:
    return errors[0] if errors else None


__all__ = [
    "BOOKING_FIELDS",
    "REQUIRED",
    "INVALID",
    "DATE_ORDER",
    "TOO_MANY_ROOMS",
    "UNKNOWN_ROOM_TYPE",
    "OVER_CAPACITY",
    "is_valid_email",
    "is_valid_phone",
    "phone_digits",
    "validate_rooms",
    "validate_booking",
    "validate_contact",
    "first_error",
]
