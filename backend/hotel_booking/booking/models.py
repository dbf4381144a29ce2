from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

ADULTS = "adults"
CHILDREN = "children"
GUEST_FIELDS = (ADULTS, CHILDREN)


@dataclass
class RoomSelection:
    id: int
    adults: int = 1
    children: int = 0
    type: str = ""
    infant_under_2: bool = False


@dataclass(frozen=True)
class RoomTypeCapacity:
    max_total: float
    max_children: float
    message: str = ""


@dataclass
class Quote:
    nights: int
    nightly_subtotal: float
    tax: float
    total: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "nights": self.nights,
            "nightlySubtotal": self.nightly_subtotal,
            "tax": self.tax,
            "total": self.total,
        }


@dataclass
class FieldError:
    field: str
    kind: str
    message: str


@dataclass
class BookingForm:
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    check_in: date | None = None
    check_out: date | None = None
    guests: int = 0
    policy_accepted: bool | None = None
    captcha_token: str = ""
    message: str = ""
    rooms: list[RoomSelection] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name.strip(), self.last_name.strip()) if part)


@dataclass
class ContactForm:
    name: str = ""
    email: str = ""
    phone: str = ""
    message: str = ""


@dataclass
class OrderSummary:
    room_types: str
    guests_text: str
    toggle_label: str
    adults: int
    children: int
    infants: int

    @property
    def guests(self) -> int:
        return self.adults + self.children


__all__ = [
    "ADULTS",
    "CHILDREN",
    "GUEST_FIELDS",
    "RoomSelection",
    "RoomTypeCapacity",
    "Quote",
    "FieldError",
    "BookingForm",
    "ContactForm",
    "OrderSummary",
]
