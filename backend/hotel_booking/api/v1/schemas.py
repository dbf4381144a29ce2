from __future__ import annotations

from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from hotel_booking.booking.models import FieldError, OrderSummary, Quote, RoomSelection

MAX_GUESTS_PER_ROOM = 20


class RoomPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int = 1
    type: str
    adults: int = Field(1, ge=1, le=MAX_GUESTS_PER_ROOM)
    children: int = Field(0, ge=0, le=MAX_GUESTS_PER_ROOM)
    infant_under_2: bool = Field(False, alias="infantUnder2")

    def to_selection(self) -> RoomSelection:
        return RoomSelection(
            id=self.id,
            type=self.type,
            adults=self.adults,
            children=self.children,
            infant_under_2=self.infant_under_2 and self.children > 0,
        )

    @classmethod
    def from_selection(cls, room: RoomSelection) -> "RoomPayload":
        return cls(
            id=room.id,
            type=room.type,
            adults=room.adults,
            children=room.children,
            infant_under_2=room.infant_under_2,
        )


class QuoteRequest(BaseModel):
    rooms: list[RoomPayload] = Field(default_factory=list)
    checkin: date | None = None
    checkout: date | None = None


class RoomPrice(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    type: str
    chargeable_guests: int = Field(alias="chargeableGuests")
    price_per_night: float = Field(alias="pricePerNight")


class QuoteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    nights: int
    nightly_subtotal: float = Field(alias="nightlySubtotal")
    tax: float
    total: float
    room_types: str = Field(alias="roomTypes")
    guests_text: str = Field(alias="guestsText")
    label: str
    rooms: list[RoomPrice] = Field(default_factory=list)

    @classmethod
    def build(
        cls, quote: Quote, summary: OrderSummary, rooms: list[RoomPrice]
    ) -> "QuoteResponse":
        return cls(
            nights=quote.nights,
            nightly_subtotal=quote.nightly_subtotal,
            tax=quote.tax,
            total=quote.total,
            room_types=summary.room_types,
            guests_text=summary.guests_text,
            label=summary.toggle_label,
            rooms=rooms,
        )


class GuestCountRequest(BaseModel):
    room: RoomPayload
    field: Literal["adults", "children"]


class GuestCountResponse(BaseModel):
    allowed: bool
    room: RoomPayload
    notice: str | None = None


class ClampRequest(BaseModel):
    room: RoomPayload


class ClampResponse(BaseModel):
    changed: bool
    room: RoomPayload
    notice: str | None = None


class RoomTypeChangeRequest(BaseModel):
    room: RoomPayload
    type: str


class RoomListRequest(BaseModel):
    rooms: list[RoomPayload] = Field(default_factory=list)


class RemoveRoomRequest(RoomListRequest):
    model_config = ConfigDict(populate_by_name=True)

    room_id: int = Field(alias="roomId")


class RoomListResponse(BaseModel):
    changed: bool
    rooms: list[RoomPayload]
    notice: str | None = None


class RoomTypeInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str
    max_guests: int | None = Field(None, alias="maxGuests")
    max_children: int | None = Field(None, alias="maxChildren")
    notice: str = ""
    prices: dict[int, float] = Field(default_factory=dict)


class RoomTypesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    room_types: list[RoomTypeInfo] = Field(alias="roomTypes")
    default_type: str = Field(alias="defaultType")
    max_rooms: int = Field(alias="maxRooms")


class BookingSubmission(BaseModel):
    """The booking widget's form body; every field is optional and loosely typed."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    room_type: str = Field("", alias="roomType")
    name: str = ""
    first_name: str | None = Field(None, alias="firstName")
    last_name: str | None = Field(None, alias="lastName")
    email: str = ""
    phone: str = ""
    checkin: str = ""
    checkout: str = ""
    guests: Any = None
    guests_text: str = Field("", alias="guestsText")
    nights: Any = None
    price_per_night: Any = Field(None, alias="pricePerNight")
    infants: Any = None
    room_breakdown: Any = Field("[]", alias="roomBreakdown")
    message: str = ""
    policy: Any = None
    captcha_token: str = Field("", alias="captchaToken")
    total: Any = None


class ContactSubmission(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    message: str = ""


class FieldErrorModel(BaseModel):
    field: str
    kind: str
    message: str

    @classmethod
    def from_error(cls, error: FieldError) -> "FieldErrorModel":
        return cls(field=error.field, kind=error.kind, message=error.message)


class SubmissionResponse(BaseModel):
    message: str
    reference: str | None = None
    quote: dict[str, Any] | None = None
    errors: list[FieldErrorModel] | None = None


__all__ = [
    "RoomPayload",
    "QuoteRequest",
    "RoomPrice",
    "QuoteResponse",
    "MAX_GUESTS_PER_ROOM",
    "GuestCountRequest",
    "GuestCountResponse",
    "ClampRequest",
    "ClampResponse",
    "RoomTypeChangeRequest",
    "RoomListRequest",
    "RemoveRoomRequest",
    "RoomListResponse",
    "RoomTypeInfo",
    "RoomTypesResponse",
    "BookingSubmission",
    "ContactSubmission",
    "FieldErrorModel",
    "SubmissionResponse",
]
