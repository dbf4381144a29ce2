from __future__ import annotations

import math

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from hotel_booking.api.v1.schemas import (
    MAX_GUESTS_PER_ROOM,
    BookingSubmission,
    ClampRequest,
    ClampResponse,
    FieldErrorModel,
    GuestCountRequest,
    GuestCountResponse,
    QuoteRequest,
    QuoteResponse,
    RemoveRoomRequest,
    RoomListRequest,
    RoomListResponse,
    RoomPayload,
    RoomPrice,
    RoomTypeChangeRequest,
    RoomTypeInfo,
    RoomTypesResponse,
    SubmissionResponse,
)
from hotel_booking.booking.capacity import (
    add_room,
    capacity_notice,
    change_room_type,
    clamp_to_capacity,
    decrement,
    increment,
    max_guests,
    remove_room,
    room_limit_notice,
)
from hotel_booking.booking.formatting import build_order_summary
from hotel_booking.booking.models import BookingForm, FieldError
from hotel_booking.booking.parsers import (
    parse_date,
    parse_room_breakdown,
    to_bool,
    to_float,
    to_int,
)
from hotel_booking.booking.pricing import chargeable_guests, room_price_per_night
from hotel_booking.booking.service import CAPTCHA_FAILED, BookingRequestService

router = APIRouter(prefix="/booking", tags=["booking"])


def get_booking_service() -> BookingRequestService:  # pragma: no cover - overridden in main
    raise RuntimeError("Booking service dependency is not configured")


def client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("cf-connecting-ip")
    if forwarded:
        return forwarded.strip()
    return request.client.host if request.client else None


def errors_response(message: str, errors: list[FieldError]) -> JSONResponse:
    payload = SubmissionResponse(
        message=message,
        errors=[FieldErrorModel.from_error(error) for error in errors],
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=payload.model_dump(exclude_none=True),
    )


def _split_name(payload: BookingSubmission) -> tuple[str, str]:
    if payload.first_name is not None or payload.last_name is not None:
        return (payload.first_name or "").strip(), (payload.last_name or "").strip()
    first, _, last = payload.name.strip().partition(" ")
    return first, last.strip()


def build_booking_form(payload: BookingSubmission) -> BookingForm:
    rooms = parse_room_breakdown(payload.room_breakdown)
    first_name, last_name = _split_name(payload)
    guests = sum(room.adults + room.children for room in rooms) or to_int(payload.guests)
    return BookingForm(
        first_name=first_name,
        last_name=last_name,
        email=payload.email,
        phone=payload.phone,
        check_in=parse_date(payload.checkin),
        check_out=parse_date(payload.checkout),
        guests=guests,
        policy_accepted=None if payload.policy is None else to_bool(payload.policy),
        captcha_token=payload.captcha_token,
        message=payload.message,
        rooms=rooms,
    )


@router.post("/quote", response_model=QuoteResponse)
async def quote_endpoint(
    payload: QuoteRequest,
    service: BookingRequestService = Depends(get_booking_service),
) -> QuoteResponse:
    rooms = [room.to_selection() for room in payload.rooms]
    quote = service.quote(rooms, payload.checkin, payload.checkout)
    prices = [
        RoomPrice(
            id=room.id,
            type=room.type,
            chargeable_guests=chargeable_guests(room),
            price_per_night=room_price_per_night(room, service.catalog),
        )
        for room in rooms
    ]
    return QuoteResponse.build(quote, build_order_summary(rooms), prices)


@router.get("/rooms/types", response_model=RoomTypesResponse)
async def room_types_endpoint(
    service: BookingRequestService = Depends(get_booking_service),
) -> RoomTypesResponse:
    catalog = service.catalog
    room_types = []
    for room_type in catalog.room_types:
        caps = catalog.capacity_for(room_type)
        room_types.append(
            RoomTypeInfo(
                type=room_type,
                max_guests=max_guests(room_type, catalog),
                max_children=None if math.isinf(caps.max_children) else int(caps.max_children),
                notice=caps.message,
                prices=dict(catalog.price_table(room_type)),
            )
        )
    return RoomTypesResponse(
        room_types=room_types,
        default_type=catalog.default_room_type,
        max_rooms=catalog.max_rooms,
    )


@router.post("/rooms/increment", response_model=GuestCountResponse)
async def increment_endpoint(
    payload: GuestCountRequest,
    service: BookingRequestService = Depends(get_booking_service),
) -> GuestCountResponse:
    room = payload.room.to_selection()
    allowed = getattr(room, payload.field) < MAX_GUESTS_PER_ROOM and increment(
        room, payload.field, service.catalog
    )
    notice = None if allowed else capacity_notice(room, service.catalog) or None
    return GuestCountResponse(
        allowed=allowed, room=RoomPayload.from_selection(room), notice=notice
    )


@router.post("/rooms/decrement", response_model=GuestCountResponse)
async def decrement_endpoint(payload: GuestCountRequest) -> GuestCountResponse:
    room = payload.room.to_selection()
    allowed = decrement(room, payload.field)
    return GuestCountResponse(allowed=allowed, room=RoomPayload.from_selection(room))


@router.post("/rooms/clamp", response_model=ClampResponse)
async def clamp_endpoint(
    payload: ClampRequest,
    service: BookingRequestService = Depends(get_booking_service),
) -> ClampResponse:
    room = payload.room.to_selection()
    changed = clamp_to_capacity(room, service.catalog)
    notice = capacity_notice(room, service.catalog) if changed else ""
    return ClampResponse(
        changed=changed, room=RoomPayload.from_selection(room), notice=notice or None
    )


@router.post("/rooms/type", response_model=ClampResponse)
async def room_type_endpoint(
    payload: RoomTypeChangeRequest,
    service: BookingRequestService = Depends(get_booking_service),
) -> ClampResponse:
    if payload.type not in service.catalog.room_types:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown room type: {payload.type}",
        )
    room = payload.room.to_selection()
    changed = change_room_type(room, payload.type, service.catalog)
    notice = capacity_notice(room, service.catalog) if changed else ""
    return ClampResponse(
        changed=changed, room=RoomPayload.from_selection(room), notice=notice or None
    )


@router.post("/rooms/add", response_model=RoomListResponse)
async def add_room_endpoint(
    payload: RoomListRequest,
    service: BookingRequestService = Depends(get_booking_service),
) -> RoomListResponse:
    rooms = [room.to_selection() for room in payload.rooms]
    added = add_room(rooms, service.catalog)
    return RoomListResponse(
        changed=added is not None,
        rooms=[RoomPayload.from_selection(room) for room in rooms],
        notice=None if added else room_limit_notice(service.catalog),
    )


@router.post("/rooms/remove", response_model=RoomListResponse)
async def remove_room_endpoint(payload: RemoveRoomRequest) -> RoomListResponse:
    rooms = [room.to_selection() for room in payload.rooms]
    removed = remove_room(rooms, payload.room_id)
    return RoomListResponse(
        changed=removed,
        rooms=[RoomPayload.from_selection(room) for room in rooms],
    )


@router.post("/send", response_model=SubmissionResponse, response_model_exclude_none=True)
async def send_endpoint(
    payload: BookingSubmission,
    request: Request,
    service: BookingRequestService = Depends(get_booking_service),
):
    form = build_booking_form(payload)
    result = await service.submit_booking(
        form,
        price_per_night_hint=to_float(payload.price_per_night),
        remote_ip=client_ip(request),
    )
    if not result.ok:
        if result.errors[0].kind == CAPTCHA_FAILED.kind:
            return errors_response("Verification failed. Please try again.", result.errors)
        return errors_response("Please correct the highlighted fields.", result.errors)

    return SubmissionResponse(
        message="Thank you! Your booking request has been submitted.",
        reference=result.reference,
        quote=result.quote.to_dict() if result.quote else None,
    )


__all__ = ["router", "get_booking_service", "build_booking_form", "client_ip", "errors_response"]
