from __future__ import annotations

from fastapi import APIRouter, Depends

from hotel_booking.api.v1.booking import errors_response, get_booking_service
from hotel_booking.api.v1.schemas import ContactSubmission, SubmissionResponse
from hotel_booking.booking.models import ContactForm
from hotel_booking.booking.service import BookingRequestService

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("", response_model=SubmissionResponse, response_model_exclude_none=True)
async def contact_endpoint(
    payload: ContactSubmission,
    service: BookingRequestService = Depends(get_booking_service),
):
    form = ContactForm(
        name=payload.name,
        email=payload.email,
        phone=payload.phone,
        message=payload.message,
    )
    result = await service.submit_contact(form)
    if not result.ok:
        return errors_response("Please correct the highlighted fields.", result.errors)
    return SubmissionResponse(
        message="Thank you! Your message has been received.",
        reference=result.reference,
    )


__all__ = ["router"]
