from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Sequence

from fastapi import HTTPException, status

from hotel_booking.booking.catalog import RoomCatalog
from hotel_booking.booking.formatting import (
    BOOKING_PREFIX,
    CONTACT_PREFIX,
    booking_text_summary,
    build_order_summary,
    contact_text_message,
    make_reference,
)
from hotel_booking.booking.models import (
    BookingForm,
    ContactForm,
    FieldError,
    OrderSummary,
    Quote,
    RoomSelection,
)
from hotel_booking.booking.pricing import compute_quote, count_nights
from hotel_booking.booking.validation import validate_booking, validate_contact
from hotel_booking.core.config import Settings
from hotel_booking.services.mail import (
    MailDeliveryError,
    MailOutbox,
    OutgoingMessage,
    dispatch_all,
    format_address,
)
from hotel_booking.services.turnstile import TurnstileVerifier

logger = logging.getLogger(__name__)

CAPTCHA_FAILED = FieldError(
    "captchaToken", "verification_failed", "Verification failed. Please try again."
)


@dataclass
class SubmissionResult:
    reference: str | None = None
    quote: Quote | None = None
    summary: OrderSummary | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class BookingRequestService:
    def __init__(
        self,
        *,
        catalog: RoomCatalog,
        settings: Settings,
        outbox: MailOutbox,
        verifier: TurnstileVerifier,
    ) -> None:
        self._catalog = catalog
        self._settings = settings
        self._outbox = outbox
        self._verifier = verifier

    @property
    def catalog(self) -> RoomCatalog:
        return self._catalog

    def quote(
        self,
        rooms: Sequence[RoomSelection],
        check_in: date | None,
        check_out: date | None,
    ) -> Quote:
        return compute_quote(
            rooms,
            check_in,
            check_out,
            self._catalog,
            tax_per_room_night=self._settings.tax_per_room_night,
        )

    def quote_without_rooms(
        self, check_in: date | None, check_out: date | None, price_per_night: float
    ) -> Quote:
        """Quote for a widget that posted no usable room breakdown.

        The posted nightly price stands in for the room prices and one room
        is taxed. It never applies once a room is known.
        """

        nights = count_nights(check_in, check_out)
        subtotal = price_per_night if math.isfinite(price_per_night) and price_per_night > 0 else 0.0
        tax = self._settings.tax_per_room_night
        total = (subtotal + tax) * nights if nights else 0.0
        return Quote(
            nights=nights,
            nightly_subtotal=round(subtotal, 2),
            tax=round(tax, 2),
            total=round(total, 2),
        )

    async def submit_booking(
        self,
        form: BookingForm,
        *,
        price_per_night_hint: float = 0,
        remote_ip: str | None = None,
        now: datetime | None = None,
    ) -> SubmissionResult:
        if not await self._verifier.verify(form.captcha_token, remote_ip):
            return SubmissionResult(errors=[CAPTCHA_FAILED])

        errors = validate_booking(form, self._catalog)
        if errors:
            logger.info("Booking rejected, first invalid field: %s", errors[0].field)
            return SubmissionResult(errors=errors)

        if form.rooms:
            quote = self.quote(form.rooms, form.check_in, form.check_out)
        else:
            logger.info("Booking has no room breakdown, pricing from the posted nightly rate")
            quote = self.quote_without_rooms(form.check_in, form.check_out, price_per_night_hint)
        summary = build_order_summary(form.rooms)
        reference = make_reference(BOOKING_PREFIX, now)
        text = booking_text_summary(
            hotel_name=self._settings.hotel_name,
            reference=reference,
            form=form,
            summary=summary,
            quote=quote,
            currency_symbol=self._settings.currency_symbol,
            hotel_address=self._settings.hotel_address,
        )

        hotel = self._settings.hotel_name
        messages = [
            OutgoingMessage(
                sender=format_address(f"{hotel} Website", self._settings.email_from),
                to=self._settings.email_to,
                subject=f"Booking request {reference} - {hotel}",
                text=text,
                reply_to=format_address(form.full_name, form.email.strip()),
            ),
            OutgoingMessage(
                sender=format_address(f"{hotel} Reservations", self._settings.email_from),
                to=form.email.strip(),
                subject=f"Your booking request - {hotel} (Ref {reference})",
                text=text,
            ),
        ]
        await self._deliver(messages)

        logger.info(
            "Booking %s accepted: %d room(s), %d night(s), total %.2f",
            reference,
            len(form.rooms),
            quote.nights,
            quote.total,
        )
        return SubmissionResult(reference=reference, quote=quote, summary=summary)

    async def submit_contact(
        self, form: ContactForm, *, now: datetime | None = None
    ) -> SubmissionResult:
        errors = validate_contact(form)
        if errors:
            return SubmissionResult(errors=errors)

        hotel = self._settings.hotel_name
        reference = make_reference(CONTACT_PREFIX, now)
        text = contact_text_message(
            hotel_name=hotel,
            reference=reference,
            name=form.name.strip(),
            message=form.message.strip(),
            hotel_address=self._settings.hotel_address,
        )
        email = form.email.strip()
        messages = [
            OutgoingMessage(
                sender=format_address(f"{hotel} Website", self._settings.email_from),
                to=self._settings.email_to,
                subject=f"New contact form message - {hotel}",
                text=text,
                reply_to=format_address(form.name.strip(), email),
            ),
            OutgoingMessage(
                sender=format_address(f"{hotel} Team", self._settings.email_from),
                to=email,
                subject=f"We received your message - {hotel}",
                text=text,
            ),
        ]
        await self._deliver(messages)
        return SubmissionResult(reference=reference)

    async def _deliver(self, messages: list[OutgoingMessage]) -> None:
        try:
            await dispatch_all(self._outbox, messages)
        except MailDeliveryError as exc:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Email failed to send. Please try again later.",
            ) from exc


__all__ = ["BookingRequestService", "SubmissionResult", "CAPTCHA_FAILED"]
