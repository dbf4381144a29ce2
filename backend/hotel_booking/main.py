from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from hotel_booking.api.v1 import booking, contact
from hotel_booking.booking.catalog import load_catalog
from hotel_booking.booking.service import BookingRequestService
from hotel_booking.core.config import get_settings
from hotel_booking.core.logging import setup_logging
from hotel_booking.services.mail import LoggingOutbox
from hotel_booking.services.turnstile import TurnstileVerifier

logger = logging.getLogger(__name__)

settings = get_settings()
setup_logging()

catalog = load_catalog(settings.room_catalog_path)
turnstile_verifier = TurnstileVerifier()
outbox = LoggingOutbox()
booking_service = BookingRequestService(
    catalog=catalog,
    settings=settings,
    outbox=outbox,
    verifier=turnstile_verifier,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not turnstile_verifier.is_configured():
        logger.warning("Turnstile is not configured: captcha verification is skipped")
    if not settings.email_to:
        logger.warning("EMAIL_TO is not set: admin notifications cannot be delivered")
    logger.info(
        "Booking service ready: %d room types, tax %.2f per room-night",
        len(catalog.room_types),
        settings.tax_per_room_night,
    )
    try:
        yield
    finally:
        await turnstile_verifier.close()


def booking_service_dependency() -> BookingRequestService:
    return booking_service


async def health() -> PlainTextResponse:
    return PlainTextResponse("OK")


def create_app() -> FastAPI:
    app = FastAPI(title="Hotel Booking API", lifespan=lifespan)
    api_prefix = settings.api_prefix

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_credentials=False,
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["*"],
    )

    app.dependency_overrides[booking.get_booking_service] = booking_service_dependency

    app.include_router(booking.router, prefix=api_prefix)
    app.include_router(contact.router, prefix=api_prefix)
    app.add_api_route("/health", health, methods=["GET"])
    return app


app = create_app()
