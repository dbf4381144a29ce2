"""Room pricing, capacity and validation rules shared by every booking surface."""

from .capacity import can_increment, clamp_to_capacity, fits_capacity
from .catalog import CatalogError, RoomCatalog, load_catalog
from .models import BookingForm, ContactForm, FieldError, OrderSummary, Quote, RoomSelection
from .pricing import chargeable_guests, compute_quote, count_nights
from .validation import validate_booking, validate_contact, validate_rooms

__all__ = [
    "BookingForm",
    "CatalogError",
    "ContactForm",
    "FieldError",
    "OrderSummary",
    "Quote",
    "RoomCatalog",
    "RoomSelection",
    "can_increment",
    "chargeable_guests",
    "clamp_to_capacity",
    "compute_quote",
    "count_nights",
    "fits_capacity",
    "load_catalog",
    "validate_booking",
    "validate_contact",
    "validate_rooms",
]
