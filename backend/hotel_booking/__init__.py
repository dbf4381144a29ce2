"""Hotel room-booking widget backend."""

__version__ = "1.0.0"
