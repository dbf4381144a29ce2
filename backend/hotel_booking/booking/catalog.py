from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from hotel_booking.booking.models import RoomTypeCapacity

logger = logging.getLogger(__name__)

UNRESTRICTED = RoomTypeCapacity(max_total=math.inf, max_children=math.inf)

DEFAULT_CAPACITY: dict[str, RoomTypeCapacity] = {
    "Economy Room": RoomTypeCapacity(2, 1, "Economy Room max capacity is 2 Guests."),
    "Single Room": RoomTypeCapacity(1, 0, "Single Room max capacity is 1 Guest."),
    "Deluxe Room": RoomTypeCapacity(3, 2, "Deluxe Room max capacity is 3 Guests."),
    "Double Room": RoomTypeCapacity(2, 1, "Double Room max capacity is 2 Guests."),
}

DEFAULT_PRICES: dict[str, dict[int, float]] = {
    "Economy Room": {1: 62, 2: 67},
    "Standard Room": {1: 62, 2: 67},
    "Deluxe Room": {1: 67, 2: 72, 3: 76},
    "Single Room": {1: 62},
    "Double Room": {1: 62, 2: 67},
}

DEFAULT_ROOM_TYPES = ("Economy Room", "Deluxe Room", "Single Room", "Double Room")
DEFAULT_MAX_ROOMS = 2


class CatalogError(RuntimeError):
    """Room catalog file is missing or malformed."""


@dataclass
class RoomCatalog:
    capacities: dict[str, RoomTypeCapacity] = field(
        default_factory=lambda: dict(DEFAULT_CAPACITY)
    )
    prices: dict[str, dict[int, float]] = field(
        default_factory=lambda: {name: dict(table) for name, table in DEFAULT_PRICES.items()}
    )
    room_types: tuple[str, ...] = DEFAULT_ROOM_TYPES
    max_rooms: int = DEFAULT_MAX_ROOMS

    @property
    def default_room_type(self) -> str:
        return self.room_types[0] if self.room_types else ""

    def capacity_for(self, room_type: str) -> RoomTypeCapacity:
        capacity = self.capacities.get(room_type)
        if capacity is None:
            logger.warning("No capacity rule for room type %r, treating as unrestricted", room_type)
            return UNRESTRICTED
        return capacity

    def price_table(self, room_type: str) -> dict[int, float]:
        table = self.prices.get(room_type)
        if table is None:
            logger.warning("No price table for room type %r, pricing it at 0", room_type)
            return {}
        return table

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "RoomCatalog":
        if not isinstance(raw, Mapping):
            raise CatalogError("Room catalog must be a JSON object")

        capacities: dict[str, RoomTypeCapacity] = {}
        for name, item in (raw.get("capacity") or {}).items():
            if not isinstance(item, Mapping):
                raise CatalogError(f"Capacity entry for {name!r} must be an object")
            try:
                capacities[name] = RoomTypeCapacity(
                    max_total=int(item["maxTotal"]),
                    max_children=int(item["maxChildren"]),
                    message=str(item.get("message") or item.get("msg") or ""),
                )
            except (KeyError, TypeError, ValueError) as exc:
                raise CatalogError(f"Invalid capacity entry for {name!r}: {exc}") from exc

        prices: dict[str, dict[int, float]] = {}
        for name, table in (raw.get("prices") or {}).items():
            if not isinstance(table, Mapping):
                raise CatalogError(f"Price table for {name!r} must be an object")
            try:
                prices[name] = {int(guests): float(price) for guests, price in table.items()}
            except (TypeError, ValueError) as exc:
                raise CatalogError(f"Invalid price table for {name!r}: {exc}") from exc

        room_types = tuple(raw.get("roomTypes") or capacities.keys() or prices.keys())
        if not room_types:
            raise CatalogError("Room catalog defines no room types")

        try:
            max_rooms = int(raw.get("maxRooms", DEFAULT_MAX_ROOMS))
        except (TypeError, ValueError) as exc:
            raise CatalogError(f"Invalid maxRooms: {exc}") from exc

        return cls(
            capacities=capacities,
            prices=prices,
            room_types=room_types,
            max_rooms=max(1, max_rooms),
        )


def load_catalog(path: str | Path | None = None) -> RoomCatalog:
    """Reads the catalog from a JSON file, or returns the built-in tables."""

    if not path:
        return RoomCatalog()

    catalog_path = Path(path)
    try:
        raw = json.loads(catalog_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CatalogError(f"Cannot read room catalog {catalog_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Room catalog {catalog_path} is not valid JSON: {exc}") from exc

    catalog = RoomCatalog.from_dict(raw)
    logger.info(
        "Loaded room catalog from %s: %d room types", catalog_path, len(catalog.room_types)
    )
    return catalog


__all__ = [
    "CatalogError",
    "RoomCatalog",
    "UNRESTRICTED",
    "DEFAULT_CAPACITY",
    "DEFAULT_PRICES",
    "DEFAULT_ROOM_TYPES",
    "load_catalog",
]
