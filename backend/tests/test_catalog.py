import json
import sys
from pathlib import Path

import pytest

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from hotel_booking.booking.catalog import CatalogError, RoomCatalog, load_catalog


def test_default_catalog_tables():
    catalog = load_catalog(None)

    assert catalog.default_room_type == "Economy Room"
    assert catalog.max_rooms == 2
    assert catalog.capacity_for("Deluxe Room").max_total == 3
    assert catalog.capacity_for("Deluxe Room").max_children == 2
    assert catalog.price_table("Deluxe Room") == {1: 67, 2: 72, 3: 76}


def test_default_catalogs_do_not_share_tables():
    first = RoomCatalog()
    second = RoomCatalog()

    first.prices["Deluxe Room"][1] = 999

    assert second.prices["Deluxe Room"][1] == 67


def test_loads_catalog_from_json(tmp_path):
    path = tmp_path / "rooms.json"
    path.write_text(
        json.dumps(
            {
                "roomTypes": ["Suite"],
                "maxRooms": 3,
                "capacity": {"Suite": {"maxTotal": 4, "maxChildren": 2, "msg": "Suite max is 4."}},
                "prices": {"Suite": {"1": 120, "2": "130.5"}},
            }
        ),
        encoding="utf-8",
    )

    catalog = load_catalog(path)

    assert catalog.room_types == ("Suite",)
    assert catalog.max_rooms == 3
    assert catalog.capacity_for("Suite").message == "Suite max is 4."
    assert catalog.price_table("Suite") == {1: 120.0, 2: 130.5}


def test_missing_file_raises_catalog_error(tmp_path):
    with pytest.raises(CatalogError):
        load_catalog(tmp_path / "missing.json")


def test_invalid_json_raises_catalog_error(tmp_path):
    path = tmp_path / "rooms.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(CatalogError):
        load_catalog(path)


@pytest.mark.parametrize(
    "raw",
    [
        [],
        {"capacity": {"Suite": {"maxTotal": "many"}}},
        {"prices": {"Suite": {"one": 10}}},
        {},
    ],
)
def test_malformed_catalog_is_rejected(raw):
    with pytest.raises(CatalogError):
        RoomCatalog.from_dict(raw)
