import json
import sys
from datetime import date
from pathlib import Path

import pytest

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from hotel_booking.booking.models import RoomSelection
from hotel_booking.booking.parsers import (
    parse_date,
    parse_room_breakdown,
    to_bool,
    to_float,
    to_int,
)


def test_parses_json_encoded_breakdown():
    raw = json.dumps(
        [
            {"id": 1, "type": "Deluxe Room", "adults": 2, "children": 1, "infantUnder2": True},
            {"id": 2, "type": "Economy Room", "adults": "1", "children": "0"},
        ]
    )

    rooms = parse_room_breakdown(raw)

    assert [room.id for room in rooms] == [1, 2]
    assert rooms[0].infant_under_2 is True
    assert rooms[1].adults == 1
    assert rooms[1].children == 0


@pytest.mark.parametrize("raw", ["not json", "{\"a\": 1}", "", None, 42])
def test_malformed_breakdown_degrades_to_empty_list(raw):
    assert parse_room_breakdown(raw) == []


def test_skips_malformed_entries_and_clamps_counts():
    rooms = parse_room_breakdown(
        [
            "junk",
            {"adults": 2},
            {"type": "Single Room", "adults": 0, "children": -3, "infantUnder2": True},
        ]
    )

    assert len(rooms) == 1
    room = rooms[0]
    assert room.id == 3
    assert room.adults == 1
    assert room.children == 0
    assert room.infant_under_2 is False


def test_parse_date():
    assert parse_date("2024-01-10") == date(2024, 1, 10)
    assert parse_date("2024-01-10T00:00:00Z") == date(2024, 1, 10)
    assert parse_date("10/01/2024") is None
    assert parse_date("") is None


def test_scalar_coercion():
    assert to_int("3") == 3
    assert to_int("abc", default=7) == 7
    assert to_bool("on") is True
    assert to_bool("false") is False
    assert to_bool(None) is False
    assert to_float("76.5") == 76.5


@pytest.mark.parametrize("raw", ["1e400", "-1e400", "inf", "nan", float("inf")])
def test_non_finite_numbers_fall_back_to_default(raw):
    assert to_int(raw, default=4) == 4
    assert to_float(raw, default=1.5) == 1.5


def test_non_finite_guest_counts_degrade_to_minimums():
    rooms = parse_room_breakdown(
        [{"id": 1, "type": "Deluxe Room", "adults": "1e400", "children": "inf"}]
    )

    assert rooms == [RoomSelection(id=1, adults=1, children=0, type="Deluxe Room")]


def test_duplicate_room_ids_are_reassigned():
    rooms = parse_room_breakdown(
        [
            {"id": 1, "type": "Economy Room"},
            {"id": 1, "type": "Double Room"},
            {"id": 3, "type": "Single Room"},
            {"id": 3, "type": "Single Room"},
        ]
    )

    assert [room.id for room in rooms] == [1, 2, 3, 4]
    assert len({room.id for room in rooms}) == len(rooms)
