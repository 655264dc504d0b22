"""Test fixtures for room allocator tests."""

import json

import pytest


@pytest.fixture
def rooms():
    """Two rooms in preference order."""
    return ["A", "B"]


@pytest.fixture
def numeric_payload(rooms):
    """Three pending queries competing for two rooms (integer endpoints)."""
    return {
        "queries": [
            {"id": "q1", "checkIn": 9, "checkOut": 10},
            {"id": "q2", "checkIn": 9, "checkOut": 11},
            {"id": "q3", "checkIn": 10, "checkOut": 12},
        ],
        "rooms": rooms,
        "range": None,
    }


@pytest.fixture
def hotel_payload():
    """ISO-date payload mixing fixed, pending and out-of-range queries."""
    return {
        "queries": [
            {
                "guest": "Fixed Guest",
                "checkIn": "2024-01-10",
                "checkOut": "2024-01-15",
                "assigned": True,
                "roomId": "101",
            },
            {
                "guest": "Early Bird",
                "checkIn": "2024-01-02",
                "checkOut": "2024-01-05",
                "assigned": False,
                "roomId": None,
            },
            {
                "guest": "Overlapper",
                "checkIn": "2024-01-12",
                "checkOut": "2024-01-14",
            },
            {
                "guest": "February",
                "checkIn": "2024-02-01",
                "checkOut": "2024-02-03",
            },
        ],
        "rooms": ["101", "102"],
        "range": {"from": "2024-01-01", "to": "2024-01-31"},
    }


@pytest.fixture
def payload_file(tmp_path, hotel_payload):
    """Write the hotel payload to a temporary JSON file."""
    path = tmp_path / "input.json"
    path.write_text(json.dumps(hotel_payload), encoding="utf-8")
    return path


@pytest.fixture
def rooms_csv(tmp_path):
    """Create a temporary rooms.csv with one disabled room."""
    path = tmp_path / "rooms.csv"
    path.write_text(
        "name,is_disabled\n"
        "201,\n"
        "202,true\n"
        "203,\n",
        encoding="utf-8",
    )
    return path
