"""Tests for payload validation."""

import pytest

from room_allocator.exceptions import InvalidPayloadError
from room_allocator.models import DateRange
from room_allocator.validators import (
    ensure_valid_payload,
    find_duplicate_rooms,
    validate_endpoint,
    validate_payload,
    validate_query_record,
    validate_range,
    validate_room_ids,
    validate_window_kind,
)


class TestValidateRoomIds:
    """Tests for validate_room_ids function."""

    def test_valid(self):
        assert validate_room_ids(["A", "B"]) == (True, None)

    def test_empty_is_valid(self):
        assert validate_room_ids([]) == (True, None)

    def test_not_a_list(self):
        is_valid, message = validate_room_ids("A,B")
        assert not is_valid
        assert "list" in message

    def test_non_string_room(self):
        is_valid, message = validate_room_ids(["A", 2])
        assert not is_valid
        assert "string" in message


class TestFindDuplicateRooms:
    """Tests for find_duplicate_rooms function."""

    def test_no_duplicates(self):
        assert find_duplicate_rooms(["A", "B"]) == []

    def test_duplicates_reported_once(self):
        assert find_duplicate_rooms(["A", "B", "A", "A", "B"]) == ["A", "B"]


class TestValidateQueryRecord:
    """Tests for validate_query_record function."""

    def test_valid(self):
        assert validate_query_record({"checkIn": "2024-01-01", "checkOut": "2024-01-02"}) == (
            True,
            None,
        )

    def test_not_an_object(self):
        is_valid, _ = validate_query_record(["2024-01-01", "2024-01-02"])
        assert not is_valid

    def test_missing_check_out(self):
        is_valid, message = validate_query_record({"checkIn": "2024-01-01"})
        assert not is_valid
        assert "checkOut" in message

    def test_null_check_in(self):
        is_valid, message = validate_query_record({"checkIn": None, "checkOut": 2})
        assert not is_valid
        assert "checkIn" in message

    def test_nan_check_out(self):
        is_valid, message = validate_query_record({"checkIn": 1, "checkOut": float("nan")})
        assert not is_valid
        assert "checkOut" in message


class TestValidateRange:
    """Tests for validate_range function."""

    def test_none(self):
        assert validate_range(None) == (True, None)

    def test_valid(self):
        assert validate_range({"from": "2024-01-01", "to": "2024-01-31"}) == (True, None)

    def test_partial(self):
        assert validate_range({"to": "2024-01-31"}) == (True, None)

    def test_not_an_object(self):
        is_valid, _ = validate_range(["2024-01-01", "2024-01-31"])
        assert not is_valid

    def test_bad_bound(self):
        is_valid, message = validate_range({"from": {"day": 1}})
        assert not is_valid
        assert "from" in message


class TestValidateWindowKind:
    """Tests for validate_window_kind function."""

    def test_matching_kind(self):
        assert validate_window_kind(DateRange(1, 5), "number") == (True, None)

    def test_open_side(self):
        assert validate_window_kind(DateRange(end="2024-01-31"), "string") == (True, None)

    def test_no_queries_accepts_any_kind(self):
        assert validate_window_kind(DateRange("a", "b"), None) == (True, None)

    def test_string_bound_with_numeric_queries(self):
        is_valid, message = validate_window_kind(DateRange(start="abc"), "number")
        assert not is_valid
        assert "'from' is a string" in message

    def test_numeric_bound_with_string_queries(self):
        is_valid, message = validate_window_kind(DateRange(0, 10), "string")
        assert not is_valid
        assert "'from' is a number" in message

    def test_unsupported_bound(self):
        is_valid, message = validate_window_kind(DateRange(end=float("inf")), "number")
        assert not is_valid
        assert "'to'" in message


class TestValidateEndpoint:
    """Tests for validate_endpoint function."""

    def test_iso_string(self):
        assert validate_endpoint("2024-01-01") == (True, None)

    def test_number(self):
        assert validate_endpoint(10) == (True, None)

    def test_non_iso_string_warns(self):
        is_valid, warning = validate_endpoint("Jan 1")
        assert is_valid
        assert "ISO-8601" in warning


class TestValidatePayload:
    """Tests for validate_payload function."""

    def test_valid_payload(self, hotel_payload):
        validation = validate_payload(hotel_payload)
        assert validation["valid"]
        assert validation["errors"] == []
        assert validation["warnings"] == []

    def test_not_an_object(self):
        validation = validate_payload([1, 2, 3])
        assert not validation["valid"]
        assert len(validation["errors"]) == 1

    def test_missing_queries(self):
        validation = validate_payload({"rooms": ["A"]})
        assert not validation["valid"]
        assert validation["errors"][0].field == "queries"

    def test_missing_rooms(self):
        validation = validate_payload({"queries": []})
        assert not validation["valid"]
        assert validation["errors"][0].field == "rooms"

    def test_bad_query_reports_index(self):
        payload = {
            "queries": [{"checkIn": 1, "checkOut": 2}, {"checkIn": 3}],
            "rooms": ["A"],
        }
        validation = validate_payload(payload)
        assert not validation["valid"]
        error = validation["errors"][0]
        assert error.field == "queries"
        assert error.index == 1
        assert "index 1" in str(error)

    def test_collects_all_structural_errors(self):
        validation = validate_payload({"queries": [42], "rooms": None, "range": 5})
        assert len(validation["errors"]) == 3

    def test_mixed_endpoint_kinds(self):
        payload = {
            "queries": [
                {"checkIn": "2024-01-01", "checkOut": "2024-01-02"},
                {"checkIn": 3, "checkOut": 4},
            ],
            "rooms": ["A"],
        }
        validation = validate_payload(payload)
        assert not validation["valid"]
        assert "Mixed" in str(validation["errors"][0])
        assert validation["errors"][0].index == 1

    def test_numeric_range_with_string_queries(self):
        payload = {
            "queries": [{"checkIn": "2024-01-01", "checkOut": "2024-01-02"}],
            "rooms": ["A"],
            "range": {"from": 0, "to": 10},
        }
        validation = validate_payload(payload)
        assert not validation["valid"]
        assert validation["errors"][0].field == "range.from"

    def test_duplicate_rooms_warn(self):
        validation = validate_payload({"queries": [], "rooms": ["A", "A"]})
        assert validation["valid"]
        assert validation["warnings"] == ["Duplicate room id 'A'"]

    def test_non_iso_warning_reported_once(self):
        payload = {
            "queries": [
                {"checkIn": "day 1", "checkOut": "day 2"},
                {"checkIn": "day 1", "checkOut": "day 3"},
            ],
            "rooms": ["A"],
        }
        validation = validate_payload(payload)
        assert validation["valid"]
        assert len(validation["warnings"]) == 3


class TestEnsureValidPayload:
    """Tests for ensure_valid_payload function."""

    def test_returns_warnings(self):
        assert ensure_valid_payload({"queries": [], "rooms": ["A", "A"]}) == [
            "Duplicate room id 'A'"
        ]

    def test_raises_first_error(self):
        with pytest.raises(InvalidPayloadError, match="queries"):
            ensure_valid_payload({"queries": None, "rooms": None})
