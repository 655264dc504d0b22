"""Validation logic for allocation payloads."""

from typing import Any

from .constants import (
    KEY_CHECK_IN,
    KEY_CHECK_OUT,
    KEY_QUERIES,
    KEY_RANGE,
    KEY_RANGE_FROM,
    KEY_RANGE_TO,
    KEY_ROOMS,
)
from .exceptions import InvalidPayloadError
from .models import DateRange
from .utils import endpoint_kind, is_iso_datetime


def validate_room_ids(rooms: Any) -> tuple[bool, str | None]:
    """Validate the ordered room list.

    Args:
        rooms: Value of the ``rooms`` field

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(rooms, list):
        return False, f"Expected a list of room ids, got {type(rooms).__name__}"

    for room in rooms:
        if not isinstance(room, str):
            return False, f"Room id must be a string, got {room!r}"

    return True, None


def find_duplicate_rooms(rooms: list[str]) -> list[str]:
    """Return room ids that appear more than once, in first-seen order."""
    seen: set[str] = set()
    duplicates: list[str] = []
    for room in rooms:
        if room in seen and room not in duplicates:
            duplicates.append(room)
        seen.add(room)
    return duplicates


def validate_query_record(record: Any) -> tuple[bool, str | None]:
    """Validate a single query record.

    Args:
        record: One element of the ``queries`` list

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(record, dict):
        return False, f"Query must be an object, got {type(record).__name__}"

    for key in (KEY_CHECK_IN, KEY_CHECK_OUT):
        if key not in record:
            return False, f"Missing '{key}'"
        if endpoint_kind(record[key]) is None:
            return False, f"'{key}' must be a string or a number, got {record[key]!r}"

    return True, None


def validate_range(range_data: Any) -> tuple[bool, str | None]:
    """Validate the optional allocation window.

    Args:
        range_data: Value of the ``range`` field (None means no restriction)

    Returns:
        Tuple of (is_valid, error_message)
    """
    if range_data is None:
        return True, None

    if not isinstance(range_data, dict):
        return False, f"Range must be an object or null, got {type(range_data).__name__}"

    for key in (KEY_RANGE_FROM, KEY_RANGE_TO):
        value = range_data.get(key)
        if value is not None and endpoint_kind(value) is None:
            return False, f"'{key}' must be a string or a number, got {value!r}"

    return True, None


def validate_window_kind(window: DateRange, kind: str | None) -> tuple[bool, str | None]:
    """Check that window bounds compare with endpoints of the given kind.

    Args:
        window: Allocation window, possibly from outside the payload
        kind: Endpoint kind of the payload's queries ("string" or "number"),
              or None when there are no queries to compare against

    Returns:
        Tuple of (is_valid, error_message)
    """
    for key, value in ((KEY_RANGE_FROM, window.start), (KEY_RANGE_TO, window.end)):
        if value is None:
            continue
        value_kind = endpoint_kind(value)
        if value_kind is None:
            return False, f"'{key}' must be a string or a number, got {value!r}"
        if kind is not None and value_kind != kind:
            return False, f"'{key}' is a {value_kind} but query endpoints are {kind}s ({value!r})"

    return True, None


def validate_endpoint(value: Any) -> tuple[bool, str | None]:
    """Check that a string endpoint sorts chronologically.

    Plain string comparison only matches chronological order for ISO-8601
    text, so anything else gets a warning.

    Returns:
        Tuple of (is_valid, warning_message)
    """
    if isinstance(value, str) and not is_iso_datetime(value):
        return True, f"'{value}' is not ISO-8601; string order may not be chronological"
    return True, None


def _collect_endpoints(data: dict[str, Any]) -> list[tuple[str, int | None, Any]]:
    """List every interval endpoint in the payload as (field, index, value)."""
    endpoints: list[tuple[str, int | None, Any]] = []
    for i, record in enumerate(data[KEY_QUERIES]):
        endpoints.append((KEY_CHECK_IN, i, record[KEY_CHECK_IN]))
        endpoints.append((KEY_CHECK_OUT, i, record[KEY_CHECK_OUT]))

    range_data = data.get(KEY_RANGE)
    if range_data:
        for key in (KEY_RANGE_FROM, KEY_RANGE_TO):
            if range_data.get(key) is not None:
                endpoints.append((f"{KEY_RANGE}.{key}", None, range_data[key]))

    return endpoints


def validate_payload(data: Any) -> dict[str, Any]:
    """Validate a whole allocation payload.

    Structural problems are errors. Suspicious but usable input (duplicate
    rooms, non-ISO date strings) produces warnings.

    Args:
        data: Parsed JSON payload

    Returns:
        Dictionary with keys ``valid`` (bool), ``errors`` (list of
        InvalidPayloadError) and ``warnings`` (list of str)
    """
    errors: list[InvalidPayloadError] = []
    warnings: list[str] = []

    if not isinstance(data, dict):
        errors.append(
            InvalidPayloadError(f"Expected a JSON object, got {type(data).__name__}")
        )
        return {"valid": False, "errors": errors, "warnings": warnings}

    queries = data.get(KEY_QUERIES)
    if not isinstance(queries, list):
        errors.append(InvalidPayloadError("Expected a list of queries", field=KEY_QUERIES))
    else:
        for i, record in enumerate(queries):
            is_valid, message = validate_query_record(record)
            if not is_valid:
                errors.append(InvalidPayloadError(message, field=KEY_QUERIES, index=i))

    is_valid, message = validate_room_ids(data.get(KEY_ROOMS))
    if not is_valid:
        errors.append(InvalidPayloadError(message, field=KEY_ROOMS))
    else:
        for room in find_duplicate_rooms(data[KEY_ROOMS]):
            warnings.append(f"Duplicate room id '{room}'")

    is_valid, message = validate_range(data.get(KEY_RANGE))
    if not is_valid:
        errors.append(InvalidPayloadError(message, field=KEY_RANGE))

    if errors:
        return {"valid": False, "errors": errors, "warnings": warnings}

    endpoints = _collect_endpoints(data)
    kinds = {endpoint_kind(value) for _, _, value in endpoints}
    if len(kinds) > 1:
        field_name, index, value = next(
            e for e in endpoints if endpoint_kind(e[2]) != endpoint_kind(endpoints[0][2])
        )
        errors.append(
            InvalidPayloadError(
                f"Mixed string and numeric endpoints cannot be compared ({value!r})",
                field=field_name,
                index=index,
            )
        )
    else:
        for _, _, value in endpoints:
            _, warning = validate_endpoint(value)
            if warning and warning not in warnings:
                warnings.append(warning)

    return {"valid": not errors, "errors": errors, "warnings": warnings}


def ensure_valid_payload(data: Any) -> list[str]:
    """Validate a payload and raise on the first structural error.

    Returns:
        Warnings for usable but suspicious input

    Raises:
        InvalidPayloadError: If the payload structure is invalid
    """
    validation = validate_payload(data)
    if not validation["valid"]:
        raise validation["errors"][0]
    return validation["warnings"]
