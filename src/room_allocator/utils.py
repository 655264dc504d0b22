"""Utility functions for interval handling and query ordering."""

import math
from collections.abc import Iterable
from datetime import datetime

from .models import Booking, DateRange, Endpoint, Query


def has_overlap(bookings: Iterable[Booking], start: Endpoint, end: Endpoint) -> bool:
    """Check if [start, end) clashes with any existing booking.

    Uses the half-open intersection test ``start < b.end and end > b.start``,
    so a booking ending exactly when another begins is not a clash.

    Args:
        bookings: Bookings already committed to a room
        start: Candidate interval start
        end: Candidate interval end

    Returns:
        True if at least one booking intersects the candidate interval
    """
    return any(booking.overlaps(start, end) for booking in bookings)


def is_within_range(query: Query, window: DateRange | None) -> bool:
    """Check if a query's stay lies inside the allocation window.

    No window means no restriction.
    """
    if window is None:
        return True
    return window.contains(query.check_in, query.check_out)


def sort_by_check_out(queries: list[Query]) -> list[Query]:
    """Sort queries by ascending check-out (earliest finishing first).

    The sort is stable: queries with equal check-out keep their relative order.

    Args:
        queries: Pending queries

    Returns:
        New list in allocation priority order
    """
    return sorted(queries, key=lambda q: q.check_out)


def sort_by_check_in(queries: list[Query]) -> list[Query]:
    """Sort queries by ascending check-in, keeping ties in their current order."""
    return sorted(queries, key=lambda q: q.check_in)


def endpoint_kind(value: object) -> str | None:
    """Classify an interval endpoint for comparison purposes.

    NaN and infinities are rejected: NaN compares False against everything,
    so it would never clash with a booking.

    Returns:
        "string", "number", or None when the value cannot be compared
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return "string"
    if isinstance(value, int):
        return "number"
    if isinstance(value, float):
        return "number" if math.isfinite(value) else None
    return None


def coerce_endpoint(value: object, kind: str | None) -> object:
    """Convert a numeric string to a number when the payload uses numbers.

    Window bounds given on the command line always arrive as strings.
    Anything that does not parse as a finite number is returned unchanged.
    """
    if kind != "number" or not isinstance(value, str):
        return value
    for convert in (int, float):
        try:
            number = convert(value)
        except ValueError:
            continue
        if math.isfinite(number):
            return number
    return value


def is_iso_datetime(value: str) -> bool:
    """Check if a string is an ISO-8601 date or datetime."""
    try:
        datetime.fromisoformat(value)
    except ValueError:
        return False
    return True


def find_overlapping_pairs(bookings: list[Booking]) -> list[tuple[Booking, Booking]]:
    """Find all pairs of bookings in one room that intersect each other."""
    pairs = []
    for i, first in enumerate(bookings):
        for second in bookings[i + 1 :]:
            if first.overlaps(second.start, second.end):
                pairs.append((first, second))
    return pairs
