"""Data models for the room allocator."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Self

from .constants import (
    KEY_ASSIGNED,
    KEY_CHECK_IN,
    KEY_CHECK_OUT,
    KEY_QUERIES,
    KEY_RANGE,
    KEY_RANGE_FROM,
    KEY_RANGE_TO,
    KEY_ROOM_ID,
    KEY_ROOMS,
)

# Interval endpoints: ISO-8601 strings or plain numbers, never mixed in one payload
Endpoint = str | int | float


class QueryStatus(str, Enum):
    """Terminal state of a query after one allocation run."""

    FIXED = "fixed"
    ASSIGNED = "assigned"
    UNASSIGNED = "unassigned"


class UnassignedReason(str, Enum):
    """Reasons why a pending query was left without a room."""

    OUT_OF_RANGE = "out_of_range"
    NO_ROOM_AVAILABLE = "no_room_available"


@dataclass(frozen=True)
class Booking:
    """A committed occupation of one room over the half-open interval [start, end)."""

    start: Endpoint
    end: Endpoint

    def overlaps(self, start: Endpoint, end: Endpoint) -> bool:
        """Check if [start, end) intersects this booking.

        Touching endpoints do not clash, so back-to-back bookings are allowed.
        """
        return start < self.end and end > self.start


@dataclass(frozen=True)
class DateRange:
    """Inclusive allocation window. A missing side is unbounded."""

    start: Endpoint | None = None
    end: Endpoint | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create a DateRange from a ``{"from": ..., "to": ...}`` mapping."""
        return cls(start=data.get(KEY_RANGE_FROM), end=data.get(KEY_RANGE_TO))

    def contains(self, check_in: Endpoint, check_out: Endpoint) -> bool:
        """Check if the whole stay [check_in, check_out] lies inside the window."""
        if self.start is not None and check_in < self.start:
            return False
        if self.end is not None and check_out > self.end:
            return False
        return True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {KEY_RANGE_FROM: self.start, KEY_RANGE_TO: self.end}


@dataclass
class Query:
    """A booking request.

    Attributes:
        index: Position of the record in the input ``queries`` list
        check_in: Start of the requested stay
        check_out: End of the requested stay (exclusive for overlap purposes)
        assigned: Whether a room is granted
        room_id: Granted room, or None
        record: Private copy of the input record; unknown fields pass through
        status: Terminal state once the allocator has processed the query
        reason: Why a pending query stayed unassigned
    """

    index: int
    check_in: Endpoint
    check_out: Endpoint
    assigned: bool = False
    room_id: str | None = None
    record: dict[str, Any] = field(default_factory=dict)
    status: QueryStatus | None = None
    reason: UnassignedReason | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], index: int = 0) -> Self:
        """Create a Query from an input record.

        The record is copied so the caller's data is never mutated.
        """
        return cls(
            index=index,
            check_in=data[KEY_CHECK_IN],
            check_out=data[KEY_CHECK_OUT],
            assigned=data.get(KEY_ASSIGNED) is True,
            room_id=data.get(KEY_ROOM_ID),
            record=dict(data),
        )

    @property
    def booking(self) -> Booking:
        """The interval this query occupies once it holds a room."""
        return Booking(start=self.check_in, end=self.check_out)

    def release(self) -> None:
        """Drop any prior assignment so the query can be scheduled afresh."""
        self.assigned = False
        self.room_id = None

    def assign(self, room_id: str) -> None:
        """Grant a room to this query."""
        self.assigned = True
        self.room_id = room_id
        self.status = QueryStatus.ASSIGNED
        self.reason = None

    def reject(self, reason: UnassignedReason) -> None:
        """Leave this query without a room."""
        self.release()
        self.status = QueryStatus.UNASSIGNED
        self.reason = reason

    def to_dict(self) -> dict[str, Any]:
        """Convert back to an output record.

        Existing keys keep their position; ``assigned`` and ``roomId`` are
        appended when the input record lacked them.
        """
        data = dict(self.record)
        data[KEY_ASSIGNED] = self.assigned
        data[KEY_ROOM_ID] = self.room_id
        return data


@dataclass
class AllocationRequest:
    """A validated input snapshot: queries, ordered rooms, optional window."""

    queries: list[Query]
    rooms: list[str]
    window: DateRange | None = None
    range_data: Any = None
    has_range: bool = False
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create an AllocationRequest from a payload.

        Raises:
            InvalidPayloadError: If the payload structure is invalid
        """
        from .validators import ensure_valid_payload

        warnings = ensure_valid_payload(data)

        range_data = data.get(KEY_RANGE)
        return cls(
            queries=[
                Query.from_dict(record, index=i)
                for i, record in enumerate(data[KEY_QUERIES])
            ],
            rooms=list(data[KEY_ROOMS]),
            window=DateRange.from_dict(range_data) if range_data else None,
            range_data=range_data,
            has_range=KEY_RANGE in data,
            warnings=warnings,
        )

    def with_overrides(
        self,
        rooms: list[str] | None = None,
        window: DateRange | None = None,
    ) -> "AllocationRequest":
        """Return a copy with rooms and/or window replaced.

        Overridden values are echoed in the output payload in place of the
        payload's own ``rooms``/``range``.
        """
        request = AllocationRequest(
            queries=self.queries,
            rooms=list(rooms) if rooms is not None else self.rooms,
            window=self.window,
            range_data=self.range_data,
            has_range=self.has_range,
            warnings=list(self.warnings),
        )
        if window is not None:
            request.window = window
            request.range_data = window.to_dict()
            request.has_range = True
        return request


@dataclass
class AllocationStatistics:
    """Statistics about one allocation run."""

    total_queries: int = 0
    total_fixed: int = 0
    total_assigned: int = 0
    total_unassigned: int = 0
    by_reason: dict[str, int] = field(default_factory=dict)
    by_room: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_queries(cls, queries: list[Query], rooms: list[str]) -> Self:
        """Tally terminal states and room occupancy for processed queries."""
        stats = cls(total_queries=len(queries))
        stats.by_room = {room: 0 for room in rooms}

        for query in queries:
            if query.status == QueryStatus.FIXED:
                stats.total_fixed += 1
            elif query.status == QueryStatus.ASSIGNED:
                stats.total_assigned += 1
            else:
                stats.total_unassigned += 1
                if query.reason is not None:
                    key = query.reason.value
                    stats.by_reason[key] = stats.by_reason.get(key, 0) + 1

            if query.assigned and query.room_id is not None:
                stats.by_room[query.room_id] = stats.by_room.get(query.room_id, 0) + 1

        return stats

    @property
    def assignment_rate(self) -> float:
        """Share of queries holding a room after the run."""
        if self.total_queries == 0:
            return 0.0
        return (self.total_fixed + self.total_assigned) / self.total_queries

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_queries": self.total_queries,
            "total_fixed": self.total_fixed,
            "total_assigned": self.total_assigned,
            "total_unassigned": self.total_unassigned,
            "assignment_rate": self.assignment_rate,
            "by_reason": self.by_reason,
            "by_room": self.by_room,
        }


@dataclass
class AllocationResult:
    """Result of one allocation run."""

    queries: list[Query] = field(default_factory=list)
    rooms: list[str] = field(default_factory=list)
    range_data: Any = None
    has_range: bool = False
    statistics: AllocationStatistics = field(default_factory=AllocationStatistics)
    warnings: list[str] = field(default_factory=list)
    generation_date: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def assigned_queries(self) -> list[Query]:
        """Queries holding a room (fixed or newly assigned)."""
        return [q for q in self.queries if q.assigned]

    @property
    def unassigned_queries(self) -> list[Query]:
        """Queries left without a room."""
        return [q for q in self.queries if not q.assigned]

    def to_dict(self) -> dict[str, Any]:
        """Convert to the output payload.

        The payload has the same shape as the input: ``queries``, ``rooms``
        and ``range``. ``range`` is left out when the input had no such key.
        """
        payload: dict[str, Any] = {
            KEY_QUERIES: [q.to_dict() for q in self.queries],
            KEY_ROOMS: self.rooms,
        }
        if self.has_range:
            payload[KEY_RANGE] = self.range_data
        return payload
