"""Greedy room allocation for booking requests."""

import logging
from pathlib import Path
from typing import Any

from .config import ConfigLoader
from .constants import KEY_RANGE
from .exceptions import InvalidPayloadError
from .models import (
    AllocationRequest,
    AllocationResult,
    AllocationStatistics,
    DateRange,
    Endpoint,
    Query,
    QueryStatus,
    UnassignedReason,
)
from .registry import BookingRegistry
from .utils import (
    coerce_endpoint,
    endpoint_kind,
    is_within_range,
    sort_by_check_in,
    sort_by_check_out,
)
from .validators import validate_window_kind

logger = logging.getLogger(__name__)


class RoomAllocator:
    """Assigns booking requests to interchangeable rooms.

    One run goes through four steps:
    1. Build an empty booking registry for the rooms
    2. Absorb pre-assigned queries into the registry, release everything else
    3. Allocate pending queries, earliest check-out first, each to the first
       room (in the given room order) with no overlapping booking
    4. Re-sort all queries by check-in

    The earliest-check-out rule is optimal for a single room. With several
    rooms it is a heuristic and may leave a query unassigned that a smarter
    matching could have placed; this behavior is intentional.
    """

    def __init__(
        self,
        rooms: list[str] | None = None,
        window: DateRange | None = None,
    ) -> None:
        """Initialize the allocator.

        Args:
            rooms: Room order to use instead of the payload's ``rooms``
            window: Allocation window to use instead of the payload's ``range``
        """
        self.rooms = rooms
        self.window = window

    def allocate(self, payload: dict[str, Any]) -> AllocationResult:
        """Allocate rooms for a raw input payload.

        The payload is not mutated.

        Raises:
            InvalidPayloadError: If the payload structure is invalid
        """
        request = AllocationRequest.from_dict(payload)
        return self.allocate_request(request)

    def allocate_request(self, request: AllocationRequest) -> AllocationResult:
        """Allocate rooms for a validated request.

        Args:
            request: Parsed queries, rooms and optional window

        Returns:
            AllocationResult with every query in check-in order

        Raises:
            InvalidPayloadError: If an overriding window cannot be compared
                with the query endpoints
        """
        request = request.with_overrides(
            rooms=self.rooms, window=self._resolve_window(request.queries)
        )
        warnings = list(request.warnings)

        # 1. Empty ledger per room
        registry = BookingRegistry(request.rooms)

        # 2. Fixed assignments first, so pending queries see the full footprint
        fixed, pending = self._absorb_fixed(request.queries, registry)
        logger.info(f"Absorbed {len(fixed)} fixed and {len(pending)} pending queries")

        conflicts = registry.find_conflicts()
        for room_id, pairs in conflicts.items():
            for first, second in pairs:
                message = (
                    f"Pre-assigned bookings overlap in room '{room_id}': "
                    f"[{first.start}, {first.end}) and [{second.start}, {second.end})"
                )
                logger.warning(message)
                warnings.append(message)

        # 3. Greedy allocation
        processed = [
            self._allocate_query(query, registry, request.window)
            for query in sort_by_check_out(pending)
        ]

        # 4. Output order
        queries = sort_by_check_in(fixed + processed)
        statistics = AllocationStatistics.from_queries(queries, registry.rooms)
        logger.info(
            f"Assigned {statistics.total_assigned} of {len(pending)} pending queries "
            f"across {len(registry.rooms)} rooms"
        )

        return AllocationResult(
            queries=queries,
            rooms=request.rooms,
            range_data=request.range_data,
            has_range=request.has_range,
            statistics=statistics,
            warnings=warnings,
        )

    def _resolve_window(self, queries: list[Query]) -> DateRange | None:
        """Fit the overriding window to the payload's endpoint kind.

        The payload's own range is checked during payload validation; a window
        from the command line or range.json is only known here. Numeric strings
        become numbers when the queries use numbers.
        """
        if self.window is None:
            return None

        kind = endpoint_kind(queries[0].check_in) if queries else None
        window = DateRange(
            start=coerce_endpoint(self.window.start, kind),
            end=coerce_endpoint(self.window.end, kind),
        )

        is_valid, message = validate_window_kind(window, kind)
        if not is_valid:
            raise InvalidPayloadError(message, field=KEY_RANGE)
        return window

    def _absorb_fixed(
        self, queries: list[Query], registry: BookingRegistry
    ) -> tuple[list[Query], list[Query]]:
        """Split queries into fixed and pending, seeding the registry.

        A query is fixed when it is marked assigned and names a known room.
        Fixed bookings are trusted and reserved without an overlap check.
        """
        fixed: list[Query] = []
        pending: list[Query] = []

        for query in queries:
            if query.assigned and query.room_id and registry.has_room(query.room_id):
                query.status = QueryStatus.FIXED
                registry.reserve(query.room_id, query.booking)
                fixed.append(query)
            else:
                if query.assigned:
                    logger.debug(
                        f"Query #{query.index} names unknown room {query.room_id!r}; "
                        "rescheduling"
                    )
                query.release()
                pending.append(query)

        return fixed, pending

    def _allocate_query(
        self,
        query: Query,
        registry: BookingRegistry,
        window: DateRange | None,
    ) -> Query:
        """Give a pending query the first free room, or leave it unassigned."""
        if not is_within_range(query, window):
            logger.debug(
                f"Query #{query.index} [{query.check_in}, {query.check_out}] "
                "is outside the allocation window"
            )
            query.reject(UnassignedReason.OUT_OF_RANGE)
            return query

        room_id = registry.find_room(query.check_in, query.check_out)
        if room_id is None:
            logger.debug(f"Query #{query.index} has no free room")
            query.reject(UnassignedReason.NO_ROOM_AVAILABLE)
            return query

        registry.reserve(room_id, query.booking)
        query.assign(room_id)
        logger.debug(f"Query #{query.index} -> room '{room_id}'")
        return query


def allocate(payload: dict[str, Any]) -> dict[str, Any]:
    """Allocate rooms for a payload and return the output payload.

    Example:
        >>> allocate({"queries": [], "rooms": ["A"], "range": None})
        {'queries': [], 'rooms': ['A'], 'range': None}
    """
    return RoomAllocator().allocate(payload).to_dict()


def create_allocator(
    config_dir: Path | str | None = None,
    rooms_csv: Path | str | None = None,
    range_from: Endpoint | None = None,
    range_to: Endpoint | None = None,
) -> RoomAllocator:
    """Factory function to create a RoomAllocator with loaded reference data.

    Precedence, highest first: explicit ``range_from``/``range_to``, then
    ``rooms_csv``, then files in ``config_dir``. Anything not provided falls
    back to the payload.

    Args:
        config_dir: Directory with optional rooms.csv and range.json
        rooms_csv: Path to a rooms.csv file
        range_from: Window start
        range_to: Window end

    Returns:
        Configured RoomAllocator instance

    Raises:
        ConfigError: If a reference file is malformed
    """
    config = ConfigLoader(config_dir=config_dir, rooms_csv=rooms_csv)

    rooms = None
    if config.rooms.loaded:
        rooms = config.rooms.get_room_ids()
        disabled = config.rooms.get_disabled_room_ids()
        if disabled:
            logger.info(f"Skipping disabled rooms: {', '.join(disabled)}")

    window = config.window.get_range() if config.window.has_range() else None
    if range_from is not None or range_to is not None:
        base = window or DateRange()
        window = DateRange(
            start=range_from if range_from is not None else base.start,
            end=range_to if range_to is not None else base.end,
        )

    return RoomAllocator(rooms=rooms, window=window)
