"""Room Allocator - greedy assignment of booking requests to rooms.

This module assigns booking requests ("queries") with a check-in/check-out
interval to a fixed, ordered set of interchangeable rooms. Pre-assigned
queries are honored as-is; the rest are placed earliest-check-out first, each
in the first room (in the given room order) with no overlapping booking.

Example usage:
    from room_allocator import RoomAllocator

    allocator = RoomAllocator()
    result = allocator.allocate(
        {
            "queries": [{"checkIn": "2024-01-01", "checkOut": "2024-01-03"}],
            "rooms": ["101", "102"],
            "range": None,
        }
    )

    print(f"Assigned: {len(result.assigned_queries)}")

    for query in result.queries:
        print(f"{query.check_in} -> {query.check_out} | {query.room_id}")

    # Export to JSON
    from room_allocator.exporters import JSONExporter
    exporter = JSONExporter()
    exporter.export(result, "output.json")
"""

from .allocator import RoomAllocator, allocate, create_allocator
from .config import ConfigLoader
from .exceptions import (
    AllocationError,
    ConfigError,
    InvalidPayloadError,
    PayloadParseError,
)
from .exporters import (
    CSVExporter,
    ExcelExporter,
    JSONExporter,
    get_exporter,
    load_payload,
    parse_payload,
)
from .models import (
    AllocationRequest,
    AllocationResult,
    AllocationStatistics,
    Booking,
    DateRange,
    Query,
    QueryStatus,
    UnassignedReason,
)
from .registry import BookingRegistry

__version__ = "0.1.0"

__all__ = [
    # Main allocator
    "RoomAllocator",
    "allocate",
    "create_allocator",
    "BookingRegistry",
    # Configuration
    "ConfigLoader",
    # Models
    "AllocationRequest",
    "AllocationResult",
    "AllocationStatistics",
    "Booking",
    "DateRange",
    "Query",
    "QueryStatus",
    "UnassignedReason",
    # Input / export
    "load_payload",
    "parse_payload",
    "JSONExporter",
    "CSVExporter",
    "ExcelExporter",
    "get_exporter",
    # Exceptions
    "AllocationError",
    "PayloadParseError",
    "InvalidPayloadError",
    "ConfigError",
]
