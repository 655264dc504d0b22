"""Per-room booking ledger for one allocation run."""

from .models import Booking, Endpoint
from .utils import find_overlapping_pairs, has_overlap


class BookingRegistry:
    """Tracks committed bookings per room.

    Rooms are kept in the order given, which is the preference order used by
    ``find_room``. A registry lives for exactly one run and is never reused.
    """

    def __init__(self, rooms: list[str]) -> None:
        # room id -> bookings, insertion order = room preference order
        self.bookings: dict[str, list[Booking]] = {room: [] for room in rooms}

    @property
    def rooms(self) -> list[str]:
        """Room ids in preference order (duplicates collapsed)."""
        return list(self.bookings)

    def has_room(self, room_id: object) -> bool:
        """Check if a room id names a room in this registry."""
        return isinstance(room_id, str) and room_id in self.bookings

    def get_bookings(self, room_id: str) -> list[Booking]:
        """Get the bookings committed to a room."""
        return self.bookings[room_id]

    def reserve(self, room_id: str, booking: Booking) -> None:
        """Commit a booking to a room without checking for overlap."""
        self.bookings[room_id].append(booking)

    def is_room_available(self, room_id: str, start: Endpoint, end: Endpoint) -> bool:
        """Check if [start, end) is free in the given room."""
        return not has_overlap(self.get_bookings(room_id), start, end)

    def find_room(self, start: Endpoint, end: Endpoint) -> str | None:
        """Find the first room, in preference order, free over [start, end).

        Returns:
            Room id, or None when every room clashes
        """
        for room_id in self.bookings:
            if self.is_room_available(room_id, start, end):
                return room_id
        return None

    def find_conflicts(self) -> dict[str, list[tuple[Booking, Booking]]]:
        """Find rooms whose committed bookings intersect each other.

        Only pre-assigned bookings can end up here, since they are trusted
        and reserved without an overlap check.
        """
        conflicts = {}
        for room_id, bookings in self.bookings.items():
            pairs = find_overlapping_pairs(bookings)
            if pairs:
                conflicts[room_id] = pairs
        return conflicts
