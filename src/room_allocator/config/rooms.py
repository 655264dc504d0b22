"""Room configuration loader."""

import csv
from pathlib import Path

from ..exceptions import ConfigError


class RoomConfig:
    """Loader for the ordered room list from rooms.csv.

    Expected columns: ``name`` (required) and ``is_disabled`` (optional,
    "true" drops the room). Row order is the room preference order.
    """

    def __init__(self, rooms_path: Path | None = None):
        self.room_ids: list[str] = []
        self.disabled: list[str] = []
        self.loaded = False

        if rooms_path and rooms_path.exists():
            self._load(rooms_path)

    def _load(self, path: Path) -> None:
        """Load rooms from CSV file."""
        try:
            with open(path, encoding="utf-8", newline="") as f:
                reader = csv.DictReader(f)
                if not reader.fieldnames or "name" not in reader.fieldnames:
                    raise ConfigError(str(path), "missing 'name' column")
                rows = list(reader)
        except UnicodeDecodeError as e:
            raise ConfigError(str(path), str(e)) from e

        for row in rows:
            name = (row["name"] or "").strip()
            if not name:
                continue
            if (row.get("is_disabled") or "").strip().lower() == "true":
                self.disabled.append(name)
            else:
                self.room_ids.append(name)

        self.loaded = True

    def get_room_ids(self) -> list[str]:
        """Get enabled room ids in preference order."""
        return list(self.room_ids)

    def get_disabled_room_ids(self) -> list[str]:
        """Get room ids marked as disabled."""
        return list(self.disabled)
