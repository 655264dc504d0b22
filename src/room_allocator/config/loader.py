"""Unified configuration loader."""

from pathlib import Path

from ..constants import RANGE_JSON_FILENAME, ROOMS_CSV_FILENAME
from .rooms import RoomConfig
from .window import RangeConfig


class ConfigLoader:
    """Unified loader for allocator reference files."""

    def __init__(
        self,
        config_dir: Path | str | None = None,
        rooms_csv: Path | str | None = None,
    ):
        """
        Initialize configuration loader.

        Args:
            config_dir: Path to directory containing reference files.
                       Expected files (all optional):
                       - rooms.csv
                       - range.json
            rooms_csv: Direct path to rooms.csv.
                      If provided, overrides rooms.csv from config_dir.
        """
        self.config_dir = Path(config_dir) if config_dir is not None else None

        rooms_path = Path(rooms_csv) if rooms_csv else self._get_path(ROOMS_CSV_FILENAME)

        self.rooms = RoomConfig(rooms_path)
        self.window = RangeConfig(self._get_path(RANGE_JSON_FILENAME))

    def _get_path(self, filename: str) -> Path | None:
        """Get path to config file if it exists."""
        if self.config_dir is None:
            return None
        path = self.config_dir / filename
        return path if path.exists() else None
