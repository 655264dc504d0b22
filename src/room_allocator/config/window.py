"""Allocation window configuration loader."""

import json
from pathlib import Path

from ..constants import KEY_RANGE_FROM, KEY_RANGE_TO
from ..exceptions import ConfigError
from ..models import DateRange


class RangeConfig:
    """Loader for the allocation window from range.json."""

    def __init__(self, range_path: Path | None = None):
        self._range: DateRange | None = None

        if range_path and range_path.exists():
            self._load(range_path)

    def _load(self, path: Path) -> None:
        """Load the window from JSON."""
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConfigError(str(path), str(e)) from e

        if data is None:
            return
        if not isinstance(data, dict):
            raise ConfigError(str(path), "expected an object with 'from' and 'to'")

        self._range = DateRange(start=data.get(KEY_RANGE_FROM), end=data.get(KEY_RANGE_TO))

    def get_range(self) -> DateRange | None:
        """Get the configured window, or None when not configured."""
        return self._range

    def has_range(self) -> bool:
        """Check if a window is configured."""
        return self._range is not None
