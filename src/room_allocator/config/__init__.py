"""Configuration loaders for the allocator."""

from .loader import ConfigLoader
from .rooms import RoomConfig
from .window import RangeConfig

__all__ = [
    "ConfigLoader",
    "RoomConfig",
    "RangeConfig",
]
