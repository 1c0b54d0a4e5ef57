"""Random dungeon boards for the live game."""

from .dungeon_generator import Dungeon, DungeonGenerator

__all__ = ["Dungeon", "DungeonGenerator"]
