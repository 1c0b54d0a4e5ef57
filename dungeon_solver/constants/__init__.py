from .cell_types import CellType, CELL_CHARS, ALL_CELL_TYPES
from .game_constants import (
    GRID_SIZE,
    DIRECTIONS,
    PATH_VISUAL,
    EXPLORED_NODE,
    GameDefaults,
)

__all__ = [
    "CellType",
    "CELL_CHARS",
    "ALL_CELL_TYPES",
    "GRID_SIZE",
    "DIRECTIONS",
    "PATH_VISUAL",
    "EXPLORED_NODE",
    "GameDefaults",
]
