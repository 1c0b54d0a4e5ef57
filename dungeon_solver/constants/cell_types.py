"""
Cell type codes for dungeon boards.

The first six codes match the board codes used by the game itself, so a
board exported by the game layer can be wrapped in a Grid without
translation.
"""

from enum import IntEnum


class CellType(IntEnum):
    """Contents of a single dungeon cell."""

    EMPTY = 0
    PLAYER = 1
    REWARD = 2
    BANDIT = 3
    MINE = 4
    EXIT = 5
    START = 6
    WALL = 7


ALL_CELL_TYPES = frozenset(CellType)

# ASCII legend used by Grid.from_strings / Grid.to_strings
CELL_CHARS = {
    ".": CellType.EMPTY,
    "P": CellType.PLAYER,
    "R": CellType.REWARD,
    "B": CellType.BANDIT,
    "M": CellType.MINE,
    "E": CellType.EXIT,
    "S": CellType.START,
    "#": CellType.WALL,
}
