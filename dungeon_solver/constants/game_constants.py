"""
Board-level constants shared by the search engine, the MDP solver and the
game layer.
"""

from typing import Tuple

GRID_SIZE = 10

# Neighbor expansion order: +x, -x, +y, -y.
# Tie-breaking in every search depends on this order.
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))

# Display-only codes written by GameState.overlay(); kept outside the
# CellType range so overlays never collide with real cell contents.
PATH_VISUAL = 8
EXPLORED_NODE = 9


class GameDefaults:
    """Default tile counts and gold amounts used by the live game."""

    NUM_REWARDS: int = 2
    NUM_BANDITS: int = 1
    NUM_MINES: int = 2

    REWARD_GOLD: int = 10
    MINE_GOLD_LOSS: int = 5
    MIN_GOLD_TO_EXIT: int = 20

    # Attempts at finding a free cell before a hazard is skipped
    MAX_PLACEMENT_ATTEMPTS: int = 100
