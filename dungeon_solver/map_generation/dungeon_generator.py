"""Seeded random dungeon generation."""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from ..constants.cell_types import CellType
from ..constants.game_constants import GRID_SIZE, GameDefaults
from ..grid import Grid

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


@dataclass
class Dungeon:
    """A generated board plus where each hazard ended up."""

    grid: Grid
    rewards: List[Position] = field(default_factory=list)
    bandits: List[Position] = field(default_factory=list)
    mines: List[Position] = field(default_factory=list)


class DungeonGenerator:
    """
    Generates dungeon boards.

    The player always starts in the first column and the exit sits in the
    last column; rewards, bandits and mines are scattered over the columns
    in between.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        size: int = GRID_SIZE,
        num_rewards: int = GameDefaults.NUM_REWARDS,
        num_bandits: int = GameDefaults.NUM_BANDITS,
        num_mines: int = GameDefaults.NUM_MINES,
    ):
        """Initialize the generator.

        Args:
            seed: Random seed for reproducible generation
            size: Board width and height
            num_rewards: Reward tiles to place
            num_bandits: Bandit tiles to place
            num_mines: Mine tiles to place
        """
        if size < 3:
            raise ValueError("size must be at least 3 to leave room for hazards")
        if min(num_rewards, num_bandits, num_mines) < 0:
            raise ValueError("tile counts must be non-negative")
        if num_rewards + num_bandits + num_mines > (size - 2) * size:
            raise ValueError("too many hazards for the interior of the board")

        self.size = size
        self.num_rewards = num_rewards
        self.num_bandits = num_bandits
        self.num_mines = num_mines
        self.rng = random.Random(seed)

    def generate(self) -> Dungeon:
        size = self.size
        cells = np.full((size, size), int(CellType.EMPTY), dtype=np.int8)

        start = (0, self.rng.randint(0, size - 1))
        cells[start] = CellType.PLAYER

        exit_pos = (size - 1, self.rng.randint(0, size - 1))
        cells[exit_pos] = CellType.EXIT

        rewards = self._place(cells, CellType.REWARD, self.num_rewards)
        bandits = self._place(cells, CellType.BANDIT, self.num_bandits)
        mines = self._place(cells, CellType.MINE, self.num_mines)

        return Dungeon(
            grid=Grid(cells=cells, start=start, exit=exit_pos),
            rewards=rewards,
            bandits=bandits,
            mines=mines,
        )

    def _place(self, cells: np.ndarray, cell_type: CellType, count: int) -> List[Position]:
        """Drop count tiles on random empty interior cells."""
        placed = []
        for _ in range(count):
            for _ in range(GameDefaults.MAX_PLACEMENT_ATTEMPTS):
                x = self.rng.randint(1, self.size - 2)
                y = self.rng.randint(0, self.size - 1)
                if cells[x, y] == CellType.EMPTY:
                    cells[x, y] = cell_type
                    placed.append((x, y))
                    break
            else:
                logger.debug("Could not place %s, skipping", cell_type.name)
        return placed
