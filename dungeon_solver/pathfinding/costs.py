"""
Traversal costs for the weighted searches.

Only Dijkstra/UCS and A* read these. BFS, DFS and Greedy count hops or
follow the heuristic and ignore cell costs entirely.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

from ..constants.cell_types import CellType


@dataclass(frozen=True)
class CostModel:
    """Cost of entering a cell, per cell type."""

    empty: float = 1.0
    reward: float = 0.0  # free: weighted searches route through rewards
    bandit: float = 15.0  # gold loss risk
    mine: float = 8.0
    wall: float = 1.0  # only used when walls are declared passable

    def __post_init__(self):
        for name in ("empty", "reward", "bandit", "mine", "wall"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cost must be non-negative")

    def cost(self, cell_type: CellType) -> float:
        if cell_type == CellType.REWARD:
            return self.reward
        if cell_type == CellType.BANDIT:
            return self.bandit
        if cell_type == CellType.MINE:
            return self.mine
        if cell_type == CellType.WALL:
            return self.wall
        # EMPTY, PLAYER, START, EXIT
        return self.empty


DEFAULT_COST_MODEL = CostModel()


def move_cost(cell_type: CellType, cost_model: CostModel = DEFAULT_COST_MODEL) -> float:
    """Cost of stepping onto a cell of the given type."""
    return cost_model.cost(cell_type)


def path_cost(
    grid, path: Sequence[Tuple[int, int]], cost_model: CostModel = DEFAULT_COST_MODEL
) -> float:
    """Sum of destination-cell costs along a path. The first cell is free."""
    return sum(cost_model.cost(grid[pos]) for pos in path[1:])
