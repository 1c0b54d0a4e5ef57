"""
Action enumeration and result contract for the MDP solver.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Tuple

from ..constants.game_constants import DIRECTIONS

Position = Tuple[int, int]


class Action(IntEnum):
    """
    Moves available in every state.

    The enumeration order doubles as the tie-break order of the greedy
    policy and matches the search engine's neighbor order.
    """

    RIGHT = 0  # +x
    LEFT = 1  # -x
    DOWN = 2  # +y
    UP = 3  # -y

    @property
    def delta(self) -> Tuple[int, int]:
        return DIRECTIONS[self.value]


@dataclass
class MDPResult:
    """Result of one MDP solve."""

    path: List[Position] = field(default_factory=list)  # greedy-policy rollout
    explored_nodes: List[Position] = field(default_factory=list)  # notably valued cells
    expected_value: float = 0.0  # V(start state)
    solution_found: bool = False
    iterations: int = 0
    converged: bool = False
    final_gold: int = 0  # gold held at the end of the rollout
