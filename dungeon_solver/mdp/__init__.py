"""
Markov Decision Process solver for dungeon episodes.

Augmented states (position, clamped gold, collected rewards), stochastic
mine transitions, value iteration and greedy-policy rollout.
"""

from .config import MDPConfig, DEFAULT_MDP_CONFIG, MAX_TRACKED_REWARDS_LIMIT
from .mdp_types import Action, MDPResult
from .solver import MDPSolver, solve_mdp
from .transitions import (
    Deterministic,
    Stochastic,
    TileEffect,
    TransitionTable,
    bump_effect,
    expected_return,
    outcome_branches,
    tile_effect,
)

__all__ = [
    "MDPConfig",
    "DEFAULT_MDP_CONFIG",
    "MAX_TRACKED_REWARDS_LIMIT",
    "Action",
    "MDPResult",
    "MDPSolver",
    "solve_mdp",
    "Deterministic",
    "Stochastic",
    "TileEffect",
    "TransitionTable",
    "bump_effect",
    "expected_return",
    "outcome_branches",
    "tile_effect",
]
