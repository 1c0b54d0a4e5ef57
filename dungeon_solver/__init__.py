# This file makes this a Python package

from .constants import CellType
from .grid import Grid, Position
from .pathfinding import (
    CostModel,
    SearchResult,
    astar_search,
    bfs_search,
    dfs_search,
    dijkstra_search,
    greedy_search,
    ucs_search,
)
from .mdp import MDPConfig, MDPResult, MDPSolver, solve_mdp
from .algorithms import AlgorithmType, mdp_search, run_algorithm
from .map_generation import Dungeon, DungeonGenerator
from .game_state import GameState

__all__ = [
    # Board
    "CellType",
    "Grid",
    "Position",
    # Search engine
    "CostModel",
    "SearchResult",
    "astar_search",
    "bfs_search",
    "dfs_search",
    "dijkstra_search",
    "greedy_search",
    "ucs_search",
    # MDP solver
    "MDPConfig",
    "MDPResult",
    "MDPSolver",
    "solve_mdp",
    # Registry
    "AlgorithmType",
    "mdp_search",
    "run_algorithm",
    # Game layer
    "Dungeon",
    "DungeonGenerator",
    "GameState",
]
