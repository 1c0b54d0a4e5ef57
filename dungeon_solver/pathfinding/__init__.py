"""
Grid search engine for dungeon boards.

Five interchangeable strategies (BFS, DFS, Dijkstra/UCS, A*, Greedy
Best-First) built on one shared expansion loop.
"""

from .costs import CostModel, DEFAULT_COST_MODEL, move_cost, path_cost
from .frontier import Frontier, FifoFrontier, LifoFrontier, PriorityFrontier
from .search import (
    astar_search,
    best_first_search,
    bfs_search,
    dfs_search,
    dijkstra_search,
    greedy_search,
    manhattan_distance,
    reconstruct_path,
    ucs_search,
)
from .search_types import SearchResult

__all__ = [
    "CostModel",
    "DEFAULT_COST_MODEL",
    "move_cost",
    "path_cost",
    "Frontier",
    "FifoFrontier",
    "LifoFrontier",
    "PriorityFrontier",
    "astar_search",
    "best_first_search",
    "bfs_search",
    "dfs_search",
    "dijkstra_search",
    "greedy_search",
    "manhattan_distance",
    "reconstruct_path",
    "ucs_search",
    "SearchResult",
]
