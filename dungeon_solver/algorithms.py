"""
Algorithm registry.

The game layer picks an algorithm by id once play ends and overlays the
returned path and explored cells on its own board. Every algorithm,
including the MDP solver, is exposed through the same SearchResult
contract here.
"""

import logging
from enum import IntEnum
from typing import Callable, Dict, Optional, Tuple

from .grid import Grid
from .mdp.config import MDPConfig
from .mdp.solver import solve_mdp
from .pathfinding.search import (
    astar_search,
    bfs_search,
    dfs_search,
    dijkstra_search,
    greedy_search,
)
from .pathfinding.search_types import SearchResult

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class AlgorithmType(IntEnum):
    """
    Algorithms offered to the player after an episode.

    BFS (0): fewest moves, ignores tile costs
    DFS (1): first route found, no guarantee
    DIJKSTRA (2): cheapest route under the cost model
    ASTAR (3): cheapest route, guided by Manhattan distance
    GREEDY (4): heads straight for the exit, can walk into bandits
    MDP (5): gold-aware policy that weighs rewards, bandits and mine risk
    """

    BFS = 0
    DFS = 1
    DIJKSTRA = 2
    ASTAR = 3
    GREEDY = 4
    MDP = 5


_SEARCHES: Dict[AlgorithmType, Callable[..., SearchResult]] = {
    AlgorithmType.BFS: bfs_search,
    AlgorithmType.DFS: dfs_search,
    AlgorithmType.DIJKSTRA: dijkstra_search,
    AlgorithmType.ASTAR: astar_search,
    AlgorithmType.GREEDY: greedy_search,
}


def mdp_search(
    grid: Grid,
    start: Optional[Position] = None,
    goal: Optional[Position] = None,
    gold: int = 0,
    config: Optional[MDPConfig] = None,
) -> SearchResult:
    """
    Solve the MDP and keep only the path and the notably valued cells.

    A rollout that never reaches the goal is reported as no path; the
    rollout itself is still available from solve_mdp().
    """
    result = solve_mdp(grid, start, goal, gold, config)
    path = result.path if result.solution_found else []
    return SearchResult(path=path, explored_nodes=result.explored_nodes)


def run_algorithm(
    algorithm: AlgorithmType,
    grid: Grid,
    start: Optional[Position] = None,
    goal: Optional[Position] = None,
    gold: int = 0,
    mdp_config: Optional[MDPConfig] = None,
) -> SearchResult:
    """
    Run one algorithm on a board snapshot.

    Args:
        algorithm: Which algorithm to run
        grid: Frozen board snapshot
        start: Start cell, defaults to grid.start
        goal: Goal cell, defaults to grid.exit
        gold: Gold the player holds; only the MDP uses it
        mdp_config: Optional MDP settings

    Returns:
        SearchResult with the path and explored cells
    """
    try:
        algorithm = AlgorithmType(algorithm)
    except ValueError:
        raise ValueError(f"Unknown algorithm: {algorithm!r}") from None

    logger.debug("Running %s from %s to %s", algorithm.name, start, goal)
    if algorithm == AlgorithmType.MDP:
        return mdp_search(grid, start, goal, gold, mdp_config)
    return _SEARCHES[algorithm](grid, start, goal)
