"""
Grid search strategies for dungeon boards.

All five strategies share one expansion loop, one parent map and one path
reconstruction routine; they differ only in the frontier that orders the
discovered cells:

    BFS:      FIFO queue                  - shortest path by hop count
    DFS:      LIFO stack                  - no optimality guarantee
    Dijkstra: priority on cost so far     - cheapest path for the cost model
    A*:       priority on cost + Manhattan - cheapest path while the heuristic
              does not overestimate (zero-cost Reward tiles break this)
    Greedy:   priority on Manhattan only  - fast, arbitrarily suboptimal

No strategy raises for an unreachable goal; it returns an empty path.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..grid import Grid
from .costs import DEFAULT_COST_MODEL, CostModel
from .frontier import FifoFrontier, Frontier, LifoFrontier, PriorityFrontier
from .search_types import SearchResult

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


def manhattan_distance(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def reconstruct_path(
    parents: Dict[Position, Position], start: Position, goal: Position
) -> List[Position]:
    """
    Walk parent pointers back from goal to start.

    Returns an empty list when goal was never reached.
    """
    if goal == start:
        return [start]
    if goal not in parents:
        return []

    path = [goal]
    current = goal
    # A well-formed parent map reaches start in at most len(parents) steps
    for _ in range(len(parents)):
        current = parents[current]
        path.append(current)
        if current == start:
            path.reverse()
            return path
        if current not in parents:
            break
    return []


def best_first_search(
    grid: Grid,
    start: Position,
    goal: Position,
    frontier: Frontier,
    cost_model: CostModel = DEFAULT_COST_MODEL,
) -> SearchResult:
    """
    Shared expansion loop for every strategy.

    Args:
        grid: Board snapshot
        start: Start cell
        goal: Goal cell; the search succeeds when it is popped
        frontier: Ordering strategy for discovered cells
        cost_model: Cell costs accumulated along each route

    Returns:
        SearchResult with the path (empty if unreachable), the cells in
        first-insertion order and the parent map
    """
    parents: Dict[Position, Position] = {}
    best_cost: Dict[Position, float] = {start: 0.0}
    explored: List[Position] = [start]
    frontier.push(start, 0.0)

    while frontier:
        current, cost_so_far = frontier.pop()

        # Lazy deletion: a cheaper entry for this cell was pushed later
        if frontier.relaxes and cost_so_far > best_cost[current]:
            continue

        if current == goal:
            return SearchResult(
                path=reconstruct_path(parents, start, goal),
                explored_nodes=explored,
                parents=parents,
            )

        neighbors = list(grid.neighbors(current))
        if frontier.lifo_expansion:
            neighbors.reverse()

        for neighbor in neighbors:
            new_cost = cost_so_far + cost_model.cost(grid[neighbor])
            if neighbor in best_cost:
                if not frontier.relaxes or new_cost >= best_cost[neighbor]:
                    continue
            else:
                explored.append(neighbor)
            best_cost[neighbor] = new_cost
            parents[neighbor] = current
            frontier.push(neighbor, new_cost)

    logger.debug(
        "No path from %s to %s after exploring %d cells", start, goal, len(explored)
    )
    return SearchResult(path=[], explored_nodes=explored, parents=parents)


def _endpoints(
    grid: Grid, start: Optional[Position], goal: Optional[Position]
) -> Tuple[Position, Position]:
    return (
        tuple(start) if start is not None else grid.start,
        tuple(goal) if goal is not None else grid.exit,
    )


def bfs_search(
    grid: Grid, start: Optional[Position] = None, goal: Optional[Position] = None
) -> SearchResult:
    start, goal = _endpoints(grid, start, goal)
    return best_first_search(grid, start, goal, FifoFrontier())


def dfs_search(
    grid: Grid, start: Optional[Position] = None, goal: Optional[Position] = None
) -> SearchResult:
    start, goal = _endpoints(grid, start, goal)
    return best_first_search(grid, start, goal, LifoFrontier())


def dijkstra_search(
    grid: Grid,
    start: Optional[Position] = None,
    goal: Optional[Position] = None,
    cost_model: CostModel = DEFAULT_COST_MODEL,
) -> SearchResult:
    """Uniform-cost search: cheapest path under cost_model."""
    start, goal = _endpoints(grid, start, goal)
    frontier = PriorityFrontier(key=lambda _pos, cost: cost, relaxes=True)
    return best_first_search(grid, start, goal, frontier, cost_model)


ucs_search = dijkstra_search


def astar_search(
    grid: Grid,
    start: Optional[Position] = None,
    goal: Optional[Position] = None,
    cost_model: CostModel = DEFAULT_COST_MODEL,
) -> SearchResult:
    """
    A* with the Manhattan heuristic.

    The heuristic assumes every step costs at least 1. Reward tiles cost 0,
    so on boards with rewards the heuristic can overestimate and the
    returned path is not guaranteed to be the cheapest.
    """
    start, goal = _endpoints(grid, start, goal)
    frontier = PriorityFrontier(
        key=lambda pos, cost: cost + manhattan_distance(pos, goal), relaxes=True
    )
    return best_first_search(grid, start, goal, frontier, cost_model)


def greedy_search(
    grid: Grid, start: Optional[Position] = None, goal: Optional[Position] = None
) -> SearchResult:
    """Greedy best-first: expand whatever looks closest to the goal."""
    start, goal = _endpoints(grid, start, goal)
    frontier = PriorityFrontier(key=lambda pos, _cost: manhattan_distance(pos, goal))
    return best_first_search(grid, start, goal, frontier)
