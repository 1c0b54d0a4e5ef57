"""
Frontier strategies for the shared best-first search loop.

Each frontier only decides the order in which discovered cells are
expanded. The search loop itself lives in search.py and is identical for
every strategy.
"""

import heapq
import itertools
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Tuple

Position = Tuple[int, int]


class Frontier(ABC):
    """
    Set of discovered but not yet expanded cells.

    Class flags read by the search loop:
        relaxes: a discovered cell may be pushed again when a cheaper route
            to it is found; stale entries are skipped on pop.
        lifo_expansion: neighbors are pushed in reverse direction order so
            that the first direction is popped first.
    """

    relaxes = False
    lifo_expansion = False

    @abstractmethod
    def push(self, position: Position, cost: float) -> None:
        pass

    @abstractmethod
    def pop(self) -> Tuple[Position, float]:
        """Remove and return the next (position, cost so far)."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass


class FifoFrontier(Frontier):
    """Queue: breadth-first order."""

    def __init__(self):
        self._queue = deque()

    def push(self, position: Position, cost: float) -> None:
        self._queue.append((position, cost))

    def pop(self) -> Tuple[Position, float]:
        return self._queue.popleft()

    def __len__(self) -> int:
        return len(self._queue)


class LifoFrontier(Frontier):
    """Stack: depth-first order."""

    lifo_expansion = True

    def __init__(self):
        self._stack = []

    def push(self, position: Position, cost: float) -> None:
        self._stack.append((position, cost))

    def pop(self) -> Tuple[Position, float]:
        return self._stack.pop()

    def __len__(self) -> int:
        return len(self._stack)


class PriorityFrontier(Frontier):
    """
    Binary heap ordered by ``key(position, cost)``.

    Equal keys pop in insertion order, which keeps every strategy built on
    this frontier deterministic.
    """

    def __init__(self, key: Callable[[Position, float], float], relaxes: bool = False):
        self._key = key
        self._heap = []
        self._counter = itertools.count()
        self.relaxes = relaxes

    def push(self, position: Position, cost: float) -> None:
        heapq.heappush(
            self._heap, (self._key(position, cost), next(self._counter), position, cost)
        )

    def pop(self) -> Tuple[Position, float]:
        _, _, position, cost = heapq.heappop(self._heap)
        return position, cost

    def __len__(self) -> int:
        return len(self._heap)
