"""
Immutable dungeon board snapshot.

A Grid is the only board representation the search engine and the MDP
solver ever see. The cell array is copied on construction and marked
read-only, so a board that the live game keeps mutating can never leak into
a computation.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Iterator, List, Optional, Sequence, Tuple

import networkx as nx
import numpy as np

from .constants.cell_types import ALL_CELL_TYPES, CELL_CHARS, CellType
from .constants.game_constants import DIRECTIONS

Position = Tuple[int, int]

_CHAR_FOR_CELL = {cell: char for char, cell in CELL_CHARS.items()}


@dataclass(frozen=True, eq=False)
class Grid:
    """
    N x N board of cell codes indexed ``cells[x, y]``.

    Attributes:
        cells: Read-only int array of CellType codes, shape (N, N)
        start: Position the searches start from by default
        exit: Goal position (the MDP's terminal cell)
        passable: Cell types that may be entered. Every type by default,
            so walls only block when the caller leaves them out.
    """

    cells: np.ndarray
    start: Position
    exit: Position
    passable: FrozenSet[CellType] = field(default=ALL_CELL_TYPES)

    def __post_init__(self):
        cells = np.array(self.cells, dtype=np.int8, copy=True)
        if cells.ndim != 2 or cells.shape[0] != cells.shape[1]:
            raise ValueError(f"Grid must be square, got shape {cells.shape}")
        if cells.shape[0] == 0:
            raise ValueError("Grid must have at least one cell")

        valid_codes = np.array([int(c) for c in ALL_CELL_TYPES])
        if not np.isin(cells, valid_codes).all():
            raise ValueError("Grid contains unknown cell codes")

        cells.setflags(write=False)
        object.__setattr__(self, "cells", cells)

        start = (int(self.start[0]), int(self.start[1]))
        exit_pos = (int(self.exit[0]), int(self.exit[1]))
        for name, pos in (("start", start), ("exit", exit_pos)):
            if not self.in_bounds(*pos):
                raise ValueError(f"{name} {pos} is outside a {self.size}x{self.size} grid")
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "exit", exit_pos)
        object.__setattr__(
            self, "passable", frozenset(CellType(c) for c in self.passable)
        )

    @classmethod
    def from_strings(
        cls,
        rows: Sequence[str],
        passable: Optional[Iterable[CellType]] = None,
    ) -> "Grid":
        """
        Parse an ASCII board.

        Each string is one row ``y``; characters run along ``x``. The start
        is the ``S`` cell (or the ``P`` cell when there is no ``S``), the
        exit is the ``E`` cell.
        """
        size = len(rows)
        cells = np.zeros((size, size), dtype=np.int8)
        start = None
        player = None
        exit_pos = None

        for y, row in enumerate(rows):
            if len(row) != size:
                raise ValueError(f"Row {y} has {len(row)} cells, expected {size}")
            for x, char in enumerate(row):
                if char not in CELL_CHARS:
                    raise ValueError(f"Unknown cell character {char!r} at ({x}, {y})")
                cell = CELL_CHARS[char]
                cells[x, y] = cell
                if cell == CellType.START:
                    start = (x, y)
                elif cell == CellType.PLAYER:
                    player = (x, y)
                elif cell == CellType.EXIT:
                    exit_pos = (x, y)

        start = start if start is not None else player
        if start is None:
            raise ValueError("Board has no start ('S') or player ('P') cell")
        if exit_pos is None:
            raise ValueError("Board has no exit ('E') cell")

        return cls(
            cells=cells,
            start=start,
            exit=exit_pos,
            passable=ALL_CELL_TYPES if passable is None else frozenset(passable),
        )

    @property
    def size(self) -> int:
        return self.cells.shape[0]

    def __getitem__(self, pos: Position) -> CellType:
        return CellType(int(self.cells[pos[0], pos[1]]))

    def in_bounds(self, x: int, y: int) -> bool:
        size = self.cells.shape[0]
        return 0 <= x < size and 0 <= y < size

    def is_passable(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and CellType(int(self.cells[x, y])) in self.passable

    def neighbors(self, pos: Position) -> Iterator[Position]:
        """Yield enterable neighbors of pos in the fixed direction order."""
        x, y = pos
        for dx, dy in DIRECTIONS:
            nx_, ny_ = x + dx, y + dy
            if self.is_passable(nx_, ny_):
                yield (nx_, ny_)

    def positions_of(self, cell_type: CellType) -> List[Position]:
        """All positions holding cell_type, in x-major order."""
        xs, ys = np.nonzero(self.cells == int(cell_type))
        return [(int(x), int(y)) for x, y in zip(xs, ys)]

    def with_passable(self, passable: Iterable[CellType]) -> "Grid":
        """Same board with a different walkability contract."""
        return Grid(
            cells=self.cells, start=self.start, exit=self.exit, passable=frozenset(passable)
        )

    def to_strings(self) -> List[str]:
        size = self.size
        return [
            "".join(_CHAR_FOR_CELL[CellType(int(self.cells[x, y]))] for x in range(size))
            for y in range(size)
        ]

    def to_networkx(self, cost_model=None) -> nx.DiGraph:
        """
        Directed graph of legal single steps.

        Edge weights are the cost of entering the destination cell, so
        weighted shortest paths on this graph match the weighted searches.
        """
        from .pathfinding.costs import DEFAULT_COST_MODEL

        cost_model = cost_model or DEFAULT_COST_MODEL
        graph = nx.DiGraph()
        size = self.size
        for x in range(size):
            for y in range(size):
                if not self.is_passable(x, y) and (x, y) != self.start:
                    continue
                graph.add_node((x, y), cell_type=self[(x, y)])
                for neighbor in self.neighbors((x, y)):
                    graph.add_edge(
                        (x, y), neighbor, weight=cost_model.cost(self[neighbor])
                    )
        return graph
