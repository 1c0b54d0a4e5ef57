"""
Result contract shared by every search strategy.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

Position = Tuple[int, int]


@dataclass
class SearchResult:
    """Result of one grid search."""

    path: List[Position] = field(default_factory=list)  # start..goal, empty if unreachable
    explored_nodes: List[Position] = field(default_factory=list)  # first-insertion order
    parents: Dict[Position, Position] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return len(self.path) > 0

    @property
    def hop_count(self) -> int:
        """Number of moves along the path, 0 when no path was found."""
        return max(len(self.path) - 1, 0)
