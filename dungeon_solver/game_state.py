"""
Live game bookkeeping around the solver.

GameState owns the mutable board the player walks on. The solver never
sees that board: snapshot() hands out the frozen Grid captured when the
dungeon was generated, and overlay() turns a solver result back into
display codes on a fresh array.
"""

import logging
from typing import Callable, Iterable, Optional, Tuple

import numpy as np

from .constants.cell_types import CellType
from .constants.game_constants import EXPLORED_NODE, PATH_VISUAL, GameDefaults
from .grid import Grid
from .map_generation.dungeon_generator import Dungeon

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
GameEventCallback = Callable[[str, int], None]

# Always drawn over path and explored markers
_OBSTACLES = (CellType.REWARD, CellType.BANDIT, CellType.MINE, CellType.WALL)


class GameState:
    """Player position, gold and the board as the player has changed it."""

    def __init__(
        self,
        dungeon: Dungeon,
        on_event: Optional[GameEventCallback] = None,
        reward_gold: int = GameDefaults.REWARD_GOLD,
        mine_gold_loss: int = GameDefaults.MINE_GOLD_LOSS,
        min_gold_to_exit: int = GameDefaults.MIN_GOLD_TO_EXIT,
    ):
        self.dungeon = dungeon
        self.on_event = on_event
        self.reward_gold = reward_gold
        self.mine_gold_loss = mine_gold_loss
        self.min_gold_to_exit = min_gold_to_exit

        self._initial = dungeon.grid
        self.board = dungeon.grid.cells.copy()  # writable copy
        self.player = dungeon.grid.start
        self.gold = 0
        self.game_over = False
        self.game_won = False

        # Fog of war: hazards stay hidden until stepped on or the game ends
        self.revealed = np.zeros(self.board.shape, dtype=bool)
        self.revealed[dungeon.grid.start] = True
        self.revealed[dungeon.grid.exit] = True

    def snapshot(self) -> Grid:
        """The frozen episode board for the solver."""
        return self._initial

    def won(self) -> bool:
        return self.game_over and self.game_won

    def _emit(self, event: str, value: int):
        logger.debug("Game event %s (%d), gold now %d", event, value, self.gold)
        if self.on_event is not None:
            self.on_event(event, value)

    def move_player(self, x: int, y: int, mine_defused: bool = False) -> bool:
        """
        Move the player one step and resolve the tile it lands on.

        Args:
            x, y: Destination cell, must be adjacent to the player
            mine_defused: Outcome of the mine challenge, decided by the
                caller; a defused mine costs no gold

        Returns:
            False if the move was not allowed, True otherwise
        """
        if self.game_over:
            return False
        if not self._initial.is_passable(x, y):
            return False
        if abs(x - self.player[0]) + abs(y - self.player[1]) != 1:
            return False

        cell_type = CellType(int(self.board[x, y]))
        self.board[self.player] = CellType.EMPTY
        self.player = (x, y)
        self.revealed[x, y] = True
        self.board[x, y] = CellType.PLAYER

        if cell_type == CellType.REWARD:
            self.gold += self.reward_gold
            self._emit("reward", self.reward_gold)
        elif cell_type == CellType.BANDIT:
            lost = self.gold - self.gold // 2
            self.gold //= 2
            self._emit("bandit", lost)
        elif cell_type == CellType.MINE:
            lost = 0 if mine_defused else min(self.gold, self.mine_gold_loss)
            self.gold -= lost
            self._emit("mine", lost)
        elif cell_type == CellType.EXIT:
            self.game_over = True
            self.game_won = self.gold >= self.min_gold_to_exit
            self.reveal_all()
            self._emit("exit", self.gold)

        return True

    def reveal_all(self):
        self.revealed[:] = True

    def visible_board(self) -> np.ndarray:
        """The board as the player sees it: unrevealed cells read as EMPTY."""
        visible = np.where(self.revealed, self.board, int(CellType.EMPTY))
        return visible.astype(np.int8)

    def overlay(
        self, path: Iterable[Position], explored: Iterable[Position] = ()
    ) -> np.ndarray:
        """
        Display codes for a solver result on the initial board.

        Explored cells are marked first, the path on top of them, then
        obstacles on top of both. Start and exit keep their own codes.
        """
        initial = self._initial
        display = np.zeros_like(initial.cells, dtype=np.int8)
        display[initial.start] = CellType.PLAYER
        display[initial.exit] = CellType.EXIT
        endpoints = (initial.start, initial.exit)

        for pos in explored:
            pos = tuple(pos)
            if pos not in endpoints and initial[pos] not in _OBSTACLES:
                display[pos] = EXPLORED_NODE

        for pos in path:
            pos = tuple(pos)
            if pos not in endpoints:
                display[pos] = PATH_VISUAL

        for obstacle in _OBSTACLES:
            mask = initial.cells == int(obstacle)
            display[mask] = int(obstacle)

        return display
