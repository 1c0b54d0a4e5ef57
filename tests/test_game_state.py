"""
Tests for dungeon generation and the live game state.
"""

import numpy as np
import pytest

from dungeon_solver.algorithms import AlgorithmType, run_algorithm
from dungeon_solver.constants.cell_types import CellType
from dungeon_solver.constants.game_constants import EXPLORED_NODE, PATH_VISUAL
from dungeon_solver.game_state import GameState
from dungeon_solver.grid import Grid
from dungeon_solver.map_generation import Dungeon, DungeonGenerator


class TestDungeonGenerator:
    """Seeded generation and placement rules."""

    def test_same_seed_same_board(self):
        a = DungeonGenerator(seed=42).generate()
        b = DungeonGenerator(seed=42).generate()

        assert np.array_equal(a.grid.cells, b.grid.cells)
        assert a.grid.start == b.grid.start
        assert a.rewards == b.rewards

    def test_endpoints_on_opposite_edges(self):
        for seed in range(10):
            grid = DungeonGenerator(seed=seed).generate().grid
            assert grid.start[0] == 0
            assert grid.exit[0] == grid.size - 1
            assert grid[grid.start] == CellType.PLAYER
            assert grid[grid.exit] == CellType.EXIT

    def test_hazards_in_interior_columns(self):
        dungeon = DungeonGenerator(seed=3).generate()
        grid = dungeon.grid

        assert len(dungeon.rewards) == 2
        assert len(dungeon.bandits) == 1
        assert len(dungeon.mines) == 2
        for pos in dungeon.rewards + dungeon.bandits + dungeon.mines:
            assert 1 <= pos[0] <= grid.size - 2
        assert grid.positions_of(CellType.REWARD) == sorted(dungeon.rewards)

    def test_custom_counts(self):
        dungeon = DungeonGenerator(seed=1, size=6, num_rewards=4, num_bandits=0).generate()

        assert dungeon.grid.size == 6
        assert len(dungeon.rewards) == 4
        assert dungeon.bandits == []

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"size": 2},
            {"num_mines": -1},
            {"size": 3, "num_rewards": 4},
        ],
    )
    def test_invalid_settings_rejected(self, kwargs):
        with pytest.raises(ValueError):
            DungeonGenerator(**kwargs)


class TestGameState:
    """Player moves, tile effects and the frozen snapshot."""

    def setup_method(self):
        grid = Grid.from_strings(
            [
                "PRBME",
                ".....",
                ".....",
                ".....",
                ".....",
            ]
        )
        self.dungeon = Dungeon(grid=grid, rewards=[(1, 0)], bandits=[(2, 0)], mines=[(3, 0)])
        self.events = []
        self.state = GameState(
            self.dungeon, on_event=lambda event, value: self.events.append((event, value))
        )

    def test_walk_through_every_tile(self):
        state = self.state

        assert state.move_player(1, 0)
        assert state.gold == 10
        assert state.move_player(2, 0)
        assert state.gold == 5
        assert state.move_player(3, 0)
        assert state.gold == 0
        assert state.move_player(4, 0)

        assert self.events == [("reward", 10), ("bandit", 5), ("mine", 5), ("exit", 0)]
        assert state.game_over
        assert not state.won()

    def test_board_tracks_player(self):
        state = self.state
        state.move_player(1, 0)

        assert state.player == (1, 0)
        assert state.board[0, 0] == CellType.EMPTY
        assert state.board[1, 0] == CellType.PLAYER

    def test_defused_mine_costs_nothing(self):
        state = self.state
        state.move_player(0, 1)
        state.move_player(1, 1)
        state.move_player(2, 1)
        state.move_player(3, 1)
        state.gold = 10

        assert state.move_player(3, 0, mine_defused=True)
        assert state.gold == 10
        assert self.events[-1] == ("mine", 0)

    def test_winning_exit(self):
        state = GameState(self.dungeon, min_gold_to_exit=10)
        for pos in [(1, 0), (1, 1), (2, 1), (3, 1), (4, 1), (4, 0)]:
            assert state.move_player(*pos)

        assert state.gold == 10
        assert state.won()

    def test_illegal_moves_rejected(self):
        state = self.state

        assert not state.move_player(2, 0)  # not adjacent
        assert not state.move_player(-1, 0)  # off the board
        assert not state.move_player(1, 1)  # diagonal
        assert state.player == (0, 0)
        assert self.events == []

    def test_no_moves_after_game_over(self):
        state = GameState(self.dungeon)
        for pos in [(0, 1), (1, 1), (2, 1), (3, 1), (4, 1), (4, 0)]:
            state.move_player(*pos)

        assert state.game_over
        assert not state.move_player(4, 1)

    def test_snapshot_is_frozen_episode_board(self):
        state = self.state
        state.move_player(1, 0)
        snapshot = state.snapshot()

        assert snapshot is self.dungeon.grid
        assert snapshot[(1, 0)] == CellType.REWARD
        assert snapshot[(0, 0)] == CellType.PLAYER
        assert not snapshot.cells.flags.writeable

    def test_solver_runs_on_snapshot_after_play(self):
        state = self.state
        state.move_player(1, 0)
        result = run_algorithm(AlgorithmType.BFS, state.snapshot())

        assert result.path[0] == (0, 0)
        assert result.path[-1] == (4, 0)


class TestFogOfWar:
    """Hazards stay hidden until stepped on or the game ends."""

    def setup_method(self):
        grid = Grid.from_strings(
            [
                "PRBME",
                ".....",
                ".....",
                ".....",
                ".....",
            ]
        )
        self.state = GameState(Dungeon(grid=grid))

    def test_only_endpoints_visible_at_start(self):
        visible = self.state.visible_board()

        assert self.state.revealed.sum() == 2
        assert visible[0, 0] == CellType.PLAYER
        assert visible[4, 0] == CellType.EXIT
        assert visible[2, 0] == CellType.EMPTY
        assert visible[3, 0] == CellType.EMPTY

    def test_stepping_reveals_cell(self):
        state = self.state
        state.move_player(0, 1)
        state.move_player(1, 1)

        assert state.revealed[0, 1]
        assert state.revealed[1, 1]
        assert not state.revealed[2, 0]
        assert state.visible_board()[1, 1] == CellType.PLAYER

    def test_exit_reveals_everything(self):
        state = self.state
        for pos in [(0, 1), (1, 1), (2, 1), (3, 1), (4, 1), (4, 0)]:
            state.move_player(*pos)

        assert state.game_over
        assert state.revealed.all()
        assert state.visible_board()[2, 0] == CellType.BANDIT
        assert state.visible_board()[3, 0] == CellType.MINE

    def test_reveal_all(self):
        self.state.reveal_all()
        assert np.array_equal(self.state.visible_board(), self.state.board)


class TestOverlay:
    def setup_method(self):
        grid = Grid.from_strings(
            [
                "PRBME",
                ".....",
                ".....",
                ".....",
                ".....",
            ]
        )
        self.state = GameState(Dungeon(grid=grid))

    def test_layering(self):
        path = [(0, 0), (0, 1), (1, 1)]
        explored = [(0, 1), (1, 1), (2, 1), (1, 0)]
        display = self.state.overlay(path, explored)

        assert display[0, 0] == CellType.PLAYER
        assert display[4, 0] == CellType.EXIT
        assert display[0, 1] == PATH_VISUAL
        assert display[1, 1] == PATH_VISUAL
        assert display[2, 1] == EXPLORED_NODE
        # obstacles stay visible over explored cells
        assert display[1, 0] == CellType.REWARD
        assert display[2, 0] == CellType.BANDIT
        assert display[3, 0] == CellType.MINE
        assert display[4, 4] == CellType.EMPTY

    def test_overlay_does_not_touch_board(self):
        before = self.state.board.copy()
        self.state.overlay([(0, 0), (0, 1)], [(0, 2)])

        assert np.array_equal(self.state.board, before)
