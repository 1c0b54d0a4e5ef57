"""
Tile effects and dense transition tables for the dungeon MDP.

Every destination cell is described by a tagged variant: either a
Deterministic outcome or a Stochastic choice between two Deterministic
outcomes. The Bellman update never branches on cell types; it evaluates
the probability-weighted outcomes of whatever effect the table holds.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, Union

import numpy as np

from ..constants.cell_types import CellType
from ..constants.game_constants import DIRECTIONS
from ..grid import Grid
from .config import MDPConfig

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

# Mines are the only two-way split
MAX_BRANCHES = 2


@dataclass(frozen=True)
class Deterministic:
    """Single outcome: gold held afterwards and the immediate reward."""

    next_gold: int
    reward: float


@dataclass(frozen=True)
class Stochastic:
    """Two outcomes, chosen by nature with the given success probability."""

    success_probability: float
    success: Deterministic
    failure: Deterministic


TileEffect = Union[Deterministic, Stochastic]


def tile_effect(
    cell_type: CellType, gold: int, collected: bool, config: MDPConfig
) -> TileEffect:
    """
    Effect of stepping onto a cell while holding gold.

    Args:
        cell_type: Destination cell type
        gold: Gold held before the move, already clamped
        collected: Whether this Reward tile has already been picked up
        config: Reward and gold constants
    """
    if cell_type == CellType.REWARD and not collected:
        next_gold = config.clamp_gold(gold + config.reward_gold)
        # At the cap the tile is worth nothing; stops the agent dancing on it
        if gold >= config.max_gold:
            return Deterministic(next_gold, config.step_reward)
        return Deterministic(next_gold, config.reward_tile_reward)

    if cell_type == CellType.BANDIT:
        next_gold = config.clamp_gold(gold // 2)
        penalty = config.bandit_base_reward - config.bandit_loss_penalty * (gold - next_gold)
        return Deterministic(next_gold, penalty)

    if cell_type == CellType.MINE:
        return Stochastic(
            success_probability=config.mine_success_probability,
            success=Deterministic(gold, config.mine_reward),
            failure=Deterministic(
                config.clamp_gold(gold - config.mine_gold_loss), config.mine_reward
            ),
        )

    # EMPTY, PLAYER, START, EXIT, collected REWARD, passable WALL
    return Deterministic(gold, config.step_reward)


def bump_effect(gold: int, config: MDPConfig) -> Deterministic:
    """Attempted move off the board or into a blocked cell: stay put."""
    return Deterministic(gold, config.out_of_bounds_reward)


def outcome_branches(effect: TileEffect) -> List[Tuple[float, Deterministic]]:
    """Flatten an effect into (probability, outcome) pairs."""
    if isinstance(effect, Stochastic):
        p = effect.success_probability
        return [(p, effect.success), (1.0 - p, effect.failure)]
    return [(1.0, effect)]


def expected_return(
    effect: TileEffect, successor_value: Callable[[int], float], gamma: float
) -> float:
    """
    Bellman backup for one action: sum over outcomes of p * (r + gamma * V).

    Args:
        effect: Effect of the destination cell
        successor_value: Maps the gold held after the move to V of the
            successor state
        gamma: Discount factor
    """
    return sum(
        p * (outcome.reward + gamma * successor_value(outcome.next_gold))
        for p, outcome in outcome_branches(effect)
    )


def _effect_arrays(
    make_effect: Callable[[int], TileEffect], num_gold: int
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Tabulate an effect over every gold level as (branch, gold) arrays."""
    probabilities = np.zeros((MAX_BRANCHES, num_gold))
    next_gold = np.zeros((MAX_BRANCHES, num_gold), dtype=np.int64)
    rewards = np.zeros((MAX_BRANCHES, num_gold))
    for gold in range(num_gold):
        branches = outcome_branches(make_effect(gold))
        for branch, (p, outcome) in enumerate(branches):
            probabilities[branch, gold] = p
            next_gold[branch, gold] = outcome.next_gold
            rewards[branch, gold] = outcome.reward
        # Unused branches point back at a valid gold level with zero weight
        for branch in range(len(branches), MAX_BRANCHES):
            next_gold[branch, gold] = gold
    return probabilities, next_gold, rewards


class TransitionTable:
    """
    Dense transition model over the augmented state space.

    States are (x, y, gold, collected) flattened x-major into a single
    index. ``collected`` is a bitmask over the grid's Reward tiles when
    rewards are consumable, otherwise it only takes the value 0.

    Arrays (A actions, B branches, S states):
        probabilities[a, b, s]: probability of branch b
        rewards[a, b, s]: immediate reward of branch b
        successors[a, b, s]: flat index of the successor state
    """

    def __init__(self, grid: Grid, goal: Position, config: MDPConfig):
        self.grid = grid
        self.goal = goal
        self.config = config

        self.reward_cells = self._tracked_reward_cells()
        self.reward_bits: Dict[Position, int] = {
            pos: bit for bit, pos in enumerate(self.reward_cells)
        }

        self.size = grid.size
        self.num_gold = config.max_gold + 1
        self.num_masks = 1 << len(self.reward_cells)
        self.shape = (self.size, self.size, self.num_gold, self.num_masks)
        self.num_states = int(np.prod(self.shape))

        num_actions = len(DIRECTIONS)
        self.probabilities = np.zeros((num_actions, MAX_BRANCHES, self.num_states))
        self.rewards = np.zeros((num_actions, MAX_BRANCHES, self.num_states))
        self.successors = np.zeros(
            (num_actions, MAX_BRANCHES, self.num_states), dtype=np.int64
        )

        self.terminal = np.zeros(self.shape, dtype=bool)
        self.terminal[goal[0], goal[1]] = True
        self.terminal = self.terminal.reshape(-1)
        self.terminal_values = np.zeros(self.shape)
        for gold in range(self.num_gold):
            self.terminal_values[goal[0], goal[1], gold, :] = config.terminal_value(gold)
        self.terminal_values = self.terminal_values.reshape(-1)

        self._build()
        logger.debug(
            "Built transition table: %d states (%d tracked rewards)",
            self.num_states,
            len(self.reward_cells),
        )

    def _tracked_reward_cells(self) -> List[Position]:
        if not self.config.consumable_rewards:
            return []
        cells = self.grid.positions_of(CellType.REWARD)
        if len(cells) > self.config.max_tracked_rewards:
            logger.warning(
                "Grid has %d reward tiles, more than the %d that can be tracked; "
                "treating rewards as persistent",
                len(cells),
                self.config.max_tracked_rewards,
            )
            return []
        return cells

    def state_index(self, x: int, y: int, gold: int, collected: int = 0) -> int:
        return int(np.ravel_multi_index((x, y, gold, collected), self.shape))

    def _build(self):
        config = self.config
        num_gold = self.num_gold
        block = num_gold * self.num_masks
        masks = np.arange(self.num_masks, dtype=np.int64)
        no_flags = np.zeros(self.num_masks, dtype=bool)

        bump = _effect_arrays(lambda g: bump_effect(g, config), num_gold)
        effects = {
            (cell_type, collected): _effect_arrays(
                lambda g, c=cell_type, f=collected: tile_effect(c, g, f, config), num_gold
            )
            for cell_type in CellType
            for collected in (False, True)
        }

        for action, (dx, dy) in enumerate(DIRECTIONS):
            for x in range(self.size):
                for y in range(self.size):
                    nx, ny = x + dx, y + dy
                    if self.grid.is_passable(nx, ny):
                        cell_type = self.grid[(nx, ny)]
                        fresh = effects[(cell_type, False)]
                        taken = effects[(cell_type, True)]
                        bit = self.reward_bits.get((nx, ny))
                        if bit is None:
                            flags, next_masks = no_flags, masks
                        else:
                            flags = ((masks >> bit) & 1).astype(bool)
                            next_masks = masks | (1 << bit)
                    else:
                        nx, ny = x, y
                        fresh = taken = bump
                        flags, next_masks = no_flags, masks

                    # (branch, gold, mask) views selected per mask by its flag
                    select = flags[None, None, :]
                    probabilities = np.where(select, taken[0][:, :, None], fresh[0][:, :, None])
                    next_gold = np.where(select, taken[1][:, :, None], fresh[1][:, :, None])
                    rewards = np.where(select, taken[2][:, :, None], fresh[2][:, :, None])

                    dest_base = (nx * self.size + ny) * block
                    successors = dest_base + next_gold * self.num_masks + next_masks[None, None, :]

                    start = (x * self.size + y) * block
                    span = slice(start, start + block)
                    self.probabilities[action, :, span] = probabilities.reshape(MAX_BRANCHES, -1)
                    self.rewards[action, :, span] = rewards.reshape(MAX_BRANCHES, -1)
                    self.successors[action, :, span] = successors.reshape(MAX_BRANCHES, -1)

    def effect_for(
        self, x: int, y: int, action: int, gold: int, collected: int = 0
    ) -> Tuple[Position, Optional[int], TileEffect]:
        """
        Effect of taking action from (x, y) with the given gold and mask.

        Returns:
            (destination, reward bit or None, effect). The destination equals
            (x, y) when the move bumps into the edge or a blocked cell.
        """
        dx, dy = DIRECTIONS[action]
        nx, ny = x + dx, y + dy
        if not self.grid.is_passable(nx, ny):
            return (x, y), None, bump_effect(gold, self.config)
        bit = self.reward_bits.get((nx, ny))
        taken = bit is not None and bool((collected >> bit) & 1)
        return (nx, ny), bit, tile_effect(self.grid[(nx, ny)], gold, taken, self.config)
