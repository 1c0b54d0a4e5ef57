"""
Configuration for the dungeon MDP solver.

All rewards are design constants: tunable, but fixed for a given solve.
The defaults reproduce the game's tuning.
"""

from dataclasses import dataclass

from ..constants.game_constants import GameDefaults

# 2**12 collected-reward masks per (cell, gold) is the largest table we build
MAX_TRACKED_REWARDS_LIMIT = 12


@dataclass(frozen=True)
class MDPConfig:
    """Discounting, convergence, gold bookkeeping and reward shaping."""

    # Value iteration
    gamma: float = 0.99  # high discount for long-term greed
    theta: float = 1e-4
    max_iterations: int = 5000  # soft timeout, never an error

    # Gold bookkeeping
    max_gold: int = 50  # clamp; bounds the state space
    min_gold_to_exit: int = GameDefaults.MIN_GOLD_TO_EXIT
    reward_gold: int = GameDefaults.REWARD_GOLD
    mine_gold_loss: int = GameDefaults.MINE_GOLD_LOSS
    mine_success_probability: float = 0.7

    # Immediate rewards
    step_reward: float = -0.05
    out_of_bounds_reward: float = -1.0
    reward_tile_reward: float = 150.0
    bandit_base_reward: float = -50.0
    bandit_loss_penalty: float = 5.0  # per gold actually lost
    mine_reward: float = -10.0

    # Terminal values at the exit
    exit_fail_reward: float = -10000.0
    exit_base_reward: float = 2000.0
    exit_gold_bonus: float = 100.0  # per gold above min_gold_to_exit

    # Rollout and diagnostics
    max_rollout_steps: int = 200
    notable_value_threshold: float = 0.1

    # A collected Reward tile turns into floor, as in the live game
    consumable_rewards: bool = True
    max_tracked_rewards: int = 6

    def __post_init__(self):
        """Validate solver configuration."""
        if not 0.0 <= self.gamma < 1.0:
            raise ValueError("gamma must be in [0, 1)")
        if self.theta <= 0.0:
            raise ValueError("theta must be positive")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        if self.max_gold < 0:
            raise ValueError("max_gold must be non-negative")
        if self.min_gold_to_exit < 0:
            raise ValueError("min_gold_to_exit must be non-negative")
        if self.reward_gold < 0 or self.mine_gold_loss < 0:
            raise ValueError("gold amounts must be non-negative")
        if not 0.0 <= self.mine_success_probability <= 1.0:
            raise ValueError("mine_success_probability must be between 0.0 and 1.0")
        if self.max_rollout_steps < 0:
            raise ValueError("max_rollout_steps must be non-negative")
        if not 0 <= self.max_tracked_rewards <= MAX_TRACKED_REWARDS_LIMIT:
            raise ValueError(
                f"max_tracked_rewards must be between 0 and {MAX_TRACKED_REWARDS_LIMIT}"
            )

    def clamp_gold(self, gold: int) -> int:
        return min(max(int(gold), 0), self.max_gold)

    def terminal_value(self, gold: int) -> float:
        """Value of standing on the exit while holding gold."""
        if gold < self.min_gold_to_exit:
            return self.exit_fail_reward
        return self.exit_base_reward + self.exit_gold_bonus * (gold - self.min_gold_to_exit)


DEFAULT_MDP_CONFIG = MDPConfig()
