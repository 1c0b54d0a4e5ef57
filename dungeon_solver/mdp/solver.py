"""
Value-iteration solver for the dungeon MDP.

The agent walks a grid holding a clamped amount of gold. Rewards, bandits
and mines change the gold it holds; the exit is terminal and pays off only
when the agent carries at least the required amount. Mines are the single
stochastic transition and are resolved analytically inside the Bellman
update, so a solve never draws a random number and is fully reproducible.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from ..grid import Grid
from .config import DEFAULT_MDP_CONFIG, MDPConfig
from .mdp_types import Action, MDPResult
from .transitions import Stochastic, TransitionTable, expected_return

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class MDPSolver:
    """
    Solves one episode: value iteration, greedy policy, rollout.

    Each instance owns its value and policy tables. Solvers never share
    state, so comparing several solves side by side needs several
    instances.
    """

    def __init__(
        self,
        grid: Grid,
        start: Optional[Position] = None,
        goal: Optional[Position] = None,
        initial_gold: int = 0,
        config: Optional[MDPConfig] = None,
    ):
        """
        Initialize the solver.

        Args:
            grid: Board snapshot
            start: Start cell, defaults to grid.start
            goal: Exit cell, defaults to grid.exit
            initial_gold: Gold held at the start; clamped to [0, max_gold]
            config: Rewards, discounting and convergence settings
        """
        self.grid = grid
        self.config = config or DEFAULT_MDP_CONFIG
        self.start = tuple(start) if start is not None else grid.start
        self.goal = tuple(goal) if goal is not None else grid.exit
        self.start_gold = self.config.clamp_gold(initial_gold)

        self.transitions = TransitionTable(grid, self.goal, self.config)
        self.values = np.where(
            self.transitions.terminal, self.transitions.terminal_values, 0.0
        )
        self.policy = np.zeros(self.transitions.num_states, dtype=np.int64)
        self.iterations = 0
        self.converged = False

    def value_iteration(self) -> int:
        """
        Sweep the Bellman optimality update until the largest change in a
        sweep drops below theta or max_iterations sweeps have run.

        Hitting the cap is not an error: the tables hold the best estimate
        reached so far.

        Returns:
            Number of sweeps performed
        """
        table = self.transitions
        gamma = self.config.gamma
        values = self.values
        q_values = None

        self.converged = False
        for sweep in range(1, self.config.max_iterations + 1):
            # Q[a, s] = sum_b P * (R + gamma * V[s'])
            q_values = (
                table.probabilities * (table.rewards + gamma * values[table.successors])
            ).sum(axis=1)
            new_values = np.where(table.terminal, table.terminal_values, q_values.max(axis=0))
            delta = float(np.max(np.abs(new_values - values)))
            values = new_values
            self.iterations = sweep
            if delta < self.config.theta:
                self.converged = True
                break

        self.values = values
        # argmax keeps the first maximum: ties follow the Action order
        self.policy = np.where(table.terminal, int(Action.RIGHT), q_values.argmax(axis=0))

        if self.converged:
            logger.info("Value iteration converged after %d sweeps", self.iterations)
        else:
            logger.warning(
                "Value iteration stopped at the %d sweep cap (last delta %.6f)",
                self.iterations,
                delta,
            )
        return self.iterations

    def value_of(self, x: int, y: int, gold: int, collected: int = 0) -> float:
        gold = self.config.clamp_gold(gold)
        return float(self.values[self.transitions.state_index(x, y, gold, collected)])

    def action_at(self, x: int, y: int, gold: int, collected: int = 0) -> Action:
        gold = self.config.clamp_gold(gold)
        return Action(int(self.policy[self.transitions.state_index(x, y, gold, collected)]))

    def action_values(self, x: int, y: int, gold: int, collected: int = 0) -> List[float]:
        """One-step lookahead value of every action under the current V."""
        gold = self.config.clamp_gold(gold)
        table = self.transitions
        q_values = []
        for action in Action:
            dest, bit, effect = table.effect_for(x, y, action, gold, collected)
            next_collected = collected if bit is None else collected | (1 << bit)
            q_values.append(
                expected_return(
                    effect,
                    lambda g: self.value_of(dest[0], dest[1], g, next_collected),
                    self.config.gamma,
                )
            )
        return q_values

    def extract_path(self) -> Tuple[List[Position], int]:
        """
        Follow the greedy policy from the start state.

        Reward and bandit effects are applied as in the model. Mines are
        treated as neutral (the success outcome, no gold change), since the
        real outcome is random and the path is only a diagnostic trace.

        Returns:
            (path, gold held at the end of the rollout)
        """
        table = self.transitions
        x, y = self.start
        gold = self.start_gold
        collected = 0
        path = [(x, y)]

        for _ in range(self.config.max_rollout_steps):
            if (x, y) == self.goal:
                break
            action = int(self.policy[table.state_index(x, y, gold, collected)])
            dest, bit, effect = table.effect_for(x, y, action, gold, collected)
            # A bump leaves the state unchanged, so the policy would repeat it forever
            if dest == (x, y):
                break
            outcome = effect.success if isinstance(effect, Stochastic) else effect
            gold = outcome.next_gold
            if bit is not None:
                collected |= 1 << bit
            x, y = dest
            path.append(dest)

        return path, gold

    def notable_cells(self) -> List[Position]:
        """
        Cells whose value stands out from zero at gold 0 or at the start
        gold (no rewards collected). Diagnostic only.
        """
        values = self.values.reshape(self.transitions.shape)
        threshold = self.config.notable_value_threshold
        cells = []
        for x in range(self.grid.size):
            for y in range(self.grid.size):
                if (
                    abs(values[x, y, 0, 0]) > threshold
                    or abs(values[x, y, self.start_gold, 0]) > threshold
                ):
                    cells.append((x, y))
        return cells

    def solve(self) -> MDPResult:
        self.value_iteration()
        path, final_gold = self.extract_path()

        result = MDPResult(
            path=path,
            explored_nodes=self.notable_cells(),
            expected_value=self.value_of(self.start[0], self.start[1], self.start_gold),
            solution_found=len(path) > 0 and path[-1] == self.goal,
            iterations=self.iterations,
            converged=self.converged,
            final_gold=final_gold,
        )
        logger.info(
            "MDP solve: value=%.2f steps=%d reached_exit=%s",
            result.expected_value,
            len(path),
            result.solution_found,
        )
        return result


def solve_mdp(
    grid: Grid,
    start: Optional[Position] = None,
    goal: Optional[Position] = None,
    initial_gold: int = 0,
    config: Optional[MDPConfig] = None,
) -> MDPResult:
    """Build a fresh solver and solve the episode."""
    return MDPSolver(grid, start, goal, initial_gold, config).solve()
