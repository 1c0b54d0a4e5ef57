#!/usr/bin/env python3
"""
Test algorithm selection through the registry.
"""

import unittest

from dungeon_solver.algorithms import AlgorithmType, mdp_search, run_algorithm
from dungeon_solver.grid import Grid
from dungeon_solver.mdp import MDPConfig, solve_mdp
from dungeon_solver.pathfinding import SearchResult


class TestAlgorithmSelection(unittest.TestCase):
    """Test that every algorithm id dispatches to a working solver."""

    def setUp(self):
        self.grid = Grid.from_strings(
            [
                ".....",
                ".....",
                "SRR.E",
                ".....",
                ".....",
            ]
        )

    def test_algorithm_ids(self):
        """Ids are stable integers."""
        self.assertEqual(int(AlgorithmType.BFS), 0)
        self.assertEqual(int(AlgorithmType.DFS), 1)
        self.assertEqual(int(AlgorithmType.DIJKSTRA), 2)
        self.assertEqual(int(AlgorithmType.ASTAR), 3)
        self.assertEqual(int(AlgorithmType.GREEDY), 4)
        self.assertEqual(int(AlgorithmType.MDP), 5)

    def test_every_algorithm_reaches_exit(self):
        """Every algorithm finds the exit on an open board."""
        for algorithm in AlgorithmType:
            with self.subTest(algorithm=algorithm.name):
                result = run_algorithm(algorithm, self.grid)
                self.assertIsInstance(result, SearchResult)
                self.assertEqual(result.path[0], self.grid.start)
                self.assertEqual(result.path[-1], self.grid.exit)
                self.assertTrue(result.explored_nodes)

    def test_plain_integer_ids_accepted(self):
        """The game layer passes raw ints."""
        result = run_algorithm(0, self.grid)
        self.assertEqual(len(result.path), 5)

    def test_unknown_id_rejected(self):
        with self.assertRaises(ValueError):
            run_algorithm(99, self.grid)

    def test_explicit_endpoints(self):
        result = run_algorithm(AlgorithmType.BFS, self.grid, start=(0, 0), goal=(4, 4))
        self.assertEqual(result.path[0], (0, 0))
        self.assertEqual(result.path[-1], (4, 4))
        self.assertEqual(result.hop_count, 8)

    def test_mdp_uses_gold_held(self):
        """Gold already held lets the MDP exit without the rewards."""
        result = mdp_search(self.grid, gold=20)
        self.assertEqual(result.path[-1], self.grid.exit)
        self.assertTrue(result.success)

    def test_mdp_failed_rollout_is_no_path(self):
        """A rollout that never reaches the exit is reported as no path."""
        rows = ["." * 10 for _ in range(10)]
        rows[4] = "S..R.....E"
        grid = Grid.from_strings(rows)
        config = MDPConfig(min_gold_to_exit=20)

        mdp = solve_mdp(grid, config=config)
        result = run_algorithm(AlgorithmType.MDP, grid, mdp_config=config)

        self.assertFalse(mdp.solution_found)
        self.assertIs(result.success, False)
        self.assertEqual(result.path, [])
        self.assertEqual(result.hop_count, 0)
        self.assertEqual(result.explored_nodes, mdp.explored_nodes)


if __name__ == "__main__":
    unittest.main()
