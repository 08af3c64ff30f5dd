import argparse
import unittest

from mazelab import GenerationAlgorithm, MazeConfig, MazeConfigurationError, SolverAlgorithm
from mazelab.generation import DisjointSet


class MazeConfigTests(unittest.TestCase):
    def test_defaults_use_guaranteed_open_corners(self) -> None:
        config = MazeConfig()
        self.assertEqual((config.width, config.height), (21, 21))
        self.assertIs(config.generation, GenerationAlgorithm.DFS)
        self.assertIs(config.solver, SolverAlgorithm.BFS)
        self.assertEqual(config.resolved_start(), (1, 1))
        self.assertEqual(config.resolved_end(), (19, 19))

    def test_algorithm_names_are_parsed(self) -> None:
        config = MazeConfig(width=11, height=7, generation="KRUSKAL", solver="astar", seed=3)
        self.assertIs(config.generation, GenerationAlgorithm.KRUSKAL)
        self.assertIs(config.solver, SolverAlgorithm.ASTAR)
        self.assertEqual(config.resolved_end(), (5, 9))
        self.assertEqual(
            config.to_dict(),
            {
                "width": 11,
                "height": 7,
                "generation": "kruskal",
                "solver": "astar",
                "seed": 3,
                "start": [1, 1],
                "end": [5, 9],
            },
        )

    def test_unknown_algorithm_is_rejected(self) -> None:
        with self.assertRaises(MazeConfigurationError):
            MazeConfig(generation="wilson")
        with self.assertRaises(MazeConfigurationError):
            MazeConfig(solver="dijkstra")

    def test_even_dimensions_are_rejected(self) -> None:
        with self.assertRaises(MazeConfigurationError):
            MazeConfig(width=20)

    def test_from_args_ignores_unset_values(self) -> None:
        args = argparse.Namespace(width=9, height=9, generation="prim", solver=None, seed=None, start=[1, 1], end=[7, 5])
        config = MazeConfig.from_args(args)
        self.assertIs(config.generation, GenerationAlgorithm.PRIM)
        self.assertIs(config.solver, SolverAlgorithm.BFS)
        self.assertEqual(config.resolved_start(), (1, 1))
        self.assertEqual(config.resolved_end(), (7, 5))


class DisjointSetTests(unittest.TestCase):
    def test_union_merges_and_reports_cycles(self) -> None:
        sets = DisjointSet(5)
        self.assertEqual(sets.components, 5)
        self.assertTrue(sets.union(0, 1))
        self.assertTrue(sets.union(2, 3))
        self.assertFalse(sets.connected(1, 2))
        self.assertTrue(sets.union(1, 3))
        self.assertFalse(sets.union(0, 2))
        self.assertTrue(sets.connected(0, 3))
        self.assertEqual(sets.components, 2)
        self.assertEqual(sets.size_of(2), 4)
        self.assertEqual(sets.size_of(4), 1)
        self.assertEqual(len(sets), 5)

    def test_long_chain_compresses_to_single_root(self) -> None:
        sets = DisjointSet(100)
        for index in range(99):
            sets.union(index, index + 1)
        root = sets.find(0)
        self.assertTrue(all(sets.find(index) == root for index in range(100)))
        self.assertEqual(sets.components, 1)

    def test_negative_size_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            DisjointSet(-1)


if __name__ == "__main__":
    unittest.main()
