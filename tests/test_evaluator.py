import contextlib
import io
import json
import unittest

from mazelab import Grid, MazeEvaluator, Position, SolverStep, StepKind, generate, solve
from mazelab.evaluation import evaluator as evaluator_module
from mazelab.evaluation import shortest_distance, shortest_path

SNAKE_ROWS = [
    [1, 1, 1, 1, 1],
    [1, 0, 0, 0, 1],
    [1, 1, 1, 0, 1],
    [1, 0, 0, 0, 1],
    [1, 1, 1, 1, 1],
]

LOOP_ROWS = [
    [1, 1, 1, 1, 1],
    [1, 0, 0, 0, 1],
    [1, 0, 1, 0, 1],
    [1, 0, 0, 0, 1],
    [1, 1, 1, 1, 1],
]


class GridEvaluationTests(unittest.TestCase):
    def setUp(self) -> None:
        self.evaluator = MazeEvaluator()

    def test_generated_maze_is_perfect(self) -> None:
        result = self.evaluator.check_grid(generate(11, 9, "prim", seed=1))
        self.assertTrue(result.is_perfect)
        self.assertEqual(result.message, "Maze is a perfect spanning tree.")
        self.assertEqual(result.node_count, 20)
        self.assertEqual(result.edge_count, 19)
        self.assertTrue(result.to_dict()["is_perfect"])

    def test_snake_layout_is_perfect(self) -> None:
        result = self.evaluator.check_grid(Grid.from_rows(SNAKE_ROWS))
        self.assertTrue(result.is_perfect)
        self.assertEqual((result.node_count, result.edge_count), (4, 3))

    def test_cycle_is_detected(self) -> None:
        result = self.evaluator.check_grid(Grid.from_rows(LOOP_ROWS))
        self.assertTrue(result.connected)
        self.assertFalse(result.acyclic)
        self.assertFalse(result.is_perfect)
        self.assertEqual(result.edge_count, 4)
        self.assertEqual(result.message, "Maze contains a cycle.")

    def test_carved_border_is_detected(self) -> None:
        rows = [list(row) for row in SNAKE_ROWS]
        rows[0][1] = 0
        result = self.evaluator.check_grid(Grid.from_rows(rows))
        self.assertFalse(result.border_intact)
        self.assertIn(Position(0, 1), result.stray_cells)
        self.assertEqual(result.message, "Outer border has been carved.")

    def test_walled_rooms_are_detected(self) -> None:
        rows = [
            [1, 1, 1, 1, 1],
            [1, 0, 1, 1, 1],
            [1, 1, 1, 1, 1],
            [1, 1, 1, 0, 1],
            [1, 1, 1, 1, 1],
        ]
        result = self.evaluator.check_grid(Grid.from_rows(rows))
        self.assertFalse(result.lattice_open)
        self.assertFalse(result.connected)
        self.assertFalse(result.corners_reachable)
        self.assertEqual(result.message, "Some lattice rooms are still walls.")

    def test_open_pillar_is_a_stray_cell(self) -> None:
        rows = [list(row) for row in LOOP_ROWS]
        rows[2][2] = 0
        result = self.evaluator.check_grid(Grid.from_rows(rows))
        self.assertEqual(result.stray_cells, [Position(2, 2)])
        self.assertEqual(result.message, "Open cells found outside the room/connector lattice.")


class TraceEvaluationTests(unittest.TestCase):
    def setUp(self) -> None:
        self.evaluator = MazeEvaluator()
        self.grid = Grid.from_rows(SNAKE_ROWS, start=(1, 1), end=(3, 3))

    def test_solver_trace_passes(self) -> None:
        for algorithm in ("bfs", "dfs", "astar"):
            with self.subTest(algorithm=algorithm):
                steps = solve(self.grid, algorithm, self.grid.start, self.grid.end)
                result = self.evaluator.check_trace(self.grid, steps, self.grid.start, self.grid.end)
                self.assertTrue(result.starts_with_current)
                self.assertFalse(result.touches_walls)
                self.assertTrue(result.solution_trailing)
                self.assertTrue(result.solution_contiguous)
                self.assertTrue(result.solution_reaches_end)
                self.assertEqual(result.message, "Trace reaches the end cell along a contiguous path.")

    def test_missing_solution_is_reported(self) -> None:
        steps = solve(self.grid, "bfs", (1, 1), (2, 2))
        result = self.evaluator.check_trace(self.grid, steps, (1, 1), (2, 2))
        self.assertFalse(result.solution_found)
        self.assertFalse(result.solution_reaches_end)
        self.assertEqual(result.message, "No path found.")

    def test_wall_step_is_flagged(self) -> None:
        steps = [
            SolverStep(Position(1, 1), StepKind.CURRENT),
            SolverStep(Position(2, 2), StepKind.VISITED),
        ]
        result = self.evaluator.check_trace(self.grid, steps, (1, 1))
        self.assertTrue(result.touches_walls)
        self.assertEqual(result.message, "Trace marks a wall cell.")

    def test_broken_solution_chain_is_flagged(self) -> None:
        steps = [
            SolverStep(Position(1, 1), StepKind.CURRENT),
            SolverStep(Position(1, 2), StepKind.SOLUTION),
            SolverStep(Position(2, 3), StepKind.SOLUTION),
        ]
        result = self.evaluator.check_trace(self.grid, steps, (1, 1), (2, 3))
        self.assertFalse(result.solution_contiguous)
        self.assertEqual(result.to_dict()["message"], "Solution is not a contiguous chain from the start cell.")


class ShortestPathTests(unittest.TestCase):
    def test_shortest_path_on_snake(self) -> None:
        grid = Grid.from_rows(SNAKE_ROWS)
        path = shortest_path(grid, (1, 1), (3, 1))
        self.assertEqual(path[0], (1, 1))
        self.assertEqual(path[-1], (3, 1))
        self.assertEqual(shortest_distance(grid, (1, 1), (3, 1)), 6)

    def test_unreachable_or_walled_goal(self) -> None:
        grid = Grid.from_rows(SNAKE_ROWS)
        self.assertEqual(shortest_path(grid, (1, 1), (2, 2)), [])
        self.assertIsNone(shortest_distance(grid, (1, 1), (2, 2)))


class EvaluatorCliTests(unittest.TestCase):
    def test_cli_reports_both_checks(self) -> None:
        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            evaluator_module.main(["--width", "9", "--height", "7", "--generator", "prim", "--solver", "dfs", "--seed", "4"])
        report = json.loads(buffer.getvalue())
        self.assertTrue(report["grid"]["is_perfect"])
        self.assertTrue(report["trace"]["solution_reaches_end"])


if __name__ == "__main__":
    unittest.main()
