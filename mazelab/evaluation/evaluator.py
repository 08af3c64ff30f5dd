"""Structural checks for generated mazes and solver traces."""

from __future__ import annotations

import argparse
import json
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set

import numpy as np

from ..base import DEFAULT_SIZE, GenerationAlgorithm, PositionLike, SolverAlgorithm
from ..generation import generate
from ..grid import Grid, Position, as_position, manhattan
from ..solving import solve
from ..trace import SolverStep, StepKind, solution_path


@dataclass
class GridEvaluationResult:
    border_intact: bool
    lattice_open: bool
    connected: bool
    acyclic: bool
    corners_reachable: bool
    node_count: int
    edge_count: int
    stray_cells: List[Position]
    message: str

    @property
    def is_perfect(self) -> bool:
        return (
            self.border_intact
            and self.lattice_open
            and self.connected
            and self.acyclic
            and self.corners_reachable
            and not self.stray_cells
        )

    def to_dict(self) -> dict:
        return {
            "border_intact": self.border_intact,
            "lattice_open": self.lattice_open,
            "connected": self.connected,
            "acyclic": self.acyclic,
            "corners_reachable": self.corners_reachable,
            "node_count": self.node_count,
            "edge_count": self.edge_count,
            "stray_cells": [list(cell) for cell in self.stray_cells],
            "is_perfect": self.is_perfect,
            "message": self.message,
        }


@dataclass
class TraceEvaluationResult:
    starts_with_current: bool
    touches_walls: bool
    solution_found: bool
    solution_trailing: bool
    solution_contiguous: bool
    solution_reaches_end: bool
    message: str

    def to_dict(self) -> dict:
        return {
            "starts_with_current": self.starts_with_current,
            "touches_walls": self.touches_walls,
            "solution_found": self.solution_found,
            "solution_trailing": self.solution_trailing,
            "solution_contiguous": self.solution_contiguous,
            "solution_reaches_end": self.solution_reaches_end,
            "message": self.message,
        }


class MazeEvaluator:
    """Verify the perfect-maze invariants and the shape of solver traces."""

    def check_grid(self, grid: Grid) -> GridEvaluationResult:
        walls = grid.walls
        border_intact = bool(
            np.all(walls[0, :]) and np.all(walls[-1, :]) and np.all(walls[:, 0]) and np.all(walls[:, -1])
        )

        lattice = grid.lattice_cells()
        lattice_open = all(not grid.is_wall(cell) for cell in lattice)
        nodes = [cell for cell in lattice if not grid.is_wall(cell)]

        edge_count = 0
        stray_cells: List[Position] = []
        for cell in grid.open_cells():
            if grid.is_lattice(cell):
                continue
            endpoints = grid.connector_endpoints(cell)
            if endpoints is not None and all(not grid.is_wall(end) for end in endpoints):
                edge_count += 1
            else:
                stray_cells.append(cell)

        origin = Position(1, 1)
        reached = self._reachable(grid, origin) if not grid.is_wall(origin) else set()
        open_count = len(nodes) + edge_count + len(stray_cells)
        connected = bool(nodes) and len(reached) == open_count
        acyclic = connected and edge_count == len(nodes) - 1
        far_corner = Position(grid.height - 2, grid.width - 2)
        corners_reachable = origin in reached and far_corner in reached

        if not border_intact:
            message = "Outer border has been carved."
        elif stray_cells:
            message = "Open cells found outside the room/connector lattice."
        elif not lattice_open:
            message = "Some lattice rooms are still walls."
        elif not connected:
            message = "Open cells do not form a single connected region."
        elif not acyclic:
            message = "Maze contains a cycle."
        elif not corners_reachable:
            message = "Opposite corners are not mutually reachable."
        else:
            message = "Maze is a perfect spanning tree."

        return GridEvaluationResult(
            border_intact=border_intact,
            lattice_open=lattice_open,
            connected=connected,
            acyclic=acyclic,
            corners_reachable=corners_reachable,
            node_count=len(nodes),
            edge_count=edge_count,
            stray_cells=stray_cells,
            message=message,
        )

    def check_trace(
        self,
        grid: Grid,
        steps: Sequence[SolverStep],
        start: PositionLike,
        end: Optional[PositionLike] = None,
    ) -> TraceEvaluationResult:
        start_pos = as_position(start)
        end_pos = as_position(end) if end is not None else None

        starts_with_current = bool(steps) and steps[0].kind is StepKind.CURRENT and steps[0].position == start_pos
        touches_walls = any(not grid.is_open(step.position) for step in steps)

        kinds = [step.kind for step in steps]
        solution = solution_path(steps)
        solution_found = bool(solution)
        first_solution = kinds.index(StepKind.SOLUTION) if solution_found else len(kinds)
        solution_trailing = all(kind is StepKind.SOLUTION for kind in kinds[first_solution:])

        solution_contiguous = False
        if solution_found:
            chain = [start_pos] + solution
            solution_contiguous = all(manhattan(a, b) == 1 for a, b in zip(chain, chain[1:]))
        solution_reaches_end = solution_found and (end_pos is None or solution[-1] == end_pos)

        if touches_walls:
            message = "Trace marks a wall cell."
        elif not starts_with_current:
            message = "Trace does not begin at the start cell."
        elif not solution_found:
            message = "No path found."
        elif not solution_trailing:
            message = "Solution steps are interleaved with exploration."
        elif not solution_contiguous:
            message = "Solution is not a contiguous chain from the start cell."
        elif not solution_reaches_end:
            message = "Solution does not reach the end cell."
        else:
            message = "Trace reaches the end cell along a contiguous path."

        return TraceEvaluationResult(
            starts_with_current=starts_with_current,
            touches_walls=touches_walls,
            solution_found=solution_found,
            solution_trailing=solution_trailing,
            solution_contiguous=solution_contiguous,
            solution_reaches_end=solution_reaches_end,
            message=message,
        )

    # ------------------------------------------------------------------

    @staticmethod
    def _reachable(grid: Grid, origin: Position) -> Set[Position]:
        seen = {origin}
        queue = deque([origin])
        while queue:
            current = queue.popleft()
            for neighbor in grid.open_neighbors(current):
                if neighbor not in seen:
                    seen.add(neighbor)
                    queue.append(neighbor)
        return seen


def shortest_path(grid: Grid, start: PositionLike, goal: PositionLike) -> List[Position]:
    """Independent BFS path over open cells, empty when unreachable."""

    start_pos, goal_pos = as_position(start), as_position(goal)
    if not (grid.is_open(start_pos) and grid.is_open(goal_pos)):
        return []
    queue = deque([start_pos])
    parents: Dict[Position, Optional[Position]] = {start_pos: None}
    while queue:
        current = queue.popleft()
        if current == goal_pos:
            break
        for neighbor in grid.open_neighbors(current):
            if neighbor not in parents:
                parents[neighbor] = current
                queue.append(neighbor)

    if goal_pos not in parents:
        return []
    node: Optional[Position] = goal_pos
    result: List[Position] = []
    while node is not None:
        result.append(node)
        node = parents[node]
    result.reverse()
    return result


def shortest_distance(grid: Grid, start: PositionLike, goal: PositionLike) -> Optional[int]:
    path = shortest_path(grid, start, goal)
    return len(path) - 1 if path else None


__all__ = [
    "GridEvaluationResult",
    "MazeEvaluator",
    "TraceEvaluationResult",
    "shortest_distance",
    "shortest_path",
]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a maze, solve it and check both results")
    parser.add_argument("--width", type=int, default=DEFAULT_SIZE)
    parser.add_argument("--height", type=int, default=DEFAULT_SIZE)
    parser.add_argument(
        "--generator",
        choices=[algo.value for algo in GenerationAlgorithm],
        default=GenerationAlgorithm.DFS.value,
    )
    parser.add_argument(
        "--solver",
        choices=[algo.value for algo in SolverAlgorithm],
        default=SolverAlgorithm.BFS.value,
    )
    parser.add_argument("--seed", type=int, default=None)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    grid = generate(args.width, args.height, args.generator, seed=args.seed)
    steps = solve(grid, args.solver, grid.start, grid.end)
    evaluator = MazeEvaluator()
    report = {
        "grid": evaluator.check_grid(grid).to_dict(),
        "trace": evaluator.check_trace(grid, steps, grid.start, grid.end).to_dict(),
    }
    print(json.dumps(report, indent=2))


if __name__ == "__main__":
    main()
