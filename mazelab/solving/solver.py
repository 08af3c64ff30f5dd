"""Breadth-first, depth-first and A* search over a finished maze."""

from __future__ import annotations

import argparse
import heapq
import itertools
import json
import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Optional, Tuple, Union

from ..base import (
    AbstractMazeSolver,
    DEFAULT_SIZE,
    GenerationAlgorithm,
    MazeConfig,
    PositionLike,
    SolverAlgorithm,
)
from ..generation import generate
from ..grid import Grid, Position, manhattan
from ..trace import SolverStep, StepKind, count_steps

logger = logging.getLogger(__name__)

SearchOutcome = Tuple[List[SolverStep], Optional[List[Position]]]


@dataclass
class SolveResult:
    algorithm: SolverAlgorithm
    start: Position
    end: Position
    steps: List[SolverStep]
    path: List[Position]

    @property
    def reached(self) -> bool:
        return bool(self.path)

    @property
    def explored(self) -> int:
        return count_steps(self.steps, StepKind.VISITED)

    @property
    def path_length(self) -> Optional[int]:
        """Hop count from start to end, or None when no path was found."""

        return len(self.path) - 1 if self.path else None

    def to_dict(self) -> dict:
        return {
            "algorithm": self.algorithm.value,
            "start": list(self.start),
            "end": list(self.end),
            "reached": self.reached,
            "explored": self.explored,
            "path_length": self.path_length,
            "path": [list(position) for position in self.path],
            "steps": [step.to_dict() for step in self.steps],
        }


class MazeSolver(AbstractMazeSolver[List[SolverStep]]):
    """Search a grid without mutating it, recording every step as a trace."""

    def __init__(self, grid: Grid) -> None:
        super().__init__(grid)
        self._searches: Dict[SolverAlgorithm, Callable[[Position, Position], SearchOutcome]] = {
            SolverAlgorithm.BFS: self._breadth_first,
            SolverAlgorithm.DFS: self._depth_first,
            SolverAlgorithm.ASTAR: self._a_star,
        }

    def solve(
        self,
        algorithm: Union[SolverAlgorithm, str],
        start: PositionLike,
        end: PositionLike,
    ) -> List[SolverStep]:
        return self.run(algorithm, start, end).steps

    def run(
        self,
        algorithm: Union[SolverAlgorithm, str],
        start: PositionLike,
        end: PositionLike,
    ) -> SolveResult:
        algo = SolverAlgorithm.parse(algorithm)
        start_pos = self.resolve_position(start, "start")
        # A walled end is unreachable rather than invalid: the search runs dry.
        end_pos = self.grid.require_in_bounds(end, label="end")
        if self.grid.is_wall(end_pos):
            logger.debug("end %s is a wall cell; no path can be found", tuple(end_pos))
        steps, path = self._searches[algo](start_pos, end_pos)
        result = SolveResult(
            algorithm=algo,
            start=start_pos,
            end=end_pos,
            steps=steps,
            path=path or [],
        )
        logger.debug(
            "%s from %s to %s: reached=%s explored=%d steps=%d",
            algo.value,
            tuple(start_pos),
            tuple(end_pos),
            result.reached,
            result.explored,
            len(steps),
        )
        return result

    # ------------------------------------------------------------------

    def _breadth_first(self, start: Position, end: Position) -> SearchOutcome:
        return self._frontier_search(start, end, lifo=False)

    def _depth_first(self, start: Position, end: Position) -> SearchOutcome:
        return self._frontier_search(start, end, lifo=True)

    def _frontier_search(self, start: Position, end: Position, *, lifo: bool) -> SearchOutcome:
        steps = [SolverStep(start, StepKind.CURRENT)]
        visited = {start}
        frontier: Deque[Tuple[Position, List[Position]]] = deque([(start, [start])])
        while frontier:
            position, path = frontier.pop() if lifo else frontier.popleft()
            if position == end:
                steps.extend(SolverStep(cell, StepKind.SOLUTION) for cell in path[1:])
                return steps, path
            for neighbor in self.grid.open_neighbors(position):
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                steps.append(SolverStep(neighbor, StepKind.VISITED))
                frontier.append((neighbor, path + [neighbor]))
        return steps, None

    def _a_star(self, start: Position, end: Position) -> SearchOutcome:
        steps = [SolverStep(start, StepKind.CURRENT)]
        g_score: Dict[Position, int] = {start: 0}
        parents: Dict[Position, Position] = {}
        closed = set()
        # Heap entries order by f, then lower g, then insertion order.
        counter = itertools.count()
        heap = [(manhattan(start, end), 0, next(counter), start)]
        while heap:
            _, g, _, position = heapq.heappop(heap)
            if position in closed or g > g_score[position]:
                continue
            if position == end:
                path = self._reconstruct(parents, start, end)
                steps.extend(SolverStep(cell, StepKind.SOLUTION) for cell in path[1:])
                return steps, path
            closed.add(position)
            steps.append(SolverStep(position, StepKind.VISITED))
            for neighbor in self.grid.open_neighbors(position):
                if neighbor in closed:
                    continue
                tentative = g + 1
                if tentative < g_score.get(neighbor, tentative + 1):
                    parents[neighbor] = position
                    g_score[neighbor] = tentative
                    f_score = tentative + manhattan(neighbor, end)
                    heapq.heappush(heap, (f_score, tentative, next(counter), neighbor))
        return steps, None

    @staticmethod
    def _reconstruct(parents: Dict[Position, Position], start: Position, end: Position) -> List[Position]:
        path = [end]
        while path[-1] != start:
            path.append(parents[path[-1]])
        path.reverse()
        return path


def solve(
    grid: Grid,
    algorithm: Union[SolverAlgorithm, str],
    start: PositionLike,
    end: PositionLike,
) -> List[SolverStep]:
    """Ordered trace of a search from ``start`` to ``end``.

    A trace without trailing ``solution`` steps means no path was found.
    """

    return MazeSolver(grid).solve(algorithm, start, end)


__all__ = ["MazeSolver", "SolveResult", "solve"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a maze and trace a solver across it")
    parser.add_argument("--width", type=int, default=DEFAULT_SIZE)
    parser.add_argument("--height", type=int, default=DEFAULT_SIZE)
    parser.add_argument(
        "--generator",
        dest="generation",
        choices=[algo.value for algo in GenerationAlgorithm],
        default=GenerationAlgorithm.DFS.value,
    )
    parser.add_argument(
        "--solver",
        choices=[algo.value for algo in SolverAlgorithm],
        default=SolverAlgorithm.BFS.value,
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--start", type=int, nargs=2, metavar=("ROW", "COL"), default=None)
    parser.add_argument("--end", type=int, nargs=2, metavar=("ROW", "COL"), default=None)
    parser.add_argument("--no-steps", action="store_true", help="Omit the step list from the output")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    config = MazeConfig.from_args(args)
    grid = generate(config.width, config.height, config.generation, seed=config.seed)
    result = MazeSolver(grid).run(config.solver, config.resolved_start(), config.resolved_end())
    payload = result.to_dict()
    if args.no_steps:
        payload.pop("steps")
    print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
