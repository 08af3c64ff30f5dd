"""Perfect maze generator with depth-first, Prim's and Kruskal's carving."""

from __future__ import annotations

import argparse
import json
import logging
import random
from typing import Callable, Dict, List, Optional, Union

from ..base import AbstractMazeGenerator, DEFAULT_SIZE, GenerationAlgorithm
from ..grid import Grid, Position, midpoint, new_grid
from .disjoint_set import DisjointSet

logger = logging.getLogger(__name__)

ORIGIN = Position(1, 1)


class MazeGenerator(AbstractMazeGenerator):
    """Carve perfect mazes whose open cells form a spanning tree over the lattice."""

    def __init__(
        self,
        width: int = DEFAULT_SIZE,
        height: int = DEFAULT_SIZE,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__(width, height, seed=seed, rng=rng)
        self._carvers: Dict[GenerationAlgorithm, Callable[[Grid], None]] = {
            GenerationAlgorithm.DFS: self._carve_depth_first,
            GenerationAlgorithm.PRIM: self._carve_prim,
            GenerationAlgorithm.KRUSKAL: self._carve_kruskal,
        }

    def generate(
        self,
        algorithm: Union[GenerationAlgorithm, str] = GenerationAlgorithm.DFS,
        *,
        mark_endpoints: bool = True,
    ) -> Grid:
        algo = GenerationAlgorithm.parse(algorithm)
        grid = new_grid(self.width, self.height)
        self._carvers[algo](grid)
        grid.freeze()
        if mark_endpoints:
            grid.mark_endpoints(ORIGIN, self.far_corner)
        logger.debug(
            "Generated %dx%d maze with %s (%d open cells)",
            self.height,
            self.width,
            algo.value,
            len(grid.open_cells()),
        )
        return grid

    @property
    def far_corner(self) -> Position:
        return Position(self.height - 2, self.width - 2)

    # ------------------------------------------------------------------

    def _carve_depth_first(self, grid: Grid) -> None:
        grid.carve(ORIGIN)
        visited = {ORIGIN}
        stack: List[Position] = [ORIGIN]
        while stack:
            current = stack[-1]
            candidates = [cell for cell in grid.jump_neighbors(current) if cell not in visited]
            if not candidates:
                stack.pop()
                continue
            chosen = self._rng.choice(candidates)
            grid.carve(midpoint(current, chosen))
            grid.carve(chosen)
            visited.add(chosen)
            stack.append(chosen)

    def _carve_prim(self, grid: Grid) -> None:
        grid.carve(ORIGIN)
        frontier = [cell for cell in grid.adjacent_interior(ORIGIN) if grid.is_wall(cell)]
        while frontier:
            wall = frontier.pop(self._rng.randrange(len(frontier)))
            endpoints = grid.connector_endpoints(wall)
            if endpoints is None:
                continue
            carved = [cell for cell in endpoints if not grid.is_wall(cell)]
            # Joining two carved rooms would close a cycle.
            if len(carved) != 1:
                continue
            room = endpoints[1] if carved[0] == endpoints[0] else endpoints[0]
            grid.carve(wall)
            grid.carve(room)
            frontier.extend(cell for cell in grid.adjacent_interior(room) if grid.is_wall(cell))

    def _carve_kruskal(self, grid: Grid) -> None:
        lattice = grid.lattice_cells()
        ids = {cell: index for index, cell in enumerate(lattice)}
        sets = DisjointSet(len(lattice))

        edges = []
        for wall in grid.connectors():
            endpoints = grid.connector_endpoints(wall)
            if endpoints is not None:
                edges.append((wall, endpoints[0], endpoints[1]))
        self._rng.shuffle(edges)

        for wall, first, second in edges:
            if sets.union(ids[first], ids[second]):
                grid.carve(wall)
        for cell in lattice:
            grid.carve(cell)


def generate(
    width: int = DEFAULT_SIZE,
    height: int = DEFAULT_SIZE,
    algorithm: Union[GenerationAlgorithm, str] = GenerationAlgorithm.DFS,
    *,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    mark_endpoints: bool = True,
) -> Grid:
    """Generate one maze; deterministic when ``seed`` or ``rng`` is fixed."""

    generator = MazeGenerator(width, height, seed=seed, rng=rng)
    return generator.generate(algorithm, mark_endpoints=mark_endpoints)


__all__ = ["MazeGenerator", "generate"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a perfect maze")
    parser.add_argument("--width", type=int, default=DEFAULT_SIZE, help="Odd grid width, at least 5")
    parser.add_argument("--height", type=int, default=DEFAULT_SIZE, help="Odd grid height, at least 5")
    parser.add_argument(
        "--algorithm",
        choices=[algo.value for algo in GenerationAlgorithm],
        default=GenerationAlgorithm.DFS.value,
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--json", action="store_true", help="Print the maze layout as JSON")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    grid = generate(args.width, args.height, args.algorithm, seed=args.seed)
    if args.json:
        print(json.dumps(grid.to_dict(), indent=2))
    else:
        print(grid.render_text())


if __name__ == "__main__":
    main()
