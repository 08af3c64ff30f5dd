#!/usr/bin/env python3
"""Generate mazes across seeds and rank generator/solver pairs by search effort."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from statistics import mean
from typing import Dict, List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mazelab import GenerationAlgorithm, MazeGenerator, MazeSolver, SolverAlgorithm


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--width", type=int, default=21, help="Odd maze width")
    parser.add_argument("--height", type=int, default=21, help="Odd maze height")
    parser.add_argument("--count", type=int, default=20, help="Mazes generated per algorithm")
    parser.add_argument("--seed", type=int, default=0, help="Seed for the first maze; later mazes use seed + index")
    return parser.parse_args()


def _run_pair(
    generation: GenerationAlgorithm,
    solver: SolverAlgorithm,
    args: argparse.Namespace,
) -> Dict[str, object]:
    explored: List[int] = []
    lengths: List[int] = []
    for offset in range(args.count):
        generator = MazeGenerator(args.width, args.height, seed=args.seed + offset)
        grid = generator.generate(generation)
        result = MazeSolver(grid).run(solver, grid.start, grid.end)
        if not result.reached:
            raise RuntimeError(f"{solver.value} failed on a {generation.value} maze (seed {args.seed + offset})")
        explored.append(result.explored)
        lengths.append(result.path_length)
    return {
        "generation": generation.value,
        "solver": solver.value,
        "mean_explored": mean(explored),
        "mean_path_length": mean(lengths),
        "max_path_length": max(lengths),
    }


def main() -> None:
    args = _parse_args()
    if args.count <= 0:
        raise ValueError("count must be positive")

    rows: List[Dict[str, object]] = []
    pairs = [(g, s) for g in GenerationAlgorithm for s in SolverAlgorithm]
    for index, (generation, solver) in enumerate(pairs, start=1):
        row = _run_pair(generation, solver, args)
        rows.append(row)
        print(
            f"[{index}/{len(pairs)}] {generation.value}+{solver.value}: "
            f"explored={row['mean_explored']:.1f} path={row['mean_path_length']:.1f}",
            file=sys.stderr,
        )

    rows.sort(key=lambda item: (item["mean_explored"], item["generation"], item["solver"]))
    print(json.dumps(rows, indent=2))


if __name__ == "__main__":
    main()
