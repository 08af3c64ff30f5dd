"""Maze and trace evaluation package."""

__all__ = [
    "GridEvaluationResult",
    "MazeEvaluator",
    "TraceEvaluationResult",
    "shortest_distance",
    "shortest_path",
]

from .evaluator import (
    GridEvaluationResult,
    MazeEvaluator,
    TraceEvaluationResult,
    shortest_distance,
    shortest_path,
)
