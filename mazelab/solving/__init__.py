"""Maze solving package."""

__all__ = [
    "MazeSolver",
    "SolveResult",
    "solve",
]

from .solver import MazeSolver, SolveResult, solve
