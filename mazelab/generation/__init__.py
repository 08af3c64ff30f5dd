"""Maze generation package."""

__all__ = [
    "DisjointSet",
    "MazeGenerator",
    "generate",
]

from .disjoint_set import DisjointSet
from .generator import MazeGenerator, generate
