"""Perfect maze generation and traced path solving."""

__all__ = [
    "AbstractMazeGenerator",
    "AbstractMazeSolver",
    "Cell",
    "Direction",
    "GenerationAlgorithm",
    "Grid",
    "InvalidPositionError",
    "MazeConfig",
    "MazeConfigurationError",
    "MazeError",
    "MazeEvaluator",
    "MazeGenerator",
    "MazeSolver",
    "Position",
    "Role",
    "SolveResult",
    "SolverAlgorithm",
    "SolverStep",
    "StepKind",
    "TraceOverlay",
    "generate",
    "new_grid",
    "replay",
    "solve",
]

from .base import (
    AbstractMazeGenerator,
    AbstractMazeSolver,
    GenerationAlgorithm,
    InvalidPositionError,
    MazeConfig,
    MazeConfigurationError,
    MazeError,
    SolverAlgorithm,
)
from .grid import Cell, Direction, Grid, Position, Role, new_grid
from .trace import SolverStep, StepKind, TraceOverlay, replay
from .generation import MazeGenerator, generate
from .solving import MazeSolver, SolveResult, solve
from .evaluation import MazeEvaluator
