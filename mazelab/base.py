"""Abstract interfaces, configuration and errors shared by generators and solvers."""

from __future__ import annotations

import numbers
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Generic, List, Optional, Tuple, TypeVar, Union

if TYPE_CHECKING:  # pragma: no cover
    from .grid import Grid, Position

MIN_DIMENSION = 5
DEFAULT_SIZE = 21

ResultT = TypeVar("ResultT")
PositionLike = Union["Position", Tuple[int, int]]


class MazeError(Exception):
    """Base class for every error raised by mazelab."""


class MazeConfigurationError(MazeError, ValueError):
    """Raised for grid dimensions or algorithm names that cannot be used."""


class InvalidPositionError(MazeError, ValueError):
    """Raised when a position is outside the grid or sits on a wall."""


class GenerationAlgorithm(str, Enum):
    DFS = "dfs"
    PRIM = "prim"
    KRUSKAL = "kruskal"

    @classmethod
    def parse(cls, value: Union["GenerationAlgorithm", str]) -> "GenerationAlgorithm":
        return _parse_choice(cls, value, "generation algorithm")


class SolverAlgorithm(str, Enum):
    BFS = "bfs"
    DFS = "dfs"
    ASTAR = "astar"

    @classmethod
    def parse(cls, value: Union["SolverAlgorithm", str]) -> "SolverAlgorithm":
        return _parse_choice(cls, value, "solver algorithm")


def _parse_choice(enum_cls, value, label: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError as exc:
        choices = ", ".join(member.value for member in enum_cls)
        raise MazeConfigurationError(f"Unknown {label} {value!r}; expected one of: {choices}") from exc


def validate_dimensions(width: int, height: int) -> Tuple[int, int]:
    """Reject grid sizes that break the odd row/column wall parity."""

    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise MazeConfigurationError(f"{name} must be an integer, got {value!r}")
        if value < MIN_DIMENSION:
            raise MazeConfigurationError(f"{name} must be at least {MIN_DIMENSION}, got {value}")
        if value % 2 == 0:
            raise MazeConfigurationError(f"{name} must be odd, got {value}")
    return int(width), int(height)


@dataclass
class MazeConfig:
    """Settings for one generate-then-solve run."""

    width: int = DEFAULT_SIZE
    height: int = DEFAULT_SIZE
    generation: Union[GenerationAlgorithm, str] = GenerationAlgorithm.DFS
    solver: Union[SolverAlgorithm, str] = SolverAlgorithm.BFS
    seed: Optional[int] = None
    start: Optional[Tuple[int, int]] = None
    end: Optional[Tuple[int, int]] = None

    def __post_init__(self) -> None:
        validate_dimensions(self.width, self.height)
        self.generation = GenerationAlgorithm.parse(self.generation)
        self.solver = SolverAlgorithm.parse(self.solver)
        if self.start is not None:
            self.start = (int(self.start[0]), int(self.start[1]))
        if self.end is not None:
            self.end = (int(self.end[0]), int(self.end[1]))

    def resolved_start(self) -> Tuple[int, int]:
        return self.start if self.start is not None else (1, 1)

    def resolved_end(self) -> Tuple[int, int]:
        return self.end if self.end is not None else (self.height - 2, self.width - 2)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "generation": self.generation.value,
            "solver": self.solver.value,
            "seed": self.seed,
            "start": list(self.resolved_start()),
            "end": list(self.resolved_end()),
        }

    @classmethod
    def from_args(cls, args: Any) -> "MazeConfig":
        """Build a config from an argparse namespace, ignoring missing attributes."""

        fields = ("width", "height", "generation", "solver", "seed", "start", "end")
        values = {name: getattr(args, name) for name in fields if getattr(args, name, None) is not None}
        return cls(**values)


class AbstractMazeGenerator(ABC):
    """Base class for builders that carve mazes out of an all-wall grid."""

    def __init__(
        self,
        width: int = DEFAULT_SIZE,
        height: int = DEFAULT_SIZE,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.width, self.height = validate_dimensions(width, height)
        self._rng = rng if rng is not None else random.Random(seed)

    @property
    def rng(self) -> random.Random:
        return self._rng

    @abstractmethod
    def generate(self, algorithm: Union[GenerationAlgorithm, str] = GenerationAlgorithm.DFS) -> "Grid":
        """Carve and return a new maze."""

    def generate_batch(
        self,
        count: int,
        algorithm: Union[GenerationAlgorithm, str] = GenerationAlgorithm.DFS,
    ) -> List["Grid"]:
        """Generate several mazes from the same random stream."""

        return [self.generate(algorithm) for _ in range(count)]


class AbstractMazeSolver(ABC, Generic[ResultT]):
    """Base class for searches that read a finished grid."""

    def __init__(self, grid: "Grid") -> None:
        self.grid = grid

    def resolve_position(self, value: PositionLike, label: str) -> "Position":
        """Validate that ``value`` is an open cell of the grid."""

        return self.grid.require_open(value, label=label)

    @abstractmethod
    def solve(
        self,
        algorithm: Union[SolverAlgorithm, str],
        start: PositionLike,
        end: PositionLike,
    ) -> ResultT:
        """Search from start to end and return the produced trace."""

    def record_to_dict(self, record: Any) -> Dict[str, Any]:
        """Dictionary serialization hook for solver results."""

        if hasattr(record, "to_dict"):
            return getattr(record, "to_dict")()
        raise TypeError("Solver result must implement to_dict() or override record_to_dict() in the solver.")


__all__ = [
    "AbstractMazeGenerator",
    "AbstractMazeSolver",
    "DEFAULT_SIZE",
    "GenerationAlgorithm",
    "InvalidPositionError",
    "MazeConfig",
    "MazeConfigurationError",
    "MazeError",
    "MIN_DIMENSION",
    "PositionLike",
    "SolverAlgorithm",
    "validate_dimensions",
]
