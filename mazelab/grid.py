"""Grid model: cells, positions and the adjacency rules the algorithms rely on.

A grid is a ``height x width`` array of wall flags. Rooms live on the lattice of
(odd row, odd col) cells; the cells between two neighbouring rooms are
connectors, and the outer ring is always wall. Generators carve cells open
before the grid is frozen; after that the wall layout never changes and all
solver state lives in a separate overlay (see :mod:`mazelab.trace`).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .base import InvalidPositionError, MazeConfigurationError, PositionLike, validate_dimensions

WALL = 1
PATH = 0

# up, down, left, right
_STEPS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

TEXT_SYMBOLS = {"wall": "#", "path": ".", "start": "S", "end": "E"}


class Position(NamedTuple):
    row: int
    col: int

    def offset(self, drow: int, dcol: int) -> "Position":
        return Position(self.row + drow, self.col + dcol)


class Role(str, Enum):
    PATH = "path"
    START = "start"
    END = "end"


class Direction(Enum):
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value


@dataclass(frozen=True)
class Cell:
    row: int
    col: int
    is_wall: bool
    role: Role

    def to_dict(self) -> dict:
        return {
            "row": self.row,
            "col": self.col,
            "is_wall": self.is_wall,
            "role": self.role.value,
        }


def as_position(value: PositionLike) -> Position:
    if isinstance(value, Position):
        return value
    try:
        row, col = value
    except (TypeError, ValueError) as exc:
        raise InvalidPositionError(f"Expected a (row, col) pair, got {value!r}") from exc
    return Position(int(row), int(col))


def manhattan(a: PositionLike, b: PositionLike) -> int:
    a, b = as_position(a), as_position(b)
    return abs(a.row - b.row) + abs(a.col - b.col)


def midpoint(a: Position, b: Position) -> Position:
    """Connector cell lying between two lattice cells two steps apart."""

    return Position((a.row + b.row) // 2, (a.col + b.col) // 2)


class Grid:
    """Rectangular maze layout with odd dimensions of at least 5."""

    def __init__(self, walls: np.ndarray) -> None:
        layout = np.array(walls, dtype=bool)
        if layout.ndim != 2:
            raise MazeConfigurationError("Grid layout must be two-dimensional")
        height, width = layout.shape
        validate_dimensions(width, height)
        self._walls = layout
        self.start: Optional[Position] = None
        self.end: Optional[Position] = None

    # ------------------------------------------------------------------
    # construction

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[int]],
        *,
        start: Optional[PositionLike] = None,
        end: Optional[PositionLike] = None,
    ) -> "Grid":
        """Rebuild a frozen grid from a 1 (wall) / 0 (path) layout."""

        lengths = {len(row) for row in rows}
        if len(lengths) > 1:
            raise MazeConfigurationError("All grid rows must have the same length")
        grid = cls(np.asarray([list(map(int, row)) for row in rows], dtype=int) == WALL)
        grid.freeze()
        if start is not None and end is not None:
            grid.mark_endpoints(start, end)
        return grid

    def copy(self) -> "Grid":
        """Return an unfrozen copy carrying the same endpoints."""

        duplicate = Grid(self._walls)
        duplicate.start = self.start
        duplicate.end = self.end
        return duplicate

    def carve(self, position: PositionLike) -> bool:
        """Open a wall cell; returns False if it was already open."""

        if self.frozen:
            raise RuntimeError("Cannot carve a frozen grid")
        pos = as_position(position)
        if not self.in_interior(pos):
            raise ValueError(f"Cannot carve {tuple(pos)}: only interior cells may be opened")
        if not self._walls[pos.row, pos.col]:
            return False
        self._walls[pos.row, pos.col] = False
        return True

    def freeze(self) -> None:
        self._walls.flags.writeable = False

    @property
    def frozen(self) -> bool:
        return not self._walls.flags.writeable

    def mark_endpoints(self, start: PositionLike, end: PositionLike) -> None:
        """Tag exactly one open start cell and one open end cell."""

        if self.start is not None or self.end is not None:
            raise RuntimeError("Endpoints have already been assigned for this grid")
        start_pos = self.require_open(start, label="start")
        end_pos = self.require_open(end, label="end")
        if start_pos == end_pos:
            raise InvalidPositionError("start and end must be different cells")
        self.start = start_pos
        self.end = end_pos

    # ------------------------------------------------------------------
    # queries

    @property
    def height(self) -> int:
        return int(self._walls.shape[0])

    @property
    def width(self) -> int:
        return int(self._walls.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    @property
    def walls(self) -> np.ndarray:
        """Read-only boolean view of the layout (True means wall)."""

        view = self._walls.view()
        view.flags.writeable = False
        return view

    def in_bounds(self, position: PositionLike) -> bool:
        row, col = as_position(position)
        return 0 <= row < self.height and 0 <= col < self.width

    def in_interior(self, position: PositionLike) -> bool:
        row, col = as_position(position)
        return 1 <= row <= self.height - 2 and 1 <= col <= self.width - 2

    def is_wall(self, position: PositionLike) -> bool:
        pos = as_position(position)
        if not self.in_bounds(pos):
            raise InvalidPositionError(f"{tuple(pos)} is outside a {self.height}x{self.width} grid")
        return bool(self._walls[pos.row, pos.col])

    def is_open(self, position: PositionLike) -> bool:
        return self.in_bounds(position) and not self.is_wall(position)

    def require_in_bounds(self, position: PositionLike, *, label: str = "position") -> Position:
        pos = as_position(position)
        if not self.in_bounds(pos):
            raise InvalidPositionError(f"{label} {tuple(pos)} is outside a {self.height}x{self.width} grid")
        return pos

    def require_open(self, position: PositionLike, *, label: str = "position") -> Position:
        pos = self.require_in_bounds(position, label=label)
        if self._walls[pos.row, pos.col]:
            raise InvalidPositionError(f"{label} {tuple(pos)} is a wall cell")
        return pos

    def role(self, position: PositionLike) -> Role:
        pos = as_position(position)
        if pos == self.start:
            return Role.START
        if pos == self.end:
            return Role.END
        return Role.PATH

    def cell(self, position: PositionLike) -> Cell:
        pos = as_position(position)
        return Cell(row=pos.row, col=pos.col, is_wall=self.is_wall(pos), role=self.role(pos))

    def open_cells(self) -> List[Position]:
        return [Position(int(r), int(c)) for r, c in np.argwhere(~self._walls)]

    # ------------------------------------------------------------------
    # adjacency

    def neighbors4(self, position: PositionLike) -> List[Position]:
        """Orthogonal in-bounds neighbours in up, down, left, right order."""

        pos = as_position(position)
        return [
            neighbor
            for neighbor in (pos.offset(dr, dc) for dr, dc in _STEPS)
            if self.in_bounds(neighbor)
        ]

    def open_neighbors(self, position: PositionLike) -> List[Position]:
        return [neighbor for neighbor in self.neighbors4(position) if not self._walls[neighbor.row, neighbor.col]]

    def adjacent_interior(self, position: PositionLike) -> List[Position]:
        pos = as_position(position)
        return [
            neighbor
            for neighbor in (pos.offset(dr, dc) for dr, dc in _STEPS)
            if self.in_interior(neighbor)
        ]

    def jump_neighbors(self, position: PositionLike) -> List[Position]:
        pos = as_position(position)
        return [
            neighbor
            for neighbor in (pos.offset(2 * dr, 2 * dc) for dr, dc in _STEPS)
            if self.in_interior(neighbor)
        ]

    def lattice_cells(self) -> List[Position]:
        return [
            Position(row, col)
            for row in range(1, self.height - 1, 2)
            for col in range(1, self.width - 1, 2)
        ]

    @staticmethod
    def is_lattice(position: PositionLike) -> bool:
        row, col = as_position(position)
        return row % 2 == 1 and col % 2 == 1

    def connector_endpoints(self, position: PositionLike) -> Optional[Tuple[Position, Position]]:
        """The two lattice cells a connector separates, or None for other cells."""

        pos = as_position(position)
        if not self.in_interior(pos):
            return None
        row, col = pos
        if row % 2 == 1 and col % 2 == 0:
            return Position(row, col - 1), Position(row, col + 1)
        if row % 2 == 0 and col % 2 == 1:
            return Position(row - 1, col), Position(row + 1, col)
        return None

    def connectors(self) -> List[Position]:
        return [
            Position(row, col)
            for row in range(1, self.height - 1)
            for col in range(1, self.width - 1)
            if (row + col) % 2 == 1
        ]

    def try_move(self, position: PositionLike, direction: Direction) -> Optional[Position]:
        """Target of a one-cell move, or None if it would leave the grid or hit a wall."""

        pos = as_position(position)
        target = pos.offset(*direction.delta)
        if self.is_open(target):
            return target
        return None

    # ------------------------------------------------------------------
    # export

    def to_rows(self) -> List[List[int]]:
        return self._walls.astype(int).tolist()

    def to_dict(self) -> Dict[str, object]:
        return {
            "width": self.width,
            "height": self.height,
            "start": list(self.start) if self.start is not None else None,
            "end": list(self.end) if self.end is not None else None,
            "maze_grid": self.to_rows(),
        }

    def render_text(self) -> str:
        lines = []
        for row in range(self.height):
            symbols = []
            for col in range(self.width):
                role = self.role((row, col))
                if role is not Role.PATH:
                    symbols.append(TEXT_SYMBOLS[role.value])
                else:
                    symbols.append(TEXT_SYMBOLS["wall" if self._walls[row, col] else "path"])
            lines.append("".join(symbols))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Grid(height={self.height}, width={self.width}, start={self.start}, end={self.end})"


def new_grid(width: int, height: int) -> Grid:
    """Create a grid in which every cell is a wall."""

    width, height = validate_dimensions(width, height)
    return Grid(np.ones((height, width), dtype=bool))


__all__ = [
    "Cell",
    "Direction",
    "Grid",
    "PATH",
    "Position",
    "Role",
    "WALL",
    "as_position",
    "manhattan",
    "midpoint",
    "new_grid",
]
