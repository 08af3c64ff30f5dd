"""Solver trace events and the overlay produced by replaying them.

A trace is an append-only list of :class:`SolverStep` events. Replaying any
prefix of it onto a :class:`TraceOverlay` reproduces the animation state at
that point without touching the grid itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence

import numpy as np

from .base import PositionLike
from .grid import Grid, Position, Role, as_position


class StepKind(str, Enum):
    VISITED = "visited"
    CURRENT = "current"
    SOLUTION = "solution"


_FLAG_BITS: Dict[StepKind, int] = {
    StepKind.VISITED: 1,
    StepKind.CURRENT: 2,
    StepKind.SOLUTION: 4,
}

# Highest first when a cell carries several flags.
_DISPLAY_PRIORITY = (StepKind.SOLUTION, StepKind.CURRENT, StepKind.VISITED)


@dataclass(frozen=True)
class SolverStep:
    position: Position
    kind: StepKind

    def to_dict(self) -> dict:
        return {
            "position": list(self.position),
            "type": self.kind.value,
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "SolverStep":
        return cls(position=as_position(payload["position"]), kind=StepKind(payload["type"]))


class TraceOverlay:
    """Per-cell visited/current/solution flags layered over a read-only grid."""

    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self._flags = np.zeros(grid.shape, dtype=np.uint8)
        self.applied = 0

    def apply(self, step: SolverStep) -> None:
        pos = self.grid.require_open(step.position, label=f"{step.kind.value} step")
        self._flags[pos.row, pos.col] |= _FLAG_BITS[step.kind]
        self.applied += 1

    def extend(self, steps: Iterable[SolverStep]) -> None:
        for step in steps:
            self.apply(step)

    def flags(self, position: PositionLike) -> FrozenSet[StepKind]:
        row, col = as_position(position)
        value = int(self._flags[row, col])
        return frozenset(kind for kind, bit in _FLAG_BITS.items() if value & bit)

    def is_visited(self, position: PositionLike) -> bool:
        return StepKind.VISITED in self.flags(position)

    def is_current(self, position: PositionLike) -> bool:
        return StepKind.CURRENT in self.flags(position)

    def is_solution(self, position: PositionLike) -> bool:
        return StepKind.SOLUTION in self.flags(position)

    def layer(self, kind: StepKind) -> np.ndarray:
        """Boolean mask of the cells carrying ``kind``."""

        return (self._flags & _FLAG_BITS[kind]) != 0

    def cell_type(self, position: PositionLike) -> str:
        """Display category of a cell: start and end win, then solution, current, visited."""

        pos = as_position(position)
        if self.grid.is_wall(pos):
            return "wall"
        role = self.grid.role(pos)
        if role is not Role.PATH:
            return role.value
        flags = self.flags(pos)
        for kind in _DISPLAY_PRIORITY:
            if kind in flags:
                return kind.value
        return Role.PATH.value

    def cell_types(self) -> List[List[str]]:
        return [
            [self.cell_type((row, col)) for col in range(self.grid.width)]
            for row in range(self.grid.height)
        ]

    def counts(self) -> Dict[str, int]:
        return {kind.value: int(np.count_nonzero(self.layer(kind))) for kind in StepKind}


def replay(grid: Grid, steps: Sequence[SolverStep], upto: Optional[int] = None) -> TraceOverlay:
    """Overlay state after the first ``upto`` steps (all of them by default)."""

    overlay = TraceOverlay(grid)
    overlay.extend(steps if upto is None else steps[:upto])
    return overlay


def iter_prefixes(grid: Grid, steps: Iterable[SolverStep]) -> Iterator[TraceOverlay]:
    """Yield the overlay after each step; the same overlay object is updated in place."""

    overlay = TraceOverlay(grid)
    for step in steps:
        overlay.apply(step)
        yield overlay


def solution_path(steps: Iterable[SolverStep]) -> List[Position]:
    return [step.position for step in steps if step.kind is StepKind.SOLUTION]


def has_solution(steps: Iterable[SolverStep]) -> bool:
    return any(step.kind is StepKind.SOLUTION for step in steps)


def count_steps(steps: Iterable[SolverStep], kind: StepKind) -> int:
    return sum(1 for step in steps if step.kind is kind)


__all__ = [
    "SolverStep",
    "StepKind",
    "TraceOverlay",
    "count_steps",
    "has_solution",
    "iter_prefixes",
    "replay",
    "solution_path",
]
