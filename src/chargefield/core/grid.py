"""
Grid primitives: positions, magnet shapes, and grid helpers.

Grids are square numpy arrays of shape (N, N). Cell (row, col) lives at
flat index row * N + col of the row-major buffer.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

import numpy as np


GRID_DTYPE = np.int64

# Valid magnet values: negative, empty, positive
MAGNET_VALUES = (-1, 0, 1)


class MagnetShape(Enum):
    """Which influence rule a magnet uses."""

    STANDARD = "standard"  # Cross: source row and column
    DIAGONAL = "diagonal"  # X: the four diagonal rays

    @staticmethod
    def from_name(name: "str | MagnetShape") -> "MagnetShape":
        if isinstance(name, MagnetShape):
            return name
        try:
            return MagnetShape(str(name).lower())
        except ValueError as exc:
            raise ValueError(f"Unknown magnet shape: {name}") from exc


@dataclass(frozen=True)
class GridPosition:
    """Immutable (row, col) coordinate on a puzzle grid."""

    row: int
    col: int

    def distance(self, other: GridPosition) -> int:
        """Manhattan distance to another position."""
        return abs(self.row - other.row) + abs(self.col - other.col)

    def is_in_same_row_or_column(self, other: GridPosition) -> bool:
        return self.row == other.row or self.col == other.col

    def is_on_same_diagonal(self, other: GridPosition) -> bool:
        return abs(self.row - other.row) == abs(self.col - other.col)

    def in_bounds(self, grid_size: int) -> bool:
        return 0 <= self.row < grid_size and 0 <= self.col < grid_size

    def offset(self, drow: int, dcol: int) -> GridPosition:
        return GridPosition(self.row + drow, self.col + dcol)

    @property
    def index(self) -> tuple[int, int]:
        """Tuple usable to index a numpy grid."""
        return self.row, self.col


def iter_positions(grid_size: int) -> Iterator[GridPosition]:
    """Iterate over all positions in row-major order."""
    for row in range(grid_size):
        for col in range(grid_size):
            yield GridPosition(row, col)


def zeros_grid(grid_size: int) -> np.ndarray:
    """All-zero integer grid."""
    return np.zeros((grid_size, grid_size), dtype=GRID_DTYPE)


def as_grid(values, grid_size: int, name: str = "grid") -> np.ndarray:
    """
    Copy list-of-lists or array input into an owned (N, N) integer grid.

    Raises:
        ValueError: if the input does not have shape (grid_size, grid_size)
            or holds non-integer values
    """
    raw = np.asarray(values)
    if raw.size and not (np.issubdtype(raw.dtype, np.integer) or raw.dtype == np.bool_):
        raise ValueError(f"{name} must hold integers, got dtype {raw.dtype}")
    grid = np.array(raw, dtype=GRID_DTYPE, copy=True)
    if grid.shape != (grid_size, grid_size):
        raise ValueError(
            f"{name} must have shape ({grid_size}, {grid_size}), got {grid.shape}"
        )
    return grid


def check_magnet_values(grid: np.ndarray, name: str = "magnet grid") -> None:
    """Raise ValueError if any cell is not one of -1, 0, 1."""
    if not np.isin(grid, MAGNET_VALUES).all():
        raise ValueError(f"{name} may only contain -1, 0 or 1")


def check_position(position: GridPosition, grid_size: int) -> None:
    """
    Fail fast on out-of-range positions.

    Raises:
        IndexError: if the position is outside [0, N) x [0, N)
    """
    if not position.in_bounds(grid_size):
        raise IndexError(
            f"Position ({position.row}, {position.col}) is outside "
            f"the {grid_size}x{grid_size} grid"
        )
