"""
PuzzleDefinition: the immutable descriptor of one puzzle.

Produced by PuzzleGenerator or written by hand, consumed by whatever runs
the play session.

Solution semantics:
- `solution` holds the hidden magnets whose field produced the charges:
  for every target cell, initial_charges == field(solution)
- The player neutralizes the board with the sign-inverted configuration,
  counter_placement() == -solution
- Cells with initial charge 0 are not targets
"""

from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from chargefield.core.grid import (
    GridPosition,
    MagnetShape,
    as_grid,
    check_magnet_values,
)


@dataclass(frozen=True, eq=False)
class PuzzleDefinition:
    """Grid size, charges, hidden solution, placeable mask and budgets."""

    grid_size: int
    initial_charges: np.ndarray  # (N, N) int, 0 = not a target
    solution: np.ndarray  # (N, N) in {-1, 0, 1}
    placeable_grid: np.ndarray | None = None  # (N, N) bool, default all True
    positive_magnets: int = 3
    negative_magnets: int = 3
    magnet_shape: MagnetShape = MagnetShape.STANDARD
    name: str = field(default="")

    def __post_init__(self):
        n = self.grid_size
        if n < 1:
            raise ValueError(f"grid_size must be >= 1, got {n}")
        if self.positive_magnets < 0 or self.negative_magnets < 0:
            raise ValueError("Magnet budgets must be non-negative")

        charges = as_grid(self.initial_charges, n, "initial_charges")
        solution = as_grid(self.solution, n, "solution")
        check_magnet_values(solution, "solution")

        if self.placeable_grid is None:
            placeable = np.ones((n, n), dtype=bool)
        else:
            placeable = np.array(self.placeable_grid, dtype=bool, copy=True)
            if placeable.shape != (n, n):
                raise ValueError(
                    f"placeable_grid must have shape ({n}, {n}), got {placeable.shape}"
                )

        for grid in (charges, solution, placeable):
            grid.setflags(write=False)

        object.__setattr__(self, "initial_charges", charges)
        object.__setattr__(self, "solution", solution)
        object.__setattr__(self, "placeable_grid", placeable)
        object.__setattr__(self, "magnet_shape", MagnetShape.from_name(self.magnet_shape))

    @property
    def target_cells(self) -> set[GridPosition]:
        """Positions with a non-zero initial charge."""
        rows, cols = np.nonzero(self.initial_charges)
        return {GridPosition(int(r), int(c)) for r, c in zip(rows, cols)}

    @property
    def target_count(self) -> int:
        return int(np.count_nonzero(self.initial_charges))

    @property
    def magnet_budget(self) -> int:
        return self.positive_magnets + self.negative_magnets

    def solution_magnet_counts(self) -> tuple[int, int]:
        """(positive, negative) magnets used by the hidden solution."""
        return int((self.solution == 1).sum()), int((self.solution == -1).sum())

    def counter_placement(self) -> np.ndarray:
        """The placement that neutralizes every target: -solution."""
        return -self.solution

    def __eq__(self, other) -> bool:
        if not isinstance(other, PuzzleDefinition):
            return NotImplemented
        return (
            self.grid_size == other.grid_size
            and self.positive_magnets == other.positive_magnets
            and self.negative_magnets == other.negative_magnets
            and self.magnet_shape == other.magnet_shape
            and np.array_equal(self.initial_charges, other.initial_charges)
            and np.array_equal(self.solution, other.solution)
            and np.array_equal(self.placeable_grid, other.placeable_grid)
        )
