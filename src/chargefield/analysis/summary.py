"""
FieldSummary: board-level progress derived from a live calculator.

Counts targets, neutralized cells and overshot cells, and derives the
progress and efficiency ratios a play screen shows.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from chargefield.core.grid import as_grid

if TYPE_CHECKING:
    from chargefield.core.calculator import FieldCalculator


# Each overshot cell costs half a neutralized cell in the efficiency ratio
OVERSHOOT_PENALTY = 0.5


@dataclass(frozen=True)
class FieldSummary:
    """Snapshot of how far a board is from solved."""

    target_cells: int
    neutralized_cells: int
    overshot_cells: int

    @property
    def is_solved(self) -> bool:
        return self.neutralized_cells == self.target_cells

    @property
    def progress(self) -> float:
        """Neutralized share of targets; 0 when there are no targets."""
        if self.target_cells == 0:
            return 0.0
        return self.neutralized_cells / self.target_cells

    @property
    def efficiency(self) -> float:
        """Progress with a penalty for overshooting, floored at 0."""
        if self.target_cells == 0:
            return 0.0
        score = self.neutralized_cells - OVERSHOOT_PENALTY * self.overshot_cells
        return max(0.0, score / self.target_cells)


def summarize_field(calculator: "FieldCalculator", initial_charges) -> FieldSummary:
    """Summarize the calculator's live field against the puzzle's charges."""
    charges = as_grid(initial_charges, calculator.grid_size, "initial_charges")
    field = calculator.field_values
    targets = charges != 0
    return FieldSummary(
        target_cells=int(targets.sum()),
        neutralized_cells=int((targets & (field == 0)).sum()),
        overshot_cells=len(calculator.get_overshot_cells(charges)),
    )
