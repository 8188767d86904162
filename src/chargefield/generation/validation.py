"""
Puzzle validation: is a definition actually solvable as written?

A puzzle is valid when placing its counter placement (-solution) over the
initial charges brings every target cell to exactly zero. Generated puzzles
always pass by construction; the check is a regression net for generated
and hand-authored puzzles alike.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from chargefield.core.calculator import FieldCalculator

if TYPE_CHECKING:
    from chargefield.puzzles.definition import PuzzleDefinition


def solved_field(definition: "PuzzleDefinition") -> np.ndarray:
    """Field after placing the counter placement over the initial charges."""
    calculator = FieldCalculator(definition.grid_size, shape=definition.magnet_shape)
    return calculator.calculate_all_field_values(
        definition.initial_charges,
        definition.counter_placement(),
        definition.magnet_shape,
    )


def validate_puzzle(definition: "PuzzleDefinition") -> bool:
    """True iff every target cell reads zero once the solution is applied."""
    field = solved_field(definition)
    targets = definition.initial_charges != 0
    return bool(np.all(field[targets] == 0))


def solution_within_budget(definition: "PuzzleDefinition") -> bool:
    """True iff the hidden solution uses no more magnets than budgeted."""
    positive, negative = definition.solution_magnet_counts()
    return positive <= definition.positive_magnets and negative <= definition.negative_magnets
