"""
Core engine primitives.

This layer knows NOTHING about puzzles, difficulty, or generation.
It only knows:
- Grid positions and magnet shapes
- Influence patterns (the fixed falloff law)
- The live field: full recompute, incremental update, preview
- Per-cell analysis: neutralized, overshot, progress
"""

from chargefield.core.grid import GridPosition, MagnetShape, iter_positions
from chargefield.core.influence import (
    compute_influence_pattern,
    influence_kernel,
    influence_strength,
)
from chargefield.core.calculator import FieldCalculator, OVERSHOOT_PROGRESS
from chargefield.core.registry import CalculatorRegistry

__all__ = [
    "GridPosition",
    "MagnetShape",
    "iter_positions",
    "compute_influence_pattern",
    "influence_kernel",
    "influence_strength",
    "FieldCalculator",
    "OVERSHOOT_PROGRESS",
    "CalculatorRegistry",
]
