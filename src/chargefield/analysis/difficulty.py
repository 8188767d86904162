"""
Difficulty score: a 0-100 heuristic for tuning the generator.

Four weighted terms:
- sparsity: share of cells that are NOT targets (fewer clues, harder)
- magnitude: mean |target charge|, saturating at `magnitude_scale`
- clustering: 1 - mean pairwise Manhattan distance / max distance
- budget use: share of the magnet budget the solution actually needs

Diagnostic only; gameplay never reads it.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from scipy.spatial.distance import pdist

if TYPE_CHECKING:
    from chargefield.puzzles.definition import PuzzleDefinition


@dataclass
class DifficultyWeights:
    """Weights of the four terms. The defaults sum to 100."""

    sparsity: float = 30.0
    magnitude: float = 30.0
    clustering: float = 20.0
    budget_use: float = 20.0
    magnitude_scale: float = 6.0  # Mean |charge| that earns the full magnitude weight

    @property
    def total(self) -> float:
        return self.sparsity + self.magnitude + self.clustering + self.budget_use


def clustering_score(definition: "PuzzleDefinition") -> float:
    """
    How tightly packed the targets are, in [0, 1].

    0 when there are fewer than two targets or the board is a single cell.
    """
    rows, cols = np.nonzero(definition.initial_charges)
    max_distance = 2 * (definition.grid_size - 1)
    if len(rows) < 2 or max_distance == 0:
        return 0.0
    points = np.column_stack([rows, cols])
    mean_distance = float(pdist(points, metric="cityblock").mean())
    return 1.0 - mean_distance / max_distance


def calculate_difficulty_score(
    definition: "PuzzleDefinition",
    weights: DifficultyWeights | None = None,
) -> float:
    """
    Score a puzzle's difficulty.

    Returns:
        Weighted score clamped to [0, 100]
    """
    if weights is None:
        weights = DifficultyWeights()

    charges = definition.initial_charges
    cell_count = definition.grid_size * definition.grid_size
    targets = charges[charges != 0]

    sparsity = 1.0 - targets.size / cell_count

    if targets.size:
        mean_magnitude = float(np.abs(targets).mean())
        magnitude = min(mean_magnitude / weights.magnitude_scale, 1.0)
    else:
        magnitude = 0.0

    budget = definition.magnet_budget
    used = int(np.count_nonzero(definition.solution))
    budget_use = min(used / budget, 1.0) if budget else 0.0

    score = (
        weights.sparsity * sparsity
        + weights.magnitude * magnitude
        + weights.clustering * clustering_score(definition)
        + weights.budget_use * budget_use
    )
    return float(np.clip(score, 0.0, 100.0))
