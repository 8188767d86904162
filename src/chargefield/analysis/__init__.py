"""
Analysis layer: derived quantities for tuning and display.

IMPORTANT: This is NOT seen by the engine. One-way derivation only.

- calculate_difficulty_score: 0-100 heuristic over a PuzzleDefinition
- summarize_field: targets / neutralized / overshot counts for a live board
"""

from chargefield.analysis.difficulty import (
    DifficultyWeights,
    calculate_difficulty_score,
    clustering_score,
)
from chargefield.analysis.summary import FieldSummary, summarize_field

__all__ = [
    "DifficultyWeights",
    "calculate_difficulty_score",
    "clustering_score",
    "FieldSummary",
    "summarize_field",
]
