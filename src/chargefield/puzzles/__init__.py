"""
Puzzles: the artifact handed between generator and player.

- PuzzleDefinition: immutable grid size, charges, solution, budgets, shape
- Presets: hand-authored Z-pattern and tutorial puzzles
"""

from chargefield.puzzles.definition import PuzzleDefinition
from chargefield.puzzles.presets import PRESETS, get_preset, tutorial_puzzle, z_pattern_puzzle

__all__ = [
    "PuzzleDefinition",
    "PRESETS",
    "get_preset",
    "tutorial_puzzle",
    "z_pattern_puzzle",
]
