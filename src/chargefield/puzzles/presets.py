"""
Hand-authored puzzles.

- z_pattern: the 5×5 launch puzzle, six magnets in a Z
- tutorial: 3×3 introduction, one magnet of each sign in opposite corners
"""

from __future__ import annotations
from typing import Callable

from chargefield.core.grid import MagnetShape
from chargefield.puzzles.definition import PuzzleDefinition


def z_pattern_puzzle() -> PuzzleDefinition:
    """The 5×5 Z-pattern puzzle."""
    return PuzzleDefinition(
        grid_size=5,
        initial_charges=[
            [-4, -2, 1, 2, 2],
            [0, -4, 0, 2, 0],
            [0, 0, 4, 0, 0],
            [0, 0, 0, 0, 0],
            [1, 2, 4, 2, -1],
        ],
        solution=[
            [0, -1, 0, 1, 0],
            [-1, 0, 0, 0, 0],
            [0, 0, 1, 0, 0],
            [0, 0, 0, 0, -1],
            [0, 0, 1, 0, 0],
        ],
        positive_magnets=3,
        negative_magnets=3,
        magnet_shape=MagnetShape.STANDARD,
        name="z_pattern",
    )


def tutorial_puzzle() -> PuzzleDefinition:
    """The 3×3 tutorial: two corner charges, one magnet each."""
    return PuzzleDefinition(
        grid_size=3,
        initial_charges=[
            [-3, 0, 0],
            [0, 0, 0],
            [0, 0, 3],
        ],
        solution=[
            [-1, 0, 0],
            [0, 0, 0],
            [0, 0, 1],
        ],
        positive_magnets=1,
        negative_magnets=1,
        magnet_shape=MagnetShape.STANDARD,
        name="tutorial",
    )


PRESETS: dict[str, Callable[[], PuzzleDefinition]] = {
    "z_pattern": z_pattern_puzzle,
    "tutorial": tutorial_puzzle,
}


def get_preset(name: str) -> PuzzleDefinition:
    """
    Build a preset by name.

    Raises:
        KeyError: for unknown names
    """
    try:
        factory = PRESETS[name]
    except KeyError:
        raise KeyError(f"Unknown preset: {name}. Available: {sorted(PRESETS)}") from None
    return factory()
