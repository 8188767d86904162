"""
Influence patterns: how far and how strongly a magnet radiates.

A magnet affects its own cell and cells up to two steps away along its
shape's rays:

    distance 0 → 3 (own cell, always the strongest)
    distance 1 → 2
    distance 2 → 1
    beyond     → 0

STANDARD magnets follow the source's row and column, DIAGONAL magnets the
four diagonal rays. Patterns are pure functions of (source, shape, size)
and never depend on what is placed on the board.
"""

from __future__ import annotations

import numpy as np

from chargefield.core.grid import GRID_DTYPE, GridPosition, MagnetShape


OWN_CELL_STRENGTH = 3
DISTANCE_1_STRENGTH = 2
DISTANCE_2_STRENGTH = 1
MAX_INFLUENCE_DISTANCE = 2

# Unit step vectors (drow, dcol) for each shape's rays
SHAPE_DIRECTIONS = {
    MagnetShape.STANDARD: ((-1, 0), (1, 0), (0, -1), (0, 1)),
    MagnetShape.DIAGONAL: ((-1, -1), (-1, 1), (1, -1), (1, 1)),
}


def influence_strength(distance: int) -> int:
    """Strength tier for a step distance along a ray."""
    if distance == 0:
        return OWN_CELL_STRENGTH
    if distance == 1:
        return DISTANCE_1_STRENGTH
    if distance == 2:
        return DISTANCE_2_STRENGTH
    return 0


def compute_influence_pattern(
    source: GridPosition,
    shape: MagnetShape,
    grid_size: int,
) -> dict[GridPosition, int]:
    """
    Compute the influence pattern of a magnet at `source`.

    Args:
        source: Magnet position
        shape: Which rays the magnet radiates along
        grid_size: Board size N; targets are clipped to [0, N)

    Returns:
        Mapping target position → strength. Always contains the source.
    """
    pattern = {source: OWN_CELL_STRENGTH}
    for drow, dcol in SHAPE_DIRECTIONS[shape]:
        for distance in range(1, MAX_INFLUENCE_DISTANCE + 1):
            target = source.offset(drow * distance, dcol * distance)
            if target.in_bounds(grid_size):
                pattern[target] = influence_strength(distance)
    return pattern


def influence_kernel(shape: MagnetShape) -> np.ndarray:
    """
    The pattern of a magnet in the middle of an unbounded board.

    Returns a (5, 5) integer array centred on the source. The kernel is
    symmetric under 180° rotation, so convolving a placement grid with it
    (zero padding) equals summing the clipped patterns of every magnet.
    """
    size = 2 * MAX_INFLUENCE_DISTANCE + 1
    center = GridPosition(MAX_INFLUENCE_DISTANCE, MAX_INFLUENCE_DISTANCE)
    kernel = np.zeros((size, size), dtype=GRID_DTYPE)
    for target, strength in compute_influence_pattern(center, shape, size).items():
        kernel[target.index] = strength
    return kernel


def pattern_to_grid(pattern: dict[GridPosition, int], grid_size: int) -> np.ndarray:
    """Dense (N, N) view of a pattern, zero outside it."""
    grid = np.zeros((grid_size, grid_size), dtype=GRID_DTYPE)
    for target, strength in pattern.items():
        grid[target.index] = strength
    return grid
