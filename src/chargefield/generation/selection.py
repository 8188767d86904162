"""
Target-cell selection strategies.

Given the raw field produced by a hidden solution, choose which cells to
expose as targets. Only cells with a non-zero field value are candidates.

- even: spread targets over rectangular regions (more local cues, easier)
- clustered: concentrate targets around 1-2 centers (overlapping fields, harder)
- mixed: a few strong cells, a few subtle cells, the rest at random

Every strategy returns exactly min(count, #candidates) distinct positions.
"""

from __future__ import annotations
from functools import partial
from typing import Callable

import numpy as np

from chargefield.core.grid import GridPosition

SelectionStrategy = Callable[[np.ndarray, int, np.random.Generator], list[GridPosition]]

# Chance of skipping a close candidate in the clustered strategy
CLUSTER_SKIP_PROBABILITY = 0.2

# Largest |value| that counts as a subtle cell in the mixed strategy
SUBTLE_MAGNITUDE = 2


def candidate_positions(field_values: np.ndarray) -> list[GridPosition]:
    """Non-zero field cells in row-major order."""
    rows, cols = np.nonzero(field_values)
    return [GridPosition(int(r), int(c)) for r, c in zip(rows, cols)]


def _shuffled(positions: list[GridPosition], rng: np.random.Generator) -> list[GridPosition]:
    return [positions[i] for i in rng.permutation(len(positions))]


def select_even(
    field_values: np.ndarray,
    count: int,
    rng: np.random.Generator,
) -> list[GridPosition]:
    """
    Spread targets across the board.

    The grid is cut into regions × regions blocks, regions = min(3, N-1).
    A first pass over shuffled candidates admits at most
    count // regions² + 1 cells per block; a second pass tops up from
    whatever is left.
    """
    grid_size = field_values.shape[0]
    candidates = _shuffled(candidate_positions(field_values), rng)
    count = min(count, len(candidates))

    regions = max(1, min(3, grid_size - 1))
    max_per_region = count // (regions * regions) + 1
    region_counts = np.zeros((regions, regions), dtype=int)

    selected: list[GridPosition] = []
    chosen: set[GridPosition] = set()

    for position in candidates:
        if len(selected) >= count:
            break
        region_row = min(position.row * regions // grid_size, regions - 1)
        region_col = min(position.col * regions // grid_size, regions - 1)
        if region_counts[region_row, region_col] < max_per_region:
            region_counts[region_row, region_col] += 1
            selected.append(position)
            chosen.add(position)

    for position in candidates:
        if len(selected) >= count:
            break
        if position not in chosen:
            selected.append(position)
            chosen.add(position)

    return selected


def select_clustered(
    field_values: np.ndarray,
    count: int,
    rng: np.random.Generator,
    skip_probability: float = CLUSTER_SKIP_PROBABILITY,
) -> list[GridPosition]:
    """
    Concentrate targets around one or two random centers.

    Candidates are ranked by Manhattan distance to the nearest center. The
    closest are taken first, but each is skipped with `skip_probability`
    once half the quota is met, letting farther cells in for variety.
    Skipped cells are reconsidered in a final fill pass.
    """
    grid_size = field_values.shape[0]
    candidates = candidate_positions(field_values)
    count = min(count, len(candidates))

    cluster_count = 1 + (1 if count > 10 else 0)
    centers = [
        GridPosition(int(rng.integers(grid_size)), int(rng.integers(grid_size)))
        for _ in range(cluster_count)
    ]

    ranked = sorted(
        candidates,
        key=lambda position: min(position.distance(center) for center in centers),
    )

    selected: list[GridPosition] = []
    chosen: set[GridPosition] = set()

    for position in ranked:
        if len(selected) >= count:
            break
        if rng.random() > skip_probability or len(selected) < count // 2:
            selected.append(position)
            chosen.add(position)

    for position in ranked:
        if len(selected) >= count:
            break
        if position not in chosen:
            selected.append(position)
            chosen.add(position)

    return selected


def select_mixed(
    field_values: np.ndarray,
    count: int,
    rng: np.random.Generator,
) -> list[GridPosition]:
    """
    Blend decisive and subtle targets.

    1. up to min(count // 3, 3) cells with the largest |value|
    2. up to min(count // 4, 2) cells with |value| <= 2, smallest first
    3. the rest drawn at random from what remains
    """
    candidates = candidate_positions(field_values)
    count = min(count, len(candidates))

    def magnitude(position: GridPosition) -> int:
        return abs(int(field_values[position.index]))

    selected: list[GridPosition] = []
    chosen: set[GridPosition] = set()

    def take(position: GridPosition):
        selected.append(position)
        chosen.add(position)

    strong_count = min(count // 3, 3)
    for position in sorted(candidates, key=magnitude, reverse=True)[:strong_count]:
        take(position)

    subtle_count = min(count // 4, 2)
    subtle = [
        position
        for position in sorted(candidates, key=magnitude)
        if position not in chosen and magnitude(position) <= SUBTLE_MAGNITUDE
    ]
    for position in subtle[:subtle_count]:
        if len(selected) >= count:
            break
        take(position)

    remaining = _shuffled([p for p in candidates if p not in chosen], rng)
    for position in remaining:
        if len(selected) >= count:
            break
        take(position)

    return selected


STRATEGIES: dict[str, SelectionStrategy] = {
    "even": select_even,
    "clustered": select_clustered,
    "mixed": select_mixed,
}


def get_strategy(
    name: str,
    skip_probability: float = CLUSTER_SKIP_PROBABILITY,
) -> SelectionStrategy:
    """
    Look up a strategy by name, raising ValueError if unknown.

    Strategy options are bound here so every returned strategy is called as
    `select(field_values, count, rng)`.
    """
    key = name.lower()
    if key not in STRATEGIES:
        raise ValueError(f"Unknown selection strategy: {name}")
    if key == "clustered":
        return partial(select_clustered, skip_probability=skip_probability)
    return STRATEGIES[key]
