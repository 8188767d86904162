"""
FieldCalculator: the live field of one puzzle board.

The calculator owns two grids:
- field_values: initial charges plus every placed magnet's pattern × sign
- magnet_placements: -1 / 0 / +1 per cell

and a cache of influence patterns keyed by (position, shape). The STANDARD
patterns are built up front; other shapes are memoized on first use.

INVARIANT (after every operation, exact integer arithmetic):
    field_values == initial_charges + Σ pattern(p, shape) × placement(p)

Positions outside the board are a programming error and raise IndexError.
"""

from __future__ import annotations
import logging
from typing import Iterable

import numpy as np
from scipy.ndimage import convolve

from chargefield.core.grid import (
    GridPosition,
    MagnetShape,
    MAGNET_VALUES,
    as_grid,
    check_magnet_values,
    check_position,
    iter_positions,
    zeros_grid,
)
from chargefield.core.influence import compute_influence_pattern, influence_kernel

logger = logging.getLogger(__name__)


# Progress reported for a cell whose charge crossed zero. Deliberately
# outside [0, 1]: callers treat it as a dedicated overshoot signal.
OVERSHOOT_PROGRESS = 1.2


class FieldCalculator:
    """
    Computes and incrementally maintains the field for an N×N board.

    One calculator serves one active puzzle at a time. It is not
    thread-safe: mutating calls must be serialized by the owner.
    """

    def __init__(self, grid_size: int, shape: MagnetShape = MagnetShape.STANDARD):
        if grid_size < 1:
            raise ValueError(f"grid_size must be >= 1, got {grid_size}")
        self._grid_size = grid_size
        self._shape = MagnetShape.from_name(shape)

        self._field_values = zeros_grid(grid_size)
        self._magnet_placements = zeros_grid(grid_size)
        self._influence_cache: dict[tuple[GridPosition, MagnetShape], dict[GridPosition, int]] = {}

        self._precalculate_influence_patterns(MagnetShape.STANDARD)
        logger.debug("FieldCalculator created for %dx%d grid", grid_size, grid_size)

    # ─────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────

    @property
    def grid_size(self) -> int:
        return self._grid_size

    @property
    def shape(self) -> MagnetShape:
        """Default shape for operations that don't name one."""
        return self._shape

    @property
    def field_values(self) -> np.ndarray:
        """Copy of the current field grid."""
        return self._field_values.copy()

    @property
    def magnet_placements(self) -> np.ndarray:
        """Copy of the current placement grid."""
        return self._magnet_placements.copy()

    # ─────────────────────────────────────────────────────────────────
    # Influence patterns
    # ─────────────────────────────────────────────────────────────────

    def _precalculate_influence_patterns(self, shape: MagnetShape):
        for position in iter_positions(self._grid_size):
            self._cached_pattern(position, shape)

    def _cached_pattern(self, position: GridPosition, shape: MagnetShape) -> dict[GridPosition, int]:
        key = (position, shape)
        pattern = self._influence_cache.get(key)
        if pattern is None:
            pattern = compute_influence_pattern(position, shape, self._grid_size)
            self._influence_cache[key] = pattern
        return pattern

    def _resolve_shape(self, shape: MagnetShape | str | None) -> MagnetShape:
        if shape is None:
            return self._shape
        return MagnetShape.from_name(shape)

    def get_influence_pattern(
        self,
        position: GridPosition,
        shape: MagnetShape | None = None,
    ) -> dict[GridPosition, int]:
        """Pattern of a magnet at `position` (copy, safe to mutate)."""
        check_position(position, self._grid_size)
        return dict(self._cached_pattern(position, self._resolve_shape(shape)))

    def get_affected_positions(
        self,
        position: GridPosition,
        shape: MagnetShape | None = None,
    ) -> list[GridPosition]:
        """All positions a magnet at `position` would influence."""
        return list(self.get_influence_pattern(position, shape))

    def get_influence_area(
        self,
        position: GridPosition,
        shape: MagnetShape | None = None,
    ) -> np.ndarray:
        """Boolean (N, N) mask of the cells a magnet at `position` reaches."""
        mask = np.zeros((self._grid_size, self._grid_size), dtype=bool)
        for target in self.get_influence_pattern(position, shape):
            mask[target.index] = True
        return mask

    def get_influence_value(
        self,
        source: GridPosition,
        target: GridPosition,
        magnet_value: int,
    ) -> int:
        """
        Signed influence a magnet at `source` would exert on `target`.

        Uses the calculator's default shape. Returns 0 when `target` lies
        outside the source's pattern.
        """
        check_position(source, self._grid_size)
        check_position(target, self._grid_size)
        strength = self._cached_pattern(source, self._shape).get(target, 0)
        return strength * magnet_value

    # ─────────────────────────────────────────────────────────────────
    # Field calculation
    # ─────────────────────────────────────────────────────────────────

    def calculate_all_field_values(
        self,
        initial_charges,
        magnet_placements,
        shape: MagnetShape | None = None,
    ) -> np.ndarray:
        """
        Recompute the whole field from scratch and store it.

        The sum of every magnet's clipped pattern is a 2D convolution of the
        placement grid with the shape's kernel under zero padding.

        Args:
            initial_charges: (N, N) integer charges
            magnet_placements: (N, N) grid of -1 / 0 / +1
            shape: Pattern rule for every placed magnet (default: calculator's)

        Returns:
            Copy of the new field grid
        """
        n = self._grid_size
        charges = as_grid(initial_charges, n, "initial_charges")
        placements = as_grid(magnet_placements, n, "magnet_placements")
        check_magnet_values(placements, "magnet_placements")
        kernel = influence_kernel(self._resolve_shape(shape))

        influence = convolve(placements, kernel, mode="constant", cval=0)

        self._magnet_placements = placements
        self._field_values = charges + influence
        return self._field_values.copy()

    def update_field_value(
        self,
        position: GridPosition,
        old_magnet_value: int,
        new_magnet_value: int,
        initial_charges=None,
        shape: MagnetShape | None = None,
    ) -> np.ndarray:
        """
        Swap the magnet at `position` without recomputing the whole board.

        Removes the old magnet's contribution, records the new placement and
        adds the new magnet's contribution. The result equals
        calculate_all_field_values over the updated placement grid.

        `initial_charges` is accepted for call-site parity with the full
        recompute; the incremental path never needs it.

        Returns:
            Copy of the updated field grid

        Raises:
            ValueError: if `old_magnet_value` is not the magnet currently
                recorded at `position`
        """
        check_position(position, self._grid_size)
        _check_magnet_value(old_magnet_value)
        _check_magnet_value(new_magnet_value)
        resolved = self._resolve_shape(shape)

        recorded = int(self._magnet_placements[position.index])
        if old_magnet_value != recorded:
            raise ValueError(
                f"Stale magnet value at {position}: expected {recorded}, "
                f"got {old_magnet_value}"
            )

        if old_magnet_value != 0:
            self._apply_pattern(self._field_values, position, -old_magnet_value, resolved)

        self._magnet_placements[position.index] = new_magnet_value

        if new_magnet_value != 0:
            self._apply_pattern(self._field_values, position, new_magnet_value, resolved)

        return self._field_values.copy()

    def preview_field_with_magnet(
        self,
        position: GridPosition,
        magnet_value: int,
        shape: MagnetShape | None = None,
    ) -> np.ndarray:
        """Field as it would be with one more magnet at `position`. No side effects."""
        check_position(position, self._grid_size)
        _check_magnet_value(magnet_value)
        preview = self._field_values.copy()
        self._apply_pattern(preview, position, magnet_value, self._resolve_shape(shape))
        return preview

    def _apply_pattern(
        self,
        field: np.ndarray,
        position: GridPosition,
        sign: int,
        shape: MagnetShape,
    ):
        for target, strength in self._cached_pattern(position, shape).items():
            field[target.index] += strength * sign

    # ─────────────────────────────────────────────────────────────────
    # Analysis
    # ─────────────────────────────────────────────────────────────────

    def are_all_targets_neutralized(self, target_cells: Iterable[GridPosition]) -> bool:
        """True iff every given cell currently reads exactly zero."""
        for position in target_cells:
            check_position(position, self._grid_size)
            if self._field_values[position.index] != 0:
                return False
        return True

    def get_overshot_cells(self, initial_charges) -> list[GridPosition]:
        """
        Target cells whose field crossed zero.

        A cell is overshot when its initial charge is non-zero and the live
        value has the opposite sign. Reaching exactly zero is not overshoot.
        """
        charges = as_grid(initial_charges, self._grid_size, "initial_charges")
        flipped = (charges * self._field_values) < 0
        rows, cols = np.nonzero(flipped)
        return [GridPosition(int(r), int(c)) for r, c in zip(rows, cols)]

    def get_neutralization_progress(self, position: GridPosition, initial_charge: int) -> float:
        """
        How close a target cell is to zero.

        Returns:
            0.0 for a non-target cell, 1.0 when exactly neutralized,
            OVERSHOOT_PROGRESS when the sign flipped, otherwise
            1 - |current| / |initial| clamped to [0, 1]
        """
        check_position(position, self._grid_size)
        current = int(self._field_values[position.index])

        if initial_charge == 0:
            return 0.0
        if current == 0:
            return 1.0
        if (initial_charge > 0) != (current > 0):
            return OVERSHOOT_PROGRESS

        progress = 1.0 - abs(current) / abs(initial_charge)
        return max(0.0, min(1.0, progress))

    # ─────────────────────────────────────────────────────────────────
    # Maintenance
    # ─────────────────────────────────────────────────────────────────

    def clear_cache(self):
        """Drop cached patterns and reset both grids to zero."""
        self._influence_cache.clear()
        self._field_values = zeros_grid(self._grid_size)
        self._magnet_placements = zeros_grid(self._grid_size)
        logger.debug("FieldCalculator %dx%d cleared", self._grid_size, self._grid_size)


def _check_magnet_value(value: int):
    if value not in MAGNET_VALUES:
        raise ValueError(f"Magnet value must be -1, 0 or 1, got {value}")
