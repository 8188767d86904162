"""
CalculatorRegistry: reuse one FieldCalculator per grid size.

The registry is an ordinary object owned by whoever runs puzzle sessions.
It is passed to collaborators explicitly; there is no process-wide
instance. Calculators are built on first request.
"""

from __future__ import annotations
import logging

from chargefield.core.calculator import FieldCalculator
from chargefield.core.grid import MagnetShape

logger = logging.getLogger(__name__)


class CalculatorRegistry:
    """Lazily creates and caches FieldCalculators keyed by grid size."""

    def __init__(self, shape: MagnetShape = MagnetShape.STANDARD):
        self.shape = MagnetShape.from_name(shape)
        self._calculators: dict[int, FieldCalculator] = {}

    def get(self, grid_size: int) -> FieldCalculator:
        """Return the calculator for `grid_size`, creating it if needed."""
        calculator = self._calculators.get(grid_size)
        if calculator is None:
            calculator = FieldCalculator(grid_size, shape=self.shape)
            self._calculators[grid_size] = calculator
            logger.debug("Registry created calculator for grid size %d", grid_size)
        return calculator

    def discard(self, grid_size: int) -> None:
        """Forget the calculator for one grid size, if any."""
        self._calculators.pop(grid_size, None)

    def clear(self) -> None:
        """Forget every calculator."""
        self._calculators.clear()

    @property
    def grid_sizes(self) -> list[int]:
        return sorted(self._calculators)

    def __contains__(self, grid_size: int) -> bool:
        return grid_size in self._calculators

    def __len__(self) -> int:
        return len(self._calculators)
