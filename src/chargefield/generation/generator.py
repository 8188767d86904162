"""
PuzzleGenerator: build solvable puzzles backwards from a hidden solution.

1. Scatter the budgeted magnets over distinct random cells (the solution)
2. Compute the field those magnets produce on an empty board
3. Expose a difficulty-dependent subset of non-zero cells as targets
4. Package everything as a PuzzleDefinition

Because the targets are read straight off the solution's own field, the
counter placement (-solution) always neutralizes them.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from chargefield.analysis.difficulty import DifficultyWeights, calculate_difficulty_score
from chargefield.core.calculator import FieldCalculator
from chargefield.core.grid import MagnetShape, zeros_grid
from chargefield.generation.selection import CLUSTER_SKIP_PROBABILITY, get_strategy
from chargefield.generation.validation import validate_puzzle
from chargefield.puzzles.definition import PuzzleDefinition

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """Difficulty labels accepted by the generator."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @staticmethod
    def from_name(name: "str | Difficulty") -> "Difficulty":
        if isinstance(name, Difficulty):
            return name
        try:
            return Difficulty(str(name).lower())
        except ValueError as exc:
            raise ValueError(f"Unknown difficulty: {name}") from exc


# Inclusive target-count ranges per grid size. Harder puzzles expose fewer cells.
DEFAULT_TARGET_RANGES = {
    4: {
        Difficulty.EASY: (8, 10),
        Difficulty.MEDIUM: (7, 9),
        Difficulty.HARD: (6, 8),
    },
    5: {
        Difficulty.EASY: (12, 15),
        Difficulty.MEDIUM: (9, 12),
        Difficulty.HARD: (8, 10),
    },
}

# Grid size whose ranges are scaled for sizes without their own table
REFERENCE_GRID_SIZE = 5

DEFAULT_STRATEGIES = {
    Difficulty.EASY: "even",
    Difficulty.MEDIUM: "mixed",
    Difficulty.HARD: "clustered",
}


@dataclass
class GeneratorConfig:
    """Configuration for puzzle generation."""

    target_ranges: dict = field(default_factory=lambda: {
        size: dict(ranges) for size, ranges in DEFAULT_TARGET_RANGES.items()
    })
    strategies: dict = field(default_factory=lambda: dict(DEFAULT_STRATEGIES))
    cluster_skip_probability: float = CLUSTER_SKIP_PROBABILITY
    validate: bool = True  # Re-check every generated puzzle

    def target_range(self, grid_size: int, difficulty: Difficulty) -> tuple[int, int]:
        """
        Inclusive (low, high) target count for a size and difficulty.

        Sizes without a table scale the reference table by cell count.
        """
        if grid_size in self.target_ranges:
            return self.target_ranges[grid_size][difficulty]

        low, high = self.target_ranges[REFERENCE_GRID_SIZE][difficulty]
        scale = grid_size * grid_size / (REFERENCE_GRID_SIZE * REFERENCE_GRID_SIZE)
        low = max(1, round(low * scale))
        high = max(low, round(high * scale))
        return low, high


class PuzzleGenerator:
    """
    Procedural puzzle generator.

    Randomness comes from a numpy Generator; pass `seed` (or your own
    `rng`) for reproducible puzzles.
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
    ):
        self.config = config or GeneratorConfig()
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def generate(
        self,
        grid_size: int = 5,
        difficulty: Difficulty | str = Difficulty.MEDIUM,
        positive_magnets: int = 3,
        negative_magnets: int = 3,
        shape: MagnetShape | str = MagnetShape.STANDARD,
        strategy: str | None = None,
    ) -> PuzzleDefinition:
        """
        Generate a puzzle.

        Args:
            grid_size: Board size N
            difficulty: "easy", "medium" or "hard"
            positive_magnets, negative_magnets: Magnet budgets
            shape: Influence rule for every magnet
            strategy: Target selection override ("even", "clustered", "mixed")

        Returns:
            A PuzzleDefinition whose counter placement neutralizes all targets

        Raises:
            ValueError: on an unknown label or a budget that cannot fit the grid
        """
        difficulty = Difficulty.from_name(difficulty)
        shape = MagnetShape.from_name(shape)
        _check_budget(grid_size, positive_magnets, negative_magnets)
        select = get_strategy(
            strategy or self.config.strategies[difficulty],
            skip_probability=self.config.cluster_skip_probability,
        )

        solution = self._place_solution(grid_size, positive_magnets, negative_magnets)

        calculator = FieldCalculator(grid_size, shape=shape)
        field_values = calculator.calculate_all_field_values(
            zeros_grid(grid_size), solution, shape
        )

        low, high = self.config.target_range(grid_size, difficulty)
        target_count = int(self.rng.integers(low, high + 1))
        available = int(np.count_nonzero(field_values))
        if available < target_count:
            logger.warning(
                "Only %d non-zero cells for %d requested targets on %dx%d grid",
                available, target_count, grid_size, grid_size,
            )

        initial_charges = zeros_grid(grid_size)
        for position in select(field_values, target_count, self.rng):
            initial_charges[position.index] = field_values[position.index]

        puzzle = PuzzleDefinition(
            grid_size=grid_size,
            initial_charges=initial_charges,
            solution=solution,
            placeable_grid=np.ones((grid_size, grid_size), dtype=bool),
            positive_magnets=positive_magnets,
            negative_magnets=negative_magnets,
            magnet_shape=shape,
            name=f"random_{difficulty.value}_{grid_size}x{grid_size}",
        )

        if self.config.validate and not validate_puzzle(puzzle):
            # Targets are read off the solution's own field, so this must hold
            raise RuntimeError("Generated puzzle failed validation")

        logger.debug(
            "Generated %dx%d %s puzzle (%s, %s): %d targets",
            grid_size, grid_size, difficulty.value, shape.value,
            strategy or self.config.strategies[difficulty], puzzle.target_count,
        )
        return puzzle

    def _place_solution(self, grid_size: int, positive: int, negative: int) -> np.ndarray:
        """Sample distinct cells: the first `positive` get +1, the next `negative` get -1."""
        order = self.rng.permutation(grid_size * grid_size)
        flat = np.zeros(grid_size * grid_size, dtype=np.int64)
        flat[order[:positive]] = 1
        flat[order[positive:positive + negative]] = -1
        return flat.reshape(grid_size, grid_size)

    @staticmethod
    def validate_puzzle(definition: PuzzleDefinition) -> bool:
        return validate_puzzle(definition)

    @staticmethod
    def calculate_difficulty_score(
        definition: PuzzleDefinition,
        weights: DifficultyWeights | None = None,
    ) -> float:
        return calculate_difficulty_score(definition, weights)


def _check_budget(grid_size: int, positive: int, negative: int):
    if grid_size < 1:
        raise ValueError(f"grid_size must be >= 1, got {grid_size}")
    if positive < 0 or negative < 0:
        raise ValueError("Magnet budgets must be non-negative")
    if positive + negative > grid_size * grid_size:
        raise ValueError(
            f"{positive + negative} magnets do not fit on a "
            f"{grid_size}x{grid_size} grid"
        )


def generate_puzzle(
    grid_size: int = 5,
    difficulty: Difficulty | str = Difficulty.MEDIUM,
    positive_magnets: int = 3,
    negative_magnets: int = 3,
    shape: MagnetShape | str = MagnetShape.STANDARD,
    seed: int | None = None,
) -> PuzzleDefinition:
    """Convenience wrapper: one puzzle from a fresh generator."""
    return PuzzleGenerator(seed=seed).generate(
        grid_size=grid_size,
        difficulty=difficulty,
        positive_magnets=positive_magnets,
        negative_magnets=negative_magnets,
        shape=shape,
    )
