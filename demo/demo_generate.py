#!/usr/bin/env python3
"""
Demo: generate, validate and score puzzles for every difficulty.

For each (grid size, difficulty, shape) combination:
- generate a puzzle from a seeded generator
- check that its counter placement neutralizes every target
- print the board, the hidden solution and the difficulty score

Then replays the Z-pattern puzzle move by move, showing how the
incremental field update tracks progress toward a solved board.
"""

import logging
from itertools import product

import numpy as np

from chargefield.analysis import calculate_difficulty_score, summarize_field
from chargefield.core import CalculatorRegistry, GridPosition, MagnetShape
from chargefield.generation import PuzzleGenerator, validate_puzzle
from chargefield.puzzles import z_pattern_puzzle


def format_grid(grid: np.ndarray, blank_zero: bool = False) -> str:
    """Render an integer grid as aligned text rows."""
    rows = []
    for row in grid:
        cells = ["  ." if blank_zero and v == 0 else f"{int(v):3d}" for v in row]
        rows.append(" ".join(cells))
    return "\n".join(rows)


def run_generation(seed: int = 2024):
    generator = PuzzleGenerator(seed=seed)

    for grid_size, difficulty, shape in product(
        [4, 5], ["easy", "medium", "hard"], [MagnetShape.STANDARD, MagnetShape.DIAGONAL]
    ):
        puzzle = generator.generate(grid_size, difficulty, 3, 3, shape)
        score = calculate_difficulty_score(puzzle)

        print("=" * 60)
        print(f"{grid_size}x{grid_size}  {difficulty:<6}  {shape.value:<8}  "
              f"targets={puzzle.target_count:2d}  score={score:5.1f}  "
              f"valid={validate_puzzle(puzzle)}")
        print("Charges:")
        print(format_grid(puzzle.initial_charges, blank_zero=True))
        print("Hidden solution:")
        print(format_grid(puzzle.solution, blank_zero=True))


def replay_z_pattern():
    puzzle = z_pattern_puzzle()
    registry = CalculatorRegistry()
    calc = registry.get(puzzle.grid_size)
    calc.calculate_all_field_values(
        puzzle.initial_charges, np.zeros_like(puzzle.solution), puzzle.magnet_shape
    )

    print("=" * 60)
    print("Replaying the Z-pattern puzzle")
    counter = puzzle.counter_placement()
    rows, cols = np.nonzero(counter)
    for row, col in zip(rows, cols):
        position = GridPosition(int(row), int(col))
        calc.update_field_value(position, 0, int(counter[row, col]), puzzle.initial_charges)
        summary = summarize_field(calc, puzzle.initial_charges)
        print(f"  place {int(counter[row, col]):+d} at ({row}, {col}): "
              f"{summary.neutralized_cells}/{summary.target_cells} neutralized, "
              f"{summary.overshot_cells} overshot, progress {summary.progress:.0%}")

    print("Solved:", calc.are_all_targets_neutralized(puzzle.target_cells))


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    run_generation()
    replay_z_pattern()


if __name__ == "__main__":
    main()
