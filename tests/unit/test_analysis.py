"""Unit tests for analysis module."""

import numpy as np
import pytest

from chargefield.analysis import (
    DifficultyWeights,
    FieldSummary,
    calculate_difficulty_score,
    clustering_score,
    summarize_field,
)
from chargefield.core.calculator import FieldCalculator
from chargefield.core.grid import GridPosition
from chargefield.puzzles import PuzzleDefinition


def _puzzle(charges, solution=None, positive=3, negative=3):
    n = len(charges)
    if solution is None:
        solution = np.zeros((n, n), dtype=np.int64)
    return PuzzleDefinition(
        grid_size=n,
        initial_charges=charges,
        solution=solution,
        positive_magnets=positive,
        negative_magnets=negative,
    )


class TestClusteringScore:
    """Tests for clustering_score."""

    def test_adjacent_pair(self):
        charges = np.zeros((5, 5), dtype=np.int64)
        charges[2, 2] = 1
        charges[2, 3] = 1
        # Mean distance 1 over a maximum of 8
        assert clustering_score(_puzzle(charges)) == pytest.approx(0.875)

    def test_opposite_corners(self):
        charges = np.zeros((5, 5), dtype=np.int64)
        charges[0, 0] = 1
        charges[4, 4] = 1
        assert clustering_score(_puzzle(charges)) == pytest.approx(0.0)

    def test_fewer_than_two_targets(self):
        charges = np.zeros((5, 5), dtype=np.int64)
        charges[1, 1] = 4
        assert clustering_score(_puzzle(charges)) == 0.0


class TestDifficultyScore:
    """Tests for calculate_difficulty_score."""

    def test_z_pattern_without_clustering_term(self, z_pattern):
        weights = DifficultyWeights(clustering=0.0)
        score = calculate_difficulty_score(z_pattern, weights)

        # 13 targets, |charge| sum 31, all 6 budgeted magnets used
        expected = 30 * 12 / 25 + 30 * (31 / 13) / 6 + 20
        assert score == pytest.approx(expected)

    def test_z_pattern_in_range(self, z_pattern):
        assert 0.0 <= calculate_difficulty_score(z_pattern) <= 100.0

    def test_empty_puzzle(self):
        score = calculate_difficulty_score(_puzzle(np.zeros((4, 4), dtype=np.int64)))
        # Only sparsity contributes
        assert score == pytest.approx(30.0)

    def test_magnitude_saturates(self):
        charges = np.zeros((3, 3), dtype=np.int64)
        charges[1, 1] = 50
        weights = DifficultyWeights(sparsity=0.0, clustering=0.0, budget_use=0.0)
        assert calculate_difficulty_score(_puzzle(charges), weights) == pytest.approx(30.0)

    def test_zero_budget(self):
        charges = np.zeros((3, 3), dtype=np.int64)
        weights = DifficultyWeights(sparsity=0.0)
        assert calculate_difficulty_score(_puzzle(charges, positive=0, negative=0), weights) == 0.0

    def test_clamped_to_100(self):
        charges = np.zeros((3, 3), dtype=np.int64)
        weights = DifficultyWeights(sparsity=500.0)
        assert calculate_difficulty_score(_puzzle(charges), weights) == 100.0

    def test_default_weights_total(self):
        assert DifficultyWeights().total == 100.0


class TestFieldSummary:
    """Tests for summarize_field."""

    def test_solved_board(self, z_pattern):
        calc = FieldCalculator(grid_size=5)
        calc.calculate_all_field_values(z_pattern.initial_charges, z_pattern.counter_placement())

        summary = summarize_field(calc, z_pattern.initial_charges)

        assert summary == FieldSummary(target_cells=13, neutralized_cells=13, overshot_cells=0)
        assert summary.is_solved
        assert summary.progress == 1.0
        assert summary.efficiency == 1.0

    def test_untouched_board(self, z_pattern):
        calc = FieldCalculator(grid_size=5)
        calc.calculate_all_field_values(z_pattern.initial_charges, np.zeros((5, 5), dtype=np.int64))
        summary = summarize_field(calc, z_pattern.initial_charges)
        assert summary.neutralized_cells == 0
        assert summary.progress == 0.0
        assert not summary.is_solved

    def test_overshoot_penalty(self):
        charges = np.zeros((3, 3), dtype=np.int64)
        charges[0, 0] = 2
        charges[2, 2] = -3
        calc = FieldCalculator(grid_size=3)
        calc.calculate_all_field_values(charges, np.zeros((3, 3), dtype=np.int64))
        calc.update_field_value(GridPosition(0, 0), 0, -1, charges)  # 2 → -1
        calc.update_field_value(GridPosition(2, 2), 0, 1, charges)  # -3 → 0

        summary = summarize_field(calc, charges)

        assert summary.target_cells == 2
        assert summary.neutralized_cells == 1
        assert summary.overshot_cells == 1
        assert summary.progress == pytest.approx(0.5)
        assert summary.efficiency == pytest.approx(0.25)

    def test_no_targets(self):
        summary = FieldSummary(target_cells=0, neutralized_cells=0, overshot_cells=0)
        assert summary.progress == 0.0
        assert summary.efficiency == 0.0
