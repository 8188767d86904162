"""Unit tests for target-cell selection strategies."""

import numpy as np
import pytest

from chargefield.core.grid import GridPosition, iter_positions
from chargefield.generation.selection import (
    STRATEGIES,
    candidate_positions,
    get_strategy,
    select_clustered,
    select_even,
    select_mixed,
)


def _sparse_field():
    field = np.zeros((5, 5), dtype=np.int64)
    field[0, 0] = 3
    field[1, 2] = -2
    field[3, 3] = 1
    field[4, 1] = 5
    return field


class TestCandidates:
    """Tests for candidate discovery."""

    def test_only_non_zero_cells(self):
        assert candidate_positions(_sparse_field()) == [
            GridPosition(0, 0), GridPosition(1, 2), GridPosition(3, 3), GridPosition(4, 1),
        ]


class TestCommonContract:
    """Every strategy returns distinct non-zero cells, as many as it can."""

    @pytest.mark.parametrize("name", sorted(STRATEGIES))
    def test_exact_count(self, name, rng):
        field = np.full((5, 5), 2, dtype=np.int64)
        selected = get_strategy(name)(field, 9, rng)
        assert len(selected) == 9
        assert len(set(selected)) == 9

    @pytest.mark.parametrize("name", sorted(STRATEGIES))
    def test_clamped_to_candidates(self, name, rng):
        field = _sparse_field()
        selected = get_strategy(name)(field, 10, rng)
        assert set(selected) == set(candidate_positions(field))

    @pytest.mark.parametrize("name", sorted(STRATEGIES))
    def test_never_selects_zero_cells(self, name, rng):
        field = _sparse_field()
        for position in get_strategy(name)(field, 3, rng):
            assert field[position.index] != 0

    def test_unknown_strategy(self):
        with pytest.raises(ValueError, match="Unknown selection strategy"):
            get_strategy("spiral")


class TestEven:
    """Tests for the even strategy."""

    def test_regions_respect_cap(self, rng):
        field = np.ones((5, 5), dtype=np.int64)
        for _ in range(20):
            selected = select_even(field, 9, rng)
            counts = np.zeros((3, 3), dtype=int)
            for position in selected:
                counts[position.row * 3 // 5, position.col * 3 // 5] += 1
            # cap is 9 // 9 + 1
            assert counts.max() <= 2


class TestClustered:
    """Tests for the clustered strategy."""

    def test_without_skips_takes_closest_cells(self, rng):
        field = np.ones((5, 5), dtype=np.int64)
        for _ in range(20):
            selected = set(select_clustered(field, 5, rng, skip_probability=0.0))
            unselected = [p for p in iter_positions(5) if p not in selected]

            # Some center must have every selected cell at least as close as any other cell
            assert any(
                max(p.distance(center) for p in selected)
                <= min(p.distance(center) for p in unselected)
                for center in iter_positions(5)
            )


class TestMixed:
    """Tests for the mixed strategy."""

    def test_includes_strongest_and_subtle_cells(self, rng):
        field = np.full((5, 5), 3, dtype=np.int64)
        field[0, 0] = 8
        field[4, 4] = -7
        field[2, 2] = 6
        field[0, 4] = 1
        field[4, 0] = -1

        selected = set(select_mixed(field, 9, rng))

        assert {GridPosition(0, 0), GridPosition(4, 4), GridPosition(2, 2)} <= selected
        assert {GridPosition(0, 4), GridPosition(4, 0)} <= selected
        assert len(selected) == 9

    def test_get_strategy_binds_skip_probability(self):
        field = np.ones((5, 5), dtype=np.int64)
        bound = get_strategy("clustered", skip_probability=0.0)
        for seed in range(10):
            expected = select_clustered(
                field, 6, np.random.default_rng(seed), skip_probability=0.0
            )
            assert bound(field, 6, np.random.default_rng(seed)) == expected
