"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)


@pytest.fixture
def calculator_5x5():
    """Standard-shape calculator for a 5x5 board."""
    from chargefield.core import FieldCalculator
    return FieldCalculator(grid_size=5)


@pytest.fixture
def z_pattern():
    """The hand-authored 5x5 Z-pattern puzzle."""
    from chargefield.puzzles import z_pattern_puzzle
    return z_pattern_puzzle()
