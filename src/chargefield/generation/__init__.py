"""
Generation: procedural puzzles and their validation.

- PuzzleGenerator: hidden solution → field → difficulty-driven targets
- Selection strategies: even, clustered, mixed
- validate_puzzle: the counter placement must zero every target
"""

from chargefield.generation.generator import (
    Difficulty,
    GeneratorConfig,
    PuzzleGenerator,
    generate_puzzle,
)
from chargefield.generation.selection import (
    STRATEGIES,
    get_strategy,
    select_clustered,
    select_even,
    select_mixed,
)
from chargefield.generation.validation import (
    solution_within_budget,
    solved_field,
    validate_puzzle,
)

__all__ = [
    "Difficulty",
    "GeneratorConfig",
    "PuzzleGenerator",
    "generate_puzzle",
    "STRATEGIES",
    "get_strategy",
    "select_clustered",
    "select_even",
    "select_mixed",
    "solution_within_budget",
    "solved_field",
    "validate_puzzle",
]
