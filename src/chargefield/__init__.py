"""
chargefield: field-influence simulation and puzzle generation engine

The engine behind the ChargeField puzzle. Magnets (signed point sources)
radiate integer influence across a small square grid; the player places
magnets to bring every charged target cell back to zero.

Core concepts:
- A magnet's influence pattern is a fixed falloff: 3 on its own cell,
  2 at distance 1, 1 at distance 2, nothing beyond
- The field is the superposition of initial charges and all placed patterns
- Placing or removing one magnet updates the field incrementally
- Puzzles are generated backwards: hide a solution, compute its field,
  expose a subset of cells as targets

Layers:
- core: positions, influence patterns, the field calculator
- puzzles: the puzzle definition and hand-authored presets
- generation: procedural generation, target selection, validation
- analysis: difficulty scoring and progress summaries
"""

__version__ = "0.1.0"
