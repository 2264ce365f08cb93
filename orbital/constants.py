"""
Orbital AMM constants

Numeric tolerances and the default pool configuration:
- EPSILON: zero/negative radicand guard and Interior/Boundary threshold
- DEFAULT_*: token set and plane constant used when a pool is
  created without explicit parameters
- PHASE_*: phase-space sampling defaults
"""

from typing import List

# Relative tolerance for radicands (scaled by r^2) and absolute tolerance
# for reserves when classifying a tick.
EPSILON: float = 1e-9

# Relative tolerance used by invariant checks in tests and snapshots
INVARIANT_TOLERANCE: float = 1e-6

# Default configuration (USD stablecoin basket)
DEFAULT_TOKENS: List[str] = ["USDC", "USDT", "DAI"]
DEFAULT_PLANE_CONSTANT: float = 600.0

# Phase-space sampling
PHASE_GRID_SIZE: int = 20
PHASE_MARGIN: float = 0.2  # fraction of the largest reserve added to the grid bound

MIN_TOKENS: int = 2
