"""
Orbital AMM Engine

Multi-asset AMM that prices swaps with a per-tick sphere invariant
Σ(xᵢ - r)² = r²(n-1), routing each trade across independent liquidity
bands (ticks) from the tightest plane constant to the widest.
"""

__version__ = "0.1.0"

from .constants import DEFAULT_TOKENS, DEFAULT_PLANE_CONSTANT, EPSILON
from .errors import (
    OrbitalError,
    DimensionMismatchError,
    InvalidArgumentError,
    TickNotFoundError,
    InsufficientLiquidityError,
)
from .engine import OrbitalEngine, OperationResult
