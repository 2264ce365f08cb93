"""
Orbital AMM errors

Every failure raised by the engine derives from OrbitalError and carries a
structured `kind` so callers can report it without parsing messages.

OrbitalError (base)
├── DimensionMismatchError     - vector length differs from the token count
├── InvalidArgumentError       - bad plane constant, reserve, amount or token
├── TickNotFoundError          - tick index out of range
├── InsufficientLiquidityError - trade cannot be filled across eligible ticks
└── ExceedsCapacityError       - a single tick cannot absorb the trade (internal)
"""

from typing import Optional


class OrbitalError(Exception):
    """Base class for all engine errors."""

    kind: str = "OrbitalError"

    def __init__(self, message: str, tick_index: Optional[int] = None):
        self.message = message
        self.tick_index = tick_index
        super().__init__(message)

    def __str__(self) -> str:
        if self.tick_index is not None:
            return f"[tick {self.tick_index}] {self.message}"
        return self.message


class DimensionMismatchError(OrbitalError):
    kind = "DimensionMismatch"


class InvalidArgumentError(OrbitalError):
    kind = "InvalidArgument"


class TickNotFoundError(OrbitalError):
    kind = "TickNotFound"


class InsufficientLiquidityError(OrbitalError):
    kind = "InsufficientLiquidity"


class ExceedsCapacityError(OrbitalError):
    """
    A tick cannot produce positive output for the requested pair.

    Raised by the invariant solver and always resolved by the router, which
    skips the tick; never returned to callers.
    """

    kind = "ExceedsCapacity"
