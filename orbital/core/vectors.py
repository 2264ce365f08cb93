"""
Boundary validation for externally supplied vectors and scalars.

Everything entering the engine is checked here first; inside the engine a
reserve vector is always a tuple of exactly n non-negative floats.
"""

import math
from typing import Sequence, Tuple

from ..errors import DimensionMismatchError, InvalidArgumentError

ReserveVector = Tuple[float, ...]


def validate_vector(values: Sequence[float], n_tokens: int, name: str = "reserves") -> ReserveVector:
    """
    Check length and non-negativity of a per-token vector.

    Raises:
        DimensionMismatchError: len(values) != n_tokens
        InvalidArgumentError: a negative or non-finite entry
    """
    if len(values) != n_tokens:
        raise DimensionMismatchError(
            f"{name} length {len(values)} does not match token count {n_tokens}"
        )
    vector = tuple(float(v) for v in values)
    for i, v in enumerate(vector):
        if not math.isfinite(v):
            raise InvalidArgumentError(f"{name}[{i}] must be finite, got {v}")
        if v < 0:
            raise InvalidArgumentError(f"{name}[{i}] must be non-negative, got {v}")
    return vector


def validate_plane_constant(plane_constant: float) -> float:
    value = float(plane_constant)
    if not math.isfinite(value) or value <= 0:
        raise InvalidArgumentError(f"plane constant must be positive, got {plane_constant}")
    return value


def validate_amount(amount: float, name: str = "amount") -> float:
    value = float(amount)
    if not math.isfinite(value) or value <= 0:
        raise InvalidArgumentError(f"{name} must be positive, got {amount}")
    return value
