"""
Tick - one liquidity band of the Orbital AMM.

A tick owns a reserve vector and a plane constant r; status, radius and
liquidity are derived and refreshed on every reserve change.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from ..math.sphere_math import Boundary, Interior, TickStatus, classify, sphere_radius
from .vectors import ReserveVector


@dataclass(frozen=True)
class TickView:
    """Read-only copy of a tick as exposed to callers."""
    index: int
    plane_constant: float
    reserves: Tuple[float, ...]
    radius: float
    is_interior: bool
    is_boundary: bool
    liquidity: float

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "plane_constant": self.plane_constant,
            "reserves": list(self.reserves),
            "radius": self.radius,
            "is_interior": self.is_interior,
            "is_boundary": self.is_boundary,
            "liquidity": self.liquidity,
        }


@dataclass
class Tick:
    """Orbital tick

    Attributes:
        index: position in the owning pool (stable for the tick's lifetime)
        plane_constant: r > 0, sphere center is (r, ..., r)
        reserves: n non-negative reserves
        lp_shares: provenance bookkeeping per LP id (not used by the invariant)
    """
    index: int
    plane_constant: float
    reserves: ReserveVector
    lp_shares: Dict[str, float] = field(default_factory=dict)
    status: TickStatus = field(init=False)
    liquidity: float = field(init=False)

    def __post_init__(self):
        self._derive()

    def _derive(self) -> None:
        self.status = classify(self.reserves)
        self.liquidity = float(sum(self.reserves))

    def set_reserves(self, reserves: ReserveVector) -> None:
        self.reserves = tuple(reserves)
        self._derive()

    @property
    def n_tokens(self) -> int:
        return len(self.reserves)

    @property
    def radius(self) -> float:
        return sphere_radius(self.plane_constant, self.n_tokens)

    @property
    def is_interior(self) -> bool:
        return isinstance(self.status, Interior)

    @property
    def is_boundary(self) -> bool:
        return isinstance(self.status, Boundary)

    def holds(self, token_index: int) -> bool:
        """True if the token is in the tick's positive subset."""
        return self.status.includes(token_index)

    def view(self) -> TickView:
        return TickView(
            index=self.index,
            plane_constant=self.plane_constant,
            reserves=self.reserves,
            radius=self.radius,
            is_interior=self.is_interior,
            is_boundary=self.is_boundary,
            liquidity=self.liquidity,
        )
