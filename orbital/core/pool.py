"""
Pool State - token universe plus the ordered tick collection.

The pool is the sole owner of its ticks. Global reserves are always
derived from the ticks and never stored.
"""

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple, Union

from ..constants import MIN_TOKENS
from ..errors import InvalidArgumentError, TickNotFoundError
from .tick import Tick, TickView

TokenRef = Union[str, int]


def resolve_token(token_names: Sequence[str], token: TokenRef) -> int:
    """Resolve a token name or index.

    Raises:
        InvalidArgumentError: unknown name or out-of-range index
    """
    if isinstance(token, bool):
        raise InvalidArgumentError(f"invalid token reference {token!r}")
    if isinstance(token, int):
        if 0 <= token < len(token_names):
            return token
        raise InvalidArgumentError(f"token index {token} out of range")
    try:
        return list(token_names).index(token)
    except ValueError:
        raise InvalidArgumentError(f"Token '{token}' not found in pool") from None


@dataclass(frozen=True)
class PoolSnapshot:
    """Immutable state of a pool at one version."""
    token_names: Tuple[str, ...]
    ticks: Tuple[TickView, ...]
    global_reserves: Tuple[float, ...]
    version: int = 0

    @property
    def tick_count(self) -> int:
        return len(self.ticks)

    def to_dict(self) -> dict:
        return {
            "ticks": [t.to_dict() for t in self.ticks],
            "token_names": list(self.token_names),
            "global_reserves": list(self.global_reserves),
            "tick_count": self.tick_count,
        }


@dataclass
class PoolState:
    """Orbital pool

    Attributes:
        token_names: fixed token set, position = token index
        ticks: ticks in insertion order
    """
    token_names: Tuple[str, ...]
    ticks: List[Tick] = field(default_factory=list)

    def __post_init__(self):
        self.token_names = tuple(self.token_names)
        if len(self.token_names) < MIN_TOKENS:
            raise InvalidArgumentError(f"at least {MIN_TOKENS} tokens are required")

    @property
    def n_tokens(self) -> int:
        return len(self.token_names)

    @property
    def tick_count(self) -> int:
        return len(self.ticks)

    @property
    def global_reserves(self) -> Tuple[float, ...]:
        """Element-wise sum of reserves over all ticks"""
        totals = [0.0] * self.n_tokens
        for tick in self.ticks:
            for i, x in enumerate(tick.reserves):
                totals[i] += x
        return tuple(totals)

    def token_index(self, token: TokenRef) -> int:
        return resolve_token(self.token_names, token)

    def get_tick(self, tick_index: int) -> Tick:
        if not 0 <= tick_index < len(self.ticks):
            raise TickNotFoundError(
                f"tick index {tick_index} out of range (pool has {len(self.ticks)} ticks)"
            )
        return self.ticks[tick_index]

    def append_tick(self, plane_constant: float, reserves: Sequence[float]) -> Tick:
        tick = Tick(index=len(self.ticks), plane_constant=plane_constant, reserves=tuple(reserves))
        self.ticks.append(tick)
        return tick

    def snapshot(self, version: int = 0) -> PoolSnapshot:
        return PoolSnapshot(
            token_names=self.token_names,
            ticks=tuple(t.view() for t in self.ticks),
            global_reserves=self.global_reserves,
            version=version,
        )
