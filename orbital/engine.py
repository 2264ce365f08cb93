"""
Orbital Engine - the operation surface of one pool.

The engine owns exactly one PoolState. Mutations run one at a time under a
lock and publish a fresh immutable snapshot when they succeed; readers only
ever see a published snapshot, so any number of them can run alongside a
writer and each observes one consistent state.

Every mutating operation returns an OperationResult envelope instead of
raising: engine errors (OrbitalError) become `success=False` with the
error's message and kind. Anything else is a bug and propagates.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from .constants import DEFAULT_TOKENS, PHASE_GRID_SIZE, PHASE_MARGIN
from .errors import InvalidArgumentError, OrbitalError
from .core import liquidity
from .core.geometry import PhaseSample, sample_phase_space
from .core.pool import PoolSnapshot, PoolState, TokenRef
from .core.pricing import PriceInfo, aggregated_price, price_table
from .core.router import execute_trade, plan_trade

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationResult:
    """Uniform {success, message} envelope"""
    success: bool
    message: str = ""
    kind: Optional[str] = None
    output: Optional[float] = None
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, message: str, output: Optional[float] = None, **data) -> "OperationResult":
        return cls(success=True, message=message, output=output, data=data)

    @classmethod
    def fail(cls, error: OrbitalError) -> "OperationResult":
        return cls(success=False, message=str(error), kind=error.kind)

    def to_dict(self) -> dict:
        result = {"success": self.success, "message": self.message}
        if self.kind is not None:
            result["kind"] = self.kind
        if self.output is not None:
            result["output"] = self.output
        result.update(self.data)
        return result


class OrbitalEngine:
    """Single-pool Orbital AMM engine

    Usage:
        engine = OrbitalEngine(["USDC", "USDT"], [1000, 1000], 600)
        result = engine.trade("USDC", "USDT", 100)
        state = engine.read_state()
    """

    def __init__(
        self,
        token_names: Sequence[str] = tuple(DEFAULT_TOKENS),
        initial_reserves: Optional[Sequence[float]] = None,
        initial_plane_constant: Optional[float] = None,
        grid_size: int = PHASE_GRID_SIZE,
        margin: float = PHASE_MARGIN
    ):
        """
        Args:
            token_names: token set (at least two)
            initial_reserves: reserves of an optional first tick
            initial_plane_constant: plane constant of the optional first tick
            grid_size: default phase grid points per axis
            margin: default phase grid margin

        Raises:
            OrbitalError: invalid initial configuration
        """
        if (initial_reserves is None) != (initial_plane_constant is None):
            raise InvalidArgumentError("initial reserves and plane constant must be given together")
        self._pool = PoolState(token_names=tuple(token_names))
        if initial_reserves is not None:
            liquidity.add_tick(self._pool, initial_plane_constant, initial_reserves)
        self.grid_size = grid_size
        self.margin = margin
        self._write_lock = threading.Lock()
        self._version = 0
        self._snapshot = self._pool.snapshot(self._version)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def version(self) -> int:
        return self._snapshot.version

    def read_state(self) -> PoolSnapshot:
        return self._snapshot

    def read_phase_sample(self, grid_size: Optional[int] = None, margin: Optional[float] = None) -> PhaseSample:
        return sample_phase_space(
            self._snapshot,
            grid_size=self.grid_size if grid_size is None else grid_size,
            margin=self.margin if margin is None else margin,
        )

    def read_price(self, from_token: TokenRef, to_token: TokenRef) -> OperationResult:
        snapshot = self._snapshot
        try:
            price = aggregated_price(snapshot, from_token, to_token)
        except OrbitalError as e:
            return OperationResult.fail(e)
        return OperationResult.ok(f"price of {to_token} per {from_token}", output=price)

    def read_prices(self) -> List[PriceInfo]:
        return price_table(self._snapshot)

    def quote_trade(self, from_token: TokenRef, to_token: TokenRef, amount: float) -> OperationResult:
        """Route a trade without committing it."""
        with self._write_lock:
            try:
                plan = plan_trade(self._pool, from_token, to_token, amount)
            except OrbitalError as e:
                return OperationResult.fail(e)
        return OperationResult.ok(
            f"Quote: {amount} {from_token} for {plan.amount_out} {to_token}",
            output=plan.amount_out,
            fills=[f.to_dict() for f in plan.fills],
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _mutate(self, operation: str, apply: Callable[[PoolState], OperationResult]) -> OperationResult:
        with self._write_lock:
            try:
                result = apply(self._pool)
            except OrbitalError as e:
                logger.warning("%s rejected (%s): %s", operation, e.kind, e)
                return OperationResult.fail(e)
            self._version += 1
            self._snapshot = self._pool.snapshot(self._version)
            return result

    def add_tick(self, plane_constant: float, reserves: Sequence[float]) -> OperationResult:
        def apply(pool):
            tick = liquidity.add_tick(pool, plane_constant, reserves)
            return OperationResult.ok(
                f"Added tick with plane constant {plane_constant}", tick_index=tick.index
            )
        return self._mutate("add_tick", apply)

    def trade(self, from_token: TokenRef, to_token: TokenRef, amount: float) -> OperationResult:
        def apply(pool):
            plan = execute_trade(pool, from_token, to_token, amount)
            return OperationResult.ok(
                f"Swapped {amount} {from_token} for {plan.amount_out} {to_token}",
                output=plan.amount_out,
                fills=[f.to_dict() for f in plan.fills],
            )
        return self._mutate("trade", apply)

    def set_reserves(self, tick_index: int, reserves: Sequence[float]) -> OperationResult:
        def apply(pool):
            liquidity.set_reserves(pool, tick_index, reserves)
            return OperationResult.ok(f"Set reserves for tick {tick_index}")
        return self._mutate("set_reserves", apply)

    def add_liquidity(self, tick_index: int, lp_id: str, amounts: Sequence[float]) -> OperationResult:
        def apply(pool):
            liquidity.add_liquidity(pool, tick_index, amounts, lp_id=lp_id)
            return OperationResult.ok(f"Added liquidity for LP {lp_id}")
        return self._mutate("add_liquidity", apply)

    def remove_liquidity(self, tick_index: int, lp_id: str, fraction: float) -> OperationResult:
        def apply(pool):
            withdrawn = liquidity.remove_liquidity(pool, tick_index, lp_id, fraction)
            return OperationResult.ok(f"Removed liquidity for LP {lp_id}", withdrawn=withdrawn)
        return self._mutate("remove_liquidity", apply)

    def reset(self, reserves: Optional[Sequence[float]] = None, plane_constant: Optional[float] = None) -> OperationResult:
        def apply(pool):
            liquidity.reset(pool, reserves, plane_constant)
            if pool.tick_count:
                return OperationResult.ok("Pool reset with one tick")
            return OperationResult.ok("Pool reset with no ticks")
        return self._mutate("reset", apply)

    def reconfigure(
        self,
        token_names: Sequence[str],
        initial_reserves: Sequence[float],
        initial_plane_constant: float
    ) -> OperationResult:
        def apply(pool):
            liquidity.reconfigure(pool, token_names, initial_reserves, initial_plane_constant)
            return OperationResult.ok(f"AMM reconfigured with tokens: {list(pool.token_names)}")
        return self._mutate("reconfigure", apply)
