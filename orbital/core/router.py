"""
Router - trade execution across ticks.

A trade is split across every tick holding both tokens, cheapest
(smallest plane constant) first. Each tick is solved on the remaining
input; the resulting reserve changes are staged and only committed once
the whole amount is covered, so a failed trade leaves every tick as it was.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from ..constants import EPSILON
from ..errors import ExceedsCapacityError, InsufficientLiquidityError, InvalidArgumentError
from ..math.sphere_math import solve_output
from .pool import PoolState, TokenRef
from .tick import Tick
from .vectors import ReserveVector, validate_amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickFill:
    """Staged result of one tick's share of a trade."""
    tick_index: int
    plane_constant: float
    amount_in: float
    amount_out: float
    becomes_boundary: bool
    reserves_after: ReserveVector

    def to_dict(self) -> dict:
        return {
            "tick_index": self.tick_index,
            "plane_constant": self.plane_constant,
            "amount_in": self.amount_in,
            "amount_out": self.amount_out,
            "becomes_boundary": self.becomes_boundary,
        }


@dataclass
class TradePlan:
    from_index: int
    to_index: int
    amount_in: float
    fills: List[TickFill] = field(default_factory=list)

    @property
    def amount_out(self) -> float:
        return sum(f.amount_out for f in self.fills)

    @property
    def consumed_in(self) -> float:
        return sum(f.amount_in for f in self.fills)


def eligible_ticks(pool: PoolState, from_index: int, to_index: int) -> List[Tick]:
    """Ticks holding positive reserve of both tokens, ascending plane constant"""
    ticks = [t for t in pool.ticks if t.holds(from_index) and t.holds(to_index)]
    return sorted(ticks, key=lambda t: (t.plane_constant, t.index))


def _resolve_pair(pool: PoolState, from_token: TokenRef, to_token: TokenRef) -> Tuple[int, int]:
    from_index = pool.token_index(from_token)
    to_index = pool.token_index(to_token)
    if from_index == to_index:
        raise InvalidArgumentError("from and to tokens must differ")
    return from_index, to_index


def plan_trade(pool: PoolState, from_token: TokenRef, to_token: TokenRef, amount_in: float) -> TradePlan:
    """
    Stage a trade without touching the pool.

    Args:
        pool: pool to route through
        from_token: input token (name or index)
        to_token: output token (name or index)
        amount_in: input amount (> 0)

    Returns:
        TradePlan with one TickFill per tick that took part, in routing order

    Raises:
        InvalidArgumentError: bad tokens or amount
        InsufficientLiquidityError: eligible ticks cannot absorb the full amount
    """
    from_index, to_index = _resolve_pair(pool, from_token, to_token)
    amount_in = validate_amount(amount_in, "amount_in")

    plan = TradePlan(from_index=from_index, to_index=to_index, amount_in=amount_in)
    remaining = amount_in
    tol = EPSILON * max(1.0, amount_in)

    for tick in eligible_ticks(pool, from_index, to_index):
        if remaining <= tol:
            break
        try:
            fill = solve_output(tick.reserves, tick.plane_constant, from_index, to_index, remaining)
        except ExceedsCapacityError as e:
            logger.debug("tick %d skipped: %s", tick.index, e)
            continue
        assert fill.consumed_amount_in <= remaining, "tick consumed more input than offered"

        staged = list(tick.reserves)
        staged[from_index] += fill.consumed_amount_in
        if fill.becomes_boundary:
            staged[to_index] = 0.0
        else:
            staged[to_index] = max(staged[to_index] - fill.amount_out, 0.0)

        plan.fills.append(TickFill(
            tick_index=tick.index,
            plane_constant=tick.plane_constant,
            amount_in=fill.consumed_amount_in,
            amount_out=fill.amount_out,
            becomes_boundary=fill.becomes_boundary,
            reserves_after=tuple(staged),
        ))
        remaining -= fill.consumed_amount_in
        logger.debug(
            "tick %d (r=%.6g): in=%.12g out=%.12g boundary=%s remaining=%.12g",
            tick.index, tick.plane_constant, fill.consumed_amount_in,
            fill.amount_out, fill.becomes_boundary, remaining
        )

    if remaining > tol:
        raise InsufficientLiquidityError(
            f"Not enough liquidity across ticks: {remaining:.12g} of {amount_in:.12g} unfilled"
        )
    if plan.amount_out <= 0:
        raise InsufficientLiquidityError("trade produces no output")
    return plan


def commit_plan(pool: PoolState, plan: TradePlan) -> None:
    """Apply every staged fill to its tick."""
    for fill in plan.fills:
        pool.get_tick(fill.tick_index).set_reserves(fill.reserves_after)


def execute_trade(pool: PoolState, from_token: TokenRef, to_token: TokenRef, amount_in: float) -> TradePlan:
    """Plan and commit a trade; the pool is untouched if planning fails."""
    plan = plan_trade(pool, from_token, to_token, amount_in)
    commit_plan(pool, plan)
    logger.info(
        "trade %s -> %s: in=%.12g out=%.12g across %d tick(s)",
        pool.token_names[plan.from_index], pool.token_names[plan.to_index],
        plan.amount_in, plan.amount_out, len(plan.fills)
    )
    return plan
