"""
Liquidity Manager - validated pool mutations.

Every function validates its inputs completely before touching the pool;
a raised error means nothing changed.
"""

import logging
from typing import List, Optional, Sequence

from ..constants import EPSILON, MIN_TOKENS
from ..errors import DimensionMismatchError, InvalidArgumentError
from .pool import PoolState
from .tick import Tick
from .vectors import validate_plane_constant, validate_vector

logger = logging.getLogger(__name__)


def add_tick(pool: PoolState, plane_constant: float, reserves: Sequence[float]) -> Tick:
    """
    Append a new tick; its status comes from the reserves.

    Raises:
        InvalidArgumentError: plane_constant <= 0 or a negative reserve
        DimensionMismatchError: len(reserves) != token count
    """
    r = validate_plane_constant(plane_constant)
    vector = validate_vector(reserves, pool.n_tokens)
    tick = pool.append_tick(r, vector)
    logger.info("added tick %d: r=%.6g reserves=%s", tick.index, r, list(vector))
    return tick


def add_liquidity(pool: PoolState, tick_index: int, amounts: Sequence[float], lp_id: str = "") -> Tick:
    """
    Add `amounts` element-wise to a tick's reserves.

    Unbalanced deposits are allowed and the plane constant is unchanged.
    The LP is credited with shares equal to the deposited total.

    Raises:
        TickNotFoundError: bad tick index
        DimensionMismatchError: len(amounts) != token count
        InvalidArgumentError: negative amount
    """
    tick = pool.get_tick(tick_index)
    deposit = validate_vector(amounts, pool.n_tokens, "amounts")
    tick.set_reserves(tuple(x + d for x, d in zip(tick.reserves, deposit)))
    shares = sum(deposit)
    if shares > 0:
        tick.lp_shares[lp_id] = tick.lp_shares.get(lp_id, 0.0) + shares
    logger.info("tick %d: LP %r added %s", tick_index, lp_id, list(deposit))
    return tick


def remove_liquidity(pool: PoolState, tick_index: int, lp_id: str, fraction: float) -> List[float]:
    """
    Withdraw `fraction` of an LP's shares from a tick.

    Reserves are scaled by 1 - removed/total shares.

    Returns:
        withdrawn amount per token
    """
    tick = pool.get_tick(tick_index)
    fraction = float(fraction)
    if not 0.0 <= fraction <= 1.0:
        raise InvalidArgumentError(f"fraction must be in [0, 1], got {fraction}")
    user_shares = tick.lp_shares.get(lp_id)
    if user_shares is None:
        raise InvalidArgumentError(f"LP '{lp_id}' has no position in tick {tick_index}")
    if user_shares <= 0:
        raise InvalidArgumentError(f"LP '{lp_id}' has no shares")

    total_shares = sum(tick.lp_shares.values())
    removed = user_shares * fraction
    ratio = removed / total_shares
    withdrawn = [x * ratio for x in tick.reserves]
    tick.set_reserves(tuple(x - w for x, w in zip(tick.reserves, withdrawn)))

    if fraction >= 1.0 - EPSILON:
        del tick.lp_shares[lp_id]
    else:
        tick.lp_shares[lp_id] = user_shares - removed
    logger.info("tick %d: LP %r withdrew %s", tick_index, lp_id, withdrawn)
    return withdrawn


def set_reserves(pool: PoolState, tick_index: int, reserves: Sequence[float]) -> Tick:
    """Administrative override of a tick's full reserve vector."""
    tick = pool.get_tick(tick_index)
    vector = validate_vector(reserves, pool.n_tokens)
    tick.set_reserves(vector)
    logger.info("tick %d: reserves set to %s", tick_index, list(vector))
    return tick


def reset(
    pool: PoolState,
    reserves: Optional[Sequence[float]] = None,
    plane_constant: Optional[float] = None
) -> PoolState:
    """
    Discard every tick; optionally seed one new tick.

    The token set is unchanged. Both `reserves` and `plane_constant` must be
    given to seed a tick.
    """
    if (reserves is None) != (plane_constant is None):
        raise InvalidArgumentError("reset needs both reserves and plane constant, or neither")
    seed = None
    if reserves is not None:
        seed = (validate_plane_constant(plane_constant), validate_vector(reserves, pool.n_tokens))

    pool.ticks = []
    if seed is not None:
        pool.append_tick(*seed)
    logger.info("pool reset (%d tick(s))", pool.tick_count)
    return pool


def reconfigure(
    pool: PoolState,
    token_names: Sequence[str],
    initial_reserves: Sequence[float],
    initial_plane_constant: float
) -> PoolState:
    """
    Replace the token set and every tick with a single initial tick.

    Raises:
        DimensionMismatchError: len(token_names) != len(initial_reserves)
        InvalidArgumentError: fewer than two tokens, blank or duplicate
            names, a negative reserve, or plane constant <= 0
    """
    names = tuple(str(name).strip() for name in token_names)
    if len(names) != len(initial_reserves):
        raise DimensionMismatchError(
            f"{len(names)} token names but {len(initial_reserves)} initial reserves"
        )
    if len(names) < MIN_TOKENS:
        raise InvalidArgumentError(f"at least {MIN_TOKENS} tokens are required")
    if any(not name for name in names):
        raise InvalidArgumentError("token names must be non-empty")
    if len(set(names)) != len(names):
        raise InvalidArgumentError(f"token names must be unique, got {list(names)}")
    vector = validate_vector(initial_reserves, len(names))
    r = validate_plane_constant(initial_plane_constant)

    pool.token_names = names
    pool.ticks = []
    pool.append_tick(r, vector)
    logger.info("pool reconfigured: tokens=%s r=%.6g", list(names), r)
    return pool
