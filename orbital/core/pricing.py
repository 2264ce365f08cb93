"""
Aggregated pricing across ticks.

Per-tick spot prices are combined with the `from` reserve as weight.
"""

from dataclasses import dataclass
from typing import List

from ..errors import InsufficientLiquidityError, InvalidArgumentError
from ..math.sphere_math import spot_price
from .pool import PoolSnapshot, TokenRef, resolve_token


@dataclass(frozen=True)
class PriceInfo:
    from_token: str
    to_token: str
    price: float

    def to_dict(self) -> dict:
        return {"from": self.from_token, "to": self.to_token, "price": self.price}


def aggregated_price(snapshot: PoolSnapshot, from_token: TokenRef, to_token: TokenRef) -> float:
    """
    Reserve-weighted spot price of `to` per unit of `from`.

        P = Σ_t w_t · p_t / Σ_t w_t,   w_t = x_from(t)

    Ticks without `from` reserve or with an undefined spot price are skipped.

    Raises:
        InvalidArgumentError: unknown tokens or from == to
        InsufficientLiquidityError: no tick contributes a price
    """
    i = resolve_token(snapshot.token_names, from_token)
    j = resolve_token(snapshot.token_names, to_token)
    if i == j:
        raise InvalidArgumentError("from and to tokens must differ")

    num = 0.0
    denom = 0.0
    for tick in snapshot.ticks:
        weight = tick.reserves[i]
        if weight <= 0:
            continue
        try:
            price = spot_price(tick.reserves, tick.plane_constant, i, j)
        except InvalidArgumentError:
            continue
        num += price * weight
        denom += weight

    if denom == 0:
        raise InsufficientLiquidityError(
            f"No liquidity for {snapshot.token_names[i]} across ticks"
        )
    return num / denom


def price_table(snapshot: PoolSnapshot) -> List[PriceInfo]:
    """Aggregated price for every ordered pair that has one"""
    prices = []
    names = snapshot.token_names
    for i, from_name in enumerate(names):
        for j, to_name in enumerate(names):
            if i == j:
                continue
            try:
                price = aggregated_price(snapshot, i, j)
            except InsufficientLiquidityError:
                continue
            prices.append(PriceInfo(from_token=from_name, to_token=to_name, price=price))
    return prices
