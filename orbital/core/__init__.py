"""
Pool layer for the Orbital AMM

- tick: Tick entity and its read-only view
- pool: PoolState (token set + ticks) and immutable snapshots
- router: staged multi-tick trade execution
- liquidity: validated mutations (ticks, liquidity, reset, reconfigure)
- geometry: 2-token phase-space sampler
- pricing: aggregated spot prices
"""

from .tick import Tick, TickView
from .pool import PoolState, PoolSnapshot, resolve_token
from .router import TradePlan, TickFill, plan_trade, execute_trade
from .geometry import PhasePoint, PhaseSample, TickProjection, sample_phase_space
from .pricing import PriceInfo, aggregated_price, price_table
