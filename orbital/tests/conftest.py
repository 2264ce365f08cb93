"""Shared fixtures for the Orbital engine tests."""

import pytest

from ..core.pool import PoolState
from ..engine import OrbitalEngine
from ..math.sphere_math import equal_reserve_point


def upper_point(plane_constant: float, n_tokens: int) -> list:
    """Equal-reserve point on the sphere, above the center"""
    return [equal_reserve_point(plane_constant, n_tokens, above=True)] * n_tokens


def lower_point(plane_constant: float, n_tokens: int) -> list:
    """Equal-reserve point on the sphere, below the center"""
    return [equal_reserve_point(plane_constant, n_tokens)] * n_tokens


@pytest.fixture
def two_token_engine():
    """Scenario pool: 2 tokens, one tick r=600 at [1000, 1000]"""
    return OrbitalEngine(["A", "B"], [1000.0, 1000.0], 600.0)


@pytest.fixture
def three_token_pool():
    return PoolState(token_names=("USDC", "USDT", "DAI"))
