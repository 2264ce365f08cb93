"""
Liquidity Manager tests

add_tick, add/remove liquidity, set_reserves, reset, reconfigure.
"""

import pytest

from ..core import liquidity
from ..core.pool import PoolState
from ..errors import DimensionMismatchError, InvalidArgumentError, TickNotFoundError


@pytest.fixture
def pool(three_token_pool):
    liquidity.add_tick(three_token_pool, 600.0, [1000.0, 1000.0, 1000.0])
    return three_token_pool


class TestAddTick:
    """add_tick"""

    def test_appends_in_insertion_order(self, pool):
        tick = liquidity.add_tick(pool, 50.0, [10.0, 20.0, 30.0])
        assert tick.index == 1
        assert pool.tick_count == 2
        assert pool.global_reserves == (1010.0, 1020.0, 1030.0)

    def test_derived_fields(self, pool):
        tick = pool.ticks[0]
        assert tick.liquidity == 3000.0
        assert tick.radius == pytest.approx(600.0 * 2**0.5)
        assert tick.is_interior and not tick.is_boundary

    def test_zero_reserve_starts_boundary(self, pool):
        tick = liquidity.add_tick(pool, 100.0, [0.0, 50.0, 50.0])
        assert tick.is_boundary
        assert not tick.holds(0)
        assert tick.holds(1) and tick.holds(2)

    def test_dimension_mismatch(self, pool):
        """Scenario 2: wrong length fails, tick count unchanged"""
        with pytest.raises(DimensionMismatchError):
            liquidity.add_tick(pool, 100.0, [1.0, 2.0])
        assert pool.tick_count == 1

    @pytest.mark.parametrize("plane_constant", [0.0, -5.0, float("nan")])
    def test_invalid_plane_constant(self, pool, plane_constant):
        with pytest.raises(InvalidArgumentError):
            liquidity.add_tick(pool, plane_constant, [1.0, 2.0, 3.0])
        assert pool.tick_count == 1

    def test_negative_reserve(self, pool):
        with pytest.raises(InvalidArgumentError):
            liquidity.add_tick(pool, 100.0, [1.0, -2.0, 3.0])


class TestAddLiquidity:
    """add_liquidity"""

    def test_unbalanced_deposit(self, pool):
        tick = liquidity.add_liquidity(pool, 0, [100.0, 0.0, 50.0], lp_id="alice")
        assert tick.reserves == (1100.0, 1000.0, 1050.0)
        assert tick.plane_constant == 600.0
        assert tick.liquidity == 3150.0
        assert tick.lp_shares == {"alice": 150.0}

    def test_tick_not_found(self, pool):
        with pytest.raises(TickNotFoundError):
            liquidity.add_liquidity(pool, 3, [1.0, 1.0, 1.0])

    def test_dimension_mismatch(self, pool):
        with pytest.raises(DimensionMismatchError):
            liquidity.add_liquidity(pool, 0, [1.0, 1.0])
        assert pool.ticks[0].reserves == (1000.0, 1000.0, 1000.0)

    def test_negative_amount_leaves_tick_unchanged(self, pool):
        with pytest.raises(InvalidArgumentError):
            liquidity.add_liquidity(pool, 0, [1.0, -1.0, 1.0])
        assert pool.ticks[0].reserves == (1000.0, 1000.0, 1000.0)
        assert pool.ticks[0].lp_shares == {}


class TestRemoveLiquidity:
    """remove_liquidity"""

    @pytest.fixture
    def shared_pool(self):
        pool = PoolState(token_names=("A", "B"))
        liquidity.add_tick(pool, 600.0, [1000.0, 1000.0])
        liquidity.add_liquidity(pool, 0, [100.0, 100.0], lp_id="alice")
        liquidity.add_liquidity(pool, 0, [300.0, 300.0], lp_id="bob")
        return pool

    def test_full_withdrawal(self, shared_pool):
        withdrawn = liquidity.remove_liquidity(shared_pool, 0, "alice", 1.0)
        # alice holds 200 of 800 shares
        assert withdrawn == pytest.approx([350.0, 350.0])
        assert shared_pool.ticks[0].reserves == pytest.approx((1050.0, 1050.0))
        assert "alice" not in shared_pool.ticks[0].lp_shares

    def test_partial_withdrawal(self, shared_pool):
        liquidity.remove_liquidity(shared_pool, 0, "bob", 0.5)
        assert shared_pool.ticks[0].lp_shares["bob"] == pytest.approx(300.0)

    def test_unknown_lp(self, shared_pool):
        with pytest.raises(InvalidArgumentError):
            liquidity.remove_liquidity(shared_pool, 0, "carol", 0.5)

    def test_fraction_out_of_range(self, shared_pool):
        with pytest.raises(InvalidArgumentError):
            liquidity.remove_liquidity(shared_pool, 0, "alice", 1.5)
        assert shared_pool.ticks[0].reserves == (1400.0, 1400.0)


class TestSetReserves:
    """set_reserves"""

    def test_override_rederives_status(self, pool):
        tick = liquidity.set_reserves(pool, 0, [0.0, 10.0, 10.0])
        assert tick.is_boundary
        assert tick.liquidity == 20.0
        tick = liquidity.set_reserves(pool, 0, [5.0, 10.0, 10.0])
        assert tick.is_interior

    def test_invalid(self, pool):
        with pytest.raises(TickNotFoundError):
            liquidity.set_reserves(pool, 9, [1.0, 1.0, 1.0])
        with pytest.raises(DimensionMismatchError):
            liquidity.set_reserves(pool, 0, [1.0])
        with pytest.raises(InvalidArgumentError):
            liquidity.set_reserves(pool, 0, [1.0, 1.0, -1.0])
        assert pool.ticks[0].reserves == (1000.0, 1000.0, 1000.0)


class TestReset:
    """reset"""

    def test_reset_to_empty(self, pool):
        liquidity.reset(pool)
        assert pool.tick_count == 0
        assert pool.token_names == ("USDC", "USDT", "DAI")
        assert pool.global_reserves == (0.0, 0.0, 0.0)

    def test_reset_with_configuration(self, pool):
        liquidity.add_tick(pool, 50.0, [1.0, 1.0, 1.0])
        liquidity.reset(pool, [500.0, 500.0, 500.0], 300.0)
        assert pool.tick_count == 1
        assert pool.ticks[0].plane_constant == 300.0
        assert pool.ticks[0].index == 0

    def test_invalid_configuration_keeps_ticks(self, pool):
        with pytest.raises(DimensionMismatchError):
            liquidity.reset(pool, [500.0], 300.0)
        with pytest.raises(InvalidArgumentError):
            liquidity.reset(pool, [500.0, 500.0, 500.0], None)
        assert pool.tick_count == 1


class TestReconfigure:
    """reconfigure"""

    def test_replaces_token_set(self, pool):
        liquidity.reconfigure(pool, ["A", "B"], [100.0, 200.0], 150.0)
        assert pool.token_names == ("A", "B")
        assert pool.tick_count == 1
        assert pool.ticks[0].reserves == (100.0, 200.0)
        assert pool.ticks[0].radius == pytest.approx(150.0)

    def test_dimension_mismatch_keeps_state(self, pool):
        """Scenario 3"""
        before = pool.snapshot()
        with pytest.raises(DimensionMismatchError):
            liquidity.reconfigure(pool, ["A", "B", "C"], [100.0, 200.0], 600.0)
        assert pool.snapshot() == before

    @pytest.mark.parametrize("names, reserves, plane", [
        (["A"], [100.0], 600.0),
        (["A", "A"], [100.0, 100.0], 600.0),
        (["A", ""], [100.0, 100.0], 600.0),
        (["A", "B"], [100.0, -1.0], 600.0),
        (["A", "B"], [100.0, 100.0], 0.0),
    ])
    def test_invalid_arguments_keep_state(self, pool, names, reserves, plane):
        before = pool.snapshot()
        with pytest.raises(InvalidArgumentError):
            liquidity.reconfigure(pool, names, reserves, plane)
        assert pool.snapshot() == before
