"""
Sphere Math tests

Invariant evaluation, classification and the per-tick trade solver.
"""

import math

import pytest

from ..errors import ExceedsCapacityError, InvalidArgumentError
from ..math.sphere_math import (
    Boundary,
    Interior,
    classify,
    equal_reserve_point,
    invariant_residual,
    is_on_sphere,
    solve_output,
    sphere_radius,
    spot_price,
)
from .conftest import lower_point, upper_point


class TestInvariant:
    """invariant_residual / is_on_sphere / sphere_radius"""

    def test_radius(self):
        """radius = r·√(n-1)"""
        assert sphere_radius(600.0, 2) == pytest.approx(600.0)
        assert sphere_radius(600.0, 3) == pytest.approx(600.0 * math.sqrt(2))

    def test_equal_points_are_on_sphere(self):
        """Equal-reserve points above and below the center satisfy the invariant"""
        for n in (2, 3, 5):
            assert is_on_sphere(upper_point(100.0, n), 100.0)
            assert is_on_sphere(lower_point(100.0, n), 100.0)

    def test_equal_reserve_point(self):
        """r(1 ∓ √((n-1)/n))"""
        assert equal_reserve_point(600.0, 2) == pytest.approx(600.0 * (1 - math.sqrt(0.5)))
        assert equal_reserve_point(600.0, 2, above=True) == pytest.approx(600.0 * (1 + math.sqrt(0.5)))

    def test_off_sphere(self):
        """[1000, 1000] is inside the r=600 sphere"""
        residual = invariant_residual([1000.0, 1000.0], 600.0)
        assert residual == pytest.approx(400**2 * 2 - 600**2)
        assert not is_on_sphere([1000.0, 1000.0], 600.0)

    def test_restricted_form_matches_full_form(self):
        """A zero coordinate contributes r², so both forms agree"""
        r = 100.0
        reserves = [r - math.sqrt(r * r), 150.0, r - math.sqrt(r * r - 50.0**2)]
        assert reserves[0] == 0.0
        full = invariant_residual(reserves, r)
        restricted = invariant_residual(reserves, r, active=[1, 2])
        assert full == pytest.approx(restricted)


class TestClassify:
    """classify"""

    def test_interior(self):
        assert classify([1.0, 2.0, 3.0]) == Interior()

    def test_boundary_carries_positive_subset(self):
        status = classify([1.0, 0.0, 3.0])
        assert status == Boundary(positive=(0, 2))
        assert status.includes(0)
        assert not status.includes(1)

    def test_tiny_reserve_is_boundary(self):
        """Reserves at or below epsilon count as zero"""
        assert isinstance(classify([1e-12, 1.0]), Boundary)


class TestSolveOutputUpperSide:
    """Output reserve above the center (Scenario 1 pool)"""

    def test_full_fill(self):
        """100 in at [1000, 1000], r=600: output in (0, 100), lands on the sphere"""
        fill = solve_output([1000.0, 1000.0], 600.0, 0, 1, 100.0)
        assert fill.consumed_amount_in == 100.0
        assert not fill.becomes_boundary
        assert 0 < fill.amount_out < 100
        assert fill.amount_out == pytest.approx(1000.0 - (600.0 + math.sqrt(110000.0)))
        assert is_on_sphere([1100.0, 1000.0 - fill.amount_out], 600.0)

    def test_capacity_cap(self):
        """rem < 0: input capped, output reserve driven exactly to r"""
        fill = solve_output([1000.0, 1000.0], 600.0, 0, 1, 500.0)
        assert fill.consumed_amount_in == pytest.approx(200.0)
        assert fill.amount_out == pytest.approx(400.0)
        assert not fill.becomes_boundary

    def test_opposite_sides_exceeds_capacity(self):
        """Input below center cannot pull an above-center output reserve down"""
        with pytest.raises(ExceedsCapacityError):
            solve_output([500.0, 1000.0], 600.0, 0, 1, 10.0)

    def test_input_outside_sphere_is_rejected(self):
        """Input reserve far below center: the capacity cap lies above r"""
        with pytest.raises(ExceedsCapacityError):
            solve_output([100.0, 1000.0, 1400.0], 600.0, 0, 1, 10.0)

    def test_consumed_never_exceeds_input(self):
        for amount in (50.0, 150.0, 199.0, 250.0):
            fill = solve_output([1000.0, 1000.0], 600.0, 0, 1, amount)
            assert fill.consumed_amount_in <= amount

    def test_inside_sphere_small_input_has_no_root(self):
        """[1000, 1000] at r=600 needs √(600² - 400²) - 400 ≈ 47.21 in to reach the sphere"""
        with pytest.raises(ExceedsCapacityError):
            solve_output([1000.0, 1000.0], 600.0, 0, 1, 47.0)
        fill = solve_output([1000.0, 1000.0], 600.0, 0, 1, 48.0)
        assert 0 < fill.amount_out < 1.0
        assert fill.amount_out == pytest.approx(1000.0 - (600.0 + math.sqrt(600.0**2 - 448.0**2)))


class TestSolveOutputLowerSide:
    """Output reserve below the center"""

    def test_full_fill(self):
        reserves = lower_point(100.0, 3)
        fill = solve_output(reserves, 100.0, 0, 1, 5.0)
        assert fill.consumed_amount_in == 5.0
        assert 0 < fill.amount_out < reserves[1]
        after = [reserves[0] + 5.0, reserves[1] - fill.amount_out, reserves[2]]
        assert is_on_sphere(after, 100.0)

    def test_saturation_back_solves_input(self):
        """b <= 0: output token emptied, exact input reported"""
        reserves = lower_point(100.0, 3)
        fill = solve_output(reserves, 100.0, 0, 1, 30.0)
        assert fill.becomes_boundary
        assert fill.amount_out == reserves[1]

        others_sq = (reserves[2] - 100.0) ** 2
        a_star = 100.0 - math.sqrt(100.0**2 * 2 - others_sq - 100.0**2)
        assert fill.consumed_amount_in == pytest.approx(a_star - reserves[0])
        assert fill.consumed_amount_in < 30.0

        after = [reserves[0] + fill.consumed_amount_in, 0.0, reserves[2]]
        assert is_on_sphere(after, 100.0)
        assert invariant_residual(after, 100.0, active=[0, 2]) == pytest.approx(0.0, abs=1e-6)

    def test_input_past_center_exceeds_capacity(self):
        with pytest.raises(ExceedsCapacityError):
            solve_output([700.0, 100.0], 600.0, 0, 1, 10.0)


class TestSolveOutputValidation:
    """Argument checks"""

    def test_non_positive_amount(self):
        with pytest.raises(InvalidArgumentError):
            solve_output([1000.0, 1000.0], 600.0, 0, 1, 0.0)

    def test_same_token(self):
        with pytest.raises(InvalidArgumentError):
            solve_output([1000.0, 1000.0], 600.0, 1, 1, 10.0)

    def test_non_positive_plane_constant(self):
        with pytest.raises(InvalidArgumentError):
            solve_output([1000.0, 1000.0], 0.0, 0, 1, 10.0)


class TestSpotPrice:
    """spot_price"""

    def test_balanced_price_is_one(self):
        assert spot_price([1000.0, 1000.0, 1000.0], 600.0, 0, 2) == pytest.approx(1.0)

    def test_slope(self):
        """(x_from - r)/(x_to - r)"""
        assert spot_price([1100.0, 900.0], 600.0, 0, 1) == pytest.approx(500.0 / 300.0)

    def test_undefined_at_center(self):
        with pytest.raises(InvalidArgumentError):
            spot_price([1000.0, 600.0], 600.0, 0, 1)
