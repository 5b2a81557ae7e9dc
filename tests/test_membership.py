import math

import pytest

from fuzzy_engine.membership import MembershipFunction, trapezoid, triangle


def test_triangle_membership_function():
    params = (4.0, 10.0, 16.0)
    assert triangle(10.0, *params) == 1.0
    assert triangle(7.0, *params) == pytest.approx(0.5)
    assert triangle(13.0, *params) == pytest.approx(0.5)
    assert triangle(4.0, *params) == 0.0
    assert triangle(16.0, *params) == 0.0
    assert triangle(-3.0, *params) == 0.0
    assert triangle(40.0, *params) == 0.0


def test_trapezoid_membership_function():
    params = (-1.0, 0.0, 4.0, 8.0)
    assert trapezoid(-1.0, *params) == 0.0
    assert trapezoid(-0.5, *params) == pytest.approx(0.5)
    assert trapezoid(0.0, *params) == 1.0
    assert trapezoid(4.0, *params) == 1.0
    assert trapezoid(6.0, *params) == pytest.approx(0.5)
    assert trapezoid(8.0, *params) == 0.0
    assert trapezoid(9.0, *params) == 0.0


@pytest.mark.parametrize("x", [2.0, 2.5, 3.0, 3.5, 4.0])
def test_trapezoid_plateau_is_exactly_one(x):
    assert trapezoid(x, 0.0, 2.0, 4.0, 6.0) == 1.0


def test_zero_width_ramps_do_not_divide():
    # "far" and "spamming" close their plateau on the outer point itself.
    assert trapezoid(99.9, 10.0, 16.0, 100.0, 100.0) == 1.0
    assert trapezoid(100.0, 10.0, 16.0, 100.0, 100.0) == 0.0
    assert trapezoid(200.0, 10.0, 16.0, 100.0, 100.0) == 0.0
    assert trapezoid(20.0, 5.0, 8.0, 20.0, 20.0) == 0.0
    assert triangle(0.0, 0.0, 0.0, 5.0) == 0.0
    assert triangle(1.0, 0.0, 0.0, 5.0) == pytest.approx(0.8)
    assert triangle(5.0, 0.0, 5.0, 5.0) == 0.0


@pytest.mark.parametrize(
    "params",
    [
        (4.0, 10.0, 16.0),
        (30.0, 50.0, 70.0),
        (-1.0, 0.0, 30.0, 40.0),
        (60.0, 80.0, 100.0, 101.0),
        (80.0, 110.0, 120.0, 121.0),
    ],
)
def test_membership_is_bounded_and_monotonic_on_ramps(params):
    mf = MembershipFunction("shape", params)
    lo, hi = params[0] - 5.0, params[-1] + 5.0
    xs = [lo + i * (hi - lo) / 400 for i in range(401)]
    ys = [mf.degree(x) for x in xs]

    assert all(0.0 <= y <= 1.0 for y in ys)
    assert all(y == 0.0 for x, y in zip(xs, ys) if x <= params[0] or x >= params[-1])

    peak_lo, peak_hi = params[1], params[-2]
    rising = [y for x, y in zip(xs, ys) if params[0] <= x <= peak_lo]
    falling = [y for x, y in zip(xs, ys) if peak_hi <= x <= params[-1]]
    assert rising == sorted(rising)
    assert falling == sorted(falling, reverse=True)


def test_membership_function_dispatches_on_point_count():
    tri = MembershipFunction("medium", (4, 10, 16))
    trap = MembershipFunction("close", [-1, 0, 4, 8])

    assert tri.shape == "triangle"
    assert trap.shape == "trapezoid"
    assert tri.params == (4.0, 10.0, 16.0)
    assert tri.degree(10) == 1.0
    assert trap.degree(6) == pytest.approx(0.5)


@pytest.mark.parametrize(
    "params",
    [
        (16.0, 10.0, 4.0),
        (0.0, 5.0, 3.0),
        (0.0, 4.0, 2.0, 8.0),
        (0.0, 1.0, 2.0, 1.5),
        (0.0, math.nan, 2.0),
        (4.0, 10.0, math.inf),
        (-math.inf, 0.0, 4.0, 8.0),
        (10.0, 16.0, 100.0, math.inf),
        (-math.inf, -math.inf, 5.0),
        (0.0, 1.0),
        (0.0, 1.0, 2.0, 3.0, 4.0),
    ],
)
def test_malformed_control_points_fail_at_construction(params):
    with pytest.raises(ValueError):
        MembershipFunction("bad", params)


def test_infinite_plateau_ends_are_accepted():
    far = MembershipFunction("far", (10.0, 16.0, math.inf, math.inf))
    close = MembershipFunction("close", (-math.inf, -math.inf, 0.0, 4.0))

    assert far.degree(13.0) == pytest.approx(0.5)
    assert far.degree(1e9) == 1.0
    assert close.degree(-1e9) == 1.0
    assert close.degree(2.0) == pytest.approx(0.5)
