import numpy as np
import pytest

from circstats.utils import A1inv, angmod, circ_dist, data2rad, rad2data


def test_data2rad():

    # Ch26 Example 1.1 (Zar, 2010, P647)
    a = data2rad(data=6, k=24)
    np.testing.assert_approx_equal(np.rad2deg(a), 90.0, significant=1)

    # Ch26 Example 1.3 (Zar, 2010, P647)
    a = data2rad(data=45, k=365)
    np.testing.assert_approx_equal(np.rad2deg(a), 44.38, significant=2)

    # degrees by default, lists accepted
    np.testing.assert_allclose(data2rad([0, 90, 180]), [0, np.pi / 2, np.pi])


def test_rad2data():

    # Ch26 (Zar, 2010, P653)
    a = np.deg2rad(270)
    np.testing.assert_approx_equal(rad2data(rad=a, k=24), 18, significant=0)
    np.testing.assert_allclose(rad2data([np.pi, 2 * np.pi]), [180, 360])


def test_angmod():

    # angles are wrapped into [0, 2π) before the U2 sweeps sort them
    np.testing.assert_allclose(angmod(np.deg2rad([-90, 370])), np.deg2rad([270, 10]))
    assert angmod(2 * np.pi) == 0
    assert angmod(-2 * np.pi) == 0
    assert isinstance(angmod(-np.pi / 2), float)

    # same order as the angles measured from zero
    rng = np.random.default_rng(2046)
    turns = rng.integers(-3, 4, size=50)
    theta = rng.uniform(0, 2 * np.pi, size=50)
    wrapped = angmod(theta + 2 * np.pi * turns)
    assert np.all((wrapped >= 0) & (wrapped < 2 * np.pi))
    np.testing.assert_allclose(wrapped, theta, atol=1e-12)
    np.testing.assert_array_equal(np.argsort(wrapped), np.argsort(theta))

    # other ranges
    np.testing.assert_allclose(angmod(3 * np.pi / 2, [-np.pi, np.pi]), -np.pi / 2)

    with pytest.raises(ValueError):
        angmod(0.0, [np.pi, 0])


def test_circ_dist():

    assert circ_dist(0, 0) == 0
    assert circ_dist(0, 1) == 1
    assert circ_dist(-1, 0) == 1
    assert circ_dist(0, -1) == -1
    np.testing.assert_almost_equal(circ_dist(2.1, 2.0), -0.1)
    np.testing.assert_almost_equal(circ_dist(340.1, 0.1, degrees=True), 20.0)

    # always the shorter way round
    np.testing.assert_almost_equal(circ_dist(350, 10, degrees=True), 20.0)
    np.testing.assert_almost_equal(circ_dist(10, 350, degrees=True), -20.0)
    np.testing.assert_almost_equal(circ_dist(0, 3 * np.pi / 2), -np.pi / 2)


def test_circ_dist_properties():
    rng = np.random.default_rng(2046)
    a = rng.uniform(-10, 10, size=200)
    b = rng.uniform(-10, 10, size=200)

    d = circ_dist(a, b)
    assert np.all(d >= -np.pi) and np.all(d < np.pi)

    # antisymmetric away from the ±π branch point
    away = np.abs(np.abs(d) - np.pi) > 1e-9
    np.testing.assert_allclose(d[away], -circ_dist(b, a)[away], atol=1e-12)

    np.testing.assert_array_equal(circ_dist(a, a), np.zeros_like(a))

    # degree and radian computations agree
    np.testing.assert_allclose(
        circ_dist(a, b),
        np.deg2rad(circ_dist(np.rad2deg(a), np.rad2deg(b), degrees=True)),
        atol=1e-12,
    )


def test_A1inv():

    # each branch of the approximation
    np.testing.assert_almost_equal(A1inv(0), 0)
    np.testing.assert_almost_equal(A1inv(0.5), 2 * 0.5 + 0.5**3 + 5 * 0.5**5 / 6)
    np.testing.assert_almost_equal(A1inv(0.7), -0.4 + 1.39 * 0.7 + 0.43 / 0.3)
    np.testing.assert_almost_equal(A1inv(0.9), 1 / (0.9**3 - 4 * 0.9**2 + 3 * 0.9))
    assert A1inv(1.0) == np.inf

    # monotonically increasing
    R = np.linspace(0, 0.99, 100)
    assert np.all(np.diff([A1inv(r) for r in R]) > 0)
