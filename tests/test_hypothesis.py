import numpy as np
import pytest
from scipy.stats import vonmises

from circstats.distributions import fit_vonmises
from circstats.exceptions import DegenerateResultError, InvalidArgumentError
from circstats.hypothesis import (
    V_test,
    VTestResult,
    watson_u2_test,
    watson_u2n_test,
    watson_williams_test,
)

# Test 95 of Kanji (2006)
data_kanji_test95 = np.array(
    [250, 275, 285, 285, 290, 290, 295, 300, 305, 310, 315, 320, 330, 330, 5]
)

# Test 96 of Kanji (2006)
data_kanji_test96 = np.array(
    [20, 135, 145, 165, 170, 200, 300, 325, 335, 350, 350, 350, 355]
)


def test_V_test():

    result = V_test(data_kanji_test95, angle=265, sig_level=0.01, degrees=True)
    assert isinstance(result, VTestResult)
    assert result.reject
    np.testing.assert_allclose(result.V, 3.884, atol=0.1)
    np.testing.assert_allclose(result.Vcrit, 2.302, atol=0.01)

    # unpacks as (reject, V, Vcrit)
    reject, V, Vcrit = V_test(
        np.deg2rad(data_kanji_test95), angle=np.deg2rad(265), sig_level=0.01
    )
    assert reject == result.reject
    np.testing.assert_allclose(V, result.V)
    assert Vcrit == result.Vcrit

    # pointing away from the preferred direction
    result = V_test(data_kanji_test95, angle=85, sig_level=0.01, degrees=True)
    assert not result.reject
    assert result.V < 0


def test_V_test_invalid():
    with pytest.raises(InvalidArgumentError, match="n >= 5"):
        V_test([0, 10, 20, 30], angle=0, degrees=True)
    with pytest.raises(InvalidArgumentError, match="Significance level"):
        V_test(data_kanji_test95, angle=265, sig_level=0.02, degrees=True)


def test_watson_u2n_test():

    # against the uniform distribution
    result = watson_u2n_test(
        data_kanji_test96, lambda x: x / (2 * np.pi), sig_level=0.05, degrees=True
    )
    assert not result.reject
    np.testing.assert_allclose(result.U2, 0.1361, atol=0.0001)
    np.testing.assert_allclose(result.U2crit, 0.184, atol=0.002)

    # same sample in radian
    reject, U2, _ = watson_u2n_test(
        np.deg2rad(data_kanji_test96), lambda x: x / (2 * np.pi)
    )
    assert reject == result.reject
    np.testing.assert_allclose(U2, result.U2)


def test_watson_u2n_test_vonmises():
    sample = vonmises.rvs(5, loc=1, size=40, random_state=2046)

    # von Mises fitted to the sample by default
    result = watson_u2n_test(sample)
    expected = watson_u2n_test(sample, cdf=fit_vonmises(sample).cdf)
    np.testing.assert_allclose(result.U2, expected.U2)
    assert result.U2crit == expected.U2crit

    # two clusters on opposite sides do not fit a single von Mises
    bimodal = np.concatenate(
        [np.linspace(-0.1, 0.1, 25), np.pi + np.linspace(-0.1, 0.1, 15)]
    )
    with pytest.warns(RuntimeWarning):
        result = watson_u2n_test(bimodal)
    assert result.reject


def test_watson_u2_test():

    theta = np.array([38, 45, 46, 52, 53, 54, 56, 57, 60, 64])
    phi = np.array([36, 40, 44, 45, 51, 51, 52, 54, 54, 55, 55, 56, 67, 78, 89, 314])

    result = watson_u2_test(theta, phi, sig_level=0.05, degrees=True)
    assert not result.reject
    np.testing.assert_allclose(result.U2, 0.0427, atol=0.0001)
    np.testing.assert_allclose(result.U2crit, 0.1856, atol=0.02)

    # order of the samples does not matter
    swapped = watson_u2_test(phi, theta, sig_level=0.05, degrees=True)
    np.testing.assert_allclose(swapped.U2, result.U2)
    assert swapped.U2crit == result.U2crit

    # identical samples do not differ at all
    reject, U2, _ = watson_u2_test(theta, theta, degrees=True)
    assert not reject
    assert U2 == 0


def test_watson_u2_test_different_samples():
    theta = np.linspace(0, 60, 20)
    phi = np.linspace(180, 240, 20)
    result = watson_u2_test(theta, phi, sig_level=0.001, degrees=True)
    assert result.reject
    assert result.U2crit == 0.290


def test_verbose(capsys):
    V_test(data_kanji_test95, angle=265, sig_level=0.01, degrees=True, verbose=True)
    out = capsys.readouterr().out
    assert "V test" in out
    assert "Reject H0: Yes" in out

    watson_u2n_test(
        data_kanji_test96, lambda x: x / (2 * np.pi), degrees=True, verbose=True
    )
    out = capsys.readouterr().out
    assert "Reject H0: No" in out


def test_result_asdict():
    result = V_test(data_kanji_test95, angle=265, sig_level=0.01, degrees=True)
    d = result.asdict()
    assert list(d) == ["reject", "V", "Vcrit"]
    assert d["V"] == result.V

    with pytest.raises(AttributeError):
        result.V = 0.0


def test_watson_williams_test():
    with pytest.raises(NotImplementedError):
        watson_williams_test([10, 20, 30], [40, 50, 60], degrees=True)


def test_watson_u2n_test_axial():
    # undirected lines; the second half points the opposite way
    data = np.array([10, 25, 30, 35, 40, 15, 195, 200, 210, 220, 205, 208])
    uniform = lambda x: x / (2 * np.pi)  # noqa: E731

    result = watson_u2n_test(data, uniform, degrees=True, axial=True)

    # degrees and radians agree
    reject, U2, U2crit = watson_u2n_test(np.deg2rad(data), uniform, axial=True)
    assert reject == result.reject
    np.testing.assert_allclose(U2, result.U2)
    assert U2crit == result.U2crit

    # same as testing the doubled angles directly
    doubled = watson_u2n_test(2 * data, uniform, degrees=True)
    np.testing.assert_allclose(doubled.U2, result.U2)

    # reversing a line does not change the test
    flipped = np.where(data >= 180, data - 180, data)
    np.testing.assert_allclose(
        watson_u2n_test(flipped, uniform, degrees=True, axial=True).U2, result.U2
    )

    # fitted von Mises on the doubled angles
    fitted = watson_u2n_test(data, degrees=True, axial=True)
    fitted_rad = watson_u2n_test(np.deg2rad(data), axial=True)
    np.testing.assert_allclose(fitted.U2, fitted_rad.U2)
    params = fit_vonmises(data, degrees=True, axial=True)
    expected = watson_u2n_test(data, cdf=params.cdf, degrees=True, axial=True)
    np.testing.assert_allclose(fitted.U2, expected.U2)


def test_watson_u2n_test_identical_angles():
    with pytest.raises(DegenerateResultError, match="coincide"):
        watson_u2n_test([1.0] * 5)

    with pytest.raises(DegenerateResultError, match="not finite"):
        watson_u2n_test(data_kanji_test96, lambda x: np.nan, degrees=True)


def test_watson_u2n_test_degree_fit():
    # a fit made in degrees still evaluates its cdf in radian
    params = fit_vonmises(data_kanji_test95, degrees=True)
    result = watson_u2n_test(data_kanji_test95, cdf=params.cdf, degrees=True)
    default = watson_u2n_test(data_kanji_test95, degrees=True)
    np.testing.assert_allclose(result.U2, default.U2)
