from dataclasses import dataclass, fields
from typing import Any, Callable, Optional

import numpy as np

from .descriptive import _coerce_sample, circ_mean_and_r
from .distributions import fit_vonmises
from .exceptions import DegenerateResultError, InternalInvariantError
from .tables import (
    V_critical_value,
    watson_u2_critical_value,
    watson_u2n_critical_value,
)
from .utils import angmod, data2rad, rad2data

# maps an angle in radian to a cumulative probability
CDF = Callable[[float], float]


@dataclass(frozen=True)
class TestResult:
    """Base class for hypothesis test results.

    Every result holds, in order, whether the null hypothesis is rejected,
    the test statistic and its critical value, and unpacks as that triple.
    """

    __test__ = False

    def asdict(self) -> dict[str, Any]:
        """Return result data as a dictionary."""
        from dataclasses import asdict

        return asdict(self)

    def __iter__(self):
        return (getattr(self, f.name) for f in fields(self))


@dataclass(frozen=True)
class VTestResult(TestResult):
    reject: bool  # significantly non-uniform towards the given angle
    V: float  # Test Statistic
    Vcrit: float  # Critical value


@dataclass(frozen=True)
class WatsonU2nTestResult(TestResult):
    reject: bool  # sample does not fit the distribution
    U2: float
    U2crit: float


@dataclass(frozen=True)
class WatsonU2TestResult(TestResult):
    reject: bool  # samples come from different distributions
    U2: float
    U2crit: float


###################
# One-Sample Test #
###################


def V_test(
    alpha: np.ndarray,
    angle: float,
    sig_level: float = 0.05,
    degrees: bool = False,
    verbose: bool = False,
) -> VTestResult:
    r"""
    Modified Rayleigh Test (V test) for Uniformity versus a Specified Angle.

    - H0: The population is uniformly distributed around the circle.
    - H1: The population is not uniformly distributed around the circle,
        but concentrated towards `angle`.

    $$ V = \sqrt{2n}\, r \cos(\bar\theta - \theta_0) $$

    Parameters
    ----------
    alpha: np.array (n, )
        Angles.
    angle: float
        Expected direction θ0.
    sig_level: float
        Significance level; one of 0.1, 0.05, 0.01, 0.005, 0.001, 0.0001.
    degrees: bool
        `alpha` and `angle` are in degrees.
    verbose: bool
        Print formatted results.

    Returns
    -------
    VTestResult
        `reject`, the statistic `V` and the critical value `Vcrit`.

    Raises
    ------
    InvalidArgumentError
        If n < 5 or `sig_level` is not tabulated.

    Reference
    ---------
    Test 95 and Table 34 of Kanji (2006). 100 Statistical Tests.
    """
    alpha, _ = _coerce_sample(alpha, None, degrees)
    angle = data2rad(float(angle)) if degrees else float(angle)
    n = alpha.size

    mean, r = circ_mean_and_r(alpha)
    V = float(np.sqrt(2 * n) * r * np.cos(mean - angle))
    Vcrit = V_critical_value(n, sig_level)
    result = VTestResult(reject=bool(V > Vcrit), V=V, Vcrit=Vcrit)

    if verbose:
        angle_str = f"{rad2data(angle):.2f} deg" if degrees else f"{angle:.5f} rad"
        print("Modified Rayleigh's Test of Uniformity (V test)")
        print("-----------------------------------------------")
        print("H0: ρ = 0")
        print(f"HA: ρ ≠ 0 and μ = {angle_str}")
        print("")
        _print_decision("V", result.V, result.Vcrit, sig_level, result.reject)

    return result


def watson_u2n_test(
    alpha: np.ndarray,
    cdf: Optional[CDF] = None,
    sig_level: float = 0.05,
    degrees: bool = False,
    axial: bool = False,
    verbose: bool = False,
) -> WatsonU2nTestResult:
    r"""
    Watson's U2n goodness-of-fit test.

    - H0: The sample comes from the distribution with CDF `cdf`.
    - H1: The sample does not come from that distribution.

    With the sorted angles $\theta_1 \le \dots \le \theta_n$ and
    $V_i = F(\theta_i) - F(0)$:

    $$
    U^2_n = \sum V_i^2 - \sum \frac{(2i - 1) V_i}{n}
        + n\left(\frac{1}{3} - \left(\bar V - \frac{1}{2}\right)^2\right)
    $$

    Parameters
    ----------
    alpha: np.array (n, )
        Angles.
    cdf: callable or None
        Cumulative distribution function of the hypothesised distribution,
        taking one angle in radian (doubled, for axial data). If None, a
        von Mises distribution is fitted to the sample with
        `fit_vonmises` and its CDF is used.
    sig_level: float
        Significance level; one of 0.1, 0.05, 0.025, 0.01, 0.005.
    degrees: bool
        `alpha` is in degrees.
    axial: bool
        Data are axial.
    verbose: bool
        Print formatted results.

    Returns
    -------
    WatsonU2nTestResult
        `reject` is True if the sample differs significantly from the
        distribution, with the statistic `U2` and critical value `U2crit`.

    Raises
    ------
    InvalidArgumentError
        If n < 2 or `sig_level` is not tabulated.
    DegenerateResultError
        If the angles all coincide, so no von Mises can be fitted, or the
        statistic is not finite.

    Reference
    ---------
    Test 96 and Table 35 of Kanji (2006). 100 Statistical Tests.
    """
    theta, _ = _coerce_sample(alpha, None, degrees)
    if axial:
        theta = 2 * theta

    if cdf is None:
        params = fit_vonmises(theta)
        if not np.isfinite(params.kappa):
            raise DegenerateResultError(
                "Cannot fit a von Mises distribution: all angles coincide "
                f"(kappa = {params.kappa})."
            )
        cdf = params.cdf

    theta = np.sort(angmod(theta))
    n = theta.size

    origin = float(cdf(0.0))
    V = np.array([float(cdf(t)) for t in theta]) - origin
    Vbar = np.mean(V)
    i = np.arange(1, n + 1)
    U2 = float(
        np.sum(V**2) - np.sum((2 * i - 1) * V / n) + n * (1 / 3 - (Vbar - 0.5) ** 2)
    )
    if not np.isfinite(U2):
        raise DegenerateResultError(
            f"U2 is not finite ({U2}); check that `cdf` returns finite probabilities."
        )
    U2crit = watson_u2n_critical_value(n, sig_level)
    result = WatsonU2nTestResult(reject=bool(U2 > U2crit), U2=U2, U2crit=U2crit)

    if verbose:
        print("Watson's U2n Goodness-of-Fit Test")
        print("---------------------------------")
        print("H0: The sample comes from the given distribution.")
        print("HA: The sample does not come from the given distribution.")
        print("")
        _print_decision("U2", result.U2, result.U2crit, sig_level, result.reject)

    return result


###################
# Two-Sample Test #
###################


def watson_u2_test(
    alpha1: np.ndarray,
    alpha2: np.ndarray,
    sig_level: float = 0.05,
    degrees: bool = False,
    verbose: bool = False,
) -> WatsonU2TestResult:
    r"""Watson's U2 Test for nonparametric two-sample testing.

    - H0: The two samples came from the same population.
    - H1: The two samples did not come from the same population.

    Both samples are sorted and swept together in order; after each step
    $d_k = i/n - j/m$, with $i$ and $j$ the number of angles consumed from
    each sample (tied angles are consumed together).

    $$
    U^2 = \frac{nm}{N^2}\left(\sum d_k^2 - \frac{(\sum d_k)^2}{N}\right)
    $$

    Samples should be measured continuously; Kanji (2006) advises against
    the test for data grouped more coarsely than 5 degrees.

    Parameters
    ----------
    alpha1, alpha2: np.array
        The two samples of angles.
    sig_level: float
        Significance level; one of 0.1, 0.05, 0.01, 0.001.
    degrees: bool
        Samples are in degrees.
    verbose: bool
        Print formatted results.

    Returns
    -------
    WatsonU2TestResult
        `reject` is True if the samples differ significantly, with the
        statistic `U2` and critical value `U2crit`.

    Reference
    ---------
    - Test 97 of Kanji (2006). 100 Statistical Tests.
    - Table 9 of Batschelet (1972).
    """
    theta, _ = _coerce_sample(alpha1, None, degrees)
    phi, _ = _coerce_sample(alpha2, None, degrees)
    theta = np.sort(angmod(theta))
    phi = np.sort(angmod(phi))
    n, m = theta.size, phi.size
    N = n + m

    sum_d, sum_d2 = 0.0, 0.0
    i = j = 0
    while i < n or j < m:
        if i == n:
            j += 1
        elif j == m:
            i += 1
        elif theta[i] < phi[j]:
            i += 1
        elif theta[i] > phi[j]:
            j += 1
        else:
            i += 1
            j += 1
        d = i / n - j / m
        sum_d += d
        sum_d2 += d**2

    if i != n or j != m:
        raise InternalInvariantError(
            f"Sweep consumed {i} of {n} and {j} of {m} angles."
        )

    U2 = n * m / N**2 * (sum_d2 - sum_d**2 / N)
    U2crit = watson_u2_critical_value(n, m, sig_level)
    result = WatsonU2TestResult(reject=bool(U2 > U2crit), U2=U2, U2crit=U2crit)

    if verbose:
        print("Watson's U2 Test for two samples")
        print("---------------------------------------------")
        print("H0: The two samples are from the same population.")
        print("HA: The two samples are not from the same population.")
        print("")
        _print_decision("U2", result.U2, result.U2crit, sig_level, result.reject)

    return result


def watson_williams_test(
    alpha1: np.ndarray,
    alpha2: np.ndarray,
    sig_level: float = 0.05,
    degrees: bool = False,
    axial: bool = False,
) -> bool:
    """The Watson-Williams two-sample test for a common mean direction.

    - H0: Both samples are from populations with the same mean angle.
    - H1: The samples are from populations with different mean angles.

    Assumes both samples are von Mises distributed with a common
    concentration kappa > 2.

    Not implemented yet.
    """
    raise NotImplementedError("The Watson-Williams test is not implemented yet.")


def _print_decision(
    name: str, stat: float, crit: float, sig_level: float, reject: bool
) -> None:
    print(f"Test Statistic: {name} = {stat:.5f}")
    print(f"Critical value ({sig_level}): {crit:.5f}")
    print(f"Reject H0: {'Yes' if reject else 'No'}")
