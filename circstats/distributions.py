import warnings
from dataclasses import dataclass
from typing import Union

import numpy as np
from scipy.stats import vonmises

from .descriptive import _coerce_sample, circ_mean, compute_C_and_S
from .utils import A1inv, data2rad, rad2data

__all__ = [
    "VonMisesParams",
    "estimate_kappa",
    "fit_vonmises",
    "vonmises_cdf",
    "vonmises_pdf",
]


@dataclass(frozen=True)
class VonMisesParams:
    """Parameters of a fitted von Mises distribution.

    Attributes
    ----------
    mu : float
        Mean direction, in degrees if `degrees` is True.
    kappa : float
        Concentration (kappa >= 0).
    degrees : bool
        `mu` is in degrees.

    `cdf` and `pdf` always take angles in radian, whatever the unit of
    `mu`, so the `cdf` of any fit can be handed to `watson_u2n_test`.
    """

    mu: float
    kappa: float
    degrees: bool = False

    @property
    def mu_rad(self) -> float:
        return data2rad(self.mu) if self.degrees else self.mu

    def cdf(self, x: Union[np.ndarray, float]) -> Union[np.ndarray, float]:
        return vonmises_cdf(x, self.mu_rad, self.kappa)

    def pdf(self, x: Union[np.ndarray, float]) -> Union[np.ndarray, float]:
        return vonmises_pdf(x, self.mu_rad, self.kappa)

    def __iter__(self):
        yield self.mu
        yield self.kappa


def vonmises_pdf(
    x: Union[np.ndarray, float],
    mu: float,
    kappa: float,
    degrees: bool = False,
) -> Union[np.ndarray, float]:
    r"""
    Probability density function of the von Mises distribution.

    $$
    f(\theta) = \frac{e^{\kappa \cos(\theta - \mu)}}{2\pi I_0(\kappa)}
    $$

    Parameters
    ----------
    x : array_like
        Points at which to evaluate the density.
    mu : float
        Mean direction.
    kappa : float
        Concentration (kappa >= 0).
    degrees : bool
        `x` and `mu` are in degrees. The density is still per radian.

    Returns
    -------
    pdf_values : array_like
    """
    if degrees:
        x, mu = data2rad(x), data2rad(mu)
    return vonmises.pdf(x, kappa, loc=mu)


def vonmises_cdf(
    x: Union[np.ndarray, float],
    mu: float,
    kappa: float,
    degrees: bool = False,
) -> Union[np.ndarray, float]:
    r"""
    Cumulative distribution function of the von Mises distribution.

    Evaluated with `scipy.stats.vonmises`, whose CDF is defined on the
    whole real line: it is 0 at $\mu - \pi$, 1 at $\mu + \pi$ and grows by
    one for every further turn. The probability mass between two angles
    $a < b$ is therefore `cdf(b) - cdf(a)`.

    Parameters
    ----------
    x : array_like
        Points at which to evaluate the CDF.
    mu : float
        Mean direction.
    kappa : float
        Concentration (kappa >= 0).
    degrees : bool
        `x` and `mu` are in degrees.

    Returns
    -------
    cdf_values : array_like
    """
    if degrees:
        x, mu = data2rad(x), data2rad(mu)
    return vonmises.cdf(x, kappa, loc=mu)


def estimate_kappa(alpha: np.ndarray, mu: float) -> float:
    r"""
    Maximum likelihood estimate of the von Mises concentration.

    $$ \bar{R} = \frac{1}{n}\sum \cos(\theta_i - \mu) $$

    $$
    \hat\kappa =
    \begin{cases}
     2\bar{R} + \bar{R}^3 + 5\bar{R}^5/6, & \text{if } \bar{R} < 0.53  \\
     -0.4 + 1.39 \bar{R} + 0.43 / (1 - \bar{R}), & \text{if } 0.53 \le \bar{R} < 0.85\\
        1 / (\bar{R}^3 - 4\bar{R}^2 + 3\bar{R}), & \text{if } \bar{R} \ge 0.85
    \end{cases}
    $$

    Parameters
    ----------
    alpha: np.ndarray
        Angles in radian.
    mu: float
        Mean direction in radian.

    Returns
    -------
    kappa: float

    Note
    ----
    The approximation of Best and Fisher (1981) may be unreliable for
    small R (< 0.7); a RuntimeWarning is issued but the estimate is still
    returned.
    """
    alpha = np.asarray(alpha, dtype=float)
    # R >= 0 when mu is the mean direction; rounding can dip below zero
    Cbar, _ = compute_C_and_S(alpha, np.ones_like(alpha), mean=mu)
    R = max(Cbar, 0.0)
    if R < 0.7:
        warnings.warn(
            f"Mean resultant length R={R:.3f} < 0.7; the estimate of kappa may be unreliable.",
            RuntimeWarning,
            stacklevel=2,
        )

    return A1inv(R)


def fit_vonmises(
    alpha: np.ndarray,
    degrees: bool = False,
    axial: bool = False,
) -> VonMisesParams:
    """
    Fit a von Mises distribution to a sample of angles.

    Parameters
    ----------
    alpha: np.array (n, )
        Angles.
    degrees: bool
        `alpha` is in degrees and `mu` is returned in degrees.
    axial: bool
        Data are axial; the fit is made to the doubled angles and the
        returned parameters describe the doubled-angle distribution.

    Returns
    -------
    VonMisesParams
        Mean direction `mu` and concentration `kappa`. Unpacks as
        `mu, kappa = fit_vonmises(alpha)`.
    """
    alpha, _ = _coerce_sample(alpha, None, degrees)
    if axial:
        alpha = 2 * alpha

    mu = circ_mean(alpha)
    kappa = estimate_kappa(alpha, mu)

    if degrees:
        return VonMisesParams(mu=rad2data(mu), kappa=kappa, degrees=True)
    return VonMisesParams(mu=mu, kappa=kappa)
