from typing import Optional, Tuple, Union

import numpy as np

from .exceptions import DegenerateResultError, InvalidArgumentError
from .utils import circ_dist, data2rad, rad2data


def circ_r(
    alpha: Optional[np.ndarray] = None,
    w: Optional[np.ndarray] = None,
    bin_size: Optional[float] = None,
    degrees: bool = False,
    Cbar: Optional[float] = None,
    Sbar: Optional[float] = None,
) -> float:
    r"""
    Circular mean resultant vector length (r).

    $$
    r = \sqrt{\bar{C}^2 + \bar{S}^2}
    $$

    For data grouped into bins of width $c$, the bias of $r$ is corrected
    with (Rayleigh's correction for grouped data)

    $$
    r_c = r \frac{c}{2 \sin(c / 2)}
    $$

    Parameters
    ----------
    alpha: np.array (n, )
        Angles.
    w: np.array (n,)
        Frequencies or weights
    bin_size: float or None
        Interval size of grouped data, in the same unit as `alpha`.
    degrees: bool
        `alpha` and `bin_size` are in degrees.
    Cbar, Sbar: float
        Precomputed intermediate values

    Returns
    -------
    r: float
        Resultant vector length, from 0 (uniform) to 1 (all angles equal).

    References
    ----------
    - Implementation of Example 26.5 (Zar, 2010)
    - Equation 26.15-16 (Zar, 2010)
    """
    if Cbar is None or Sbar is None:
        if alpha is None:
            raise InvalidArgumentError(
                "`alpha` is needed for computing the resultant vector length."
            )
        alpha, w = _coerce_sample(alpha, w, degrees)
        Cbar, Sbar = compute_C_and_S(alpha, w)

    r = float(np.sqrt(Cbar**2 + Sbar**2))

    if bin_size:
        c = data2rad(bin_size) if degrees else bin_size
        r = r * c / (2 * np.sin(c / 2))  # eq(26.16)

    return r


def circ_mean(
    alpha: np.ndarray,
    w: Optional[np.ndarray] = None,
    degrees: bool = False,
) -> float:
    r"""
    Circular mean (m).

    $$ \bar\theta = \mathrm{atan2}\left(\sum \sin\theta_i, \sum \cos\theta_i\right) $$

    Parameters
    ----------
    alpha: np.array (n, )
        Angles.
    w: np.array (n,)
        Frequencies or weights
    degrees: bool
        `alpha` is in degrees and the mean is returned in degrees.

    Returns
    -------
    m: float
        Circular mean in (-π, π] (or (-180, 180]).

    Note
    ----
    When the resultant is exactly zero the direction is undefined and the
    value is whatever `np.arctan2` returns for the (vanishing) sums.
    """
    alpha, w = _coerce_sample(alpha, w, degrees)
    Cbar, Sbar = compute_C_and_S(alpha, w)
    m = float(np.arctan2(Sbar, Cbar))

    return rad2data(m) if degrees else m


def circ_mean_and_r(
    alpha: np.ndarray,
    w: Optional[np.ndarray] = None,
    degrees: bool = False,
) -> Tuple[float, float]:
    """
    Circular mean (m) and resultant vector length (r), computed in one pass.

    Parameters
    ----------
    alpha: np.array (n, )
        Angles.
    w: np.array (n,)
        Frequencies or weights
    degrees: bool
        `alpha` is in degrees and the mean is returned in degrees.

    Returns
    -------
    m: float
        Circular mean
    r: float
        Resultant vector length
    """
    alpha, w = _coerce_sample(alpha, w, degrees)
    Cbar, Sbar = compute_C_and_S(alpha, w)
    m = float(np.arctan2(Sbar, Cbar))
    r = circ_r(Cbar=Cbar, Sbar=Sbar)

    return (rad2data(m) if degrees else m), r


def circ_var(
    alpha: np.ndarray,
    w: Optional[np.ndarray] = None,
    degrees: bool = False,
) -> float:
    r"""
    Circular variance

    $$ V = 1 - \frac{1}{n}\sum_{i=1}^{n} \cos(\theta_i - \bar\theta) $$

    Parameters
    ----------
    alpha: np.array (n, )
        Angles.
    w: np.array (n,) or None
        Frequencies or weights
    degrees: bool
        `alpha` is in degrees.

    Returns
    -------
    variance: float
        Circular variance, range from 0 to 1.

    References
    ----------
    - Equation 2.11 of Fisher (1993)
    """
    alpha, w = _coerce_sample(alpha, w, degrees)
    m = circ_mean(alpha, w)
    variance = 1 - np.sum(w * np.cos(alpha - m)) / np.sum(w)

    return float(variance)


def circ_std(
    alpha: Optional[np.ndarray] = None,
    w: Optional[np.ndarray] = None,
    bin_size: Optional[float] = None,
    degrees: bool = False,
    r: Optional[float] = None,
) -> float:
    r"""
    Circular standard deviation (s).

    $$ s = \sqrt{-2 \ln r} $$

    Parameters
    ----------
    alpha: np.array (n, ) or None
        Angles.
    w: np.array (n,) or None
        Frequencies or weights
    bin_size: float
        Interval size of grouped data.
        Needed for correcting biased r.
    degrees: bool
        `alpha` and `bin_size` are in degrees; `s` is returned in degrees.
    r: float or None
        Precomputed resultant vector length.

    Returns
    -------
    s: float
        Circular standard deviation. Infinite when r is 0.

    References
    ----------
    Implementation of Equation 26.21 (Zar, 2010)
    """
    if r is None:
        r = circ_r(alpha=alpha, w=w, bin_size=bin_size, degrees=degrees)

    with np.errstate(divide="ignore"):
        s = float(np.sqrt(-2 * np.log(r)))

    return rad2data(s) if degrees else s


def circ_median(
    alpha: np.ndarray,
    degrees: bool = False,
    axial: bool = False,
) -> float:
    r"""
    Circular median.

    A median is a diameter that splits the data into two equal halves,
    with more points lying on the near side of its direction than on the
    far side (Mardia & Jupp, 2000, Section 2.2.2).

    Trial diameters pass through the data points themselves when n is
    odd, and through the circular means of neighbouring points (including
    the last and first) when n is even.

    Parameters
    ----------
    alpha: np.array (n, )
        Angles.
    degrees: bool
        `alpha` is in degrees and the median is returned in degrees.
    axial: bool
        Data are axial (period π, or 180 degrees).

    Returns
    -------
    median: float

    Raises
    ------
    DegenerateResultError
        If no trial diameter splits the data evenly.

    Note
    ----
    If there is more than one median, their circular mean is returned
    (Otieno & Anderson-Cook, 2003, Journal of Modern Applied Statistical
    Methods, 2(1), 168-176).
    """
    alpha, _ = _coerce_sample(alpha, None, degrees)
    alpha = np.sort(alpha)
    if axial:
        alpha = 2 * alpha
    n = alpha.size

    # trial bisectors
    if n % 2 == 0:
        p = np.array([circ_mean(alpha[[i, (i + 1) % n]]) for i in range(n)])
    else:
        p = alpha

    medians = []
    for candidate in p:
        d = circ_dist(candidate, alpha)
        n_plus = np.sum(d > 0)
        n_minus = np.sum(d < 0)
        if n_plus != n_minus:
            continue
        # the diameter has two ends; pick the one most points are close to
        near = np.sum(np.abs(d) <= np.pi / 2)
        far = np.sum(np.abs(d) > np.pi / 2)
        if near > far:
            medians.append(candidate)
        else:
            medians.append(np.mod(candidate, 2 * np.pi) - np.pi)

    if len(medians) > 1:
        median = circ_mean(np.array(medians))
    elif len(medians) == 1:
        median = float(medians[0])
    else:
        raise DegenerateResultError(
            "No circular median found. Are the data axial but `axial` is False?"
        )

    if axial:
        median = median / 2

    return rad2data(median) if degrees else median


#########################
# Convinience functions #
#########################


def compute_C_and_S(
    alpha: np.ndarray,
    w: np.ndarray,
    mean: float = 0.0,
) -> Tuple[float, float]:
    r"""
    Weighted mean cosine and sine of the angles about a reference direction.

    $$
    \displaylines{
    \bar{C} = \frac{\sum w_{i} \cos(\theta_{i} - \mu)}{\sum w_i} \\
    \bar{S} = \frac{\sum w_{i} \sin(\theta_{i} - \mu)}{\sum w_i}
    }
    $$

    About $\mu = 0$ these are the components of the mean resultant
    vector; about the mean direction, $\bar{C}$ is the $\bar{R}$ used to
    estimate kappa.

    Parameters
    ----------
    alpha: np.ndarray
        Angles in radian.
    w: np.ndarray
        Frequencies or weights.
    mean: float
        Reference direction in radian.

    Returns
    -------
    Cbar, Sbar: float
    """
    total = np.sum(w)
    Cbar = float(np.sum(w * np.cos(alpha - mean)) / total)
    Sbar = float(np.sum(w * np.sin(alpha - mean)) / total)

    return Cbar, Sbar


def _coerce_sample(
    alpha: Union[np.ndarray, list, float],
    w: Optional[np.ndarray] = None,
    degrees: bool = False,
) -> Tuple[np.ndarray, np.ndarray]:
    """Validate a sample and return (angles in radian, weights)."""
    alpha = np.asarray(alpha, dtype=float)
    if alpha.ndim == 0:
        alpha = alpha.reshape(1)
    if alpha.ndim != 1:
        raise InvalidArgumentError("`alpha` must be a one-dimensional array of angles.")
    if alpha.size == 0:
        raise InvalidArgumentError("`alpha` must contain at least one angle.")
    if not np.all(np.isfinite(alpha)):
        raise InvalidArgumentError("Angles must be finite.")

    if w is None:
        w = np.ones_like(alpha)
    else:
        w = np.asarray(w, dtype=float)
        if w.shape != alpha.shape:
            raise InvalidArgumentError(
                f"`w` must have the same shape as `alpha` ({w.shape} != {alpha.shape})."
            )
        if np.any(w < 0) or np.sum(w) <= 0:
            raise InvalidArgumentError("Weights must be non-negative with a positive sum.")

    if degrees:
        alpha = data2rad(alpha)

    return alpha, w
