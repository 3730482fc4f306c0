from typing import Union

import numpy as np


def data2rad(
    data: Union[np.ndarray, list, float, int],
    k: Union[float, int] = 360,  # number of intervals in the full cycle
) -> Union[np.ndarray, float]:
    r"""Convert data measured on a circular scale to
    corresponding angular directions.

    $$ \alpha = \frac{2\pi \times \mathrm{data}}{k} $$

    Parameters
    ----------
    data : np.ndarray, list or float
        Data measured on a circular scale.
    k : float or int
        Number of intervals in the full cycle. Default is 360 (degrees).

    Returns
    -------
    angle: np.ndarray or float
        Angular directions in radian.
    """
    data = np.asarray(data, dtype=float) if isinstance(data, (list, tuple)) else data
    return 2 * np.pi * data / k


def rad2data(
    rad: Union[np.ndarray, list, float, int], k: Union[float, int] = 360
) -> Union[np.ndarray, float]:
    rad = np.asarray(rad, dtype=float) if isinstance(rad, (list, tuple)) else rad
    return k * rad / (2 * np.pi)


def angmod(
    rad: Union[np.ndarray, float, int], bounds: list = [0, 2 * np.pi]
) -> Union[np.ndarray, float]:
    """
    Normalize angles to a specified range.

    Parameters
    ----------
    rad : Union[np.ndarray, float, int]
        An angle or array of angles in radians.
    bounds : list, optional
        A list or tuple of two values [min, max] defining the target range.
        Default is [0, 2π).

    Returns
    -------
    Union[np.ndarray, float]
        The normalized angle(s), constrained to [min, max).
    """
    if len(bounds) != 2 or bounds[0] >= bounds[1]:
        raise ValueError(
            "bounds must be a list or tuple with two values [min, max] where min < max."
        )

    bound_min, bound_max = bounds
    bound_span = bound_max - bound_min
    result = np.mod(np.asarray(rad, dtype=float) - bound_min, bound_span) + bound_min

    # floating point can land exactly on the upper bound
    if result.ndim == 0:
        return bound_min if result == bound_max else float(result)
    result[result == bound_max] = bound_min
    return result


def circ_dist(
    a: Union[np.ndarray, list, float],
    b: Union[np.ndarray, list, float],
    degrees: bool = False,
) -> Union[np.ndarray, float]:
    r"""Signed angular distance from `a` to `b`.

    $$ d = \mathrm{mod}(b - a + \pi, 2\pi) - \pi $$

    The distance is measured in the forward direction, so if `b` lies
    'behind' `a` the result is negative. It is always the smaller of the
    two possible angles, in [-π, π) or [-180°, 180°).

    Parameters
    ----------
    a: np.ndarray or float
        Starting angle(s).
    b: np.ndarray or float
        Target angle(s).
    degrees: bool
        Angles (and the returned distance) are in degrees.

    Returns
    -------
    d: np.ndarray or float
        Signed angular distance.

    Note
    ----
    `circ_dist(a, b) == -circ_dist(b, a)` everywhere except at the branch
    point where `a` and `b` are exactly antipodal: both directions then
    return -π.
    """
    if degrees:
        return rad2data(circ_dist(data2rad(a), data2rad(b)))

    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    d = np.mod(b - a + np.pi, 2 * np.pi) - np.pi

    return float(d) if d.ndim == 0 else d


def A1inv(R: float) -> float:
    """Inverse of A1(kappa) = I1(kappa) / I0(kappa).

    Polynomial approximation of Best and Fisher (1981), also eq 4.40 of
    Fisher (1993). Returns inf for R == 1.
    """
    R = float(R)
    if 0 <= R < 0.53:
        return 2 * R + R**3 + (5 * R**5) / 6
    elif R < 0.85:
        return -0.4 + 1.39 * R + 0.43 / (1 - R)
    else:
        denom = R**3 - 4 * R**2 + 3 * R
        return np.inf if denom == 0 else 1 / denom
