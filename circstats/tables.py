"""Critical values for the table-based circular hypothesis tests.

Lookups snap to the nearest tabulated sample size (or the next larger one
for the second sample of the two-sample table) instead of interpolating.
Critical values are therefore approximate for untabulated sample sizes.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

import numpy as np

from .exceptions import InvalidArgumentError

__all__ = [
    "ALPHA_TOL",
    "CriticalValueTable",
    "TwoSampleCriticalValueTable",
    "V_TEST_TABLE",
    "WATSON_U2N_TABLE",
    "WATSON_U2_TABLE",
    "V_critical_value",
    "watson_u2n_critical_value",
    "watson_u2_critical_value",
]

# significance levels must match a tabulated one within this tolerance
ALPHA_TOL = 1e-4


def _readonly(values) -> np.ndarray:
    arr = np.array(values, dtype=float)
    arr.setflags(write=False)
    return arr


def _alpha_index(name: str, alphas: np.ndarray, sig_level: float) -> int:
    if not np.any(np.isclose(sig_level, alphas, rtol=0.0, atol=ALPHA_TOL)):
        raise InvalidArgumentError(
            f"Significance level for {name} must be one of {alphas.tolist()}; "
            f"asked for {sig_level}."
        )
    return int(np.argmin(np.abs(sig_level - alphas)))


@dataclass(frozen=True, eq=False)
class CriticalValueTable:
    """Critical values indexed by sample size (rows) and significance level (columns).

    Attributes
    ----------
    name : str
        Name of the test, used in error messages.
    ns : np.ndarray
        Tabulated sample sizes.
    alphas : np.ndarray
        Tabulated significance levels.
    values : np.ndarray (len(ns), len(alphas))
        Critical values.
    n_min : int
        Smallest sample size the table is valid for.
    """

    name: str
    ns: np.ndarray
    alphas: np.ndarray
    values: np.ndarray
    n_min: int

    def lookup(self, n: int, sig_level: float) -> float:
        """Critical value for the tabulated n nearest to `n` at level `sig_level`."""
        if n < self.n_min:
            raise InvalidArgumentError(
                f"{self.name} tables are only valid for n >= {self.n_min} (have {n})."
            )
        col = _alpha_index(self.name, self.alphas, sig_level)
        row = int(np.argmin(np.abs(n - self.ns)))
        return float(self.values[row, col])


@dataclass(frozen=True, eq=False)
class TwoSampleCriticalValueTable:
    """Critical values indexed by the larger and the smaller of two sample sizes.

    `rows` maps each tabulated larger sample size n1 to a sparse mapping
    from thresholds of the smaller sample size n2 to one critical value per
    entry of `alphas`.
    """

    name: str
    ns: np.ndarray
    alphas: np.ndarray
    rows: Mapping[int, Mapping[int, Tuple[float, ...]]]
    limit: Tuple[int, int]

    def lookup(self, n: int, m: int, sig_level: float) -> float:
        """Critical value for two samples of sizes `n` and `m` at level `sig_level`.

        The larger sample size picks the nearest tabulated n1; within it the
        smallest tabulated n2 that is at least the smaller sample size is
        used. Beyond the last n2 the asymptotic (`limit`) row is returned.
        """
        if min(n, m) < 1:
            raise InvalidArgumentError(
                f"{self.name} needs at least one observation per sample (have {n} and {m})."
            )
        col = _alpha_index(self.name, self.alphas, sig_level)
        n1, n2 = max(n, m), min(n, m)
        n1 = int(self.ns[np.argmin(np.abs(n1 - self.ns))])

        row = self.rows[n1]
        for k in sorted(row):
            if n2 <= k:
                return row[k][col]

        limit_n1, limit_n2 = self.limit
        return self.rows[limit_n1][limit_n2][col]


# Table 34 of Kanji (2006)
V_TEST_TABLE = CriticalValueTable(
    name="the V test",
    ns=_readonly(list(range(5, 31)) + [40, 50, 60, 70, 100, 500, 1000]),
    alphas=_readonly([0.1, 0.05, 0.01, 0.005, 0.001, 0.0001]),
    values=_readonly(
        [
            [1.3051, 1.6524, 2.2505, 2.4459, 2.7938, 3.0825],
            [1.3009, 1.6509, 2.2640, 2.4695, 2.8502, 3.2114],
            [1.2980, 1.6499, 2.2734, 2.4858, 2.8886, 3.2970],
            [1.2958, 1.6492, 2.2803, 2.4978, 2.9164, 3.3578],
            [1.2942, 1.6484, 2.2856, 2.5070, 2.9375, 3.4034],
            [1.2929, 1.6482, 2.2899, 2.5143, 2.9540, 3.4387],
            [1.2918, 1.6479, 2.2933, 2.5201, 2.9672, 3.4669],
            [1.2909, 1.6476, 2.2961, 2.5250, 2.9782, 3.4899],
            [1.2902, 1.6474, 2.2985, 2.5290, 2.9873, 3.5091],
            [1.2895, 1.6472, 2.3006, 2.5325, 2.9950, 3.5253],
            [1.2890, 1.6470, 2.3023, 2.5355, 3.0017, 3.5392],
            [1.2885, 1.6469, 2.3039, 2.5381, 3.0075, 3.5512],
            [1.2881, 1.6467, 2.3052, 2.5404, 3.0126, 3.5617],
            [1.2877, 1.6466, 2.3064, 2.5424, 3.0171, 3.5710],
            [1.2874, 1.6465, 2.3075, 2.5442, 3.0211, 3.5792],
            [1.2871, 1.6464, 2.3085, 2.5458, 3.0247, 3.5866],
            [1.2868, 1.6464, 2.3093, 2.5473, 3.0279, 3.5932],
            [1.2866, 1.6463, 2.3101, 2.5486, 3.0308, 3.5992],
            [1.2864, 1.6462, 2.3108, 2.5498, 3.0335, 3.6047],
            [1.2862, 1.6462, 2.3115, 2.5509, 3.0359, 3.6096],
            [1.2860, 1.6461, 2.3121, 2.5519, 3.0382, 3.6142],
            [1.2858, 1.6461, 2.3127, 2.5529, 3.0402, 3.6184],
            [1.2856, 1.6460, 2.3132, 2.5538, 3.0421, 3.6223],
            [1.2855, 1.6460, 2.3136, 2.5546, 3.0439, 3.6258],
            [1.2853, 1.6459, 2.3141, 2.5553, 3.0455, 3.6292],
            [1.2852, 1.6459, 2.3145, 2.5560, 3.0471, 3.6323],
            [1.2843, 1.6456, 2.3175, 2.5610, 3.0580, 3.6545],
            [1.2837, 1.6455, 2.3193, 2.5640, 3.0646, 3.6677],
            [1.2834, 1.6454, 2.3205, 2.5660, 3.0689, 3.6764],
            [1.2831, 1.6453, 2.3213, 2.5674, 3.0720, 3.6826],
            [1.2826, 1.6452, 2.3228, 2.5699, 3.0775, 3.6936],
            [1.2818, 1.6449, 2.3256, 2.5747, 3.0877, 3.7140],
            [1.2817, 1.6449, 2.3260, 2.5752, 3.0890, 3.7165],
        ]
    ),
    n_min=5,
)

# Table 35 of Kanji (2006)
WATSON_U2N_TABLE = CriticalValueTable(
    name="Watson's U2n test",
    ns=_readonly([2, 3, 4, 5, 6, 7, 8, 9, 10, 12, 14, 16, 18, 20, 30, 40, 50, 100, 200]),
    alphas=_readonly([0.1, 0.05, 0.025, 0.01, 0.005]),
    values=_readonly(
        [
            [0.143, 0.000, 0.161, 0.164, 0.165],
            [0.145, 0.173, 0.194, 0.213, 0.224],
            [0.146, 0.176, 0.202, 0.233, 0.252],
            [0.148, 0.177, 0.205, 0.238, 0.262],
            [0.149, 0.179, 0.208, 0.243, 0.269],
            [0.149, 0.180, 0.210, 0.247, 0.274],
            [0.150, 0.181, 0.211, 0.250, 0.278],
            [0.150, 0.182, 0.212, 0.252, 0.281],
            [0.150, 0.182, 0.213, 0.254, 0.283],
            [0.150, 0.183, 0.215, 0.256, 0.287],
            [0.151, 0.184, 0.216, 0.258, 0.290],
            [0.151, 0.184, 0.216, 0.259, 0.291],
            [0.151, 0.184, 0.217, 0.259, 0.292],
            [0.151, 0.185, 0.217, 0.261, 0.293],
            [0.152, 0.185, 0.219, 0.263, 0.296],
            [0.152, 0.186, 0.219, 0.264, 0.298],
            [0.152, 0.186, 0.220, 0.265, 0.299],
            [0.152, 0.186, 0.221, 0.266, 0.301],
            [0.152, 0.187, 0.221, 0.267, 0.302],
        ]
    ),
    n_min=2,
)


def _make_watson_u2_rows():
    t = {
        10: {
            6: (0.153, 0.182, 0.243, 0.266),
            7: (0.153, 0.183, 0.246, 0.270),
            8: (0.153, 0.183, 0.248, 0.273),
            9: (0.153, 0.184, 0.249, 0.275),
            10: (0.153, 0.184, 0.250, 0.277),
        },
        12: {
            6: (0.153, 0.182, 0.244, 0.268),
            7: (0.153, 0.183, 0.247, 0.272),
            8: (0.153, 0.184, 0.249, 0.275),
            9: (0.153, 0.184, 0.251, 0.278),
            10: (0.153, 0.184, 0.252, 0.279),
            11: (0.153, 0.184, 0.253, 0.280),
            12: (0.153, 0.184, 0.253, 0.282),
        },
        14: {
            6: (0.153, 0.182, 0.244, 0.269),
            8: (0.153, 0.184, 0.250, 0.276),
            10: (0.153, 0.184, 0.253, 0.281),
            12: (0.153, 0.185, 0.254, 0.283),
            14: (0.153, 0.185, 0.255, 0.285),
        },
        16: {
            4: (0.151, 0.178, 0.231, 0.251),
            6: (0.152, 0.182, 0.244, 0.269),
            8: (0.153, 0.183, 0.250, 0.277),
            10: (0.153, 0.184, 0.253, 0.282),
            12: (0.153, 0.185, 0.255, 0.284),
            14: (0.153, 0.185, 0.256, 0.286),
            16: (0.153, 0.185, 0.257, 0.287),
        },
        20: {
            4: (0.151, 0.178, 0.231, 0.251),
            6: (0.152, 0.182, 0.245, 0.270),
            8: (0.152, 0.183, 0.251, 0.278),
            12: (0.153, 0.185, 0.256, 0.285),
            16: (0.153, 0.185, 0.258, 0.289),
            20: (0.153, 0.185, 0.259, 0.290),
        },
        25: {
            5: (0.151, 0.180, 0.240, 0.263),
            10: (0.152, 0.184, 0.254, 0.283),
            15: (0.153, 0.185, 0.258, 0.289),
            20: (0.153, 0.186, 0.260, 0.291),
            26: (0.153, 0.186, 0.261, 0.293),
        },
        30: {
            5: (0.150, 0.179, 0.240, 0.263),
            10: (0.152, 0.184, 0.254, 0.284),
            15: (0.152, 0.185, 0.259, 0.290),
            30: (0.153, 0.186, 0.262, 0.294),
        },
        40: {
            5: (0.150, 0.179, 0.240, 0.263),
            10: (0.152, 0.184, 0.254, 0.284),
            15: (0.152, 0.185, 0.259, 0.290),
            20: (0.152, 0.186, 0.261, 0.293),
            40: (0.152, 0.186, 0.263, 0.296),
        },
        50: {
            5: (0.150, 0.178, 0.239, 0.263),
            10: (0.151, 0.183, 0.254, 0.284),
            15: (0.152, 0.185, 0.259, 0.290),
            20: (0.152, 0.185, 0.261, 0.293),
            25: (0.152, 0.186, 0.262, 0.295),
            50: (0.152, 0.186, 0.264, 0.298),
        },
        # n1 = n2 = infinity
        100: {
            100: (0.1517, 0.1869, 0.2684, 0.3035),
        },
    }
    return MappingProxyType({n1: MappingProxyType(row) for n1, row in t.items()})


# Table 9 of Batschelet (1972). Recent statistical methods for orientation
# data. Animal Orientation and Navigation, NASA SP262, 61-91.
WATSON_U2_TABLE = TwoSampleCriticalValueTable(
    name="Watson's two-sample U2 test",
    ns=_readonly([10, 12, 14, 16, 20, 25, 30, 40, 50, 100]),
    alphas=_readonly([0.1, 0.05, 0.01, 0.001]),
    rows=_make_watson_u2_rows(),
    limit=(100, 100),
)


def V_critical_value(n: int, sig_level: float) -> float:
    """Critical value of the V test for `n` angles at level `sig_level`."""
    return V_TEST_TABLE.lookup(n, sig_level)


def watson_u2n_critical_value(n: int, sig_level: float) -> float:
    """Critical value of Watson's U2n test for `n` angles at level `sig_level`."""
    return WATSON_U2N_TABLE.lookup(n, sig_level)


def watson_u2_critical_value(n: int, m: int, sig_level: float) -> float:
    """Critical value of Watson's two-sample U2 test for samples of `n` and `m` angles."""
    return WATSON_U2_TABLE.lookup(n, m, sig_level)
