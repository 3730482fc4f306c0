from importlib import metadata as _metadata

from .data import load_data
from .descriptive import circ_mean, circ_median, circ_r, circ_std, circ_var
from .distributions import VonMisesParams, fit_vonmises, vonmises_cdf, vonmises_pdf
from .hypothesis import V_test, watson_u2_test, watson_u2n_test, watson_williams_test
from .utils import circ_dist

try:  # Prefer installed package metadata
    __version__ = _metadata.version("circstats")
except _metadata.PackageNotFoundError:  # pragma: no cover - during local dev
    from .version import __version__

__all__ = [
    "V_test",
    "VonMisesParams",
    "circ_dist",
    "circ_mean",
    "circ_median",
    "circ_r",
    "circ_std",
    "circ_var",
    "fit_vonmises",
    "load_data",
    "vonmises_cdf",
    "vonmises_pdf",
    "watson_u2_test",
    "watson_u2n_test",
    "watson_williams_test",
    "__version__",
]
