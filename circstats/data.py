from dataclasses import dataclass

import numpy as np
import pandas as pd


@dataclass(frozen=True, eq=False)
class GroupedData:
    """Circular data grouped into bins.

    Attributes
    ----------
    azimuths : np.ndarray
        Bin centres in degrees.
    counts : np.ndarray
        Number of observations in each bin.
    reference : str
        Where the data were published.
    """

    azimuths: np.ndarray
    counts: np.ndarray
    reference: str


def _readonly(values, dtype) -> np.ndarray:
    arr = np.array(values, dtype=dtype)
    arr.setflags(write=False)
    return arr


MATTHEWS_1961_MALLARDS = GroupedData(
    azimuths=_readonly(np.arange(0, 360, 20), float),
    counts=_readonly(
        [40, 22, 20, 9, 6, 3, 3, 1, 6, 3, 11, 22, 24, 58, 136, 138, 143, 69], int
    ),
    reference=(
        "Matthews, G.V.T. (1961). 'Nonsense' orientation in mallard Anas "
        "platyrhynchos and its relation to experiments on bird navigation. "
        "Ibis, 103a, 211-230."
    ),
)
"""Azimuths at which 714 mallards disappeared from sight."""

_DATASETS = {
    "matthews_1961_mallards": MATTHEWS_1961_MALLARDS,
}


def load_data(name: str, print_meta: bool = False) -> pd.DataFrame:
    """Load an example dataset.

    Parameters
    ----------
    name : str
        Name of the dataset, e.g. "matthews_1961_mallards".
    print_meta : bool
        Print the reference of the dataset.

    Returns
    -------
    pd.DataFrame
        One row per bin, with columns `θ` (degrees) and `w` (frequency).
    """
    if name not in _DATASETS:
        raise ValueError(
            f"Invalid dataset ('{name}').\n Available datasets: {sorted(_DATASETS)}"
        )

    dataset = _DATASETS[name]
    if print_meta:
        print(dataset.reference)

    return pd.DataFrame({"θ": dataset.azimuths, "w": dataset.counts})
