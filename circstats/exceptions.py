"""
Exception hierarchy for circstats.

All exceptions inherit from CircStatsError so callers can catch any
package-specific failure. Argument and degenerate-data errors also derive
from ValueError, as they are caused by the values handed in.
"""


class CircStatsError(Exception):
    """Base exception for all circstats errors."""
    pass


class InvalidArgumentError(CircStatsError, ValueError):
    """
    An argument is outside the range a routine supports.

    Raised for samples smaller than the floor of a critical-value table,
    significance levels that are not tabulated, empty samples and
    mismatched weights.
    """
    pass


class DegenerateResultError(CircStatsError, ValueError):
    """
    The data admit no well-defined answer.

    Raised when the circular median search finds no bisector that splits
    the sample evenly, which usually means axial data were passed without
    `axial=True`, and when Watson's U2n test cannot give a finite
    statistic, e.g. for identical angles under a fitted von Mises.
    """
    pass


class InternalInvariantError(CircStatsError, RuntimeError):
    """
    An internal consistency check failed.

    This indicates a defect in circstats, not bad input.
    """
    pass
