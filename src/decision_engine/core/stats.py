"""
Descriptive Statistics
======================

Small, pure helpers shared by the confidence estimator and the channel
segmentation logic. All functions accept any sequence of real numbers and
return plain Python floats/lists.

Example Usage:
--------------
>>> from decision_engine.core import stats
>>>
>>> stats.standard_deviation([2, 4, 4, 4, 5, 5, 7, 9])
2.0
>>> stats.z_score(7, mean=5, std_dev=1)
2.0
>>> stats.moving_average([1, 2, 3, 4, 5], window=3)
[2.0, 3.0, 4.0]
"""

from typing import List, Sequence

import numpy as np

from decision_engine.exceptions import PreconditionError


def mean(values: Sequence[float]) -> float:
    """
    Arithmetic mean of a non-empty sample.

    Raises
    ------
    PreconditionError
        If ``values`` is empty.
    """
    if len(values) == 0:
        raise PreconditionError("Cannot compute the mean of an empty sample")
    return float(np.mean(np.asarray(values, dtype=float)))


def standard_deviation(values: Sequence[float]) -> float:
    """
    Population standard deviation (divides by N, not N-1).

    Parameters
    ----------
    values : sequence of float
        Observations

    Returns
    -------
    float
        Standard deviation. Samples of size 0 or 1 return 0.0: there is no
        observable spread.

    Example
    -------
    >>> standard_deviation([5.0])
    0.0
    """
    if len(values) <= 1:
        return 0.0
    return float(np.std(np.asarray(values, dtype=float), ddof=0))


def z_score(value: float, mean: float, std_dev: float) -> float:
    """
    Number of standard deviations ``value`` lies from ``mean``.

    A degenerate distribution (``std_dev == 0``) has no z-score; 0.0 is
    returned instead of dividing by zero.
    """
    if std_dev == 0:
        return 0.0
    return (value - mean) / std_dev


def moving_average(values: Sequence[float], window: int) -> List[float]:
    """
    Simple moving average over full windows only.

    Parameters
    ----------
    values : sequence of float
        Time-ordered observations
    window : int
        Window length (must be positive)

    Returns
    -------
    list of float
        ``len(values) - window + 1`` averages, in order. Empty when the
        window is longer than the series (partial windows are never emitted).

    Example
    -------
    >>> moving_average([1, 2], window=5)
    []
    """
    if window <= 0:
        raise PreconditionError("window must be positive")
    if window > len(values):
        return []

    windows = np.lib.stride_tricks.sliding_window_view(
        np.asarray(values, dtype=float), window
    )
    return windows.mean(axis=1).tolist()
