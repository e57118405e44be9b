"""
Confidence Intervals
====================

Normal-approximation confidence interval for the mean of a sample, used to
decide whether an experiment metric has settled.

Example Usage:
--------------
>>> from decision_engine.core import confidence
>>>
>>> result = confidence.confidence_interval([0.12, 0.15, 0.11, 0.14], level=0.95)
>>> print(f"{result.mean:.3f} [{result.lower:.3f}, {result.upper:.3f}]")
"""

import math
from dataclasses import asdict, dataclass
from typing import Dict, Optional, Sequence

from decision_engine.config import get_settings
from decision_engine.core import stats
from decision_engine.exceptions import PreconditionError

# Two-sided critical values for the supported confidence levels
Z_VALUES: Dict[float, float] = {
    0.90: 1.645,
    0.95: 1.96,
    0.99: 2.576,
}

DEFAULT_Z = Z_VALUES[0.95]


@dataclass(frozen=True)
class ConfidenceResult:
    """Container for a confidence interval around a sample mean."""
    mean: float
    lower: float
    upper: float
    level: float

    @property
    def margin(self) -> float:
        return (self.upper - self.lower) / 2

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def z_value(level: float, strict: bool = False) -> float:
    """
    Critical z-value for a two-sided confidence level.

    Parameters
    ----------
    level : float
        Confidence level: 0.90, 0.95 or 0.99
    strict : bool, default=False
        Reject unknown levels instead of falling back to 1.96

    Returns
    -------
    float
        Critical value. Unknown levels map to the 95% value (1.96) unless
        ``strict`` is set.

    Raises
    ------
    PreconditionError
        If ``strict`` and ``level`` is not a supported level
    """
    for known, z in Z_VALUES.items():
        if math.isclose(level, known):
            return z
    if strict:
        supported = ", ".join(f"{k:.2f}" for k in Z_VALUES)
        raise PreconditionError(
            f"Unsupported confidence level {level}; expected one of {supported}"
        )
    return DEFAULT_Z


def confidence_interval(
    values: Sequence[float],
    level: Optional[float] = None,
    strict: Optional[bool] = None,
) -> ConfidenceResult:
    """
    Normal-approximation confidence interval for the sample mean.

    Parameters
    ----------
    values : sequence of float
        Observations (at least one)
    level : float, optional
        Confidence level (0.90, 0.95 or 0.99). Defaults to
        ``Settings.DEFAULT_CONFIDENCE_LEVEL``.
    strict : bool, optional
        Reject unsupported levels. Defaults to
        ``Settings.STRICT_CONFIDENCE_LEVELS``.

    Returns
    -------
    ConfidenceResult
        ``mean``, ``lower``, ``upper`` and ``level``

    Raises
    ------
    PreconditionError
        If ``values`` is empty, or ``level`` is unsupported in strict mode

    Notes
    -----
    - margin = z(level) * sd / sqrt(n), with the population standard deviation
    - A single observation yields a zero-width interval
    - lower <= mean <= upper always holds

    Example
    -------
    >>> result = confidence_interval([10, 12, 14], level=0.99)
    >>> result.lower <= result.mean <= result.upper
    True
    """
    n = len(values)
    if n == 0:
        raise PreconditionError("Cannot compute a confidence interval for an empty sample")
    settings = get_settings()
    if level is None:
        level = settings.DEFAULT_CONFIDENCE_LEVEL
    if strict is None:
        strict = settings.STRICT_CONFIDENCE_LEVELS

    z = z_value(level, strict=strict)
    sample_mean = stats.mean(values)
    std_dev = stats.standard_deviation(values)
    margin = z * (std_dev / math.sqrt(n))

    return ConfidenceResult(
        mean=sample_mean,
        lower=sample_mean - margin,
        upper=sample_mean + margin,
        level=level,
    )
