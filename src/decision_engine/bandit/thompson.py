"""
Thompson Sampling Allocation
============================

Arm selection and proportional traffic allocation for Bernoulli-reward
content variants. Each arm's belief about its success rate is a
Beta(alpha, beta) posterior; selection draws once from every posterior and
picks the highest draw.

Example Usage:
--------------
>>> from decision_engine.bandit import thompson
>>> from decision_engine.core.sampling import RandomSampler
>>>
>>> arms = [
...     thompson.ArmState.from_counts(successes=48, failures=452),
...     thompson.ArmState.from_counts(successes=61, failures=439),
... ]
>>> idx = thompson.select_arm(arms, RandomSampler(seed=7))
>>> shares = thompson.allocate_traffic(arms)
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from decision_engine.core.sampling import RandomSampler
from decision_engine.exceptions import PreconditionError


@dataclass(frozen=True)
class ArmState:
    """Beta posterior parameters for one arm."""
    alpha: float
    beta: float

    def __post_init__(self):
        if self.alpha <= 0 or self.beta <= 0:
            raise PreconditionError("Arm alpha and beta must be positive")

    @classmethod
    def from_counts(cls, successes: int, failures: int) -> "ArmState":
        """Uniform Beta(1, 1) prior updated with observed counts."""
        if successes < 0 or failures < 0:
            raise PreconditionError("Success and failure counts must be non-negative")
        return cls(alpha=successes + 1, beta=failures + 1)

    @property
    def expected_value(self) -> float:
        return self.alpha / (self.alpha + self.beta)


def select_arm(arms: Sequence[ArmState], sampler: Optional[RandomSampler] = None) -> int:
    """
    Pick the arm with the highest posterior draw.

    Parameters
    ----------
    arms : sequence of ArmState
        Competing arms (at least one)
    sampler : RandomSampler, optional
        Random source. A freshly seeded sampler is used when omitted.

    Returns
    -------
    int
        Index of the winning arm. Ties keep the earliest index.
    """
    if len(arms) == 0:
        raise PreconditionError("At least one arm is required")
    sampler = sampler or RandomSampler()

    best_idx = 0
    best_sample = -1.0
    for idx, arm in enumerate(arms):
        sample = sampler.beta_sample(arm.alpha, arm.beta)
        if sample > best_sample:
            best_sample = sample
            best_idx = idx
    return best_idx


def allocate_traffic(arms: Sequence[ArmState]) -> List[float]:
    """
    Split traffic in proportion to each arm's posterior mean.

    Returns
    -------
    list of float
        One fraction per arm, summing to 1.0

    Example
    -------
    >>> allocate_traffic([ArmState(1, 1), ArmState(1, 1)])
    [0.5, 0.5]
    """
    if len(arms) == 0:
        raise PreconditionError("At least one arm is required")
    expectations = [arm.expected_value for arm in arms]
    total = sum(expectations)
    return [e / total for e in expectations]
