"""
Marketing Decision Engine - Experimentation and Decision Primitives
===================================================================

Statistical and policy building blocks for a marketing-automation backend:
how traffic is split across content variants, how confident we are in a
measured effect, how channels are grouped by performance, and how calls to
dependent services survive transient failure.

Modules:
--------
- core: Descriptive statistics, Gamma/Beta sampling, confidence intervals
- bandit: Thompson Sampling arm selection and traffic allocation
- segmentation: Static and behavioral channel groups
- decision: Rule-based claim validation
- resilience: Retry with exponential backoff and jitter

Example Usage:
--------------
>>> from decision_engine.core import confidence, sampling
>>> from decision_engine.bandit import thompson
>>>
>>> sampler = sampling.RandomSampler(seed=42)
>>> arms = [thompson.ArmState(51, 450), thompson.ArmState(62, 439)]
>>> winner = thompson.select_arm(arms, sampler)
>>>
>>> ci = confidence.confidence_interval([0.11, 0.13, 0.12, 0.14], level=0.95)

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
__license__ = "MIT"

from decision_engine.core import stats, sampling, confidence
from decision_engine.bandit import thompson
from decision_engine.segmentation import channel_groups
from decision_engine.decision import evidence
from decision_engine.resilience import retry

__all__ = [
    "stats",
    "sampling",
    "confidence",
    "thompson",
    "channel_groups",
    "evidence",
    "retry",
]
