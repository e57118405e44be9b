"""Core statistical primitives for experiment decisions."""

from decision_engine.core import stats, sampling, confidence

__all__ = ["stats", "sampling", "confidence"]
