"""Rule-based decision helpers."""

from decision_engine.decision import evidence

__all__ = ["evidence"]
