"""Thompson Sampling traffic allocation."""

from decision_engine.bandit import thompson

__all__ = ["thompson"]
