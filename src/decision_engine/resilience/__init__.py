"""Resilience wrappers for calls to dependent services."""

from decision_engine.resilience import retry

__all__ = ["retry"]
