"""Exception hierarchy for the decision engine."""


class DecisionEngineError(Exception):
    """Base class for errors raised by the decision engine itself."""


class PreconditionError(DecisionEngineError, ValueError):
    """Invalid input to a statistical or policy function."""


class SamplingError(DecisionEngineError, RuntimeError):
    """Rejection sampler exceeded its iteration cap."""


class RetryCancelledError(DecisionEngineError):
    """Retry loop aborted by its cancellation signal."""
