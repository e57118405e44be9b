"""
Retry with Exponential Backoff
==============================

Generic resilience wrapper for fallible async operations (CRM calls, LLM
providers, webhooks). The policy knows nothing about HTTP or database
errors: whether an error is transient is decided by the caller's predicate.

Schedule:
- delay(attempt) = min(base_delay * 2 ** attempt, max_delay)
- actual wait = delay * U, with U uniform in [0.5, 1.0)
- at most max_retries + 1 calls in total

Example Usage:
--------------
>>> from decision_engine.resilience.retry import RetryConfig, retry_on, with_retry
>>>
>>> config = RetryConfig(
...     max_retries=4,
...     base_delay=0.25,
...     retry_predicate=retry_on(TimeoutError, ConnectionError),
... )
>>> contact = await with_retry(lambda: crm.get_contact(contact_id), config)
"""

import asyncio
import math
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional, Type, TypeVar

import numpy as np

from decision_engine.config import get_settings
from decision_engine.exceptions import PreconditionError, RetryCancelledError
from decision_engine.logging_config import get_logger

logger = get_logger("retry")

T = TypeVar("T")

JITTER_LOW = 0.5
JITTER_HIGH = 1.0


def _always_retry(error: BaseException) -> bool:
    return True


def retry_on(*exception_types: Type[BaseException]) -> Callable[[BaseException], bool]:
    """
    Build a predicate that retries only the given exception classes.

    Example
    -------
    >>> predicate = retry_on(TimeoutError)
    >>> predicate(TimeoutError()), predicate(KeyError())
    (True, False)
    """
    if not exception_types:
        raise PreconditionError("retry_on requires at least one exception type")

    def predicate(error: BaseException) -> bool:
        return isinstance(error, exception_types)

    return predicate


@dataclass(frozen=True)
class RetryConfig:
    """
    Retry policy parameters.

    Parameters
    ----------
    max_retries : int, default=3
        Retries after the first attempt (0 disables retrying)
    base_delay : float, default=0.5
        Delay in seconds before the first retry, before jitter
    max_delay : float, default=10.0
        Upper bound on any single delay, before jitter
    retry_predicate : callable, default=always retry
        Decides whether an error is worth another attempt
    """
    max_retries: int = 3
    base_delay: float = 0.5
    max_delay: float = 10.0
    retry_predicate: Callable[[BaseException], bool] = field(default=_always_retry)

    def __post_init__(self):
        if self.max_retries < 0:
            raise PreconditionError("max_retries must be non-negative")
        if self.base_delay < 0 or self.max_delay < 0:
            raise PreconditionError("Delays must be non-negative")

    @classmethod
    def from_settings(cls, **overrides) -> "RetryConfig":
        """Defaults from ``Settings``; keyword arguments override them."""
        settings = get_settings()
        params = {
            "max_retries": settings.RETRY_MAX_RETRIES,
            "base_delay": settings.RETRY_BASE_DELAY,
            "max_delay": settings.RETRY_MAX_DELAY,
        }
        params.update(overrides)
        return cls(**params)

    def backoff_delay(self, attempt: int) -> float:
        """Unjittered delay after the failure of ``attempt`` (0-based)."""
        if self.base_delay == 0 or self.max_delay == 0:
            return 0.0
        # Past this point the doubled delay would only be capped
        if attempt >= math.log2(self.max_delay) - math.log2(self.base_delay):
            return self.max_delay
        return min(math.ldexp(self.base_delay, attempt), self.max_delay)


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    config: Optional[RetryConfig] = None,
    *,
    cancel_event: Optional[asyncio.Event] = None,
    rng: Optional[np.random.Generator] = None,
) -> T:
    """
    Await ``operation()`` until it succeeds or the policy gives up.

    Parameters
    ----------
    operation : callable
        Zero-argument callable returning an awaitable
    config : RetryConfig, optional
        Policy. Defaults to ``RetryConfig.from_settings()``.
    cancel_event : asyncio.Event, optional
        Checked before every attempt and every wait; once set the loop
        stops with ``RetryCancelledError``
    rng : numpy.random.Generator, optional
        Jitter source

    Returns
    -------
    Any
        Result of the first successful attempt

    Raises
    ------
    Exception
        The operation's own error, unchanged, once retries are exhausted or
        the predicate rejects it
    RetryCancelledError
        If ``cancel_event`` is set

    Notes
    -----
    - Bounds the number of attempts only, never wall-clock time
    - Per-attempt timeouts belong to the operation itself
    """
    config = config or RetryConfig.from_settings()
    if rng is None:
        rng = np.random.default_rng()

    attempt = 0
    while True:
        _check_cancelled(cancel_event, attempts_made=attempt)
        try:
            return await operation()
        except Exception as error:
            if attempt >= config.max_retries:
                logger.error(
                    "retry_exhausted",
                    attempts=attempt + 1,
                    error=repr(error),
                )
                raise
            if not config.retry_predicate(error):
                logger.info(
                    "retry_not_retryable",
                    attempt=attempt + 1,
                    error=repr(error),
                )
                raise

            delay = config.backoff_delay(attempt) * rng.uniform(JITTER_LOW, JITTER_HIGH)
            logger.warning(
                "retry_attempt_failed",
                attempt=attempt + 1,
                max_retries=config.max_retries,
                delay=round(delay, 4),
                error=repr(error),
            )

        _check_cancelled(cancel_event, attempts_made=attempt + 1)
        await asyncio.sleep(delay)
        attempt += 1


def _check_cancelled(cancel_event: Optional[asyncio.Event], attempts_made: int) -> None:
    if cancel_event is not None and cancel_event.is_set():
        logger.warning("retry_cancelled", attempts=attempts_made)
        raise RetryCancelledError(f"Retry cancelled after {attempts_made} attempt(s)")
