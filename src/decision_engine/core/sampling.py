"""
Random Sampling for Thompson Sampling
=====================================

Gamma and Beta samplers built on an injected uniform random source. The
Beta draws feed Thompson Sampling over Bernoulli-reward arms, where the
caller's convention is ``alpha = successes + 1`` and ``beta = failures + 1``.

Gamma(shape, 1) uses the Marsaglia-Tsang rejection method; shapes below 1
are boosted to ``shape + 1`` and rescaled by ``U ** (1 / shape)``, computed in
log space so tiny shapes do not underflow. Standard normal draws come from
the Box-Muller transform over two uniforms.

Example Usage:
--------------
>>> from decision_engine.core.sampling import RandomSampler
>>>
>>> sampler = RandomSampler(seed=42)
>>> draw = sampler.beta_sample(alpha=51, beta=451)
>>> 0 < draw < 1
True

References
----------
- Marsaglia & Tsang (2000): "A Simple Method for Generating Gamma Variables"
- Box & Muller (1958): "A Note on the Generation of Random Normal Deviates"
"""

import math
import threading
from typing import Optional

import numpy as np

from decision_engine.config import get_settings
from decision_engine.exceptions import PreconditionError, SamplingError
from decision_engine.logging_config import get_logger

logger = get_logger("sampling")

# Open-interval bounds for draws that underflow in double precision
_SMALLEST_POSITIVE = float(np.nextafter(0.0, 1.0))
_LARGEST_BELOW_ONE = float(np.nextafter(1.0, 0.0))


def _check_shape(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise PreconditionError(f"{name} must be a positive finite number, got {value}")


class RandomSampler:
    """
    Gamma/Beta sampler over an injected ``numpy.random.Generator``.

    Parameters
    ----------
    rng : numpy.random.Generator, optional
        Uniform random source. Takes precedence over ``seed``.
    seed : int, optional
        Seed for a fresh ``default_rng`` when ``rng`` is not given.
    max_iterations : int, optional
        Safety cap on Marsaglia-Tsang rejection rounds per Gamma draw.
        Defaults to ``Settings.GAMMA_MAX_ITERATIONS``.

    Notes
    -----
    - numpy generators are not thread-safe; every draw through one sampler
      holds an internal lock, so a single instance may be shared across
      threads.
    - The rejection loop terminates with probability 1. The cap only bounds
      worst-case latency and raises ``SamplingError`` if ever reached.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        max_iterations: Optional[int] = None,
    ):
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        if max_iterations is None:
            max_iterations = get_settings().GAMMA_MAX_ITERATIONS
        if max_iterations <= 0:
            raise PreconditionError("max_iterations must be positive")
        self.max_iterations = max_iterations
        self._lock = threading.RLock()

    def uniform(self) -> float:
        """Uniform draw on (0, 1]; never zero so ``log(u)`` stays finite."""
        with self._lock:
            return 1.0 - float(self._rng.random())

    def standard_normal(self) -> float:
        """Standard normal draw via Box-Muller: sqrt(-2 ln u1) * cos(2 pi u2)."""
        with self._lock:
            u1 = self.uniform()
            u2 = self.uniform()
        return math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)

    def gamma_sample(self, shape: float) -> float:
        """
        Draw from Gamma(shape, scale=1).

        Parameters
        ----------
        shape : float
            Shape parameter (must be positive)

        Returns
        -------
        float
            One Gamma-distributed draw. Draws for tiny shapes that underflow
            are clamped to the smallest positive double.

        Raises
        ------
        PreconditionError
            If ``shape`` is not a positive finite number
        SamplingError
            If the rejection loop exceeds ``max_iterations``
        """
        _check_shape("shape", shape)
        return max(math.exp(self._log_gamma_sample(shape)), _SMALLEST_POSITIVE)

    def beta_sample(self, alpha: float, beta: float) -> float:
        """
        Draw from Beta(alpha, beta) as ``Ga / (Ga + Gb)``.

        Parameters
        ----------
        alpha : float
            First shape parameter, typically successes + 1
        beta : float
            Second shape parameter, typically failures + 1

        Returns
        -------
        float
            Draw in (0, 1), clamped to the nearest representable values
            when the exact draw rounds to 0 or 1

        Example
        -------
        >>> sampler = RandomSampler(seed=0)
        >>> draws = [sampler.beta_sample(100, 1) for _ in range(1000)]
        >>> sum(draws) / len(draws) > 0.9
        True
        """
        _check_shape("alpha", alpha)
        _check_shape("beta", beta)
        with self._lock:
            log_ga = self._log_gamma_sample(alpha)
            log_gb = self._log_gamma_sample(beta)

        # Ga / (Ga + Gb) = 1 / (1 + exp(log Gb - log Ga)), kept in log space
        diff = log_gb - log_ga
        if diff > 0:
            ratio = math.exp(-diff)
            draw = ratio / (1.0 + ratio)
        else:
            draw = 1.0 / (1.0 + math.exp(diff))
        return min(max(draw, _SMALLEST_POSITIVE), _LARGEST_BELOW_ONE)

    def _log_gamma_sample(self, shape: float) -> float:
        with self._lock:
            if shape < 1:
                # Boost: Gamma(a) = Gamma(a + 1) * U^(1/a), in log space
                log_boosted = math.log(self._marsaglia_tsang(shape + 1.0))
                return log_boosted + math.log(self.uniform()) / shape
            return math.log(self._marsaglia_tsang(shape))

    def _marsaglia_tsang(self, shape: float) -> float:
        d = shape - 1.0 / 3.0
        c = 1.0 / math.sqrt(9.0 * d)

        for _ in range(self.max_iterations):
            x = self.standard_normal()
            v = 1.0 + c * x
            while v <= 0:
                x = self.standard_normal()
                v = 1.0 + c * x
            v = v * v * v
            u = self.uniform()

            # Squeeze test, then the exact log test
            if u < 1.0 - 0.0331 * (x * x) * (x * x):
                return d * v
            if math.log(u) < 0.5 * x * x + d * (1.0 - v + math.log(v)):
                return d * v

        logger.error(
            "gamma_sampler_cap_reached",
            shape=shape,
            iterations=self.max_iterations,
        )
        raise SamplingError(
            f"Gamma rejection sampler exceeded {self.max_iterations} iterations "
            f"for shape={shape}"
        )
