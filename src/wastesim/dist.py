"""Probability distributions used to sample service times, speeds and loads.

The classes wrap frozen :mod:`scipy.stats` distributions behind a small,
uniform API. Every sampling method takes an optional ``random_state`` (a
:class:`numpy.random.Generator`) so a simulation can draw all of its figures
from one seeded stream and stay reproducible.
"""
from typing import Optional

import numpy as np
import scipy.stats as st


def _validate_positive(value: float, name: str) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be positive.")


def _validate_band(low: float, high: float) -> None:
    if low > high:
        raise ValueError(f"Lower bound {low:g} must not exceed upper bound {high:g}.")


class distribution:
    """Lightweight wrapper around SciPy distributions.

    All concrete distribution classes inherit from this base to expose a common
    API for sampling and computing summary statistics.
    """

    def __init__(self):
        self.params = None
        self.dist_type = None
        self.dist = None

    def __str__(self):
        """Human-readable representation like 'dist.uniform(4, 5)'."""
        name = getattr(self, "dist_type", None) or self.__class__.__name__
        params = getattr(self, "params", None)

        if params is None:
            return f"dist.{name}"

        def _fmt(p):
            if isinstance(p, (int, float)):
                return f"{p:g}"
            return str(p)

        params_str = ", ".join(_fmt(p) for p in params)
        return f"dist.{name}({params_str})" if params_str else f"dist.{name}"

    __repr__ = __str__

    def sample(self, random_state: Optional[np.random.Generator] = None) -> float:
        """Draw a single random variate from the distribution."""

        return float(self.dist.rvs(random_state=random_state))

    def samples(self, n: int, random_state: Optional[np.random.Generator] = None) -> np.ndarray:
        """Draw ``n`` random variates from the distribution."""

        return np.asarray(self.dist.rvs(size=n, random_state=random_state), dtype=float)

    def total(self, n: int, random_state: Optional[np.random.Generator] = None) -> float:
        """Return the sum of ``n`` independent draws (``0.0`` when ``n`` is zero)."""

        if n < 0:
            raise ValueError("Number of draws must not be negative.")
        if n == 0:
            return 0.0
        return float(self.samples(n, random_state).sum())

    def mean(self):
        """Return the distribution mean."""

        return self.dist.mean()

    def std(self):
        """Return the distribution standard deviation."""

        return self.dist.std()

    def percentile(self, q):
        """Return the value at percentile ``q`` (0-100)."""

        return self.dist.ppf(q / 100)


class uniform(distribution):
    """Uniform distribution on ``[a, b]``.

    ``a == b`` is accepted and always yields ``a``; SciPy does not support a
    zero-width uniform, so that case is handled here.
    """

    def __init__(self, a, b):
        """Initialize the distribution with ``a`` (min) and ``b`` (max)."""
        _validate_band(a, b)
        self.dist_type = 'uniform'
        self.params = [a, b]
        self.dist = st.uniform(loc=a, scale=b - a) if b > a else None

    @property
    def low(self) -> float:
        return self.params[0]

    @property
    def high(self) -> float:
        return self.params[1]

    def samples(self, n, random_state=None):
        if self.dist is None:
            return np.full(n, float(self.low))
        return super().samples(n, random_state)

    def sample(self, random_state=None):
        if self.dist is None:
            return float(self.low)
        return super().sample(random_state)

    def mean(self):
        return (self.low + self.high) / 2

    def std(self):
        return (self.high - self.low) / np.sqrt(12)

    def percentile(self, q):
        return self.low + (self.high - self.low) * q / 100


def make_uniform(a: float, b: float) -> "uniform":
    """Create a uniform distribution with validation."""
    _validate_band(a, b)
    return uniform(a, b)


class expon(distribution):
    """
    Defines an exponential distribution.
    """

    def __init__(self, mean):
        """
        Initializes the exponential distribution.

        Parameters
        -----------
        mean : float
            The mean of the exponential distribution.
        """
        self.dist_type = 'expon'
        Scale = mean
        self.params = [Scale]
        self.dist = st.expon(scale=Scale)


def make_expon(mean: float) -> "expon":
    """Create an exponential distribution with validation."""
    _validate_positive(mean, "Mean")
    return expon(mean)
