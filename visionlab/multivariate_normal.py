"""Sampling from multivariate normal distributions."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional, Union

import numpy as np

ArrayLike = Union[np.ndarray, Sequence]


class MultivariateNormal:
    """Draws samples from 𝒩(μ, Σ) and random permutations from one generator.

    The underlying scalar draws come from a normal distribution with the
    given ``mean`` and ``standard_deviation`` (standard normal by default).
    Without a ``seed`` the generator is seeded from the operating system.
    """

    def __init__(
        self,
        mean: float = 0.0,
        standard_deviation: float = 1.0,
        seed: Optional[int] = None,
    ) -> None:
        if standard_deviation < 0:
            raise ValueError("standard_deviation must be non-negative")
        self.mean = float(mean)
        self.standard_deviation = float(standard_deviation)
        self._rng = np.random.default_rng(seed)

    def random(self, n: int, mean: ArrayLike, covariance: ArrayLike) -> np.ndarray:
        """Return ``n`` samples as the rows of an ``(n, d)`` array.

        The covariance is factored as ``L @ L.T`` (Cholesky) and each row is
        ``mean + L @ z`` with ``z`` drawn from the scalar distribution.
        """
        if n < 0:
            raise ValueError("Number of samples must be non-negative")
        mu = np.asarray(mean, dtype=np.float64).reshape(-1)
        sigma = np.asarray(covariance, dtype=np.float64)
        d = mu.size
        if sigma.shape != (d, d):
            raise ValueError(
                f"Covariance must have shape ({d}, {d}) to match the mean, got {sigma.shape}"
            )
        try:
            lower = np.linalg.cholesky(sigma)
        except np.linalg.LinAlgError as exc:
            raise ValueError("Covariance matrix must be positive definite") from exc

        z = self._rng.normal(self.mean, self.standard_deviation, size=(n, d))
        return mu + z @ lower.T

    def shuffle_indices(self, size: int) -> list[int]:
        """Return a random permutation of ``range(size)``."""
        if size < 0:
            raise ValueError("size must be non-negative")
        return [int(i) for i in self._rng.permutation(size)]