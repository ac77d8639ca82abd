"""Activation functions, losses and a clustered sample generator for small networks."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Union

import numpy as np

from visionlab.multivariate_normal import MultivariateNormal

ArrayLike = Union[np.ndarray, Sequence]

_CLIP_EPSILON = 1e-15


def sigmoid(z: ArrayLike) -> np.ndarray:
    """Element-wise logistic function ``1 / (1 + exp(-z))``."""
    values = np.asarray(z, dtype=np.float64)
    return 1.0 / (1.0 + np.exp(-values))


def sigmoid_derivative(z: ArrayLike) -> np.ndarray:
    """Derivative of the logistic function, ``s * (1 - s)`` with ``s = sigmoid(z)``."""
    s = sigmoid(z)
    return s * (1.0 - s)


def relu(x: ArrayLike) -> np.ndarray:
    """Element-wise ``max(x, 0)``."""
    return np.maximum(np.asarray(x, dtype=np.float64), 0.0)


def relu_derivative(x: ArrayLike) -> np.ndarray:
    """1.0 where ``x > 0``, otherwise 0.0."""
    return (np.asarray(x, dtype=np.float64) > 0.0).astype(np.float64)


def softmax(z: ArrayLike) -> np.ndarray:
    """Softmax over every element of ``z`` at once; the result sums to one."""
    values = np.asarray(z, dtype=np.float64)
    exps = np.exp(values - values.max())
    return exps / exps.sum()


def softmax_rowwise(z: ArrayLike) -> np.ndarray:
    """Softmax applied to each row of a matrix independently."""
    values = np.atleast_2d(np.asarray(z, dtype=np.float64))
    exps = np.exp(values - values.max(axis=1, keepdims=True))
    return exps / exps.sum(axis=1, keepdims=True)


def mse_loss(y: ArrayLike, a: ArrayLike) -> float:
    """Mean of the squared differences between targets ``y`` and outputs ``a``."""
    diff = np.asarray(y, dtype=np.float64) - np.asarray(a, dtype=np.float64)
    return float(np.mean(np.square(diff)))


def cross_entropy_loss(y: ArrayLike, a: ArrayLike) -> float:
    """Cross-entropy of targets ``y`` and predictions ``a``, averaged over rows.

    Predictions are clipped to ``[1e-15, 1 - 1e-15]`` before the logarithm.
    """
    targets = np.atleast_2d(np.asarray(y, dtype=np.float64))
    predictions = np.atleast_2d(np.asarray(a, dtype=np.float64))
    if targets.shape != predictions.shape:
        raise ValueError("Targets and predictions must have the same shape")
    clipped = np.clip(predictions, _CLIP_EPSILON, 1.0 - _CLIP_EPSILON)
    return float(-(targets * np.log(clipped)).sum() / targets.shape[0])


def grouped_samples(
    means: Sequence[ArrayLike],
    covariance: ArrayLike,
    num: int,
    seed: int = 5,
) -> tuple[np.ndarray, np.ndarray]:
    """Draw ``num`` points around each mean and return them shuffled.

    Returns ``(data, labels)`` where ``data`` has one sample per column
    (shape ``(d, num * len(means))``) and ``labels[i]`` is the index of the
    mean that column ``i`` was drawn around.
    """
    if num < 0:
        raise ValueError("num must be non-negative")
    centres = [np.asarray(m, dtype=np.float64).reshape(-1) for m in means]
    if not centres:
        raise ValueError("At least one mean is required")
    dims = centres[0].size
    if any(c.size != dims for c in centres):
        raise ValueError("All means must have the same dimension")

    mvn = MultivariateNormal(seed=seed)
    blocks = [mvn.random(num, centre, covariance) for centre in centres]
    points = np.vstack(blocks) if num else np.zeros((0, dims))
    labels = np.repeat(np.arange(len(centres), dtype=np.float64), num)

    data = points.T
    order = mvn.shuffle_indices(data.shape[1])
    return data[:, order], labels[order]