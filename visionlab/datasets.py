"""Labelled datasets with train/test splitting."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Union

import numpy as np

from visionlab.multivariate_normal import MultivariateNormal

ArrayLike = Union[np.ndarray, Sequence]


class DatasetNotSetupError(RuntimeError):
    """Raised when a dataset is loaded before it has been set up."""


class Dataset:
    """Features ``x`` of shape ``(n, d)`` with integer class labels ``y`` of shape ``(n,)``."""

    def __init__(self, n: int, classes: int, is_cached: bool = True) -> None:
        if n < 0:
            raise ValueError("n must be non-negative")
        if classes <= 0:
            raise ValueError("classes must be positive")
        self._n = int(n)
        self._classes = int(classes)
        self._is_cached = bool(is_cached)
        self._x = np.zeros((self._n, self._classes))
        self._y = np.zeros(self._n)
        self._is_setup = False

    @property
    def n(self) -> int:
        """Number of samples."""
        return self._n

    @property
    def classes(self) -> int:
        """Number of classes."""
        return self._classes

    @property
    def is_cached(self) -> bool:
        """Whether the data is meant to be kept in memory."""
        return self._is_cached

    @property
    def is_setup(self) -> bool:
        """Whether the samples have been generated or read."""
        return self._is_setup

    @property
    def x(self) -> np.ndarray:
        """Feature matrix, one sample per row."""
        return self._x

    @property
    def y(self) -> np.ndarray:
        """Class label of each sample."""
        return self._y

    def _assign(self, x: np.ndarray, y: np.ndarray) -> None:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64).reshape(-1)
        if x.shape[0] != self._n or y.size != self._n:
            raise ValueError(f"Data must hold exactly {self._n} samples")
        self._x = x
        self._y = y
        self._is_setup = True

    def load(
        self,
        percent_train: int,
        shuffle: bool = True,
        one_hot: bool = True,
    ) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """Split into ``(x_train, y_train, x_test, y_test)``.

        The first ``int(percent_train / 100 * n)`` samples (after an optional
        shuffle) go to training. With ``one_hot`` the labels come back as
        ``(rows, classes)`` one-hot matrices, otherwise as label vectors.
        """
        if not self._is_setup:
            raise DatasetNotSetupError(
                "Dataset is not setup yet. Please call setup() before load()."
            )
        if not 0 <= percent_train <= 100:
            raise ValueError("percent_train must be between 0 and 100")

        features = self._x
        labels = self._y
        if shuffle:
            order = MultivariateNormal().shuffle_indices(self._n)
            features = features[order]
            labels = labels[order]
        else:
            features = features.copy()
            labels = labels.copy()

        num_train = int(percent_train / 100.0 * self._n)
        x_train, x_test = features[:num_train], features[num_train:]
        y_train, y_test = labels[:num_train], labels[num_train:]

        if one_hot:
            y_train = self._one_hot(y_train)
            y_test = self._one_hot(y_test)
        return x_train, y_train, x_test, y_test

    def _one_hot(self, labels: np.ndarray) -> np.ndarray:
        indices = labels.astype(int)
        if indices.size and (indices.min() < 0 or indices.max() >= self._classes):
            raise ValueError("Label out of range for the number of classes")
        encoded = np.zeros((indices.size, self._classes))
        encoded[np.arange(indices.size), indices] = 1.0
        return encoded


class TwoDimensionDataset(Dataset):
    """Points in the plane drawn from one Gaussian cluster per class."""

    DIMENSIONS = 2

    def __init__(self, n: int, classes: int, is_cached: bool = False) -> None:
        super().__init__(n, classes, is_cached)

    def setup(self, mean: ArrayLike, covariance: ArrayLike) -> None:
        """Draw ``n // classes`` points around each row of ``mean``.

        ``mean`` has one 2-D centre per class and ``covariance`` is shared.
        When ``n`` is not a multiple of ``classes`` the trailing samples stay
        at the origin with label 0.
        """
        centres = np.asarray(mean, dtype=np.float64)
        if centres.shape != (self.classes, self.DIMENSIONS):
            raise ValueError(
                f"mean must have shape ({self.classes}, {self.DIMENSIONS}), got {centres.shape}"
            )
        x = np.zeros((self.n, self.DIMENSIONS))
        y = np.zeros(self.n)
        mvn = MultivariateNormal()
        per_class = self.n // self.classes
        for label, centre in enumerate(centres):
            block = slice(label * per_class, (label + 1) * per_class)
            x[block] = mvn.random(per_class, centre, covariance)
            y[block] = label
        self._assign(x, y)