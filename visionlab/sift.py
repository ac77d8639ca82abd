"""Scale-space extrema detection in the style of SIFT."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Union

import numpy as np

ArrayLike = Union[np.ndarray, Sequence]
ScaleSpace = list[list[np.ndarray]]


@dataclass
class Keypoint:
    """A detected feature.

    ``x`` and ``y`` are in the coordinates of the input image, ``scale`` is the
    blur level the feature was found at, ``octave`` and ``layer`` locate it in
    the difference-of-Gaussian pyramid.
    """

    x: float
    y: float
    scale: float
    angle: float = 0.0
    octave: int = 0
    layer: int = 0
    descriptor: list[float] = field(default_factory=list)


def _as_image(image: ArrayLike) -> np.ndarray:
    pixels = np.asarray(image)
    if pixels.ndim != 2:
        raise ValueError("SIFT requires a single-channel image")
    if pixels.size == 0:
        raise ValueError("Image should be non-empty")
    return pixels.astype(np.float32)


def _convolve(image: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """Filter with a separable Gaussian kernel, reflecting at the borders."""
    weights = kernel.astype(np.float64).sum(axis=1)
    size = weights.size
    before = size // 2
    after = size - 1 - before
    rows, cols = image.shape
    mode = "reflect" if min(rows, cols) > 1 else "edge"
    padded = np.pad(image.astype(np.float64), ((before, after), (before, after)), mode=mode)
    horizontal = sum(w * padded[:, k:k + cols] for k, w in enumerate(weights))
    filtered = sum(w * horizontal[k:k + rows] for k, w in enumerate(weights))
    return np.asarray(filtered, dtype=np.float32)


def _halve(image: np.ndarray) -> np.ndarray:
    """Downsample by two with bilinear interpolation (a 2x2 mean)."""
    rows, cols = image.shape[0] // 2, image.shape[1] // 2
    if rows == 0 or cols == 0:
        raise ValueError("Image is too small for the number of octaves")
    blocks = image[:2 * rows, :2 * cols].astype(np.float64).reshape(rows, 2, cols, 2)
    return blocks.mean(axis=(1, 3)).astype(np.float32)


def _check_position(layer: np.ndarray, x: int, y: int) -> None:
    rows, cols = layer.shape
    if not (1 <= y <= rows - 2 and 1 <= x <= cols - 2):
        raise IndexError("Position must have a full 3x3 neighbourhood")


class SIFTDetector:
    """Finds scale-space extrema of the difference-of-Gaussian pyramid."""

    def __init__(
        self,
        octaves: int = 4,
        scales: int = 3,
        sigma: float = 1.6,
        contrast_threshold: float = 0.04,
        edge_threshold: float = 10.0,
    ) -> None:
        if octaves < 1:
            raise ValueError("octaves must be at least 1")
        if scales < 1:
            raise ValueError("scales must be at least 1")
        if sigma <= 0:
            raise ValueError("sigma must be positive")
        if edge_threshold <= 0:
            raise ValueError("edge_threshold must be positive")
        self.octaves = int(octaves)
        self.scales = int(scales)
        self.sigma = float(sigma)
        self.contrast_threshold = float(contrast_threshold)
        self.edge_threshold = float(edge_threshold)

    @staticmethod
    def create_gaussian_kernel(sigma: float, size: int = 0) -> np.ndarray:
        """A normalised ``size`` x ``size`` float32 Gaussian kernel.

        With ``size`` 0 the size is ``2 * ceil(3 * sigma) + 1``.
        """
        if sigma <= 0:
            raise ValueError("sigma must be positive")
        if size < 0:
            raise ValueError("size must be non-negative")
        if size == 0:
            size = 2 * math.ceil(3 * sigma) + 1
        offsets = np.arange(size, dtype=np.float64) - size // 2
        squared = offsets[:, None] ** 2 + offsets[None, :] ** 2
        values = np.exp(-squared / (2 * sigma * sigma))
        return (values / values.sum()).astype(np.float32)

    def build_scale_space(self, image: ArrayLike) -> ScaleSpace:
        """Blur levels per octave: ``scales + 3`` images, each octave half the size."""
        current = _as_image(image)
        space: ScaleSpace = []
        for octave in range(self.octaves):
            levels = [current.copy()]
            for s in range(1, self.scales + 3):
                level_sigma = self.sigma * 2.0 ** (s / self.scales)
                kernel = self.create_gaussian_kernel(level_sigma)
                levels.append(_convolve(levels[-1], kernel))
            space.append(levels)
            if octave < self.octaves - 1:
                current = _halve(levels[self.scales])
        return space

    def build_dog(self, scale_space: ScaleSpace) -> ScaleSpace:
        """Differences of consecutive blur levels: ``scales + 2`` per octave."""
        if len(scale_space) != self.octaves:
            raise ValueError(f"Scale space must have {self.octaves} octaves")
        if any(len(levels) != self.scales + 3 for levels in scale_space):
            raise ValueError(f"Every octave must have {self.scales + 3} levels")
        return [
            [np.asarray(upper) - np.asarray(lower) for lower, upper in zip(levels, levels[1:])]
            for levels in scale_space
        ]

    @staticmethod
    def is_extremum(dog_space: ScaleSpace, octave: int, scale: int, x: int, y: int) -> bool:
        """Whether the value at ``(x, y)`` is strictly above or below all 26 neighbours."""
        layers = dog_space[octave]
        if not 1 <= scale <= len(layers) - 2:
            raise IndexError("Scale must have a layer above and below")
        centre_layer = np.asarray(layers[scale])
        _check_position(centre_layer, x, y)
        cube = np.stack(
            [np.asarray(layers[scale + ds])[y - 1:y + 2, x - 1:x + 2] for ds in (-1, 0, 1)]
        ).astype(np.float64)
        centre = cube[1, 1, 1]
        neighbours = np.delete(cube.ravel(), 13)
        return bool(centre > neighbours.max() or centre < neighbours.min())

    def is_valid_keypoint(
        self, dog_space: ScaleSpace, octave: int, scale: int, x: int, y: int
    ) -> bool:
        """Whether the point has enough contrast and is not on an edge."""
        layer = np.asarray(dog_space[octave][scale])
        _check_position(layer, x, y)

        def at(row: int, col: int) -> float:
            return float(layer[row, col])

        value = at(y, x)
        if abs(value) < self.contrast_threshold:
            return False
        dxx = at(y, x + 1) + at(y, x - 1) - 2 * value
        dyy = at(y + 1, x) + at(y - 1, x) - 2 * value
        dxy = (at(y + 1, x + 1) - at(y + 1, x - 1) - at(y - 1, x + 1) + at(y - 1, x - 1)) / 4.0
        trace = dxx + dyy
        det = dxx * dyy - dxy * dxy
        if det <= 0:
            return False
        return trace * trace / det < self._edge_limit()

    def _edge_limit(self) -> float:
        e = self.edge_threshold
        return (e + 1) * (e + 1) / e

    def detect(self, image: ArrayLike) -> list[Keypoint]:
        """Keypoints at the valid extrema of the difference-of-Gaussian pyramid.

        Pixel values are used as given, so the contrast threshold is relative
        to the image's own range. Keypoints come in order of octave, layer,
        then row-major position.
        """
        dog_space = self.build_dog(self.build_scale_space(image))
        keypoints: list[Keypoint] = []
        limit = self._edge_limit()
        for octave, layers in enumerate(dog_space):
            factor = 2 ** octave
            for scale in range(1, len(layers) - 1):
                found = self._extrema_in_layer(layers, scale, limit)
                level_sigma = self.sigma * 2.0 ** (octave + scale / self.scales)
                keypoints.extend(
                    Keypoint(
                        x=float(x * factor),
                        y=float(y * factor),
                        scale=level_sigma,
                        octave=octave,
                        layer=scale,
                    )
                    for y, x in found
                )
        return keypoints

    def _extrema_in_layer(
        self, layers: list[np.ndarray], scale: int, limit: float
    ) -> list[tuple[int, int]]:
        img = np.asarray(layers[scale], dtype=np.float64)
        rows, cols = img.shape
        if rows < 3 or cols < 3:
            return []

        def shifted(layer: np.ndarray, dy: int, dx: int) -> np.ndarray:
            return layer[1 + dy:rows - 1 + dy, 1 + dx:cols - 1 + dx]

        centre = shifted(img, 0, 0)
        neighbours = np.stack([
            shifted(np.asarray(layers[scale + ds], dtype=np.float64), dy, dx)
            for ds in (-1, 0, 1)
            for dy in (-1, 0, 1)
            for dx in (-1, 0, 1)
            if (ds, dy, dx) != (0, 0, 0)
        ])
        extremum = (centre > neighbours.max(axis=0)) | (centre < neighbours.min(axis=0))

        dxx = shifted(img, 0, 1) + shifted(img, 0, -1) - 2 * centre
        dyy = shifted(img, 1, 0) + shifted(img, -1, 0) - 2 * centre
        dxy = (
            shifted(img, 1, 1) - shifted(img, 1, -1) - shifted(img, -1, 1) + shifted(img, -1, -1)
        ) / 4.0
        trace = dxx + dyy
        det = dxx * dyy - dxy * dxy
        ratio = trace * trace / np.where(det > 0, det, 1.0)
        valid = (np.abs(centre) >= self.contrast_threshold) & (det > 0) & (ratio < limit)

        return [(int(y) + 1, int(x) + 1) for y, x in np.argwhere(extremum & valid)]