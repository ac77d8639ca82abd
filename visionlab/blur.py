"""Applying convolution kernels to 8-bit images."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Union

import numpy as np

ArrayLike = Union[np.ndarray, Sequence]


def apply_kernel(image: ArrayLike, kernel: ArrayLike) -> np.ndarray:
    """Correlate ``kernel`` over an 8-bit image, returning a new uint8 image.

    The kernel is centred on each pixel; neighbours outside the image are
    skipped. Each weighted neighbour is rounded (half to even) and clamped to
    0..255, then added to the pixel with saturation at 255, in row-major
    kernel order. Grayscale and multi-channel images are both accepted.
    """
    pixels = np.asarray(image)
    weights = np.asarray(kernel, dtype=np.float64)
    if weights.ndim != 2:
        raise ValueError("Kernel must be a matrix")
    kernel_rows, kernel_cols = weights.shape
    if kernel_rows % 2 == 0 or kernel_cols % 2 == 0:
        raise ValueError("Kernel dimensions must be odd")
    if pixels.ndim not in (2, 3):
        raise ValueError("Image must have two or three dimensions")
    if pixels.size and (pixels.min() < 0 or pixels.max() > 255):
        raise ValueError("Image values must lie in 0..255")

    values = pixels.astype(np.float64)
    rows, cols = values.shape[:2]
    half_rows, half_cols = kernel_rows // 2, kernel_cols // 2
    padding = [(half_rows, half_rows), (half_cols, half_cols)] + [(0, 0)] * (values.ndim - 2)
    padded = np.pad(values, padding)

    total = np.zeros(values.shape, dtype=np.int64)
    for (ki, kj), weight in np.ndenumerate(weights):
        window = padded[ki:ki + rows, kj:kj + cols]
        term = np.clip(np.rint(window * weight), 0, 255).astype(np.int64)
        total = np.minimum(total + term, 255)
    return total.astype(np.uint8)