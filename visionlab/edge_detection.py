"""Sobel gradients and Canny edge detection on 8-bit images."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Union

import numpy as np

ArrayLike = Union[np.ndarray, Sequence]

SOBEL_X = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]])
SOBEL_Y = np.array([[-1, -2, -1], [0, 0, 0], [1, 2, 1]])

STRONG_EDGE = 255
WEAK_EDGE = 128

_GAUSSIAN_3 = np.array([0.25, 0.5, 0.25])


def _correlate_interior(image: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """Correlate a 3x3 kernel over the interior pixels of ``image``."""
    rows, cols = image.shape
    out = np.zeros((rows - 2, cols - 2), dtype=np.result_type(image, kernel))
    for ki in range(3):
        for kj in range(3):
            out += kernel[ki, kj] * image[ki:ki + rows - 2, kj:kj + cols - 2]
    return out


def _sobel_interior(image: np.ndarray, dtype: type) -> tuple[np.ndarray, np.ndarray]:
    values = image.astype(dtype)
    return (
        _correlate_interior(values, SOBEL_X.astype(dtype)),
        _correlate_interior(values, SOBEL_Y.astype(dtype)),
    )


def calculate_gradient(gray: ArrayLike) -> tuple[np.ndarray, np.ndarray]:
    """Sobel gradient magnitude and direction of a grayscale image.

    Direction is in degrees, folded into ``[0, 180]``. Border pixels are zero
    in both outputs.
    """
    image = np.asarray(gray)
    if image.ndim != 2:
        raise ValueError("Gradient requires a single-channel image")
    rows, cols = image.shape
    magnitude = np.zeros((rows, cols))
    direction = np.zeros((rows, cols))
    if rows < 3 or cols < 3:
        return magnitude, direction

    gx, gy = _sobel_interior(image, np.float64)
    angle = np.degrees(np.arctan2(gy, gx))
    angle = np.where(angle < 0, angle + 180.0, angle)
    magnitude[1:-1, 1:-1] = np.sqrt(gx * gx + gy * gy)
    direction[1:-1, 1:-1] = angle
    return magnitude, direction


def non_maximum_suppression(magnitude: ArrayLike, direction: ArrayLike) -> np.ndarray:
    """Keep interior pixels that are maximal along their gradient direction."""
    mag = np.asarray(magnitude, dtype=np.float64)
    angle = np.asarray(direction, dtype=np.float64)
    if mag.shape != angle.shape or mag.ndim != 2:
        raise ValueError("Magnitude and direction must be matrices of the same shape")
    rows, cols = mag.shape
    suppressed = np.zeros((rows, cols))
    if rows < 3 or cols < 3:
        return suppressed

    def shifted(di: int, dj: int) -> np.ndarray:
        return mag[1 + di:rows - 1 + di, 1 + dj:cols - 1 + dj]

    centre = mag[1:-1, 1:-1]
    a = angle[1:-1, 1:-1]
    conditions = [
        ((a >= 0) & (a < 22.5)) | ((a >= 157.5) & (a <= 180)),
        (a >= 22.5) & (a < 67.5),
        (a >= 67.5) & (a < 112.5),
        (a >= 112.5) & (a < 157.5),
    ]
    first = np.select(conditions, [shifted(0, 1), shifted(-1, 1), shifted(-1, 0), shifted(-1, -1)], 0.0)
    second = np.select(conditions, [shifted(0, -1), shifted(1, -1), shifted(1, 0), shifted(1, 1)], 0.0)
    keep = (centre >= first) & (centre >= second)
    suppressed[1:-1, 1:-1] = np.where(keep, centre, 0.0)
    return suppressed


def hysteresis_thresholding(
    suppressed: ArrayLike, low_threshold: float, high_threshold: float
) -> np.ndarray:
    """Classify pixels as edges using two thresholds.

    Pixels at or above ``high_threshold`` are strong edges; pixels at or above
    ``low_threshold`` are weak edges that survive only when connected
    (8-neighbourhood, through other weak edges) to a strong edge that lies
    off the top and bottom rows and off the first column. Returns a uint8
    image of 0 and 255.
    """
    values = np.asarray(suppressed, dtype=np.float64)
    if values.ndim != 2:
        raise ValueError("Hysteresis thresholding requires a matrix")
    rows, cols = values.shape
    result = np.zeros((rows, cols), dtype=np.uint8)
    result[values >= low_threshold] = WEAK_EDGE
    result[values >= high_threshold] = STRONG_EDGE

    visited = np.zeros((rows, cols), dtype=bool)
    seeds = np.argwhere(result[1:rows - 1, 1:cols] == STRONG_EDGE) + 1
    for si, sj in seeds:
        if visited[si, sj]:
            continue
        stack = [(int(si), int(sj))]
        while stack:
            i, j = stack.pop()
            if visited[i, j]:
                continue
            visited[i, j] = True
            for ni in range(max(i - 1, 0), min(i + 2, rows)):
                for nj in range(max(j - 1, 0), min(j + 2, cols)):
                    if result[ni, nj] == WEAK_EDGE:
                        result[ni, nj] = STRONG_EDGE
                        stack.append((ni, nj))

    result[result == WEAK_EDGE] = 0
    return result


def _gaussian_blur_3x3(image: np.ndarray) -> np.ndarray:
    """3x3 Gaussian blur with reflected borders, rounded back to uint8."""
    values = image.astype(np.float64)
    pad = [(1, 1), (1, 1)] + [(0, 0)] * (values.ndim - 2)
    mode = "reflect" if min(values.shape[:2]) > 1 else "edge"
    padded = np.pad(values, pad, mode=mode)
    rows, cols = values.shape[:2]
    horizontal = sum(w * padded[:, k:k + cols] for k, w in enumerate(_GAUSSIAN_3))
    blurred = sum(w * horizontal[k:k + rows] for k, w in enumerate(_GAUSSIAN_3))
    return np.clip(np.rint(blurred), 0, 255).astype(np.uint8)


def _bgr_to_gray(image: np.ndarray) -> np.ndarray:
    b, g, r = (image[:, :, c].astype(np.float64) for c in range(3))
    return np.clip(np.rint(0.299 * r + 0.587 * g + 0.114 * b), 0, 255).astype(np.uint8)


class EdgeDetector:
    """Edge detection over one 8-bit image (grayscale or BGR)."""

    def __init__(self, image: ArrayLike) -> None:
        self.image = np.asarray(image)

    def apply_sobel(self, dx: bool = True, dy: bool = True) -> tuple[np.ndarray, np.ndarray]:
        """Sobel magnitude (uint8, clipped to 0..255) and direction (float32 degrees).

        The image must be single-channel. Turning off ``dx`` or ``dy`` drops
        that gradient component. Border pixels are zero.
        """
        if self.image.size == 0:
            raise ValueError("Input image is empty")
        if self.image.ndim != 2:
            raise ValueError("Input image must be a single channel (grayscale) image")
        rows, cols = self.image.shape
        magnitude = np.zeros((rows, cols), dtype=np.uint8)
        direction = np.zeros((rows, cols), dtype=np.float32)
        if rows < 3 or cols < 3:
            return magnitude, direction

        gx, gy = _sobel_interior(self.image, np.int64)
        if not dx:
            gx = np.zeros_like(gx)
        if not dy:
            gy = np.zeros_like(gy)
        mag = np.sqrt((gx * gx + gy * gy).astype(np.float64)).astype(np.int64)
        magnitude[1:-1, 1:-1] = np.clip(mag, 0, 255).astype(np.uint8)
        direction[1:-1, 1:-1] = (np.arctan2(gy, gx) * 180.0 / np.pi).astype(np.float32)
        return magnitude, direction

    def canny(self, low_threshold: float, high_threshold: float) -> np.ndarray:
        """Canny edges: blur, gradient, non-maximum suppression, hysteresis.

        A three-channel image is taken as BGR and converted to grayscale after
        blurring. Returns a uint8 image of 0 and 255.
        """
        if self.image.size == 0:
            raise ValueError("Input image is empty")
        if self.image.ndim == 3 and self.image.shape[2] == 3:
            gray = _bgr_to_gray(_gaussian_blur_3x3(self.image))
        elif self.image.ndim == 2:
            gray = _gaussian_blur_3x3(self.image)
        else:
            raise ValueError("Image must be grayscale or three-channel BGR")
        magnitude, direction = calculate_gradient(gray)
        suppressed = non_maximum_suppression(magnitude, direction)
        return hysteresis_thresholding(suppressed, low_threshold, high_threshold)