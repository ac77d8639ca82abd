"""Conversion between image arrays and tensors."""

from __future__ import annotations

import numpy as np

from visionlab.tensor import Tensor, float32


def image_to_tensor(image: np.ndarray) -> Tensor:
    """Convert an 8-bit image to a float32 tensor.

    A single-channel image becomes a ``(rows, cols)`` tensor; a three-channel
    image a ``(rows, cols, 3)`` tensor with the channel order kept.
    """
    pixels = np.asarray(image)
    if pixels.size == 0:
        raise ValueError("Image should be non-empty")
    if pixels.ndim == 3 and pixels.shape[2] == 1:
        pixels = pixels[:, :, 0]
    if pixels.ndim == 2:
        shape = pixels.shape
    elif pixels.ndim == 3 and pixels.shape[2] == 3:
        shape = pixels.shape
    elif pixels.ndim == 3:
        raise ValueError("Unsupported number of channels")
    else:
        raise ValueError("Image must have two or three dimensions")

    tensor = Tensor.zeros(shape, float32)
    tensor.data[:] = pixels.astype(np.float32).reshape(-1)
    return tensor


def tensor_to_image(tensor: Tensor) -> np.ndarray:
    """Convert a 2-D or ``(rows, cols, 3)`` tensor to an 8-bit image.

    Values are truncated toward zero and clipped to the 0–255 range.
    """
    if tensor.empty:
        raise ValueError("Tensor should be non-empty")
    if tensor.dimensions == 3 and tensor.shape[2] != 3:
        raise ValueError("Unsupported number of channels")
    if tensor.dimensions not in (2, 3):
        raise ValueError("Unsupported tensor dimensions")
    values = np.trunc(tensor.data.astype(np.float64))
    return np.clip(values, 0, 255).astype(np.uint8).reshape(tensor.shape)