"""Reading IDX image and label files (the MNIST format)."""

from __future__ import annotations

import os
import struct
from collections.abc import Sequence
from typing import Union

import numpy as np

PathLike = Union[str, os.PathLike]

_IMAGE_HEADER = struct.Struct(">4xIII")
_LABEL_HEADER = struct.Struct(">4xI")


def _read_header(stream, header: struct.Struct) -> tuple[int, ...]:
    raw = stream.read(header.size)
    if len(raw) != header.size:
        raise ValueError("IDX file header is truncated")
    return header.unpack(raw)


def read_idx_images(path: PathLike) -> list[bytes]:
    """Read an IDX3 image file; each image comes back as ``rows * cols`` raw bytes.

    The header is a 4-byte magic number followed by big-endian image count,
    row count and column count.
    """
    with open(path, "rb") as stream:
        count, rows, cols = _read_header(stream, _IMAGE_HEADER)
        length = rows * cols
        images = []
        for _ in range(count):
            image = stream.read(length)
            if len(image) != length:
                raise ValueError("IDX image file is truncated")
            images.append(image)
    return images


def read_idx_labels(path: PathLike) -> list[int]:
    """Read an IDX1 label file; one integer label per item.

    The header is a 4-byte magic number followed by a big-endian item count.
    """
    with open(path, "rb") as stream:
        (count,) = _read_header(stream, _LABEL_HEADER)
        labels = stream.read(count)
    if len(labels) != count:
        raise ValueError("IDX label file is truncated")
    return list(labels)


def images_to_arrays(
    images: Sequence[bytes], rows: int = 28, cols: int = 28
) -> list[np.ndarray]:
    """Turn flat images into ``(rows, cols)`` uint8 arrays, filled row by row."""
    arrays = []
    for image in images:
        flat = np.frombuffer(bytes(image), dtype=np.uint8)
        if flat.size != rows * cols:
            raise ValueError(f"Image has {flat.size} bytes, expected {rows * cols}")
        arrays.append(flat.reshape(rows, cols).copy())
    return arrays