"""A small n-dimensional tensor with row-major storage."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Union

import numpy as np

int8 = np.int8
int16 = np.int16
int32 = np.int32
int64 = np.int64
uint8 = np.uint8
uint16 = np.uint16
uint32 = np.uint32
uint64 = np.uint64
float32 = np.float32
float64 = np.float64

DTypeLike = Union[np.dtype, type, str]

DEFAULT_DTYPE = int32


@dataclass
class Rect:
    """An axis-aligned rectangle with non-negative position and size."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def __post_init__(self) -> None:
        for name in ("x", "y", "width", "height"):
            if getattr(self, name) < 0:
                raise ValueError(f"Rect.{name} must be non-negative")


def _as_shape(dims: Sequence[Any]) -> tuple[int, ...]:
    shape = []
    for dim in dims:
        value = int(dim)
        if value < 0:
            raise ValueError("Dimensions must be non-negative")
        shape.append(value)
    return tuple(shape)


def _format_value(value: Any) -> str:
    if isinstance(value, (bool, np.bool_)):
        return str(int(value))
    if isinstance(value, (float, np.floating)):
        return format(float(value), "g")
    return str(int(value))


class Tensor:
    """A dense tensor of a fixed dtype, stored flat in row-major order.

    ``Tensor()`` is empty; ``Tensor(4, 5)`` or ``Tensor((4, 5))`` is a
    zero-filled tensor of that shape.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, *args: Any, dtype: DTypeLike = DEFAULT_DTYPE) -> None:
        self._dtype = np.dtype(dtype)
        if not args:
            self._shape: tuple[int, ...] = ()
            self._data = np.zeros(0, dtype=self._dtype)
            return
        if len(args) == 1 and isinstance(args[0], (Sequence, np.ndarray)):
            dims = list(args[0])
        else:
            dims = list(args)
        self._shape = _as_shape(dims)
        self._data = np.zeros(int(np.prod(self._shape, dtype=np.int64)), dtype=self._dtype)

    # ----- construction -------------------------------------------------

    @classmethod
    def _from_flat(cls, shape: tuple[int, ...], flat: np.ndarray, dtype: DTypeLike) -> Tensor:
        tensor = cls.__new__(cls)
        tensor._dtype = np.dtype(dtype)
        tensor._shape = tuple(shape)
        tensor._data = np.ascontiguousarray(flat, dtype=tensor._dtype).reshape(-1)
        return tensor

    @classmethod
    def full(cls, shape: Sequence[int], value: Any, dtype: DTypeLike = DEFAULT_DTYPE) -> Tensor:
        """A tensor of ``shape`` with every element set to ``value``."""
        dims = _as_shape(shape)
        size = int(np.prod(dims, dtype=np.int64))
        return cls._from_flat(dims, np.full(size, value, dtype=np.dtype(dtype)), dtype)

    @classmethod
    def from_list(cls, data: Sequence[Any], dtype: DTypeLike = DEFAULT_DTYPE) -> Tensor:
        """Build a 1-D tensor from a flat list or a 2-D tensor from a list of rows."""
        rows = list(data)
        if not rows:
            return cls._from_flat((0,), np.zeros(0), dtype)
        if isinstance(rows[0], (Sequence, np.ndarray)) and not isinstance(rows[0], str):
            cols = len(rows[0])
            for row in rows:
                if len(row) != cols:
                    raise ValueError("All rows must have the same number of columns")
            flat = np.array([value for row in rows for value in row], dtype=np.dtype(dtype))
            return cls._from_flat((len(rows), cols), flat, dtype)
        return cls._from_flat((len(rows),), np.array(rows, dtype=np.dtype(dtype)), dtype)

    @classmethod
    def zeros(cls, shape: Sequence[int], dtype: DTypeLike = DEFAULT_DTYPE) -> Tensor:
        """A tensor of ``shape`` filled with zeros."""
        return cls.full(shape, 0, dtype)

    @classmethod
    def ones(cls, shape: Sequence[int], dtype: DTypeLike = DEFAULT_DTYPE) -> Tensor:
        """A tensor of ``shape`` filled with ones."""
        return cls.full(shape, 1, dtype)

    @classmethod
    def random(cls, *args: Any, dtype: DTypeLike = float32) -> Tensor:
        """A tensor of the given dimensions drawn from the standard normal distribution."""
        if len(args) == 1 and isinstance(args[0], (Sequence, np.ndarray)):
            dims = _as_shape(list(args[0]))
        else:
            dims = _as_shape(args)
        size = int(np.prod(dims, dtype=np.int64))
        samples = np.random.default_rng().normal(0.0, 1.0, size)
        return cls._from_flat(dims, samples.astype(np.dtype(dtype)), dtype)

    def clone(self) -> Tensor:
        """An independent copy of this tensor."""
        return self._from_flat(self._shape, self._data.copy(), self._dtype)

    def cast(self, dtype: DTypeLike) -> Tensor:
        """A copy converted element-wise to ``dtype`` (floats truncate toward zero)."""
        return self._from_flat(self._shape, self._data.astype(np.dtype(dtype)), dtype)

    # ----- element access -----------------------------------------------

    def _flat_index(self, indices: Sequence[Any]) -> int:
        idx = [int(i) for i in indices]
        if len(idx) != len(self._shape):
            raise ValueError("Number of indices must match tensor dimensions")
        index = 0
        stride = 1
        for position, dim in zip(reversed(idx), reversed(self._shape)):
            if position < 0 or position >= dim:
                raise IndexError("Index out of bounds")
            index += position * stride
            stride *= dim
        return index

    @staticmethod
    def _normalize(indices: Any) -> tuple[Any, ...]:
        if isinstance(indices, (tuple, list)):
            return tuple(indices)
        return (indices,)

    def at(self, *args: Any) -> Any:
        """The element at the given indices, one per dimension."""
        return self._data[self._flat_index(args)].item()

    def set(self, indices: Any, value: Any) -> None:
        """Store ``value`` at ``indices`` (an int or a tuple of ints)."""
        self._data[self._flat_index(self._normalize(indices))] = value

    def __getitem__(self, indices: Any) -> Any:
        return self._data[self._flat_index(self._normalize(indices))].item()

    def __setitem__(self, indices: Any, value: Any) -> None:
        self.set(indices, value)

    # ----- arithmetic ---------------------------------------------------

    def _check_same_shape(self, other: Tensor, operation: str) -> None:
        if self._shape != other._shape:
            raise ValueError(f"Shape mismatch in {operation}")

    def __add__(self, other: object) -> Tensor:
        if not isinstance(other, Tensor):
            return NotImplemented
        self._check_same_shape(other, "addition")
        return self._from_flat(self._shape, (self._data + other._data).astype(self._dtype), self._dtype)

    def __sub__(self, other: object) -> Tensor:
        if not isinstance(other, Tensor):
            return NotImplemented
        self._check_same_shape(other, "subtraction")
        return self._from_flat(self._shape, (self._data - other._data).astype(self._dtype), self._dtype)

    def __mul__(self, other: object) -> Tensor:
        if not isinstance(other, Tensor):
            return NotImplemented
        self._check_same_shape(other, "multiplication")
        return self._from_flat(self._shape, (self._data * other._data).astype(self._dtype), self._dtype)

    def __truediv__(self, other: object) -> Tensor:
        if not isinstance(other, Tensor):
            return NotImplemented
        self._check_same_shape(other, "division")
        divisor = other._data.astype(self._dtype)
        if np.any(divisor == 0):
            raise ZeroDivisionError("Division by zero in tensor division")
        if np.issubdtype(self._dtype, np.integer):
            quotient = self._data // divisor
            remainder = self._data % divisor
            adjust = (remainder != 0) & ((self._data < 0) != (divisor < 0))
            result = quotient + adjust.astype(self._dtype)
        else:
            result = self._data / divisor
        return self._from_flat(self._shape, result.astype(self._dtype), self._dtype)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tensor):
            return NotImplemented
        return self._shape == other._shape and bool(np.array_equal(self._data, other._data))

    def __len__(self) -> int:
        """The total number of elements."""
        return self._data.size

    @staticmethod
    def dot(a: Tensor, b: Tensor) -> Tensor:
        """Dot product for 1-D and 2-D tensors, with the dtype of ``a``."""
        shape_a, shape_b = a._shape, b._shape
        if not shape_a or not shape_b:
            raise ValueError("Cannot perform dot product on empty tensors")
        dims = (len(shape_a), len(shape_b))
        if dims == (1, 1):
            if shape_a[0] != shape_b[0]:
                raise ValueError("Shape mismatch for dot product of 1D tensors")
            total = np.dot(a._data, b._data.astype(a._dtype))
            return Tensor.full((1,), total, a._dtype)
        if dims == (2, 1):
            if shape_a[1] != shape_b[0]:
                raise ValueError("Shape mismatch for dot product of 2D and 1D tensors")
        elif dims == (1, 2):
            if shape_a[0] != shape_b[0]:
                raise ValueError("Shape mismatch for dot product of 1D and 2D tensors")
        elif dims == (2, 2):
            if shape_a[1] != shape_b[0]:
                raise ValueError("Shape mismatch for dot product of 2D tensors")
        else:
            raise ValueError("Unsupported tensor dimensions for dot product")
        left = a._data.reshape(shape_a)
        right = b._data.reshape(shape_b).astype(a._dtype)
        product = np.dot(left, right).astype(a._dtype)
        return Tensor._from_flat(product.shape, product, a._dtype)

    # ----- properties ---------------------------------------------------

    @property
    def dimensions(self) -> int:
        """Number of dimensions."""
        return len(self._shape)

    @property
    def shape(self) -> tuple[int, ...]:
        """The extent of each dimension."""
        return self._shape

    @property
    def empty(self) -> bool:
        """Whether the tensor holds no elements."""
        return self._data.size == 0

    @property
    def size(self) -> int:
        """Total number of elements."""
        return self._data.size

    @property
    def data(self) -> np.ndarray:
        """The flat, row-major element storage (mutations are visible in the tensor)."""
        return self._data

    @property
    def dtype(self) -> np.dtype:
        """Element type."""
        return self._dtype

    def __str__(self) -> str:
        values = [_format_value(v) for v in self._data.tolist()]
        if len(self._shape) == 1:
            return " [" + ", ".join(values) + "]"
        if len(self._shape) == 2:
            rows, cols = self._shape
            lines = [
                "[" + ", ".join(values[r * cols:(r + 1) * cols]) + "]"
                for r in range(rows)
            ]
            return "\n[" + ",\n ".join(lines) + "]"
        return ""

    def __repr__(self) -> str:
        return f"Tensor(shape={self._shape}, dtype={self._dtype.name})"