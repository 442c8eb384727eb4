"""Generic kernel container and its integer/floating-point specializations.

A kernel is a fixed-size rectangular grid of scalar weights with a designated
center cell. Cells live in one contiguous row-major numpy buffer of length
``width * height``; cell ``(row, col)`` is stored at ``row * width + col``.

Conversions between :class:`KernelInt` and :class:`KernelFloat` are always
explicit calls (see :mod:`blur_experiments.kernel.conversions`).
"""

from __future__ import annotations

import copy
import logging
import numbers
from typing import Any, ClassVar, Iterator, Optional, Tuple

import numpy as np
import torch

from blur_experiments.exceptions import InvalidArgument

logger = logging.getLogger(__name__)


def _require_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    return int(value)


class Kernel:
    """A generic kernel for use in image processing.

    Prefer :class:`KernelInt` or :class:`KernelFloat` over a bare ``Kernel``;
    the generic form takes its scalar type from the ``dtype`` argument.

    Args:
        width (int): Width of the kernel, > 0.
        height (int): Height of the kernel, > 0.
        center_x (int): X coordinate of the center, in ``[0, width)``.
        center_y (int): Y coordinate of the center, in ``[0, height)``.
        dtype: numpy integer or floating dtype of each cell.

    Raises:
        InvalidArgument: If any of the four geometry parameters is out of range.
    """

    dtype: ClassVar[np.dtype] = np.dtype(np.float64)

    def __init__(
        self,
        width: int,
        height: int,
        center_x: int,
        center_y: int,
        *,
        dtype: Optional[np.dtype] = None,
    ):
        width = _require_int("width", width)
        height = _require_int("height", height)
        center_x = _require_int("center_x", center_x)
        center_y = _require_int("center_y", center_y)

        if width <= 0:
            raise InvalidArgument("width must be a positive number")
        if height <= 0:
            raise InvalidArgument("height must be a positive number")
        if not 0 <= center_x < width:
            raise InvalidArgument("center_x must be >= 0 and < width")
        if not 0 <= center_y < height:
            raise InvalidArgument("center_y must be >= 0 and < height")

        if dtype is not None:
            dtype = np.dtype(dtype)
            if dtype.kind not in "iuf":
                raise InvalidArgument(f"dtype must be an integer or floating type, got {dtype}")
            self.dtype = dtype  # type: ignore[misc]

        self._width = width
        self._height = height
        self._center_x = center_x
        self._center_y = center_y
        self._buffer = np.zeros(width * height, dtype=self.dtype)

        logger.debug("Created %r", self)

    @classmethod
    def square(cls, size: int, **kwargs):
        """Create a square kernel whose center is the true middle cell.

        Raises:
            InvalidArgument: If ``size`` is not a positive odd number.
        """
        size = _require_int("size", size)
        if size <= 0:
            raise InvalidArgument("size must be a positive odd number")
        if size % 2 == 0:
            raise InvalidArgument("size must be a positive odd number")
        return cls(size, size, size // 2, size // 2, **kwargs)

    @classmethod
    def from_array(
        cls,
        values,
        center_x: Optional[int] = None,
        center_y: Optional[int] = None,
        **kwargs,
    ):
        """Build a kernel from a 2D ``(height, width)`` array or nested sequence.

        A missing center coordinate defaults to ``dimension // 2``.
        """
        arr = np.asarray(values)
        if arr.ndim != 2 or arr.size == 0:
            raise InvalidArgument(f"values must be a non-empty 2D array, got shape {arr.shape}")
        height, width = arr.shape
        kernel = cls(
            width,
            height,
            width // 2 if center_x is None else center_x,
            height // 2 if center_y is None else center_y,
            **kwargs,
        )
        kernel._fill(arr)
        return kernel

    # -------- geometry --------
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def center_x(self) -> int:
        return self._center_x

    @property
    def center_y(self) -> int:
        return self._center_y

    @property
    def shape(self) -> Tuple[int, int]:
        """``(height, width)``, matching the row-major layout of :attr:`data`."""
        return self._height, self._width

    @property
    def center(self) -> Tuple[int, int]:
        return self._center_x, self._center_y

    @property
    def is_integer(self) -> bool:
        return self.dtype.kind in "iu"

    # -------- cell storage --------
    @property
    def data(self) -> np.ndarray:
        """A ``(height, width)`` read/write view onto the cell buffer.

        Writes through this view follow numpy casting rules; use the indexer for
        checked assignment.
        """
        return self._buffer.reshape(self._height, self._width)

    def _offset(self, key) -> int:
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError(f"kernel indices must be a (row, col) tuple, not {key!r}")
        row, col = key
        for name, value in (("row", row), ("col", col)):
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise TypeError(f"{name} index must be an integer, not {value!r}")
        if not 0 <= row < self._height:
            raise IndexError(f"row {row} out of range for height {self._height}")
        if not 0 <= col < self._width:
            raise IndexError(f"col {col} out of range for width {self._width}")
        return int(row) * self._width + int(col)

    def _coerce(self, value):
        name = type(self).__name__
        if self.is_integer:
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise TypeError(
                    f"{name} cells hold integers; convert {value!r} explicitly before assigning"
                )
            info = np.iinfo(self.dtype)
            if not info.min <= int(value) <= info.max:
                raise InvalidArgument(f"value {value} out of range for {self.dtype}")
            return int(value)
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise TypeError(f"{name} cells hold real numbers, not {value!r}")
        return float(value)

    def _fill(self, arr: np.ndarray) -> None:
        if self.is_integer:
            if arr.dtype.kind == "f":
                if not np.all(np.isfinite(arr)) or not np.all(arr == np.trunc(arr)):
                    raise InvalidArgument(
                        f"{type(self).__name__} cannot hold non-integral values; "
                        "truncate them explicitly first"
                    )
            elif arr.dtype.kind not in "iu":
                raise InvalidArgument(f"unsupported cell type {arr.dtype}")
            info = np.iinfo(self.dtype)
            bounded = arr.astype(np.float64) if arr.dtype.kind == "f" else arr
            if bounded.min() < info.min or bounded.max() > info.max:
                raise InvalidArgument(f"values out of range for {self.dtype}")
        elif arr.dtype.kind not in "iuf":
            raise InvalidArgument(f"unsupported cell type {arr.dtype}")
        self._buffer[:] = arr.reshape(-1).astype(self.dtype)

    def __getitem__(self, key):
        return self._buffer[self._offset(key)].item()

    def __setitem__(self, key, value) -> None:
        self._buffer[self._offset(key)] = self._coerce(value)

    def cells(self) -> Iterator[Tuple[int, int, Any]]:
        """Yield ``(row, col, value)`` in row-major order."""
        for offset, value in enumerate(self._buffer.tolist()):
            row, col = divmod(offset, self._width)
            yield row, col, value

    # -------- export --------
    def to_numpy(self) -> np.ndarray:
        return self.data.copy()

    def to_tensor(
        self, device: Optional[torch.device] = None, dtype: Optional[torch.dtype] = None
    ) -> torch.Tensor:
        return torch.tensor(self.to_numpy(), device=device, dtype=dtype)

    def copy(self):
        clone = copy.copy(self)
        clone._buffer = self._buffer.copy()
        return clone

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return (
            self.shape == other.shape
            and self.center == other.center
            and self.dtype == other.dtype
            and bool(np.array_equal(self._buffer, other._buffer))
        )

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(width={self._width}, height={self._height}, "
            f"center=({self._center_x}, {self._center_y}), dtype={self.dtype})"
        )


class KernelInt(Kernel):
    """Kernel of 32-bit integer weights."""

    dtype = np.dtype(np.int32)

    def __init__(self, width: int, height: int, center_x: int, center_y: int):
        super().__init__(width, height, center_x, center_y)

    def to_float(self) -> "KernelFloat":
        """Widen every cell to float. Always succeeds."""
        from .conversions import to_float_kernel  # Deferred to avoid a circular import

        return to_float_kernel(self)


class KernelFloat(Kernel):
    """Kernel of double-precision floating-point weights."""

    dtype = np.dtype(np.float64)

    def __init__(self, width: int, height: int, center_x: int, center_y: int):
        super().__init__(width, height, center_x, center_y)

    def truncate_to_int(self) -> KernelInt:
        """Narrow every cell to int, truncating toward zero. Lossy."""
        from .conversions import truncate_to_int_kernel  # Deferred to avoid a circular import

        return truncate_to_int_kernel(self)
