"""Explicit conversions between integer and floating-point kernels.

- to_float_kernel(k): widening, every int32 cell becomes its float value.
- truncate_to_int_kernel(k): narrowing, every float cell is truncated toward zero.

Neither runs implicitly; callers always name the conversion they want.
"""

from __future__ import annotations

import logging

import numpy as np

from blur_experiments.exceptions import InvalidArgument

from .kernel import KernelFloat, KernelInt

logger = logging.getLogger(__name__)


def to_float_kernel(k: KernelInt) -> KernelFloat:
    """Return a new KernelFloat with the same geometry and each cell widened.

    Exact for every int32 value.
    """
    if not isinstance(k, KernelInt):
        raise TypeError(f"to_float_kernel expects a KernelInt, got {type(k).__name__}")

    result = KernelFloat.from_array(k.data, k.center_x, k.center_y)
    logger.debug("Widened %r to %r", k, result)
    return result


def truncate_to_int_kernel(k: KernelFloat) -> KernelInt:
    """Return a new KernelInt with each cell truncated toward zero (2.7 -> 2, -2.7 -> -2).

    Raises:
        InvalidArgument: If a cell is NaN/inf or does not fit in int32 after truncation.
    """
    if not isinstance(k, KernelFloat):
        raise TypeError(
            f"truncate_to_int_kernel expects a KernelFloat, got {type(k).__name__}"
        )

    values = k.data
    if not np.all(np.isfinite(values)):
        raise InvalidArgument("cannot truncate non-finite kernel cells to int")

    truncated = np.trunc(values.astype(np.float64))
    info = np.iinfo(KernelInt.dtype)
    if truncated.min() < np.float64(info.min) or truncated.max() > np.float64(info.max):
        raise InvalidArgument(f"kernel cells out of range for {KernelInt.dtype}")

    result = KernelInt.from_array(truncated.astype(KernelInt.dtype), k.center_x, k.center_y)
    lossy = int(np.count_nonzero(truncated != values))
    logger.debug("Truncated %r to %r (%d cells lost a fraction)", k, result, lossy)
    return result
