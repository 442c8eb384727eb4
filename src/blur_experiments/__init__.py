"""blur_experiments package public API surface.

Kernels are fixed-size weight grids with a designated center cell, used as
spatial filter masks. The package ships integer and floating-point kernels,
explicit conversions between them and a Gaussian weight generator.
"""

from __future__ import annotations

__version__ = "0.1.0"

from . import config, kernel
from .exceptions import BlurError, ConfigurationError, InvalidArgument
from .kernel import (
    GaussianKernel,
    Kernel,
    KernelFloat,
    KernelInt,
    to_float_kernel,
    truncate_to_int_kernel,
)

__all__ = [
    "__version__",
    "config",
    "kernel",
    "BlurError",
    "ConfigurationError",
    "InvalidArgument",
    "GaussianKernel",
    "Kernel",
    "KernelFloat",
    "KernelInt",
    "to_float_kernel",
    "truncate_to_int_kernel",
]
