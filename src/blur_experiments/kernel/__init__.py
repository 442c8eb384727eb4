"""Kernel containers, explicit int/float conversions and weight generators."""

from .conversions import to_float_kernel, truncate_to_int_kernel
from .gaussian_kernel import GaussianConfig, GaussianKernel
from .kernel import Kernel, KernelFloat, KernelInt

__all__ = [
    "GaussianConfig",
    "GaussianKernel",
    "Kernel",
    "KernelFloat",
    "KernelInt",
    "to_float_kernel",
    "truncate_to_int_kernel",
]
