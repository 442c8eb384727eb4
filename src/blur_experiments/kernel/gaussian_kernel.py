from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import torch

from .kernel import KernelFloat

logger = logging.getLogger(__name__)

_EPS = 1e-8


@dataclass(frozen=True)
class GaussianConfig:
    sigma: float
    max_size: Optional[Tuple[int, int]] = None  # (height, width) the kernel must fit in


class GaussianKernel:
    def __init__(self, sigma: float, max_size: Optional[Tuple[int, int]] = None):
        self.config = GaussianConfig(float(sigma), max_size)

    @property
    def sigma(self) -> float:
        return self.config.sigma

    @classmethod
    def from_config(cls, cfg) -> "GaussianKernel":
        """Build a generator from the ``gaussian`` section of a :class:`~blur_experiments.config.Config`."""
        return cls(cfg.sigma, cfg.max_size)

    def radius(self) -> int:
        if self.sigma <= 0:
            return 0

        # Default radius covers three standard deviations
        radius = int(max(1, round(3.0 * self.sigma)))

        if self.config.max_size is not None:
            max_h, max_w = self.config.max_size
            max_radius = min(max_h // 2, max_w // 2)
            if max_radius < 1:
                max_radius = 1
            radius = min(radius, max_radius)
        return radius

    def generate_tensor(
        self,
        device: Optional[torch.device] = None,
        dtype: torch.dtype = torch.float32,
    ) -> torch.Tensor:
        if self.sigma <= 0:
            return torch.ones((1, 1), device=device, dtype=dtype)

        radius = self.radius()
        x = torch.arange(-radius, radius + 1, device=device, dtype=dtype)
        y = x[:, None]
        g = torch.exp(-(x**2 + y**2) / (2 * self.sigma**2))
        g = g / (g.sum() + _EPS)
        return g

    def generate_kernel(self, device: Optional[torch.device] = None) -> KernelFloat:
        """Return a square, odd-sized KernelFloat of normalized Gaussian weights."""
        g = self.generate_tensor(device=device, dtype=torch.float32)
        kernel = KernelFloat.from_array(g.cpu().numpy())
        logger.debug("Generated Gaussian %r for sigma=%s", kernel, self.sigma)
        return kernel
