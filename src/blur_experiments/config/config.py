"""Configuration loading for blur-experiments.

This module provides:
- YAML config loading with packaged defaults
- Kernel and Gaussian generator defaults
- Logging level configuration
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from blur_experiments.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_KINDS = ("int", "float")
_SECTIONS = ("kernel", "gaussian", "logging")


class Config:
    """Primary configuration manager for blur-experiments.

    Loads settings from a YAML file and exposes kernel, Gaussian and logging
    defaults. Sections missing from the file fall back to the class-level
    ``DEFAULT_*`` values.

    Attributes:
        _config (dict): Raw configuration data loaded from the YAML file.
        _config_path (Path): File the configuration was read from.
    """

    # Class-level fallbacks if YAML doesn't provide defaults
    DEFAULT_SIZE: int = 3
    DEFAULT_SIGMA: float = 1.0
    DEFAULT_LOG_LEVEL: str = "WARNING"

    def __init__(self, path: "Path | str | Config" = "", verbose: Optional[bool] = False):
        """Initialize the Config instance.

        When constructed with a path/str (or default), configuration is read from disk.
        When constructed with another Config instance, an in-memory copy is made
        without re-reading from disk.

        Raises:
            ConfigurationError: If the file is missing, unreadable or not a mapping.
        """
        if isinstance(path, Config):
            self.__dict__.update(copy.deepcopy(path.__dict__))
            return

        self.verbose = verbose
        config_path = Path(__file__).parent / "config.yaml" if path == "" else Path(path)
        self._config_path = config_path
        try:
            with open(config_path, "r") as f:
                loaded = yaml.safe_load(f)
        except OSError as exc:
            raise ConfigurationError(f"Cannot read config file {config_path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")
        self._config: Dict[str, Any] = loaded
        logger.debug("Loaded configuration from %s", config_path)
        for name in _SECTIONS:
            if self._config.get(name) is None:
                logger.warning("'%s' section not found in %s. Using defaults...", name, config_path)

    def _section(self, name: str) -> Dict[str, Any]:
        section = self._config.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ConfigurationError(f"'{name}' section must be a mapping")
        return section

    def _writable_section(self, name: str) -> Dict[str, Any]:
        section = self._section(name)
        self._config[name] = section
        return section

    @property
    def path(self) -> Path:
        return self._config_path

    @property
    def kernel_size(self) -> int:
        """Default square kernel size. Must be a positive odd integer."""
        size = self._section("kernel").get("size", self.DEFAULT_SIZE)
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0 or size % 2 == 0:
            raise ConfigurationError(f"kernel.size must be a positive odd integer, got {size!r}")
        return size

    @property
    def sigma(self) -> float:
        sigma = self._section("gaussian").get("sigma", self.DEFAULT_SIGMA)
        try:
            return float(sigma)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"gaussian.sigma must be a number, got {sigma!r}") from exc

    @property
    def max_size(self) -> Optional[Tuple[int, int]]:
        """Optional ``(height, width)`` bound for generated kernels."""
        max_size = self._section("gaussian").get("max_size")
        if max_size is None:
            return None
        if (
            not isinstance(max_size, (list, tuple))
            or len(max_size) != 2
            or not all(isinstance(v, int) and not isinstance(v, bool) and v > 0 for v in max_size)
        ):
            raise ConfigurationError(
                f"gaussian.max_size must be [height, width] of positive integers, got {max_size!r}"
            )
        return int(max_size[0]), int(max_size[1])

    @property
    def log_level(self) -> str:
        level = str(self._section("logging").get("level", self.DEFAULT_LOG_LEVEL)).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigurationError(f"logging.level is not a valid level name: {level!r}")
        return level

    def square_kernel(self, kind: str = "float"):
        """Return an empty square kernel of the configured size.

        Args:
            kind (str): ``"int"`` for a KernelInt, ``"float"`` for a KernelFloat.
        """
        if kind not in _KINDS:
            raise ConfigurationError(f"Unknown kernel kind {kind!r}; expected one of {_KINDS}")
        # Lazy import to keep config importable without the kernel stack
        from blur_experiments.kernel import KernelFloat, KernelInt

        cls = KernelInt if kind == "int" else KernelFloat
        return cls.square(self.kernel_size)

    def clone_with(
        self,
        *,
        kernel_size: Optional[int] = None,
        sigma: Optional[float] = None,
        log_level: Optional[str] = None,
    ) -> "Config":
        """Return a cloned Config with the given values overridden in memory."""
        new_cfg = Config(self)
        if kernel_size is not None:
            new_cfg._writable_section("kernel")["size"] = kernel_size
        if sigma is not None:
            new_cfg._writable_section("gaussian")["sigma"] = sigma
        if log_level is not None:
            new_cfg._writable_section("logging")["level"] = log_level
        return new_cfg
