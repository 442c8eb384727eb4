"""Configuration management for blur-experiments.

The main components are:
    Config: YAML-backed settings for kernel sizes, Gaussian weights and logging
    configure_logging: Apply a Config's logging level to the package logger
    logger: Module logger for configuration-related messages

Example:
    >>> from blur_experiments.config import Config
    >>> config = Config()
    >>> kernel = config.square_kernel("int")
"""

import logging

from .config import Config, logger

PACKAGE_LOGGER = "blur_experiments"


def configure_logging(cfg: Config) -> logging.Logger:
    """Set the package logger level from ``cfg.log_level`` (DEBUG when verbose).

    Handlers are left to the application; only the level is changed.
    """
    level = "DEBUG" if cfg.verbose else cfg.log_level
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    pkg_logger.setLevel(level)
    logger.debug("Package log level set to %s", level)
    return pkg_logger


__all__ = ["Config", "configure_logging", "logger", "PACKAGE_LOGGER"]
