from __future__ import annotations


class BlurError(Exception):
    """Base class for blur-experiments exceptions."""


class InvalidArgument(BlurError, ValueError):
    """Raised when a kernel is constructed or converted with out-of-range values."""


class ConfigurationError(BlurError):
    """Raised when configuration loading fails."""

    pass
