"""Exception types raised by the unique-id engine."""

from __future__ import annotations


class UniqueIdError(Exception):
    """Base class for all fatal unique-id errors."""


class ConfigError(UniqueIdError):
    """Raised when options or a package descriptor cannot be used."""


class ManifestReadError(UniqueIdError):
    """Raised when a package descriptor exists but cannot be read."""


class ManifestParseError(UniqueIdError):
    """Raised when a package descriptor is not valid JSON."""


__all__ = [
    "ConfigError",
    "ManifestParseError",
    "ManifestReadError",
    "UniqueIdError",
]
