"""Configuration loading for unique-id-core."""

from rules.config import (
    CONFIG_FILENAME,
    UniqueIdConfig,
    load_config,
    resolve_output_dir,
)
from unique_id.errors import ConfigError

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "UniqueIdConfig",
    "load_config",
    "resolve_output_dir",
]
