"""Deterministic, identifier-safe IDs for call sites."""

from unique_id.engine import create_id
from unique_id.errors import (
    ConfigError,
    ManifestParseError,
    ManifestReadError,
    UniqueIdError,
)
from unique_id.hashing import sha256_base64, sha256_digest, short_hash
from unique_id.options import DEFAULT_COUNTER_KEY, IdOptions, conform_options
from unique_id.package_root import (
    PackageDescriptor,
    find_package_root,
    read_package_json,
)
from unique_id.session import FileSession, Session

__all__ = [
    "DEFAULT_COUNTER_KEY",
    "ConfigError",
    "FileSession",
    "IdOptions",
    "ManifestParseError",
    "ManifestReadError",
    "PackageDescriptor",
    "Session",
    "UniqueIdError",
    "conform_options",
    "create_id",
    "find_package_root",
    "read_package_json",
    "sha256_base64",
    "sha256_digest",
    "short_hash",
]
