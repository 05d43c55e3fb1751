"""Deterministic per-call-site ID creation.

An ID is a short hash of:
  1. name and version of the package the file is in (if ``is_package`` set)
  2. path of the file relative to the package root
  3. a counter which increments on every call for the file

If the file has no path, or no package root can be found, a hash of the
file's source text takes the place of package name and relative path.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from unique_id.errors import ConfigError
from unique_id.hashing import sha256_base64, short_hash
from unique_id.options import ID_STRING_KEY, IdOptions, conform_options
from unique_id.package_root import (
    PackageDescriptor,
    find_package_root,
    read_package_json,
)
from utils import to_posix

if TYPE_CHECKING:
    from unique_id.session import Session

logger = logging.getLogger(__name__)


def _validate_descriptor(descriptor: PackageDescriptor, prefix: str) -> None:
    path = descriptor.descriptor_path
    if not descriptor.version:
        msg = f"{prefix}{path} does not contain a version field"
        raise ConfigError(msg)
    if not isinstance(descriptor.name, str):
        msg = f"{prefix}{path} contains non-string name field"
        raise ConfigError(msg)
    if not isinstance(descriptor.version, str):
        msg = f"{prefix}{path} contains non-string version field"
        raise ConfigError(msg)


def _id_string_from_path(file_path: str, options: IdOptions) -> str | None:
    """Build the identity string for a file on disk.

    Returns None if no root path was given and no package root is found.
    """
    prefix = f"{options.plugin_name}: " if options.plugin_name else ""
    package_name = options.package_name
    package_version = options.package_version

    if options.root_path:
        root_path = options.root_path
        if options.is_package and not package_name:
            descriptor = read_package_json(root_path)
            if descriptor is None:
                msg = (
                    f"{prefix}expected a package.json with a name field "
                    f"in {root_path}"
                )
                raise ConfigError(msg)
            _validate_descriptor(descriptor, prefix)
            package_name = descriptor.name
            package_version = descriptor.version
    else:
        descriptor = find_package_root(file_path)
        if descriptor is None:
            return None
        root_path = descriptor.root_dir
        if options.is_package and not package_name:
            _validate_descriptor(descriptor, prefix)
            package_name = descriptor.name
            package_version = descriptor.version

    relative_path = to_posix(os.path.relpath(file_path, root_path))

    if package_name:
        return f"package:{package_name}@{package_version}:{relative_path}"
    return f"path:{relative_path}"


def create_id(
    session: Session,
    options: IdOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> str:
    """Create an ID for the next call site in the session's file.

    Each call for the same session and ``counter_key`` returns a different ID.
    Sessions for the same file path (or, without a path, the same source
    text) with the same options produce the same sequence of IDs.

    Args:
        session: Session for the file being processed
        options: IdOptions or mapping of option values
        **overrides: Option values taking precedence over ``options``

    Returns:
        ID string of ``id_length`` characters, a legal identifier.

    Raises:
        ConfigError: If options are invalid, or package name/version cannot
            be determined when ``is_package`` is set.
        ManifestReadError: If a package.json cannot be read.
        ManifestParseError: If a package.json is not valid JSON.
    """
    options = conform_options(options, **overrides)

    id_string = session.get(ID_STRING_KEY)
    if not id_string:
        file_path = session.file_path
        if file_path:
            id_string = _id_string_from_path(file_path, options)
        if not id_string:
            id_string = f"code:{sha256_base64(session.source_text)}"
        logger.debug("ID string for %s: %s", file_path or "<code>", id_string)
        session.set(ID_STRING_KEY, id_string)

    counter_key = options.counter_key
    count = session.get(counter_key) or 0
    session.set(counter_key, count + 1)

    return short_hash(f"{id_string}:{count}", options.id_length)


__all__ = ["create_id"]
