"""Locate the package root enclosing a source file.

The package root is the nearest ancestor directory holding a ``package.json``
with a ``name`` field. Descriptors without ``name`` are skipped because
``package.json`` is also used only to declare module type (``{"type":
"module"}``), and such files do not mark the root of a package.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import orjson

from unique_id.errors import ManifestParseError, ManifestReadError

logger = logging.getLogger(__name__)

DESCRIPTOR_FILENAME = "package.json"

# Values counted as "no name". Empty lists and objects still mark a root.
_EMPTY_NAMES = (None, False, 0, "")


@dataclass(frozen=True)
class PackageDescriptor:
    """Package root details read from a descriptor file.

    ``name`` and ``version`` are passed through exactly as found in the file
    and are only guaranteed to be strings once a consumer has validated them.
    """

    name: Any
    version: Any
    root_dir: str
    descriptor_path: str


def _read_descriptor_bytes(descriptor_path: Path) -> bytes | None:
    """Return descriptor contents, or None when the file does not exist."""
    try:
        return descriptor_path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as exc:
        msg = f"Failed to read {descriptor_path}: {exc}"
        raise ManifestReadError(msg) from exc


def read_package_json(directory: str | Path) -> PackageDescriptor | None:
    """Read the package descriptor in ``directory`` if it declares a name.

    Returns:
        PackageDescriptor, or None if there is no descriptor in the directory
        or it has no ``name`` field.

    Raises:
        ManifestReadError: If the descriptor exists but cannot be read.
        ManifestParseError: If the descriptor is not valid UTF-8 JSON.
    """
    descriptor_path = Path(directory) / DESCRIPTOR_FILENAME
    content = _read_descriptor_bytes(descriptor_path)
    if content is None:
        return None

    # orjson rejects invalid UTF-8 with JSONDecodeError.
    try:
        data = orjson.loads(content)
    except orjson.JSONDecodeError as exc:
        msg = f"Invalid JSON in {descriptor_path}: {exc}"
        raise ManifestParseError(msg) from exc

    if not isinstance(data, dict) or data.get("name") in _EMPTY_NAMES:
        logger.debug("Skipping %s: no name field", descriptor_path)
        return None

    return PackageDescriptor(
        name=data["name"],
        version=data.get("version"),
        root_dir=str(directory),
        descriptor_path=str(descriptor_path),
    )


def find_package_root(file_path: str | Path) -> PackageDescriptor | None:
    """Find the first directory above ``file_path`` that is a package root.

    Walks up one parent at a time, starting from the directory containing the
    file, and stops at the filesystem root (where a directory is its own
    parent).

    Returns:
        PackageDescriptor for the nearest named package, or None if no
        ancestor directory holds one.
    """
    current = Path(file_path)
    while True:
        parent = current.parent
        if parent == current:
            return None
        current = parent

        descriptor = read_package_json(current)
        if descriptor is not None:
            return descriptor


__all__ = [
    "DESCRIPTOR_FILENAME",
    "PackageDescriptor",
    "find_package_root",
    "read_package_json",
]
