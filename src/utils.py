"""Shared path utilities for unique-id-core."""

from __future__ import annotations

from pathlib import Path


def to_posix(path: str | Path) -> str:
    """Convert a relative path to POSIX separators.

    IDs derived from paths must not depend on the platform the build ran on,
    so both ``\\`` and ``/`` are treated as separators.

    Examples:
        >>> to_posix("test\\\\foo.js")
        'test/foo.js'
        >>> to_posix(Path("src/pkg/mod.py"))
        'src/pkg/mod.py'
    """
    path_str = path.as_posix() if isinstance(path, Path) else str(path)
    return path_str.replace("\\", "/")


def relative_posix(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` with POSIX separators.

    Raises:
        ValueError: If ``path`` is not inside ``root``.
    """
    return to_posix(path.relative_to(root))
