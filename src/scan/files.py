"""Source file discovery for unique-id-core."""

from __future__ import annotations

from fnmatch import fnmatch
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

from utils import relative_posix

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


def _is_within_root(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        path.resolve().relative_to(root.resolve())
    except (OSError, ValueError):
        return False
    return True


def _is_selected(
    rel_path: str,
    include_patterns: list[str] | None,
    exclude_patterns: list[str] | None,
) -> bool:
    if include_patterns and not any(fnmatch(rel_path, pat) for pat in include_patterns):
        return False
    return not (
        exclude_patterns and any(fnmatch(rel_path, pat) for pat in exclude_patterns)
    )


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    """Build a matcher from the root .gitignore, or every .gitignore if nested."""
    if not nested_gitignore:
        gitignore_path = root / ".gitignore"
        if gitignore_path.is_file():
            return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
        return None

    gitignore_paths = sorted(
        {
            path
            for path in [root / ".gitignore", *root.rglob(".gitignore")]
            if path.is_file() and not path.is_symlink()
        },
        key=lambda p: relative_posix(p, root),
    )
    if not gitignore_paths:
        return None

    matchers = [parse_gitignore(path) for path in gitignore_paths]

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                continue
        return False

    return matches


def find_source_files(
    directory: Path,
    *,
    output_dir: str = ".unique-id",
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
    suffix: str = ".py",
) -> Iterator[Path]:
    """Find source files under ``directory`` that should receive call IDs.

    Symlinks, files resolving outside ``directory``, files under the output
    directory and files ignored by .gitignore are skipped. Include patterns
    (any must match) and exclude patterns (none may match) are fnmatch globs
    against the POSIX path relative to ``directory``.

    Yields:
        Paths sorted by relative POSIX path, so IDs are assigned in the same
        file order on every platform.
    """
    gitignore_matches = _build_gitignore_matcher(
        directory,
        nested_gitignore=nested_gitignore,
    )

    matched: list[tuple[str, Path]] = []
    for path in directory.rglob(f"*{suffix}"):
        if not path.is_file() or path.is_symlink():
            continue
        if not _is_within_root(path, directory):
            continue

        rel_path = relative_posix(path, directory)
        if output_dir and rel_path.split("/", 1)[0] == output_dir:
            continue
        if gitignore_matches is not None and gitignore_matches(str(path)):
            continue
        if _is_selected(rel_path, include_patterns, exclude_patterns):
            matched.append((rel_path, path))

    matched.sort(key=lambda item: item[0])
    yield from (path for _, path in matched)


__all__ = ["find_source_files"]
