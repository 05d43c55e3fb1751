"""Determinism verification for call ID artifacts."""

from __future__ import annotations

import filecmp
import tempfile
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path

import orjson

from artifacts.write import generate_all_artifacts
from contract.artifacts import CALL_IDS_JSONL
from utils import relative_posix

UNREADABLE_SOURCE = "<unreadable>"


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    mismatches: tuple[str, ...] = field(default_factory=tuple)
    missing: tuple[str, ...] = field(default_factory=tuple)
    extra: tuple[str, ...] = field(default_factory=tuple)
    changed_sources: tuple[str, ...] = field(default_factory=tuple)


def _list_relative_files(root: Path) -> set[str]:
    return {relative_posix(path, root) for path in root.rglob("*") if path.is_file()}


def _record_source(line: bytes) -> str:
    """Return the source path of a record, or a marker for corrupt lines."""
    try:
        record = orjson.loads(line)
    except orjson.JSONDecodeError:
        return UNREADABLE_SOURCE
    if not isinstance(record, dict) or not isinstance(record.get("path"), str):
        return UNREADABLE_SOURCE
    return record["path"]


def _records_by_source(path: Path) -> dict[str, list[bytes]]:
    grouped: dict[str, list[bytes]] = defaultdict(list)
    for line in path.read_bytes().splitlines():
        if line.strip():
            grouped[_record_source(line)].append(line)
    return grouped


def _changed_sources(original: Path, regenerated: Path) -> list[str]:
    """Return source paths whose call ID records differ between two artifacts."""
    before = _records_by_source(original)
    after = _records_by_source(regenerated)
    return sorted(
        source
        for source in before.keys() | after.keys()
        if before.get(source) != after.get(source)
    )


def verify_determinism(*, root: Path, artifacts_dir: Path) -> DeterminismResult:
    """Verify that call ID artifacts are reproducible.

    Regenerates artifacts into a temporary directory and compares them
    byte-for-byte with ``artifacts_dir``. When call_ids.jsonl differs, the
    source files whose IDs changed are reported as well.

    Raises:
        FileNotFoundError: If artifacts_dir does not exist.
        NotADirectoryError: If artifacts_dir is not a directory.
    """
    if not artifacts_dir.exists():
        msg = f"Artifacts directory does not exist: {artifacts_dir}"
        raise FileNotFoundError(msg)
    if not artifacts_dir.is_dir():
        msg = f"Artifacts path is not a directory: {artifacts_dir}"
        raise NotADirectoryError(msg)

    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)
        generate_all_artifacts(root=root, out_dir=temp_path)

        original_files = _list_relative_files(artifacts_dir)
        regenerated_files = _list_relative_files(temp_path)

        missing = sorted(original_files - regenerated_files)
        extra = sorted(regenerated_files - original_files)

        mismatches = sorted(
            name
            for name in original_files & regenerated_files
            if not filecmp.cmp(artifacts_dir / name, temp_path / name, shallow=False)
        )

        changed_sources: list[str] = []
        if CALL_IDS_JSONL in mismatches:
            changed_sources = _changed_sources(
                artifacts_dir / CALL_IDS_JSONL, temp_path / CALL_IDS_JSONL
            )

    ok = not missing and not extra and not mismatches
    return DeterminismResult(
        ok=ok,
        mismatches=tuple(mismatches),
        missing=tuple(missing),
        extra=tuple(extra),
        changed_sources=tuple(changed_sources),
    )
