"""Utility functions for artifact generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from pydantic import BaseModel


def _write_jsonl(path: Path, records: Sequence[BaseModel]) -> None:
    with path.open("wb") as f:
        for rec in records:
            f.write(orjson.dumps(rec.model_dump(), option=orjson.OPT_SORT_KEYS))
            f.write(b"\n")


def _get_output_dir_name(out_dir: Path, root: Path) -> str:
    """Get the output directory name for filtering."""
    try:
        if out_dir.is_relative_to(root):
            rel = out_dir.relative_to(root)
            if rel.parts:
                return rel.parts[0]
    except ValueError:
        # Non-comparable paths mean out_dir is external; avoid filtering.
        return ""
    return ""
