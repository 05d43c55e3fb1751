from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.generators import CallIdsGenerator
from contract.artifacts import CALL_IDS_JSONL
from rules.config import load_config, resolve_output_dir

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import UniqueIdConfig


def generate_all_artifacts(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: UniqueIdConfig | None = None,
) -> dict[str, object]:
    """Generate call ID artifacts for a source tree.

    Args:
        root: Root directory of the source tree to process
        out_dir: Optional output directory for generated artifacts
        config: Optional configuration (default: loaded from root)

    Returns:
        Dictionary with counts and list of generated artifact paths.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    records = CallIdsGenerator().generate(
        root=root,
        out_dir=out_dir,
        options=config.id_options(root),
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        nested_gitignore=config.nested_gitignore,
    )

    return {
        "call_count": len(records),
        "file_count": len({record.path for record in records}),
        "artifacts": [str(out_dir / CALL_IDS_JSONL)],
    }
