"""Call ID artifact generator."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artifacts.models.call_ids import CallIdRecord
from artifacts.utils import _get_output_dir_name, _write_jsonl
from contract.artifacts import CALL_IDS_JSONL
from parse.treesitter_calls import extract_call_sites
from scan.files import find_source_files
from unique_id.engine import create_id
from unique_id.session import FileSession
from utils import relative_posix

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from parse.treesitter_calls import CallSite
    from unique_id.options import IdOptions
    from unique_id.session import Session

logger = logging.getLogger(__name__)


def assign_call_ids(
    session: Session,
    call_sites: Sequence[CallSite],
    options: IdOptions | None = None,
) -> list[str]:
    """Create one ID per call site, in the order given."""
    return [create_id(session, options) for _ in call_sites]


class CallIdsGenerator:
    """Generates call_ids.jsonl from Python source files."""

    @property
    def name(self) -> str:
        """Generator name for logging and identification."""
        return "call_ids"

    def generate(
        self,
        root: Path,
        out_dir: Path,
        options: IdOptions | None = None,
        include_patterns: list[str] | None = None,
        exclude_patterns: list[str] | None = None,
        nested_gitignore: bool = False,
    ) -> list[CallIdRecord]:
        """Generate the call_ids artifact.

        Every file gets its own session, so counters restart at zero per file.
        """
        out_dir.mkdir(parents=True, exist_ok=True)

        out_dir_name = _get_output_dir_name(out_dir, root)
        records: list[CallIdRecord] = []
        file_count = 0

        for file_path in find_source_files(
            root,
            output_dir=out_dir_name,
            include_patterns=include_patterns,
            exclude_patterns=exclude_patterns,
            nested_gitignore=nested_gitignore,
        ):
            file_count += 1
            source_bytes = file_path.read_bytes()
            call_sites = extract_call_sites(source_bytes)
            if not call_sites:
                continue

            session = FileSession(
                source_text=source_bytes.decode("utf-8", errors="replace"),
                file_path=str(file_path),
            )
            call_ids = assign_call_ids(session, call_sites, options)

            rel_path = relative_posix(file_path, root)
            records.extend(
                CallIdRecord(
                    path=rel_path,
                    callee_expr=call_site.callee_expr,
                    start_line=call_site.start_line,
                    start_col=call_site.start_col,
                    end_line=call_site.end_line,
                    end_col=call_site.end_col,
                    call_id=call_id,
                )
                for call_site, call_id in zip(call_sites, call_ids)
            )

        records.sort(
            key=lambda record: (record.path, record.start_line, record.start_col)
        )

        _write_jsonl(out_dir / CALL_IDS_JSONL, records)
        logger.info(
            "%s: %d call sites in %d files", self.name, len(records), file_count
        )
        return records


__all__ = ["CALL_IDS_JSONL", "CallIdsGenerator", "assign_call_ids"]
