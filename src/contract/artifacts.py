"""Artifact contract definitions.

Filenames and schema versions here are stable identifiers: downstream tools
read ``call_ids.jsonl`` by name and check ``schema_version`` per record.
"""

from __future__ import annotations

ARTIFACT_SCHEMA_VERSION = 1

CALL_IDS_JSONL = "call_ids.jsonl"
