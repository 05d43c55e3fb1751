"""Stable artifact contract surface for unique-id-core."""

from contract.artifacts import ARTIFACT_SCHEMA_VERSION, CALL_IDS_JSONL

__all__ = ["ARTIFACT_SCHEMA_VERSION", "CALL_IDS_JSONL"]
