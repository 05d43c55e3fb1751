"""Call ID record model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from contract.artifacts import ARTIFACT_SCHEMA_VERSION


class CallIdRecord(BaseModel):
    """Schema for call_ids.jsonl records."""

    schema_version: int = Field(default=ARTIFACT_SCHEMA_VERSION)
    path: str
    callee_expr: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int
    call_id: str


__all__ = ["CallIdRecord"]
