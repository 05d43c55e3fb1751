"""Artifact generators for unique-id-core."""

from artifacts.generators.call_ids import CallIdsGenerator, assign_call_ids

__all__ = ["CallIdsGenerator", "assign_call_ids"]
