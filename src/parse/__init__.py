"""Parsing utilities for unique-id-core."""

from parse.treesitter_calls import CallSite, extract_call_sites

__all__ = ["CallSite", "extract_call_sites"]
