"""Tree-sitter based call-site extraction for Python source."""

from __future__ import annotations

from dataclasses import dataclass

from tree_sitter import Language, Node, Parser
from tree_sitter_python import language as get_python_language

_PARSER: Parser | None = None


@dataclass(frozen=True)
class CallSite:
    """A call expression in a source file (1-based lines and columns)."""

    callee_expr: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int


def _get_parser() -> Parser:
    """Initialize and return the Tree-sitter parser with Python language."""
    global _PARSER
    if _PARSER is None:
        lang = Language(get_python_language())
        _PARSER = Parser(lang)

    return _PARSER


def _decode_node_text(source_bytes: bytes, node: Node) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf8", errors="ignore")


def _normalize_callee_expr(source_bytes: bytes, callee_node: Node | None) -> str:
    if callee_node is None:
        return "<complex_expr>"

    if callee_node.type == "identifier":
        return _decode_node_text(source_bytes, callee_node).strip()

    if callee_node.type == "attribute":
        object_node = callee_node.child_by_field_name("object")
        attribute_node = callee_node.child_by_field_name("attribute")

        normalized_object = _normalize_callee_expr(source_bytes, object_node)
        if attribute_node is None or attribute_node.type != "identifier":
            return "<attribute>"
        if normalized_object.startswith("<") and normalized_object.endswith(">"):
            return "<attribute>"

        attr_name = _decode_node_text(source_bytes, attribute_node).strip()
        return f"{normalized_object}.{attr_name}"

    placeholder_map = {
        "subscript": "<subscript>",
        "call": "<call>",
        "lambda": "<lambda>",
    }
    return placeholder_map.get(callee_node.type, f"<{callee_node.type}>")


def extract_call_sites(source_bytes: bytes) -> list[CallSite]:
    """Extract every call expression from Python source.

    Calls are returned in pre-order: an outer call comes before the calls
    nested in its arguments, and otherwise calls follow document order. This
    is the order in which IDs are assigned, so it must stay stable.
    """
    tree = _get_parser().parse(source_bytes)

    call_sites: list[CallSite] = []
    stack: list[Node] = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type == "call":
            callee_node = node.child_by_field_name("function")
            call_sites.append(
                CallSite(
                    callee_expr=_normalize_callee_expr(source_bytes, callee_node),
                    start_line=node.start_point[0] + 1,
                    start_col=node.start_point[1] + 1,
                    end_line=node.end_point[0] + 1,
                    end_col=node.end_point[1] + 1,
                )
            )
        stack.extend(reversed(node.children))

    return call_sites


__all__ = ["CallSite", "extract_call_sites"]
