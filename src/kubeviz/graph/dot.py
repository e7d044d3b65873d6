"""Graphviz DOT serialization."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from kubeviz.graph.styles import Html

if TYPE_CHECKING:
    from kubeviz.graph.model import Graph, Node, Subgraph

INDENT = "    "

_ID_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_NUMERAL_RE = re.compile(r"^-?(\.[0-9]+|[0-9]+(\.[0-9]*)?)$")
# Reserved words, matched case-insensitively
_KEYWORDS = frozenset({"node", "edge", "graph", "digraph", "subgraph", "strict"})


def quote(value: str) -> str:
    """Render an identifier or attribute value in DOT syntax."""
    if isinstance(value, Html):
        return f"<{value}>"
    if _NUMERAL_RE.match(value):
        return value
    if _ID_RE.match(value) and value.lower() not in _KEYWORDS:
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _attr_list(attrs: dict[str, str]) -> str:
    return ", ".join(f"{key}={quote(attrs[key])}" for key in sorted(attrs))


def _node_line(node: Node, depth: int) -> str:
    attrs = node.attrs()
    if not attrs:
        return f"{INDENT * depth}{quote(node.id)};"
    return f"{INDENT * depth}{quote(node.id)} [{_attr_list(attrs)}];"


def _subgraph_lines(sub: Subgraph, depth: int) -> list[str]:
    pad = INDENT * depth
    lines = [f"{pad}subgraph {quote(sub.id)} {{"]
    attrs = sub.attrs()
    for key in sorted(attrs):
        lines.append(f"{pad}{INDENT}{key}={quote(attrs[key])};")
    for node in sub.nodes:
        lines.append(_node_line(node, depth + 1))
    for child in sub.subgraphs:
        lines.extend(_subgraph_lines(child, depth + 1))
    lines.append(f"{pad}}}")
    return lines


def to_dot(graph: Graph) -> str:
    """
    Render a graph as DOT text.

    Output depends only on insertion order, so equal builds render to
    identical text. Can be rendered with: dot -Tpng graph.dot -o graph.png
    """
    lines = [f"digraph {quote(graph.name)} {{"]

    for key in sorted(graph.attrs):
        lines.append(f"{INDENT}{key}={quote(graph.attrs[key])};")

    for sub in graph.subgraphs:
        lines.extend(_subgraph_lines(sub, 1))

    for edge in graph.edges:
        attrs = edge.style.attrs()
        line = f"{INDENT}{quote(edge.source)} -> {quote(edge.target)}"
        if attrs:
            line += f" [{_attr_list(attrs)}]"
        lines.append(line + ";")

    lines.append("}")
    return "\n".join(lines) + "\n"
