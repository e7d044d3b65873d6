"""In-memory graph accumulator."""

from __future__ import annotations

from dataclasses import dataclass, field

from kubeviz.core.schema import ResourceRef
from kubeviz.diagnostics import Diagnostic, DiagnosticCode, DiagnosticSink
from kubeviz.graph.naming import node_id
from kubeviz.graph.styles import EdgeStyle, Html, NodeStyle, SubgraphStyle


@dataclass
class Node:
    id: str
    style: NodeStyle
    label: Html | None = None

    def attrs(self) -> dict[str, str]:
        attrs = self.style.attrs()
        if self.label is not None:
            attrs["label"] = self.label
        return attrs


@dataclass
class Edge:
    source: str
    target: str
    style: EdgeStyle


@dataclass
class Subgraph:
    id: str
    style: SubgraphStyle
    label: Html | None = None
    nodes: list[Node] = field(default_factory=list)
    subgraphs: list[Subgraph] = field(default_factory=list)

    def attrs(self) -> dict[str, str]:
        attrs = self.style.attrs()
        if self.label is not None:
            attrs["label"] = self.label
        return attrs


class Graph:
    """
    Directed graph under construction.

    Resource nodes are registered by ResourceRef; edges between resources
    are added by reference and resolved to the registered node ids.
    """

    def __init__(self, name: str, sink: DiagnosticSink, attrs: dict[str, str] | None = None) -> None:
        self.name = name
        self.attrs = dict(attrs or {})
        self.subgraphs: list[Subgraph] = []
        self.edges: list[Edge] = []
        self._sink = sink
        self._node_ids: dict[ResourceRef, str] = {}
        self._owners: dict[str, ResourceRef] = {}  # resource node id -> resource

    def add_subgraph(
        self,
        sub_id: str,
        style: SubgraphStyle,
        parent: Subgraph | None = None,
        label: Html | None = None,
    ) -> Subgraph:
        subgraph = Subgraph(sub_id, style, label)
        (parent.subgraphs if parent else self.subgraphs).append(subgraph)
        return subgraph

    def add_node(self, parent: Subgraph, nid: str, style: NodeStyle, label: Html | None = None) -> Node:
        node = Node(nid, style, label)
        parent.nodes.append(node)
        return node

    def add_resource(self, parent: Subgraph, ref: ResourceRef, style: NodeStyle, label: Html) -> Node:
        """
        Add the node of a resource.

        A resource whose sanitized id is already taken by another resource
        is flagged as a name collision and gets a numbered id instead of
        being merged into the existing node.
        """
        base = node_id(ref.kind, ref.name)
        nid = base
        suffix = 1
        while nid in self._owners:
            suffix += 1
            nid = f"{base}_{suffix}"

        if nid != base:
            other = self._owners[base]
            self._sink(
                Diagnostic(
                    DiagnosticCode.NAME_COLLISION,
                    f"{ref} and {other} share node id {base}, using {nid}",
                    subject=ref,
                    target=other,
                )
            )

        self._owners[nid] = ref
        self._node_ids[ref] = nid
        return self.add_node(parent, nid, style, label)

    def node_id_of(self, ref: ResourceRef) -> str:
        """Node id of a registered resource (KeyError if not added)."""
        return self._node_ids[ref]

    def add_edge(self, source: str, target: str, style: EdgeStyle) -> Edge:
        edge = Edge(source, target, style)
        self.edges.append(edge)
        return edge

    def connect(self, source: ResourceRef, target: ResourceRef, style: EdgeStyle) -> Edge:
        """Add an edge between two registered resources."""
        return self.add_edge(self.node_id_of(source), self.node_id_of(target), style)

    def iter_nodes(self) -> list[Node]:
        """All nodes, depth first in insertion order."""
        nodes: list[Node] = []
        stack = list(reversed(self.subgraphs))
        while stack:
            sub = stack.pop()
            nodes.extend(sub.nodes)
            stack.extend(reversed(sub.subgraphs))
        return nodes

    def iter_subgraphs(self) -> list[Subgraph]:
        subs: list[Subgraph] = []
        stack = list(reversed(self.subgraphs))
        while stack:
            sub = stack.pop()
            subs.append(sub)
            stack.extend(reversed(sub.subgraphs))
        return subs
