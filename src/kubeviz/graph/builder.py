"""Build the resource graph of one namespace."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from kubeviz.core.schema import ResourceKind
from kubeviz.diagnostics import DiagnosticSink, LoggingSink
from kubeviz.graph import styles
from kubeviz.graph.dot import to_dot
from kubeviz.graph.inference import infer_all
from kubeviz.graph.model import Graph
from kubeviz.graph.naming import cluster_id, label
from kubeviz.graph.ranks import plan_ranks
from kubeviz.log import get_logger

if TYPE_CHECKING:
    from kubeviz.core.resources import ResourceStore

GRAPH_NAME = "G"

log = get_logger("kubeviz.graph")


def build_graph(
    store: ResourceStore,
    icon_dir: str | Path,
    namespace: str,
    sink: DiagnosticSink | None = None,
) -> Graph:
    """
    Build the layered graph for a namespace snapshot.

    Args:
        store: Resources of the namespace
        icon_dir: Directory containing ``icons/<kind>.png``
        namespace: Namespace drawn as the enclosing cluster
        sink: Receives diagnostics for skipped references (default: log them)
    """
    if sink is None:
        sink = LoggingSink()
    graph = Graph(GRAPH_NAME, sink, attrs={"rankdir": "TD"})

    cluster = graph.add_subgraph(
        cluster_id(namespace),
        styles.NAMESPACE_CLUSTER,
        label=label(ResourceKind.NAMESPACE, namespace, icon_dir),
    )

    groups = plan_ranks(graph, cluster, store, icon_dir)
    log.debug("ranks_planned", namespace=namespace, ranks=len(groups), resources=len(store))

    counts = infer_all(graph, store, sink)
    log.debug("edges_inferred", namespace=namespace, **counts)

    return graph


def render(
    store: ResourceStore,
    icon_dir: str | Path,
    namespace: str,
    sink: DiagnosticSink | None = None,
) -> str:
    """Build the graph of a namespace snapshot and return it as DOT text."""
    return to_dot(build_graph(store, icon_dir, namespace, sink))
