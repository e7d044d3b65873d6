"""Layered skeleton: one same-rank group per catalog position."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from kubeviz.core.schema import RANKS, ResourceRef
from kubeviz.graph import styles
from kubeviz.graph.naming import anchor_id, label, rank_id

if TYPE_CHECKING:
    from kubeviz.core.resources import ResourceStore
    from kubeviz.graph.model import Graph, Subgraph


def plan_ranks(graph: Graph, cluster: Subgraph, store: ResourceStore, icon_dir: str | Path) -> list[Subgraph]:
    """
    Place every resource of the store into its rank group.

    Each rank gets an invisible anchor node, and consecutive anchors are
    chained with invisible edges so Graphviz stacks the groups in catalog
    order. Empty ranks keep their group and anchor so the chain stays
    connected.
    """
    groups: list[Subgraph] = []
    for r in range(len(RANKS)):
        group = graph.add_subgraph(rank_id(r), styles.RANK_GROUP, parent=cluster)
        graph.add_node(group, anchor_id(r), styles.ANCHOR)
        groups.append(group)

    for r in range(len(RANKS) - 1):
        graph.add_edge(anchor_id(r), anchor_id(r + 1), styles.ORDERING)

    for group, kinds in zip(groups, RANKS):
        for kind in kinds:
            for name in store.names_of(kind):
                graph.add_resource(group, ResourceRef(kind, name), styles.RESOURCE, label(kind, name, icon_dir))

    return groups
