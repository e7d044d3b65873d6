"""
Kubeviz - Layered diagrams of Kubernetes namespace resources.

This package provides tools for:
- Loading a namespace snapshot from manifests or a live cluster
- Placing resources into ordered visual layers
- Inferring ownership, volume, selector and ingress relationships
- Emitting Graphviz DOT text and plotting it with the dot engine
"""

__version__ = "0.1.0"

from kubeviz.core.resources import ResourceStore
from kubeviz.core.schema import ResourceKind, ResourceRef
from kubeviz.diagnostics import CollectingSink, Diagnostic, DiagnosticCode
from kubeviz.graph.builder import build_graph, render

__all__ = [
    "__version__",
    "ResourceStore",
    "ResourceKind",
    "ResourceRef",
    "CollectingSink",
    "Diagnostic",
    "DiagnosticCode",
    "build_graph",
    "render",
]
