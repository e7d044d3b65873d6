"""Graph identifiers and labels for resources."""

from __future__ import annotations

from html import escape
from pathlib import Path

from kubeviz.core.schema import ResourceKind
from kubeviz.graph.styles import Html

CLUSTER_PREFIX = "cluster_"
RANK_PREFIX = "rank_"
IMAGE_SUFFIX = ".png"

# Characters allowed in Kubernetes names but not in DOT identifiers
_ESCAPES = str.maketrans({".": "_", "-": "_"})


def sanitize(name: str) -> str:
    """
    Make a resource name usable as a DOT identifier.

    Names differing only in ``.``/``-``/``_`` map to the same identifier;
    the graph flags those as collisions when nodes are added.
    """
    return name.translate(_ESCAPES)


def node_id(kind: ResourceKind, name: str) -> str:
    return f"{kind.value}_{sanitize(name)}"


def cluster_id(namespace: str) -> str:
    return CLUSTER_PREFIX + sanitize(namespace)


def rank_id(rank: int) -> str:
    return f"{RANK_PREFIX}{rank}"


def anchor_id(rank: int) -> str:
    """Invisible node ordering the rank (a DOT numeral)."""
    return str(rank)


def icon_path(icon_dir: str | Path, kind: ResourceKind) -> str:
    return str(Path(icon_dir) / "icons" / f"{kind.value}{IMAGE_SUFFIX}")


def label(kind: ResourceKind, name: str, icon_dir: str | Path) -> Html:
    """
    HTML-like label: the kind's icon above the raw resource name.

    The icon path is not checked; a missing file is reported by Graphviz.
    """
    src = escape(icon_path(icon_dir, kind))
    return Html(
        f'<TABLE BORDER="0"><TR><TD><IMG SRC="{src}" /></TD></TR>'
        f"<TR><TD>{escape(name)}</TD></TR></TABLE>"
    )
