"""Typed DOT attributes for nodes, edges and subgraphs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Html(str):
    """Attribute value rendered as an HTML-like label (``<...>``)."""

    __slots__ = ()


class LineStyle(str, Enum):
    DASHED = "dashed"
    DOTTED = "dotted"
    INVIS = "invis"


class Direction(str, Enum):
    """Arrowhead placement (DOT ``dir``)."""

    FORWARD = "forward"
    BACK = "back"
    NONE = "none"
    BOTH = "both"


@dataclass(frozen=True)
class EdgeStyle:
    style: LineStyle | None = None
    direction: Direction | None = None
    weight: int | None = None

    def attrs(self) -> dict[str, str]:
        attrs: dict[str, str] = {}
        if self.style is not None:
            attrs["style"] = self.style.value
        if self.direction is not None:
            attrs["dir"] = self.direction.value
        if self.weight is not None:
            attrs["weight"] = str(self.weight)
        return attrs


@dataclass(frozen=True)
class NodeStyle:
    style: LineStyle | None = None
    penwidth: int | None = None
    width: int | None = None
    height: int | None = None
    margin: int | None = None

    def attrs(self) -> dict[str, str]:
        attrs: dict[str, str] = {}
        if self.style is not None:
            attrs["style"] = self.style.value
        for key in ("penwidth", "width", "height", "margin"):
            value = getattr(self, key)
            if value is not None:
                attrs[key] = str(value)
        return attrs


@dataclass(frozen=True)
class SubgraphStyle:
    style: LineStyle | None = None
    same_rank: bool = False
    label_left: bool = False

    def attrs(self) -> dict[str, str]:
        attrs: dict[str, str] = {}
        if self.style is not None:
            attrs["style"] = self.style.value
        if self.same_rank:
            attrs["rank"] = "same"
        if self.label_left:
            attrs["labeljust"] = "l"
        return attrs


# Edges
ORDERING = EdgeStyle(style=LineStyle.INVIS)
OWNERSHIP = EdgeStyle(style=LineStyle.DASHED)
VOLUME = EdgeStyle(direction=Direction.NONE)
SELECTION = EdgeStyle(direction=Direction.BACK)
ROUTING = EdgeStyle(direction=Direction.BACK)

# Nodes
ANCHOR = NodeStyle(style=LineStyle.INVIS, width=0, height=0, margin=0)
RESOURCE = NodeStyle(penwidth=0)  # the icon label frames itself

# Subgraphs
RANK_GROUP = SubgraphStyle(style=LineStyle.INVIS, same_rank=True)
NAMESPACE_CLUSTER = SubgraphStyle(style=LineStyle.DOTTED, label_left=True)
