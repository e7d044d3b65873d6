"""Resource catalog, schemas and the snapshot store."""

from kubeviz.core.errors import KubevizError, ResourceLoadError, UnknownKindError, UnresolvedReferenceError
from kubeviz.core.resources import ResourceStore
from kubeviz.core.schema import RANKS, ResourceKind, ResourceRef, normalize_kind, rank_of

__all__ = [
    "KubevizError",
    "ResourceLoadError",
    "UnknownKindError",
    "UnresolvedReferenceError",
    "ResourceStore",
    "RANKS",
    "ResourceKind",
    "ResourceRef",
    "normalize_kind",
    "rank_of",
]
