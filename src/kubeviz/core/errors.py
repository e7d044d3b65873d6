"""Exceptions raised while loading resources and building graphs."""

from __future__ import annotations


class KubevizError(Exception):
    """Base class for kubeviz errors."""

    pass


class UnknownKindError(KubevizError):
    """Raised when a kind string does not map to the resource catalog.

    Expected for custom resources and other kinds this tool does not draw,
    so graph construction skips these without reporting them.
    """

    def __init__(self, raw: str) -> None:
        super().__init__(f"Unknown resource kind: {raw}")
        self.raw = raw


class UnresolvedReferenceError(KubevizError):
    """Raised when a reference names a resource absent from the store."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"{kind} {name} not found")
        self.kind = kind
        self.name = name


class ResourceLoadError(KubevizError):
    """Raised when a manifest file cannot be parsed."""

    pass
