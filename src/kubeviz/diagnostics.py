"""Diagnostics reported while building a graph."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Protocol

from kubeviz.core.schema import ResourceRef
from kubeviz.log import get_logger


class DiagnosticCode(str, Enum):
    """Kinds of recoverable problems found in a snapshot."""

    UNRESOLVED_OWNER = "unresolved-owner"
    UNRESOLVED_CLAIM = "unresolved-claim"
    UNRESOLVED_BACKEND = "unresolved-backend"
    NAME_COLLISION = "name-collision"


@dataclass(frozen=True)
class Diagnostic:
    """One skipped edge or flagged node."""

    code: DiagnosticCode
    message: str
    subject: ResourceRef
    target: ResourceRef | None = None


class DiagnosticSink(Protocol):
    """Receives diagnostics during a build."""

    def __call__(self, diagnostic: Diagnostic) -> None: ...


class CollectingSink:
    """Sink that keeps every diagnostic in memory."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def by_code(self, code: DiagnosticCode) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.code == code]

    def __len__(self) -> int:
        return len(self.diagnostics)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)


class LoggingSink:
    """Default sink: logs each diagnostic as a warning."""

    def __init__(self) -> None:
        self._log = get_logger("kubeviz.graph")

    def __call__(self, diagnostic: Diagnostic) -> None:
        self._log.warning(
            diagnostic.message,
            code=diagnostic.code.value,
            subject=str(diagnostic.subject),
            target=str(diagnostic.target) if diagnostic.target else None,
        )
