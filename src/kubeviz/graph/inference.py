"""Relationship inference between resources of a snapshot.

Four independent passes, each adding one kind of edge:

- ownership: owner -> dependent, from ``metadata.ownerReferences``
- volume: pod -- claim, from claim-backed pod volumes
- selection: pod <- service, when the service selector matches pod labels
- routing: service <- ingress, from ingress HTTP path backends

References to missing resources are reported to the diagnostic sink and
skipped; owner kinds outside the catalog are skipped without a report.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kubeviz.core.errors import UnknownKindError, UnresolvedReferenceError
from kubeviz.core.schema import OWNED_KINDS, OwnerReference, ResourceKind, ResourceRef, rank_of
from kubeviz.diagnostics import Diagnostic, DiagnosticCode, DiagnosticSink
from kubeviz.graph import styles

if TYPE_CHECKING:
    from kubeviz.core.resources import ResourceStore
    from kubeviz.graph.model import Graph


def resolve(store: ResourceStore, kind: ResourceKind, name: str) -> ResourceRef:
    """Reference to an existing resource, raising UnresolvedReferenceError."""
    if not store.exists(kind, name):
        raise UnresolvedReferenceError(kind.value, name)
    return ResourceRef(kind, name)


def resolve_owner(store: ResourceStore, owner: OwnerReference) -> ResourceRef:
    """
    Resolve an owner reference to a drawn resource.

    Raises:
        UnknownKindError: owner kind is not drawn (custom resources, namespaces)
        UnresolvedReferenceError: owner kind is drawn but the owner is missing
    """
    kind = store.normalize(owner.kind)
    rank_of(kind)
    return resolve(store, kind, owner.name)


def infer_ownership(graph: Graph, store: ResourceStore, sink: DiagnosticSink) -> int:
    """Dashed owner -> dependent edges."""
    added = 0
    for kind in OWNED_KINDS:
        for record in store.items(kind):
            child = ResourceRef(kind, record.name)
            for ref in record.owner_references:
                try:
                    owner = resolve_owner(store, ref)
                except UnknownKindError:
                    continue
                except UnresolvedReferenceError as e:
                    sink(
                        Diagnostic(
                            DiagnosticCode.UNRESOLVED_OWNER,
                            f"{e} as an owner reference for {child}",
                            subject=child,
                            target=ResourceRef(store.normalize(ref.kind), ref.name),
                        )
                    )
                    continue

                graph.connect(owner, child, styles.OWNERSHIP)
                added += 1
    return added


def infer_volumes(graph: Graph, store: ResourceStore, sink: DiagnosticSink) -> int:
    """Undirected pod -- claim edges."""
    added = 0
    for pod in store.items(ResourceKind.POD):
        pod_ref = ResourceRef(ResourceKind.POD, pod.name)
        for volume in pod.spec.volumes:
            if volume.persistent_volume_claim is None:
                continue
            claim_name = volume.persistent_volume_claim.claim_name
            try:
                claim = resolve(store, ResourceKind.PERSISTENT_VOLUME_CLAIM, claim_name)
            except UnresolvedReferenceError as e:
                sink(
                    Diagnostic(
                        DiagnosticCode.UNRESOLVED_CLAIM,
                        f"{e} as a volume for {pod_ref}",
                        subject=pod_ref,
                        target=ResourceRef(ResourceKind.PERSISTENT_VOLUME_CLAIM, claim_name),
                    )
                )
                continue

            graph.connect(pod_ref, claim, styles.VOLUME)
            added += 1
    return added


def selector_matches(selector: dict[str, str], labels: dict[str, str]) -> bool:
    """True if every selector pair is present in labels. Empty selects nothing."""
    if not selector:
        return False
    return all(labels.get(key) == value for key, value in selector.items())


def infer_selection(graph: Graph, store: ResourceStore, sink: DiagnosticSink) -> int:
    """Pod -> service edges drawn with the arrow at the pod."""
    added = 0
    pods = store.items(ResourceKind.POD)
    for svc in store.items(ResourceKind.SERVICE):
        selector = svc.spec.selector
        if not selector:
            continue
        svc_ref = ResourceRef(ResourceKind.SERVICE, svc.name)
        for pod in pods:
            if selector_matches(selector, pod.labels):
                graph.connect(ResourceRef(ResourceKind.POD, pod.name), svc_ref, styles.SELECTION)
                added += 1
    return added


def infer_routing(graph: Graph, store: ResourceStore, sink: DiagnosticSink) -> int:
    """Service -> ingress edges drawn with the arrow at the service."""
    added = 0
    for ing in store.items(ResourceKind.INGRESS):
        ing_ref = ResourceRef(ResourceKind.INGRESS, ing.name)
        for rule in ing.spec.rules:
            for path in rule.paths:
                svc_name = path.backend.target_service
                if not svc_name:
                    continue
                try:
                    svc = resolve(store, ResourceKind.SERVICE, svc_name)
                except UnresolvedReferenceError as e:
                    sink(
                        Diagnostic(
                            DiagnosticCode.UNRESOLVED_BACKEND,
                            f"{e} for {ing_ref}",
                            subject=ing_ref,
                            target=ResourceRef(ResourceKind.SERVICE, svc_name),
                        )
                    )
                    continue

                graph.connect(svc, ing_ref, styles.ROUTING)
                added += 1
    return added


PASSES = {
    "ownership": infer_ownership,
    "volume": infer_volumes,
    "selection": infer_selection,
    "routing": infer_routing,
}


def infer_all(graph: Graph, store: ResourceStore, sink: DiagnosticSink) -> dict[str, int]:
    """Run every pass; returns the number of edges added per pass."""
    return {name: infer(graph, store, sink) for name, infer in PASSES.items()}
