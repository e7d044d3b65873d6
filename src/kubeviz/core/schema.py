"""Resource kind catalog and pydantic schemas for Kubernetes records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from kubeviz.core.errors import UnknownKindError


class ResourceKind(str, Enum):
    """Resource kinds drawn by kubeviz.

    Values are the short names used in node identifiers and icon file names.
    """

    NAMESPACE = "ns"
    DEPLOYMENT = "deploy"
    STATEFUL_SET = "sts"
    DAEMON_SET = "ds"
    REPLICA_SET = "rs"
    POD = "pod"
    PERSISTENT_VOLUME_CLAIM = "pvc"
    SERVICE = "svc"
    INGRESS = "ing"

    @property
    def kind_name(self) -> str:
        """Kubernetes ``kind`` field value, e.g. ``ReplicaSet``."""
        return KIND_NAMES[self]

    @property
    def plural(self) -> str:
        """Resource name as accepted by ``kubectl get``."""
        return PLURALS[self]


KIND_NAMES: dict[ResourceKind, str] = {
    ResourceKind.NAMESPACE: "Namespace",
    ResourceKind.DEPLOYMENT: "Deployment",
    ResourceKind.STATEFUL_SET: "StatefulSet",
    ResourceKind.DAEMON_SET: "DaemonSet",
    ResourceKind.REPLICA_SET: "ReplicaSet",
    ResourceKind.POD: "Pod",
    ResourceKind.PERSISTENT_VOLUME_CLAIM: "PersistentVolumeClaim",
    ResourceKind.SERVICE: "Service",
    ResourceKind.INGRESS: "Ingress",
}

PLURALS: dict[ResourceKind, str] = {
    ResourceKind.NAMESPACE: "namespaces",
    ResourceKind.DEPLOYMENT: "deployments",
    ResourceKind.STATEFUL_SET: "statefulsets",
    ResourceKind.DAEMON_SET: "daemonsets",
    ResourceKind.REPLICA_SET: "replicasets",
    ResourceKind.POD: "pods",
    ResourceKind.PERSISTENT_VOLUME_CLAIM: "persistentvolumeclaims",
    ResourceKind.SERVICE: "services",
    ResourceKind.INGRESS: "ingresses",
}

# Visual layers, top to bottom. A layer may hold several kinds.
RANKS: tuple[tuple[ResourceKind, ...], ...] = (
    (
        ResourceKind.DEPLOYMENT,
        ResourceKind.STATEFUL_SET,
        ResourceKind.DAEMON_SET,
        ResourceKind.REPLICA_SET,
    ),
    (ResourceKind.POD,),
    (ResourceKind.PERSISTENT_VOLUME_CLAIM,),
    (ResourceKind.SERVICE,),
    (ResourceKind.INGRESS,),
)

# Kinds whose records may carry owner references
OWNED_KINDS: tuple[ResourceKind, ...] = (
    ResourceKind.DEPLOYMENT,
    ResourceKind.STATEFUL_SET,
    ResourceKind.DAEMON_SET,
    ResourceKind.REPLICA_SET,
    ResourceKind.POD,
)


def _build_aliases() -> dict[str, ResourceKind]:
    aliases: dict[str, ResourceKind] = {}
    for kind in ResourceKind:
        aliases[kind.value] = kind
        aliases[kind.kind_name.lower()] = kind
        aliases[kind.plural] = kind
    aliases["po"] = ResourceKind.POD
    return aliases


_ALIASES = _build_aliases()
_RANK_INDEX = {kind: r for r, kinds in enumerate(RANKS) for kind in kinds}


def normalize_kind(raw: str) -> ResourceKind:
    """
    Map a kind string to the catalog.

    Accepts the short name, the Kubernetes kind and the plural resource
    name, case-insensitively (``rs``, ``ReplicaSet``, ``replicasets``).

    Raises:
        UnknownKindError: if the string is not a catalog kind.
    """
    kind = _ALIASES.get(raw.strip().lower())
    if kind is None:
        raise UnknownKindError(raw)
    return kind


def rank_of(kind: ResourceKind) -> int:
    """Position of a kind's layer in RANKS."""
    try:
        return _RANK_INDEX[kind]
    except KeyError:
        raise UnknownKindError(kind.value) from None


def ranked_kinds() -> list[ResourceKind]:
    """All ranked kinds in layer order."""
    return [kind for kinds in RANKS for kind in kinds]


@dataclass(frozen=True)
class ResourceRef:
    """Identity of one resource within a namespace."""

    kind: ResourceKind
    name: str

    def __str__(self) -> str:
        return f"{self.kind.value} {self.name}"


# --- Kubernetes object schemas ---


class _KubeModel(BaseModel):
    model_config = {"populate_by_name": True, "extra": "ignore"}


class OwnerReference(_KubeModel):
    """Pointer from a dependent object to its owner."""

    api_version: str | None = Field(default=None, alias="apiVersion")
    kind: str
    name: str


class ObjectMeta(_KubeModel):
    """Subset of object metadata used for graph construction."""

    name: str
    namespace: str | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    owner_references: list[OwnerReference] = Field(default_factory=list, alias="ownerReferences")

    @field_validator("labels", "owner_references", mode="before")
    @classmethod
    def null_to_empty(cls, v: Any, info: Any) -> Any:
        """The API server serializes empty maps and lists as null."""
        if v is None:
            return {} if info.field_name == "labels" else []
        return v


class PersistentVolumeClaimVolumeSource(_KubeModel):
    claim_name: str = Field(alias="claimName")


class Volume(_KubeModel):
    """Pod volume; only claim-backed volumes matter here."""

    name: str
    persistent_volume_claim: PersistentVolumeClaimVolumeSource | None = Field(
        default=None, alias="persistentVolumeClaim"
    )


class PodSpec(_KubeModel):
    volumes: list[Volume] = Field(default_factory=list)

    @field_validator("volumes", mode="before")
    @classmethod
    def null_volumes(cls, v: Any) -> Any:
        return v or []


class ServiceSpec(_KubeModel):
    selector: dict[str, str] = Field(default_factory=dict)

    @field_validator("selector", mode="before")
    @classmethod
    def null_selector(cls, v: Any) -> Any:
        return v or {}


class IngressServiceBackend(_KubeModel):
    name: str
    port: dict[str, Any] | None = None


class IngressBackend(_KubeModel):
    """
    Backend of an ingress path.

    Supports both networking.k8s.io/v1 (``service.name``) and the legacy
    extensions/v1beta1 layout (``serviceName``).
    """

    service: IngressServiceBackend | None = None
    service_name: str | None = Field(default=None, alias="serviceName")

    @property
    def target_service(self) -> str | None:
        if self.service is not None:
            return self.service.name
        return self.service_name


class HTTPIngressPath(_KubeModel):
    path: str | None = None
    backend: IngressBackend


class HTTPIngressRuleValue(_KubeModel):
    paths: list[HTTPIngressPath] = Field(default_factory=list)


class IngressRule(_KubeModel):
    host: str | None = None
    http: HTTPIngressRuleValue | None = None

    @property
    def paths(self) -> list[HTTPIngressPath]:
        """HTTP paths of the rule; empty for rules without an http block."""
        if self.http is None:
            return []
        return self.http.paths


class IngressSpec(_KubeModel):
    rules: list[IngressRule] = Field(default_factory=list)

    @field_validator("rules", mode="before")
    @classmethod
    def null_rules(cls, v: Any) -> Any:
        return v or []


class KubeObject(_KubeModel):
    """Common fields of every record."""

    api_version: str | None = Field(default=None, alias="apiVersion")
    kind: str | None = None
    metadata: ObjectMeta

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def labels(self) -> dict[str, str]:
        return self.metadata.labels

    @property
    def owner_references(self) -> list[OwnerReference]:
        return self.metadata.owner_references


class Namespace(KubeObject):
    pass


class Deployment(KubeObject):
    pass


class StatefulSet(KubeObject):
    pass


class DaemonSet(KubeObject):
    pass


class ReplicaSet(KubeObject):
    pass


class Pod(KubeObject):
    spec: PodSpec = Field(default_factory=PodSpec)


class PersistentVolumeClaim(KubeObject):
    pass


class Service(KubeObject):
    spec: ServiceSpec = Field(default_factory=ServiceSpec)


class Ingress(KubeObject):
    spec: IngressSpec = Field(default_factory=IngressSpec)


RECORD_TYPES: dict[ResourceKind, type[KubeObject]] = {
    ResourceKind.NAMESPACE: Namespace,
    ResourceKind.DEPLOYMENT: Deployment,
    ResourceKind.STATEFUL_SET: StatefulSet,
    ResourceKind.DAEMON_SET: DaemonSet,
    ResourceKind.REPLICA_SET: ReplicaSet,
    ResourceKind.POD: Pod,
    ResourceKind.PERSISTENT_VOLUME_CLAIM: PersistentVolumeClaim,
    ResourceKind.SERVICE: Service,
    ResourceKind.INGRESS: Ingress,
}
