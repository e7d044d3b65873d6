"""Resource store holding one namespace's snapshot."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Iterator

import yaml
from kubernetes import client, config
from pydantic import ValidationError

from kubeviz.core.errors import ResourceLoadError, UnknownKindError
from kubeviz.core.schema import (
    RECORD_TYPES,
    KubeObject,
    ResourceKind,
    normalize_kind,
    ranked_kinds,
)

# API group and list call per ranked kind
_LIST_CALLS: dict[ResourceKind, tuple[str, str]] = {
    ResourceKind.DEPLOYMENT: ("apps", "list_namespaced_deployment"),
    ResourceKind.STATEFUL_SET: ("apps", "list_namespaced_stateful_set"),
    ResourceKind.DAEMON_SET: ("apps", "list_namespaced_daemon_set"),
    ResourceKind.REPLICA_SET: ("apps", "list_namespaced_replica_set"),
    ResourceKind.POD: ("core", "list_namespaced_pod"),
    ResourceKind.PERSISTENT_VOLUME_CLAIM: ("core", "list_namespaced_persistent_volume_claim"),
    ResourceKind.SERVICE: ("core", "list_namespaced_service"),
    ResourceKind.INGRESS: ("networking", "list_namespaced_ingress"),
}

_KIND_OF_RECORD = {record_type: kind for kind, record_type in RECORD_TYPES.items()}


class ResourceStore:
    """
    Typed collections of resource records for one namespace.

    Records are kept per kind in load order; (kind, name) is unique and a
    later record with the same identity replaces the earlier one in place.
    """

    def __init__(self, namespace: str, records: Iterable[KubeObject] = ()) -> None:
        """
        Initialize a store.

        Args:
            namespace: Namespace the snapshot belongs to
            records: Typed records; their class selects the collection
        """
        self._namespace = namespace
        self._records: dict[ResourceKind, dict[str, KubeObject]] = {kind: {} for kind in ResourceKind}
        for record in records:
            self.add(_KIND_OF_RECORD[type(record)], record)

    @classmethod
    def from_objects(cls, objects: Iterable[dict[str, Any]], namespace: str) -> ResourceStore:
        """
        Create a store from manifest dictionaries.

        ``List`` wrappers are expanded, objects of other namespaces and kinds
        outside the catalog are dropped.
        """
        store = cls(namespace)
        for obj in _flatten(objects):
            try:
                kind = normalize_kind(str(obj.get("kind", "")))
            except UnknownKindError:
                continue

            meta = obj.get("metadata") or {}
            if kind != ResourceKind.NAMESPACE:
                obj_namespace = meta.get("namespace")
                if obj_namespace and obj_namespace != namespace:
                    continue
            elif meta.get("name") != namespace:
                continue

            try:
                record = RECORD_TYPES[kind].model_validate(obj)
            except ValidationError as e:
                raise ResourceLoadError(f"Invalid {kind.kind_name} manifest: {e}") from e
            store.add(kind, record)
        return store

    @classmethod
    def load(cls, paths: Iterable[str | Path], namespace: str) -> ResourceStore:
        """Load a store from YAML or JSON manifest files."""
        objects: list[dict[str, Any]] = []
        for path in paths:
            path = Path(path)
            with path.open() as f:
                try:
                    docs = list(yaml.safe_load_all(f))
                except yaml.YAMLError as e:
                    raise ResourceLoadError(f"Cannot parse {path}: {e}") from e
            objects.extend(doc for doc in docs if isinstance(doc, dict))
        return cls.from_objects(objects, namespace)

    @classmethod
    def from_cluster(
        cls,
        namespace: str,
        kubeconfig: str | Path | None = None,
        context: str | None = None,
    ) -> ResourceStore:
        """
        Load a store from a live cluster through the Kubernetes API.

        Uses the in-cluster service account when no kubeconfig or context is
        given and one is available, the kubeconfig otherwise.
        ``ConfigException`` and ``ApiException`` propagate unmodified.
        """
        if kubeconfig is None and context is None:
            try:
                config.load_incluster_config()
            except config.ConfigException:
                config.load_kube_config()
        else:
            config.load_kube_config(
                config_file=str(kubeconfig) if kubeconfig else None,
                context=context,
            )

        api_client = client.ApiClient()
        apis = {
            "core": client.CoreV1Api(api_client),
            "apps": client.AppsV1Api(api_client),
            "networking": client.NetworkingV1Api(api_client),
        }

        objects: list[dict[str, Any]] = []
        for kind in ranked_kinds():
            api, method = _LIST_CALLS[kind]
            result = getattr(apis[api], method)(namespace)
            for item in api_client.sanitize_for_serialization(result).get("items") or []:
                # List items carry no kind of their own
                item.setdefault("kind", kind.kind_name)
                objects.append(item)
        return cls.from_objects(objects, namespace)

    def add(self, kind: ResourceKind, record: KubeObject) -> None:
        """Add a record, replacing any record with the same name."""
        self._records[kind][record.name] = record

    def names_of(self, kind: ResourceKind) -> list[str]:
        """Names of the records of a kind, in load order."""
        return list(self._records[kind])

    def exists(self, kind: ResourceKind, name: str) -> bool:
        return name in self._records[kind]

    def get(self, kind: ResourceKind, name: str) -> KubeObject | None:
        return self._records[kind].get(name)

    def items(self, kind: ResourceKind) -> list[KubeObject]:
        """Records of a kind, in load order."""
        return list(self._records[kind].values())

    def normalize(self, raw: str) -> ResourceKind:
        """Map a raw kind string to the catalog, raising UnknownKindError."""
        return normalize_kind(raw)

    @property
    def namespace(self) -> str:
        return self._namespace

    def __len__(self) -> int:
        return sum(len(records) for records in self._records.values())

    def __iter__(self) -> Iterator[KubeObject]:
        for records in self._records.values():
            yield from records.values()

    def __repr__(self) -> str:
        return f"ResourceStore({self._namespace}, {len(self)} resources)"


def _flatten(objects: Iterable[dict[str, Any]]) -> Iterator[dict[str, Any]]:
    """Expand ``kind: List`` wrappers (``List``, ``PodList``, ...)."""
    for obj in objects:
        if not isinstance(obj, dict):
            continue
        kind = str(obj.get("kind", ""))
        if kind.endswith("List") and "items" in obj:
            yield from _flatten(obj.get("items") or [])
        else:
            yield obj
