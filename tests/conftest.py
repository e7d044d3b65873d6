"""Shared snapshot fixtures."""

import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by CLI runs."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger("kubeviz")
    root.handlers = []
    root.setLevel(logging.NOTSET)
    root.propagate = True


def manifest(kind, name, namespace="shop", labels=None, owners=None, spec=None, api_version="v1"):
    """Build a manifest dict the way kubectl prints it."""
    metadata = {"name": name, "namespace": namespace}
    if labels is not None:
        metadata["labels"] = labels
    if owners:
        metadata["ownerReferences"] = [
            {"apiVersion": "apps/v1", "kind": k, "name": n, "controller": True} for k, n in owners
        ]
    obj = {"apiVersion": api_version, "kind": kind, "metadata": metadata}
    if spec is not None:
        obj["spec"] = spec
    return obj


@pytest.fixture
def shop_objects():
    """One deployment -> replica set -> pod, with a claim, a service and an ingress."""
    return [
        manifest("Namespace", "shop", namespace=None),
        manifest("Deployment", "web", api_version="apps/v1", labels={"app": "web"}),
        manifest(
            "ReplicaSet",
            "web-rs",
            api_version="apps/v1",
            labels={"app": "web"},
            owners=[("Deployment", "web")],
        ),
        manifest(
            "Pod",
            "web-1",
            labels={"app": "web", "tier": "frontend"},
            owners=[("ReplicaSet", "web-rs")],
            spec={
                "containers": [{"name": "nginx", "image": "nginx"}],
                "volumes": [
                    {"name": "config", "configMap": {"name": "web-config"}},
                    {"name": "data", "persistentVolumeClaim": {"claimName": "data"}},
                ],
            },
        ),
        manifest("PersistentVolumeClaim", "data", spec={"accessModes": ["ReadWriteOnce"]}),
        manifest("Service", "web", spec={"type": "ClusterIP", "selector": {"app": "web"}}),
        manifest(
            "Ingress",
            "web-ing",
            api_version="networking.k8s.io/v1",
            spec={
                "rules": [
                    {
                        "host": "shop.example.com",
                        "http": {
                            "paths": [
                                {
                                    "path": "/",
                                    "pathType": "Prefix",
                                    "backend": {"service": {"name": "web", "port": {"number": 80}}},
                                }
                            ]
                        },
                    }
                ]
            },
        ),
    ]
