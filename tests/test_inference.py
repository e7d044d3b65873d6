"""Tests for edge inference."""

import pytest

from conftest import manifest
from kubeviz.core.resources import ResourceStore
from kubeviz.core.schema import ResourceKind, ResourceRef
from kubeviz.diagnostics import CollectingSink, DiagnosticCode
from kubeviz.graph import styles
from kubeviz.graph.builder import build_graph
from kubeviz.graph.inference import selector_matches


def edges_of(graph):
    return [(e.source, e.target, e.style) for e in graph.edges if e.style != styles.ORDERING]


def build(objects):
    sink = CollectingSink()
    graph = build_graph(ResourceStore.from_objects(objects, "shop"), "assets", "shop", sink)
    return graph, sink


class TestOwnership:
    """Tests for owner reference edges."""

    def test_owner_present(self):
        """Test an existing owner gets a dashed owner -> child edge."""
        graph, sink = build(
            [
                manifest("ReplicaSet", "web-rs"),
                manifest("Pod", "web-1", owners=[("ReplicaSet", "web-rs")]),
            ]
        )

        assert edges_of(graph) == [("rs_web_rs", "pod_web_1", styles.OWNERSHIP)]
        assert len(sink) == 0

    def test_owner_missing(self):
        """Test a missing owner is reported and skipped."""
        graph, sink = build([manifest("Pod", "web-1", owners=[("ReplicaSet", "web-rs")])])

        assert edges_of(graph) == []
        assert len(sink) == 1
        diag = sink.diagnostics[0]
        assert diag.code == DiagnosticCode.UNRESOLVED_OWNER
        assert diag.subject == ResourceRef(ResourceKind.POD, "web-1")
        assert diag.target == ResourceRef(ResourceKind.REPLICA_SET, "web-rs")
        assert "rs web-rs not found" in diag.message

    def test_unknown_owner_kind_is_silent(self):
        """Test owners outside the catalog are skipped without diagnostics."""
        graph, sink = build([manifest("ReplicaSet", "web-rs", owners=[("Rollout", "web")])])

        assert edges_of(graph) == []
        assert len(sink) == 0

    def test_controllers_own_pods(self):
        """Test stateful sets and daemon sets are drawn as owners too."""
        graph, sink = build(
            [
                manifest("StatefulSet", "db"),
                manifest("DaemonSet", "agent"),
                manifest("Pod", "db-0", owners=[("StatefulSet", "db")]),
                manifest("Pod", "agent-x", owners=[("DaemonSet", "agent")]),
            ]
        )

        assert ("sts_db", "pod_db_0", styles.OWNERSHIP) in edges_of(graph)
        assert ("ds_agent", "pod_agent_x", styles.OWNERSHIP) in edges_of(graph)
        assert len(sink) == 0


class TestVolumes:
    """Tests for claim edges."""

    def test_claim_present(self):
        """Test a mounted claim gets an undirected edge."""
        graph, sink = build(
            [
                manifest("PersistentVolumeClaim", "data"),
                manifest(
                    "Pod",
                    "db-0",
                    spec={"volumes": [{"name": "d", "persistentVolumeClaim": {"claimName": "data"}}]},
                ),
            ]
        )

        assert edges_of(graph) == [("pod_db_0", "pvc_data", styles.VOLUME)]
        assert styles.VOLUME.attrs() == {"dir": "none"}

    def test_claim_missing(self):
        """Test a missing claim is reported and skipped."""
        graph, sink = build(
            [
                manifest(
                    "Pod",
                    "db-0",
                    spec={"volumes": [{"name": "d", "persistentVolumeClaim": {"claimName": "data"}}]},
                )
            ]
        )

        assert edges_of(graph) == []
        assert [d.code for d in sink] == [DiagnosticCode.UNRESOLVED_CLAIM]

    def test_other_volumes_ignored(self):
        """Test volumes without a claim produce nothing."""
        graph, sink = build([manifest("Pod", "p", spec={"volumes": [{"name": "tmp", "emptyDir": {}}]})])

        assert edges_of(graph) == []
        assert len(sink) == 0


class TestSelection:
    """Tests for service selector edges."""

    @pytest.mark.parametrize(
        "selector, labels, expected",
        [
            ({"app": "web"}, {"app": "web", "tier": "frontend"}, True),
            ({"app": "web"}, {"tier": "frontend"}, False),
            ({"app": "web"}, {"app": "api"}, False),
            ({"app": "web", "tier": "frontend"}, {"app": "web"}, False),
            ({}, {"app": "web"}, False),
        ],
    )
    def test_selector_matches(self, selector, labels, expected):
        """Test selectors must be fully contained in the labels."""
        assert selector_matches(selector, labels) is expected

    def test_matching_pods(self):
        """Test every matching pod is connected with a reversed arrow."""
        graph, sink = build(
            [
                manifest("Pod", "web-1", labels={"app": "web", "tier": "frontend"}),
                manifest("Pod", "web-2", labels={"app": "web"}),
                manifest("Pod", "other", labels={"tier": "frontend"}),
                manifest("Service", "web", spec={"selector": {"app": "web"}}),
            ]
        )

        assert edges_of(graph) == [
            ("pod_web_1", "svc_web", styles.SELECTION),
            ("pod_web_2", "svc_web", styles.SELECTION),
        ]
        assert styles.SELECTION.attrs() == {"dir": "back"}

    def test_empty_selector(self):
        """Test a service without selector selects no pod."""
        graph, sink = build(
            [
                manifest("Pod", "web-1", labels={"app": "web"}),
                manifest("Service", "external", spec={"type": "ExternalName"}),
            ]
        )

        assert edges_of(graph) == []
        assert len(sink) == 0


class TestRouting:
    """Tests for ingress backend edges."""

    def test_missing_backend_does_not_stop_other_paths(self):
        """Test a missing service is reported and later paths still route."""
        paths = [
            {"path": "/x", "backend": {"service": {"name": "svc-x", "port": {"number": 80}}}},
            {"path": "/", "backend": {"service": {"name": "web", "port": {"number": 80}}}},
        ]
        graph, sink = build(
            [
                manifest("Service", "web"),
                manifest("Ingress", "web-ing", spec={"rules": [{"http": {"paths": paths}}]}),
            ]
        )

        assert edges_of(graph) == [("svc_web", "ing_web_ing", styles.ROUTING)]
        assert len(sink) == 1
        diag = sink.diagnostics[0]
        assert diag.code == DiagnosticCode.UNRESOLVED_BACKEND
        assert diag.target == ResourceRef(ResourceKind.SERVICE, "svc-x")

    def test_legacy_backend(self):
        """Test extensions/v1beta1 backends are routed."""
        graph, sink = build(
            [
                manifest("Service", "web"),
                manifest(
                    "Ingress",
                    "old",
                    spec={"rules": [{"http": {"paths": [{"backend": {"serviceName": "web", "servicePort": 80}}]}}]},
                ),
            ]
        )

        assert edges_of(graph) == [("svc_web", "ing_old", styles.ROUTING)]

    def test_rule_without_http(self):
        """Test host-only rules are skipped."""
        graph, sink = build([manifest("Ingress", "ing", spec={"rules": [{"host": "a.example.com"}]})])

        assert edges_of(graph) == []
        assert len(sink) == 0
