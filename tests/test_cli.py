"""Tests for the command-line interface."""

import subprocess

import pytest
import yaml
from click.testing import CliRunner
from kubernetes.client.rest import ApiException
from kubernetes.config import ConfigException

from kubeviz.cli.main import cli
from kubeviz.core.resources import ResourceStore


@pytest.fixture
def manifest_file(tmp_path, shop_objects):
    path = tmp_path / "shop.yaml"
    path.write_text(yaml.safe_dump_all(shop_objects))
    return path


class TestCli:
    """Tests for the kubeviz command."""

    def test_writes_dot_from_file(self, tmp_path, manifest_file):
        """Test DOT output from manifests."""
        out = tmp_path / "shop.dot"

        result = CliRunner().invoke(cli, ["-n", "shop", "-f", str(manifest_file), "-o", str(out), "--icon-dir", "assets"])

        assert result.exit_code == 0, result.output
        text = out.read_text()
        assert "subgraph cluster_shop {" in text
        assert "    rs_web_rs -> pod_web_1 [style=dashed];" in text

    def test_namespace_from_environment(self, tmp_path, manifest_file):
        """Test options can come from KUBEVIZ_* variables."""
        out = tmp_path / "shop.dot"

        result = CliRunner().invoke(
            cli,
            ["-f", str(manifest_file), "-o", str(out)],
            env={"KUBEVIZ_NAMESPACE": "shop"},
        )

        assert result.exit_code == 0, result.output
        assert "pod_web_1" in out.read_text()

    def test_plot_failure_exits_nonzero(self, monkeypatch, tmp_path, manifest_file):
        """Test a failing dot process ends the command with status 1."""

        def fake_run(cmd, **kwargs):
            raise subprocess.CalledProcessError(1, cmd)

        monkeypatch.setattr(subprocess, "run", fake_run)

        result = CliRunner().invoke(
            cli, ["-n", "shop", "-f", str(manifest_file), "-t", "png", "-o", str(tmp_path / "shop.png")]
        )

        assert result.exit_code == 1

    @pytest.mark.parametrize(
        "error",
        [
            ApiException(status=403, reason="Forbidden"),
            ConfigException("Invalid kube-config file. No configuration found."),
        ],
    )
    def test_cluster_failure_exits_nonzero(self, monkeypatch, tmp_path, error):
        """Test an unreachable or misconfigured cluster ends the command with status 1."""

        def fail(cls, namespace, kubeconfig=None, context=None):
            raise error

        monkeypatch.setattr(ResourceStore, "from_cluster", classmethod(fail))

        result = CliRunner().invoke(cli, ["-n", "shop", "-o", str(tmp_path / "shop.dot")])

        assert result.exit_code == 1
        assert not (tmp_path / "shop.dot").exists()

    def test_reads_cluster_without_files(self, monkeypatch, tmp_path, shop_objects):
        """Test the cluster is queried with the kubeconfig and context options."""
        seen = {}

        def from_cluster(cls, namespace, kubeconfig=None, context=None):
            seen.update(namespace=namespace, kubeconfig=kubeconfig, context=context)
            return cls.from_objects(shop_objects, namespace)

        monkeypatch.setattr(ResourceStore, "from_cluster", classmethod(from_cluster))
        out = tmp_path / "shop.dot"

        result = CliRunner().invoke(
            cli, ["-n", "shop", "-o", str(out), "--kubeconfig", str(tmp_path / "kc"), "--context", "dev"]
        )

        assert result.exit_code == 0, result.output
        assert seen == {"namespace": "shop", "kubeconfig": tmp_path / "kc", "context": "dev"}
        assert "rs_web_rs -> pod_web_1" in out.read_text()
