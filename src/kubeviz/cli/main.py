"""Main CLI entry point for kubeviz."""

from __future__ import annotations

import subprocess
from pathlib import Path

import click
from rich.console import Console

from kubeviz import __version__

console = Console(stderr=True)

# Defaults (can be overridden by options or KUBEVIZ_* environment variables)
DEFAULT_NAMESPACE = "default"
DEFAULT_OUTFILE = "k8sviz.out"
DEFAULT_TYPE = "dot"
DEFAULT_ICON_DIR = "."


@click.command(context_settings={"auto_envvar_prefix": "KUBEVIZ"})
@click.version_option(version=__version__, prog_name="kubeviz")
@click.option(
    "-n",
    "--namespace",
    default=DEFAULT_NAMESPACE,
    show_default=True,
    help="Namespace to visualize",
)
@click.option(
    "-o",
    "--outfile",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_OUTFILE,
    show_default=True,
    help="Output filename",
)
@click.option(
    "-t",
    "--type",
    "out_type",
    default=DEFAULT_TYPE,
    show_default=True,
    help="Output type: dot writes DOT text, anything else is passed to `dot -T`",
)
@click.option(
    "-f",
    "--file",
    "files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Manifest file(s) to read instead of querying the cluster",
)
@click.option(
    "--kubeconfig",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to kubeconfig (default: in-cluster account or ~/.kube/config)",
)
@click.option("--context", "kube_context", help="kubeconfig context to use")
@click.option(
    "--icon-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_ICON_DIR,
    show_default=True,
    help="Directory containing icons/<kind>.png",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(
    namespace: str,
    outfile: Path,
    out_type: str,
    files: tuple[Path, ...],
    kubeconfig: Path | None,
    kube_context: str | None,
    icon_dir: Path,
    verbose: bool,
) -> None:
    """
    Kubeviz - Draw the resources of a Kubernetes namespace.

    Resources are placed in layers (controllers, pods, claims, services,
    ingresses) and connected by ownership, volume, selector and ingress
    relationships.

    Examples:

        # Plot the default namespace of the current cluster
        kubeviz -t png -o default.png

        # DOT text from saved manifests
        kubeviz -n shop -f shop.yaml -o shop.dot
    """
    from kubernetes.client.rest import ApiException
    from kubernetes.config import ConfigException

    from kubeviz.core.errors import ResourceLoadError
    from kubeviz.core.resources import ResourceStore
    from kubeviz.diagnostics import CollectingSink, LoggingSink
    from kubeviz.log import setup_logging
    from kubeviz.output import plot_dot_file, write_dot_file

    setup_logging("debug" if verbose else "warning")

    try:
        if files:
            store = ResourceStore.load(files, namespace)
        else:
            store = ResourceStore.from_cluster(namespace, kubeconfig=kubeconfig, context=kube_context)
    except (OSError, ResourceLoadError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)
    except ConfigException as e:
        console.print(f"[red]Error:[/red] cannot load cluster configuration: {e}")
        raise SystemExit(1)
    except ApiException as e:
        console.print(f"[red]Error:[/red] Kubernetes API request failed: {e.status} {e.reason}")
        raise SystemExit(1)

    collected = CollectingSink()
    logging_sink = LoggingSink()

    def sink(diagnostic):
        collected(diagnostic)
        logging_sink(diagnostic)

    try:
        if out_type == "dot":
            write_dot_file(store, icon_dir, namespace, outfile, sink)
        else:
            plot_dot_file(store, icon_dir, namespace, outfile, out_type, sink)
    except subprocess.CalledProcessError as e:
        console.print(f"[red]Error:[/red] dot exited with status {e.returncode}")
        raise SystemExit(1)
    except OSError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    console.print(
        f"[green]Generated:[/green] {outfile} "
        f"({len(store)} resources, {len(collected)} warnings)"
    )


if __name__ == "__main__":
    cli()
