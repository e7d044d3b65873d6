"""Writing graphs to files and plotting them with Graphviz."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from kubeviz.graph.builder import render

if TYPE_CHECKING:
    from kubeviz.core.resources import ResourceStore
    from kubeviz.diagnostics import DiagnosticSink


def write_dot_file(
    store: ResourceStore,
    icon_dir: str | Path,
    namespace: str,
    out_file: str | Path,
    sink: DiagnosticSink | None = None,
) -> None:
    """Write the DOT text of a namespace graph to a file."""
    text = render(store, icon_dir, namespace, sink)
    with Path(out_file).open("w") as f:
        f.write(text)


def plot_dot_file(
    store: ResourceStore,
    icon_dir: str | Path,
    namespace: str,
    out_file: str | Path,
    out_type: str,
    sink: DiagnosticSink | None = None,
    dot_binary: str = "dot",
    timeout: float | None = None,
) -> None:
    """
    Lay out a namespace graph with Graphviz and write the result.

    Runs ``dot -T<out_type> -o <out_file>`` with the DOT text on stdin.
    A missing binary, a non-zero exit or a timeout propagates unmodified.
    """
    text = render(store, icon_dir, namespace, sink)
    subprocess.run(
        [dot_binary, f"-T{out_type}", "-o", str(out_file)],
        input=text,
        text=True,
        check=True,
        timeout=timeout,
    )
