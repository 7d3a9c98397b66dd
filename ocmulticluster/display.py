"""Cluster health summaries gathered with the ``oc`` command line tool."""

from __future__ import annotations

import os
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Callable, TextIO

KUBE_SUBDIR = Path(".kube") / "oc-multicluster-tui"
KUBECONFIG_SUFFIX = ".kubeconfig"

TITLE_COLOR = "205"
LABEL_COLOR = "39"
VALUE_COLOR = "231"
RULE_COLOR = "240"

Runner = Callable[[str], str]


def style(text: str, color: str, bold: bool = False) -> str:
    """Wrap each non-empty line of ``text`` in 256-colour ANSI escapes."""
    codes = ("1;" if bold else "") + f"38;5;{color}"
    return "\n".join(
        f"\x1b[{codes}m{line}\x1b[0m" if line else line for line in text.split("\n")
    )


def _lines(output: str) -> list[str]:
    return output.strip().split("\n")


def summarize_nodes(output: str) -> tuple[int, int]:
    """Return ``(ready, total)`` for the lines of ``oc get nodes`` output."""
    nodes = _lines(output)
    ready = sum(1 for node in nodes if " Ready " in node)
    return ready, len(nodes)


def summarize_pods(output: str) -> tuple[int, int]:
    """Return ``(not_ready, total)`` for the lines of ``oc get pods`` output."""
    pods = _lines(output)
    not_ready = sum(
        1 for pod in pods if " Running " not in pod and " Completed " not in pod
    )
    return not_ready, len(pods)


def run_shell(command: str) -> str:
    """Run ``command`` through ``sh -c`` and return its combined output."""
    try:
        result = subprocess.run(
            ["sh", "-c", command],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            check=False,
        )
    except OSError:
        return ""
    return result.stdout.decode("utf-8", errors="replace")


def cluster_info(
    cluster_name: str,
    kubeconfig_path: str | os.PathLike[str],
    runner: Runner | None = None,
) -> str:
    """Query one cluster and return a styled summary of its health."""
    run = run_shell if runner is None else runner
    kubeconfig = shlex.quote(str(kubeconfig_path))

    version = run(f"oc version --short --kubeconfig={kubeconfig}").strip()

    ready, node_total = summarize_nodes(
        run(f"oc get nodes --no-headers --kubeconfig={kubeconfig}")
    )
    node_status = f"{ready}/{node_total} ready"

    not_ready, pod_total = summarize_pods(
        run(f"oc get pods --all-namespaces --no-headers --kubeconfig={kubeconfig}")
    )
    pod_status = f"{not_ready} not ready / {pod_total} total"

    resource_usage = run(f"oc top nodes --no-headers --kubeconfig={kubeconfig}").strip()

    events = run(
        "oc get events --all-namespaces --sort-by=.lastTimestamp "
        f"--kubeconfig={kubeconfig} | tail -n 5"
    ).strip()

    def label(text: str) -> str:
        return style(text, LABEL_COLOR, bold=True)

    def value(text: str) -> str:
        return style(text, VALUE_COLOR)

    parts = [
        style(f"Cluster: {cluster_name}\n", TITLE_COLOR, bold=True),
        label("Version: ") + value(version) + "\n",
        label("Nodes: ") + value(node_status) + "\n",
        label("Pods: ") + value(pod_status) + "\n",
        label("Resource Usage:\n") + value(resource_usage) + "\n",
        label("Last 5 Events:\n") + value(events) + "\n",
        style("-" * 40, RULE_COLOR) + "\n",
    ]
    return "".join(parts)


def display_all(
    kube_dir: str | os.PathLike[str] | None = None,
    runner: Runner | None = None,
    out: TextIO | None = None,
) -> list[str]:
    """Print a summary for every saved kubeconfig; return the cluster names."""
    stream = sys.stdout if out is None else out
    if kube_dir is None:
        kube_dir = Path(os.environ.get("HOME", "")) / KUBE_SUBDIR
    names = []
    for path in sorted(Path(kube_dir).glob(f"*{KUBECONFIG_SUFFIX}")):
        name = path.name[: -len(KUBECONFIG_SUFFIX)]
        stream.write(cluster_info(name, path, runner))
        names.append(name)
    return names