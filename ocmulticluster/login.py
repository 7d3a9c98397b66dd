"""Logging in to the configured clusters with CLI tokens."""

from __future__ import annotations

import os
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Callable, Iterable, TextIO

from ocmulticluster.clusters import Cluster, default_clusters_path, load_clusters

DEFAULT_KUBE_DIR = "$HOME/.kube/oc-multicluster-tui"

InputFunc = Callable[[str], str]
LoginRunner = Callable[[str], "tuple[int, str]"]


def read_clusters_file(
    path: str | os.PathLike[str] | None = None, out: TextIO | None = None
) -> list[Cluster]:
    """Load the clusters to log in to.

    Raises FileNotFoundError when the file is missing and OSError when it
    cannot be read. Content that does not decode reads as no clusters.
    """
    stream = sys.stdout if out is None else out
    target = default_clusters_path() if path is None else Path(path)
    try:
        clusters = load_clusters(target)
    except FileNotFoundError:
        stream.write(
            f"Clusters file not found at {target}. "
            "Run oc-multicluster-tui setup to create Clusters file."
        )
        raise
    except OSError as err:
        print(f"Error reading clusters file: {err}", file=stream)
        raise
    except ValueError:
        clusters = []
    if not clusters:
        print(
            "No clusters found in the clusters file. "
            "Please run oc-multicluster-tui setup to add clusters.",
            file=stream,
        )
        return []
    print(f"Clusters loaded from {target}", file=stream)
    return clusters


def _kube_dir_text(kube_dir: str | os.PathLike[str] | None) -> str:
    return DEFAULT_KUBE_DIR if kube_dir is None else str(kube_dir)


def login_command(
    cluster: Cluster, token: str, kube_dir: str | os.PathLike[str] | None = None
) -> str:
    """Return the shell command that logs in to ``cluster``."""
    if kube_dir is None:
        kubeconfig = f"{DEFAULT_KUBE_DIR}/{cluster.name}.kubeconfig"
    else:
        kubeconfig = shlex.quote(f"{kube_dir}/{cluster.name}.kubeconfig")
    return f"oc login {cluster.url} --token={token} --kubeconfig={kubeconfig}"


def _run(command: str) -> tuple[int, str]:
    try:
        result = subprocess.run(
            ["sh", "-c", command],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            check=False,
        )
    except OSError as err:
        return -1, str(err)
    return result.returncode, result.stdout.decode("utf-8", errors="replace")


def _read_word(input_func: InputFunc) -> str:
    try:
        line = input_func("")
    except EOFError:
        return ""
    words = line.split()
    return words[0] if words else ""


def login_all(
    clusters: Iterable[Cluster],
    kube_dir: str | os.PathLike[str] | None = None,
    input_func: InputFunc | None = None,
    runner: LoginRunner | None = None,
    out: TextIO | None = None,
) -> list[str]:
    """Ask for a token per cluster and log in; return the names that succeeded."""
    stream = sys.stdout if out is None else out
    ask = input if input_func is None else input_func
    run = _run if runner is None else runner
    clusters = list(clusters)
    shown_dir = _kube_dir_text(kube_dir)

    print("Available clusters:", file=stream)
    for number, cluster in enumerate(clusters, start=1):
        print(f"{number}: {cluster.name} ({cluster.url})", file=stream)

    succeeded = []
    for cluster in clusters:
        print(f"Logging in to cluster {cluster.name} at {cluster.url}...", file=stream)
        print(f"Please enter the CLI token for cluster  {cluster.name} : ", file=stream)
        token = _read_word(ask)
        status, output = run(login_command(cluster, token, kube_dir))
        if status != 0:
            print(
                f"Failed to log in to cluster {cluster.name}: exit status {status}\n"
                f"Output: {output}",
                file=stream,
            )
            continue
        print(f"Successfully logged in to cluster {cluster.name}", file=stream)
        print(f"kubeconfig saved to {shown_dir}/{cluster.name}.kubeconfig", file=stream)
        succeeded.append(cluster.name)
    return succeeded