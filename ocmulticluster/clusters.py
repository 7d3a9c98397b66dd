"""Cluster definitions stored in the clusters file, and the ``setup`` command."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, TextIO

CONFIG_SUBDIR = Path(".config") / "oc-multicluster-tui"
CLUSTERS_FILENAME = "clusters.json"

InputFunc = Callable[[str], str]

_JSON_ESCAPES = {
    "&": "\\u0026",
    "<": "\\u003c",
    ">": "\\u003e",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass
class Cluster:
    """A named OpenShift cluster and its API URL."""

    name: str
    url: str

    def to_dict(self) -> dict[str, str]:
        """Return the JSON object form of this cluster."""
        return {"name": self.name, "url": self.url}

    @classmethod
    def _from_json(cls, item: object) -> "Cluster":
        if item is None:
            return cls("", "")
        if not isinstance(item, dict):
            raise ValueError(f"cluster entry must be an object, not {type(item).__name__}")
        name = item.get("name")
        url = item.get("url")
        for field, value in (("name", name), ("url", url)):
            if value is not None and not isinstance(value, str):
                raise ValueError(f"cluster field {field!r} must be a string")
        return cls(name or "", url or "")


def _out(out: TextIO | None) -> TextIO:
    return sys.stdout if out is None else out


def default_clusters_path(home: str | os.PathLike[str] | None = None) -> Path:
    """Return the clusters file location under ``home`` (``$HOME`` by default)."""
    if home is None:
        home = os.environ.get("HOME", "")
    return Path(home) / CONFIG_SUBDIR / CLUSTERS_FILENAME


def _resolve(path: str | os.PathLike[str] | None) -> Path:
    return default_clusters_path() if path is None else Path(path)


def load_clusters(path: str | os.PathLike[str] | None = None) -> list[Cluster]:
    """Read the clusters file.

    Raises OSError if the file cannot be read and ValueError if it does not
    hold a JSON list of cluster objects. A JSON ``null`` reads as no clusters.
    """
    text = _resolve(path).read_text(encoding="utf-8")
    data = json.loads(text)
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"clusters file must hold a list, not {type(data).__name__}")
    return [Cluster._from_json(item) for item in data]


def _encode(clusters: Iterable[Cluster]) -> str:
    text = json.dumps([c.to_dict() for c in clusters], indent=2, ensure_ascii=False)
    for char, escape in _JSON_ESCAPES.items():
        text = text.replace(char, escape)
    return text + "\n"


def save_clusters(clusters: Iterable[Cluster], path: str | os.PathLike[str] | None = None) -> Path:
    """Write ``clusters`` as indented JSON, creating the directory if needed."""
    target = _resolve(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(_encode(clusters), encoding="utf-8")
    return target


def reset_clusters_file(path: str | os.PathLike[str] | None = None, out: TextIO | None = None) -> None:
    """Remove the clusters file. Raises OSError if it cannot be removed."""
    target = _resolve(path)
    target.unlink()
    print(f"Clusters file reset to default state at {target}", file=_out(out))


def delete_cluster(
    name: str, path: str | os.PathLike[str] | None = None, out: TextIO | None = None
) -> list[Cluster]:
    """Remove every cluster called ``name`` and save; return the clusters kept."""
    target = _resolve(path)
    remaining = [c for c in load_clusters(target) if c.name != name]
    save_clusters(remaining, target)
    print(f"Cluster '{name}' deleted and changes saved to {target}", file=_out(out))
    return remaining


def list_clusters(path: str | os.PathLike[str] | None = None, out: TextIO | None = None) -> list[Cluster]:
    """Print the configured clusters and return them."""
    stream = _out(out)
    clusters = load_clusters(path)
    if not clusters:
        print("No clusters found.", file=stream)
        return clusters
    print("Clusters:", file=stream)
    for cluster in clusters:
        print(f"- {cluster.name}: {cluster.url}", file=stream)
    return clusters


def _ask(input_func: InputFunc, prompt: str) -> str:
    """Read one whitespace-delimited word; end of input reads as empty."""
    try:
        line = input_func(prompt)
    except EOFError:
        return ""
    words = line.split()
    return words[0] if words else ""


def prompt_clusters(
    existing: Iterable[Cluster] | None = None,
    input_func: InputFunc | None = None,
    out: TextIO | None = None,
) -> list[Cluster]:
    """Ask for clusters until the user declines to add another.

    When ``existing`` is given, the new clusters are added after it and a
    name or URL that matches an earlier cluster is asked for again.
    """
    ask_func = input if input_func is None else input_func
    stream = _out(out)
    check_unique = existing is not None
    clusters = list(existing or [])
    while True:
        name = _ask(ask_func, "Enter cluster name: ")
        if check_unique:
            for cluster in list(clusters):
                if cluster.name == name:
                    print("Cluster name already exists. Please enter a unique name.", file=stream)
                    name = _ask(ask_func, "Enter cluster name: ")
        url = _ask(ask_func, "Enter cluster API URL: ")
        if check_unique:
            for cluster in list(clusters):
                if cluster.url == url:
                    print("Cluster URL already exists. Please enter a unique URL.", file=stream)
                    url = _ask(ask_func, "Enter cluster API URL: ")
        clusters.append(Cluster(name, url))
        answer = _ask(ask_func, "Add another cluster? (y/n): ")
        if answer not in ("y", "Y"):
            return clusters


def setup_help(out: TextIO | None = None) -> None:
    """Print usage for the setup command."""
    stream = _out(out)
    for line in (
        "Usage: oc-multicluster-tui setup [flags]",
        "Flags:",
        "  -a, --append            Append to existing clusters file",
        "  -r, --reset             Reset the clusters file to default state",
        "  -d, --delete-cluster    Specify a cluster name to delete from the clusters file",
        "  -l, --list              List all clusters in the clusters file",
        "  -h, --help              Help message for setup command",
    ):
        print(line, file=stream)


def _append(path: Path, input_func: InputFunc | None, stream: TextIO) -> None:
    try:
        existing = load_clusters(path)
    except (OSError, ValueError):
        existing = []
    clusters = prompt_clusters(existing, input_func, stream)
    try:
        save_clusters(clusters, path)
    except OSError as err:
        print("Error opening clusters file for writing:", err, file=stream)
        return
    print(f"Clusters appended and saved to {path}", file=stream)


def run_setup(
    options: object,
    path: str | os.PathLike[str] | None = None,
    input_func: InputFunc | None = None,
    out: TextIO | None = None,
) -> None:
    """Run the setup command.

    ``options`` carries the attributes ``help``, ``list``, ``reset`` and
    ``append`` (true when the flag was given) and ``delete_cluster`` (None
    unless the flag was given).
    """
    stream = _out(out)
    target = _resolve(path)
    delete_name = getattr(options, "delete_cluster", None)

    if getattr(options, "help", False):
        setup_help(stream)
        return

    if getattr(options, "list", False):
        try:
            list_clusters(target, stream)
        except OSError as err:
            print("Error opening clusters file:", err, file=stream)
        except ValueError as err:
            print("Error decoding clusters:", err, file=stream)
        return

    exists = target.exists()
    if exists and getattr(options, "reset", False):
        try:
            reset_clusters_file(target, stream)
        except OSError as err:
            print("Error resetting clusters file:", err, file=stream)
    elif exists and getattr(options, "append", False):
        print("Appending to existing clusters file...", file=stream)
        _append(target, input_func, stream)
        return
    elif exists and delete_name is not None:
        try:
            delete_cluster(delete_name, target, stream)
        except OSError as err:
            print("Error opening clusters file:", err, file=stream)
        except ValueError as err:
            print("Error decoding clusters:", err, file=stream)
        return
    elif exists:
        print("Config file already exists, skipping setup.", file=stream)
        print("Use --append to add new clusters or --reset to reset the clusters file.", file=stream)
        return
    else:
        print("Creating new clusters file...", file=stream)

    clusters = prompt_clusters(None, input_func, stream)
    try:
        save_clusters(clusters, target)
    except OSError as err:
        print("Error creating file:", err, file=stream)
        return
    print(f"Clusters saved to {target}", file=stream)