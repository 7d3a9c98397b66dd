"""Command line entry point: ``setup``, ``login`` and ``display``."""

from __future__ import annotations

import argparse
import sys

from ocmulticluster.clusters import run_setup
from ocmulticluster.display import display_all
from ocmulticluster.login import login_all, read_clusters_file

PROG = "oc-multicluster-tui"

DESCRIPTION = """\
oc-multicluster-tui is a terminal user interface for monitoring multiple OpenShift clusters.
It allows users to log in to various clusters and provides a dashboard view of their health status,
making it easier to manage and monitor multiple environments from a single interface.

~~~~~~~~~~~~~~~~~~~~~~~
Please ensure you have the OpenShift CLI (oc) installed and configured on your system.
~~~~~~~~~~~~~~~~~~~~~~~"""


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the command and its subcommands."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-t", "--toggle", action="store_true", help="Help message for toggle")
    commands = parser.add_subparsers(dest="command")

    commands.add_parser("display", help="Display the health of every logged-in cluster")
    commands.add_parser("login", help="Login to OpenShift clusters using CLI tokens")

    setup = commands.add_parser(
        "setup", help="Setup clusters for oc-multicluster-tui", add_help=False
    )
    setup.add_argument("-a", "--append", action="store_true", help="Append to existing clusters file")
    setup.add_argument("-r", "--reset", action="store_true", help="Reset the clusters file to default state")
    setup.add_argument(
        "-d",
        "--delete-cluster",
        dest="delete_cluster",
        default=None,
        help="Specify a cluster name to delete from the clusters file",
    )
    setup.add_argument("-l", "--list", action="store_true", help="List all clusters in the clusters file")
    setup.add_argument("-h", "--help", action="store_true", help="Help message for setup command")
    return parser


def _login() -> None:
    print("login called")
    try:
        clusters = read_clusters_file()
    except OSError as err:
        print(f"Error reading clusters file: {err}")
        return
    login_all(clusters)


def main(argv: list[str] | None = None) -> int:
    """Run the command line and return its exit status."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exit_:
        return 0 if not exit_.code else 1

    if args.command == "display":
        print("display called")
        display_all()
    elif args.command == "login":
        _login()
    elif args.command == "setup":
        run_setup(args)
    else:
        parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())