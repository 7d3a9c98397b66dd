# ocmulticluster

A small command-line tool for keeping track of several OpenShift clusters from
one terminal. It stores a list of clusters, logs in to each one with a CLI
token, and prints a coloured health summary for every cluster you are logged in to.

The OpenShift CLI (`oc`) and a POSIX `sh` must be available; all cluster
queries are run through `sh -c`.

## Installation

```
pip install .
```

This installs the `oc-multicluster-tui` command. Running it with no
subcommand prints the help text.

## Usage

### Configure clusters

```
oc-multicluster-tui setup
```

If the clusters file does not exist yet, this asks for a cluster name and an
API URL, repeating while you answer `y` or `Y` to "Add another cluster?". Only
the first word of each answer is used. The list is saved as indented JSON to
`$HOME/.config/oc-multicluster-tui/clusters.json`.

If the file already exists, plain `setup` prints a notice and changes nothing.
The flags are checked in this order:

| Flag | Meaning |
| --- | --- |
| `-h`, `--help` | print help for `setup` |
| `-l`, `--list` | list the configured clusters |
| `-r`, `--reset` | remove the clusters file, then ask for clusters and write a new one |
| `-a`, `--append` | ask for more clusters and add them to the file; a name or URL already in use is asked for again |
| `-d NAME`, `--delete-cluster NAME` | remove every cluster called `NAME` |

`--reset`, `--append` and `--delete-cluster` only act on an existing file;
when there is no file, `setup` creates one as described above.

### Log in

```
oc-multicluster-tui login
```

This reads the clusters file, lists the clusters, and asks for a CLI token for
each in turn. It then runs
`oc login <url> --token=<token> --kubeconfig=$HOME/.kube/oc-multicluster-tui/<name>.kubeconfig`,
so each cluster gets its own kubeconfig. A failed login is reported with its
exit status and output, and the remaining clusters are still tried.

### Show cluster health

```
oc-multicluster-tui display
```

For every `*.kubeconfig` file in `$HOME/.kube/oc-multicluster-tui`, in name
order, this prints:

- the output of `oc version --short`
- how many nodes are `Ready`, out of all nodes listed
- how many pods are neither `Running` nor `Completed`, out of all pods listed
- node resource usage from `oc top nodes`
- the last five events, sorted by `.lastTimestamp`

The summary is coloured with 256-colour ANSI escape codes.

## Using it from Python

The same functions are available as a library:

```python
from pathlib import Path
from ocmulticluster.clusters import Cluster, save_clusters, load_clusters

path = Path("clusters.json")
save_clusters([Cluster(name="dev", url="https://api.dev.example.com:6443")], path)
print(load_clusters(path))
```

- `ocmulticluster.clusters`: `Cluster`, `load_clusters`, `save_clusters`,
  `list_clusters`, `delete_cluster`, `reset_clusters_file`, `prompt_clusters`,
  `run_setup`, `setup_help`, `default_clusters_path`.
- `ocmulticluster.login`: `read_clusters_file`, `login_command`, `login_all`.
- `ocmulticluster.display`: `cluster_info`, `display_all`, `summarize_nodes`,
  `summarize_pods`, `style`, `run_shell`.
- `ocmulticluster.cli`: `build_parser`, `main`.

`cluster_info` and `display_all` take a `runner` callable that receives a shell
command and returns its output. `login_all` takes a `runner` that returns an
`(exit_status, output)` pair. Functions that print take an `out` stream, and
those that ask questions take an `input_func`, so they can be driven without a
terminal.

## What it does not do

- Despite the command name, there is no interactive screen: `display` prints
  one summary per cluster and exits.
- Tokens are read as ordinary input, so they are echoed, and they are passed to
  `oc login` on the command line.
- The `-t`/`--toggle` option is accepted but has no effect.