"""Store a list of OpenShift clusters, log in to them and print their health."""

__version__ = "0.1.0"

__all__ = ["__version__"]