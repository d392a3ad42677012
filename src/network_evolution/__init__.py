"""
network_evolution
=================

Evolutionary search over feed-forward network weights, biases and activation
choices: tournament selection, value-blending crossover, gated mutation and
elitist generation replacement.
"""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """Return the installed package version or '0.0.0' when unavailable."""
    try:
        return version("network-evolution")
    except PackageNotFoundError:
        return "0.0.0"


__all__ = ["get_version"]
