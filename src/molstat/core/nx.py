"""Weighted Nx/Lx statistics (N50/L50 generalised to any fraction)."""

import numpy as np

from molstat.exceptions import EmptyInputError, ZeroTotalError


def nx_lx(weights, fraction=0.5, total=None):
    """Return ``(Nx, Lx)`` for a sequence of non-negative weights.

    Weights are sorted descending and accumulated; ``Lx`` is the smallest
    1-based rank at which the cumulative sum reaches ``fraction`` of the
    total, ``Nx`` is the weight at that rank.

    Parameters
    ----------
    weights : array-like
        Read counts, sizes or any other non-negative weights.
    fraction : float
        Target fraction in (0, 1]. 0.5 gives N50/L50.
    total : number or None
        Total to normalise against. Defaults to ``sum(weights)``.
    """
    if not 0 < fraction <= 1:
        raise ValueError(f"fraction must be in (0, 1], got {fraction}")

    values = np.asarray(weights)
    if values.size == 0:
        raise EmptyInputError("cannot compute Nx/Lx of an empty sequence")
    if (values < 0).any():
        raise ValueError("weights must be non-negative")

    ranked = np.sort(values, kind="stable")[::-1]
    cumulative = np.cumsum(ranked)
    g = cumulative[-1] if total is None else total
    if g == 0:
        raise ZeroTotalError("total weight is zero")

    reached = cumulative / g >= fraction
    if not reached.any():
        raise ValueError(
            f"cumulative weight {cumulative[-1]} never reaches "
            f"{fraction} of total {g}"
        )
    rank = int(np.argmax(reached)) + 1
    return ranked[rank - 1].item(), rank


def n50(weights):
    """N50 of ``weights``."""
    return nx_lx(weights, 0.5)[0]


def l50(weights):
    """L50 of ``weights``."""
    return nx_lx(weights, 0.5)[1]
