"""Initial centroid selection for k-means.

Two interchangeable strategies are provided:

* :func:`plusplus_seeds` - weighted farthest-point sampling (k-means++).
  Candidates are visited in ascending point index while accumulating
  weight, which makes the selection reproducible for a fixed source.
* :func:`forgy_seeds` - *k* distinct points chosen uniformly at random.

All randomness is drawn from an explicit ``source`` object (see
:mod:`clusterbox.random`).
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from clusterbox.math import pairwise_squared_distance
from clusterbox.schema import FORGY_MAX_RETRIES, UNASSIGNED


def weighted_choice(weights: Sequence[float], source) -> int:
    """Return a position in *weights* drawn proportionally to its weight.

    A uniform value ``u`` in ``[0, total)`` is drawn and the weights are
    accumulated in order until the running sum exceeds ``u``. Zero weights
    are never selected. When every weight is zero the first position is
    returned.
    """

    weights = np.asarray(weights, dtype=float)
    assert weights.ndim == 1 and weights.size > 0, "weights must be a non-empty 1-D sequence"
    total = float(weights.sum())
    if total <= 0.0:
        return 0
    draw = source.uniform(total)
    running = 0.0
    for position, weight in enumerate(weights):
        running += weight
        if running > draw:
            return position
    # Rounding left the running sum at or below the draw.
    return int(np.flatnonzero(weights > 0.0)[-1])


def plusplus_seeds(inputs: np.ndarray, k: int, labels: np.ndarray, source) -> np.ndarray:
    """Choose *k* centroids with weighted farthest-point sampling.

    Parameters
    ----------
    inputs:
        Array of shape ``(n, d)`` with the points to cluster.
    k:
        Number of centroids (``1 <= k <= n``).
    labels:
        Label buffer of length *n*, expected to hold ``UNASSIGNED``
        everywhere. The chosen seed points are labeled with their centroid
        index in place, every other label is left untouched.
    source:
        Random source providing ``integer`` and ``uniform``.

    Returns
    -------
    centroids:
        Array of shape ``(k, d)`` with copies of the chosen points.
    """

    n, dim = inputs.shape
    assert 1 <= k <= n, f"k must be between 1 and {n}, received {k}"
    centroids = np.empty((k, dim), dtype=float)

    # First centroid chosen uniformly at random
    first = source.integer(n)
    centroids[0] = inputs[first]
    labels[first] = 0

    # Squared distance of every point to its nearest centroid so far
    dist2 = pairwise_squared_distance(inputs, centroids[:1])[:, 0]

    for c in range(1, k):
        candidates = np.flatnonzero(labels == UNASSIGNED)
        weights = dist2[candidates]
        if float(weights.sum()) > 0.0:
            chosen = int(candidates[weighted_choice(weights, source)])
        else:  # every candidate coincides with a centroid
            chosen = int(candidates[0])
        labels[chosen] = c
        centroids[c] = inputs[chosen]
        dist2 = np.minimum(dist2, pairwise_squared_distance(inputs, centroids[c:c+1])[:, 0])

    logging.debug(f"k-means++ seeding chose {k} centroids from {n} points.")
    return centroids


def forgy_seeds(inputs: np.ndarray, k: int, source, max_retries: int = FORGY_MAX_RETRIES) -> np.ndarray:
    """Use *k* distinct, uniformly chosen points as the initial centroids.

    A duplicate draw is redrawn up to *max_retries* times; after that the
    pick is made from the explicit list of indices not chosen yet, which
    keeps the selection uniform and guarantees termination as *k*
    approaches *n*.
    """

    n, _ = inputs.shape
    assert 1 <= k <= n, f"k must be between 1 and {n}, received {k}"
    chosen: List[int] = []
    taken = set()
    for _ in range(k):
        index = source.integer(n)
        retries = 0
        while index in taken and retries < max_retries:
            index = source.integer(n)
            retries += 1
        if index in taken:
            remaining = [i for i in range(n) if i not in taken]
            index = remaining[source.integer(len(remaining))]
        chosen.append(index)
        taken.add(index)

    logging.debug(f"Forgy seeding chose points {chosen}.")
    return inputs[chosen].astype(float, copy=True)


__all__ = ["weighted_choice", "plusplus_seeds", "forgy_seeds"]
