"""Lloyd refinement loop (alternating assign and update passes)."""

from __future__ import annotations

import logging
import time
from typing import Optional, Tuple

import numpy as np

from clusterbox.math import pairwise_squared_distance
from clusterbox.schema import (
    EMPTY_FARTHEST,
    EMPTY_KEEP,
    EMPTY_ZERO,
    STATUS_CONVERGED,
    STATUS_ITERATION_LIMIT,
    STATUS_TIME_LIMIT,
)


def nearest(inputs: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Return the index of the nearest centroid for every row of *inputs*.

    Ties go to the lowest centroid index.
    """

    sq_dists = pairwise_squared_distance(inputs, centroids)
    # argmin returns the first occurrence of the minimum
    return sq_dists.argmin(axis=1)


def assign(inputs: np.ndarray, centroids: np.ndarray, labels: np.ndarray) -> bool:
    """Write the nearest centroid of every point into *labels*.

    Returns ``True`` when at least one label changed.
    """

    new_labels = nearest(inputs, centroids)
    changed = bool(np.any(new_labels != labels))
    if changed:
        labels[:] = new_labels
    return changed


def update(
    inputs: np.ndarray,
    centroids: np.ndarray,
    labels: np.ndarray,
    empty_cluster: str = EMPTY_ZERO,
) -> int:
    """Move every centroid (in place) to the mean of its members.

    Clusters without members are handled by *empty_cluster*:

    ``"zero"``
        the centroid becomes the all-zero vector.
    ``"keep"``
        the centroid stays where it was.
    ``"farthest"``
        the centroid moves onto the point farthest from its own centroid,
        using a different point for each empty cluster.

    Returns the number of empty clusters.
    """

    k, dim = centroids.shape
    previous = centroids.copy()
    empty = []
    for c in range(k):
        members = inputs[labels == c]
        if members.shape[0]:  # normal case
            centroids[c] = members.mean(axis=0)
        else:
            empty.append(c)

    if not empty:
        return 0

    if empty_cluster == EMPTY_ZERO:
        logging.warning(f"Resetting centroids of empty clusters {empty} to the zero vector.")
        centroids[empty] = np.zeros((len(empty), dim), dtype=float)
    elif empty_cluster == EMPTY_KEEP:
        centroids[empty] = previous[empty]
    elif empty_cluster == EMPTY_FARTHEST:
        # Distance of every point to the centroid it was just assigned to.
        own = np.sum((inputs - previous[labels]) ** 2, axis=1)
        order = np.argsort(-own, kind="stable")
        for c, point in zip(empty, order):
            centroids[c] = inputs[point]
    else:
        raise ValueError(f"Unknown empty cluster policy {empty_cluster!r}")
    return len(empty)


def refine(
    inputs: np.ndarray,
    centroids: np.ndarray,
    labels: np.ndarray,
    max_iterations: Optional[int] = None,
    time_limit: Optional[float] = None,
    empty_cluster: str = EMPTY_ZERO,
) -> Tuple[str, int]:
    """Alternate assign and update passes until no label changes.

    Parameters
    ----------
    inputs:
        Array of shape ``(n, d)``.
    centroids:
        Array of shape ``(k, d)``, updated in place.
    labels:
        Integer array of length *n*, updated in place. Entries that are not
        valid centroid indices (e.g. ``UNASSIGNED``) are always reassigned
        by the first pass.
    max_iterations:
        Maximum number of passes that change labels (at least 1), ``None``
        for no cap.
    time_limit:
        Optional wall clock budget in seconds, checked between passes.
    empty_cluster:
        Policy for clusters without members, see :func:`update`.

    Returns
    -------
    status:
        ``"converged"`` when an assign pass changed nothing, otherwise the
        name of the exhausted budget.
    iterations:
        Number of assign passes that changed labels (each one followed by
        an update pass).
    """

    start = time.monotonic()
    iterations = 0
    while True:
        # ------- Assignment step -----------------------------------------
        if not assign(inputs, centroids, labels):
            logging.debug(f"Lloyd refinement converged after {iterations} passes.")
            return STATUS_CONVERGED, iterations
        # ------- Update step ---------------------------------------------
        update(inputs, centroids, labels, empty_cluster)
        iterations += 1
        if (max_iterations is not None) and (iterations >= max_iterations):
            status = STATUS_ITERATION_LIMIT
            break
        if (time_limit is not None) and (time.monotonic() - start >= time_limit):
            status = STATUS_TIME_LIMIT
            break

    # The last update left centroids at the means of the current labels,
    # the run only counts as converged if another pass would change nothing.
    if np.array_equal(nearest(inputs, centroids), labels):
        return STATUS_CONVERGED, iterations
    logging.warning(f"Lloyd refinement stopped without converging ({status}) after {iterations} passes.")
    return status, iterations


__all__ = ["nearest", "assign", "update", "refine"]
