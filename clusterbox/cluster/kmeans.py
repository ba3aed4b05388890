"""k-means grouping of a ``DataSet``.

The :class:`KMeans` engine owns the number of clusters and the resulting
centroids. Training seeds the centroids (k-means++ by default, Forgy on
request) and then runs Lloyd's algorithm until no label changes or a
configured budget runs out. Labels are written into the data set while
its label buffer is borrowed for the whole call.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from clusterbox.cluster.lloyd import nearest, refine
from clusterbox.cluster.seeding import forgy_seeds, plusplus_seeds
from clusterbox.math import pairwise_squared_distance
from clusterbox.random import NumpySource
from clusterbox.schema import (
    DEFAULT_MAX_ITERATIONS,
    EMPTY_ZERO,
    SEED_PLUSPLUS,
    STATUS_CONVERGED,
    UNASSIGNED,
    TrainConfig,
    TrainResult,
)


# Raised when a data set holds fewer points than the requested clusters.
class TooFewPoints(Exception): pass


class KMeans:
    """Partition a data set into ``num_clusters`` groups.

    Parameters
    ----------
    num_clusters:
        Number of clusters *k* (positive integer).
    seeding:
        ``"plusplus"`` (weighted farthest-point) or ``"forgy"`` (uniform).
    max_iterations:
        Maximum number of refinement passes, ``None`` for no cap.
    time_limit:
        Optional wall clock budget for the refinement in seconds.
    empty_cluster:
        What to do with a centroid whose cluster lost every member,
        ``"zero"``, ``"keep"`` or ``"farthest"``.
    source:
        Random source with ``integer(n)`` and ``uniform(high)`` methods.
        Defaults to a :class:`~clusterbox.random.NumpySource` built from
        *seed*.
    seed:
        Seed for the default source, ignored when *source* is given.
    """

    def __init__(
        self,
        num_clusters: int,
        seeding: str = SEED_PLUSPLUS,
        max_iterations: Optional[int] = DEFAULT_MAX_ITERATIONS,
        time_limit: Optional[float] = None,
        empty_cluster: str = EMPTY_ZERO,
        source=None,
        seed: Optional[int] = None,
    ) -> None:
        self.config = TrainConfig(
            num_clusters=num_clusters,
            seeding=seeding,
            max_iterations=max_iterations,
            time_limit=time_limit,
            empty_cluster=empty_cluster,
        )
        self.source = source if source is not None else NumpySource(seed)
        self._centroids = np.zeros((0, 0), dtype=float)

    @classmethod
    def from_config(cls, config: TrainConfig, source=None, seed: Optional[int] = None) -> "KMeans":
        return cls(
            config.num_clusters,
            seeding=config.seeding,
            max_iterations=config.max_iterations,
            time_limit=config.time_limit,
            empty_cluster=config.empty_cluster,
            source=source,
            seed=seed,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(num_clusters={self.num_clusters}, seeding={self.config.seeding!r})"

    @property
    def num_clusters(self) -> int:
        return self.config.num_clusters

    @property
    def centroids(self) -> np.ndarray:
        """Copy of the centroids from the last training, shape ``(k, d)``."""
        return self._centroids.copy()

    @property
    def trained(self) -> bool:
        return self._centroids.shape[0] > 0

    def train(self, data) -> TrainResult:
        """Cluster *data* in place and keep the resulting centroids.

        Raises
        ------
        TooFewPoints
            If ``data.size < num_clusters``. The labels of *data* are not
            modified in that case.
        """

        k = self.num_clusters
        if data.size < k:
            raise TooFewPoints(f"Cannot form {k} clusters from {data.size} points.")
        inputs = np.asarray(data.inputs, dtype=float)

        with data.borrow_labels() as labels:
            # Every point is its own cluster.
            if data.size == k:
                labels[:] = np.arange(k)
                self._centroids = inputs.copy()
                logging.debug(f"Assigned each of the {k} points to its own cluster.")
                return TrainResult(status=STATUS_CONVERGED, iterations=0, inertia=0.0)

            # Set all labels to unassigned to force an initial assignment.
            labels[:] = UNASSIGNED
            if self.config.seeding == SEED_PLUSPLUS:
                centroids = plusplus_seeds(inputs, k, labels, self.source)
            else:
                centroids = forgy_seeds(inputs, k, self.source)

            status, iterations = refine(
                inputs,
                centroids,
                labels,
                max_iterations=self.config.max_iterations,
                time_limit=self.config.time_limit,
                empty_cluster=self.config.empty_cluster,
            )
            self._centroids = centroids
            inertia = float(np.sum((inputs - centroids[labels]) ** 2))

        logging.debug(f"Trained {k} clusters on {data.size} points: {status} after {iterations} passes.")
        return TrainResult(status=status, iterations=iterations, inertia=inertia)

    def predict(self, x):
        """Return the index of the nearest centroid for each row of *x*.

        A single 1-D point gives a single ``int``.
        """

        if not self.trained:
            raise RuntimeError("KMeans must be trained before calling 'predict'.")
        x = np.asarray(x, dtype=float)
        single_response = (len(x.shape) == 1)
        if single_response:
            x = x.reshape((1, x.size))
        labels = nearest(x, self._centroids)
        if single_response:
            return int(labels[0])
        return labels

    def distances(self, x) -> np.ndarray:
        """Squared distances from every row of *x* to every centroid."""

        if not self.trained:
            raise RuntimeError("KMeans must be trained before calling 'distances'.")
        return pairwise_squared_distance(np.atleast_2d(np.asarray(x, dtype=float)), self._centroids)

    # Wrapper for 'predict'.
    def __call__(self, *args, **kwargs):
        return self.predict(*args, **kwargs)


__all__ = ["KMeans", "TooFewPoints"]
