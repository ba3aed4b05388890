"""Shared constants and lightweight data structures."""

import numbers
import os
from dataclasses import dataclass
from typing import Optional

# ---------------------------------------------------------------------------
# Configuration constants
UNASSIGNED: int = -1


# Read an integer setting from the environment, naming the variable on bad values.
def env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, received {value!r}") from None


DEFAULT_MAX_ITERATIONS: int = env_int("CLUSTERBOX_MAX_ITERATIONS", 300)
FORGY_MAX_RETRIES: int = 32

# Seeding methods.
SEED_PLUSPLUS: str = "plusplus"
SEED_FORGY: str = "forgy"
SEEDING_METHODS = (SEED_PLUSPLUS, SEED_FORGY)

# What happens to the centroid of a cluster that lost all of its members.
EMPTY_ZERO: str = "zero"          # reset to the all-zero vector
EMPTY_KEEP: str = "keep"          # leave at the previous location
EMPTY_FARTHEST: str = "farthest"  # move onto the point farthest from its centroid
EMPTY_CLUSTER_POLICIES = (EMPTY_ZERO, EMPTY_KEEP, EMPTY_FARTHEST)

# Reasons a refinement loop stopped.
STATUS_CONVERGED: str = "converged"
STATUS_ITERATION_LIMIT: str = "iteration_limit"
STATUS_TIME_LIMIT: str = "time_limit"


# ---------------------------------------------------------------------------
# Data structures
@dataclass
class TrainConfig:
    """Configuration for ``KMeans``.

    * ``num_clusters`` - number of clusters *k* (at least 1).
    * ``seeding`` - one of ``SEEDING_METHODS``.
    * ``max_iterations`` - cap on refinement passes, ``None`` for no cap.
    * ``time_limit`` - optional wall clock budget in seconds.
    * ``empty_cluster`` - one of ``EMPTY_CLUSTER_POLICIES``.
    """
    num_clusters: int
    seeding: str = SEED_PLUSPLUS
    max_iterations: Optional[int] = DEFAULT_MAX_ITERATIONS
    time_limit: Optional[float] = None
    empty_cluster: str = EMPTY_ZERO

    def __post_init__(self):
        if (isinstance(self.num_clusters, bool) or (not isinstance(self.num_clusters, numbers.Integral))
                or (self.num_clusters < 1)):
            raise ValueError(f"num_clusters must be a positive integer, received {self.num_clusters!r}")
        self.num_clusters = int(self.num_clusters)
        if self.seeding not in SEEDING_METHODS:
            raise ValueError(f"seeding must be one of {SEEDING_METHODS}, received {self.seeding!r}")
        if self.empty_cluster not in EMPTY_CLUSTER_POLICIES:
            raise ValueError(f"empty_cluster must be one of {EMPTY_CLUSTER_POLICIES}, received {self.empty_cluster!r}")
        if (self.max_iterations is not None) and (self.max_iterations < 1):
            raise ValueError(f"max_iterations must be positive or None, received {self.max_iterations!r}")
        if (self.time_limit is not None) and (self.time_limit <= 0):
            raise ValueError(f"time_limit must be positive or None, received {self.time_limit!r}")


@dataclass
class TrainResult:
    """Outcome of one ``KMeans.train`` call."""

    status: str
    iterations: int
    inertia: float

    @property
    def converged(self) -> bool:
        return self.status == STATUS_CONVERGED
