import threading
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from clusterbox.schema import UNASSIGNED


# DataSet holds a list of fixed-dimension input vectors along with one
# mutable integer label per point (the cluster index, or UNASSIGNED).
#
# Arguments:
#   dimension (int): The length of every input vector stored in this set.
#
# Attributes:
#   size (int): The number of stored points.
#   dimension (int): The fixed feature-vector length.
#   inputs (np.ndarray): Read-only (size, dimension) view of all points.
#
# The label buffer can be borrowed for exclusive write access with the
# "borrow_labels" context manager. A second borrow while one is active
# raises DataSet.LabelsBusy.
#
class DataSet:
    class WrongDimension(Exception): pass
    class LabelsBusy(Exception): pass

    def __init__(self, dimension: int) -> None:
        if (int(dimension) < 1):
            raise(DataSet.WrongDimension(f"Expected a positive dimension, received {dimension}."))
        self.dimension: int = int(dimension)
        self._rows: List[np.ndarray] = []
        self._labels: np.ndarray = np.zeros((0,), dtype=int)
        self._matrix: Optional[np.ndarray] = None
        self._lock: threading.Lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size}, dimension={self.dimension})"

    # Build a data set from a 2D array of row vectors (and optional labels).
    @classmethod
    def from_array(cls, x, labels=None) -> "DataSet":
        x = np.asarray(x, dtype=float)
        if (len(x.shape) != 2):
            raise(DataSet.WrongDimension(f"Expected a 2D array of row vectors, received shape {x.shape}."))
        data = cls(x.shape[1])
        if labels is None:
            labels = [UNASSIGNED] * x.shape[0]
        elif (len(labels) != x.shape[0]):
            raise ValueError(f"Expected {x.shape[0]} labels, one per row, received {len(labels)}.")
        for row, label in zip(x, labels):
            data.add_point(row, label)
        return data

    @property
    def size(self) -> int:
        return len(self._rows)

    # All inputs stacked into one read-only matrix, rebuilt lazily after additions.
    @property
    def inputs(self) -> np.ndarray:
        if (self._matrix is None):
            if (len(self._rows) == 0):
                self._matrix = np.zeros((0, self.dimension), dtype=float)
            else:
                self._matrix = np.stack(self._rows)
            self._matrix.flags.writeable = False
        return self._matrix

    # A copy of the current labels.
    @property
    def labels(self) -> np.ndarray:
        return self._labels.copy()

    # Add a new point to the data set, storing an immutable copy of the vector.
    def add_point(self, vector, label: int = UNASSIGNED) -> int:
        vector = np.array(vector, dtype=float).reshape(-1)
        if (vector.size != self.dimension):
            raise(DataSet.WrongDimension(f"Expected a vector of length {self.dimension}, received length {vector.size}."))
        vector.flags.writeable = False
        with self._exclusive():
            self._rows.append(vector)
            self._labels = np.append(self._labels, int(label))
            self._matrix = None
        return len(self._rows) - 1

    def input_vector(self, index: int) -> np.ndarray:
        return self._rows[self._check_index(index)]

    def label(self, index: int) -> int:
        return int(self._labels[self._check_index(index)])

    def set_label(self, index: int, label: int) -> None:
        with self._exclusive():
            self._labels[self._check_index(index)] = int(label)

    # Mark every point as unassigned.
    def reset_labels(self) -> None:
        with self._exclusive():
            self._labels[:] = UNASSIGNED

    # Borrow the label buffer for the duration of the "with" block. The
    # yielded array is the live storage, writes are seen by the data set.
    @contextmanager
    def borrow_labels(self) -> Iterator[np.ndarray]:
        if (not self._lock.acquire(blocking=False)):
            raise(DataSet.LabelsBusy("The labels of this data set are already borrowed."))
        try:
            yield self._labels
        finally:
            self._lock.release()

    # Create a new data set holding copies of the points (and labels) at "indices".
    def subset(self, indices: Iterable[int]) -> "DataSet":
        data = DataSet(self.dimension)
        for i in indices:
            i = self._check_index(i)
            data.add_point(self._rows[i], self._labels[i])
        return data

    # Return all point indices in a random order drawn from "source".
    def random_index_set(self, source) -> List[int]:
        indices = list(range(self.size))
        # Fisher-Yates shuffle driven by the provided source.
        for i in range(len(indices)-1, 0, -1):
            j = source.integer(i+1)
            indices[i], indices[j] = indices[j], indices[i]
        return indices

    # Return the (minimum, maximum) of every input component.
    def input_range(self) -> List[Tuple[float, float]]:
        if (self.size == 0):
            return [(float("inf"), -float("inf"))] * self.dimension
        inputs = self.inputs
        return list(zip(inputs.min(axis=0).tolist(), inputs.max(axis=0).tolist()))

    # Count the number of points carrying each label in [0, num_classes).
    def class_counts(self, num_classes: int) -> np.ndarray:
        labels = self._labels[(self._labels >= 0) & (self._labels < num_classes)]
        return np.bincount(labels, minlength=num_classes)

    # Raise an IndexError for indices outside of the stored points.
    def _check_index(self, index: int) -> int:
        index = int(index)
        if (index < 0) or (index >= len(self._rows)):
            raise IndexError(f"Index {index} is out of range for a data set of size {len(self._rows)}.")
        return index

    # Hold the label lock for a single mutation from outside of a borrow.
    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        if (not self._lock.acquire(blocking=False)):
            raise(DataSet.LabelsBusy("The labels of this data set are borrowed, it cannot be modified."))
        try:
            yield
        finally:
            self._lock.release()
