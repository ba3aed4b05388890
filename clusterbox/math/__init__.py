import numpy as np


# Define a custom error for passing arrays of the wrong shape to pairwise.
class ShapeError(Exception): pass


# Compute the squared euclidean distance between two vectors of equal
# length. Both vectors are expected to come from the same data set, so
# the lengths are only checked when assertions are enabled.
def squared_distance(a, b):
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    assert (a.shape == b.shape), f"Vectors must have matching shapes, received {a.shape} and {b.shape}."
    difference = a - b
    return float(np.sum(difference * difference, axis=-1))


# Compute the squared distance of all combined pairs of rows between
# two lists of vectors. Row "i" of the result holds the distances from
# x1[i] to every row of x2. The arithmetic matches "squared_distance"
# exactly (difference, square, sum) so ties resolve identically.
def pairwise_squared_distance(x1, x2=None):
    x1 = np.asarray(x1, dtype=float)
    if (len(x1.shape) != 2): raise(ShapeError("Only 2D NumPy arrays are allowed."))
    if (x2 is None):
        x2 = x1
    else:
        x2 = np.asarray(x2, dtype=float)
        if (len(x2.shape) != 2): raise(ShapeError("Only 2D NumPy arrays are allowed."))
    assert (x1.shape[1] == x2.shape[1]), f"Second dimension of 'x1' ({x1.shape[1]}) and 'x2' ({x2.shape[1]}) do not match."
    # Handle zero-sized inputs by returning zero-sized outputs.
    if (x1.shape[0] == 0) or (x2.shape[0] == 0):
        return np.zeros((x1.shape[0], x2.shape[0]), dtype=float)
    difference = x1[:,None,:] - x2[None,:,:]
    return np.sum(difference * difference, axis=-1)
