import numpy as np
import pytest

from clusterbox.math import ShapeError, pairwise_squared_distance, squared_distance


def test_squared_distance():
    assert squared_distance([0.0, 0.0], [3.0, 4.0]) == 25.0
    assert squared_distance([1.5, -2.0, 0.5], [1.5, -2.0, 0.5]) == 0.0
    assert squared_distance(np.array([1.0]), np.array([-1.0])) == 4.0


def test_squared_distance_is_symmetric_and_non_negative():
    rng = np.random.default_rng(0)
    for _ in range(20):
        a, b = rng.normal(size=(2, 5))
        assert squared_distance(a, b) >= 0.0
        assert squared_distance(a, b) == squared_distance(b, a)


def test_squared_distance_length_mismatch():
    with pytest.raises(AssertionError):
        squared_distance([1.0, 2.0], [1.0, 2.0, 3.0])


def test_pairwise_matches_scalar():
    rng = np.random.default_rng(1)
    x1 = rng.normal(size=(7, 3))
    x2 = rng.normal(size=(4, 3))
    d = pairwise_squared_distance(x1, x2)
    assert d.shape == (7, 4)
    for i in range(7):
        for j in range(4):
            assert d[i, j] == squared_distance(x1[i], x2[j])
    # Single argument compares a set with itself.
    self_d = pairwise_squared_distance(x1)
    assert np.all(np.diag(self_d) == 0.0)
    assert np.array_equal(self_d, self_d.T)


def test_pairwise_shapes():
    with pytest.raises(ShapeError):
        pairwise_squared_distance(np.zeros(3))
    with pytest.raises(ShapeError):
        pairwise_squared_distance(np.zeros((2, 3)), np.zeros(3))
    assert pairwise_squared_distance(np.zeros((0, 3)), np.zeros((2, 3))).shape == (0, 2)


if __name__ == "__main__":
    test_squared_distance()
    test_pairwise_matches_scalar()
