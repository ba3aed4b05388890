import numpy as np
import pytest

from clusterbox.random import NumpySource, ReplaySource, ball, blobs, box, gaussian


def test_numpy_source_is_reproducible():
    a = NumpySource(seed=7)
    b = NumpySource(seed=7)
    draws_a = [(a.integer(10), a.uniform(2.5)) for _ in range(50)]
    draws_b = [(b.integer(10), b.uniform(2.5)) for _ in range(50)]
    assert draws_a == draws_b
    for i, u in draws_a:
        assert 0 <= i < 10
        assert 0.0 <= u < 2.5


def test_replay_source():
    source = ReplaySource(integers=[3, 0], uniforms=[0.5])
    assert source.integer(5) == 3
    assert source.integer(5) == 0
    assert source.uniform(8.0) == 4.0
    with pytest.raises(ReplaySource.Exhausted):
        source.integer(5)
    with pytest.raises(ReplaySource.Exhausted):
        source.uniform(1.0)


def test_gaussian_moments():
    source = NumpySource(seed=0)
    values = np.array([gaussian(2.0, 0.5, source) for _ in range(20000)])
    assert abs(values.mean() - 2.0) < 0.02
    assert abs(values.std() - 0.5) < 0.02


def test_generators():
    points = ball(100, 3, radius=2.0, seed=1)
    assert points.shape == (100, 3)
    assert np.all(np.linalg.norm(points, axis=1) <= 2.0 + 1e-12)
    points = box(50, 2, seed=1)
    assert points.shape == (50, 2)
    assert points.min() >= 0.0 and points.max() < 1.0
    points, groups = blobs(30, 2, 3, radius=0.1, seed=2)
    assert points.shape == (30, 2)
    assert sorted(set(groups.tolist())) == [0, 1, 2]
