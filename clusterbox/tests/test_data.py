import numpy as np
import pytest

from clusterbox.data import DataSet
from clusterbox.random import ReplaySource
from clusterbox.schema import UNASSIGNED


@pytest.fixture()
def data():
    return DataSet.from_array([[0.0, 0.0], [0.0, 1.0], [10.0, 0.0], [10.0, 1.0]])


def test_basic_accessors(data):
    assert data.size == 4
    assert len(data) == 4
    assert data.dimension == 2
    assert data.inputs.shape == (4, 2)
    assert data.input_vector(2).tolist() == [10.0, 0.0]
    assert data.labels.tolist() == [UNASSIGNED] * 4
    data.set_label(1, 3)
    assert data.label(1) == 3
    data.reset_labels()
    assert data.label(1) == UNASSIGNED


def test_vectors_are_immutable(data):
    with pytest.raises(ValueError):
        data.input_vector(0)[0] = 5.0
    with pytest.raises(ValueError):
        data.inputs[0, 0] = 5.0
    # The labels property is a copy.
    data.labels[0] = 1
    assert data.label(0) == UNASSIGNED


def test_wrong_dimension_and_index(data):
    with pytest.raises(DataSet.WrongDimension):
        data.add_point([1.0, 2.0, 3.0])
    with pytest.raises(DataSet.WrongDimension):
        DataSet.from_array([1.0, 2.0])
    with pytest.raises(IndexError):
        data.input_vector(4)
    with pytest.raises(IndexError):
        data.label(-1)


def test_borrow_labels_is_exclusive(data):
    with data.borrow_labels() as labels:
        labels[:] = [0, 0, 1, 1]
        with pytest.raises(DataSet.LabelsBusy):
            with data.borrow_labels():
                pass
        with pytest.raises(DataSet.LabelsBusy):
            data.set_label(0, 1)
        with pytest.raises(DataSet.LabelsBusy):
            data.add_point([1.0, 1.0])
    # Released after the block, and writes went through.
    assert data.labels.tolist() == [0, 0, 1, 1]
    data.set_label(0, 1)
    assert data.label(0) == 1


def test_borrow_released_on_error(data):
    with pytest.raises(RuntimeError):
        with data.borrow_labels():
            raise RuntimeError("boom")
    with data.borrow_labels() as labels:
        assert len(labels) == 4


def test_subset_range_and_counts(data):
    data.set_label(0, 0)
    data.set_label(3, 1)
    sub = data.subset([3, 0])
    assert sub.size == 2
    assert sub.input_vector(0).tolist() == [10.0, 1.0]
    assert sub.labels.tolist() == [1, 0]
    assert data.input_range() == [(0.0, 10.0), (0.0, 1.0)]
    assert data.class_counts(2).tolist() == [1, 1]
    assert DataSet(3).inputs.shape == (0, 3)


def test_random_index_set(data):
    # Fisher-Yates with j = 0 at every step rotates the first element to the back.
    order = data.random_index_set(ReplaySource(integers=[0, 0, 0]))
    assert sorted(order) == [0, 1, 2, 3]
    assert order == [1, 2, 3, 0]


def test_from_array_label_count_must_match():
    with pytest.raises(ValueError):
        DataSet.from_array([[0.0], [1.0], [2.0]], labels=[0])
    data = DataSet.from_array([[0.0], [1.0], [2.0]], labels=[0, 1, 0])
    assert data.size == 3
    assert data.labels.tolist() == [0, 1, 0]


def test_zero_dimension_is_rejected():
    with pytest.raises(DataSet.WrongDimension):
        DataSet.from_array([[]])
    with pytest.raises(DataSet.WrongDimension):
        DataSet(0)
