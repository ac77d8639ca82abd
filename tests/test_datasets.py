import numpy as np
import pytest

from visionlab.datasets import Dataset, DatasetNotSetupError, TwoDimensionDataset

MEANS = [[1.0, 1.0], [1.0, 20.0], [20.0, 1.0], [20.0, 20.0]]
COV = np.eye(2)


@pytest.fixture
def dataset():
    ds = TwoDimensionDataset(100, 4)
    ds.setup(MEANS, COV)
    return ds


def test_load_before_setup_raises():
    with pytest.raises(DatasetNotSetupError):
        Dataset(10, 2).load(80)


def test_two_dimension_load_before_setup_raises():
    with pytest.raises(DatasetNotSetupError):
        TwoDimensionDataset(10, 2).load(80, shuffle=False)


def test_setup_marks_dataset(dataset):
    assert dataset.is_setup
    assert dataset.x.shape == (100, 2)
    assert dataset.y.shape == (100,)


def test_default_caching_flags():
    assert Dataset(4, 2).is_cached is True
    assert TwoDimensionDataset(4, 2).is_cached is False


def test_labels_in_blocks(dataset):
    expected = np.repeat(np.arange(4), 25)
    assert np.array_equal(dataset.y, expected)


def test_clusters_near_their_means(dataset):
    for label, centre in enumerate(MEANS):
        points = dataset.x[dataset.y == label]
        assert np.allclose(points.mean(axis=0), centre, atol=1.0)


def test_one_hot_split_shapes(dataset):
    x_train, y_train, x_test, y_test = dataset.load(80, shuffle=False)
    assert x_train.shape == (80, 2)
    assert x_test.shape == (20, 2)
    assert y_train.shape == (80, 4)
    assert y_test.shape == (20, 4)
    assert np.array_equal(y_train.sum(axis=1), np.ones(80))
    assert np.array_equal(y_test.sum(axis=1), np.ones(20))


def test_unshuffled_split_keeps_order(dataset):
    x_train, y_train, x_test, y_test = dataset.load(80, shuffle=False, one_hot=False)
    assert np.array_equal(np.concatenate([x_train, x_test]), dataset.x)
    assert np.array_equal(np.concatenate([y_train, y_test]), dataset.y)


def test_one_hot_matches_labels(dataset):
    _, y_train, _, y_test = dataset.load(60, shuffle=False)
    labels = np.concatenate([y_train, y_test]).argmax(axis=1)
    assert np.array_equal(labels, dataset.y.astype(int))


def test_shuffle_keeps_pairs(dataset):
    x_train, y_train, x_test, y_test = dataset.load(70, shuffle=True, one_hot=False)
    original = {tuple(row): label for row, label in zip(dataset.x, dataset.y)}
    features = np.concatenate([x_train, x_test])
    labels = np.concatenate([y_train, y_test])
    assert len(features) == 100
    for row, label in zip(features, labels):
        assert original[tuple(row)] == label
    assert sorted(map(tuple, features)) == sorted(original)


def test_trailing_samples_stay_zero_when_uneven():
    ds = TwoDimensionDataset(10, 4)
    ds.setup(MEANS, COV)
    assert np.array_equal(ds.x[8:], np.zeros((2, 2)))
    assert np.array_equal(ds.y[8:], np.zeros(2))


@pytest.mark.parametrize("percent", [-1, 101])
def test_percent_out_of_range_raises(dataset, percent):
    with pytest.raises(ValueError):
        dataset.load(percent)


def test_mean_shape_mismatch_raises():
    ds = TwoDimensionDataset(20, 4)
    with pytest.raises(ValueError):
        ds.setup([[0.0, 0.0]], COV)
    assert not ds.is_setup