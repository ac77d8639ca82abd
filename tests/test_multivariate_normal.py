import numpy as np
import pytest

from visionlab.multivariate_normal import MultivariateNormal


def test_output_shape():
    mvn = MultivariateNormal(seed=1)
    samples = mvn.random(7, [0.0, 0.0, 0.0], np.eye(3))
    assert samples.shape == (7, 3)


def test_same_seed_gives_same_samples():
    a = MultivariateNormal(seed=42).random(5, [1.0, 2.0], np.eye(2))
    b = MultivariateNormal(seed=42).random(5, [1.0, 2.0], np.eye(2))
    assert np.array_equal(a, b)


def test_zero_spread_returns_mean():
    mvn = MultivariateNormal(standard_deviation=0.0)
    samples = mvn.random(3, [1.0, 2.0], np.eye(2))
    assert np.array_equal(samples, np.array([[1.0, 2.0]] * 3))


def test_cholesky_transform_applied():
    mvn = MultivariateNormal(mean=1.0, standard_deviation=0.0)
    samples = mvn.random(2, [0.0, 0.0], [[4.0, 0.0], [0.0, 9.0]])
    assert np.allclose(samples, [[2.0, 3.0], [2.0, 3.0]])


def test_sample_statistics_follow_parameters():
    mean = np.array([3.0, -2.0])
    cov = np.array([[2.0, 0.5], [0.5, 1.0]])
    samples = MultivariateNormal(seed=7).random(20000, mean, cov)
    assert np.allclose(samples.mean(axis=0), mean, atol=0.05)
    assert np.allclose(np.cov(samples, rowvar=False), cov, atol=0.08)


def test_not_positive_definite_raises():
    mvn = MultivariateNormal(seed=0)
    with pytest.raises(ValueError):
        mvn.random(3, [0.0, 0.0], [[1.0, 2.0], [2.0, 1.0]])


def test_covariance_shape_mismatch_raises():
    mvn = MultivariateNormal(seed=0)
    with pytest.raises(ValueError):
        mvn.random(3, [0.0, 0.0, 0.0], np.eye(2))


def test_negative_standard_deviation_raises():
    with pytest.raises(ValueError):
        MultivariateNormal(standard_deviation=-1.0)


@pytest.mark.parametrize("size", [0, 1, 10, 100])
def test_shuffle_indices_is_permutation(size):
    indices = MultivariateNormal(seed=3).shuffle_indices(size)
    assert sorted(indices) == list(range(size))


def test_shuffle_indices_reproducible_with_seed():
    first = list(MultivariateNormal(seed=9).shuffle_indices(50))
    second = list(MultivariateNormal(seed=9).shuffle_indices(50))
    assert sorted(first) == list(range(50))
    assert first == second