import numpy as np
import pytest

from gpsearch.surrogate import GaussianProcessSurrogate, pad_vectors, rbf_kernel


@pytest.fixture
def training_data():
    """Three well-separated 1-D observations."""
    X = [[0.0], [3.0], [6.0]]
    y = [1.0, -0.5, 2.0]
    return X, y


def test_kernel_is_symmetric_with_unit_diagonal():
    """
    Tests that kernel(A, A) is symmetric and has ones on the diagonal.
    """
    rng = np.random.RandomState(0)
    A = rng.uniform(-3, 3, size=(6, 4))
    K = rbf_kernel(A, A)

    assert K.shape == (6, 6)
    np.testing.assert_allclose(K, K.T)
    np.testing.assert_array_equal(np.diag(K), np.ones(6))


def test_kernel_value_and_length_scale():
    """
    Tests the squared-exponential formula for a known distance.
    """
    assert rbf_kernel([[0.0]], [[2.0]])[0, 0] == pytest.approx(np.exp(-2.0))
    assert rbf_kernel([[0.0]], [[2.0]], length_scale=2.0)[0, 0] == pytest.approx(np.exp(-0.5))


def test_kernel_zero_pads_unequal_vectors():
    """
    Tests that shorter vectors are padded with zeros before differencing.
    """
    assert rbf_kernel([[1.0]], [[1.0, 0.0]])[0, 0] == pytest.approx(1.0)
    assert rbf_kernel([[1.0, 2.0]], [[1.0]])[0, 0] == pytest.approx(np.exp(-2.0))


def test_kernel_with_empty_input():
    """
    Tests that an empty side gives an empty matrix of the right shape.
    """
    assert rbf_kernel([], [[1.0], [2.0], [3.0]]).shape == (0, 3)
    assert rbf_kernel([[1.0]], []).shape == (1, 0)


def test_pad_vectors():
    padded = pad_vectors([[1.0], [2.0, 3.0]], 3)
    np.testing.assert_array_equal(padded, [[1.0, 0.0, 0.0], [2.0, 3.0, 0.0]])


def test_predict_before_fit_is_uninformative():
    """
    Tests that a never-fit model returns mean 0 and std 1 for any query.
    """
    model = GaussianProcessSurrogate()
    mean, std = model.predict([[0.0], [123.0, 4.0], [-7.5]])

    np.testing.assert_array_equal(mean, np.zeros(3))
    np.testing.assert_array_equal(std, np.ones(3))
    assert not model.is_fitted


def test_fit_interpolates_training_points(training_data):
    """
    Tests that the GP reproduces its own well-separated training targets.
    """
    X, y = training_data
    model = GaussianProcessSurrogate().fit(X, y)
    mean, std = model.predict(X)

    assert not model.degraded
    np.testing.assert_allclose(mean, y, atol=1e-3)
    assert np.all(std < 1e-2)


def test_uncertainty_grows_away_from_data(training_data):
    """
    Tests that the posterior std is larger far from the observations.
    """
    X, y = training_data
    model = GaussianProcessSurrogate().fit(X, y)
    _, std = model.predict([[3.0], [4.5], [20.0]])

    assert std[0] < std[1] < std[2]
    assert std[2] == pytest.approx(1.0, abs=1e-6)


def test_empty_fit_keeps_previous_state(training_data):
    """
    Tests that fitting on empty data is a no-op.
    """
    X, y = training_data
    model = GaussianProcessSurrogate().fit(X, y)
    alpha = model.alpha.copy()

    model.fit([], [])
    model.fit(X, [])

    assert len(model.X) == 3
    np.testing.assert_array_equal(model.alpha, alpha)

    fresh = GaussianProcessSurrogate().fit([], [])
    assert not fresh.is_fitted


def test_duplicate_points_with_jitter_do_not_crash():
    """
    Tests that exact duplicate inputs are absorbed by the diagonal jitter.
    """
    model = GaussianProcessSurrogate()
    model.fit([[1.0], [1.0], [2.0]], [0.5, 0.7, 0.0])
    mean, std = model.predict([[1.0]])

    assert np.all(np.isfinite(mean)) and np.all(np.isfinite(std))
    assert mean[0] == pytest.approx(0.6, abs=1e-3)


def test_duplicate_points_without_jitter_fall_back_to_identity():
    """
    Tests the degraded state when the kernel matrix cannot be factorized.
    """
    model = GaussianProcessSurrogate(noise=0.0)
    y = [0.5, 0.7, 0.0]
    model.fit([[1.0], [1.0], [4.0]], y)

    assert model.degraded
    np.testing.assert_array_equal(model.L, np.eye(3))
    np.testing.assert_array_equal(model.alpha, y)

    mean, std = model.predict([[1.0], [10.0]])
    assert np.all(np.isfinite(mean))
    assert np.all(std >= np.sqrt(model.variance_floor))


def test_refit_replaces_degraded_state():
    """
    Tests that every fit starts from scratch.
    """
    model = GaussianProcessSurrogate(noise=0.0)
    model.fit([[1.0], [1.0]], [0.0, 1.0])
    assert model.degraded

    model.fit([[0.0], [5.0]], [0.0, 1.0])
    assert not model.degraded
    assert len(model.X) == 2


def test_variance_is_floored():
    """
    Tests that the returned std never drops below sqrt(variance_floor).
    """
    model = GaussianProcessSurrogate(noise=0.0, variance_floor=1e-4)
    model.fit([[0.0], [5.0]], [0.0, 1.0])
    _, std = model.predict([[0.0]])

    assert std[0] >= 1e-2 - 1e-12


def test_fit_drops_non_finite_targets():
    """
    Tests that NaN/inf targets are left out of the fit rather than raising.
    """
    model = GaussianProcessSurrogate()
    model.fit([[0.0], [3.0], [6.0]], [1.0, float("nan"), float("inf")])

    assert len(model.X) == 1
    np.testing.assert_array_equal(model.y, [1.0])
    mean, _ = model.predict([[0.0]])
    assert mean[0] == pytest.approx(1.0, abs=1e-3)

    model.fit([[1.0]], [float("nan")])
    assert len(model.X) == 1
