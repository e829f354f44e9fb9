"""
Unit tests for analytic gradients.

Every gradient metric is compared against a central finite difference
of its own distance, at generic points and at points close to the
degenerate configurations the stabilization handles.
"""

import pytest
import numpy as np
from numpy.testing import assert_almost_equal, assert_array_almost_equal

from vectordist.distance import (
    euclidean, euclidean_grad,
    standardised_euclidean, standardised_euclidean_grad,
    manhattan, manhattan_grad,
    chebyshev, chebyshev_grad,
    minkowski, minkowski_grad,
    weighted_minkowski, weighted_minkowski_grad,
    mahalanobis, mahalanobis_grad,
    cosine, cosine_grad,
    correlation, correlation_grad,
    hellinger, hellinger_grad,
    bray_curtis, bray_curtis_grad,
    canberra, canberra_grad,
    symmetric_kl, symmetric_kl_grad,
    haversine, haversine_grad,
)
from vectordist.utils import check_gradient


class TestGradientsMatchFiniteDifferences:
    """Analytic gradients agree with numerical differentiation."""

    def test_euclidean(self, random_pair):
        a, b = random_pair
        assert check_gradient(euclidean_grad, a, b, value_fn=euclidean)

    def test_standardised_euclidean(self, random_pair, rng):
        a, b = random_pair
        sigma = rng.uniform(0.5, 2.0, size=a.shape[0])
        assert check_gradient(
            standardised_euclidean_grad, a, b,
            value_fn=standardised_euclidean, sigma=sigma,
        )

    def test_manhattan(self, random_pair):
        a, b = random_pair
        assert check_gradient(manhattan_grad, a, b, value_fn=manhattan)

    def test_chebyshev(self, random_pair):
        a, b = random_pair
        assert check_gradient(chebyshev_grad, a, b, value_fn=chebyshev)

    @pytest.mark.parametrize("p", [1.5, 2.0, 3.0, 4.5])
    def test_minkowski(self, random_pair, p):
        a, b = random_pair
        assert check_gradient(minkowski_grad, a, b, value_fn=minkowski, p=p)

    @pytest.mark.parametrize("p", [1.5, 2.0, 3.0])
    def test_weighted_minkowski(self, random_pair, rng, p):
        a, b = random_pair
        w = rng.uniform(0.2, 2.0, size=a.shape[0])
        assert check_gradient(
            weighted_minkowski_grad, a, b,
            value_fn=weighted_minkowski, w=w, p=p,
        )

    def test_mahalanobis(self, random_pair, spd_matrix):
        a, b = random_pair
        assert check_gradient(
            mahalanobis_grad, a, b, value_fn=mahalanobis, vinv=spd_matrix
        )

    def test_mahalanobis_non_symmetric(self, random_pair, spd_matrix, rng):
        a, b = random_pair
        skew = rng.normal(size=spd_matrix.shape)
        vinv = spd_matrix + 0.5 * (skew - skew.T)
        assert check_gradient(mahalanobis_grad, a, b, value_fn=mahalanobis, vinv=vinv)

    def test_cosine(self, random_pair):
        a, b = random_pair
        assert check_gradient(cosine_grad, a, b, value_fn=cosine)

    def test_correlation(self, random_pair):
        a, b = random_pair
        assert check_gradient(correlation_grad, a, b, value_fn=correlation)

    def test_hellinger(self, positive_pair):
        a, b = positive_pair
        assert check_gradient(hellinger_grad, a, b, value_fn=hellinger)

    def test_bray_curtis(self, positive_pair):
        a, b = positive_pair
        assert check_gradient(bray_curtis_grad, a, b, value_fn=bray_curtis)

    def test_bray_curtis_mixed_signs(self, random_pair):
        a, b = random_pair
        assert check_gradient(bray_curtis_grad, a, b, value_fn=bray_curtis)

    def test_canberra(self, random_pair):
        a, b = random_pair
        assert check_gradient(canberra_grad, a, b, value_fn=canberra)

    def test_symmetric_kl(self, positive_pair):
        a, b = positive_pair
        assert check_gradient(symmetric_kl_grad, a, b, value_fn=symmetric_kl)

    def test_haversine(self, rng):
        a = rng.uniform(-1.0, 1.0, size=2)
        b = rng.uniform(-1.0, 1.0, size=2)
        assert check_gradient(haversine_grad, a, b, value_fn=haversine)


class TestGradientsNearDegenerate:
    """Gradients stay accurate close to the stabilized configurations."""

    def test_euclidean_close_points(self, rng):
        b = rng.normal(size=5)
        a = b + 1e-3 * rng.normal(size=5)
        assert check_gradient(euclidean_grad, a, b)

    def test_cosine_short_vector(self, rng):
        a = 1e-3 * rng.normal(size=5)
        b = rng.normal(size=5)
        assert check_gradient(cosine_grad, a, b, eps=1e-9)

    def test_cosine_nearly_parallel(self, rng):
        b = rng.normal(size=5)
        a = 2.0 * b + 1e-2 * rng.normal(size=5)
        assert check_gradient(cosine_grad, a, b)

    def test_hellinger_small_entries(self):
        a = np.array([0.01, 0.5, 0.49])
        b = np.array([0.3, 0.3, 0.4])
        assert check_gradient(hellinger_grad, a, b, eps=1e-8)

    def test_haversine_close_points(self):
        a = np.array([0.5, 0.5])
        b = np.array([0.5 + 1e-3, 0.5 - 1e-3])
        assert check_gradient(haversine_grad, a, b, eps=1e-8)

    def test_minkowski_close_points(self, rng):
        b = rng.normal(size=5)
        a = b + 1e-2 * rng.normal(size=5)
        assert check_gradient(minkowski_grad, a, b, p=3.0)


class TestDegenerateInputs:
    """Degenerate inputs produce the stabilized distance and gradient."""

    @pytest.mark.parametrize("grad_fn", [
        euclidean_grad,
        standardised_euclidean_grad,
        manhattan_grad,
        chebyshev_grad,
        minkowski_grad,
        weighted_minkowski_grad,
        mahalanobis_grad,
        hellinger_grad,
        canberra_grad,
    ])
    def test_coincident_points(self, grad_fn):
        a = np.array([0.3, 1.2, 2.0])
        dist, grad = grad_fn(a, a.copy())
        assert dist == 0.0
        assert_array_almost_equal(grad, np.zeros(3))
        assert np.all(np.isfinite(grad))

    def test_minkowski_p1_coincident(self):
        dist, grad = minkowski_grad([1.0, 2.0], [1.0, 2.0], p=1)
        assert dist == 0.0
        assert_array_almost_equal(grad, [0.0, 0.0])

    def test_cosine_zero_vector(self):
        dist, grad = cosine_grad([0.0, 0.0, 0.0], [1.0, 2.0, 3.0])
        assert dist == 1.0
        assert_array_almost_equal(grad, [0.0, 0.0, 0.0])

    def test_cosine_zero_target(self):
        dist, grad = cosine_grad([1.0, 2.0, 3.0], [0.0, 0.0, 0.0])
        assert dist == 1.0
        assert_array_almost_equal(grad, [0.0, 0.0, 0.0])

    def test_correlation_constant_vector(self):
        dist, grad = correlation_grad([2.0, 2.0, 2.0], [1.0, 2.0, 3.0])
        assert dist == 1.0
        assert_array_almost_equal(grad, [0.0, 0.0, 0.0])

    def test_chebyshev_tie_takes_lowest_index(self):
        dist, grad = chebyshev_grad([0.0, 0.0], [1.0, 1.0])
        assert dist == 1.0
        assert_array_almost_equal(grad, [-1.0, 0.0])

    def test_manhattan_zero_coordinate(self):
        dist, grad = manhattan_grad([1.0, 2.0, 3.0], [0.0, 2.0, 5.0])
        assert_almost_equal(dist, 3.0)
        assert_array_almost_equal(grad, [1.0, 0.0, -1.0])

    def test_bray_curtis_zero_denominator(self):
        dist, grad = bray_curtis_grad([0.0, 0.0], [0.0, 0.0])
        assert dist == 0.0
        assert_array_almost_equal(grad, [0.0, 0.0])

    def test_canberra_both_zero_coordinate(self):
        dist, grad = canberra_grad([0.0, 1.0], [0.0, 3.0])
        assert_almost_equal(dist, 0.5)
        assert grad[0] == 0.0
        # d/da of (3 - a) / (a + 3) at a = 1 is -6 / 16
        assert_almost_equal(grad[1], -6.0 / 16.0)

    def test_hellinger_zero_entry(self):
        dist, grad = hellinger_grad([0.0, 1.0], [0.5, 0.5])
        assert np.isfinite(dist)
        assert grad[0] == 0.0
        assert np.all(np.isfinite(grad))

    def test_haversine_coincident(self):
        dist, grad = haversine_grad([0.4, 0.1], [0.4, 0.1])
        assert dist == 0.0
        assert_array_almost_equal(grad, [0.0, 0.0])

    def test_haversine_antipodal(self):
        dist, grad = haversine_grad([0.0, 0.0], [0.0, np.pi])
        assert_almost_equal(dist, np.pi)
        assert np.all(np.isfinite(grad))

    def test_symmetric_kl_identical(self):
        dist, grad = symmetric_kl_grad([1.0, 2.0, 3.0], [1.0, 2.0, 3.0])
        assert_almost_equal(dist, 0.0)
        assert_array_almost_equal(grad, [0.0, 0.0, 0.0])


class TestKnownGradients:
    """Closed-form gradient values."""

    def test_euclidean(self):
        dist, grad = euclidean_grad([0.0, 0.0], [3.0, 4.0])
        assert_almost_equal(dist, 5.0)
        assert_array_almost_equal(grad, [-0.6, -0.8])

    def test_euclidean_gradient_is_unit(self, random_pair):
        a, b = random_pair
        _, grad = euclidean_grad(a, b)
        assert_almost_equal(np.linalg.norm(grad), 1.0)

    def test_minkowski_p2_matches_euclidean(self, random_pair):
        a, b = random_pair
        d1, g1 = minkowski_grad(a, b, p=2)
        d2, g2 = euclidean_grad(a, b)
        assert_almost_equal(d1, d2)
        assert_array_almost_equal(g1, g2)

    def test_minkowski_p1_matches_manhattan(self, random_pair):
        a, b = random_pair
        d1, g1 = minkowski_grad(a, b, p=1)
        d2, g2 = manhattan_grad(a, b)
        assert_almost_equal(d1, d2)
        assert_array_almost_equal(g1, g2)

    def test_cosine_points_towards_target(self):
        # Moving a toward b decreases the distance
        _, grad = cosine_grad([1.0, 0.0], [0.0, 1.0])
        assert grad[1] < 0
        assert_almost_equal(grad[0], 0.0)

    def test_cosine_gradient_orthogonal_to_a(self, random_pair):
        """Cosine distance is scale invariant in a."""
        a, b = random_pair
        _, grad = cosine_grad(a, b)
        assert_almost_equal(np.dot(grad, a), 0.0)

    def test_symmetric_kl_gradient_orthogonal_to_a(self, positive_pair):
        """Scaling a does not change the normalised distribution."""
        a, b = positive_pair
        _, grad = symmetric_kl_grad(a, b, z=0.0)
        assert_almost_equal(np.dot(grad, a), 0.0)


class TestGradientOutputs:
    """Returned gradients are fresh arrays and inputs are untouched."""

    @pytest.mark.parametrize("grad_fn", [
        euclidean_grad,
        manhattan_grad,
        chebyshev_grad,
        minkowski_grad,
        cosine_grad,
        correlation_grad,
        canberra_grad,
        bray_curtis_grad,
    ])
    def test_inputs_not_mutated(self, grad_fn, random_pair):
        a, b = random_pair
        a_copy, b_copy = a.copy(), b.copy()
        _, grad = grad_fn(a, b)
        np.testing.assert_array_equal(a, a_copy)
        np.testing.assert_array_equal(b, b_copy)
        assert grad.shape == a.shape
        assert not np.shares_memory(grad, a)
        assert not np.shares_memory(grad, b)

    def test_gradient_dtype(self):
        _, grad = euclidean_grad([0, 0], [3, 4])
        assert grad.dtype == np.float64

    def test_distance_is_float(self, random_pair):
        a, b = random_pair
        dist, _ = cosine_grad(a, b)
        assert isinstance(dist, float)


class TestTinyMagnitudeInputs:
    """Gradients stay consistent with the distance for very small inputs."""

    def test_cosine_scale_invariant(self):
        a = np.array([1.0, 2.0, -1.0])
        b = np.array([1.0, 0.5, 1.0])
        dist, grad = cosine_grad(a, b)
        tiny_dist, tiny_grad = cosine_grad(1e-110 * a, b)

        assert_almost_equal(tiny_dist, dist)
        # d/da of a scale-invariant distance scales as 1 / scale
        np.testing.assert_allclose(tiny_grad * 1e-110, grad, rtol=1e-10)

    def test_canberra_tiny_coordinates(self):
        dist, grad = canberra_grad([1e-170], [3e-170])

        assert_almost_equal(dist, 0.5)
        np.testing.assert_allclose(grad * 1e-170, [-0.375], rtol=1e-12)

    def test_canberra_matches_unit_scale(self):
        a = np.array([1.0, -2.0, 0.5])
        b = np.array([3.0, 1.0, 0.25])
        _, grad = canberra_grad(a, b)
        _, tiny_grad = canberra_grad(1e-170 * a, 1e-170 * b)

        np.testing.assert_allclose(tiny_grad * 1e-170, grad, rtol=1e-10)
