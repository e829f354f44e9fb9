"""
Value-only distance and similarity metrics.

Each function takes two equal-length vectors (plus optional metric
parameters) and returns a single float. Inputs are validated and
coerced to float64; divisions, logarithms and square roots go through
the kernel primitives so degenerate inputs (zero vectors, zero
denominators) return the documented stabilized value instead of
NaN or Inf.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import scipy.linalg
from numpy.typing import ArrayLike, NDArray

from ..core.exceptions import DimensionMismatchError, ValidationError
from ..utils.validation import (
    as_vector,
    validate_pair,
    validate_weights,
    validate_matrix,
    validate_p,
)
from .kernel import safe_div, safe_log, clamped_sqrt


# Type aliases
Vector = NDArray[np.floating]


# =============================================================================
# EUCLIDEAN FAMILY
# =============================================================================

def euclidean(a: ArrayLike, b: ArrayLike) -> float:
    """
    Compute Euclidean (L2) distance between two vectors.

    Formula: sqrt(sum((a_i - b_i)^2))

    Args:
        a: First vector
        b: Second vector

    Returns:
        Euclidean distance (>= 0, smaller = more similar)

    Example:
        >>> euclidean([0.0, 0.0], [3.0, 4.0])
        5.0
    """
    x, y = validate_pair(a, b)
    diff = x - y
    return clamped_sqrt(np.dot(diff, diff))


def euclidean_squared(a: ArrayLike, b: ArrayLike) -> float:
    """
    Compute squared Euclidean distance between two vectors.

    Maintains the same ordering as Euclidean distance without the sqrt.

    Example:
        >>> euclidean_squared([0.0, 0.0], [3.0, 4.0])
        25.0
    """
    x, y = validate_pair(a, b)
    diff = x - y
    return float(np.dot(diff, diff))


def standardised_euclidean(
    a: ArrayLike,
    b: ArrayLike,
    sigma: Optional[ArrayLike] = None,
) -> float:
    """
    Compute Euclidean distance with per-dimension variances.

    Formula: sqrt(sum((a_i - b_i)^2 / sigma_i))

    A zero variance contributes nothing to the sum.

    Args:
        a: First vector
        b: Second vector
        sigma: Per-dimension variances (default: all ones)

    Returns:
        Standardised Euclidean distance
    """
    x, y = validate_pair(a, b)
    s = validate_weights(sigma, x.shape[0], "sigma")
    diff = x - y
    return clamped_sqrt(np.sum(safe_div(diff * diff, s)))


# =============================================================================
# L1 / L-INFINITY / MINKOWSKI
# =============================================================================

def manhattan(a: ArrayLike, b: ArrayLike) -> float:
    """
    Compute Manhattan (L1) distance between two vectors.

    Also known as taxicab distance or city block distance.

    Formula: sum(|a_i - b_i|)

    Example:
        >>> manhattan([1.0, 2.0, 3.0], [4.0, 6.0, 3.0])
        7.0
    """
    x, y = validate_pair(a, b)
    return float(np.sum(np.abs(x - y)))


def chebyshev(a: ArrayLike, b: ArrayLike) -> float:
    """
    Compute Chebyshev (L∞) distance between two vectors.

    Formula: max(|a_i - b_i|)

    Example:
        >>> chebyshev([0.0, 0.0], [3.0, 4.0])
        4.0
    """
    x, y = validate_pair(a, b)
    return float(np.max(np.abs(x - y)))


def minkowski(a: ArrayLike, b: ArrayLike, p: float = 2.0) -> float:
    """
    Compute Minkowski distance between two vectors.

    Generalization of Euclidean (p=2) and Manhattan (p=1) distances.

    Formula: (sum(|a_i - b_i|^p))^(1/p)

    Args:
        a: First vector
        b: Second vector
        p: Order of the norm (p >= 1)

    Returns:
        Minkowski distance (>= 0, smaller = more similar)

    Raises:
        ValidationError: If p < 1

    Example:
        >>> minkowski([0.0, 0.0], [3.0, 4.0], p=2)  # Same as Euclidean
        5.0
    """
    x, y = validate_pair(a, b)
    p = validate_p(p)
    total = np.sum(np.power(np.abs(x - y), p))
    return float(np.power(total, 1.0 / p))


def weighted_minkowski(
    a: ArrayLike,
    b: ArrayLike,
    w: Optional[ArrayLike] = None,
    p: float = 2.0,
) -> float:
    """
    Compute weighted Minkowski distance.

    Formula: (sum(w_i^p * |a_i - b_i|^p))^(1/p)

    Args:
        a: First vector
        b: Second vector
        w: Non-negative per-dimension weights (default: all ones)
        p: Order of the norm (p >= 1)
    """
    x, y = validate_pair(a, b)
    p = validate_p(p)
    weights = validate_weights(w, x.shape[0])
    total = np.sum(np.power(weights, p) * np.power(np.abs(x - y), p))
    return float(np.power(total, 1.0 / p))


# =============================================================================
# MAHALANOBIS
# =============================================================================

def mahalanobis(
    a: ArrayLike,
    b: ArrayLike,
    vinv: Optional[ArrayLike] = None,
) -> float:
    """
    Compute Mahalanobis distance.

    Formula: sqrt((a - b)^T * VI * (a - b))

    Args:
        a: First vector
        b: Second vector
        vinv: Inverse covariance matrix of shape (n, n) (default: identity)

    Returns:
        Mahalanobis distance. A negative quadratic form (VI not positive
        semi-definite) is clamped to 0.

    Raises:
        DimensionMismatchError: If vinv is not (n, n)
    """
    x, y = validate_pair(a, b)
    matrix = validate_matrix(vinv, x.shape[0])
    diff = x - y
    return clamped_sqrt(diff @ matrix @ diff)


def inverse_covariance(samples: ArrayLike) -> NDArray[np.float64]:
    """
    Estimate the inverse covariance matrix from samples.

    Uses the pseudo-inverse so singular covariances (e.g. constant
    features) still produce a usable matrix.

    Args:
        samples: Array of shape (m, n), one observation per row

    Returns:
        Inverse covariance matrix of shape (n, n)
    """
    data = np.asarray(samples, dtype=np.float64)
    if data.ndim != 2 or data.shape[0] < 2:
        raise ValidationError(
            f"samples must be a 2-D array with at least 2 rows, got shape {data.shape}"
        )

    cov = np.atleast_2d(np.cov(data, rowvar=False))
    return scipy.linalg.pinvh(cov)


# =============================================================================
# ANGULAR
# =============================================================================

def cosine_similarity(a: ArrayLike, b: ArrayLike) -> float:
    """
    Compute cosine similarity between two vectors.

    Formula: (a · b) / (||a|| * ||b||)

    Returns 0 when either vector is zero.

    Example:
        >>> cosine_similarity([1.0, 0.0], [1.0, 0.0])
        1.0
    """
    x, y = validate_pair(a, b)
    norm_a = clamped_sqrt(np.dot(x, x))
    norm_b = clamped_sqrt(np.dot(y, y))
    return safe_div(np.dot(x, y), norm_a * norm_b)


def cosine(a: ArrayLike, b: ArrayLike) -> float:
    """
    Compute cosine distance between two vectors.

    Formula: 1 - (a · b) / (||a|| * ||b||)

    If either vector is zero the ratio is stabilized to 0, so the
    distance is 1 (maximal dissimilarity for a non-negative space).

    Args:
        a: First vector
        b: Second vector

    Returns:
        Cosine distance in range [0, 2] (smaller = more similar)

    Example:
        >>> cosine([1.0, 0.0], [0.0, 1.0])
        1.0
        >>> cosine([0.0, 0.0, 0.0], [1.0, 2.0, 3.0])
        1.0
    """
    return 1.0 - cosine_similarity(a, b)


def correlation(a: ArrayLike, b: ArrayLike) -> float:
    """
    Compute correlation distance (1 - Pearson correlation).

    Cosine distance between the mean-centred vectors; a constant vector
    has a zero centred norm and yields distance 1.
    """
    x, y = validate_pair(a, b)
    return cosine(x - np.mean(x), y - np.mean(y))


# =============================================================================
# DISTRIBUTIONAL
# =============================================================================

def hellinger(a: ArrayLike, b: ArrayLike) -> float:
    """
    Compute Hellinger distance between two non-negative vectors.

    Formula: sqrt(sum((sqrt(a_i) - sqrt(b_i))^2)) / sqrt(2)

    For probability vectors this lies in [0, 1]. Negative entries
    are treated as zero.
    """
    x, y = validate_pair(a, b)
    diff = clamped_sqrt(x) - clamped_sqrt(y)
    return float(clamped_sqrt(np.dot(diff, diff)) / np.sqrt(2.0))


def bray_curtis(a: ArrayLike, b: ArrayLike) -> float:
    """
    Compute Bray-Curtis dissimilarity.

    Formula: sum(|a_i - b_i|) / sum(|a_i + b_i|)

    Returns 0 when the denominator vanishes.

    Example:
        >>> bray_curtis([1.0, 2.0, 3.0], [4.0, 5.0, 6.0])
        0.42857142857142855
    """
    x, y = validate_pair(a, b)
    return safe_div(np.sum(np.abs(x - y)), np.sum(np.abs(x + y)))


def canberra(a: ArrayLike, b: ArrayLike) -> float:
    """
    Compute Canberra distance.

    Formula: sum(|a_i - b_i| / (|a_i| + |b_i|))

    Terms where both coordinates are zero contribute 0.
    """
    x, y = validate_pair(a, b)
    return float(np.sum(safe_div(np.abs(x - y), np.abs(x) + np.abs(y))))


def symmetric_kl(a: ArrayLike, b: ArrayLike, z: float = 1e-11) -> float:
    """
    Compute the symmetrised Kullback-Leibler divergence.

    Both inputs are shifted by z and normalised to sum to 1:

        D(p, q) = (KL(p || q) + KL(q || p)) / 2
                = sum((p_i - q_i) * (log p_i - log q_i)) / 2

    Args:
        a: First non-negative vector
        b: Second non-negative vector
        z: Pseudo-count added to every entry before normalising

    Raises:
        ValidationError: If either vector has negative entries
    """
    p, q = _normalise_distributions(a, b, z)
    return float(np.sum((p - q) * (safe_log(p) - safe_log(q)))) / 2.0


def _normalise_distributions(a: ArrayLike, b: ArrayLike, z: float):
    x, y = validate_pair(a, b)
    if np.any(x < 0) or np.any(y < 0):
        raise ValidationError("symmetric_kl requires non-negative vectors")

    x = x + z
    y = y + z
    return safe_div(x, np.sum(x)), safe_div(y, np.sum(y))


# =============================================================================
# GEOGRAPHIC
# =============================================================================

def haversine(a: ArrayLike, b: ArrayLike) -> float:
    """
    Compute great-circle distance on the unit sphere.

    Inputs are (latitude, longitude) pairs in radians. Multiply the result
    by the sphere radius to get a physical distance.

    Formula:
        h = sin^2(dlat / 2) + cos(lat_a) * cos(lat_b) * sin^2(dlon / 2)
        d = 2 * arcsin(sqrt(h))

    Raises:
        DimensionMismatchError: If either input is not of length 2

    Example:
        >>> round(haversine([0.0, 0.0], [0.0, np.pi / 2]), 6)
        1.570796
    """
    x, y = _validate_coordinates(a, b)
    h = _haversine_term(x, y)
    return 2.0 * float(np.arcsin(clamped_sqrt(min(h, 1.0))))


def _validate_coordinates(a: ArrayLike, b: ArrayLike):
    x = as_vector(a, "a")
    y = as_vector(b, "b")
    if x.shape[0] != 2 or y.shape[0] != 2:
        raise DimensionMismatchError(
            "haversine is only defined for 2 dimensional data"
        )
    return x, y


def _haversine_term(x: Vector, y: Vector) -> float:
    sin_lat = np.sin(0.5 * (x[0] - y[0]))
    sin_lon = np.sin(0.5 * (x[1] - y[1]))
    return float(sin_lat ** 2 + np.cos(x[0]) * np.cos(y[0]) * sin_lon ** 2)
