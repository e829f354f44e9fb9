"""
Distance functions paired with their analytic gradients.

Every function returns ``(distance, gradient)`` where ``gradient`` is a
freshly allocated array holding d(distance)/d(a), the derivative with
respect to the first vector with the second held fixed.

The gradient is the exact derivative of the value expression that was
evaluated, including the stabilization branch taken by the kernel
primitives. When a denominator vanishes, the affected terms are 0 on
both the value and the gradient side; a gradient is never "smoothed"
with an epsilon that the value does not also carry.

These are hand-derived closed forms intended for per-edge optimization
loops; each pairs one-to-one with the value function of the same name
in ``metrics``.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..utils.validation import (
    validate_pair,
    validate_weights,
    validate_matrix,
    validate_p,
)
from .kernel import safe_div, safe_log, clamped_sqrt, sign
from .metrics import _normalise_distributions, _validate_coordinates


# Type aliases
Gradient = NDArray[np.float64]
DistanceGradient = Tuple[float, Gradient]


# =============================================================================
# EUCLIDEAN FAMILY
# =============================================================================

def euclidean_grad(a: ArrayLike, b: ArrayLike) -> DistanceGradient:
    """
    Euclidean distance and its gradient.

    Gradient: (a_i - b_i) / d, and 0 at coincident points.

    Example:
        >>> d, g = euclidean_grad([0.0, 0.0], [3.0, 4.0])
        >>> d
        5.0
        >>> g
        array([-0.6, -0.8])
    """
    x, y = validate_pair(a, b)
    diff = x - y
    dist = clamped_sqrt(np.dot(diff, diff))
    return dist, safe_div(diff, dist)


def standardised_euclidean_grad(
    a: ArrayLike,
    b: ArrayLike,
    sigma: Optional[ArrayLike] = None,
) -> DistanceGradient:
    """
    Standardised Euclidean distance and its gradient.

    Gradient: (a_i - b_i) / (sigma_i * d). Dimensions with zero variance
    are excluded from the sum and get a zero gradient.
    """
    x, y = validate_pair(a, b)
    s = validate_weights(sigma, x.shape[0], "sigma")
    diff = x - y
    dist = clamped_sqrt(np.sum(safe_div(diff * diff, s)))
    return dist, safe_div(diff, s * dist)


# =============================================================================
# L1 / L-INFINITY / MINKOWSKI
# =============================================================================

def manhattan_grad(a: ArrayLike, b: ArrayLike) -> DistanceGradient:
    """
    Manhattan distance and its subgradient.

    Gradient: sign(a_i - b_i), with 0 where a_i == b_i.
    """
    x, y = validate_pair(a, b)
    diff = x - y
    return float(np.sum(np.abs(diff))), sign(diff)


def chebyshev_grad(a: ArrayLike, b: ArrayLike) -> DistanceGradient:
    """
    Chebyshev distance and its subgradient.

    The gradient is sign(a_k - b_k) at a single coordinate k and 0
    elsewhere. When several coordinates attain the maximum, k is the
    lowest such index. At coincident points the gradient is all zeros.

    Example:
        >>> chebyshev_grad([0.0, 0.0], [1.0, 1.0])
        (1.0, array([-1.,  0.]))
    """
    x, y = validate_pair(a, b)
    diff = x - y
    abs_diff = np.abs(diff)

    # argmax returns the first occurrence of the maximum
    k = int(np.argmax(abs_diff))

    grad = np.zeros_like(diff)
    grad[k] = sign(diff[k])
    return float(abs_diff[k]), grad


def minkowski_grad(
    a: ArrayLike,
    b: ArrayLike,
    p: float = 2.0,
) -> DistanceGradient:
    """
    Minkowski distance and its gradient.

    Gradient: sign(a_i - b_i) * |a_i - b_i|^(p-1) / d^(p-1)

    For p = 1 this is the Manhattan subgradient; for d = 0 the gradient
    is all zeros.

    Args:
        a: First vector
        b: Second vector
        p: Order of the norm (p >= 1)
    """
    x, y = validate_pair(a, b)
    p = validate_p(p)
    diff = x - y
    abs_diff = np.abs(diff)

    dist = float(np.power(np.sum(np.power(abs_diff, p)), 1.0 / p))
    grad = safe_div(
        sign(diff) * np.power(abs_diff, p - 1.0),
        np.power(dist, p - 1.0),
    )
    return dist, grad


def weighted_minkowski_grad(
    a: ArrayLike,
    b: ArrayLike,
    w: Optional[ArrayLike] = None,
    p: float = 2.0,
) -> DistanceGradient:
    """
    Weighted Minkowski distance and its gradient.

    Distance: (sum(w_i^p * |a_i - b_i|^p))^(1/p)
    Gradient: w_i^p * sign(a_i - b_i) * |a_i - b_i|^(p-1) / d^(p-1)
    """
    x, y = validate_pair(a, b)
    p = validate_p(p)
    weights = np.power(validate_weights(w, x.shape[0]), p)
    diff = x - y
    abs_diff = np.abs(diff)

    dist = float(np.power(np.sum(weights * np.power(abs_diff, p)), 1.0 / p))
    grad = safe_div(
        weights * sign(diff) * np.power(abs_diff, p - 1.0),
        np.power(dist, p - 1.0),
    )
    return dist, grad


# =============================================================================
# MAHALANOBIS
# =============================================================================

def mahalanobis_grad(
    a: ArrayLike,
    b: ArrayLike,
    vinv: Optional[ArrayLike] = None,
) -> DistanceGradient:
    """
    Mahalanobis distance and its gradient.

    Gradient: sum_j VI_ij * (a_j - b_j) / d for symmetric VI. A
    non-symmetric VI is differentiated through its symmetric part,
    which is the part the quadratic form actually depends on.
    """
    x, y = validate_pair(a, b)
    matrix = validate_matrix(vinv, x.shape[0])
    diff = x - y

    dist = clamped_sqrt(diff @ matrix @ diff)
    sym = 0.5 * (matrix + matrix.T)
    return dist, safe_div(sym @ diff, dist)


# =============================================================================
# ANGULAR
# =============================================================================

def cosine_grad(a: ArrayLike, b: ArrayLike) -> DistanceGradient:
    """
    Cosine distance and its gradient.

    With s = (a · b) / (||a|| ||b||) and distance 1 - s:

        d(distance)/d(a_i) = (a · b) * a_i / (||a||^3 ||b||) - b_i / (||a|| ||b||)

    If either vector is zero, s is stabilized to 0: the distance is 1
    and the gradient is all zeros.

    Example:
        >>> cosine_grad([0.0, 0.0, 0.0], [1.0, 2.0, 3.0])
        (1.0, array([0., 0., 0.]))
    """
    x, y = validate_pair(a, b)
    dot = np.dot(x, y)
    norm_a = clamped_sqrt(np.dot(x, x))
    norm_b = clamped_sqrt(np.dot(y, y))
    denom = norm_a * norm_b

    sim = safe_div(dot, denom)
    dist = 1.0 - sim
    grad = safe_div(sim * safe_div(x, norm_a) - safe_div(y, norm_b), norm_a)
    return dist, grad


def correlation_grad(a: ArrayLike, b: ArrayLike) -> DistanceGradient:
    """
    Correlation distance and its gradient.

    The cosine gradient of the centred vectors, pulled back through the
    centring map (which subtracts the mean of the gradient).
    """
    x, y = validate_pair(a, b)
    dist, grad = cosine_grad(x - np.mean(x), y - np.mean(y))
    return dist, grad - np.mean(grad)


# =============================================================================
# DISTRIBUTIONAL
# =============================================================================

def hellinger_grad(a: ArrayLike, b: ArrayLike) -> DistanceGradient:
    """
    Hellinger distance and its gradient.

    Distance: H = sqrt(sum((sqrt(a_i) - sqrt(b_i))^2)) / sqrt(2)
    Gradient: (sqrt(a_i) - sqrt(b_i)) / (4 * H * sqrt(a_i))

    The derivative is unbounded as a_i -> 0; coordinates with a_i <= 0
    (where the clamped square root is flat) get a zero gradient.
    """
    x, y = validate_pair(a, b)
    root_a = clamped_sqrt(x)
    diff = root_a - clamped_sqrt(y)

    dist = float(clamped_sqrt(np.dot(diff, diff)) / np.sqrt(2.0))
    return dist, safe_div(diff, 4.0 * dist * root_a)


def bray_curtis_grad(a: ArrayLike, b: ArrayLike) -> DistanceGradient:
    """
    Bray-Curtis dissimilarity and its gradient.

    With N = sum(|a_i - b_i|), S = sum(|a_i + b_i|) and D = N / S:

        dD/da_i = (sign(a_i - b_i) - D * sign(a_i + b_i)) / S

    When S = 0 both D and the gradient are 0.
    """
    x, y = validate_pair(a, b)
    diff = x - y
    total = x + y
    denom = np.sum(np.abs(total))

    dist = safe_div(np.sum(np.abs(diff)), denom)
    grad = safe_div(sign(diff) - dist * sign(total), denom)
    return dist, grad


def canberra_grad(a: ArrayLike, b: ArrayLike) -> DistanceGradient:
    """
    Canberra distance and its gradient.

    Per coordinate, with t_i = |a_i| + |b_i|:

        d/da_i = sign(a_i - b_i) / t_i - |a_i - b_i| * sign(a_i) / t_i^2

    Coordinates with t_i = 0 contribute 0 to both.
    """
    x, y = validate_pair(a, b)
    diff = x - y
    abs_diff = np.abs(diff)
    denom = np.abs(x) + np.abs(y)

    ratio = safe_div(abs_diff, denom)
    dist = float(np.sum(ratio))
    grad = safe_div(sign(diff) - ratio * sign(x), denom)
    return dist, grad


def symmetric_kl_grad(
    a: ArrayLike,
    b: ArrayLike,
    z: float = 1e-11,
) -> DistanceGradient:
    """
    Symmetrised KL divergence and its gradient.

    With p = (a + z) / sum(a + z) and q likewise, the divergence is
    sum((p_i - q_i) * (log p_i - log q_i)) / 2 and

        dD/dp_i = (log(p_i / q_i) + 1 - q_i / p_i) / 2

    which is pulled back through the normalisation:

        dD/da_i = (dD/dp_i - sum_j p_j * dD/dp_j) / sum(a + z)
    """
    p, q = _normalise_distributions(a, b, z)
    total = float(np.sum(np.asarray(a, dtype=np.float64) + z))

    log_ratio = safe_log(p) - safe_log(q)
    dist = float(np.sum((p - q) * log_ratio)) / 2.0

    d_p = (log_ratio + 1.0 - safe_div(q, p)) / 2.0
    grad = safe_div(d_p - np.dot(p, d_p), total)
    return dist, grad


# =============================================================================
# GEOGRAPHIC
# =============================================================================

def haversine_grad(a: ArrayLike, b: ArrayLike) -> DistanceGradient:
    """
    Haversine (great-circle) distance and its gradient.

    With h = sin^2(dlat/2) + cos(lat_a) cos(lat_b) sin^2(dlon/2) and
    d = 2 arcsin(sqrt(h)):

        dd/dh       = 1 / (sqrt(h) * sqrt(1 - h))
        dh/dlat_a   = sin(dlat) / 2 - sin(lat_a) cos(lat_b) sin^2(dlon/2)
        dh/dlon_a   = cos(lat_a) cos(lat_b) sin(dlon) / 2

    The gradient is 0 at coincident and at antipodal points, where
    dd/dh is unbounded.
    """
    x, y = _validate_coordinates(a, b)
    d_lat = x[0] - y[0]
    d_lon = x[1] - y[1]
    cos_a = np.cos(x[0])
    cos_b = np.cos(y[0])
    sin_half_lon = np.sin(0.5 * d_lon)

    h = min(float(np.sin(0.5 * d_lat) ** 2 + cos_a * cos_b * sin_half_lon ** 2), 1.0)
    root_h = clamped_sqrt(h)
    dist = 2.0 * float(np.arcsin(root_h))

    dh = np.array([
        0.5 * np.sin(d_lat) - np.sin(x[0]) * cos_b * sin_half_lon ** 2,
        0.5 * cos_a * cos_b * np.sin(d_lon),
    ])
    return dist, safe_div(dh, root_h * clamped_sqrt(1.0 - h))
