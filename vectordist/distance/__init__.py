"""
Distance metrics and their analytic gradients.

Every metric takes two equal-length vectors and returns a float;
gradient metrics (suffix ``_grad``) return ``(distance, gradient)``
with the gradient taken with respect to the first vector.

Degenerate inputs are stabilized, not rejected: divisions by zero,
logarithms of non-positive values and square roots of negative values
go through the kernel primitives (safe_div, safe_log, clamped_sqrt,
clamped_arccosh), which return a defined value on both the distance
and the gradient path.

Example:
    >>> from vectordist.distance import euclidean, euclidean_grad, get_gradient_fn
    >>>
    >>> euclidean([0.0, 0.0], [3.0, 4.0])
    5.0
    >>> dist, grad = euclidean_grad([0.0, 0.0], [3.0, 4.0])
    >>>
    >>> # Using registry
    >>> grad_fn = get_gradient_fn("minkowski")
    >>> dist, grad = grad_fn(a, b, p=3)
"""

from .kernel import (
    safe_div,
    safe_log,
    clamped_sqrt,
    clamped_arccosh,
    sign,
)

from .metrics import (
    euclidean,
    euclidean_squared,
    standardised_euclidean,
    manhattan,
    chebyshev,
    minkowski,
    weighted_minkowski,
    mahalanobis,
    inverse_covariance,
    cosine,
    cosine_similarity,
    correlation,
    hellinger,
    bray_curtis,
    canberra,
    symmetric_kl,
    haversine,
)

from .gradients import (
    euclidean_grad,
    standardised_euclidean_grad,
    manhattan_grad,
    chebyshev_grad,
    minkowski_grad,
    weighted_minkowski_grad,
    mahalanobis_grad,
    cosine_grad,
    correlation_grad,
    hellinger_grad,
    bray_curtis_grad,
    canberra_grad,
    symmetric_kl_grad,
    haversine_grad,
)

from .hyperbolic import (
    poincare,
    poincare_grad,
    hyperboloid,
    hyperboloid_grad,
)

from .special import (
    approx_log_gamma,
    log_gamma,
    log_beta,
    log_single_beta,
    ll_dirichlet,
)

from .binary import (
    hamming,
    jaccard,
    matching,
    dice,
    kulsinski,
    rogers_tanimoto,
    russellrao,
    sokal_michener,
    sokal_sneath,
    yule,
)

from .registry import (
    DistanceMetric,
    MetricInfo,
    DistanceCalculator,
    get_metric,
    get_metric_fn,
    get_gradient_fn,
    register_metric,
    list_metrics,
    list_gradient_metrics,
    is_similarity,
    metric_exists,
)

__all__ = [
    # Kernel primitives
    "safe_div",
    "safe_log",
    "clamped_sqrt",
    "clamped_arccosh",
    "sign",
    # Value-only metrics
    "euclidean",
    "euclidean_squared",
    "standardised_euclidean",
    "manhattan",
    "chebyshev",
    "minkowski",
    "weighted_minkowski",
    "mahalanobis",
    "inverse_covariance",
    "cosine",
    "cosine_similarity",
    "correlation",
    "hellinger",
    "bray_curtis",
    "canberra",
    "symmetric_kl",
    "haversine",
    "poincare",
    "hyperboloid",
    # Gradient metrics
    "euclidean_grad",
    "standardised_euclidean_grad",
    "manhattan_grad",
    "chebyshev_grad",
    "minkowski_grad",
    "weighted_minkowski_grad",
    "mahalanobis_grad",
    "cosine_grad",
    "correlation_grad",
    "hellinger_grad",
    "bray_curtis_grad",
    "canberra_grad",
    "symmetric_kl_grad",
    "haversine_grad",
    "poincare_grad",
    "hyperboloid_grad",
    # Special functions
    "approx_log_gamma",
    "log_gamma",
    "log_beta",
    "log_single_beta",
    "ll_dirichlet",
    # Binary
    "hamming",
    "jaccard",
    "matching",
    "dice",
    "kulsinski",
    "rogers_tanimoto",
    "russellrao",
    "sokal_michener",
    "sokal_sneath",
    "yule",
    # Registry
    "DistanceMetric",
    "MetricInfo",
    "DistanceCalculator",
    "get_metric",
    "get_metric_fn",
    "get_gradient_fn",
    "register_metric",
    "list_metrics",
    "list_gradient_metrics",
    "is_similarity",
    "metric_exists",
]
