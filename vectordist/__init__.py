"""
vectordist - distance metrics with analytic gradients.

Example:
    >>> import numpy as np
    >>> from vectordist import euclidean, cosine_grad, get_gradient_fn
    >>>
    >>> a = np.array([1.0, 2.0, 3.0])
    >>> b = np.array([4.0, 5.0, 6.0])
    >>>
    >>> # Value only
    >>> dist = euclidean(a, b)
    >>>
    >>> # Value and gradient with respect to a
    >>> dist, grad = cosine_grad(a, b)
    >>>
    >>> # Using registry
    >>> dist, grad = get_gradient_fn("poincare")([0.1, 0.2], [0.3, -0.1])

The full set of metrics lives in ``vectordist.distance``.
"""

from .core import (
    # Exceptions
    VectorDistError,
    ValidationError,
    DimensionMismatchError,
    DomainError,
)

from .distance import (
    # Kernel primitives
    safe_div,
    safe_log,
    clamped_sqrt,
    # Metrics
    euclidean,
    manhattan,
    chebyshev,
    minkowski,
    weighted_minkowski,
    mahalanobis,
    cosine,
    correlation,
    hellinger,
    bray_curtis,
    canberra,
    haversine,
    poincare,
    hyperboloid,
    ll_dirichlet,
    # Gradient metrics
    euclidean_grad,
    manhattan_grad,
    chebyshev_grad,
    minkowski_grad,
    weighted_minkowski_grad,
    mahalanobis_grad,
    cosine_grad,
    hellinger_grad,
    bray_curtis_grad,
    canberra_grad,
    haversine_grad,
    poincare_grad,
    hyperboloid_grad,
    # Registry
    get_metric,
    get_metric_fn,
    get_gradient_fn,
    list_metrics,
    list_gradient_metrics,
    register_metric,
    DistanceMetric,
    DistanceCalculator,
)

from .utils import (
    check_gradient,
    numerical_gradient,
    configure_logging,
)

__version__ = "0.1.0"
__author__ = "vectordist Team"

__all__ = [
    # Exceptions
    "VectorDistError",
    "ValidationError",
    "DimensionMismatchError",
    "DomainError",
    # Kernel primitives
    "safe_div",
    "safe_log",
    "clamped_sqrt",
    # Metrics
    "euclidean",
    "manhattan",
    "chebyshev",
    "minkowski",
    "weighted_minkowski",
    "mahalanobis",
    "cosine",
    "correlation",
    "hellinger",
    "bray_curtis",
    "canberra",
    "haversine",
    "poincare",
    "hyperboloid",
    "ll_dirichlet",
    # Gradient metrics
    "euclidean_grad",
    "manhattan_grad",
    "chebyshev_grad",
    "minkowski_grad",
    "weighted_minkowski_grad",
    "mahalanobis_grad",
    "cosine_grad",
    "hellinger_grad",
    "bray_curtis_grad",
    "canberra_grad",
    "haversine_grad",
    "poincare_grad",
    "hyperboloid_grad",
    # Registry
    "get_metric",
    "get_metric_fn",
    "get_gradient_fn",
    "list_metrics",
    "list_gradient_metrics",
    "register_metric",
    "DistanceMetric",
    "DistanceCalculator",
    # Gradient checking
    "check_gradient",
    "numerical_gradient",
    "configure_logging",
]
