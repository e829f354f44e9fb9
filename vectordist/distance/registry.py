"""
Distance metric registry and factory.

Provides a unified interface for looking up distance functions (and,
where one exists, their gradient counterpart) by name, and for
registering custom metrics.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple
from dataclasses import dataclass
import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..utils.logging import get_logger
from . import binary, gradients, hyperbolic, metrics, special


logger = get_logger(__name__)

# Type aliases
DistanceFunction = Callable[..., float]
GradientFunction = Callable[..., Tuple[float, NDArray[np.float64]]]


class DistanceMetric(str, Enum):
    """Enumeration of built-in distance metrics."""

    EUCLIDEAN = "euclidean"
    EUCLIDEAN_SQUARED = "euclidean_squared"
    STANDARDISED_EUCLIDEAN = "standardised_euclidean"
    MANHATTAN = "manhattan"
    CHEBYSHEV = "chebyshev"
    MINKOWSKI = "minkowski"
    WEIGHTED_MINKOWSKI = "weighted_minkowski"
    MAHALANOBIS = "mahalanobis"
    COSINE = "cosine"
    CORRELATION = "correlation"
    HELLINGER = "hellinger"
    BRAY_CURTIS = "bray_curtis"
    CANBERRA = "canberra"
    SYMMETRIC_KL = "symmetric_kl"
    HAVERSINE = "haversine"
    POINCARE = "poincare"
    HYPERBOLOID = "hyperboloid"
    LL_DIRICHLET = "ll_dirichlet"
    HAMMING = "hamming"
    JACCARD = "jaccard"
    MATCHING = "matching"
    DICE = "dice"
    KULSINSKI = "kulsinski"
    ROGERS_TANIMOTO = "rogers_tanimoto"
    RUSSELLRAO = "russellrao"
    SOKAL_MICHENER = "sokal_michener"
    SOKAL_SNEATH = "sokal_sneath"
    YULE = "yule"

    def __str__(self) -> str:
        return self.value


@dataclass
class MetricInfo:
    """Information about a distance metric."""

    name: str
    function: DistanceFunction
    gradient_function: Optional[GradientFunction]
    is_similarity: bool  # True if larger values = more similar
    min_value: Optional[float]
    max_value: Optional[float]  # None if unbounded
    description: str

    @property
    def has_gradient(self) -> bool:
        return self.gradient_function is not None

    def __repr__(self) -> str:
        return (
            f"MetricInfo(name='{self.name}', "
            f"has_gradient={self.has_gradient})"
        )


# (name, function, gradient, min, max, description, aliases)
_BUILTINS = [
    ("euclidean", metrics.euclidean, gradients.euclidean_grad,
     0.0, None, "Euclidean (L2) distance", ["l2"]),
    ("euclidean_squared", metrics.euclidean_squared, None,
     0.0, None, "Squared Euclidean distance", ["sqeuclidean", "l2_squared"]),
    ("standardised_euclidean", metrics.standardised_euclidean,
     gradients.standardised_euclidean_grad,
     0.0, None, "Euclidean distance scaled by per-dimension variances",
     ["seuclidean", "standardized_euclidean"]),
    ("manhattan", metrics.manhattan, gradients.manhattan_grad,
     0.0, None, "Manhattan (L1) distance", ["l1", "cityblock", "taxicab"]),
    ("chebyshev", metrics.chebyshev, gradients.chebyshev_grad,
     0.0, None, "Chebyshev (L∞) distance", ["linf", "chessboard"]),
    ("minkowski", metrics.minkowski, gradients.minkowski_grad,
     0.0, None, "Minkowski (Lp) distance", []),
    ("weighted_minkowski", metrics.weighted_minkowski,
     gradients.weighted_minkowski_grad,
     0.0, None, "Minkowski distance with per-dimension weights", ["wminkowski"]),
    ("mahalanobis", metrics.mahalanobis, gradients.mahalanobis_grad,
     0.0, None, "Mahalanobis distance for a given inverse covariance", []),
    ("cosine", metrics.cosine, gradients.cosine_grad,
     0.0, 2.0, "Cosine distance (1 - cosine similarity)", ["cosine_distance"]),
    ("correlation", metrics.correlation, gradients.correlation_grad,
     0.0, 2.0, "Correlation distance (1 - Pearson correlation)", []),
    ("hellinger", metrics.hellinger, gradients.hellinger_grad,
     0.0, None, "Hellinger distance between non-negative vectors", []),
    ("bray_curtis", metrics.bray_curtis, gradients.bray_curtis_grad,
     0.0, None, "Bray-Curtis dissimilarity", ["braycurtis"]),
    ("canberra", metrics.canberra, gradients.canberra_grad,
     0.0, None, "Canberra distance", []),
    ("symmetric_kl", metrics.symmetric_kl, gradients.symmetric_kl_grad,
     0.0, None, "Symmetrised Kullback-Leibler divergence", ["symmetric_kl_divergence"]),
    ("haversine", metrics.haversine, gradients.haversine_grad,
     0.0, np.pi, "Great-circle distance on the unit sphere", ["great_circle"]),
    ("poincare", hyperbolic.poincare, hyperbolic.poincare_grad,
     0.0, None, "Poincaré ball hyperbolic distance", []),
    ("hyperboloid", hyperbolic.hyperboloid, hyperbolic.hyperboloid_grad,
     0.0, None, "Hyperboloid-model hyperbolic distance", []),
    ("ll_dirichlet", special.ll_dirichlet, None,
     0.0, None, "Symmetric Dirichlet-multinomial log-likelihood distance", []),
    ("hamming", binary.hamming, None,
     0.0, 1.0, "Fraction of differing positions", []),
    ("jaccard", binary.jaccard, None,
     0.0, 1.0, "Jaccard distance on boolean vectors", []),
    ("matching", binary.matching, None,
     0.0, 1.0, "Matching dissimilarity on boolean vectors", []),
    ("dice", binary.dice, None,
     0.0, 1.0, "Dice dissimilarity on boolean vectors", []),
    ("kulsinski", binary.kulsinski, None,
     0.0, None, "Kulsinski dissimilarity on boolean vectors", []),
    ("rogers_tanimoto", binary.rogers_tanimoto, None,
     0.0, 1.0, "Rogers-Tanimoto dissimilarity on boolean vectors", []),
    ("russellrao", binary.russellrao, None,
     0.0, 1.0, "Russell-Rao dissimilarity on boolean vectors", []),
    ("sokal_michener", binary.sokal_michener, None,
     0.0, 1.0, "Sokal-Michener dissimilarity on boolean vectors", []),
    ("sokal_sneath", binary.sokal_sneath, None,
     0.0, 1.0, "Sokal-Sneath dissimilarity on boolean vectors", []),
    ("yule", binary.yule, None,
     0.0, None, "Yule dissimilarity on boolean vectors", []),
]


# =============================================================================
# METRIC REGISTRY
# =============================================================================

class MetricRegistry:
    """
    Registry for distance metrics.

    Allows looking up metrics by name or alias and registering custom
    metrics, optionally with a gradient function.
    """

    def __init__(self):
        self._metrics: Dict[str, MetricInfo] = {}
        self._aliases: Dict[str, str] = {}
        self._register_builtins()

    def _register_builtins(self) -> None:
        """Register built-in distance metrics."""
        for name, fn, grad_fn, lo, hi, description, aliases in _BUILTINS:
            self.register(
                MetricInfo(
                    name=name,
                    function=fn,
                    gradient_function=grad_fn,
                    is_similarity=False,
                    min_value=lo,
                    max_value=hi,
                    description=description,
                ),
                aliases=aliases,
            )

    def register(
        self,
        info: MetricInfo,
        aliases: Optional[List[str]] = None
    ) -> None:
        """
        Register a distance metric.

        Re-registering an existing name replaces it.

        Args:
            info: MetricInfo object
            aliases: Optional list of alternative names
        """
        if info.name in self._metrics:
            logger.warning(f"Replacing registered metric '{info.name}'")

        self._metrics[info.name] = info

        if aliases:
            for alias in aliases:
                self._aliases[alias] = info.name

        logger.debug(
            f"Registered metric '{info.name}' "
            f"(gradient={info.has_gradient}, aliases={aliases or []})"
        )

    def get(self, name: str) -> MetricInfo:
        """
        Get metric info by name.

        Args:
            name: Metric name or alias

        Returns:
            MetricInfo object

        Raises:
            KeyError: If metric not found
        """
        name = str(name)
        canonical = self._aliases.get(name, name)

        if canonical not in self._metrics:
            available = list(self._metrics.keys())
            raise KeyError(
                f"Unknown metric: '{name}'. Available: {available}"
            )

        return self._metrics[canonical]

    def get_function(self, name: str) -> DistanceFunction:
        """Get the distance function for a metric."""
        return self.get(name).function

    def get_gradient_function(self, name: str) -> GradientFunction:
        """
        Get the gradient function for a metric.

        Raises:
            KeyError: If the metric is unknown or has no gradient
        """
        info = self.get(name)
        if info.gradient_function is None:
            raise KeyError(f"Metric '{info.name}' has no gradient")
        return info.gradient_function

    def list_metrics(self) -> List[str]:
        """List all registered metric names."""
        return list(self._metrics.keys())

    def list_gradient_metrics(self) -> List[str]:
        """List the names of metrics that provide a gradient."""
        return [name for name, info in self._metrics.items() if info.has_gradient]

    def list_all(self) -> Dict[str, MetricInfo]:
        """Get all registered metrics with their info."""
        return self._metrics.copy()

    def is_similarity(self, name: str) -> bool:
        """Check if a metric is a similarity (vs distance)."""
        return self.get(name).is_similarity

    def __contains__(self, name: str) -> bool:
        """Check if a metric is registered."""
        name = str(name)
        canonical = self._aliases.get(name, name)
        return canonical in self._metrics

    def __getitem__(self, name: str) -> MetricInfo:
        """Get metric info by name."""
        return self.get(name)


# =============================================================================
# GLOBAL REGISTRY AND CONVENIENCE FUNCTIONS
# =============================================================================

# Global registry instance
_registry = MetricRegistry()


def get_metric(name: str) -> MetricInfo:
    """
    Get metric info by name.

    Example:
        >>> info = get_metric("euclidean")
        >>> info.description
        'Euclidean (L2) distance'
    """
    return _registry.get(name)


def get_metric_fn(name: str) -> DistanceFunction:
    """
    Get distance function by metric name.

    Example:
        >>> dist_fn = get_metric_fn("cosine")
        >>> distance = dist_fn(vec_a, vec_b)
    """
    return _registry.get_function(name)


def get_gradient_fn(name: str) -> GradientFunction:
    """
    Get the (distance, gradient) function by metric name.

    Example:
        >>> grad_fn = get_gradient_fn("euclidean")
        >>> distance, gradient = grad_fn(vec_a, vec_b)
    """
    return _registry.get_gradient_function(name)


def register_metric(
    name: str,
    function: DistanceFunction,
    gradient_function: Optional[GradientFunction] = None,
    is_similarity: bool = False,
    description: str = "",
    aliases: Optional[List[str]] = None,
) -> None:
    """
    Register a custom distance metric.

    Args:
        name: Metric name
        function: Distance function (a, b, **params) -> float
        gradient_function: Optional (a, b, **params) -> (float, ndarray)
        is_similarity: True if larger values = more similar
        description: Human-readable description
        aliases: Optional list of alternative names
    """
    info = MetricInfo(
        name=name,
        function=function,
        gradient_function=gradient_function,
        is_similarity=is_similarity,
        min_value=None,
        max_value=None,
        description=description or f"Custom metric: {name}",
    )
    _registry.register(info, aliases)


def list_metrics() -> List[str]:
    """List all available metric names."""
    return _registry.list_metrics()


def list_gradient_metrics() -> List[str]:
    """List all metric names that provide a gradient."""
    return _registry.list_gradient_metrics()


def is_similarity(name: str) -> bool:
    """Check if a metric is a similarity measure."""
    return _registry.is_similarity(name)


def metric_exists(name: str) -> bool:
    """Check if a metric (or alias) is registered."""
    return name in _registry


# =============================================================================
# DISTANCE FUNCTION WRAPPER
# =============================================================================

class DistanceCalculator:
    """
    Binds a metric and its parameters for repeated evaluation.

    Example:
        >>> calc = DistanceCalculator("minkowski", p=3)
        >>> dist = calc.distance(vec_a, vec_b)
        >>> dist, grad = calc.distance_with_gradient(vec_a, vec_b)
    """

    def __init__(self, metric: str = "euclidean", **params: Any):
        """
        Initialize calculator with a specific metric.

        Args:
            metric: Name or alias of the distance metric
            **params: Metric parameters (p, w, vinv, sigma, ...)
        """
        self.info = get_metric(metric)
        self.metric = self.info.name
        self.params = params
        self._fn = self.info.function
        self._grad_fn = self.info.gradient_function

    def distance(self, a: ArrayLike, b: ArrayLike) -> float:
        """Compute distance between two vectors."""
        return self._fn(a, b, **self.params)

    def distance_with_gradient(
        self,
        a: ArrayLike,
        b: ArrayLike,
    ) -> Tuple[float, NDArray[np.float64]]:
        """
        Compute distance and its gradient with respect to `a`.

        Raises:
            KeyError: If the metric has no gradient
        """
        if self._grad_fn is None:
            raise KeyError(f"Metric '{self.metric}' has no gradient")
        return self._grad_fn(a, b, **self.params)

    @property
    def has_gradient(self) -> bool:
        """Check if this metric provides a gradient."""
        return self.info.has_gradient

    def __call__(self, a: ArrayLike, b: ArrayLike) -> float:
        return self.distance(a, b)

    def __repr__(self) -> str:
        return f"DistanceCalculator(metric='{self.metric}', params={self.params})"
