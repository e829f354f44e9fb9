"""
Numeric kernel primitives shared by every metric.

These helpers are the single place where domain errors are avoided.
Metrics never divide, take a logarithm or a square root directly; they
go through the functions below so that the stabilized value and the
stabilized gradient always take the same branch.

Stabilization contract:
    - safe_div returns 0 where the denominator is exactly 0
    - safe_log returns 0 for non-positive arguments
    - clamped_sqrt treats negative radicands as 0
    - clamped_arccosh treats arguments below 1 as 1

All functions accept scalars or NumPy arrays (with broadcasting) and
return a Python float when every input is a scalar.
"""

from __future__ import annotations

from typing import Union

import numpy as np
from numpy.typing import ArrayLike, NDArray


Scalar = Union[float, int]
ScalarOrArray = Union[float, NDArray[np.floating]]


def _result(out: NDArray) -> ScalarOrArray:
    if out.ndim == 0:
        return float(out)
    return out


def safe_div(numerator: ArrayLike, denominator: ArrayLike) -> ScalarOrArray:
    """
    Divide, returning 0 wherever the denominator is 0.

    Args:
        numerator: Dividend (scalar or array)
        denominator: Divisor (scalar or array)

    Returns:
        numerator / denominator, with 0 in place of x / 0

    Example:
        >>> safe_div(1.0, 0.0)
        0.0
        >>> safe_div(np.array([1.0, 2.0]), np.array([2.0, 0.0]))
        array([0.5, 0. ])
    """
    num = np.asarray(numerator, dtype=np.float64)
    den = np.asarray(denominator, dtype=np.float64)
    out = np.zeros(np.broadcast(num, den).shape, dtype=np.float64)
    np.divide(num, den, out=out, where=den != 0)
    return _result(out)


def safe_log(x: ArrayLike) -> ScalarOrArray:
    """
    Natural logarithm, returning 0 for non-positive arguments.

    Example:
        >>> safe_log(0.0)
        0.0
    """
    arr = np.asarray(x, dtype=np.float64)
    out = np.zeros(arr.shape, dtype=np.float64)
    np.log(arr, out=out, where=arr > 0)
    return _result(out)


def clamped_sqrt(x: ArrayLike) -> ScalarOrArray:
    """
    Square root of max(x, 0).

    Guards against tiny negative radicands produced by cancellation,
    e.g. 1 - cos^2(theta).

    Example:
        >>> clamped_sqrt(-1e-17)
        0.0
    """
    arr = np.asarray(x, dtype=np.float64)
    return _result(np.sqrt(np.maximum(arr, 0.0)))


def clamped_arccosh(x: ArrayLike) -> ScalarOrArray:
    """
    Inverse hyperbolic cosine of max(x, 1).

    Example:
        >>> clamped_arccosh(1.0 - 1e-12)
        0.0
    """
    arr = np.asarray(x, dtype=np.float64)
    return _result(np.arccosh(np.maximum(arr, 1.0)))


def sign(x: ArrayLike) -> ScalarOrArray:
    """
    Sign of x as -1, 0 or +1.

    Exact zeros map to 0, which is the subgradient chosen for |x| at 0.
    """
    return _result(np.sign(np.asarray(x, dtype=np.float64)))
