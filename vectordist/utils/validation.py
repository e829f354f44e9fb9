"""
Input validation utilities.

Every metric coerces its arguments through these helpers before
computing anything, so malformed input fails fast instead of being
silently truncated, padded or broadcast.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..core.exceptions import (
    ValidationError,
    DimensionMismatchError,
    DomainError,
)


def as_vector(values: ArrayLike, name: str = "vector") -> NDArray[np.float64]:
    """
    Coerce input to a non-empty 1-D float64 array.

    Args:
        values: Sequence or array of numbers
        name: Argument name used in error messages

    Returns:
        1-D float64 array (a copy only when conversion requires one)

    Raises:
        ValidationError: If the input is not 1-D or is empty
    """
    try:
        arr = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name} must be numeric: {e}") from e

    if arr.ndim != 1:
        raise ValidationError(
            f"{name} must be 1-dimensional, got shape {arr.shape}"
        )

    if arr.shape[0] == 0:
        raise ValidationError(f"{name} cannot be empty")

    return arr


def validate_pair(
    a: ArrayLike,
    b: ArrayLike,
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Validate two input vectors of equal length.

    Raises:
        ValidationError: If either input is not a non-empty 1-D vector
        DimensionMismatchError: If the lengths differ
    """
    x = as_vector(a, "a")
    y = as_vector(b, "b")

    if x.shape[0] != y.shape[0]:
        raise DimensionMismatchError(
            f"Dimension mismatch: {x.shape[0]} != {y.shape[0]}"
        )

    return x, y


def validate_weights(
    w: Optional[ArrayLike],
    dimension: int,
    name: str = "w",
) -> NDArray[np.float64]:
    """
    Validate a per-dimension non-negative weight vector.

    Args:
        w: Weights, or None for all ones
        dimension: Expected length
        name: Argument name used in error messages

    Returns:
        Weight array of length `dimension`
    """
    if w is None:
        return np.ones(dimension, dtype=np.float64)

    weights = as_vector(w, name)

    if weights.shape[0] != dimension:
        raise DimensionMismatchError(
            f"{name} has length {weights.shape[0]}, expected {dimension}"
        )

    if np.any(weights < 0):
        raise ValidationError(f"{name} must be non-negative")

    return weights


def validate_matrix(
    m: Optional[ArrayLike],
    dimension: int,
    name: str = "vinv",
) -> NDArray[np.float64]:
    """
    Validate a square (dimension x dimension) matrix.

    Args:
        m: Matrix, or None for the identity
        dimension: Expected side length
        name: Argument name used in error messages
    """
    if m is None:
        return np.eye(dimension, dtype=np.float64)

    try:
        matrix = np.asarray(m, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"{name} must be numeric: {e}") from e

    if matrix.shape != (dimension, dimension):
        raise DimensionMismatchError(
            f"{name} has shape {matrix.shape}, "
            f"expected ({dimension}, {dimension})"
        )

    return matrix


def validate_p(p: float) -> float:
    """
    Validate the order of a Minkowski norm.

    Raises:
        ValidationError: If p < 1 or not finite
    """
    p = float(p)
    if not np.isfinite(p) or p < 1:
        raise ValidationError(f"p must be >= 1, got {p}")
    return p


def validate_positive(values: ArrayLike, name: str = "value") -> NDArray[np.float64]:
    """
    Check that every value is strictly positive.

    Raises:
        DomainError: If any value is <= 0 (or NaN)
    """
    arr = np.asarray(values, dtype=np.float64)
    if not np.all(arr > 0):
        raise DomainError(f"{name} must be strictly positive")
    return arr
