"""
Hyperbolic distances and their gradients.

Two models of hyperbolic space are supported:

    - Poincaré ball: points strictly inside the unit ball
    - Hyperboloid: points in R^n lifted onto the upper sheet of the
      hyperboloid, x_0 = sqrt(1 + ||x||^2)

Both distances are arcosh of an argument that is >= 1 in exact
arithmetic. Rounding can push it slightly below 1; the argument is then
clamped to 1, which gives distance 0 and a zero gradient.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..core.exceptions import ValidationError
from ..utils.validation import validate_pair
from .kernel import safe_div, clamped_sqrt, clamped_arccosh


DistanceGradient = Tuple[float, NDArray[np.float64]]


def _arccosh_derivative(arg: float) -> float:
    """1 / sqrt(arg^2 - 1) on the clamped argument, 0 at arg <= 1."""
    clamped = max(arg, 1.0)
    return safe_div(1.0, clamped_sqrt((clamped - 1.0) * (clamped + 1.0)))


# =============================================================================
# POINCARÉ BALL
# =============================================================================

def _poincare_terms(u: ArrayLike, v: ArrayLike):
    x, y = validate_pair(u, v)
    alpha = 1.0 - float(np.dot(x, x))
    beta = 1.0 - float(np.dot(y, y))

    if alpha <= 0 or beta <= 0:
        raise ValidationError(
            "Poincaré distance requires points strictly inside the unit ball"
        )

    diff = x - y
    sq_dist = float(np.dot(diff, diff))
    arg = 1.0 + safe_div(2.0 * sq_dist, alpha * beta)
    return x, diff, sq_dist, alpha, beta, arg


def poincare(u: ArrayLike, v: ArrayLike) -> float:
    """
    Compute the Poincaré ball distance.

    Formula:
        d(u, v) = arcosh(1 + 2 ||u - v||^2 / ((1 - ||u||^2) (1 - ||v||^2)))

    Args:
        u: Point inside the unit ball
        v: Point inside the unit ball

    Returns:
        Hyperbolic distance (>= 0)

    Raises:
        ValidationError: If either point is on or outside the unit sphere
    """
    *_, arg = _poincare_terms(u, v)
    return clamped_arccosh(arg)


def poincare_grad(u: ArrayLike, v: ArrayLike) -> DistanceGradient:
    """
    Poincaré ball distance and its gradient with respect to u.

    With alpha = 1 - ||u||^2, beta = 1 - ||v||^2 and gamma the arcosh
    argument:

        d(gamma)/d(u) = 4 / (alpha beta) * ((u - v) + ||u - v||^2 u / alpha)
        d(dist)/d(u)  = d(gamma)/d(u) / sqrt(gamma^2 - 1)
    """
    x, diff, sq_dist, alpha, beta, arg = _poincare_terms(u, v)
    dist = clamped_arccosh(arg)

    d_arg = safe_div(4.0 * (diff + safe_div(sq_dist * x, alpha)), alpha * beta)
    return dist, d_arg * _arccosh_derivative(arg)


# =============================================================================
# HYPERBOLOID
# =============================================================================

def _hyperboloid_terms(x: ArrayLike, y: ArrayLike):
    u, v = validate_pair(x, y)
    s = float(np.sqrt(1.0 + np.dot(u, u)))
    t = float(np.sqrt(1.0 + np.dot(v, v)))
    arg = s * t - float(np.dot(u, v))
    return u, v, s, t, arg


def hyperboloid(x: ArrayLike, y: ArrayLike) -> float:
    """
    Compute the hyperboloid-model distance.

    Points are given by their spatial coordinates; the time coordinate
    is implied by x_0 = sqrt(1 + ||x||^2).

    Formula:
        B = sqrt(1 + ||x||^2) * sqrt(1 + ||y||^2) - <x, y>
        d = arcosh(B)

    Example:
        >>> hyperboloid([0.0, 0.0], [0.0, 0.0])
        0.0
    """
    *_, arg = _hyperboloid_terms(x, y)
    return clamped_arccosh(arg)


def hyperboloid_grad(x: ArrayLike, y: ArrayLike) -> DistanceGradient:
    """
    Hyperboloid-model distance and its gradient with respect to x.

    With s = sqrt(1 + ||x||^2), t = sqrt(1 + ||y||^2):

        dB/dx_i = x_i * t / s - y_i
        dd/dx_i = dB/dx_i / sqrt(B^2 - 1)
    """
    u, v, s, t, arg = _hyperboloid_terms(x, y)
    dist = clamped_arccosh(arg)

    d_arg = safe_div(u * t, s) - v
    return dist, d_arg * _arccosh_derivative(arg)
