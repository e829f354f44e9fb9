"""
Finite-difference verification of analytic gradients.

Every gradient metric is checked against a central difference of its
own value. The check is a development and test tool; it evaluates the
metric 2n times and must not be used inside optimization loops.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from config.settings import Settings, load_config

from .logging import get_logger
from .validation import as_vector


logger = get_logger(__name__)


def numerical_gradient(
    fn: Callable[..., float],
    a: ArrayLike,
    b: ArrayLike,
    eps: float = 1e-6,
    **kwargs: Any,
) -> NDArray[np.float64]:
    """
    Central finite-difference gradient of fn(a, b) with respect to a.

    Args:
        fn: Distance function (a, b, **kwargs) -> float
        a: Point at which to differentiate
        b: Second argument, held fixed
        eps: Step size
        **kwargs: Extra metric parameters passed through to fn

    Returns:
        Approximate gradient, same length as a
    """
    x = as_vector(a, "a")
    grad = np.empty_like(x)

    for i in range(x.shape[0]):
        step = np.zeros_like(x)
        step[i] = eps
        grad[i] = (fn(x + step, b, **kwargs) - fn(x - step, b, **kwargs)) / (2.0 * eps)

    return grad


@dataclass
class GradientCheck:
    """Outcome of comparing an analytic gradient with finite differences."""

    distance: float
    analytic: NDArray[np.float64]
    numeric: NDArray[np.float64]
    value_matches: bool
    passed: bool

    @property
    def max_error(self) -> float:
        return float(np.max(np.abs(self.analytic - self.numeric)))

    def __bool__(self) -> bool:
        return self.passed


def check_gradient(
    grad_fn: Callable[..., Tuple[float, NDArray[np.float64]]],
    a: ArrayLike,
    b: ArrayLike,
    value_fn: Optional[Callable[..., float]] = None,
    eps: Optional[float] = None,
    atol: Optional[float] = None,
    rtol: Optional[float] = None,
    settings: Optional[Settings] = None,
    **kwargs: Any,
) -> GradientCheck:
    """
    Check a gradient metric against the finite difference of its value.

    When `value_fn` is given, its result must also agree with the
    distance returned by `grad_fn`, which verifies that a value-only
    metric and its gradient counterpart compute the same quantity.

    Args:
        grad_fn: Function (a, b, **kwargs) -> (distance, gradient)
        a: Point at which to differentiate
        b: Second argument, held fixed
        value_fn: Optional value-only counterpart of grad_fn
        eps: Finite-difference step (default from settings)
        atol: Absolute tolerance (default from settings)
        rtol: Relative tolerance (default from settings)
        settings: Settings to draw defaults from (default: load_config())
        **kwargs: Extra metric parameters

    Returns:
        GradientCheck, truthy when the gradient passes
    """
    if eps is None or atol is None or rtol is None:
        check_config = (settings or load_config()).gradient_check
        eps = check_config.eps if eps is None else eps
        atol = check_config.atol if atol is None else atol
        rtol = check_config.rtol if rtol is None else rtol

    distance, analytic = grad_fn(a, b, **kwargs)
    numeric = numerical_gradient(
        lambda x, y, **kw: grad_fn(x, y, **kw)[0], a, b, eps=eps, **kwargs
    )

    value_matches = True
    if value_fn is not None:
        value_matches = bool(
            np.isclose(value_fn(a, b, **kwargs), distance, rtol=rtol, atol=atol)
        )

    gradient_matches = bool(np.allclose(analytic, numeric, rtol=rtol, atol=atol))
    result = GradientCheck(
        distance=float(distance),
        analytic=np.asarray(analytic, dtype=np.float64),
        numeric=numeric,
        value_matches=value_matches,
        passed=value_matches and gradient_matches,
    )

    if not result.passed:
        name = getattr(grad_fn, "__name__", repr(grad_fn))
        logger.warning(
            f"Gradient check failed for {name}: "
            f"value_matches={value_matches}, max_error={result.max_error:.3g}"
        )

    return result
