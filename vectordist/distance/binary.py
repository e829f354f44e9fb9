"""
Dissimilarities for boolean vectors.

Apart from `hamming`, which compares raw values, every function treats
non-zero entries as True and works from the 2x2 contingency counts of
the two vectors. These metrics have no gradient.
"""

from __future__ import annotations

from typing import NamedTuple

import numpy as np
from numpy.typing import ArrayLike

from ..utils.validation import validate_pair
from .kernel import safe_div


class Contingency(NamedTuple):
    """Counts of (a, b) truth-value combinations over all positions."""

    true_true: int
    true_false: int
    false_true: int
    false_false: int

    @property
    def not_equal(self) -> int:
        return self.true_false + self.false_true

    @property
    def size(self) -> int:
        return sum(self)


def contingency(a: ArrayLike, b: ArrayLike) -> Contingency:
    """
    Count matching and mismatching truth values.

    Example:
        >>> contingency([1, 0, 1, 1, 0], [1, 1, 1, 0, 0])
        Contingency(true_true=2, true_false=1, false_true=1, false_false=1)
    """
    x, y = validate_pair(a, b)
    x_true = x != 0
    y_true = y != 0
    return Contingency(
        true_true=int(np.sum(x_true & y_true)),
        true_false=int(np.sum(x_true & ~y_true)),
        false_true=int(np.sum(~x_true & y_true)),
        false_false=int(np.sum(~x_true & ~y_true)),
    )


def hamming(a: ArrayLike, b: ArrayLike) -> float:
    """
    Compute normalized Hamming distance.

    Fraction of positions where the values differ.

    Example:
        >>> hamming([1, 0, 1, 1, 0], [1, 1, 1, 0, 0])
        0.4
    """
    x, y = validate_pair(a, b)
    return float(np.mean(x != y))


def jaccard(a: ArrayLike, b: ArrayLike) -> float:
    """
    Jaccard distance: 1 - |A ∩ B| / |A ∪ B|.

    Two all-zero vectors have distance 0.
    """
    c = contingency(a, b)
    return safe_div(c.not_equal, c.true_true + c.not_equal)


def matching(a: ArrayLike, b: ArrayLike) -> float:
    """Fraction of positions whose truth values differ."""
    c = contingency(a, b)
    return c.not_equal / c.size


def dice(a: ArrayLike, b: ArrayLike) -> float:
    """Dice dissimilarity: (TF + FT) / (2 TT + TF + FT)."""
    c = contingency(a, b)
    return safe_div(c.not_equal, 2.0 * c.true_true + c.not_equal)


def kulsinski(a: ArrayLike, b: ArrayLike) -> float:
    """
    Kulsinski dissimilarity: (TF + FT - TT + n) / (TF + FT + n).

    Identical truth patterns have dissimilarity 0.
    """
    c = contingency(a, b)
    if c.not_equal == 0:
        return 0.0
    return (c.not_equal - c.true_true + c.size) / (c.not_equal + c.size)


def rogers_tanimoto(a: ArrayLike, b: ArrayLike) -> float:
    """Rogers-Tanimoto dissimilarity: 2 (TF + FT) / (n + TF + FT)."""
    c = contingency(a, b)
    return 2.0 * c.not_equal / (c.size + c.not_equal)


def russellrao(a: ArrayLike, b: ArrayLike) -> float:
    """
    Russell-Rao dissimilarity: (n - TT) / n.

    Returns 0 when both vectors have exactly the same non-zero positions
    (including two all-zero vectors).
    """
    c = contingency(a, b)
    if c.not_equal == 0:
        return 0.0
    return (c.size - c.true_true) / c.size


def sokal_michener(a: ArrayLike, b: ArrayLike) -> float:
    """Sokal-Michener dissimilarity: 2 (TF + FT) / (n + TF + FT)."""
    c = contingency(a, b)
    return 2.0 * c.not_equal / (c.size + c.not_equal)


def sokal_sneath(a: ArrayLike, b: ArrayLike) -> float:
    """Sokal-Sneath dissimilarity: (TF + FT) / (TT / 2 + TF + FT)."""
    c = contingency(a, b)
    return safe_div(c.not_equal, 0.5 * c.true_true + c.not_equal)


def yule(a: ArrayLike, b: ArrayLike) -> float:
    """
    Yule dissimilarity: 2 TF FT / (TT FF + TF FT).

    Returns 0 when either off-diagonal count is 0.
    """
    c = contingency(a, b)
    if c.true_false == 0 or c.false_true == 0:
        return 0.0
    return safe_div(
        2.0 * c.true_false * c.false_true,
        c.true_true * c.false_false + c.true_false * c.false_true,
    )
