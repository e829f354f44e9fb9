"""
Core definitions for vectordist.
"""

from .exceptions import (
    VectorDistError,
    ValidationError,
    DimensionMismatchError,
    DomainError,
)

__all__ = [
    "VectorDistError",
    "ValidationError",
    "DimensionMismatchError",
    "DomainError",
]
