"""
Utility functions for vectordist.
"""

from .validation import (
    as_vector,
    validate_pair,
    validate_weights,
    validate_matrix,
    validate_p,
    validate_positive,
)
from .logging import setup_logger, get_logger, configure_logging, LogContext
from .numerical import numerical_gradient, check_gradient, GradientCheck

__all__ = [
    "as_vector",
    "validate_pair",
    "validate_weights",
    "validate_matrix",
    "validate_p",
    "validate_positive",
    "setup_logger",
    "get_logger",
    "configure_logging",
    "LogContext",
    "numerical_gradient",
    "check_gradient",
    "GradientCheck",
]
