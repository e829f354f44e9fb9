"""
Custom exceptions for vectordist.
"""


class VectorDistError(Exception):
    """Base exception for vectordist."""
    pass


class ValidationError(VectorDistError, ValueError):
    """Input validation error."""
    pass


class DimensionMismatchError(ValidationError):
    """Input vectors or matrices have incompatible shapes."""
    pass


class DomainError(VectorDistError, ValueError):
    """Argument outside the domain of a statistical function."""
    pass
