"""Exceptions for quadrature integration."""

__all__ = [
    "QuadratureError",
    "InvalidDomainError",
    "InvalidArgumentError",
    "InvalidConfigurationError",
    "QuadratureWarning",
]


class QuadratureError(ValueError):
    """Base exception for quadrature errors."""

    pass


class InvalidDomainError(QuadratureError):
    """Raised when the lower bound of integration exceeds the upper bound."""

    pass


class InvalidArgumentError(QuadratureError):
    """Raised when a tolerance or count argument is invalid.

    This occurs when:
    - A bound is NaN
    - A tolerance is negative or not finite, or both tolerances are zero
    - ``max_iter``, ``sn`` or ``limit`` is not a positive integer
    """

    pass


class InvalidConfigurationError(QuadratureError):
    """Raised when a quadrature rule table does not have the expected order."""

    pass


class QuadratureWarning(UserWarning):
    """Warning for quadrature issues (e.g., slow convergence)."""

    pass
