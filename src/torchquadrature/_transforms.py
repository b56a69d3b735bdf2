"""Variable substitutions mapping infinite domains onto finite ones.

Doubly infinite, x in (-inf, inf), t in [-1, 1]:
    x = t / (1 - t^2),  dx = (1 + t^2) / (1 - t^2)^2 dt

Upper infinite, x in [a, inf), t in [0, 1]:
    x = a + t / (1 - t),  dx = 1 / (1 - t)^2 dt

Lower infinite, x in (-inf, b], t in [-1, 0]:
    x = b + t / (1 + t),  dx = 1 / (1 + t)^2 dt

The singular endpoints are never evaluated because Gauss-Kronrod nodes are
strictly interior to every subinterval.
"""

import enum
import math
from typing import Callable, Tuple

from torch import Tensor


class DomainKind(enum.Enum):
    """Shape of the integration domain."""

    FINITE = "finite"
    LOWER_INFINITE = "lower_infinite"
    UPPER_INFINITE = "upper_infinite"
    DOUBLY_INFINITE = "doubly_infinite"


def classify_domain(a: float, b: float) -> DomainKind:
    """Classify ``[a, b]`` by which of its bounds are infinite."""
    if math.isinf(a) and math.isinf(b):
        return DomainKind.DOUBLY_INFINITE
    if math.isinf(a):
        return DomainKind.LOWER_INFINITE
    if math.isinf(b):
        return DomainKind.UPPER_INFINITE
    return DomainKind.FINITE


def _doubly_infinite(f: Callable) -> Callable[[Tensor], Tensor]:
    def g(t: Tensor) -> Tensor:
        h = 1 / (1 - t**2)
        return f(t * h) * (1 + t**2) * h**2

    return g


def _upper_infinite(f: Callable, a: float) -> Callable[[Tensor], Tensor]:
    def g(t: Tensor) -> Tensor:
        h = 1 / (1 - t)
        return f(a + t * h) * h**2

    return g


def _lower_infinite(f: Callable, b: float) -> Callable[[Tensor], Tensor]:
    def g(t: Tensor) -> Tensor:
        h = 1 / (1 + t)
        return f(b + t * h) * h**2

    return g


def substitute(
    f: Callable, a: float, b: float
) -> Tuple[Callable[[Tensor], Tensor], float, float, DomainKind]:
    """
    Rewrite the integral of ``f`` over ``[a, b]`` on a finite domain.

    Parameters
    ----------
    f : callable
        Integrand.
    a, b : float
        Integration bounds with ``a < b``; either may be infinite.

    Returns
    -------
    g : callable
        Integrand on the finite domain, Jacobian included.
    lo, hi : float
        Bounds of the finite domain.
    kind : DomainKind
        Classification of ``[a, b]``.
    """
    kind = classify_domain(a, b)

    if kind is DomainKind.DOUBLY_INFINITE:
        return _doubly_infinite(f), -1.0, 1.0, kind
    if kind is DomainKind.UPPER_INFINITE:
        return _upper_infinite(f, a), 0.0, 1.0, kind
    if kind is DomainKind.LOWER_INFINITE:
        return _lower_infinite(f, b), -1.0, 0.0, kind

    return f, a, b, kind
