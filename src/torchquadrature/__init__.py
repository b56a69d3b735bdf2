"""
torchquadrature: deterministic one-dimensional quadrature for PyTorch.

Adaptive integration over finite and infinite domains:
    integrate_quadgk, integrate_quadgk_info

Fixed 64-point Gauss-Hermite integration of exp(-x^2) f(x):
    integrate_quadgh

Per-subinterval evaluators:
    evaluate_quadgk, evaluate_quadgk15, evaluate_quadgk21,
    evaluate_quadgh, evaluate_quadgh64

Quadrature rule classes and working storage:
    GaussKronrod, GaussHermite, Subintervals, Estimates, DomainKind,
    QuadratureResult

Exceptions:
    QuadratureError, InvalidDomainError, InvalidArgumentError,
    InvalidConfigurationError, QuadratureWarning
"""

from torchquadrature._exceptions import (
    InvalidArgumentError,
    InvalidConfigurationError,
    InvalidDomainError,
    QuadratureError,
    QuadratureWarning,
)
from torchquadrature._kronrod import (
    evaluate_quadgk,
    evaluate_quadgk15,
    evaluate_quadgk21,
)
from torchquadrature._nodes import (
    gauss_hermite_nodes_weights,
    gauss_kronrod_nodes_weights,
)
from torchquadrature._quadgh import (
    evaluate_quadgh,
    evaluate_quadgh64,
    integrate_quadgh,
)
from torchquadrature._quadgk import (
    QuadratureResult,
    integrate_quadgk,
    integrate_quadgk_info,
)
from torchquadrature._rules import GaussHermite, GaussKronrod
from torchquadrature._subintervals import Estimates, Subintervals
from torchquadrature._transforms import DomainKind, classify_domain

__all__ = [
    # Integration
    "integrate_quadgk",
    "integrate_quadgk_info",
    "integrate_quadgh",
    # Evaluators
    "evaluate_quadgk",
    "evaluate_quadgk15",
    "evaluate_quadgk21",
    "evaluate_quadgh",
    "evaluate_quadgh64",
    # Rules and working storage
    "GaussKronrod",
    "GaussHermite",
    "Subintervals",
    "Estimates",
    "DomainKind",
    "QuadratureResult",
    "classify_domain",
    # Node/weight tables
    "gauss_kronrod_nodes_weights",
    "gauss_hermite_nodes_weights",
    # Exceptions
    "QuadratureError",
    "InvalidDomainError",
    "InvalidArgumentError",
    "InvalidConfigurationError",
    "QuadratureWarning",
]

__version__ = "0.1.0"
