"""Gauss-Hermite quadrature over the real line."""

from typing import Callable, Optional

import torch
from torch import Tensor

from torchquadrature._exceptions import InvalidConfigurationError
from torchquadrature._rules import GaussHermite, evaluate_integrand

_GH64 = GaussHermite(64)


def evaluate_quadgh(
    f: Callable[[Tensor], Tensor],
    rule: GaussHermite,
    *,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tensor:
    """
    Evaluate the integral of exp(-x^2) f(x) over the real line with ``rule``.

    Parameters
    ----------
    f : callable
        Integrand, called once with the tensor of all nodes.
    rule : GaussHermite
        Gauss-Hermite rule supplying nodes and weights.
    dtype : torch.dtype
        Precision of the nodes, weights and result.
    device : torch.device, optional
        Device of the nodes, weights and result.

    Returns
    -------
    Tensor
        ``sum(w_i * f(x_i))``, 0-dim. Non-finite function values propagate.

    Raises
    ------
    InvalidConfigurationError
        If the rule tables do not hold ``rule.order`` nodes and weights.
    """
    nodes, weights = rule.nodes_weights(dtype, device)

    if nodes.shape[-1] != rule.order or weights.shape != nodes.shape:
        raise InvalidConfigurationError(
            f"Gauss-Hermite table has {nodes.shape[-1]} nodes and "
            f"{weights.shape[-1]} weights, expected {rule.order}"
        )

    values = evaluate_integrand(f, nodes)

    return (values * weights).sum(dim=-1)


def evaluate_quadgh64(
    f: Callable[[Tensor], Tensor],
    *,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tensor:
    """Evaluate with the precomputed 64-point Gauss-Hermite rule."""
    return evaluate_quadgh(f, _GH64, dtype=dtype, device=device)


def integrate_quadgh(
    f: Callable[[Tensor], Tensor],
    *,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tensor:
    r"""
    Compute an integral of the following kind with the 64-point Gauss-Hermite
    rule.

    .. math::

        \int_{-\infty}^{\infty} e^{-x^2} f(x) dx \approx
        \sum_{i=1}^{64} w_i f(x_i)

    Parameters
    ----------
    f : callable
        Integrand without the exp(-x^2) weight. Receives a tensor of nodes
        and returns the function values element-wise.
    dtype : torch.dtype
        Precision of the computation.
    device : torch.device, optional
        Device of the computation.

    Returns
    -------
    Tensor
        Integral approximation, 0-dim.

    Notes
    -----
    Single pass of 64 function evaluations, no error estimate. Exact for
    polynomials of degree <= 127.

    Examples
    --------
    >>> integrate_quadgh(lambda x: torch.ones_like(x))  # sqrt(pi)
    >>> integrate_quadgh(lambda x: x**2)  # sqrt(pi) / 2
    """
    return evaluate_quadgh64(f, dtype=dtype, device=device)
