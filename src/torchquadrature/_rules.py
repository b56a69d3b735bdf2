"""Quadrature rule classes."""

from typing import Callable, Optional, Tuple, Union

import torch
from torch import Tensor

from torchquadrature._exceptions import InvalidConfigurationError
from torchquadrature._nodes import (
    gauss_hermite_nodes_weights,
    gauss_kronrod_nodes_weights,
)


def evaluate_integrand(
    f: Callable[[Tensor], Union[Tensor, float]], x: Tensor
) -> Tensor:
    """
    Evaluate ``f`` element-wise at ``x``.

    A Python number or a tensor that broadcasts against ``x`` (e.g. a
    constant integrand) is expanded to the shape of ``x``.
    """
    values = f(x)

    if not isinstance(values, Tensor):
        values = torch.as_tensor(values, dtype=x.dtype, device=x.device)

    if values.shape != x.shape:
        values = torch.broadcast_to(values, x.shape)

    return values


class GaussKronrod:
    """
    Gauss-Kronrod quadrature rule with embedded error estimation.

    Uses G(n)-K(2n+1) pairs: G7-K15, G10-K21.

    Parameters
    ----------
    order : int
        Kronrod order: 15 or 21.

    Examples
    --------
    >>> rule = GaussKronrod(21)  # G10-K21
    >>> nodes, k_weights, g_weights, g_indices = rule.nodes_weights()

    Attributes
    ----------
    order : int
        Number of Kronrod points.
    """

    def __init__(self, order: int = 15):
        if order not in (15, 21):
            raise InvalidConfigurationError(
                f"order must be 15 or 21, got {order}"
            )
        self.order = order
        self._cache: dict = {}

    def nodes_weights(
        self,
        dtype: torch.dtype = torch.float64,
        device: Optional[torch.device] = None,
    ) -> Tuple[Tensor, Tensor, Tensor, Tensor]:
        """Get nodes and weights on [-1, 1].

        Tables are cached per dtype and device; the returned tensors are
        copies, so modifying them does not affect later integrations.
        """
        key = (str(dtype), str(device))
        if key not in self._cache:
            self._cache[key] = gauss_kronrod_nodes_weights(
                self.order, dtype=dtype, device=device
            )
        return tuple(t.clone() for t in self._cache[key])

    def __repr__(self) -> str:
        return f"GaussKronrod(order={self.order})"


class GaussHermite:
    """
    Gauss-Hermite quadrature rule for the weight exp(-x^2).

    Exact for polynomials of degree <= 2n-1 integrated against exp(-x^2)
    over the real line.

    Parameters
    ----------
    order : int
        Number of quadrature points. Only the tabulated 64-point rule is
        available.

    Attributes
    ----------
    order : int
        Number of points.
    """

    def __init__(self, order: int = 64):
        if order != 64:
            raise InvalidConfigurationError(f"order must be 64, got {order}")
        self.order = order
        self._cache: dict = {}

    def nodes_weights(
        self,
        dtype: torch.dtype = torch.float64,
        device: Optional[torch.device] = None,
    ) -> Tuple[Tensor, Tensor]:
        """Get copies of the cached nodes and weights."""
        key = (str(dtype), str(device))
        if key not in self._cache:
            self._cache[key] = gauss_hermite_nodes_weights(
                self.order, dtype=dtype, device=device
            )
        return tuple(t.clone() for t in self._cache[key])

    def __repr__(self) -> str:
        return f"GaussHermite(order={self.order})"
