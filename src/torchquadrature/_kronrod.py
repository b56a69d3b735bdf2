"""Gauss-Kronrod estimates on a batch of subintervals."""

from typing import Callable, Optional

import torch
from torch import Tensor

from torchquadrature._exceptions import (
    InvalidArgumentError,
    InvalidConfigurationError,
)
from torchquadrature._rules import GaussKronrod, evaluate_integrand
from torchquadrature._subintervals import Estimates, Subintervals

_GK15 = GaussKronrod(15)
_GK21 = GaussKronrod(21)


def _error_estimate(
    values: Tensor,
    half_width: Tensor,
    kronrod_sum: Tensor,
    gauss_sum: Tensor,
    k_weights: Tensor,
) -> Tensor:
    """QUADPACK error estimate for one Gauss-Kronrod pass per row."""
    finfo = torch.finfo(values.dtype)

    error = torch.abs((kronrod_sum - gauss_sum) * half_width)

    # Integral of |f| and of |f - mean(f)| over each subinterval
    resabs = (torch.abs(values) * k_weights).sum(dim=-1) * torch.abs(
        half_width
    )
    mean = (kronrod_sum / 2).unsqueeze(-1)
    resasc = (torch.abs(values - mean) * k_weights).sum(dim=-1) * torch.abs(
        half_width
    )

    scale = (resasc != 0) & (error != 0)
    ratio = torch.clamp(
        200 * error / torch.where(scale, resasc, torch.ones_like(resasc)),
        max=1.0,
    )
    error = torch.where(scale, resasc * ratio**1.5, error)

    # Roundoff floor
    noisy = resabs > finfo.tiny / (50 * finfo.eps)
    error = torch.where(
        noisy, torch.maximum(50 * finfo.eps * resabs, error), error
    )

    return error


def evaluate_quadgk(
    f: Callable[[Tensor], Tensor],
    subintervals: Subintervals,
    rule: GaussKronrod,
    estimates: Optional[Estimates] = None,
) -> Estimates:
    """
    Estimate the integral and its error on every subinterval.

    Parameters
    ----------
    f : callable
        Integrand. Called once with a tensor of shape (m, order) holding the
        mapped nodes of all m subintervals.
    subintervals : Subintervals
        Subintervals to integrate over. Not modified.
    rule : GaussKronrod
        Gauss-Kronrod rule supplying nodes and weights on [-1, 1].
    estimates : Estimates, optional
        Storage to overwrite in place. Must have one entry per subinterval.

    Returns
    -------
    Estimates
        Kronrod estimate and absolute error estimate per subinterval, in the
        same order as ``subintervals``.

    Raises
    ------
    InvalidConfigurationError
        If the rule tables do not have ``rule.order`` Kronrod nodes and
        ``rule.order // 2`` Gauss nodes.
    InvalidArgumentError
        If ``estimates`` does not match ``subintervals`` in length.

    Notes
    -----
    Nodes are mapped from [-1, 1] to [lo, hi] by ``x = c + h * xi`` with
    ``c = (lo + hi) / 2`` and ``h = (hi - lo) / 2``; weights scale by ``h``.
    Sums run over the node axis in table order, so identical inputs give
    identical results.

    The error is ``|K - G|`` rescaled as in QUADPACK:
    ``resasc * min(1, (200 |K - G| / resasc) ** 1.5)``, floored at
    ``50 * eps * resabs``.
    """
    nodes, k_weights, g_weights, g_indices = rule.nodes_weights(
        subintervals.dtype, subintervals.device
    )

    if (
        nodes.shape[-1] != rule.order
        or k_weights.shape[-1] != rule.order
        or g_weights.shape[-1] != rule.order // 2
        or g_indices.shape != g_weights.shape
    ):
        raise InvalidConfigurationError(
            f"Gauss-Kronrod table has {nodes.shape[-1]} Kronrod and "
            f"{g_weights.shape[-1]} Gauss nodes, expected {rule.order} and "
            f"{rule.order // 2}"
        )

    if estimates is not None and len(estimates) != len(subintervals):
        raise InvalidArgumentError(
            f"estimates has {len(estimates)} entries, expected "
            f"{len(subintervals)}"
        )

    half_width = subintervals.half_widths
    center = subintervals.midpoints

    x = center.unsqueeze(-1) + half_width.unsqueeze(-1) * nodes
    values = evaluate_integrand(f, x)

    kronrod_sum = (values * k_weights).sum(dim=-1)
    integral = kronrod_sum * half_width

    with torch.no_grad():
        detached = values.detach()
        gauss_sum = (detached[..., g_indices] * g_weights).sum(dim=-1)
        error = _error_estimate(
            detached,
            half_width,
            kronrod_sum.detach(),
            gauss_sum,
            k_weights,
        )

    if estimates is None:
        return Estimates(integral, error)

    estimates.integral.copy_(integral)
    estimates.error.copy_(error)

    return estimates


def evaluate_quadgk15(
    f: Callable[[Tensor], Tensor],
    subintervals: Subintervals,
    estimates: Optional[Estimates] = None,
) -> Estimates:
    """Evaluate every subinterval with the G7-K15 rule."""
    return evaluate_quadgk(f, subintervals, _GK15, estimates)


def evaluate_quadgk21(
    f: Callable[[Tensor], Tensor],
    subintervals: Subintervals,
    estimates: Optional[Estimates] = None,
) -> Estimates:
    """Evaluate every subinterval with the G10-K21 rule."""
    return evaluate_quadgk(f, subintervals, _GK21, estimates)
