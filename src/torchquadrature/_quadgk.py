"""Adaptive quadrature using Gauss-Kronrod rules."""

import math
import warnings
from typing import Callable, NamedTuple, Union

import torch
from torch import Tensor

from torchquadrature._exceptions import (
    InvalidArgumentError,
    InvalidDomainError,
    QuadratureWarning,
)
from torchquadrature._kronrod import evaluate_quadgk15, evaluate_quadgk21
from torchquadrature._subintervals import Subintervals
from torchquadrature._transforms import DomainKind, substitute


class QuadratureResult(NamedTuple):
    """Result of an adaptive quadrature.

    Parameters
    ----------
    integral : Tensor
        Integral approximation, 0-dim. Autograd gradients with respect to
        parameters captured by the integrand flow through this field.
    error : Tensor
        Estimated absolute error, 0-dim.
    converged : bool
        Whether the requested tolerance was met.
    num_iterations : int
        Number of evaluate-and-refine passes performed.
    num_subintervals : int
        Number of subintervals the domain ended up split into.
    num_evaluations : int
        Number of integrand evaluations.
    """

    integral: Tensor
    error: Tensor
    converged: bool
    num_iterations: int
    num_subintervals: int
    num_evaluations: int


def _is_count(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_arguments(a, b, abs_tol, rel_tol, max_iter, sn, limit):
    if math.isnan(a) or math.isnan(b):
        raise InvalidArgumentError(
            f"integration bounds must not be NaN, got a={a}, b={b}"
        )
    if a > b:
        raise InvalidDomainError(
            f"lower bound must not exceed upper bound, got a={a}, b={b}"
        )

    for name, tol in (("abs_tol", abs_tol), ("rel_tol", rel_tol)):
        if not math.isfinite(tol) or tol <= 0:
            raise InvalidArgumentError(
                f"{name} must be finite and positive, got {tol}"
            )

    if not _is_count(max_iter) or max_iter < 1:
        raise InvalidArgumentError(
            f"max_iter must be a positive integer, got {max_iter}"
        )
    if not _is_count(sn) or sn < 1:
        raise InvalidArgumentError(
            f"sn must be a positive integer, got {sn}"
        )
    if not _is_count(limit) or limit < sn:
        raise InvalidArgumentError(
            f"limit must be an integer no smaller than sn={sn}, got {limit}"
        )


def integrate_quadgk(
    f: Callable[[Tensor], Tensor],
    a: Union[float, Tensor],
    b: Union[float, Tensor],
    abs_tol: float = 1e-10,
    rel_tol: float = 1e-5,
    max_iter: int = 1000,
    sn: int = 10,
    *,
    limit: int = 65536,
) -> Tensor:
    r"""
    Compute a definite integral using adaptive Gauss-Kronrod quadrature.

    .. math::

        \int_a^b f(x) dx \approx \sum_i w_i f(x_i)

    The G10-K21 rule is applied on finite domains and the G7-K15 rule on
    semi-infinite and doubly infinite ones, after a change of variables onto
    a finite interval.

    Parameters
    ----------
    f : callable
        Integrand. Receives a tensor of nodes and returns the function values
        element-wise. A Python number is treated as a constant integrand.
    a, b : float or Tensor
        Integration bounds (scalars). ``a`` may be ``-inf`` and ``b`` may be
        ``inf``.
    abs_tol : float
        Absolute error tolerance.
    rel_tol : float
        Relative error tolerance.
    max_iter : int
        Maximum number of evaluate-and-refine passes.
    sn : int
        Initial number of equal subintervals.
    limit : int
        Maximum number of active subintervals.

    Returns
    -------
    Tensor
        Integral approximation, 0-dim. When the tolerance cannot be met the
        best available estimate is returned.

    Raises
    ------
    InvalidDomainError
        If ``a > b``.
    InvalidArgumentError
        If a bound is NaN, a tolerance is not positive or not finite, or a
        count is not a positive integer.

    Warns
    -----
    QuadratureWarning
        If the tolerance was not met.

    Notes
    -----
    Differentiable with respect to parameters captured in f's closure.
    Gradients through the integration limits are not supported.

    Examples
    --------
    >>> integrate_quadgk(torch.sin, 0, torch.pi)  # approximately 2.0

    >>> # Gaussian integral over the real line
    >>> integrate_quadgk(lambda x: torch.exp(-(x**2)), -math.inf, math.inf)
    """
    return integrate_quadgk_info(
        f,
        a,
        b,
        abs_tol=abs_tol,
        rel_tol=rel_tol,
        max_iter=max_iter,
        sn=sn,
        limit=limit,
    ).integral


def integrate_quadgk_info(
    f: Callable[[Tensor], Tensor],
    a: Union[float, Tensor],
    b: Union[float, Tensor],
    abs_tol: float = 1e-10,
    rel_tol: float = 1e-5,
    max_iter: int = 1000,
    sn: int = 10,
    *,
    limit: int = 65536,
) -> QuadratureResult:
    """
    Like integrate_quadgk, but returns error estimate and diagnostics.

    Returns
    -------
    QuadratureResult
        Integral, error estimate, convergence flag and counters.

    Notes
    -----
    Each pass evaluates all active subintervals in one batched call, then
    accepts those whose error is below their width-proportional share of the
    tolerance and bisects all the others. The widest active subinterval
    therefore halves on every pass.
    """
    if isinstance(a, Tensor):
        dtype = a.dtype
        device = a.device
        a_val = a.detach().item()
    elif isinstance(b, Tensor):
        dtype = b.dtype
        device = b.device
        a_val = float(a)
    else:
        dtype = torch.float64
        device = torch.device("cpu")
        a_val = float(a)

    if isinstance(b, Tensor):
        b_val = b.detach().item()
    else:
        b_val = float(b)

    if not dtype.is_floating_point:
        dtype = torch.float64

    _check_arguments(a_val, b_val, abs_tol, rel_tol, max_iter, sn, limit)

    if a_val == b_val:
        zero = torch.zeros((), dtype=dtype, device=device)
        return QuadratureResult(zero, zero.clone(), True, 0, 0, 0)

    g, lo, hi, kind = substitute(f, a_val, b_val)

    if kind is DomainKind.FINITE:
        evaluate, order = evaluate_quadgk21, 21
    else:
        evaluate, order = evaluate_quadgk15, 15

    subs = Subintervals.uniform(lo, hi, sn, dtype=dtype, device=device)
    total_half_width = hi / 2 - lo / 2

    q_ok = torch.zeros((), dtype=dtype, device=device)
    err_ok = torch.zeros((), dtype=dtype, device=device)
    num_accepted = 0
    num_evaluations = 0
    converged = False
    reason = f"maximum number of iterations ({max_iter}) reached"

    for iteration in range(1, max_iter + 1):
        estimates = evaluate(g, subs)
        num_evaluations += order * len(subs)

        q_subs, err_subs = estimates.total()
        q = q_ok + q_subs
        err = err_ok + err_subs

        q_val = q.item()
        if not math.isfinite(q_val):
            reason = f"non-finite integral estimate ({q_val})"
            break

        tol = max(abs_tol, rel_tol * abs(q_val))
        if err.item() <= tol:
            converged = True
            break

        accepted = estimates.error < tol * subs.half_widths / total_half_width
        if accepted.any():
            done = estimates.select(accepted)
            q_ok = q_ok + done.integral.sum()
            err_ok = err_ok + done.error.sum()
            num_accepted += int(accepted.sum().item())
            subs = subs.select(~accepted)

        if len(subs) == 0:
            reason = "tolerance not met after accepting every subinterval"
            break

        if iteration == max_iter:
            break

        if 2 * len(subs) > limit:
            reason = f"subinterval limit ({limit}) reached"
            break

        subs = subs.bisect()

    num_subintervals = num_accepted + len(subs)

    if not converged:
        warnings.warn(
            f"Quadrature did not converge: {reason}. "
            f"Error estimate: {err.item():.2e}",
            QuadratureWarning,
        )

    return QuadratureResult(
        q,
        err,
        converged,
        iteration,
        num_subintervals,
        num_evaluations,
    )
