"""Working storage for adaptive quadrature."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import torch
from torch import Tensor


@dataclass
class Subintervals:
    """Ordered collection of integration subintervals.

    Parameters
    ----------
    bounds : Tensor
        Shape (m, 2). Row ``i`` holds ``(lo, hi)`` of subinterval ``i``, so the
        flattened storage keeps ``lo`` at ``2i`` and ``hi`` at ``2i + 1``.

    Examples
    --------
    >>> subs = Subintervals.uniform(0.0, 1.0, 4)
    >>> len(subs)
    4
    >>> len(subs.bisect())
    8
    """

    bounds: Tensor

    def __post_init__(self):
        if self.bounds.dim() != 2 or self.bounds.shape[-1] != 2:
            raise ValueError(
                f"bounds must have shape (m, 2), got {tuple(self.bounds.shape)}"
            )

    @classmethod
    def uniform(
        cls,
        lo: float,
        hi: float,
        n: int,
        *,
        dtype: torch.dtype = torch.float64,
        device: Optional[torch.device] = None,
    ) -> Subintervals:
        """Split ``[lo, hi]`` into ``n`` subintervals of equal width.

        Edges are convex combinations of the endpoints, so they stay finite
        even when ``hi - lo`` overflows.
        """
        fractions = torch.arange(n + 1, dtype=dtype, device=device) / n
        edges = lo * (1 - fractions) + hi * fractions
        return cls(torch.stack([edges[:-1], edges[1:]], dim=-1))

    def __len__(self) -> int:
        return self.bounds.shape[0]

    @property
    def dtype(self) -> torch.dtype:
        return self.bounds.dtype

    @property
    def device(self) -> torch.device:
        return self.bounds.device

    @property
    def lo(self) -> Tensor:
        return self.bounds[:, 0]

    @property
    def hi(self) -> Tensor:
        return self.bounds[:, 1]

    @property
    def half_widths(self) -> Tensor:
        return self.hi / 2 - self.lo / 2

    @property
    def widths(self) -> Tensor:
        return self.hi - self.lo

    @property
    def midpoints(self) -> Tensor:
        return self.lo / 2 + self.hi / 2

    def flatten(self) -> Tensor:
        """Flat view ``[lo_0, hi_0, lo_1, hi_1, ...]``."""
        return self.bounds.reshape(-1)

    def select(self, mask: Tensor) -> Subintervals:
        """Keep the subintervals where ``mask`` is True, preserving order."""
        return Subintervals(self.bounds[mask])

    def bisect(self) -> Subintervals:
        """Replace every subinterval by its two halves.

        The left half of subinterval ``i`` lands at ``2i`` and the right half
        at ``2i + 1``.
        """
        mid = self.midpoints
        left = torch.stack([self.lo, mid], dim=-1)
        right = torch.stack([mid, self.hi], dim=-1)
        return Subintervals(torch.stack([left, right], dim=1).reshape(-1, 2))


@dataclass
class Estimates:
    """Per-subinterval integral and absolute error estimates.

    Parameters
    ----------
    integral : Tensor
        Integral estimate on each subinterval, shape (m,).
    error : Tensor
        Absolute error estimate on each subinterval, shape (m,).
    """

    integral: Tensor
    error: Tensor

    def __post_init__(self):
        if self.integral.shape != self.error.shape:
            raise ValueError(
                "integral and error must have the same shape, got "
                f"{tuple(self.integral.shape)} and {tuple(self.error.shape)}"
            )

    @classmethod
    def zeros(
        cls,
        n: int,
        *,
        dtype: torch.dtype = torch.float64,
        device: Optional[torch.device] = None,
    ) -> Estimates:
        return cls(
            torch.zeros(n, dtype=dtype, device=device),
            torch.zeros(n, dtype=dtype, device=device),
        )

    def __len__(self) -> int:
        return self.integral.shape[0]

    def select(self, mask: Tensor) -> Estimates:
        return Estimates(self.integral[mask], self.error[mask])

    def total(self) -> tuple[Tensor, Tensor]:
        """Sum of the integral and error estimates."""
        return self.integral.sum(), self.error.sum()
