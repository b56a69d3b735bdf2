import pytest
import torch


class TestSubintervals:
    def test_uniform(self):
        from torchquadrature import Subintervals

        subs = Subintervals.uniform(0.0, 1.0, 4)

        assert len(subs) == 4
        assert subs.dtype == torch.float64
        assert torch.allclose(
            subs.lo, torch.tensor([0.0, 0.25, 0.5, 0.75], dtype=torch.float64)
        )
        assert torch.allclose(
            subs.hi, torch.tensor([0.25, 0.5, 0.75, 1.0], dtype=torch.float64)
        )

    def test_uniform_endpoints_exact(self):
        from torchquadrature import Subintervals

        subs = Subintervals.uniform(-1.0, 1.0, 10)

        assert subs.lo[0].item() == -1.0
        assert subs.hi[-1].item() == 1.0

    def test_flat_layout(self):
        """lo of subinterval i at 2i, hi at 2i + 1"""
        from torchquadrature import Subintervals

        subs = Subintervals.uniform(0.0, 3.0, 3)
        flat = subs.flatten()

        assert torch.allclose(
            flat,
            torch.tensor([0.0, 1.0, 1.0, 2.0, 2.0, 3.0], dtype=torch.float64),
        )

    def test_widths_and_midpoints(self):
        from torchquadrature import Subintervals

        subs = Subintervals(torch.tensor([[0.0, 2.0], [2.0, 3.0]]))

        assert torch.allclose(subs.widths, torch.tensor([2.0, 1.0]))
        assert torch.allclose(subs.midpoints, torch.tensor([1.0, 2.5]))
        assert torch.allclose(subs.half_widths, torch.tensor([1.0, 0.5]))

    def test_uniform_near_float_max(self):
        from torchquadrature import Subintervals

        subs = Subintervals.uniform(-1e308, 1e308, 4)

        assert torch.isfinite(subs.bounds).all()
        assert subs.lo[0].item() == -1e308
        assert subs.hi[-1].item() == 1e308
        assert torch.allclose(
            subs.half_widths,
            torch.full((4,), 2.5e307, dtype=torch.float64),
        )
        assert torch.isfinite(subs.midpoints).all()

    def test_bisect_order(self):
        from torchquadrature import Subintervals

        subs = Subintervals(
            torch.tensor([[0.0, 1.0], [4.0, 6.0]], dtype=torch.float64)
        )
        halves = subs.bisect()

        expected = torch.tensor(
            [[0.0, 0.5], [0.5, 1.0], [4.0, 5.0], [5.0, 6.0]],
            dtype=torch.float64,
        )
        assert torch.equal(halves.bounds, expected)

    def test_bisect_halves_max_width(self):
        from torchquadrature import Subintervals

        subs = Subintervals.uniform(0.0, 1.0, 3)
        halves = subs.bisect()

        assert len(halves) == 6
        assert halves.widths.max() < subs.widths.max()

    def test_bisect_does_not_mutate(self):
        from torchquadrature import Subintervals

        subs = Subintervals.uniform(0.0, 1.0, 2)
        before = subs.bounds.clone()
        subs.bisect()

        assert torch.equal(subs.bounds, before)

    def test_select(self):
        from torchquadrature import Subintervals

        subs = Subintervals.uniform(0.0, 4.0, 4)
        kept = subs.select(torch.tensor([True, False, False, True]))

        assert len(kept) == 2
        assert torch.allclose(
            kept.lo, torch.tensor([0.0, 3.0], dtype=torch.float64)
        )

    def test_invalid_shape_raises(self):
        from torchquadrature import Subintervals

        with pytest.raises(ValueError, match="shape"):
            Subintervals(torch.zeros(6))


class TestEstimates:
    def test_zeros(self):
        from torchquadrature import Estimates

        estimates = Estimates.zeros(5)

        assert len(estimates) == 5
        assert estimates.integral.dtype == torch.float64
        assert (estimates.error == 0).all()

    def test_total(self):
        from torchquadrature import Estimates

        estimates = Estimates(
            torch.tensor([1.0, 2.0, 3.0]), torch.tensor([0.1, 0.2, 0.3])
        )
        q, err = estimates.total()

        assert torch.allclose(q, torch.tensor(6.0))
        assert torch.allclose(err, torch.tensor(0.6))

    def test_select(self):
        from torchquadrature import Estimates

        estimates = Estimates(
            torch.tensor([1.0, 2.0, 3.0]), torch.tensor([0.1, 0.2, 0.3])
        )
        kept = estimates.select(torch.tensor([False, True, True]))

        assert torch.equal(kept.integral, torch.tensor([2.0, 3.0]))
        assert torch.equal(kept.error, torch.tensor([0.2, 0.3]))

    def test_mismatched_lengths_raise(self):
        from torchquadrature import Estimates

        with pytest.raises(ValueError, match="same shape"):
            Estimates(torch.zeros(3), torch.zeros(4))
