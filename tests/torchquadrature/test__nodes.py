import math

import pytest
import torch
from numpy.polynomial.hermite import hermgauss
from numpy.polynomial.legendre import leggauss


class TestGaussKronrodNodesWeights:
    @pytest.mark.parametrize("order", [15, 21])
    def test_shapes(self, order):
        from torchquadrature._nodes import gauss_kronrod_nodes_weights

        nodes, k_weights, g_weights, g_indices = gauss_kronrod_nodes_weights(
            order
        )

        assert nodes.shape == (order,)
        assert k_weights.shape == (order,)
        assert g_weights.shape == (order // 2,)
        assert g_indices.shape == (order // 2,)
        assert g_indices.dtype == torch.long

    @pytest.mark.parametrize("order", [15, 21])
    def test_nodes_sorted_and_symmetric(self, order):
        from torchquadrature._nodes import gauss_kronrod_nodes_weights

        nodes, k_weights, _, _ = gauss_kronrod_nodes_weights(order)

        assert (nodes[1:] > nodes[:-1]).all()
        assert (nodes > -1).all()
        assert (nodes < 1).all()
        assert torch.equal(nodes, -nodes.flip(0))
        assert torch.equal(k_weights, k_weights.flip(0))

    @pytest.mark.parametrize("order", [15, 21])
    def test_weights_sum_to_two(self, order):
        from torchquadrature._nodes import gauss_kronrod_nodes_weights

        _, k_weights, g_weights, _ = gauss_kronrod_nodes_weights(order)
        two = torch.tensor(2.0, dtype=torch.float64)

        assert torch.allclose(k_weights.sum(), two, rtol=1e-14)
        assert torch.allclose(g_weights.sum(), two, rtol=1e-14)

    @pytest.mark.parametrize("order, n_gauss", [(15, 7), (21, 10)])
    def test_embedded_gauss_rule_matches_numpy(self, order, n_gauss):
        """Embedded nodes and weights are the n-point Gauss-Legendre rule"""
        from torchquadrature._nodes import gauss_kronrod_nodes_weights

        nodes, _, g_weights, g_indices = gauss_kronrod_nodes_weights(order)
        np_nodes, np_weights = leggauss(n_gauss)

        assert torch.allclose(
            nodes[g_indices], torch.tensor(np_nodes), rtol=1e-12
        )
        assert torch.allclose(g_weights, torch.tensor(np_weights), rtol=1e-12)

    @pytest.mark.parametrize("order, degree", [(15, 22), (21, 30)])
    def test_kronrod_exact_for_polynomial(self, order, degree):
        from torchquadrature._nodes import gauss_kronrod_nodes_weights

        nodes, k_weights, _, _ = gauss_kronrod_nodes_weights(order)

        result = (nodes**degree * k_weights).sum()
        expected = torch.tensor(2 / (degree + 1), dtype=torch.float64)

        assert torch.allclose(result, expected, rtol=1e-13)

    def test_dtype(self):
        from torchquadrature._nodes import gauss_kronrod_nodes_weights

        nodes, k_weights, g_weights, _ = gauss_kronrod_nodes_weights(
            21, dtype=torch.float32
        )

        assert nodes.dtype == torch.float32
        assert k_weights.dtype == torch.float32
        assert g_weights.dtype == torch.float32

    def test_unsupported_order_raises(self):
        from torchquadrature import InvalidConfigurationError
        from torchquadrature._nodes import gauss_kronrod_nodes_weights

        with pytest.raises(InvalidConfigurationError, match="15 or 21"):
            gauss_kronrod_nodes_weights(31)


class TestGaussHermiteNodesWeights:
    def test_default_is_64_points(self):
        from torchquadrature._nodes import gauss_hermite_nodes_weights

        nodes, weights = gauss_hermite_nodes_weights()

        assert nodes.shape == (64,)
        assert weights.shape == (64,)

    def test_weights_sum_to_sqrt_pi(self):
        from torchquadrature._nodes import gauss_hermite_nodes_weights

        _, weights = gauss_hermite_nodes_weights(64)

        assert torch.allclose(
            weights.sum(),
            torch.tensor(math.sqrt(math.pi), dtype=torch.float64),
            rtol=1e-13,
        )

    def test_symmetric(self):
        from torchquadrature._nodes import gauss_hermite_nodes_weights

        nodes, weights = gauss_hermite_nodes_weights(64)

        assert (nodes[1:] > nodes[:-1]).all()
        assert torch.allclose(nodes, -nodes.flip(0), rtol=0, atol=1e-13)
        assert torch.allclose(weights, weights.flip(0), rtol=1e-12)
        assert (weights > 0).all()

    def test_matches_numpy_hermgauss(self):
        from torchquadrature._nodes import gauss_hermite_nodes_weights

        nodes, weights = gauss_hermite_nodes_weights(64)
        expected_nodes, expected_weights = hermgauss(64)

        assert torch.allclose(
            nodes, torch.from_numpy(expected_nodes), rtol=1e-13, atol=1e-13
        )
        assert torch.allclose(
            weights, torch.from_numpy(expected_weights), rtol=1e-10, atol=0
        )

    def test_table_is_not_shared_mutable_state(self):
        from torchquadrature._nodes import gauss_hermite_nodes_weights

        nodes, _ = gauss_hermite_nodes_weights(64)
        nodes.zero_()
        fresh, _ = gauss_hermite_nodes_weights(64)

        assert not torch.equal(fresh, nodes)

    @pytest.mark.parametrize("order", [0, -3, 2.5, 5, 32])
    def test_invalid_order_raises(self, order):
        from torchquadrature import InvalidConfigurationError
        from torchquadrature._nodes import gauss_hermite_nodes_weights

        with pytest.raises(InvalidConfigurationError, match="64"):
            gauss_hermite_nodes_weights(order)
