"""Benchmark adaptive Gauss-Kronrod quadrature.

Times integrate_quadgk on integrands of increasing difficulty and reports the
number of refinement passes and integrand evaluations each one needs.
"""

import math
import time

import torch

from torchquadrature import integrate_quadgh, integrate_quadgk_info

CASES = [
    ("x^2 on [0, 1]", lambda x: x**2, 0.0, 1.0),
    ("sin(50x) on [0, pi]", lambda x: torch.sin(50 * x), 0.0, math.pi),
    ("1/sqrt(x) on [0, 1]", lambda x: 1 / torch.sqrt(x), 0.0, 1.0),
    ("exp(-x^2) on R", lambda x: torch.exp(-(x**2)), -math.inf, math.inf),
    ("exp(-x) on [0, inf)", lambda x: torch.exp(-x), 0.0, math.inf),
]


def benchmark_quadgk(f, a, b, n_iterations: int = 20):
    """Benchmark one integrand.

    Returns
    -------
    tuple
        Average time in milliseconds and the last QuadratureResult.
    """
    # Warmup
    for _ in range(3):
        info = integrate_quadgk_info(f, a, b)

    start = time.perf_counter()
    for _ in range(n_iterations):
        info = integrate_quadgk_info(f, a, b)

    elapsed = time.perf_counter() - start
    return elapsed / n_iterations * 1000, info


def main():
    """Run quadrature benchmarks."""
    print("Adaptive Gauss-Kronrod Benchmark")
    print("=" * 78)
    print(f"{'Integrand':<24} {'Time (ms)':>10} {'Iter':>6} {'Evals':>8} {'Error':>12}")
    print("-" * 78)

    for name, f, a, b in CASES:
        ms, info = benchmark_quadgk(f, a, b)
        print(
            f"{name:<24} {ms:>10.3f} {info.num_iterations:>6} "
            f"{info.num_evaluations:>8} {info.error.item():>12.2e}"
        )

    start = time.perf_counter()
    for _ in range(100):
        integrate_quadgh(torch.cos)
    ms = (time.perf_counter() - start) / 100 * 1000

    print("-" * 78)
    print(f"{'64-point Gauss-Hermite':<24} {ms:>10.3f}")


if __name__ == "__main__":
    main()
