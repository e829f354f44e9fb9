"""
Benchmarks for value-only metrics versus their gradient counterparts.

Usage:
    python -m tests.benchmark.bench_gradients
    python -m tests.benchmark.bench_gradients --dimension 256 --output results/gradients.json
"""

import argparse

import numpy as np

from tests.benchmark import BenchmarkSuite, generate_pairs
from vectordist.distance import get_metric, list_gradient_metrics
from vectordist.utils.logging import get_logger


logger = get_logger("vectordist.benchmark")


def _pairs_for(metric: str, n_pairs: int, dimension: int):
    if metric == "haversine":
        return generate_pairs(n_pairs, 2, low=-1.0, high=1.0)
    if metric == "poincare":
        # Keep both points inside the unit ball
        scale = 0.9 / np.sqrt(dimension)
        return generate_pairs(n_pairs, dimension, low=-scale, high=scale)
    return generate_pairs(n_pairs, dimension)


def run_gradient_benchmarks(
    dimension: int = 64,
    n_pairs: int = 1000,
    metrics=None,
) -> BenchmarkSuite:
    """Time value and gradient functions for every gradient metric."""
    suite = BenchmarkSuite()

    for metric in metrics or list_gradient_metrics():
        info = get_metric(metric)
        pairs = _pairs_for(metric, n_pairs, dimension)

        value = suite.measure("value", metric, info.function, pairs)
        grad = suite.measure("gradient", metric, info.gradient_function, pairs)
        overhead = grad.mean_seconds / value.mean_seconds

        logger.info(
            f"{metric}: gradient costs {overhead:.2f}x the value"
        )

    return suite


def main():
    parser = argparse.ArgumentParser(description="Benchmark metric gradients")
    parser.add_argument("--dimension", type=int, default=64)
    parser.add_argument("--pairs", type=int, default=1000)
    parser.add_argument("--metric", action="append", dest="metrics")
    parser.add_argument("--output", type=str, default=None)
    args = parser.parse_args()

    suite = run_gradient_benchmarks(args.dimension, args.pairs, args.metrics)
    suite.report()

    if args.output:
        suite.save(args.output)
        logger.info(f"Results saved to {args.output}")


if __name__ == "__main__":
    main()
