"""
Benchmarks for vectordist.

Measures per-call cost of value-only metrics against their gradient
counterparts across dimensions.

Usage:
    python -m tests.benchmark.bench_gradients
    python -m tests.benchmark.bench_gradients --dimension 256 --pairs 2000
"""

import json
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Sequence, Tuple

import numpy as np


Pair = Tuple[np.ndarray, np.ndarray]


@dataclass
class MetricTiming:
    """Per-call timing of one metric function over a batch of pairs."""

    kind: str  # "value" or "gradient"
    metric: str
    dimension: int
    n_pairs: int

    # Seconds per call, over repeated passes through the batch
    mean_seconds: float
    best_seconds: float
    spread_seconds: float

    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def calls_per_second(self) -> float:
        return 1.0 / self.mean_seconds if self.mean_seconds > 0 else float("inf")

    def __str__(self) -> str:
        return (
            f"{self.kind:<9} {self.metric:<24} dim={self.dimension:<5} "
            f"{self.mean_seconds * 1e6:8.2f} us/call "
            f"({self.calls_per_second:,.0f} calls/sec)"
        )


def time_per_call(
    func: Callable,
    pairs: Sequence[Pair],
    repeats: int = 5,
    warmup: int = 1,
    **params,
) -> np.ndarray:
    """Seconds per call for each of `repeats` passes over `pairs`."""
    for _ in range(warmup):
        for a, b in pairs:
            func(a, b, **params)

    per_call = np.empty(repeats)
    for r in range(repeats):
        start = time.perf_counter()
        for a, b in pairs:
            func(a, b, **params)
        per_call[r] = (time.perf_counter() - start) / len(pairs)
    return per_call


class BenchmarkSuite:
    """Collects MetricTiming results and reports them."""

    def __init__(self, repeats: int = 5, warmup: int = 1):
        self.repeats = repeats
        self.warmup = warmup
        self.timings: List[MetricTiming] = []

    def measure(
        self,
        kind: str,
        metric: str,
        func: Callable,
        pairs: Sequence[Pair],
        **params,
    ) -> MetricTiming:
        per_call = time_per_call(
            func, pairs, repeats=self.repeats, warmup=self.warmup, **params
        )
        timing = MetricTiming(
            kind=kind,
            metric=metric,
            dimension=int(pairs[0][0].shape[0]),
            n_pairs=len(pairs),
            mean_seconds=float(per_call.mean()),
            best_seconds=float(per_call.min()),
            spread_seconds=float(per_call.std()),
            params=dict(params),
        )
        self.timings.append(timing)
        return timing

    def save(self, filepath: str) -> None:
        """Write all timings to a JSON file."""
        payload = {
            "created": time.strftime("%Y-%m-%dT%H:%M:%S"),
            "numpy": np.__version__,
            "timings": [asdict(t) for t in self.timings],
        }
        target = Path(filepath)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(payload, indent=2, default=str))

    def report(self) -> None:
        print("\n" + "=" * 72)
        print("METRIC TIMINGS")
        print("=" * 72)
        for timing in self.timings:
            print(timing)
        print("=" * 72)


def generate_pairs(
    n_pairs: int,
    dimension: int,
    low: float = 0.1,
    high: float = 2.0,
    seed: int = 42,
) -> List[Pair]:
    """Generate random vector pairs with entries uniform in [low, high)."""
    rng = np.random.default_rng(seed)
    data = rng.uniform(low, high, size=(n_pairs, 2, dimension))
    return [(row[0], row[1]) for row in data]
