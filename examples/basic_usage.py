"""
Basic usage example for vectordist.
"""

import numpy as np

from vectordist import (
    euclidean,
    cosine,
    cosine_grad,
    minkowski_grad,
    get_gradient_fn,
    list_metrics,
    list_gradient_metrics,
    check_gradient,
    DistanceCalculator,
    DimensionMismatchError,
)


def main():
    print("=" * 60)
    print("vectordist Basic Usage Example")
    print("=" * 60)

    a = np.array([1.0, 2.0, 3.0])
    b = np.array([4.0, 5.0, 6.0])

    # 1. Value-only metrics
    print("\n1. Value-only metrics...")
    print(f"   euclidean: {euclidean(a, b):.4f}")
    print(f"   cosine:    {cosine(a, b):.4f}")

    # 2. Distance and gradient together
    print("\n2. Distance with gradient...")
    dist, grad = cosine_grad(a, b)
    print(f"   cosine distance: {dist:.4f}")
    print(f"   d/da:            {np.round(grad, 4)}")

    dist, grad = minkowski_grad(a, b, p=3)
    print(f"   minkowski(p=3):  {dist:.4f}, grad={np.round(grad, 4)}")

    # 3. Degenerate inputs are stabilized
    print("\n3. Degenerate inputs...")
    dist, grad = cosine_grad(np.zeros(3), b)
    print(f"   cosine(0, b) = {dist}, grad = {grad}")

    # 4. Registry lookup
    print("\n4. Registry...")
    print(f"   {len(list_metrics())} metrics, "
          f"{len(list_gradient_metrics())} with gradients")

    grad_fn = get_gradient_fn("poincare")
    dist, grad = grad_fn([0.1, 0.2], [0.3, -0.1])
    print(f"   poincare: {dist:.4f}, grad={np.round(grad, 4)}")

    calc = DistanceCalculator("l1")
    print(f"   {calc}: {calc(a, b)}")

    # 5. Verify a gradient numerically
    print("\n5. Finite-difference check...")
    result = check_gradient(get_gradient_fn("hellinger"), a, b)
    print(f"   hellinger passed={result.passed}, max_error={result.max_error:.2e}")

    # 6. Validation
    print("\n6. Validation...")
    try:
        euclidean([1.0, 2.0], [1.0, 2.0, 3.0])
    except DimensionMismatchError as e:
        print(f"   Rejected: {e}")

    print("\n" + "=" * 60)
    print("Example completed!")
    print("=" * 60)


if __name__ == "__main__":
    main()
