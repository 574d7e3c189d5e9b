"""
Example script demonstrating basic usage of the sparsecore package.

This script shows how to:
1. Build a library of candidate functions from a simulated trajectory
2. Sweep the sparsity threshold of the ADMM optimizer
3. Recover an implicit relation with the ADM optimizer
4. Plot the number of active terms against the threshold

Usage:
    python basic_example.py
"""

import numpy as np
import matplotlib.pyplot as plt

from sparsecore import ADM, ADMM, threshold_sweep


def main():
    """Run the example."""
    # Damped oscillator dx = y, dy = -x - 0.1 y
    print("Simulating a damped harmonic oscillator")
    np.random.seed(42)

    t = np.linspace(0.0, 20.0, 1000)
    omega = np.sqrt(1.0 - 0.05 ** 2)
    x = np.exp(-0.05 * t) * np.cos(omega * t)
    y = np.gradient(x, t)
    dx = y
    dy = -x - 0.1 * y

    # Candidate functions
    names = ["x", "y", "x^2", "xy", "y^2", "x^3"]
    theta = np.column_stack([x, y, x ** 2, x * y, y ** 2, x ** 3])
    dX = np.column_stack([dx, dy]) + np.random.normal(0, 1e-3, (len(t), 2))

    print(f"Library with {theta.shape[1]} candidate terms and {theta.shape[0]} samples")

    # Sweep the threshold of the Lasso solver
    thresholds = np.logspace(-3, 1.5, 20)
    results = threshold_sweep(ADMM(thresholds, rho=1.0), theta, dX, maxiter=5000, abstol=1e-10)

    active_terms = [np.count_nonzero(r.coefficients) for r in results]
    for r, n_active in zip(results, active_terms):
        print(f"lambda = {r.threshold:8.4f}: {n_active} active terms, converged = {r.state.converged}")

    # Pick the sparsest result which still explains the data
    residuals = [np.linalg.norm(dX - theta @ r.coefficients) for r in results]
    best = max(i for i, res in enumerate(residuals) if res < 2.0 * min(residuals) + 1e-2)
    Xi = results[best].coefficients

    print("\nRecovered equations:")
    for k, lhs in enumerate(["dx", "dy"]):
        terms = [f"{Xi[j, k]:+.3f} {names[j]}" for j in range(len(names)) if Xi[j, k] != 0.0]
        print(f"{lhs} = " + " ".join(terms))

    # Implicit form: dx - y = 0
    print("\nSearching the implicit relation between dx, x and y with ADM")
    implicit = np.column_stack([dx, x, y])
    X_implicit = np.zeros((3, 1))
    ADM(0.1)(X_implicit, implicit, np.zeros((len(t), 1)))
    print("Null space direction [dx, x, y]:", np.round(X_implicit[:, 0], 3))

    # Plot results
    plt.figure(figsize=(10, 6))

    plt.subplot(2, 1, 1)
    plt.semilogx(thresholds, active_terms, 'bo-')
    plt.axvline(results[best].threshold, color='r', linestyle='--')
    plt.ylabel('Active terms')
    plt.grid(True)

    plt.subplot(2, 1, 2)
    plt.loglog(thresholds, residuals, 'go-')
    plt.xlabel('Threshold')
    plt.ylabel('Residual')
    plt.grid(True)

    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
