"""
Threshold sweeps.

Runs an optimizer once per stored threshold so that the results can be
compared by an external model selection criterion.
"""

from collections import namedtuple

import numpy as np

from .solvers import check_dimensions

SweepResult = namedtuple("SweepResult", ["threshold", "coefficients", "state"])


def threshold_sweep(optimizer, A, Y, X=None, **kwargs):
    """
    Solve the regression problem for every threshold of the optimizer.

    Parameters:
    -----------
    optimizer : Optimizer
        Configured optimizer, its ``thresholds`` are swept in order
    A : numpy.ndarray
        Dictionary matrix of shape (n, m)
    Y : numpy.ndarray
        Target matrix of shape (n, p)
    X : numpy.ndarray, optional
        Initial coefficients of shape (m, p). Every threshold starts from a
        fresh copy; zeros if not given.
    **kwargs :
        Passed on to the optimizer call

    Returns:
    --------
    list of SweepResult : (threshold, coefficients, state) per threshold
    """
    A = np.asarray(A, dtype=float)
    Y = np.asarray(Y, dtype=float)
    if Y.ndim == 1:
        Y = Y[:, np.newaxis]
    if X is None:
        X = np.zeros((A.shape[1], Y.shape[1]))
    check_dimensions(X, A, Y)

    results = []
    for lam in optimizer.thresholds:
        X_lam = X.copy()
        optimizer(X_lam, A, Y, lam, **kwargs)
        results.append(SweepResult(lam, X_lam, optimizer.state))
    return results
