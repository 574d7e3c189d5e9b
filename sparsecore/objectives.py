"""
Objectives for ranking sparse candidate solutions.

A candidate is scored in two stages: a raw metric ``f`` (number of active
coefficients and residual norm) followed by a scoring rule ``g`` reducing the
metric to a scalar. ``compose`` builds the combined objective once so it can be
evaluated for every candidate.
"""

import numpy as np


def count_active(x, threshold=0.0):
    """
    Number of entries of x whose magnitude exceeds the threshold.

    Parameters:
    -----------
    x : numpy.ndarray
        Coefficients
    threshold : float, optional
        Magnitude an entry has to exceed to be counted

    Returns:
    --------
    int : Count of active entries
    """
    return int(np.count_nonzero(np.abs(x) > threshold))


def sparsity_residual(x, A, threshold=0.0):
    """
    Raw metric for implicit problems A @ x = 0.

    Returns:
    --------
    numpy.ndarray : [number of active coefficients, ||A @ x||_2]
    """
    return np.array([count_active(x, threshold), np.linalg.norm(A @ x)])


def euclidean_score(metric):
    """Euclidean length of a metric vector."""
    return float(np.linalg.norm(metric))


def compose(f, g):
    """
    Compose a raw metric f and a scoring rule g into fg(*args) = g(f(*args)).
    """
    def fg(*args):
        return g(f(*args))
    return fg
