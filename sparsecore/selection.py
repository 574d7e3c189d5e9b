"""
Candidate selection for subspace solvers.

Reduces an over-complete set of sparse candidate vectors to one coefficient
column per output variable.
"""

import numpy as np


def evaluate_pareto(current, candidate, fg, *args):
    """
    Replace ``current`` by ``candidate`` if the candidate scores lower.

    An all-zero ``current`` column has not been assigned yet and scores
    infinity, so any candidate is accepted for it.

    Parameters:
    -----------
    current : numpy.ndarray
        Current coefficient column, overwritten in place on acceptance
    candidate : numpy.ndarray
        Candidate column of the same shape
    fg : callable
        Composite objective fg(x, *args) -> float
    *args :
        Extra arguments passed to fg

    Returns:
    --------
    bool : True if the candidate was accepted
    """
    current_score = fg(current, *args) if np.any(current) else np.inf
    if fg(candidate, *args) < current_score:
        current[...] = candidate
        return True
    return False


def select_candidates(X, Q, fg, *args):
    """
    Assign candidate columns of Q to the columns of X.

    The search is output-major: for every column i of X the candidates are
    tried in order, skipping all candidates already assigned to an earlier
    output. The first accepted candidate is assigned and the search continues
    with the next output.

    Parameters:
    -----------
    X : numpy.ndarray
        Coefficient matrix of shape (m, p), modified in place
    Q : numpy.ndarray
        Candidate matrix of shape (m, k)
    fg : callable
        Composite objective, see evaluate_pareto
    *args :
        Extra arguments passed to fg

    Returns:
    --------
    numpy.ndarray : Boolean inclusion mask of shape (p, k)
    """
    included = np.zeros((X.shape[1], Q.shape[1]), dtype=bool)

    for i in range(X.shape[1]):
        for j in range(Q.shape[1]):
            if included[:, j].any():
                continue
            if evaluate_pareto(X[:, i], Q[:, j], fg, *args):
                included[i, j] = True
                break

    return included
