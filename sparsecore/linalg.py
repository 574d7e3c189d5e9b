"""
Dense linear algebra helpers used by the sparse regression solvers.

Thin wrappers around scipy.linalg for null space computation, numerical rank
and the selection of linearly independent columns.
"""

import numpy as np
import scipy.linalg


def nullspace(A, atol=0.0, rtol=None):
    """
    Compute an orthonormal basis for the null space of A.

    Singular values smaller than or equal to max(atol, rtol * s_max) are
    treated as zero.

    Parameters:
    -----------
    A : numpy.ndarray
        Matrix of shape (n, m)
    atol : float, optional
        Absolute tolerance on the singular values
    rtol : float, optional
        Relative tolerance on the singular values. If None, defaults to
        min(n, m) * eps when atol is zero and to zero otherwise.

    Returns:
    --------
    numpy.ndarray : Basis N of shape (m, k) with A @ N ~ 0 and N.T @ N = I
    """
    A = np.atleast_2d(np.asarray(A, dtype=float))
    n, m = A.shape
    if rtol is None:
        rtol = min(n, m) * np.finfo(A.dtype).eps if atol == 0.0 else 0.0

    _, s, Vh = scipy.linalg.svd(A, full_matrices=True)
    s_max = s[0] if s.size else 0.0
    tol = max(atol, rtol * s_max)
    rank = int(np.sum(s > tol))

    return Vh[rank:, :].conj().T.copy()


def numerical_rank(M, rtol=0.0):
    """
    Numerical rank of M based on its singular values.

    Parameters:
    -----------
    M : numpy.ndarray
        Matrix to inspect
    rtol : float, optional
        Relative tolerance; singular values below rtol * s_max are ignored.
        A value of zero falls back to max(M.shape) * eps.

    Returns:
    --------
    int : Number of singular values above the tolerance
    """
    M = np.atleast_2d(M)
    if M.size == 0:
        return 0
    s = scipy.linalg.svdvals(M)
    if s[0] == 0.0:
        return 0
    if rtol <= 0.0:
        rtol = max(M.shape) * np.finfo(s.dtype).eps
    return int(np.sum(s > rtol * s[0]))


def linear_independent_columns(Q, rtol=0.0):
    """
    Reduce Q to a linearly independent subset of its columns.

    The numerical rank r is determined with the relative tolerance rtol and
    the r leading pivots of a column pivoted QR decomposition are kept, in
    their original column order.

    Parameters:
    -----------
    Q : numpy.ndarray
        Candidate matrix of shape (m, k)
    rtol : float, optional
        Relative tolerance for the rank decision

    Returns:
    --------
    numpy.ndarray : Matrix of shape (m, r) holding the selected columns
    """
    r = numerical_rank(Q, rtol)
    if r == Q.shape[1]:
        return Q
    if r == 0:
        return Q[:, :0]

    _, pivots = scipy.linalg.qr(Q, mode="r", pivoting=True)
    keep = np.sort(pivots[:r])
    return Q[:, keep]
