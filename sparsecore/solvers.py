"""
Iterative sparse regression solvers.

This module provides the optimizers used to select the active terms of a
dictionary of candidate functions:

- ADM: alternating directions method for a sparse basis of the null space of
  a constraint matrix, argmin ||x||_0 s.t. A x = 0 (Qu, Sun and Wright 2014).
- ADMM: L1 regularized least squares, argmin 1/2 ||A x - y||_2^2 + lambda ||x||_1,
  solved with the scaled alternating direction method of multipliers
  (Boyd et al. 2011).

Every optimizer is called as ``optimizer(X, A, Y, threshold, **kwargs)`` and
writes its result into the caller owned coefficient matrix X.
"""

import warnings

import numpy as np
import scipy.linalg

from .convergence import ConvergenceMonitor
from .exceptions import DimensionMismatchError, IllConditionedWarning, ParameterValidationError
from .linalg import linear_independent_columns, nullspace, numerical_rank
from .objectives import compose, count_active, euclidean_score, sparsity_residual
from .progress import resolve_progress
from .selection import select_candidates
from .thresholds import SoftThreshold, clip_by_threshold


def _as_thresholds(threshold):
    try:
        values = np.atleast_1d(np.asarray(threshold, dtype=float)).ravel()
    except (TypeError, ValueError) as err:
        raise ParameterValidationError(f"Threshold must be numeric, got {threshold!r}") from err
    if values.size == 0:
        raise ParameterValidationError("At least one threshold is required")
    return tuple(float(v) for v in values)


def _as_matrix(array):
    # Column view for vectors, writes go through to the caller's buffer
    return array[:, np.newaxis] if array.ndim == 1 else array


def check_dimensions(X, A, Y):
    """
    Validate and normalize the inputs of a solve.

    Parameters:
    -----------
    X : numpy.ndarray
        Coefficient matrix of shape (m, p) or vector of shape (m,)
    A : array_like
        Dictionary matrix of shape (n, m)
    Y : array_like
        Target matrix of shape (n, p) or vector of shape (n,)

    Returns:
    --------
    tuple : (X, A, Y) as two dimensional arrays; X is a view on the input
    """
    if not isinstance(X, np.ndarray) or not np.issubdtype(X.dtype, np.floating):
        raise TypeError("The coefficient matrix X has to be a floating point numpy.ndarray")

    A = np.asarray(A, dtype=X.dtype)
    Y = _as_matrix(np.asarray(Y, dtype=X.dtype))
    X = _as_matrix(X)

    if A.ndim != 2 or Y.ndim != 2 or X.ndim != 2:
        raise DimensionMismatchError(
            f"Expected two dimensional inputs, got A{A.shape}, Y{Y.shape}, X{X.shape}"
        )
    if A.shape[0] != Y.shape[0]:
        raise DimensionMismatchError(
            f"A has {A.shape[0]} rows but Y has {Y.shape[0]}"
        )
    if X.shape != (A.shape[1], Y.shape[1]):
        raise DimensionMismatchError(
            f"X has shape {X.shape}, expected {(A.shape[1], Y.shape[1])}"
        )
    return X, A, Y


class Optimizer:
    """
    Base class of the sparse regression optimizers.

    Parameters:
    -----------
    threshold : float or sequence of float
        Sparsity threshold(s). A call without an explicit threshold uses the
        first one.
    """

    def __init__(self, threshold=0.1):
        self.thresholds = _as_thresholds(threshold)
        self.state = None

    @property
    def threshold(self):
        return self.thresholds[0]

    def summary(self):
        return type(self).__name__

    def __repr__(self):
        if len(self.thresholds) == 1:
            return f"{self.summary()}(threshold={self.threshold})"
        return f"{self.summary()}(thresholds={list(self.thresholds)})"

    def __call__(self, X, A, Y, threshold=None, **kwargs):
        raise NotImplementedError


class SubspaceOptimizer(Optimizer):
    """Base class for optimizers working on the null space of A."""


class ADM(SubspaceOptimizer):
    """
    Sparse null space basis via alternating directions.

    Solves argmin ||x||_0 s.t. A x = 0 for every column of X by sparsifying an
    orthonormal basis of the null space of A and assigning the resulting
    sparse candidates to the columns of X.

    Parameters:
    -----------
    threshold : float or sequence of float, optional
        Sparsity threshold(s), each strictly between 0 and 1

    Example:
    --------
    >>> ADM()
    >>> ADM(threshold=[0.05, 0.1, 0.2])
    """

    def __init__(self, threshold=0.1):
        super().__init__(threshold)
        if not all(0.0 < t < 1.0 for t in self.thresholds):
            raise ParameterValidationError(
                f"Thresholds of ADM must lie in (0, 1), got {list(self.thresholds)}"
            )

    def __call__(self, X, A, Y, threshold=None, maxiter=None, abstol=None, progress=None,
                 verbose=False, rtol=0.0, atol=0.99, f=None, g=None):
        """
        Find sparse vectors in the null space of A and write them into X.

        Parameters:
        -----------
        X : numpy.ndarray
            Coefficient matrix of shape (m, p), overwritten in place. Columns
            which are not all zero act as the current best solution.
        A : numpy.ndarray
            Constraint matrix of shape (n, m)
        Y : numpy.ndarray
            Target matrix of shape (n, p); only its number of columns is used
        threshold : float, optional
            Sparsity threshold, defaults to the first stored threshold
        maxiter : int, optional
            Iteration cap, defaults to max(A.shape)
        abstol : float, optional
            Absolute tolerance on ||Q - Q_prev||, defaults to machine epsilon
        progress : ProgressSink, optional
            Receives the progress records
        verbose : bool, optional
            Print progress if no sink is given
        rtol : float, optional
            Relative tolerance used to drop linearly dependent candidates
        atol : float, optional
            Singular values of A at or below atol span the null space
        f : callable, optional
            Raw metric f(x, A, threshold), defaults to sparsity_residual
        g : callable, optional
            Scoring rule applied to f, defaults to euclidean_score

        Returns:
        --------
        None
        """
        X, A, Y = check_dimensions(X, A, Y)

        lam = self.threshold if threshold is None else float(threshold)
        maxiter = max(A.shape) if maxiter is None else int(maxiter)
        abstol = np.finfo(X.dtype).eps if abstol is None else abstol
        f = sparsity_residual if f is None else f
        g = euclidean_score if g is None else g
        fg = compose(f, g)
        shrinkage = SoftThreshold()

        N = nullspace(A, atol=atol)
        Q = _initial_candidates(N)
        Q_prev = Q.copy()
        x = np.zeros_like(Q)

        monitor = ConvergenceMonitor(
            lam, maxiter, abstol,
            resolve_progress(progress, verbose, name=self.summary())
        )
        monitor.start()

        while monitor.running:
            # Sparsify the candidates, then project them back onto the null space
            shrinkage(x, Q, lam)
            Q[...] = N @ (N.T @ x)
            _normalize_columns(Q)

            measure = np.linalg.norm(Q - Q_prev)
            if not monitor.update(measure, lambda: f(Q, A, lam)):
                Q_prev[...] = Q

        clip_by_threshold(Q, lam)
        _orient_columns(Q)
        Q = linear_independent_columns(Q, rtol)

        select_candidates(X, Q, fg, A, lam)

        self.state = monitor.finish(lambda: f(X, A, lam))

        if numerical_rank(X.T @ X) < X.shape[1]:
            warnings.warn(
                f"{self!r} @ {lam} has found ill-conditioned equations. "
                "Vary the threshold or relative tolerance.",
                IllConditionedWarning,
                stacklevel=2
            )


class ADMM(Optimizer):
    """
    Lasso via the alternating direction method of multipliers.

    Solves argmin 1/2 ||A X - Y||_2^2 + lambda ||X||_1 column wise.

    Parameters:
    -----------
    threshold : float or sequence of float, optional
        Sparsity threshold(s) lambda, strictly positive
    rho : float, optional
        Augmented Lagrangian parameter, strictly positive

    Example:
    --------
    >>> ADMM()
    >>> ADMM(threshold=1e-1, rho=2.0)
    """

    def __init__(self, threshold=0.1, rho=1.0):
        super().__init__(threshold)
        if not all(t > 0.0 for t in self.thresholds):
            raise ParameterValidationError(
                f"Thresholds of ADMM must be positive, got {list(self.thresholds)}"
            )
        try:
            rho = float(rho)
        except (TypeError, ValueError) as err:
            raise ParameterValidationError(f"rho must be numeric, got {rho!r}") from err
        if not rho > 0.0:
            raise ParameterValidationError(
                f"Augmented Lagrangian parameter must be positive, got {rho}"
            )
        self.rho = rho

    def __repr__(self):
        return super().__repr__()[:-1] + f", rho={self.rho})"

    def __call__(self, X, A, Y, threshold=None, maxiter=None, abstol=None, progress=None,
                 verbose=False):
        """
        Solve the Lasso problem and write the coefficients into X.

        Parameters:
        -----------
        X : numpy.ndarray
            Coefficient matrix of shape (m, p), used as initial guess and
            overwritten in place
        A : numpy.ndarray
            Dictionary matrix of shape (n, m)
        Y : numpy.ndarray
            Target matrix of shape (n, p)
        threshold : float, optional
            Sparsity threshold, defaults to the first stored threshold
        maxiter : int, optional
            Iteration cap, defaults to max(A.shape)
        abstol : float, optional
            Absolute tolerance on ||X - X_prev||, defaults to machine epsilon
        progress : ProgressSink, optional
            Receives the progress records
        verbose : bool, optional
            Print progress if no sink is given

        Returns:
        --------
        None
        """
        X, A, Y = check_dimensions(X, A, Y)

        lam = self.threshold if threshold is None else float(threshold)
        maxiter = max(A.shape) if maxiter is None else int(maxiter)
        abstol = np.finfo(X.dtype).eps if abstol is None else abstol
        rho = self.rho
        shrinkage = SoftThreshold()

        m = A.shape[1]
        factor = scipy.linalg.cho_factor(A.T @ A + rho * np.eye(m, dtype=X.dtype))
        c = A.T @ Y

        z = np.zeros_like(X)
        u = np.zeros_like(X)
        X_prev = X.copy()

        def metrics():
            return count_active(X, lam), np.linalg.norm(Y - A @ X)

        monitor = ConvergenceMonitor(
            lam, maxiter, abstol,
            resolve_progress(progress, verbose, name=self.summary())
        )
        monitor.start()

        while monitor.running:
            z[...] = scipy.linalg.cho_solve(factor, c + rho * (z - u))
            shrinkage(X, z + u, lam / rho)
            u += z - X

            measure = np.linalg.norm(X - X_prev)
            if not monitor.update(measure, metrics):
                X_prev[...] = X

        clip_by_threshold(X, lam)
        self.state = monitor.finish(metrics)


def _normalize_columns(Q):
    norms = np.linalg.norm(Q, axis=0)
    norms[norms == 0.0] = 1.0
    Q /= norms
    return Q


def _orient_columns(Q):
    # Largest magnitude entry of every column positive
    if Q.size == 0:
        return Q
    rows = np.argmax(np.abs(Q), axis=0)
    signs = np.sign(Q[rows, np.arange(Q.shape[1])])
    signs[signs == 0.0] = 1.0
    Q *= signs
    return Q


def _initial_candidates(N):
    """
    Seed one candidate per null space dimension from normalized rows of N.

    The rows are picked by a column pivoted QR of N.T, so the seeds
    N @ N[r] / ||N[r]|| (projections of unit vectors onto the null space)
    are linearly independent.
    """
    k = N.shape[1]
    if k == 0:
        return N.copy()
    _, pivots = scipy.linalg.qr(N.T, mode="r", pivoting=True)
    rows = pivots[:k]
    return _normalize_columns(N @ N[rows].T)
