"""
Thresholding (shrinkage) operators for sparse regression.

This module provides the elementwise shrinkage rules used by the iterative
solvers. Every rule can either return a new array via ``shrink`` or write its
result into an existing buffer by calling the operator directly.
"""

import numpy as np


class ThresholdOperator:
    """
    Base class for elementwise shrinkage rules.

    Subclasses implement ``shrink``. Calling an operator as
    ``op(out, value, threshold)`` writes the shrunk ``value`` into ``out``.
    """

    def shrink(self, value, threshold):
        raise NotImplementedError

    def __call__(self, out, value, threshold):
        out[...] = self.shrink(value, threshold)
        return out

    def __repr__(self):
        return f"{type(self).__name__}()"


class SoftThreshold(ThresholdOperator):
    """
    Soft thresholding, the proximal operator of the L1 norm.

    shrink(v, lambda) = sign(v) * max(|v| - lambda, 0)
    """

    def shrink(self, value, threshold):
        value = np.asarray(value)
        return np.sign(value) * np.maximum(np.abs(value) - threshold, 0.0)


class HardThreshold(ThresholdOperator):
    """
    Hard thresholding: entries with magnitude below the threshold are set to
    zero, all others are kept unchanged.
    """

    def shrink(self, value, threshold):
        value = np.asarray(value)
        return np.where(np.abs(value) < threshold, 0.0, value)


class ClippedAbsoluteDeviation(ThresholdOperator):
    """
    Smoothly clipped absolute deviation (SCAD) thresholding.

    Behaves like soft thresholding for |v| <= 2*lambda, like the identity for
    |v| > a*lambda and interpolates linearly in between:

        ((a - 1) * v - sign(v) * a * lambda) / (a - 2)

    Parameters:
    -----------
    a : float, optional
        Shape parameter, has to be larger than 2. Defaults to 3.7 as
        suggested by Fan and Li (2001).
    """

    def __init__(self, a=3.7):
        if not a > 2.0:
            raise ValueError(f"Shape parameter of the clipped absolute deviation must exceed 2, got {a}")
        self.a = a

    def shrink(self, value, threshold):
        value = np.asarray(value)
        a = self.a
        magnitude = np.abs(value)
        sign = np.sign(value)

        soft = sign * np.maximum(magnitude - threshold, 0.0)
        interpolated = ((a - 1.0) * value - sign * a * threshold) / (a - 2.0)

        return np.where(
            magnitude <= 2.0 * threshold,
            soft,
            np.where(magnitude <= a * threshold, interpolated, value)
        )

    def __repr__(self):
        return f"{type(self).__name__}(a={self.a})"


def clip_by_threshold(X, threshold):
    """
    Set all entries of X with magnitude below the threshold to zero, in place.

    Used as the final cleanup pass of every solver, independent of the
    shrinkage rule applied during the iterations.

    Parameters:
    -----------
    X : numpy.ndarray
        Array to clip, modified in place
    threshold : float
        Minimum magnitude of a retained entry

    Returns:
    --------
    numpy.ndarray : X itself
    """
    X[np.abs(X) < threshold] = 0.0
    return X
