"""
Tests for the thresholds module.

This file contains tests for the shrinkage operators in sparsecore.thresholds.
"""

import unittest
import numpy as np
from sparsecore.thresholds import (
    SoftThreshold,
    HardThreshold,
    ClippedAbsoluteDeviation,
    clip_by_threshold
)


class TestThresholds(unittest.TestCase):
    """Test class for the shrinkage operators."""

    def setUp(self):
        """Set up test fixtures."""
        np.random.seed(42)
        self.v = np.random.normal(0, 1.0, (20, 3))
        self.lam = 0.3

    def test_soft_threshold_zero_is_identity(self):
        """Soft thresholding at zero returns the input."""
        np.testing.assert_allclose(SoftThreshold().shrink(self.v, 0.0), self.v)

    def test_soft_threshold_small_entries_vanish(self):
        """Entries with |v| <= lambda are set to zero."""
        shrunk = SoftThreshold().shrink(self.v, self.lam)
        small = np.abs(self.v) <= self.lam
        self.assertTrue(np.all(shrunk[small] == 0.0))

    def test_soft_threshold_keeps_sign(self):
        """Large entries keep their sign and lose lambda in magnitude."""
        shrunk = SoftThreshold().shrink(self.v, self.lam)
        large = np.abs(self.v) > self.lam
        np.testing.assert_array_equal(np.sign(shrunk[large]), np.sign(self.v[large]))
        np.testing.assert_allclose(np.abs(shrunk[large]), np.abs(self.v[large]) - self.lam)

    def test_soft_threshold_in_place(self):
        """Calling the operator writes into the output buffer."""
        out = np.zeros_like(self.v)
        result = SoftThreshold()(out, self.v, self.lam)
        self.assertIs(result, out)
        np.testing.assert_allclose(out, SoftThreshold().shrink(self.v, self.lam))

    def test_hard_threshold(self):
        """Hard thresholding keeps |v| >= lambda and zeroes the rest."""
        shrunk = HardThreshold().shrink(self.v, self.lam)
        keep = np.abs(self.v) >= self.lam
        np.testing.assert_array_equal(shrunk[keep], self.v[keep])
        self.assertTrue(np.all(shrunk[~keep] == 0.0))

    def test_hard_threshold_idempotent_for_smaller_threshold(self):
        """Applying a smaller threshold afterwards changes nothing."""
        op = HardThreshold()
        once = op.shrink(self.v, self.lam)
        for lam in (self.lam, 0.5 * self.lam, 0.0):
            np.testing.assert_array_equal(op.shrink(once, lam), once)

    def test_clipped_absolute_deviation_regions(self):
        """SCAD is soft near zero and the identity far from zero."""
        op = ClippedAbsoluteDeviation(a=3.7)
        lam = 1.0
        v = np.array([0.5, -1.5, 2.0, 3.7, 10.0, -10.0])
        shrunk = op.shrink(v, lam)
        np.testing.assert_allclose(shrunk[:2], [0.0, -0.5])
        # Continuous at both breakpoints
        self.assertAlmostEqual(shrunk[2], lam)
        self.assertAlmostEqual(shrunk[3], 3.7)
        np.testing.assert_allclose(shrunk[4:], v[4:])

    def test_clipped_absolute_deviation_monotone(self):
        """SCAD is monotone and continuous on a fine grid."""
        op = ClippedAbsoluteDeviation()
        v = np.linspace(-5.0, 5.0, 2001)
        shrunk = op.shrink(v, 0.5)
        self.assertTrue(np.all(np.diff(shrunk) >= -1e-12))
        self.assertLess(np.max(np.abs(np.diff(shrunk))), 0.05)

    def test_clipped_absolute_deviation_shape_parameter(self):
        """The shape parameter has to exceed 2."""
        with self.assertRaises(ValueError):
            ClippedAbsoluteDeviation(a=2.0)

    def test_clip_by_threshold_idempotent(self):
        """Clipping twice equals clipping once."""
        once = clip_by_threshold(self.v.copy(), self.lam)
        twice = clip_by_threshold(once.copy(), self.lam)
        np.testing.assert_array_equal(once, twice)
        self.assertTrue(np.all((once == 0.0) | (np.abs(once) >= self.lam)))

    def test_clip_by_threshold_in_place(self):
        """Clipping modifies the given array."""
        X = np.array([[0.05, -2.0], [0.5, -0.01]])
        result = clip_by_threshold(X, 0.1)
        self.assertIs(result, X)
        np.testing.assert_array_equal(X, [[0.0, -2.0], [0.5, 0.0]])


if __name__ == '__main__':
    unittest.main()
