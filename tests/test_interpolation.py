"""
Unit tests for the interpolate-or-clamp table lookup.
"""

import math
import unittest

from vesselcalc.hx_tables import BAFFLE_CUT_OPTIONS, LD_OPTIONS, SHELL_JH, TUBE_JF, TUBE_JH
from vesselcalc.interpolation import interpolate, lookup_table, nearest_bucket


class TestInterpolate(unittest.TestCase):

    def test_midpoint(self):
        self.assertEqual(interpolate(15, 10, 20, 1.0, 3.0), 2.0)

    def test_degenerate_interval(self):
        self.assertEqual(interpolate(5, 5, 5, 7.0, 9.0), 7.0)


class TestNearestBucket(unittest.TestCase):
    """Test bucket matching for L/D and baffle cut."""

    def test_exact_and_near(self):
        self.assertEqual(nearest_bucket(120, LD_OPTIONS), 120)
        self.assertEqual(nearest_bucket(305, LD_OPTIONS), 240)
        self.assertEqual(nearest_bucket(2000, LD_OPTIONS), 500)
        self.assertEqual(nearest_bucket(22, BAFFLE_CUT_OPTIONS), 25)

    def test_tie_goes_to_first(self):
        self.assertEqual(nearest_bucket(36, LD_OPTIONS), 24)
        self.assertEqual(nearest_bucket(30, BAFFLE_CUT_OPTIONS), 25)


class TestLookupTable(unittest.TestCase):
    """Test clamping and interpolation on Reynolds tables."""

    def test_plain_rows(self):
        """Test a table of plain values."""
        self.assertAlmostEqual(lookup_table(15, TUBE_JF), 0.6)
        self.assertEqual(lookup_table(10, TUBE_JF), 0.8)

    def test_clamps_outside_range(self):
        self.assertEqual(lookup_table(1, TUBE_JF), 0.8)
        self.assertEqual(lookup_table(5e6, TUBE_JF), 1.451e-03)
        self.assertEqual(lookup_table(math.inf, TUBE_JF), 1.451e-03)

    def test_keyed_rows(self):
        """Test a table keyed by a secondary dimension."""
        self.assertEqual(lookup_table(10, TUBE_JH, 120), 8.124e-02)
        expected = interpolate(15000, 10000, 20000, 5.706e-03, 4.177e-03)
        self.assertAlmostEqual(lookup_table(15000, SHELL_JH, 25), expected)

    def test_unsorted_table(self):
        table = [(100, 1.0), (10, 3.0), (50, 2.0)]
        self.assertAlmostEqual(lookup_table(30, table), 2.5)
        self.assertEqual(lookup_table(5, table), 3.0)

    def test_nan_propagates(self):
        self.assertTrue(math.isnan(lookup_table(math.nan, TUBE_JF)))


if __name__ == '__main__':
    unittest.main()
