"""
Unit tests for course table and liquid height helpers.
"""

import unittest

from vesselcalc.design_cases import DesignCase
from vesselcalc.geometry import (
    default_liquid_heights,
    generate_courses,
    geometry_warnings,
    parse_float_list,
)


class TestParseFloatList(unittest.TestCase):
    """Test number list parsing."""

    def test_separators(self):
        self.assertEqual(parse_float_list("2.4, 2.4;2 1"), [2.4, 2.4, 2.0, 1.0])
        self.assertEqual(parse_float_list("  10\t8\n6 "), [10.0, 8.0, 6.0])

    def test_invalid(self):
        for text in ["", "   ", ",,", "1, a", None]:
            with self.assertRaises(ValueError):
                parse_float_list(text)


class TestGenerateCourses(unittest.TestCase):
    """Test course table generation."""

    def test_even_split(self):
        courses = generate_courses(12.0, 5, 2.4)
        self.assertEqual(len(courses), 5)
        for height in courses:
            self.assertAlmostEqual(height, 2.4)

    def test_short_top_course(self):
        courses = generate_courses(10.0, 5, 2.4)
        self.assertEqual(courses[:4], [2.4] * 4)
        self.assertAlmostEqual(courses[-1], 0.4)
        self.assertAlmostEqual(sum(courses), 10.0)

    def test_single_course(self):
        self.assertEqual(generate_courses(3.0, 1, 2.4), [3.0])

    def test_invalid(self):
        """Test non-positive inputs and an empty top course."""
        bad = [
            (0.0, 5, 2.4),
            (12.0, 0, 2.4),
            (12.0, 2.5, 2.4),
            (12.0, 5, 0.0),
            (10.0, 5, 2.5),
            (10.0, 6, 2.4),
        ]
        for args in bad:
            with self.assertRaises(ValueError):
                generate_courses(*args)


class TestLiquidHeights(unittest.TestCase):
    """Test default liquid heights per design case."""

    def test_defaults(self):
        heights = default_liquid_heights(12.0)
        self.assertAlmostEqual(heights[DesignCase.OPERATING], 10.8)
        self.assertEqual(heights[DesignCase.HYDROTEST], 12.0)
        for case in (DesignCase.EMPTY_WIND, DesignCase.EMPTY_SEISMIC, DesignCase.VACUUM, DesignCase.STEAMOUT):
            self.assertEqual(heights[case], 0.0)

    def test_existing_kept(self):
        heights = default_liquid_heights(12.0, {'vacuum': 3.0, DesignCase.OPERATING: 11.0})
        self.assertEqual(heights[DesignCase.VACUUM], 3.0)
        self.assertEqual(heights[DesignCase.OPERATING], 11.0)
        self.assertEqual(heights[DesignCase.HYDROTEST], 12.0)

    def test_blank_entries_filled(self):
        heights = default_liquid_heights(10.0, {'operating': None, 'hydrotest': 9.5, 'vacuum': None})
        self.assertAlmostEqual(heights[DesignCase.OPERATING], 9.0)
        self.assertEqual(heights[DesignCase.HYDROTEST], 9.5)
        self.assertEqual(heights[DesignCase.VACUUM], 0.0)


class TestGeometryWarnings(unittest.TestCase):

    def test_clean_geometry(self):
        heights = {DesignCase.OPERATING: 10.8, DesignCase.HYDROTEST: 12.0}
        self.assertEqual(geometry_warnings(12.0, [2.4] * 5, heights), [])

    def test_course_sum_mismatch(self):
        warnings = geometry_warnings(12.0, [2.4] * 4, {DesignCase.OPERATING: 9.0})
        self.assertEqual(len(warnings), 1)
        self.assertIn("9.600 m", warnings[0])

    def test_liquid_above_shell(self):
        warnings = geometry_warnings(40.0, [8.0] * 5, {'hydrotest': 42.0}, length_unit="ft")
        self.assertEqual(len(warnings), 1)
        self.assertIn("Hydrotest", warnings[0])


if __name__ == '__main__':
    unittest.main()
