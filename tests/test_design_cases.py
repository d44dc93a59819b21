"""
Unit tests for design case parsing and per-case rules.
"""

import unittest

from vesselcalc.design_cases import DesignCase, get_case_options, parse_case


class TestDesignCases(unittest.TestCase):
    """Test the design case enum."""

    def test_canonical_order(self):
        self.assertEqual(
            get_case_options(),
            ["operating", "hydrotest", "empty_wind", "empty_seismic", "vacuum", "steamout"],
        )

    def test_parse_case(self):
        """Test parsing keys, padded keys and enum members."""
        self.assertEqual(parse_case("hydrotest"), DesignCase.HYDROTEST)
        self.assertEqual(parse_case(" Empty_Wind "), DesignCase.EMPTY_WIND)
        self.assertIs(parse_case(DesignCase.VACUUM), DesignCase.VACUUM)

    def test_parse_unknown_case(self):
        with self.assertRaises(ValueError) as cm:
            parse_case("flooded")
        self.assertIn("flooded", str(cm.exception))

    def test_test_condition(self):
        """Test that only hydrotest uses water and the test stress."""
        for case in DesignCase:
            self.assertEqual(case.uses_test_condition, case is DesignCase.HYDROTEST)

    def test_internal_pressure(self):
        """Test which cases carry the internal design pressure."""
        with_pressure = {case for case in DesignCase if case.includes_internal_pressure}
        self.assertEqual(with_pressure, {DesignCase.OPERATING, DesignCase.VACUUM, DesignCase.STEAMOUT})

    def test_titles(self):
        self.assertEqual(DesignCase.EMPTY_SEISMIC.title, "Empty + Seismic")
        self.assertEqual(DesignCase.OPERATING.title, "Operating")


if __name__ == '__main__':
    unittest.main()
