"""
Unit tests for standard plate round-up.
"""

import math
import unittest

from vesselcalc.design_cases import DesignCase
from vesselcalc.plate_lookup import round_up_to_standard, suggest_adopted_thicknesses
from vesselcalc.shell_thickness import ShellCalcInput, ShellCaseInput, Units, run_shell_thickness


class TestRoundUp(unittest.TestCase):
    """Test plate selection."""

    def test_si_plates(self):
        self.assertEqual(round_up_to_standard(3.378), 6)
        self.assertEqual(round_up_to_standard(7.2), 8)
        self.assertEqual(round_up_to_standard(8.0), 8)
        self.assertEqual(round_up_to_standard(22.5, 'SI'), 25)

    def test_us_plates(self):
        self.assertEqual(round_up_to_standard(0.3, 'US'), 0.3125)
        self.assertEqual(round_up_to_standard(0.5, Units.US), 0.5)

    def test_beyond_table(self):
        self.assertEqual(round_up_to_standard(33.0), 33.0)
        self.assertEqual(round_up_to_standard(1.2, 'US'), 1.2)

    def test_non_finite_passes_through(self):
        self.assertTrue(math.isinf(round_up_to_standard(math.inf)))
        self.assertTrue(math.isnan(round_up_to_standard(math.nan)))


class TestSuggestAdopted(unittest.TestCase):

    def test_suggest_from_result(self):
        """Test one standard plate per course, bottom to top."""
        shell_input = ShellCalcInput(
            units="SI", standard="API_650", diameter=30.0, courses=[2.4] * 5,
            specific_gravity=1.0, corrosion_allowance=2.0, design_pressure=0.0,
            allowable_stress_design=160.0, allowable_stress_test=171.0, joint_efficiency=1.0,
            min_nominal_thickness=6.0, adopted_thicknesses=[6.0] * 5,
            active_cases=[ShellCaseInput(DesignCase.HYDROTEST, 12.0)],
        )
        result = run_shell_thickness(shell_input)
        suggested = suggest_adopted_thicknesses(result)

        self.assertEqual(len(suggested), 5)
        for course, plate in zip(result.results, suggested):
            self.assertGreaterEqual(plate, course.t_required)
        self.assertEqual(suggested[-1], 8)


if __name__ == '__main__':
    unittest.main()
