"""
Unit tests for result tables, CSV export and design checks.
"""

import math
import unittest
from dataclasses import replace

from vesselcalc.design_cases import DesignCase
from vesselcalc.heat_exchanger import FluidProperties, ShellSpecs, TubeSpecs, perform_calculation
from vesselcalc.reporting import (
    CSV_COLUMNS,
    bell_delaware_dataframe,
    format_number,
    hx_design_checks,
    hx_summary_dataframe,
    min_floor_note,
    shell_display_dataframe,
    shell_results_csv,
    shell_results_dataframe,
    shell_summary,
)
from vesselcalc.shell_thickness import ShellCalcInput, ShellCaseInput, run_shell_thickness


def shell_result(**overrides):
    values = dict(
        units="SI", standard="API_650", diameter=30.0, courses=[2.0],
        specific_gravity=1.0, corrosion_allowance=2.0, design_pressure=0.0,
        allowable_stress_design=160.0, allowable_stress_test=171.0, joint_efficiency=1.0,
        min_nominal_thickness=6.0, adopted_thicknesses=[10.0],
        active_cases=[ShellCaseInput(DesignCase.OPERATING, 1.8)],
    )
    values.update(overrides)
    return run_shell_thickness(ShellCalcInput(**values))


class TestFormatNumber(unittest.TestCase):

    def test_format(self):
        self.assertEqual(format_number(3.378125, 4), "3.3781")
        self.assertEqual(format_number(8), "8.00")
        self.assertEqual(format_number(math.inf), "-")
        self.assertEqual(format_number(math.nan, 4), "-")
        self.assertEqual(format_number(None), "-")


class TestShellTables(unittest.TestCase):
    """Test course tables and CSV export."""

    def test_csv_floored_course(self):
        csv_text = shell_results_csv(shell_result())
        lines = csv_text.strip().split("\n")

        self.assertEqual(lines[0], "Course,Governing case,t_calc,t_required,t_adopted,Utilization,Status")
        self.assertEqual(lines[1], "1,operating,3.3781,8.0000,10.0000,0.8000,OK")

    def test_csv_non_finite(self):
        """Test infinite thickness and utilization render as '-'."""
        result = shell_result(
            standard="API_620",
            design_pressure=100.0,
            allowable_stress_design=0.01,
            active_cases=[ShellCaseInput(DesignCase.OPERATING, 10.3)],
        )
        lines = shell_results_csv(result).strip().split("\n")
        self.assertEqual(lines[1], "1,operating,-,-,10.0000,-,NOT OK")

    def test_dataframe(self):
        result = shell_result(courses=[2.0, 2.0], adopted_thicknesses=[10.0, 6.0])
        df = shell_results_dataframe(result)

        self.assertEqual(len(df), 2)
        self.assertEqual(list(df['Status']), ['OK', 'NOT OK'])
        self.assertEqual(list(df['Bottom Elevation']), [0.0, 2.0])
        self.assertTrue(df['Min Controlled'].all())

    def test_display_dataframe(self):
        df = shell_display_dataframe(shell_result())

        self.assertIn('t_required (mm)', df.columns)
        self.assertEqual(df['t_required (mm)'].iloc[0], "8.00 (min thickness)")
        self.assertEqual(df['Utilization'].iloc[0], "0.800")

    def test_csv_columns(self):
        self.assertEqual(len(CSV_COLUMNS), 7)


class TestShellNotes(unittest.TestCase):

    def test_all_courses_floored(self):
        note = min_floor_note(shell_result())
        self.assertIsNotNone(note)
        self.assertIn("8.00 mm", note)

    def test_not_all_floored(self):
        result = shell_result(
            courses=[2.4] * 5,
            adopted_thicknesses=[20.0] * 5,
            active_cases=[ShellCaseInput(DesignCase.HYDROTEST, 12.0)],
        )
        self.assertIsNone(min_floor_note(result))

    def test_summary(self):
        result = shell_result(courses=[2.0, 2.0], adopted_thicknesses=[10.0, 6.0])
        summary = shell_summary(result)

        self.assertFalse(summary['all_ok'])
        self.assertEqual(summary['failing_courses'], [2])
        self.assertAlmostEqual(summary['max_utilization'], 8.0 / 6.0)


class TestHxReporting(unittest.TestCase):
    """Test exchanger tables and design checks."""

    def setUp(self):
        self.hot = FluidProperties(
            label="Light Hydrocarbon Oil", mass_flow=10.0, temp_in=100.0, temp_out=60.0,
            allowable_dp=0.7, fouling_resistance=0.0002,
            cp=2200.0, mu=0.001, k=0.15, rho=800.0,
        )
        self.cold = FluidProperties(
            label="Water", mass_flow=10.526, temp_in=30.0, temp_out=50.0,
            allowable_dp=0.7, fouling_resistance=0.0002,
            cp=4180.0, mu=0.0008, k=0.6, rho=1000.0,
        )
        tube = TubeSpecs(
            outer_diameter=0.02, inner_diameter=0.016, length=4.88, thickness=0.002,
            material="Carbon Steel", material_conductivity=50.0,
            pitch_type="triangular", pitch_ratio=1.25,
        )
        shell = ShellSpecs(type="Fixed", passes=1, tube_passes=2, baffle_ratio=0.4, baffle_cut=25.0)
        self.result = perform_calculation(self.hot, self.cold, tube, shell, 500.0)

    def test_summary_table(self):
        df = hx_summary_dataframe(self.result)

        self.assertEqual(list(df.columns), ['Parameter', 'Value', 'Unit'])
        heat_load = df.loc[df['Parameter'] == 'Heat Load', 'Value'].iloc[0]
        self.assertAlmostEqual(heat_load, 880.0)

    def test_bell_delaware_table(self):
        df = bell_delaware_dataframe(self.result)
        self.assertEqual(len(df), 10)
        self.assertEqual(df['Value'].iloc[3], 1.0)  # Js

    def test_checks_pass(self):
        """Test an acceptable design with generous allowables."""
        result = replace(self.result, deviation=10.0)
        hot = replace(self.hot, allowable_dp=100.0)
        cold = replace(self.cold, allowable_dp=100.0)
        checks = hx_design_checks(result, hot, cold)

        self.assertTrue(checks['acceptable'])
        self.assertEqual(checks['warnings'], [])

    def test_checks_fail(self):
        """Test deviation and both pressure drops out of limits."""
        result = replace(self.result, deviation=-45.0)
        hot = replace(self.hot, allowable_dp=0.0001)
        cold = replace(self.cold, allowable_dp=0.0001)
        checks = hx_design_checks(result, hot, cold)

        self.assertFalse(checks['deviation_ok'])
        self.assertFalse(checks['shell_dp_ok'])
        self.assertFalse(checks['tube_dp_ok'])
        self.assertFalse(checks['acceptable'])
        self.assertEqual(len(checks['warnings']), 3)

    def test_deviation_limit_is_strict(self):
        result = replace(self.result, deviation=30.0)
        checks = hx_design_checks(result, replace(self.hot, allowable_dp=100.0), replace(self.cold, allowable_dp=100.0))
        self.assertFalse(checks['deviation_ok'])


if __name__ == '__main__':
    unittest.main()
