"""
Unit tests for the web app handlers.
"""

import os
import unittest

from gradio_app import CASE_KEYS, compute_hx_results, compute_shell_results, update_default_heights


def shell_args(**overrides):
    values = dict(
        units="SI", standard="API_650", diameter=30.0, shell_height=12.0,
        courses_text="2.4, 2.4, 2.4, 2.4, 2.4", adopted_text="10, 10, 10, 10, 10",
        specific_gravity=1.0, corrosion_allowance=2.0, design_pressure=0.0,
        allowable_stress_design=160.0, allowable_stress_test=171.0, joint_efficiency=1.0,
        min_nominal_thickness=6.0, active_case_keys=["operating", "hydrotest"],
        liquid_heights=[10.8, 12.0, 0.0, 0.0, 0.0, 0.0],
    )
    values.update(overrides)
    return values


class TestShellHandler(unittest.TestCase):
    """Test the tank shell tab handler."""

    def test_valid_run(self):
        summary, table, csv_path, thickness_fig, util_fig = compute_shell_results(**shell_args())
        try:
            self.assertIn("API 650", summary)
            self.assertEqual(len(table), 5)
            self.assertTrue(os.path.exists(csv_path))
            self.assertIsNotNone(thickness_fig)
            self.assertIsNotNone(util_fig)
        finally:
            os.remove(csv_path)

    def test_cleared_number_fields(self):
        """Test blank number fields give a warning rather than an error."""
        summary, table, csv_path, _, _ = compute_shell_results(**shell_args(diameter=None))
        self.assertIn("Tank diameter must be positive.", summary)
        self.assertTrue(table.empty)
        self.assertIsNone(csv_path)

        summary, _, _, _, _ = compute_shell_results(**shell_args(joint_efficiency=None, design_pressure=None))
        self.assertIn("Joint efficiency (E)", summary)

    def test_bad_course_text(self):
        summary, _, csv_path, _, _ = compute_shell_results(**shell_args(courses_text="2.4, x"))
        self.assertIn("Warnings", summary)
        self.assertIsNone(csv_path)


class TestHxHandler(unittest.TestCase):

    def test_cleared_shell_passes(self):
        summary, summary_df, bd_df, fig = compute_hx_results(
            "light_oil", 10.0, 100.0, 60.0, 0.7, "light_hydrocarbon",
            "water", 10.526, 30.0, 50.0, 0.7, "cooling_water",
            20.0, 16.0, 4.88, 50.0, "triangular", 1.25,
            "Fixed", None, 2, 0.4, 25.0, 500.0,
        )
        self.assertIn("Warnings", summary)
        self.assertTrue(summary_df.empty)
        self.assertIsNone(fig)


class TestDefaultHeights(unittest.TestCase):
    """Test liquid height refill on shell height change."""

    def test_typed_heights_kept(self):
        current = [7.5, 11.0, 0.0, 0.0, 2.0, 0.0]
        updates = update_default_heights(20.0, *current)
        self.assertEqual([u['value'] for u in updates], current)

    def test_blank_heights_filled(self):
        current = [None, 11.0, None, 0.0, 2.0, 0.0]
        updates = dict(zip(CASE_KEYS, (u['value'] for u in update_default_heights(20.0, *current))))

        self.assertAlmostEqual(updates['operating'], 18.0)
        self.assertEqual(updates['hydrotest'], 11.0)
        self.assertEqual(updates['empty_wind'], 0.0)
        self.assertEqual(updates['vacuum'], 2.0)


if __name__ == '__main__':
    unittest.main()
