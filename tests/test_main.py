"""
Unit tests for the command line project runner.
"""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from main import parse_args, run_project_file

PROJECT = {
    'projectName': 'Water Tank T-7',
    'units': 'SI',
    'recommendedStandard': 'API_650',
    'designCases': {'operating': True, 'hydrotest': True},
    'service': {'specificGravity': 1.0, 'corrosionAllowance': 2.0,
                'liquidHeights': {'operating': 10.8, 'hydrotest': 12.0}},
    'geometry': {'diameter': 30.0, 'shellHeight': 12.0, 'courses': [2.4] * 5},
    'materials': {'allowableStressDesign': 160.0, 'allowableStressTest': 171.0,
                  'jointEfficiency': 1.0, 'minNominalThickness': 6.0,
                  'courseNominalThickness': [14.0, 12.0, 10.0, 10.0, 10.0]},
}


class TestRunProjectFile(unittest.TestCase):
    """Test running project files from the command line."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, 'tank.json')
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(PROJECT, f)

    def tearDown(self):
        self.tmpdir.cleanup()

    def run_quietly(self, *args):
        out = io.StringIO()
        with redirect_stdout(out):
            ok = run_project_file(*args)
        return ok, out.getvalue()

    def test_run_with_csv_and_save(self):
        csv_path = os.path.join(self.tmpdir.name, 'shell.csv')
        save_path = os.path.join(self.tmpdir.name, 'clean.json')
        ok, output = self.run_quietly(self.path, csv_path, save_path)

        self.assertTrue(ok)
        self.assertIn("Water Tank T-7", output)
        self.assertTrue(os.path.exists(csv_path))
        with open(save_path, encoding='utf-8') as f:
            saved = json.load(f)
        self.assertEqual(saved['projectName'], 'Water Tank T-7')
        self.assertEqual(saved['version'], 1)
        self.assertIn('updatedAt', saved)

    def test_non_utf8_file(self):
        with open(self.path, 'wb') as f:
            f.write(b'{"projectName": "T\xff\xfe"}')
        ok, output = self.run_quietly(self.path)

        self.assertFalse(ok)
        self.assertIn("Could not read a valid project", output)

    def test_incomplete_project_not_saved(self):
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump({'projectName': 'Draft'}, f)
        save_path = os.path.join(self.tmpdir.name, 'clean.json')
        ok, _ = self.run_quietly(self.path, None, save_path)

        self.assertFalse(ok)
        self.assertFalse(os.path.exists(save_path))


class TestParseArgs(unittest.TestCase):

    def test_project_flags(self):
        args = parse_args(['--project', 'tank.json', '--csv', 'out.csv', '--save', 'clean.json'])
        self.assertEqual(args.project, 'tank.json')
        self.assertEqual(args.csv, 'out.csv')
        self.assertEqual(args.save, 'clean.json')
        self.assertFalse(args.hx)


if __name__ == '__main__':
    unittest.main()
