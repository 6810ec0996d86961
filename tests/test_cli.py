import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest import mock

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import cli


def _run(argv):
    buf = io.StringIO()
    with redirect_stdout(buf):
        code = cli.main(argv)
    return code, buf.getvalue()


class TestCli(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def test_single_road_with_summary(self):
        path = os.path.join(self.tmp.name, "builds", "road.json")
        code, output = _run(["generate", "--size", "3", "--seed", "1", "--json", path, "--summary"])
        self.assertEqual(code, 0)
        self.assertTrue(os.path.exists(path))
        self.assertIn("Segments: 3", output)
        self.assertIn("Attempts: 1", output)

    def test_batch_to_out_dir(self):
        code, _ = _run(["generate", "--size", "3", "--count", "2", "--seed", "2", "--out-dir", self.tmp.name])
        self.assertEqual(code, 0)
        self.assertEqual(sorted(os.listdir(self.tmp.name)), ["road_0.json", "road_1.json"])

    def test_exhausted_attempts_exit_code(self):
        path = os.path.join(self.tmp.name, "road.json")
        code, output = _run(["generate", "--size", "2", "--max-attempts", "2", "--json", path])
        self.assertEqual(code, 1)
        self.assertIn("Error: No road of size 2 found after 2 attempt(s)", output)
        self.assertFalse(os.path.exists(path))

    def test_negative_max_attempts_exit_code(self):
        path = os.path.join(self.tmp.name, "road.json")
        code, output = _run(["generate", "--size", "3", "--max-attempts", "-1", "--json", path])
        self.assertEqual(code, 1)
        self.assertIn("Error: max_attempts must be a non-negative integer, got -1", output)
        self.assertFalse(os.path.exists(path))

    def test_verbose_flag_prints_search_progress(self):
        path = os.path.join(self.tmp.name, "road.json")
        code, output = _run(["generate", "--size", "2", "--max-attempts", "1", "--json", path, "--verbose"])
        self.assertEqual(code, 1)
        self.assertIn("Backtracking from", output)

    def test_config_command(self):
        with mock.patch.dict(os.environ, {"ROADGEN_SIZE": "12", "ROADGEN_COUNT": "0"}):
            code, output = _run(["config"])
        self.assertEqual(code, 1)
        self.assertIn("Size: 12", output)
        self.assertIn("Default count must be a positive integer", output)

    def test_requires_command(self):
        with redirect_stdout(io.StringIO()), mock.patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit):
                cli.main([])


if __name__ == '__main__':
    unittest.main()
