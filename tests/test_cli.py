import io
import unittest
from contextlib import redirect_stderr, redirect_stdout

from fanmount.cli import main
from fanmount.config import get_config


def _run(argv):
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()


class CliTests(unittest.TestCase):
    def test_list(self):
        code, out, _ = _run(["list", "--category", "metric"])
        self.assertEqual(code, 0)
        self.assertIn("M6\tmetric\tM6x1", out)
        self.assertNotIn("1/4-20", out)

    def test_show(self):
        code, out, _ = _run(["show", "M6"])
        self.assertEqual(code, 0)
        self.assertIn("thread_pitch: 1", out)

    def test_show_unknown(self):
        code, _, err = _run(["show", "M99"])
        self.assertEqual(code, 1)
        self.assertIn("M99", err)

    def test_derive(self):
        code, out, _ = _run(["derive", "M6", "--distance", "8"])
        self.assertEqual(code, 0)
        self.assertIn("nominal_circular_diameter: 11.5470", out)
        self.assertIn("turns(8.0): 8.0000", out)

    def test_model(self):
        code, out, _ = _run(["model", "hex_bolt", "M6", "--length", "10", "--shank", "2"])
        self.assertEqual(code, 0)
        self.assertIn("components: head, shank, thread", out)
        self.assertIn("turns: 8.0000", out)

    def test_model_requires_length(self):
        code, _, err = _run(["model", "hex_bolt", "M6"])
        self.assertEqual(code, 1)
        self.assertIn("--length", err)

    def test_invalid_fragment_count(self):
        before = get_config()
        code, _, err = _run(["--fn", "-3", "list"])
        self.assertEqual(code, 1)
        self.assertIn("fn must not be negative", err)
        self.assertIs(get_config(), before)


if __name__ == "__main__":
    unittest.main()
