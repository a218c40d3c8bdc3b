import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest import mock

from calculator import main


@mock.patch.dict(os.environ, {"NO_COLOR": "1"})
class MainTestCase(unittest.TestCase):

    def _main(self, *args):
        """Runs main with args and returns (exit code, output)."""
        out = io.StringIO()
        code = 0
        with mock.patch.object(sys, "argv", ["calc", *args]), redirect_stdout(out):
            try:
                main.main()
            except SystemExit as exit_:
                code = exit_.code
        return code, out.getvalue()

    def _write(self, text):
        handle, path = tempfile.mkstemp(suffix=".calc")
        with os.fdopen(handle, "w") as file:
            file.write(text)
        self.addCleanup(os.remove, path)
        return path

    def test_self_test(self):
        code, output = self._main("--self-test")
        self.assertEqual(0, code)
        self.assertEqual(len(main.SELF_TESTS), output.count("[PASS]"))
        self.assertIn("Input: -8%3 Result: -2 [PASS]", output)

    def test_self_test_failure(self):
        with mock.patch.dict(main.SELF_TESTS, {"1/0": 0.0}):
            code, output = self._main("--self-test")
        self.assertEqual(1, code)
        self.assertIn("Input: 1/0 Result: exception thrown: division by zero in '1/0' [FAIL]", output)

    def test_file(self):
        code, output = self._main(self._write("let r = 2\nr * r * 3\n"))
        self.assertEqual(0, code)
        self.assertEqual("= 2\n= 12\n", output)

    def test_file_error(self):
        path = self._write("let r = 2\nr % 0\nr\n")
        code, output = self._main(path)
        self.assertEqual(1, code)
        self.assertTrue(output.startswith("= 2\n"))
        self.assertIn(f"File '{path}', line 2:\n    r % 0", output)
        self.assertIn("error: division by zero in 'r % 0'", output)

    def test_missing_file(self):
        code, output = self._main(os.path.join(tempfile.gettempdir(), "no", "such.calc"))
        self.assertEqual(1, code)
        self.assertIn("could not be opened", output)

    def test_shell(self):
        with mock.patch.object(sys, "stdin", io.StringIO("let x = 4\nx * x\nq\n")):
            code, output = self._main()
        self.assertEqual(0, code)
        self.assertIn("= 16\n", output)


if __name__ == '__main__':
    unittest.main()
