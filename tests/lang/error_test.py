import io
import os
import unittest
from contextlib import redirect_stdout
from unittest import mock

from calculator.lang.error import CalcException, CalcSyntaxError, ErrorHandler, InternalError


@mock.patch.dict(os.environ, {"NO_COLOR": "1"})
class CalcExceptionTestCase(unittest.TestCase):

    def test_message(self):
        error = CalcSyntaxError("missing '=' in a declaration of '{1}'", ("let x 3", "x"), start=6, end=7)
        self.assertEqual("missing '=' in a declaration of 'x'", str(error))
        self.assertEqual("let x 3", error.expr)
        self.assertEqual((6, 7), (error.start, error.end))
        self.assertFalse(error.internal)

    def test_defaults(self):
        error = CalcException("keyboard interrupt")
        self.assertEqual("", error.expr)
        self.assertEqual((0, 0), (error.start, error.end))

        error = CalcException("'{}' could not be opened", "missing.txt")
        self.assertEqual((0, len("missing.txt")), (error.start, error.end))

    def test_internal(self):
        self.assertTrue(InternalError("buffer already full").internal)


@mock.patch.dict(os.environ, {"NO_COLOR": "1"})
class ErrorHandlerTestCase(unittest.TestCase):

    def _run(self, error_handler, exception):
        out = io.StringIO()
        with redirect_stdout(out):
            with error_handler:
                raise exception
        return out.getvalue()

    def test_diagnose(self):
        error = CalcSyntaxError("expected a primary in '{}'", "1 + * 2", start=4, end=5)
        self.assertEqual("  1 + * 2\n      ^", ErrorHandler.diagnose(error))

        error = CalcSyntaxError("missing a right parenthesis in '{}'", "(1+2", start=4, end=4)
        self.assertEqual("  (1+2\n      ^", ErrorHandler.diagnose(error))

    def test_non_fatal(self):
        error_handler = ErrorHandler(fatal=False)
        output = self._run(error_handler, CalcSyntaxError("expected a primary in '{}'", "1 +", start=3, end=3))
        self.assertIn("error: expected a primary in '1 +'", output)
        self.assertIn("^", output)

    def test_fatal(self):
        error_handler = ErrorHandler()
        with self.assertRaises(SystemExit) as context:
            self._run(error_handler, CalcException("'{}' could not be opened", "x.calc", diagnosis=False))
        self.assertEqual(1, context.exception.code)

    def test_traceback(self):
        error_handler = ErrorHandler(fatal=False)
        error_handler.register_file("input.calc")
        error_handler.register_line("input.calc", "1 / 0", 3)

        output = self._run(error_handler, CalcException("division by zero in '{}'", "1 / 0", start=2, end=3))
        self.assertIn("File 'input.calc', line 3:\n    1 / 0", output)
        self.assertEqual({"input.calc": (None, None)}, error_handler.traceback)

    def test_internal(self):
        output = self._run(ErrorHandler(fatal=False), InternalError("called putback twice"))
        self.assertIn("[internal] error: called putback twice", output)

    def test_recursion(self):
        output = self._run(ErrorHandler(fatal=False), RecursionError())
        self.assertIn("error: expression is nested too deeply", output)

    def test_unknown(self):
        with self.assertRaises(KeyError):
            self._run(ErrorHandler(fatal=False), KeyError("oops"))

    def test_no_error(self):
        with ErrorHandler() as error_handler:
            value = 1
        self.assertEqual(1, value)
        self.assertTrue(error_handler.fatal)


if __name__ == '__main__':
    unittest.main()
