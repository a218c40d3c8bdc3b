"""Error handling for the calculator. Only CalcExceptions should be encountered during evaluation: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Python version must be >=3.6, because the traceback requires that dicts are insertion-ordered.
"""

import sys

from termcolor import colored


class CalcException(Exception):
    """Templates an error message so that it can be used to throw a calculator error. exprs[0] should be the offending
    expr (usually the whole input line), and start/end the span of the offending token within it.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        super().__init__(msg.format(*exprs))
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal


class LexError(CalcException):
    """An unrecognized character was encountered."""


class CalcSyntaxError(CalcException):
    """A token did not match what a grammar production expected."""


class UndefinedVariableError(CalcException):
    """A name was referenced before being defined."""


class DivisionByZeroError(CalcException):
    """Divisor or modulus operand was exactly 0.0."""


class InternalError(CalcException):
    """Invariant violation inside the calculator itself, never caused by user input."""

    def __init__(self, msg, *args, **kwargs):
        kwargs["internal"] = True
        super().__init__(msg, *args, **kwargs)


class ErrorHandler:
    """Context manager that will report calculator errors and suppress them unless fatal."""
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to evaluating line."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after line is evaluated successfully."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error):
        """Returns offending part of error.expr highlighted and bolded."""
        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a CalcException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        for file, (line, line_num) in self.traceback.items():
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.remove_line(path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(CalcException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(CalcException("expression is nested too deeply"))
        elif exc_type is not None and issubclass(exc_type, CalcException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(CalcException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
