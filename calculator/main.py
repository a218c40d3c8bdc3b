"""Runs the calculator on a file, in command-line mode, or on its built-in self-test. Also uses error handling
context manager. Called from the calc console script.

Python version must be >=3.6, because error handling requires that dicts are insertion-ordered.
"""

import argparse
import sys

from termcolor import colored

from calculator.lang.error import CalcException, ErrorHandler
from calculator.lang.evaluator import evaluate
from calculator.lang.lexical import TokenStream
from calculator.lang.session import Session
from calculator.lang.shell import Shell
from calculator.lang.variables import VarTable


SELF_TESTS = {
    "2": 2.0,
    "1+2": 3.0,
    "1-2": -1.0,
    "0+2": 2.0,
    "452+1000": 1452.0,
    "6*3+2": 20.0,
    "2+6*3": 20.0,
    "7/3": 7.0 / 3.0,
    "6/3+2": 4.0,
    "2+6/3": 4.0,
    "+1": 1.0,
    "-1": -1.0,
    "-1--1": 0.0,
    "8%3": 2.0,
    "-8%3": -2.0,
    "8%-3": 2.0,
    "-8%-3": -2.0,
    "let x = 3": 3.0,
    "let x = 2 (x + 2) * 3": 12.0,
}


def self_test():
    """Evaluates each of SELF_TESTS in a fresh VarTable and prints whether it gave the expected value. Returns whether
    all of them passed.
    """
    passed = True
    for line, expected in SELF_TESTS.items():
        try:
            actual = evaluate(TokenStream(line), VarTable())
            result = Session.format(actual)
            success = actual == expected
        except CalcException as error:
            result = f"exception thrown: {error}"
            success = False

        verdict = colored("[PASS]", "green") if success else colored("[FAIL]", "red", attrs=["bold"])
        print(f"Input: {line} Result: {result} {verdict}")
        passed = passed and success

    return passed


def main():
    """Runs calculator. Called from calc console script."""
    assert sys.version_info >= (3, 6), "calc cannot be run with python < 3.6"

    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(description="floating point calculator with variables")
        parser.add_argument("file", help="file to evaluate line by line (if empty, goes to command-line mode)",
                            nargs="?")
        parser.add_argument("--self-test", help="run the built-in self-test and exit", action="store_true")
        args = parser.parse_args()

        if args.self_test:
            sys.exit(0 if self_test() else 1)

        elif args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)
            try:
                sess.run()
            finally:
                for result in sess.results:  # results of the lines before an error are still shown
                    print(Shell.RESULT + Session.format(result))

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
