"""Session control for the calculator, either in command-line mode or file interpretation mode. A session owns the
VarTable, so variables defined on one line can be used on any later line.
"""

from calculator.lang.error import CalcException
from calculator.lang.evaluator import evaluate
from calculator.lang.lexical import TokenStream
from calculator.lang.variables import VarTable


class Session:
    """Governs a calculator session, with control over the variables defined in it."""
    SH_FILE = "<in>"  # command-line interpreter filename
    COMMENT = "#"

    def __init__(self, error_handler, path, cmd_line):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.variables = VarTable()
        self.to_exec = {}  # dict of line num: lines to evaluate
        self.results = []

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    lines = file.readlines()
            except OSError:
                raise CalcException("'{}' could not be opened", path, diagnosis=False)

            for line_num, line in enumerate(lines):
                self.add(line, line_num + 1)

        elif not cmd_line:
            raise CalcException("'<in>' is a reserved filename", diagnosis=False)

    @staticmethod
    def preprocess_line(line):
        """Gets rid of comments and surrounding whitespace."""
        if Session.COMMENT in line:
            line = line[:line.index(Session.COMMENT)]
        return line.strip()

    @staticmethod
    def format(value):
        """Formats a result the way it is displayed."""
        return f"{value:g}"

    def add(self, line, line_num):
        """Adds line to the current session. Evaluation is delayed until run is called; blank lines are dropped."""
        line = Session.preprocess_line(line)
        if line:
            self.to_exec[line_num] = line

    def run(self):
        """Evaluates this session's pending lines in order, each with a fresh TokenStream. Will raise any errors that
        are encountered, after which the remaining lines stay pending.
        """
        for line_num, line in sorted(self.to_exec.items()):
            self.error_handler.register_line(self.path, line, line_num)  # in case error is raised

            try:
                self.results.append(evaluate(TokenStream(line), self.variables))
            finally:
                del self.to_exec[line_num]

            self.error_handler.remove_line(self.path)  # error was not raised

    def pop(self):
        """Removes and returns the most recent result."""
        return self.results.pop()
