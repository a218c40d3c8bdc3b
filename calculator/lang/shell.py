"""Handles interactive/command-line mode for the calculator. Uses cmd as backend."""

import cmd

from calculator.lang.session import Session


class Shell(cmd.Cmd):
    """Calculator shell."""
    intro = "Floating point calculator :: Python backend\nType 'help' for more information, 'q' to quit."
    prompt = "> "
    RESULT = "= "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.line_num = 0

    def default(self, line):
        """Evaluates an arbitrary line and prints its result."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            self.sess.add(line, self.line_num)
            self.sess.run()

            if self.sess.results:
                print(Shell.RESULT + Session.format(self.sess.pop()))

    @staticmethod
    def used_as_name(arg):
        """Whether a command word is followed by more input, in which case the word is a variable name."""
        return bool(Session.preprocess_line(arg))

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if Shell.used_as_name(arg):
            return self.default(self.lastcmd)  # 'help' used as a variable name

        print("Keep entering expressions with floating point numbers, +, -, *, /, % and parentheses.\n\n"
              "Variables are declared with 'let', e.g. 'let x = 3', and remain defined for the rest of\n"
              "the session. Several statements may be written on one line: 'let x = 2 (x + 2) * 3'\n"
              "defines x and then prints 12. Exit by typing 'q'.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits calculator."""
        if Shell.used_as_name(arg):
            return self.default(self.lastcmd)  # 'EOF' used as a variable name

        print()
        return True

    def do_exit(self, arg):
        """Exits calculator."""
        if Shell.used_as_name(arg):
            return self.default(self.lastcmd)  # 'exit' used as a variable name
        return True

    do_q = do_exit
