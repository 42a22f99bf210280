"""Handles interactive/command-line mode for the lox interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Lox interpreter shell. Every complete input is run as its own source unit."""
    intro = "Lox interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess
        self._tmp_line = ""

    def default(self, line):
        """Executes arbitrary lox input."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt
                self.sess.run(line)

    def do_help(self, arg):
        """Prints the shell commands and a short intro to lox."""
        print("Lox interpreter shell.\n\n"
              "Each input is run as its own program: nothing declared in one input is visible\n"
              "in the next. An input continues on the '. ' prompt while braces or parentheses\n"
              "are left open, so a whole function can be typed over several lines.\n\n"
              "Try 'print \"hello\" + \" world\";' or 'fun twice(n) { return n * 2; } print twice(4);'.\n\n"
              "Commands:\n"
              "  help       show this message\n"
              "  exit, ^D   leave the shell")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
