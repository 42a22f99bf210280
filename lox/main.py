"""Runs the lox interpreter on a script file, or in command-line mode when no file is given. Also uses the error
handling context manager. Called from the lox executable script.

Exit status of a script run: 0 on success, 65 if the script had static (scan/parse) errors, 70 if execution stopped
on a runtime error, 66 if the script could not be read (65 if it is not valid UTF-8).
"""

import argparse
import sys

from lox.grammar.printer import AstPrinter
from lox.lang.error import ErrorHandler
from lox.lang.session import Session
from lox.lang.shell import Shell


def main(argv=None):
    """Runs lox interpreter. Called from lox executable script."""
    parser = argparse.ArgumentParser(prog="lox", description="Tree-walking interpreter for the lox language.")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--ast", action="store_true", help="print the parsed program instead of running it")
    args = parser.parse_args(argv)

    if args.ast and args.file is None:
        parser.error("--ast requires a file")

    with ErrorHandler() as error_handler:
        if args.file is None:
            Shell(Session(error_handler, cmd_line=True)).cmdloop()
            return

        sess = Session(error_handler, args.file)
        source = sess.load()

        if args.ast:
            print(AstPrinter().display(sess.parse(source)))
            outcome = error_handler.exit_code
        else:
            outcome = sess.run(source)

        error_handler.flush()
        sys.exit(outcome)
