"""Error handling for the lox language. Two families of errors exist: parse-time errors, which are reported and
recovered from by the parser, and runtime errors, which are fatal to the rest of the current source unit. Only
LoxErrors should be encountered while running: if another type of error is raised and makes it all the way to
ErrorHandler, it is assumed to be an internal issue.

ReturnSignal is deliberately not a LoxError. It is the control transfer used by `return` and is caught at call
boundaries only, so it can never be reported as an error.
"""

import sys
from dataclasses import dataclass

from termcolor import colored

from lox.lang.token import TokenType


class LoxError(Exception):
    """Base lox error. token is the offending token (used for line/location), may be None for scanner errors."""

    def __init__(self, token, message):
        super().__init__(message)
        self.token = token
        self.message = message


class ParseError(LoxError):
    """Raised inside the parser to unwind to the nearest statement boundary. Always reported before being raised."""


class LoxRuntimeError(LoxError):
    """Runtime error: never retried, always fatal to the remainder of the current top-level statement sequence."""


class LoxTypeError(LoxRuntimeError):
    """Operand or callee has the wrong runtime type."""


class ArityError(LoxRuntimeError):
    """Wrong number of arguments passed to a callable."""

    def __init__(self, token, expected, actual):
        super().__init__(token, f"Expected {expected} arguments but got {actual}.")
        self.expected = expected
        self.actual = actual


class UndefinedVariableError(LoxRuntimeError):
    """Name is not bound anywhere in the active scope chain."""

    def __init__(self, token):
        super().__init__(token, f"Undefined variable '{token.lexeme}'.")


class ReturnSignal(Exception):
    """Non-local transfer of a return value to the nearest call boundary."""

    def __init__(self, keyword, value):
        super().__init__()
        self.keyword = keyword
        self.value = value


@dataclass(frozen=True)
class ErrorRecord:
    """One reported diagnostic. where is the optional location text (e.g. " at 'x'")."""
    line: int
    where: str
    message: str
    runtime: bool = False
    warning: bool = False


class ErrorHandler:
    """Collects and displays lox diagnostics for one session. Also a context manager that will silently suppress
    Python errors and report them as lox errors instead.

    In immediate mode (interactive shell) every record is printed as soon as it is reported. Otherwise records are
    accumulated and printed by flush, after a whole source unit has been run.
    """
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, immediate=False, fatal=True):
        self.immediate = immediate
        self.fatal = fatal

        self.records = []
        self.had_error = False
        self.had_runtime_error = False

    @staticmethod
    def locate(token):
        """Returns location text of token for error messages."""
        if token is None:
            return ""
        if token.type is TokenType.EOF:
            return " at end"
        return f" at '{token.lexeme}'"

    def report(self, line, where, message):
        """Registers a static (scan/parse) error."""
        self.had_error = True
        self._add(ErrorRecord(line, where, message))

    def error(self, line, message):
        """Registers a static error that is not tied to a token (scanner errors)."""
        self.report(line, "", message)

    def parse_error(self, token, message):
        """Registers a parse error at token and returns a ParseError for the parser to raise."""
        self.report(token.line, ErrorHandler.locate(token), message)
        return ParseError(token, message)

    def runtime_error(self, error):
        """Registers a LoxRuntimeError."""
        self.had_runtime_error = True
        line = error.token.line if error.token else 0
        self._add(ErrorRecord(line, ErrorHandler.locate(error.token), error.message, runtime=True))

    def warn(self, token, message):
        """Registers a warning. Warnings never change the outcome of a run."""
        self._add(ErrorRecord(token.line, ErrorHandler.locate(token), message, warning=True))

    def _add(self, record):
        self.records.append(record)
        if self.immediate:
            self.display(record)

    @staticmethod
    def format(record):
        """Returns record as a colored, human readable message."""
        color = ErrorHandler.WARNING if record.warning else ErrorHandler.ERROR
        if record.warning:
            kind = "warning"
        elif record.runtime:
            kind = "runtime error"
        else:
            kind = "error"

        message = colored(f"[line {record.line}] ", attrs=["bold"])
        message += colored(kind, color, attrs=["bold"])
        return message + f"{record.where}: {record.message}"

    def display(self, record):
        print(ErrorHandler.format(record))

    def flush(self):
        """Prints all accumulated records (no-op in immediate mode, where they were already printed)."""
        if not self.immediate:
            errors = [record for record in self.records if not record.warning]
            if len(errors) > 1:
                print(colored(f"Found {len(errors)} errors:", attrs=["bold"]))
            for record in self.records:
                self.display(record)
        self.records = []

    def reset(self):
        """Clears error state between independent source units."""
        self.records = []
        self.had_error = False
        self.had_runtime_error = False

    @property
    def exit_code(self):
        """Exit status of a script run: runtime errors take precedence over static errors."""
        if self.had_runtime_error:
            return 70
        if self.had_error:
            return 65
        return 0

    def throw(self, message, internal=False, code=None):
        """Prints an error that did not come from lox code and exits if this handler is fatal. code overrides the
        exit status.
        """
        error_msg = ""
        if internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + message
        print(error_msg)

        self.had_runtime_error = True
        if self.fatal:
            sys.exit(self.exit_code if code is None else code)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or exc_type is SystemExit:
            return False

        if exc_type is KeyboardInterrupt:
            self.flush()
            self.throw("keyboard interrupt")
        elif issubclass(exc_type, RecursionError):
            self.flush()
            self.throw("maximum recursion depth exceeded")
        elif issubclass(exc_type, LoxRuntimeError):
            self.runtime_error(exc_val)
            self.flush()
            if self.fatal:
                sys.exit(self.exit_code)
        else:
            self.flush()
            self.throw(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True)
        return True
