"""Session control for lox: runs source units, either a whole script file or one interactive input at a time.

One source unit is scanned, parsed completely, then the statements that parsed are interpreted. Units are
independent: in command-line mode every input starts from a fresh interpreter, so no bindings carry over from one
unit to the next.
"""

from lox.lang.error import ErrorHandler
from lox.lang.interpreter import Interpreter
from lox.lang.parser import Parser
from lox.lang.scanner import Scanner
from lox.lang.token import TokenType


class Session:
    """Governs a lox session, with control over the interpreter and its error handler."""
    SH_FILE = "<in>"  # command-line interpreter filename
    NO_INPUT = 66     # exit status when the script cannot be read
    DATA_ERR = 65     # exit status when the script is not valid text

    def __init__(self, error_handler, path=SH_FILE, cmd_line=False, output=print):
        self.error_handler = error_handler
        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.output = output

        if self.cmd_line:
            self.error_handler.immediate = True
            self.error_handler.fatal = False

        self.interpreter = Interpreter(error_handler, output)

    @staticmethod
    def preprocess_line(line, tmp_line=""):
        """Joins a continuation line to the pending input. Returns the joined line and whether more input is needed,
        which is the case while braces or parentheses are left open. Brackets are counted over tokens, so those in
        strings and comments are ignored.
        """
        if tmp_line:
            line = tmp_line + "\n" + line

        tokens = Scanner(line, ErrorHandler(immediate=False, fatal=False)).scan_tokens()
        types = [token.type for token in tokens]
        add_to_prev = (types.count(TokenType.LEFT_BRACE) > types.count(TokenType.RIGHT_BRACE)
                       or types.count(TokenType.LEFT_PAREN) > types.count(TokenType.RIGHT_PAREN))
        return line, add_to_prev

    def load(self):
        """Returns the contents of self.path. Exits (with NO_INPUT, or DATA_ERR if it is not UTF-8) if it cannot be
        read.
        """
        try:
            with open(self.path, "r", encoding="utf-8") as file:
                return file.read()
        except UnicodeDecodeError:
            self.error_handler.throw(f"'{self.path}' is not valid UTF-8", code=Session.DATA_ERR)
        except OSError:
            self.error_handler.throw(f"'{self.path}' could not be opened", code=Session.NO_INPUT)
        return None

    def parse(self, source):
        """Scans and parses source. Returns the statements that parsed without error."""
        tokens = Scanner(source, self.error_handler).scan_tokens()
        return Parser(tokens, self.error_handler).parse()

    def run(self, source):
        """Runs one source unit. Returns its outcome as an exit status: 0 success, 65 static error, 70 runtime error.
        In command-line mode the unit gets a fresh interpreter and the error state is reset afterwards, so every
        unit starts clean.
        """
        if self.cmd_line:
            self.interpreter = Interpreter(self.error_handler, self.output)

        statements = self.parse(source)
        self.interpreter.interpret(statements)

        outcome = self.error_handler.exit_code
        if self.cmd_line:
            self.error_handler.reset()
        return outcome
