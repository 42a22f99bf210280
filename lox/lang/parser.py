"""Recursive-descent parser for lox. Consumes the token list produced by the Scanner once, left to right, and
returns the statements that parsed without error. For the grammar, see lox/grammar/expr.py and lox/grammar/stmt.py.

Each grammar rule is one method, and precedence climbs from assignment (lowest) to primary (highest). On a syntax
error the parser reports it to the ErrorHandler, raises ParseError to unwind to the enclosing declaration, then
synchronizes: tokens are discarded until a statement boundary, and parsing resumes. A malformed statement is thus
dropped from the result without affecting the rest of the source, and every path advances the cursor, so parsing
always terminates.
"""

from lox.grammar import expr, stmt
from lox.lang.error import ParseError
from lox.lang.token import TokenType


class Parser:
    """Parser over a token list terminated by EOF."""
    MAX_ARGS = 255

    # tokens that start a statement, used for synchronization
    STATEMENT_START = (
        TokenType.CLASS,
        TokenType.FUN,
        TokenType.VAR,
        TokenType.FOR,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.PRINT,
        TokenType.RETURN,
    )

    def __init__(self, tokens, error_handler):
        self.tokens = tokens
        self.error_handler = error_handler
        self.current = 0

    def parse(self):
        """Parses the whole token list. Returns the list of statements that parsed without error."""
        statements = []
        while not self.is_at_end():
            declaration = self.declaration()
            if declaration is not None:
                statements.append(declaration)
        return statements

    # ------------------------------------------------------------------------------------------------------------
    # statements

    def declaration(self):
        """Parses one declaration. Returns None (after synchronizing) if it was malformed."""
        try:
            if self.match(TokenType.FUN):
                return self.function("function")
            if self.match(TokenType.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseError:
            self.synchronize()
            return None

    def function(self, kind):
        name = self.consume(TokenType.IDENTIFIER, f"Expect {kind} name.")
        self.consume(TokenType.LEFT_PAREN, f"Expect '(' after {kind} name.")

        params = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(params) >= Parser.MAX_ARGS:
                    raise self.error(self.peek(), f"Can't have more than {Parser.MAX_ARGS} parameters.")
                params.append(self.consume(TokenType.IDENTIFIER, "Expect parameter name."))
                if not self.match(TokenType.COMMA):
                    break
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after parameters.")

        self.consume(TokenType.LEFT_BRACE, f"Expect '{{' before {kind} body.")
        body = self.block()
        return stmt.Function(name, tuple(params), tuple(body))

    def var_declaration(self):
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()

        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return stmt.Var(name, initializer)

    def statement(self):
        if self.match(TokenType.FOR):
            return self.for_statement()
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.RETURN):
            return self.return_statement()
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.match(TokenType.LEFT_BRACE):
            return stmt.Block(tuple(self.block()))
        return self.expression_statement()

    def for_statement(self):
        """Desugars `for (init; cond; incr) body` into `{ init; while (cond) { body; incr; } }`."""
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.match(TokenType.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition = None
        if not self.check(TokenType.SEMICOLON):
            condition = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self.check(TokenType.RIGHT_PAREN):
            increment = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self.statement()

        if increment is not None:
            body = stmt.Block((body, stmt.Expression(increment)))
        if condition is None:
            condition = expr.Literal(True)
        body = stmt.While(condition, body)

        if initializer is not None:
            body = stmt.Block((initializer, body))
        return body

    def if_statement(self):
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self.statement()
        else_branch = None
        if self.match(TokenType.ELSE):  # dangling else binds to the nearest if
            else_branch = self.statement()
        return stmt.If(condition, then_branch, else_branch)

    def print_statement(self):
        value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return stmt.Print(value)

    def return_statement(self):
        keyword = self.previous()
        value = None
        if not self.check(TokenType.SEMICOLON):
            value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after return value.")
        return stmt.Return(keyword, value)

    def while_statement(self):
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        return stmt.While(condition, self.statement())

    def block(self):
        """Parses declarations up to the closing brace (the opening brace has already been consumed)."""
        statements = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            declaration = self.declaration()
            if declaration is not None:
                statements.append(declaration)

        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def expression_statement(self):
        value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return stmt.Expression(value)

    # ------------------------------------------------------------------------------------------------------------
    # expressions

    def expression(self):
        return self.assignment()

    def assignment(self):
        """The left-hand side is parsed as an ordinary expression, then validated once '=' is seen."""
        target = self.logic_or()

        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()  # right-associative

            if isinstance(target, expr.Variable):
                return expr.Assign(target.name, value)

            raise self.error(equals, "Invalid assignment target.")

        return target

    def logic_or(self):
        left = self.logic_and()
        while self.match(TokenType.OR):
            operator = self.previous()
            left = expr.Logical(left, operator, self.logic_and())
        return left

    def logic_and(self):
        left = self.equality()
        while self.match(TokenType.AND):
            operator = self.previous()
            left = expr.Logical(left, operator, self.equality())
        return left

    def equality(self):
        return self._binary(self.comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def comparison(self):
        operators = (TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL)
        return self._binary(self.term, *operators)

    def term(self):
        return self._binary(self.factor, TokenType.MINUS, TokenType.PLUS)

    def factor(self):
        return self._binary(self.unary, TokenType.SLASH, TokenType.STAR)

    def _binary(self, operand, *operators):
        """Left-associative binary rule: operand ( operator operand )*."""
        left = operand()
        while self.match(*operators):
            operator = self.previous()
            left = expr.Binary(left, operator, operand())
        return left

    def unary(self):
        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            return expr.Unary(operator, self.unary())
        return self.call()

    def call(self):
        callee = self.primary()
        while self.match(TokenType.LEFT_PAREN):
            callee = self.finish_call(callee)
        return callee

    def finish_call(self, callee):
        arguments = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= Parser.MAX_ARGS:
                    raise self.error(self.peek(), f"Can't have more than {Parser.MAX_ARGS} arguments.")
                arguments.append(self.expression())
                if not self.match(TokenType.COMMA):
                    break

        paren = self.consume(TokenType.RIGHT_PAREN, "Expect ')' after arguments.")
        return expr.Call(callee, paren, tuple(arguments))

    def primary(self):
        if self.match(TokenType.FALSE):
            return expr.Literal(False)
        if self.match(TokenType.TRUE):
            return expr.Literal(True)
        if self.match(TokenType.NIL):
            return expr.Literal(None)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return expr.Literal(self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return expr.Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            inner = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return expr.Grouping(inner)

        raise self.error(self.peek(), "Expect expression.")

    # ------------------------------------------------------------------------------------------------------------
    # token helpers

    def match(self, *types):
        """Consumes the current token if it has any of types. Returns whether it did."""
        for token_type in types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def consume(self, token_type, message):
        """Consumes and returns the current token if it has token_type, raises a (reported) ParseError otherwise."""
        if self.check(token_type):
            return self.advance()
        raise self.error(self.peek(), message)

    def check(self, token_type):
        if self.is_at_end():
            return False
        return self.peek().type is token_type

    def advance(self):
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self):
        return self.peek().type is TokenType.EOF

    def peek(self):
        return self.tokens[self.current]

    def previous(self):
        return self.tokens[self.current - 1]

    def error(self, token, message):
        """Reports a parse error at token. Returns the ParseError so that callers decide whether to raise it."""
        return self.error_handler.parse_error(token, message)

    def synchronize(self):
        """Discards tokens until a probable statement boundary: just after a ';', or before a statement keyword. The
        offending token is always discarded, so the cursor strictly advances.
        """
        self.advance()
        while not self.is_at_end():
            if self.previous().type is TokenType.SEMICOLON:
                return
            if self.peek().type in Parser.STATEMENT_START:
                return
            self.advance()
