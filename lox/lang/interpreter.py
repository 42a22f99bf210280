"""Tree-walking evaluator for lox. Walks the statements produced by the Parser, consulting the EnvironmentManager for
names and producing runtime values (see lox/lang/objects.py).

Control transfer: a `return` raises ReturnSignal, which unwinds through every enclosing statement (blocks restore
their scope on the way out) until the call boundary in call_function turns it into the call's result. Runtime errors
unwind through the same path but are never caught by a call boundary: they reach interpret, which reports them and
stops executing the remaining top-level statements.
"""

import operator

from lox.lang.environment import EnvironmentManager
from lox.lang.error import ArityError, LoxRuntimeError, LoxTypeError, ReturnSignal
from lox.lang.objects import (NATIVES, LoxCallable, UserFunction, divide, is_equal, is_number, is_string,
                              is_truthy, stringify)
from lox.lang.token import TokenType


class Interpreter:
    """Evaluates statements. Global bindings persist across calls to interpret on the same instance."""
    ARITHMETIC = {
        TokenType.MINUS: operator.sub,
        TokenType.STAR: operator.mul,
        TokenType.SLASH: divide,
    }
    COMPARISON = {
        TokenType.GREATER: operator.gt,
        TokenType.GREATER_EQUAL: operator.ge,
        TokenType.LESS: operator.lt,
        TokenType.LESS_EQUAL: operator.le,
    }

    def __init__(self, error_handler, output=print):
        """output is the print sink: called once per executed print statement with the display string."""
        self.error_handler = error_handler
        self.output = output

        self.environment = EnvironmentManager()
        for native in NATIVES:
            self.environment.define(native.name, native)

    def interpret(self, statements):
        """Executes statements in order. Stops at the first runtime error, which is reported to the error handler.
        Returns whether every statement ran.
        """
        try:
            for statement in statements:
                self.execute(statement)
        except LoxRuntimeError as error:
            self.error_handler.runtime_error(error)
            return False
        except ReturnSignal as signal:
            self.error_handler.warn(signal.keyword, "'return' outside of a function stops the program.")
            return False
        return True

    def execute(self, statement):
        statement.accept(self)

    def evaluate(self, expression):
        return expression.accept(self)

    def execute_block(self, statements):
        """Runs statements in a new block scope. The scope is exited whatever the outcome."""
        self.environment.enter_scope()
        try:
            for statement in statements:
                self.execute(statement)
        finally:
            self.environment.exit_scope()

    def call_function(self, function, arguments):
        """Invokes a UserFunction: a fresh chain rooted at the global frame, one block scope holding the parameters,
        then the body as a block. The caller's chain is restored unconditionally.
        """
        declaration = function.declaration

        self.environment.enter_function_scope()
        try:
            self.environment.enter_scope()
            for param, argument in zip(declaration.params, arguments):
                self.environment.define(param.lexeme, argument)

            self.execute_block(declaration.body)
        except ReturnSignal as signal:
            return signal.value
        finally:
            self.environment.exit_function_scope()
        return None

    # ------------------------------------------------------------------------------------------------------------
    # statements

    def visit_expression_stmt(self, statement):
        self.evaluate(statement.expression)

    def visit_print_stmt(self, statement):
        self.output(stringify(self.evaluate(statement.expression)))

    def visit_var_stmt(self, statement):
        value = None
        if statement.initializer is not None:
            value = self.evaluate(statement.initializer)
        self.environment.define(statement.name.lexeme, value)

    def visit_block_stmt(self, statement):
        self.execute_block(statement.statements)

    def visit_if_stmt(self, statement):
        if is_truthy(self.evaluate(statement.condition)):
            self.execute(statement.then_branch)
        elif statement.else_branch is not None:
            self.execute(statement.else_branch)

    def visit_while_stmt(self, statement):
        while is_truthy(self.evaluate(statement.condition)):
            self.execute(statement.body)

    def visit_function_stmt(self, statement):
        self.environment.define(statement.name.lexeme, UserFunction(statement))

    def visit_return_stmt(self, statement):
        value = None
        if statement.value is not None:
            value = self.evaluate(statement.value)
        raise ReturnSignal(statement.keyword, value)

    # ------------------------------------------------------------------------------------------------------------
    # expressions

    def visit_literal(self, expression):
        return expression.value

    def visit_grouping(self, expression):
        return self.evaluate(expression.expression)

    def visit_unary(self, expression):
        right = self.evaluate(expression.right)

        if expression.operator.type is TokenType.MINUS:
            Interpreter.check_number_operands(expression.operator, right)
            return -right
        return not is_truthy(right)  # TokenType.BANG

    def visit_binary(self, expression):
        left = self.evaluate(expression.left)
        right = self.evaluate(expression.right)
        token_type = expression.operator.type

        if token_type is TokenType.PLUS:
            if (is_number(left) and is_number(right)) or (is_string(left) and is_string(right)):
                return left + right
            raise LoxTypeError(expression.operator, "Operands must be two numbers or two strings.")

        if token_type is TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if token_type is TokenType.BANG_EQUAL:
            return not is_equal(left, right)

        Interpreter.check_number_operands(expression.operator, left, right)
        if token_type in Interpreter.ARITHMETIC:
            return Interpreter.ARITHMETIC[token_type](left, right)
        return Interpreter.COMPARISON[token_type](left, right)

    def visit_logical(self, expression):
        """Short-circuits, returning the left operand itself (not a coerced boolean) when it decides the result."""
        left = self.evaluate(expression.left)

        if expression.operator.type is TokenType.OR:
            if is_truthy(left):
                return left
        elif not is_truthy(left):
            return left

        return self.evaluate(expression.right)

    def visit_variable(self, expression):
        return self.environment.get(expression.name)

    def visit_assign(self, expression):
        value = self.evaluate(expression.value)
        self.environment.assign(expression.name, value)
        return value

    def visit_call(self, expression):
        callee = self.evaluate(expression.callee)
        arguments = [self.evaluate(argument) for argument in expression.arguments]

        if not isinstance(callee, LoxCallable):
            raise LoxTypeError(expression.paren, "Can only call functions and classes.")
        if len(arguments) != callee.arity():
            raise ArityError(expression.paren, callee.arity(), len(arguments))

        return callee.call(self, arguments)

    @staticmethod
    def check_number_operands(operator_token, *operands):
        if not all(is_number(operand) for operand in operands):
            message = "Operand must be a number." if len(operands) == 1 else "Operands must be numbers."
            raise LoxTypeError(operator_token, message)
