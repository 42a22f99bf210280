"""Readable rendering of a parsed program, used by `lox --ast`.

Expressions print as parenthesized prefix forms, e.g. `-123 * (45.67)` becomes `(* (- 123) (group 45.67))`.
Statements print one per line, nested statements indented by four spaces:

```
(fun add (a b)
    (return (+ a b)))
```
"""

from lox.lang.objects import stringify


class AstPrinter:
    """Visitor that renders expressions and statements as strings."""
    INDENT = "    "

    def display(self, statements):
        """Returns the whole program as text, one top-level statement per line."""
        return "\n".join(self.print_stmt(statement) for statement in statements)

    def print_expr(self, expression):
        return expression.accept(self)

    def print_stmt(self, statement, indents=0):
        return AstPrinter.INDENT * indents + statement.accept(_StmtPrinter(self, indents))

    def parenthesize(self, name, *expressions):
        parts = [name] + [self.print_expr(expression) for expression in expressions]
        return "(" + " ".join(parts) + ")"

    def visit_literal(self, expression):
        value = expression.value
        if type(value) is str:
            return f"\"{value}\""
        if type(value) is float:
            return str(int(value)) if value.is_integer() else repr(value)
        return stringify(value)

    def visit_grouping(self, expression):
        return self.parenthesize("group", expression.expression)

    def visit_unary(self, expression):
        return self.parenthesize(expression.operator.lexeme, expression.right)

    def visit_binary(self, expression):
        return self.parenthesize(expression.operator.lexeme, expression.left, expression.right)

    def visit_logical(self, expression):
        return self.parenthesize(expression.operator.lexeme, expression.left, expression.right)

    def visit_variable(self, expression):
        return expression.name.lexeme

    def visit_assign(self, expression):
        return self.parenthesize(f"= {expression.name.lexeme}", expression.value)

    def visit_call(self, expression):
        return self.parenthesize("call", expression.callee, *expression.arguments)


class _StmtPrinter:
    """Statement half of AstPrinter. indents is the nesting level of the statement being printed."""

    def __init__(self, printer, indents):
        self.printer = printer
        self.indents = indents

    def _nested(self, statements):
        return "".join("\n" + self.printer.print_stmt(statement, self.indents + 1) for statement in statements)

    def visit_expression_stmt(self, statement):
        return self.printer.parenthesize(";", statement.expression)

    def visit_print_stmt(self, statement):
        return self.printer.parenthesize("print", statement.expression)

    def visit_var_stmt(self, statement):
        if statement.initializer is None:
            return f"(var {statement.name.lexeme})"
        return self.printer.parenthesize(f"var {statement.name.lexeme}", statement.initializer)

    def visit_block_stmt(self, statement):
        return "(block" + self._nested(statement.statements) + ")"

    def visit_if_stmt(self, statement):
        branches = [statement.then_branch]
        if statement.else_branch is not None:
            branches.append(statement.else_branch)
        return f"(if {self.printer.print_expr(statement.condition)}" + self._nested(branches) + ")"

    def visit_while_stmt(self, statement):
        return f"(while {self.printer.print_expr(statement.condition)}" + self._nested([statement.body]) + ")"

    def visit_function_stmt(self, statement):
        params = " ".join(param.lexeme for param in statement.params)
        return f"(fun {statement.name.lexeme} ({params})" + self._nested(statement.body) + ")"

    def visit_return_stmt(self, statement):
        if statement.value is None:
            return "(return)"
        return self.printer.parenthesize("return", statement.value)
