"""Expression nodes of the lox abstract syntax tree.

```
<expression> ::= <assignment>
<assignment> ::= IDENTIFIER "=" <assignment> | <logic_or>
<logic_or>   ::= <logic_and> ( "or" <logic_and> )*
<logic_and>  ::= <equality> ( "and" <equality> )*
<equality>   ::= <comparison> ( ( "!=" | "==" ) <comparison> )*
<comparison> ::= <term> ( ( ">" | ">=" | "<" | "<=" ) <term> )*
<term>       ::= <factor> ( ( "-" | "+" ) <factor> )*
<factor>     ::= <unary> ( ( "/" | "*" ) <unary> )*
<unary>      ::= ( "!" | "-" ) <unary> | <call>
<call>       ::= <primary> ( "(" <arguments>? ")" )*
<primary>    ::= "true" | "false" | "nil" | NUMBER | STRING | IDENTIFIER | "(" <expression> ")"
```

Nodes are immutable once built by the parser. Sub-trees may be shared by several parents but never form cycles.
Every node dispatches to its visitor through accept, so evaluators and printers never inspect node types.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from lox.lang.token import Token


class Expr(ABC):
    """Superclass of every expression node."""

    @abstractmethod
    def accept(self, visitor):
        """Calls the visitor method matching this node kind and returns its result."""


@dataclass(frozen=True)
class Literal(Expr):
    value: object

    def accept(self, visitor):
        return visitor.visit_literal(self)


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_grouping(self)


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr

    def accept(self, visitor):
        return visitor.visit_unary(self)


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr

    def accept(self, visitor):
        return visitor.visit_binary(self)


@dataclass(frozen=True)
class Logical(Expr):
    """`and`/`or`. Kept apart from Binary because the right operand is evaluated lazily."""
    left: Expr
    operator: Token
    right: Expr

    def accept(self, visitor):
        return visitor.visit_logical(self)


@dataclass(frozen=True)
class Variable(Expr):
    name: Token

    def accept(self, visitor):
        return visitor.visit_variable(self)


@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr

    def accept(self, visitor):
        return visitor.visit_assign(self)


@dataclass(frozen=True)
class Call(Expr):
    """paren is the closing parenthesis, used to locate runtime errors raised by the call."""
    callee: Expr
    paren: Token
    arguments: tuple

    def accept(self, visitor):
        return visitor.visit_call(self)
