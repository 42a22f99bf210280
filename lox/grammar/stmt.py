"""Statement nodes of the lox abstract syntax tree.

```
<program>     ::= <declaration>* EOF
<declaration> ::= <fun_decl> | <var_decl> | <statement>
<fun_decl>    ::= "fun" IDENTIFIER "(" <parameters>? ")" <block>
<var_decl>    ::= "var" IDENTIFIER ( "=" <expression> )? ";"
<statement>   ::= <expr_stmt> | <for_stmt> | <if_stmt> | <print_stmt> | <return_stmt> | <while_stmt> | <block>
<for_stmt>    ::= "for" "(" ( <var_decl> | <expr_stmt> | ";" ) <expression>? ";" <expression>? ")" <statement>
<if_stmt>     ::= "if" "(" <expression> ")" <statement> ( "else" <statement> )?
<return_stmt> ::= "return" <expression>? ";"
<while_stmt>  ::= "while" "(" <expression> ")" <statement>
<block>       ::= "{" <declaration>* "}"
```

There is no For node: the parser desugars `for` into a While wrapped in Blocks.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from lox.grammar.expr import Expr
from lox.lang.token import Token


class Stmt(ABC):
    """Superclass of every statement node."""

    @abstractmethod
    def accept(self, visitor):
        """Calls the visitor method matching this node kind and returns its result."""


@dataclass(frozen=True)
class Expression(Stmt):
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_expression_stmt(self)


@dataclass(frozen=True)
class Print(Stmt):
    expression: Expr

    def accept(self, visitor):
        return visitor.visit_print_stmt(self)


@dataclass(frozen=True)
class Var(Stmt):
    name: Token
    initializer: Optional[Expr] = None

    def accept(self, visitor):
        return visitor.visit_var_stmt(self)


@dataclass(frozen=True)
class Block(Stmt):
    statements: tuple

    def accept(self, visitor):
        return visitor.visit_block_stmt(self)


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None

    def accept(self, visitor):
        return visitor.visit_if_stmt(self)


@dataclass(frozen=True)
class While(Stmt):
    condition: Expr
    body: Stmt

    def accept(self, visitor):
        return visitor.visit_while_stmt(self)


@dataclass(frozen=True)
class Function(Stmt):
    """Function declaration: name, ordered parameter tokens and body statements. Shared by every value created from
    it, never copied.
    """
    name: Token
    params: tuple
    body: tuple

    def accept(self, visitor):
        return visitor.visit_function_stmt(self)


@dataclass(frozen=True)
class Return(Stmt):
    keyword: Token
    value: Optional[Expr] = None

    def accept(self, visitor):
        return visitor.visit_return_stmt(self)
