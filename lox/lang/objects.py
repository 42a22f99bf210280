"""Runtime values of lox, mapped onto Python objects:

```
Nil            -> None
Boolean        -> bool
Number         -> float (IEEE-754 double)
String         -> str
NativeFunction -> NativeFunction
UserFunction   -> UserFunction
```

Values are immutable: assignment rebinds a name to a new value and never mutates one in place. Because bool is a
subclass of int in Python, type checks here compare exact types so that booleans never pass as numbers.
"""

import math
import time
from abc import ABC, abstractmethod


class LoxCallable(ABC):
    """Anything that can appear on the left of a call expression."""

    @abstractmethod
    def arity(self):
        """Number of arguments this callable requires."""

    @abstractmethod
    def call(self, interpreter, arguments):
        """Invokes this callable. Arity has already been checked by the caller."""


class NativeFunction(LoxCallable):
    """Function implemented in Python. function receives the list of argument values."""

    def __init__(self, name, arity, function):
        self.name = name
        self._arity = arity
        self.function = function

    def arity(self):
        return self._arity

    def call(self, interpreter, arguments):
        return self.function(arguments)

    def __str__(self):
        return "<native fn>"

    def __repr__(self):
        return f"NativeFunction({self.name!r}, arity={self._arity})"


class UserFunction(LoxCallable):
    """Function declared in lox. Holds only its declaration: there is no captured environment, a call always starts
    from the global frame (see Environment.enter_function_scope).
    """

    def __init__(self, declaration):
        self.declaration = declaration

    def arity(self):
        return len(self.declaration.params)

    def call(self, interpreter, arguments):
        return interpreter.call_function(self, arguments)

    def __str__(self):
        return f"<fn {self.declaration.name.lexeme}>"

    def __repr__(self):
        return f"UserFunction({self.declaration.name.lexeme!r}, arity={self.arity()})"


def clock(arguments):
    """Native clock(): seconds since the epoch."""
    return time.time()


NATIVES = [NativeFunction("clock", 0, clock)]


def is_number(value):
    return type(value) is float


def is_string(value):
    return type(value) is str


def is_truthy(value):
    """Only nil and false are falsy."""
    if value is None:
        return False
    if type(value) is bool:
        return value
    return True


def is_equal(left, right):
    """Structural equality. Values of different types are never equal, and comparing them is never an error."""
    if left is None or right is None:
        return left is None and right is None
    if type(left) is not type(right):
        return False
    return left == right


def divide(left, right):
    """IEEE-754 division: Python raises on division by zero, doubles do not."""
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def stringify(value):
    """Display text of value, as emitted by print."""
    if value is None:
        return "nil"
    if type(value) is bool:
        return "true" if value else "false"
    if is_number(value):
        return f"{value:.2f}"
    return str(value)

