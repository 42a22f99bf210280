"""Name binding storage and scope-chain resolution.

An Environment is one frame: a dict of bindings plus a link to its enclosing frame. Frames form a singly-linked
chain that always ends at the single global frame.

EnvironmentManager owns the chains. It keeps a stack of chains, one per active function call plus the top-level one,
and every lookup goes through the innermost frame of the topmost chain. A function call does not extend the caller's
chain: it starts a fresh chain rooted at the global frame. So a function body sees global bindings plus its own
locals and parameters, and never the locals of the scope it was declared in, including an enclosing function's
locals. Nested functions are not closures.

Chain depth only changes through the paired enter_*/exit_* methods.
"""

from lox.lang.error import UndefinedVariableError


class Environment:
    """Single frame of bindings."""

    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing

    def define(self, name, value):
        """(Re)binds name in this frame. Redeclaration in the same frame just replaces the value."""
        self.values[name] = value

    def get(self, name):
        """Returns the value bound to token name, searching innermost to outermost."""
        frame = self
        while frame is not None:
            if name.lexeme in frame.values:
                return frame.values[name.lexeme]
            frame = frame.enclosing
        raise UndefinedVariableError(name)

    def assign(self, name, value):
        """Replaces the nearest existing binding of token name. Never creates a binding."""
        frame = self
        while frame is not None:
            if name.lexeme in frame.values:
                frame.values[name.lexeme] = value
                return
            frame = frame.enclosing
        raise UndefinedVariableError(name)

    @property
    def depth(self):
        """Number of frames in the chain ending at this frame (the global frame has depth 1)."""
        depth, frame = 1, self.enclosing
        while frame is not None:
            depth, frame = depth + 1, frame.enclosing
        return depth

    def __repr__(self):
        return f"Environment({list(self.values)}, depth={self.depth})"


class EnvironmentManager:
    """Stack of scope chains. The innermost frame of the topmost chain is the active frame."""

    def __init__(self):
        self.globals = Environment()
        self._chains = [self.globals]  # innermost frame of every active chain

    @property
    def current(self):
        """Active (innermost) frame."""
        return self._chains[-1]

    @property
    def depth(self):
        """Depth of the active chain."""
        return self.current.depth

    @property
    def call_depth(self):
        """Number of active function scopes."""
        return len(self._chains) - 1

    def define(self, name, value):
        self.current.define(name, value)

    def get(self, name):
        return self.current.get(name)

    def assign(self, name, value):
        self.current.assign(name, value)

    def enter_scope(self):
        """Pushes one block-level frame onto the active chain."""
        self._chains[-1] = Environment(self.current)

    def exit_scope(self):
        """Pops the innermost frame of the active chain. Exiting the root frame of a chain is a no-op."""
        if self.current.enclosing is not None:
            self._chains[-1] = self.current.enclosing

    def enter_function_scope(self):
        """Starts a new chain rooted only at the global frame, hiding the caller's locals."""
        self._chains.append(self.globals)

    def exit_function_scope(self):
        """Discards the chain opened by the matching enter_function_scope, along with any frames still pushed on it.
        Exiting when no function scope is active is a no-op.
        """
        if len(self._chains) > 1:
            self._chains.pop()
