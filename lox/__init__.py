"""Tree-walking interpreter for lox, a small dynamically-typed scripting language.

Basic program flow:
    1. Scanner: turns source text into a flat token list (lox/lang/scanner.py)
    2. Parser: recursive descent over the tokens, producing statement/expression trees (lox/lang/parser.py, with the
       node kinds in lox/grammar)
    3. Interpreter: walks the trees, binding names through a chain of scopes (lox/lang/interpreter.py,
       lox/lang/environment.py)
"""
