import math
import unittest

from lox.lang.error import (ArityError, ErrorHandler, LoxError, LoxRuntimeError, LoxTypeError, ReturnSignal,
                            UndefinedVariableError)
from lox.lang.interpreter import Interpreter
from lox.lang.parser import Parser
from lox.lang.scanner import Scanner


def parse(source, error_handler):
    tokens = Scanner(source, error_handler).scan_tokens()
    return Parser(tokens, error_handler).parse()


def run(source):
    """Runs source through interpret. Returns printed lines, the error handler and the interpreter."""
    error_handler = ErrorHandler()
    output = []
    interpreter = Interpreter(error_handler, output.append)
    interpreter.interpret(parse(source, error_handler))
    return output, error_handler, interpreter


def execute(source):
    """Executes source statement by statement, letting runtime errors propagate."""
    error_handler = ErrorHandler()
    output = []
    interpreter = Interpreter(error_handler, output.append)
    for statement in parse(source, error_handler):
        interpreter.execute(statement)
    return output


def evaluate(source):
    error_handler = ErrorHandler()
    statement, = parse(source + ";", error_handler)
    return Interpreter(error_handler, print).evaluate(statement.expression)


class ArithmeticTestCase(unittest.TestCase):

    def test_matches_ieee_doubles(self):
        cases = [(0.1, 0.2), (3.0, 7.0), (1.5, 0.25), (123456789.0, 0.001), (2.0, 3.0)]
        for a, b in cases:
            self.assertEqual(a + b, evaluate(f"{a} + {b}"), (a, b))
            self.assertEqual(a - b, evaluate(f"{a} - {b}"), (a, b))
            self.assertEqual(a * b, evaluate(f"{a} * {b}"), (a, b))
            self.assertEqual(a / b, evaluate(f"{a} / {b}"), (a, b))

    def test_division_by_zero(self):
        self.assertEqual(math.inf, evaluate("1 / 0"))
        self.assertEqual(-math.inf, evaluate("-1 / 0"))
        self.assertEqual(-math.inf, evaluate("1 / -0"))
        self.assertTrue(math.isnan(evaluate("0 / 0")))

    def test_unary(self):
        self.assertEqual(-3.0, evaluate("-3"))
        self.assertEqual(3.0, evaluate("--3"))
        self.assertRaises(LoxTypeError, evaluate, "-\"a\"")
        self.assertRaises(LoxTypeError, evaluate, "-true")

    def test_numeric_operands_required(self):
        cases = ["1 - \"a\"", "\"a\" * 2", "nil / 1", "true - 1", "1 < \"2\"", "\"a\" < \"b\"", "nil >= nil"]
        for case in cases:
            self.assertRaises(LoxTypeError, evaluate, case)

    def test_comparison(self):
        cases = {"1 < 2": True, "2 <= 2": True, "3 > 4": False, "4 >= 5": False}
        for case, expected in cases.items():
            self.assertIs(expected, evaluate(case), case)


class PlusTestCase(unittest.TestCase):

    def test_concatenation(self):
        self.assertEqual("ab", evaluate("\"a\" + \"b\""))
        self.assertEqual(3.0, evaluate("1 + 2"))

    def test_mixed_operands(self):
        for case in ["\"a\" + 1", "1 + \"a\"", "true + 1", "nil + nil", "\"a\" + nil"]:
            with self.assertRaises(LoxTypeError) as context:
                evaluate(case)
            self.assertEqual("Operands must be two numbers or two strings.", context.exception.message)
            self.assertEqual("+", context.exception.token.lexeme)


class EqualityTestCase(unittest.TestCase):

    def test_equality(self):
        cases = {
            "1 == \"1\"": False,
            "nil == nil": True,
            "1 == 1.0": True,
            "nil == false": False,
            "true == 1": False,
            "false == 0": False,
            "true == true": True,
            "\"a\" == \"a\"": True,
            "1 != \"1\"": True,
            "nil != nil": False,
            "(0 / 0) == (0 / 0)": False,
        }
        for case, expected in cases.items():
            self.assertIs(expected, evaluate(case), case)


class TruthinessTestCase(unittest.TestCase):

    def test_not(self):
        cases = {"!nil": True, "!false": True, "!true": False, "!0": False, "!\"\"": False, "!!nil": False}
        for case, expected in cases.items():
            self.assertIs(expected, evaluate(case), case)

    def test_if_and_while_use_truthiness(self):
        output, __, __ = run("if (0) print \"zero\"; if (nil) print \"nil\"; else print \"else\";")
        self.assertEqual(["zero", "else"], output)

        output, __, __ = run("var i = 0; while (i < 3) { print i; i = i + 1; }")
        self.assertEqual(["0.00", "1.00", "2.00"], output)


class LogicalTestCase(unittest.TestCase):

    def test_short_circuit(self):
        self.assertIs(False, evaluate("false and (1/0)"))
        self.assertIs(True, evaluate("true or (1/0)"))
        self.assertIs(False, evaluate("false and undefined"))
        self.assertIs(True, evaluate("true or undefined"))

    def test_right_side_not_evaluated(self):
        source = """
        fun boom() { print "boom"; return true; }
        print false and boom();
        print true or boom();
        print true and boom();
        """
        output, error_handler, __ = run(source)
        self.assertFalse(error_handler.had_runtime_error)
        self.assertEqual(["false", "true", "boom", "true"], output)

    def test_returns_operand_value(self):
        self.assertEqual("x", evaluate("nil or \"x\""))
        self.assertEqual("a", evaluate("\"a\" or \"b\""))
        self.assertIsNone(evaluate("nil and \"b\""))
        self.assertEqual(1.0, evaluate("0 and 1"))


class StatementTestCase(unittest.TestCase):

    def test_print_formatting(self):
        source = "print 3; print -0.5; print 1/3; print nil; print true; print \"hi\"; fun f() {} print f; print clock;"
        output, __, __ = run(source)
        self.assertEqual(["3.00", "-0.50", "0.33", "nil", "true", "hi", "<fn f>", "<native fn>"], output)

    def test_var_defaults_to_nil(self):
        output, __, __ = run("var a; print a;")
        self.assertEqual(["nil"], output)

    def test_block_scope(self):
        output, error_handler, __ = run("{ var x = 1; } print x;")
        self.assertEqual([], output)
        self.assertTrue(error_handler.had_runtime_error)
        self.assertEqual("Undefined variable 'x'.", error_handler.records[0].message)

    def test_redeclaration(self):
        output, error_handler, __ = run("var x = 1; var x = 2; print x;")
        self.assertFalse(error_handler.had_runtime_error)
        self.assertEqual(["2.00"], output)

    def test_shadowing(self):
        output, __, __ = run("var a = \"outer\"; { var a = \"inner\"; print a; } print a;")
        self.assertEqual(["inner", "outer"], output)

    def test_assignment(self):
        output, __, __ = run("var a = 1; { a = 2; } print a; print a = 3; var b; var c; b = c = \"x\"; print b + c;")
        self.assertEqual(["2.00", "3.00", "xx"], output)

    def test_undefined_variable(self):
        self.assertRaises(UndefinedVariableError, execute, "print y;")
        self.assertRaises(UndefinedVariableError, execute, "y = 1;")

    def test_for_loop(self):
        output, __, __ = run("var sum = 0; for (var i = 0; i < 5; i = i + 1) sum = sum + i; print sum;")
        self.assertEqual(["10.00"], output)

        output, error_handler, __ = run("for (var i = 0; i < 1; i = i + 1) {} print i;")
        self.assertTrue(error_handler.had_runtime_error)  # loop variable is scoped to the loop

    def test_runtime_error_stops_execution(self):
        output, error_handler, interpreter = run("print 1; { var a = 1; print -\"x\"; } print 2;")
        self.assertEqual(["1.00"], output)
        self.assertTrue(error_handler.had_runtime_error)
        self.assertEqual("Operand must be a number.", error_handler.records[0].message)
        self.assertEqual(1, interpreter.environment.depth)


class FunctionTestCase(unittest.TestCase):

    def test_arity(self):
        with self.assertRaises(ArityError) as context:
            execute("fun f(a, b) {} f(1);")
        self.assertEqual((2, 1), (context.exception.expected, context.exception.actual))
        self.assertEqual("Expected 2 arguments but got 1.", context.exception.message)

        self.assertRaises(ArityError, execute, "clock(1);")

    def test_not_callable(self):
        for case in ["\"not fn\"();", "nil();", "var x = 1; x();"]:
            with self.assertRaises(LoxTypeError) as context:
                execute(case)
            self.assertEqual("Can only call functions and classes.", context.exception.message)

    def test_return_unwinds_to_call(self):
        output, __, __ = run("fun f() { if (true) { return 1; } return 2; } print f();")
        self.assertEqual(["1.00"], output)

        output, __, __ = run("fun f() { while (true) { { return \"done\"; } } } print f();")
        self.assertEqual(["done"], output)

        output, __, __ = run("fun f() { { return 1; print \"unreachable\"; } } print f();")
        self.assertEqual(["1.00"], output)

    def test_implicit_nil(self):
        output, __, __ = run("fun f() {} print f(); fun g() { return; } print g();")
        self.assertEqual(["nil", "nil"], output)

    def test_arguments_left_to_right(self):
        source = """
        fun a() { print "a"; return 1; }
        fun b() { print "b"; return 2; }
        fun add(x, y) { return x + y; }
        print add(a(), b());
        """
        output, __, __ = run(source)
        self.assertEqual(["a", "b", "3.00"], output)

    def test_recursion(self):
        source = "fun fib(n) { if (n < 2) return n; return fib(n - 1) + fib(n - 2); } print fib(15);"
        output, __, __ = run(source)
        self.assertEqual(["610.00"], output)

    def test_functions_are_values(self):
        output, __, __ = run("fun f() { return \"f\"; } var g = f; print g(); print g == f;")
        self.assertEqual(["f", "true"], output)

    def test_globals_visible_and_assignable(self):
        output, __, __ = run("var count = 0; fun bump() { count = count + 1; } bump(); bump(); print count;")
        self.assertEqual(["2.00"], output)

    def test_parameters_are_local(self):
        output, error_handler, __ = run("var a = \"global\"; fun f(a) { print a; } f(\"param\"); print a;")
        self.assertEqual(["param", "global"], output)

    def test_runtime_error_not_caught_by_call(self):
        output, error_handler, interpreter = run("fun f() { return -\"x\"; } print f(); print 2;")
        self.assertEqual([], output)
        self.assertTrue(error_handler.had_runtime_error)
        self.assertEqual(0, interpreter.environment.call_depth)
        self.assertEqual(1, interpreter.environment.depth)


class FunctionScopeTestCase(unittest.TestCase):
    """Function bodies see globals plus their own locals, never the locals of an enclosing scope."""

    def test_nested_function_cannot_see_enclosing_locals(self):
        source = """
        fun outer() {
            var secret = "local";
            fun inner() { return secret; }
            return inner();
        }
        print outer();
        """
        output, error_handler, __ = run(source)
        self.assertEqual([], output)
        self.assertEqual("Undefined variable 'secret'.", error_handler.records[0].message)

    def test_nested_function_sees_globals(self):
        source = """
        var secret = "global";
        fun outer() {
            var secret = "local";
            fun inner() { return secret; }
            return inner();
        }
        print outer();
        """
        output, __, __ = run(source)
        self.assertEqual(["global"], output)

    def test_callee_cannot_see_caller_locals(self):
        output, error_handler, __ = run("fun show() { print x; } { var x = 1; show(); }")
        self.assertEqual([], output)
        self.assertTrue(error_handler.had_runtime_error)

    def test_returned_function_has_no_closure(self):
        source = """
        fun make() {
            var n = 1;
            fun get() { return n; }
            return get;
        }
        var get = make();
        print get;
        var n = "global n";
        print get();
        """
        output, __, __ = run(source)
        self.assertEqual(["<fn get>", "global n"], output)


class ControlTransferTestCase(unittest.TestCase):

    def test_return_is_not_an_error(self):
        self.assertFalse(issubclass(ReturnSignal, LoxError))
        self.assertTrue(issubclass(UndefinedVariableError, LoxRuntimeError))

    def test_top_level_return(self):
        output, error_handler, __ = run("print 1; return; print 2;")
        self.assertEqual(["1.00"], output)
        self.assertFalse(error_handler.had_error)
        self.assertFalse(error_handler.had_runtime_error)
        self.assertTrue(error_handler.records[0].warning)

    def test_unbounded_recursion_is_fatal(self):
        self.assertRaises(RecursionError, execute, "fun f() { f(); } f();")


if __name__ == '__main__':
    unittest.main()
