import unittest

from lox.lang.error import ErrorHandler
from lox.lang.scanner import Scanner
from lox.lang.token import Token, TokenType


def scan(source):
    error_handler = ErrorHandler()
    return Scanner(source, error_handler).scan_tokens(), error_handler


class ScannerTestCase(unittest.TestCase):

    def test_punctuation(self):
        cases = {
            "(){},.-+;*/": [TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN, TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
                            TokenType.COMMA, TokenType.DOT, TokenType.MINUS, TokenType.PLUS, TokenType.SEMICOLON,
                            TokenType.STAR, TokenType.SLASH],
            "! != = == < <= > >=": [TokenType.BANG, TokenType.BANG_EQUAL, TokenType.EQUAL, TokenType.EQUAL_EQUAL,
                                    TokenType.LESS, TokenType.LESS_EQUAL, TokenType.GREATER,
                                    TokenType.GREATER_EQUAL],
        }
        for case, expected in cases.items():
            tokens, __ = scan(case)
            self.assertEqual(expected + [TokenType.EOF], [token.type for token in tokens], case)

    def test_literals(self):
        tokens, error_handler = scan("123 4.5 \"hi there\" true false nil")
        self.assertFalse(error_handler.had_error)

        expected = [
            (TokenType.NUMBER, "123", 123.0),
            (TokenType.NUMBER, "4.5", 4.5),
            (TokenType.STRING, "\"hi there\"", "hi there"),
            (TokenType.TRUE, "true", True),
            (TokenType.FALSE, "false", False),
            (TokenType.NIL, "nil", None),
            (TokenType.EOF, "", None),
        ]
        self.assertEqual(expected, [(token.type, token.lexeme, token.literal) for token in tokens])
        self.assertIs(float, type(tokens[0].literal))

    def test_trailing_dot_is_not_fraction(self):
        tokens, __ = scan("1.")
        self.assertEqual([TokenType.NUMBER, TokenType.DOT, TokenType.EOF], [token.type for token in tokens])

    def test_identifiers_and_keywords(self):
        tokens, __ = scan("var _foo1 = fun_x; while class")
        self.assertEqual(
            [TokenType.VAR, TokenType.IDENTIFIER, TokenType.EQUAL, TokenType.IDENTIFIER, TokenType.SEMICOLON,
             TokenType.WHILE, TokenType.CLASS, TokenType.EOF],
            [token.type for token in tokens]
        )
        self.assertEqual("_foo1", tokens[1].lexeme)

    def test_lines_and_comments(self):
        tokens, __ = scan("a // comment ( ignored\nb\n\"multi\nline\" c")
        self.assertEqual(
            [("a", 1), ("b", 2), ("\"multi\nline\"", 4), ("c", 4), ("", 4)],
            [(token.lexeme, token.line) for token in tokens]
        )

    def test_errors(self):
        tokens, error_handler = scan("a @ b")
        self.assertTrue(error_handler.had_error)
        self.assertEqual(1, len(error_handler.records))
        self.assertEqual(["a", "b", ""], [token.lexeme for token in tokens])

        tokens, error_handler = scan("print \"open")
        self.assertEqual("Unterminated string.", error_handler.records[0].message)
        self.assertEqual([TokenType.PRINT, TokenType.EOF], [token.type for token in tokens])

    def test_token_is_immutable(self):
        token = Token(TokenType.IDENTIFIER, "x", None, 3)
        with self.assertRaises(AttributeError):
            token.lexeme = "y"


if __name__ == '__main__':
    unittest.main()
