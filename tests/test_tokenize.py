import unittest

from tslisp.tslisp_lexer import chunk_source, detect_token_type, is_numeric, tokenize
from tslisp.tslisp_types import Token, TokenType


class TestChunking(unittest.TestCase):

    def test_splits_on_whitespace_and_parens(self):
        self.assertEqual(chunk_source("(f 1 2)"), ["(", "f", "1", "2", ")"])

    def test_parens_split_without_whitespace(self):
        self.assertEqual(chunk_source("((f)(g))"), ["(", "(", "f", ")", "(", "g", ")", ")"])

    def test_string_keeps_whitespace_and_parens(self):
        self.assertEqual(
            chunk_source('(console.log "hello (big) world")'),
            ["(", "console.log", '"hello (big) world"', ")"],
        )

    def test_semicolon_inside_string_is_not_a_comment(self):
        self.assertEqual(chunk_source('(f "a;b" c)'), ["(", "f", '"a;b"', "c", ")"])

    def test_comment_runs_to_end_of_line(self):
        self.assertEqual(
            chunk_source("; a (comment) here\n(f)"),
            ["; a (comment) here", "(", "f", ")"],
        )

    def test_quote_inside_comment_does_not_open_string(self):
        self.assertEqual(chunk_source('; it"s\n(f)'), ['; it"s', "(", "f", ")"])

    def test_newline_outside_comment_is_whitespace(self):
        self.assertEqual(chunk_source("(f)\n(g)"), ["(", "f", ")", "(", "g", ")"])

    def test_unterminated_string_runs_to_end(self):
        self.assertEqual(chunk_source('(f "abc (d'), ["(", "f", '"abc (d'])

    def test_empty_source(self):
        self.assertEqual(chunk_source(""), [])
        self.assertEqual(chunk_source("   \n\t"), [])


class TestTokenTypes(unittest.TestCase):

    def test_parens(self):
        self.assertEqual(detect_token_type("("), TokenType.OPEN_PAREN)
        self.assertEqual(detect_token_type(")"), TokenType.CLOSE_PAREN)

    def test_booleans(self):
        self.assertEqual(detect_token_type("true"), TokenType.BOOLEAN)
        self.assertEqual(detect_token_type("false"), TokenType.BOOLEAN)
        self.assertEqual(detect_token_type("True"), TokenType.IDENTIFIER)

    def test_keywords_are_case_sensitive(self):
        self.assertEqual(detect_token_type("defconstant"), TokenType.DEF_CONSTANT)
        self.assertEqual(detect_token_type("defun"), TokenType.DEF_FUNCTION)
        self.assertEqual(detect_token_type("defvar"), TokenType.DEF_VARIABLE)
        self.assertEqual(detect_token_type("Defun"), TokenType.IDENTIFIER)
        self.assertEqual(detect_token_type("defvars"), TokenType.IDENTIFIER)

    def test_numbers(self):
        for text in ("1", "3.14", "-2", "+7", ".5", "1e3", "Infinity"):
            with self.subTest(text=text):
                self.assertEqual(detect_token_type(text), TokenType.NUMBER)

    def test_numeric_prefix_counts_as_number(self):
        self.assertTrue(is_numeric("12px"))
        self.assertFalse(is_numeric("px12"))

    def test_operators_are_identifiers(self):
        for text in ("+", "-", "*", "<=", "!=", "mod"):
            with self.subTest(text=text):
                self.assertEqual(detect_token_type(text), TokenType.IDENTIFIER)

    def test_strings_and_comments(self):
        self.assertEqual(detect_token_type('"hi"'), TokenType.STRING)
        self.assertEqual(detect_token_type("; note"), TokenType.COMMENT)

    def test_dotted_names_are_identifiers(self):
        self.assertEqual(detect_token_type("console.log"), TokenType.IDENTIFIER)


class TestTokenize(unittest.TestCase):

    def test_tokenize_call(self):
        self.assertEqual(
            tokenize('(f 1 "s" x) ; done'),
            [
                Token(TokenType.OPEN_PAREN, "("),
                Token(TokenType.IDENTIFIER, "f"),
                Token(TokenType.NUMBER, "1"),
                Token(TokenType.STRING, '"s"'),
                Token(TokenType.IDENTIFIER, "x"),
                Token(TokenType.CLOSE_PAREN, ")"),
                Token(TokenType.COMMENT, "; done"),
            ],
        )

    def test_tokenize_definition(self):
        kinds = [tok.type for tok in tokenize("(defconstant pi 3.14)")]
        self.assertEqual(
            kinds,
            [
                TokenType.OPEN_PAREN,
                TokenType.DEF_CONSTANT,
                TokenType.IDENTIFIER,
                TokenType.NUMBER,
                TokenType.CLOSE_PAREN,
            ],
        )


if __name__ == "__main__":
    unittest.main()
