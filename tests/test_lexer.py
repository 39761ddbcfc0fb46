"""
Lexer tests for minijava.

Covers the scanning rules in priority order, position tracking, and the
invariants every token stream must satisfy.
"""

import re
import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from minijava.lexer import Lexer, TokenType, LexerError, tokenize_string
from minijava.lexer.tokens import KEYWORDS


SAMPLES = [
    "",
    "\n\n\t  ",
    "int x = 1 + 2;",
    "public static void main() { System.out.println(\"hi\\\" there\"); }",
    "while (x < 10) { x++; } // trailing comment",
    "/* block\n comment */ if (a >= b) a--; else b = a % 3;",
    "#@$ é ! ~ [ ]",
    "\"unterminated string\n still going",
    "x /* unterminated comment",
    "a+++b--c==d!=e<=f>=g",
    "123abc _under_score9 String string",
]

# Whitespace and comments: the only text allowed between tokens
SKIPPABLE = re.compile(r'(?:[ \t\r\n\f\v]|//[^\n]*|/\*.*?(?:\*/|\Z))*', re.DOTALL)


def kinds(source):
    return [t.type for t in Lexer(source).tokenize()]


class TestScanningRules(unittest.TestCase):
    """Each scanning rule on its own."""

    def test_declaration_tokens(self):
        self.assertEqual(kinds("int x = 1 + 2;"), [
            TokenType.INT, TokenType.IDENTIFIER, TokenType.ASSIGN,
            TokenType.NUMBER, TokenType.PLUS, TokenType.NUMBER,
            TokenType.SEMICOLON, TokenType.EOF,
        ])

    def test_keywords_are_case_sensitive(self):
        tokens = Lexer("String string While while").tokenize()
        self.assertEqual([t.type for t in tokens[:-1]], [
            TokenType.STRING, TokenType.IDENTIFIER,
            TokenType.IDENTIFIER, TokenType.WHILE,
        ])

    def test_every_keyword_is_recognized(self):
        for word, token_type in KEYWORDS.items():
            with self.subTest(word=word):
                token = Lexer(word).tokenize()[0]
                self.assertEqual(token.type, token_type)
                self.assertEqual(token.lexeme, word)

    def test_keyword_table_is_read_only(self):
        with self.assertRaises(TypeError):
            KEYWORDS["goto"] = TokenType.IDENTIFIER

    def test_number_then_identifier(self):
        tokens = Lexer("123abc").tokenize()
        self.assertEqual(tokens[0].type, TokenType.NUMBER)
        self.assertEqual(tokens[0].lexeme, "123")
        self.assertEqual(tokens[1].type, TokenType.IDENTIFIER)
        self.assertEqual(tokens[1].lexeme, "abc")

    def test_no_signed_or_decimal_numbers(self):
        self.assertEqual(kinds("-3.5"), [
            TokenType.MINUS, TokenType.NUMBER, TokenType.DOT,
            TokenType.NUMBER, TokenType.EOF,
        ])

    def test_identifier_with_underscore_and_digits(self):
        token = Lexer("_tmp42").tokenize()[0]
        self.assertEqual(token.type, TokenType.IDENTIFIER)
        self.assertEqual(token.lexeme, "_tmp42")

    def test_two_character_operators_win(self):
        tokens = Lexer("== != <= >= ++ --").tokenize()
        self.assertEqual([t.type for t in tokens[:-1]], [
            TokenType.EQUAL, TokenType.NOT_EQUAL, TokenType.LESS_EQUAL,
            TokenType.GREATER_EQUAL, TokenType.INCREMENT, TokenType.DECREMENT,
        ])

    def test_maximal_munch_on_plus_run(self):
        self.assertEqual(kinds("a+++b"), [
            TokenType.IDENTIFIER, TokenType.INCREMENT, TokenType.PLUS,
            TokenType.IDENTIFIER, TokenType.EOF,
        ])

    def test_single_character_table(self):
        tokens = Lexer("= < > + - * / % ( ) { } ; , .").tokenize()
        self.assertEqual([t.type for t in tokens[:-1]], [
            TokenType.ASSIGN, TokenType.LESS_THAN, TokenType.GREATER_THAN,
            TokenType.PLUS, TokenType.MINUS, TokenType.MULTIPLY,
            TokenType.DIVIDE, TokenType.MODULO, TokenType.LEFT_PAREN,
            TokenType.RIGHT_PAREN, TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
            TokenType.SEMICOLON, TokenType.COMMA, TokenType.DOT,
        ])

    def test_unknown_characters_become_error_tokens(self):
        lexer = Lexer("x # !")
        tokens = lexer.tokenize()
        self.assertEqual([t.type for t in tokens], [
            TokenType.IDENTIFIER, TokenType.ERROR, TokenType.ERROR, TokenType.EOF,
        ])
        self.assertEqual(tokens[1].lexeme, "#")
        self.assertEqual(tokens[2].lexeme, "!")
        self.assertTrue(lexer.has_warnings())
        self.assertEqual(len(lexer.get_diagnostics()), 2)
        self.assertEqual(lexer.warnings[0].diagnostic.code, "L001")

    def test_non_ascii_letters_are_errors(self):
        tokens = Lexer("été").tokenize()
        self.assertEqual([t.type for t in tokens], [
            TokenType.ERROR, TokenType.IDENTIFIER, TokenType.ERROR, TokenType.EOF,
        ])

    def test_strict_tokenize_raises_on_invalid_character(self):
        with self.assertRaises(LexerError):
            tokenize_string("int x = 1 # 2;", strict=True)

    def test_lenient_tokenize_keeps_error_tokens(self):
        tokens = tokenize_string("int x = 1 # 2;")
        self.assertIn(TokenType.ERROR, [t.type for t in tokens])


class TestCommentsAndStrings(unittest.TestCase):
    """Comments produce no tokens; strings keep their raw lexeme."""

    def test_line_comment(self):
        tokens = Lexer("x // ignored ; }\ny").tokenize()
        self.assertEqual([t.lexeme for t in tokens], ["x", "y", ""])
        self.assertEqual(tokens[1].line, 2)

    def test_block_comment_tracks_lines(self):
        tokens = Lexer("x /* multi\nline */ y").tokenize()
        self.assertEqual(tokens[1].lexeme, "y")
        self.assertEqual(tokens[1].line, 2)
        self.assertEqual(tokens[1].column, 9)

    def test_unterminated_block_comment_consumes_rest(self):
        lexer = Lexer("x /* never closed")
        tokens = lexer.tokenize()
        self.assertEqual([t.type for t in tokens], [TokenType.IDENTIFIER, TokenType.EOF])
        self.assertEqual(tokens[-1].column, 18)
        self.assertFalse(lexer.has_warnings())

    def test_string_escape_keeps_next_character_verbatim(self):
        source = r'"a\"b\nc"'
        token = Lexer(source).tokenize()[0]
        self.assertEqual(token.type, TokenType.STRING_LITERAL)
        self.assertEqual(token.value, 'a"bnc')
        self.assertEqual(token.lexeme, source)

    def test_unterminated_string_consumes_rest(self):
        tokens = Lexer('"abc\ndef').tokenize()
        self.assertEqual([t.type for t in tokens], [TokenType.STRING_LITERAL, TokenType.EOF])
        self.assertEqual(tokens[0].value, "abc\ndef")
        self.assertEqual(tokens[-1].line, 2)

    def test_trailing_backslash_in_unterminated_string(self):
        tokens = Lexer('"abc\\').tokenize()
        self.assertEqual(tokens[0].value, "abc")
        self.assertEqual(tokens[0].lexeme, '"abc\\')


class TestPositions(unittest.TestCase):
    """Line/column bookkeeping."""

    def test_columns_and_lines(self):
        tokens = Lexer("int x;\n  x = 2;").tokenize()
        positions = [(t.lexeme, t.line, t.column) for t in tokens]
        self.assertEqual(positions, [
            ("int", 1, 1), ("x", 1, 5), (";", 1, 6),
            ("x", 2, 3), ("=", 2, 5), ("2", 2, 7), (";", 2, 8),
            ("", 2, 9),
        ])

    def test_eof_position_after_trailing_newline(self):
        eof = Lexer("x\n").tokenize()[-1]
        self.assertEqual((eof.line, eof.column), (2, 1))

    def test_offsets_index_the_source(self):
        source = "class A {\n  int y = 10;\n}"
        for token in Lexer(source).tokenize():
            self.assertEqual(source[token.location.offset:token.location.offset + len(token.lexeme)],
                             token.lexeme)


class TestStreamInvariants(unittest.TestCase):
    """Properties that hold for any input."""

    def test_ends_with_exactly_one_eof(self):
        for source in SAMPLES:
            with self.subTest(source=source):
                tokens = Lexer(source).tokenize()
                self.assertEqual(tokens[-1].type, TokenType.EOF)
                self.assertEqual(tokens[-1].lexeme, "")
                self.assertEqual([t.type for t in tokens].count(TokenType.EOF), 1)

    def test_lines_and_columns_are_positive(self):
        for source in SAMPLES:
            with self.subTest(source=source):
                for token in Lexer(source).tokenize():
                    self.assertGreaterEqual(token.line, 1)
                    self.assertGreaterEqual(token.column, 1)

    def test_lexemes_and_gaps_rebuild_the_source(self):
        for source in SAMPLES:
            with self.subTest(source=source):
                pieces = []
                pos = 0
                for token in Lexer(source).tokenize():
                    gap = source[pos:token.location.offset]
                    self.assertIsNotNone(SKIPPABLE.fullmatch(gap), repr(gap))
                    pieces.append(gap)
                    pieces.append(token.lexeme)
                    pos = token.location.offset + len(token.lexeme)
                self.assertEqual(pos, len(source))
                self.assertEqual("".join(pieces), source)

    def test_tokenize_is_deterministic(self):
        for source in SAMPLES:
            with self.subTest(source=source):
                lexer = Lexer(source)
                first = list(lexer.tokenize())
                second = list(lexer.tokenize())
                self.assertEqual(first, second)
                self.assertEqual(first, Lexer(source).tokenize())


if __name__ == '__main__':
    unittest.main()
