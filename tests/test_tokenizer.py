import sys
import os

sys.path.append(os.path.dirname(os.path.realpath(__file__)) + "/..")

import unittest
from Tokenizer import Tokenizer, Token
from Errors import LexError
import io


class TestTokenizer(unittest.TestCase):
    def check_token(self, token: Token, _type: int, sym: str, col: int):
        self.assertEqual(token.type, _type)
        self.assertEqual(token.sym, sym)
        self.assertEqual(token.col, col)

    def test_tokenizer(self):
        tokenizer = Tokenizer("12 - 15")

        token = tokenizer.getNext()
        self.check_token(token, Token.NUMBER, "12", 1)
        self.assertEqual(token.value, 12)

        token = tokenizer.getNext()
        self.check_token(token, Token.MINUS, "-", 4)
        self.assertIsNone(token.value)

        token = tokenizer.getNext()
        self.check_token(token, Token.NUMBER, "15", 6)
        self.assertEqual(token.value, 15)

        token = tokenizer.getNext()
        self.check_token(token, Token.EOF, "", 8)

        # Past the end we keep getting EOF
        self.assertEqual(tokenizer.getNext().type, Token.EOF)

    def test_operators(self):
        tokenizer = Tokenizer("(1+2)*3/4")
        types = [token.type for token in tokenizer]
        self.assertEqual(types, [
            Token.OPENPAREN, Token.NUMBER, Token.PLUS, Token.NUMBER,
            Token.CLOSEPAREN, Token.TIMES, Token.NUMBER, Token.DIV,
            Token.NUMBER, Token.EOF])

    def test_single_eof(self):
        tokens = list(Tokenizer("  7  \n"))
        self.assertEqual(len(tokens), 2)
        self.check_token(tokens[0], Token.NUMBER, "7", 3)
        self.assertEqual(tokens[1].type, Token.EOF)

        # Not restartable
        tokenizer = Tokenizer("1")
        self.assertEqual(len(list(tokenizer)), 2)
        self.assertEqual(list(tokenizer), [])

        self.assertEqual([t.type for t in Tokenizer("")], [Token.EOF])
        self.assertEqual([t.type for t in Tokenizer(" \t ")], [Token.EOF])

    def test_number(self):
        tokenizer = Tokenizer("007 1234567890123456789012345")
        token = tokenizer.getNext()
        self.check_token(token, Token.NUMBER, "007", 1)
        self.assertEqual(token.value, 7)
        token = tokenizer.getNext()
        self.assertEqual(token.value, 1234567890123456789012345)

    def test_eof_col_with_newline(self):
        tokens = list(Tokenizer("3+\n"))
        self.check_token(tokens[-1], Token.EOF, "", 3)

    def test_deterministic(self):
        code = " 3 * (4 - 1) "
        self.assertEqual(list(Tokenizer(code)), list(Tokenizer(code)))

    def test_token_immutable(self):
        token = Tokenizer("5").getNext()
        with self.assertRaises(AttributeError):
            token.value = 6
        self.assertEqual(str(token), '"5" (NUMBER) col 1')
        self.assertEqual(Token.kind_name(Token.CLOSEPAREN), "CLOSEPAREN")

    def test_lex_error(self):
        tokenizer = Tokenizer("3#4")
        self.check_token(tokenizer.getNext(), Token.NUMBER, "3", 1)
        with self.assertRaises(LexError) as cm:
            tokenizer.getNext()
        self.assertEqual(cm.exception.sym, "#")
        self.assertEqual(cm.exception.col, 2)
        self.assertEqual(cm.exception.source_loc(), "3#4\n ^")

        # No resynchronization
        with self.assertRaises(LexError):
            tokenizer.getNext()

    def test_non_ascii_digit(self):
        tokenizer = Tokenizer("2²")
        self.assertEqual(tokenizer.getNext().value, 2)
        with self.assertRaises(LexError) as cm:
            tokenizer.getNext()
        self.assertEqual(cm.exception.sym, "²")

    def test_echo(self):
        echo = io.StringIO()
        tokens = list(Tokenizer("1 +2", echo=echo))
        self.assertEqual(len(tokens), 4)
        self.assertEqual(echo.getvalue(),
                         '"1" (NUMBER) col 1\n'
                         '"+" (PLUS) col 3\n'
                         '"2" (NUMBER) col 4\n'
                         '"" (EOF) col 5\n')


if __name__ == "__main__":
    unittest.main()
