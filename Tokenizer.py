#! /bin/env python3

from typing import Iterator, NamedTuple, Optional, TextIO
from Errors import LexError


class LineReader:
    EOF = 255

    def __init__(self, code: str):
        self.code = code
        self.idx = 0

        # Column of the last character handed out
        self.col = 0

    def __str__(self) -> str:
        return f"col {self.col}"

    def end(self) -> bool:
        return self.idx >= len(self.code)

    def getNext(self):  # Return a single-char str or EOF
        if self.end():
            # A line read from a stream still carries its newline
            self.col = len(self.code.rstrip("\r\n")) + 1
            return self.EOF
        sym = self.code[self.idx]
        self.idx += 1
        self.col = self.idx
        return sym


class Token(NamedTuple):
    type: int
    sym: str
    col: int
    value: Optional[int] = None  # Only set for NUMBER

    TIMES = 1  # *
    DIV = 2  # /
    PLUS = 11  # +
    MINUS = 12  # -
    CLOSEPAREN = 35  # )
    OPENPAREN = 50  # (
    NUMBER = 60  # number
    EOF = 255  # end of line

    TokenName = {
        TIMES: "TIMES",
        DIV: "DIV",
        PLUS: "PLUS",
        MINUS: "MINUS",
        CLOSEPAREN: "CLOSEPAREN",
        OPENPAREN: "OPENPAREN",
        NUMBER: "NUMBER",
        EOF: "EOF",
    }

    SYMBOLS = {
        "*": TIMES,
        "/": DIV,
        "+": PLUS,
        "-": MINUS,
        ")": CLOSEPAREN,
        "(": OPENPAREN,
    }

    @classmethod
    def kind_name(cls, kind: int) -> str:
        return cls.TokenName[kind]

    def __str__(self) -> str:
        return f'"{self.sym}" ({self.TokenName[self.type]}) col {self.col}'

    def __repr__(self) -> str:
        return self.__str__()


class Tokenizer:
    """Scanner for one line of calculator input.

    Tokens are produced lazily, one per getNext() call, and the sequence ends
    with an EOF token. Once the line is exhausted getNext() keeps returning
    EOF. An unknown character raises LexError; there is no recovery.

    If ``echo`` is given every token is printed to it as it is produced.
    """
    text: str
    reader: LineReader
    echo: Optional[TextIO]

    def __init__(self, text: str, echo: Optional[TextIO] = None):
        self.text = text
        self.reader = LineReader(text)
        self.echo = echo

        # States
        self.inputSym = None
        self.col = 0
        self.done = False

        self.next()  # Read the first char

    def __iter__(self) -> Iterator[Token]:
        while not self.done:
            yield self.getNext()

    def next(self) -> None:
        self.inputSym = self.reader.getNext()
        self.col = self.reader.col

    def is_white_space(self) -> bool:
        assert self.inputSym is not None
        return self.inputSym != LineReader.EOF and self.inputSym.isspace()

    def is_digit(self) -> bool:
        assert self.inputSym is not None
        # str.isdigit() would also accept things like superscripts
        return ord(self.inputSym) >= ord("0") and ord(self.inputSym) <= ord("9")

    def clear_white_space(self) -> None:
        while self.is_white_space():
            self.next()

    def emit(self, token: Token) -> Token:
        if self.echo:
            print(token, file=self.echo)
        return token

    def number(self) -> Token:
        col = self.col
        result = 0
        sym = ""

        # Parse the number
        while self.inputSym != LineReader.EOF and self.is_digit():
            result = result * 10 + int(self.inputSym)
            sym += self.inputSym
            self.next()

        return Token(Token.NUMBER, sym, col, result)

    def operator(self) -> Token:
        sym = self.inputSym
        if sym not in Token.SYMBOLS:
            raise LexError(sym, text=self.text, col=self.col)

        token = Token(Token.SYMBOLS[sym], sym, self.col)
        self.next()
        return token

    def getNext(self) -> Token:
        self.clear_white_space()

        if self.inputSym == LineReader.EOF:
            self.done = True
            return self.emit(Token(Token.EOF, "", self.col))
        elif self.is_digit():
            return self.emit(self.number())
        else:
            return self.emit(self.operator())
