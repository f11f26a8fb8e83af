from __future__ import annotations
from typing import Optional


class CalcError(Exception):
    """Base class for everything that can go wrong while evaluating a line.

    Besides the message, an error remembers the source line and the span
    (1-based column and width) it complains about, so the caller can point
    at it with source_loc().
    """
    kind = "error"

    text: str
    col: int
    width: int

    def __init__(self, msg: str, text: str = "", col: int = 0,
                 width: int = 1):
        super().__init__(msg)
        self.msg = msg
        self.text = text
        self.col = col
        self.width = width

    def locate(self, token, text: str) -> CalcError:
        # Arith raises without knowing where the operands came from
        if not self.col:
            self.col = token.col
            self.width = max(len(token.sym), 1)
        if not self.text:
            self.text = text
        return self

    def source_loc(self) -> str:
        code_line = self.text.rstrip("\r\n")
        col = max(self.col, 1)
        return f"{code_line}\n{' ' * (col - 1)}{'^' * max(self.width, 1)}"

    def report(self) -> str:
        return f"{self.source_loc()}\n{self.kind}: {self.msg}"


class LexError(CalcError):
    kind = "LexError"

    def __init__(self, sym: str, text: str = "", col: int = 0):
        super().__init__(f'Unknown symbol "{sym}"', text=text, col=col)
        self.sym = sym


class ParseError(CalcError):
    kind = "ParseError"

    def __init__(self, expected: int, found, text: str = ""):
        if found.sym:
            what = f'"{found.sym}" ({found.kind_name(found.type)})'
        else:
            what = "end of input"
        super().__init__(f"Expecting {found.kind_name(expected)}, found {what}",
                         text=text, col=found.col, width=len(found.sym))
        self.expected = expected
        self.found = found


class DivisionByZero(CalcError):
    kind = "DivisionByZero"

    def __init__(self, x: Optional[int] = None):
        msg = "Division by zero" if x is None else f"Division of {x} by zero"
        super().__init__(msg)
        self.x = x


class IntegerOverflow(CalcError):
    kind = "IntegerOverflow"

    def __init__(self, value: int, bits: int):
        super().__init__(f"{value} does not fit in {bits} bits")
        self.value = value
        self.bits = bits
