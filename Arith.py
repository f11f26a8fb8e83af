from __future__ import annotations
from enum import Enum, auto
from typing import Optional
from Errors import DivisionByZero, IntegerOverflow


class OP(Enum):
    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()
    NEG = auto()
    POS = auto()


OP.UNARY_OP = {OP.NEG, OP.POS}


class Arith:
    """Integer semantics of the calculator.

    All results are checked against a signed two's complement range of
    ``bits`` bits and raise IntegerOverflow when they don't fit. With
    ``bits=None`` integers are unbounded. Division truncates toward zero.
    """
    bits: Optional[int]

    def __init__(self, bits: Optional[int] = 64) -> None:
        assert bits is None or bits > 1, f"Unsupported integer width {bits}"
        self.bits = bits
        if bits:
            self.max = (1 << (bits - 1)) - 1
            self.min = -(1 << (bits - 1))
        else:
            self.max = self.min = None

    def check(self, value: int) -> int:
        if self.bits and not self.min <= value <= self.max:
            raise IntegerOverflow(value, self.bits)
        return value

    @staticmethod
    def div(x: int, y: int) -> int:
        if y == 0:
            raise DivisionByZero(x)
        q = abs(x) // abs(y)
        return q if (x < 0) == (y < 0) else -q

    def apply(self, op: OP, x: int, y: Optional[int] = None) -> int:
        if op in OP.UNARY_OP:
            assert y is None, f"Unary {op} with two operands"
        else:
            assert y is not None, f"Binary {op} with one operand"

        if op == OP.ADD:
            ret = x + y
        elif op == OP.SUB:
            ret = x - y
        elif op == OP.MUL:
            ret = x * y
        elif op == OP.DIV:
            ret = self.div(x, y)
        elif op == OP.NEG:
            ret = -x
        elif op == OP.POS:
            ret = x
        else:
            raise Exception(f"Internal error: unknown operation {op}")

        return self.check(ret)
