from __future__ import annotations
from typing import Callable, Generator, List, Optional, TextIO
from Tokenizer import Tokenizer, Token
from Arith import Arith, OP
from Errors import CalcError, ParseError

# A nonterminal yields the sub-rules it needs and gets their values back
Rule = Generator[Callable[[], "Rule"], Optional[int], int]


class CalcDebug:
    class NT:
        def __init__(self, name: str):
            self.name = name
            self.components = []
            self.value = None

    def __init__(self, file: str = None):
        self.root = []
        self.current = self.root
        self.stack = []
        self.nts = []
        self.file = file

    def add(self, item):
        self.current.append(item)

    def push(self, func_name: str):
        nt = self.NT(func_name)
        self.add(nt)
        self.stack.append(self.current)
        self.nts.append(nt)
        self.current = nt.components

    def pop(self, value: int = None):
        self.nts.pop().value = value
        self.current = self.stack.pop()

    def toStr(self, node: List, indent: int = 0) -> str:
        lines = []
        # Traces nest as deep as the input does, so no recursion here
        work = [(item, indent) for item in reversed(node)]

        while work:
            item, level = work.pop()
            if isinstance(item, self.NT):
                value = "" if item.value is None else f" = {item.value}"
                lines.append(f"{'| ' * level}NT:{item.name}{value}\n")
                work.extend((c, level + 1) for c in reversed(item.components))
            elif isinstance(item, Token):
                lines.append(f"{'| ' * level}{item}\n")
            else:
                raise Exception("Internal error: debug node of unexpected "
                                f"type {type(item)}")

        return "".join(lines)

    def dump(self):
        if self.file:
            with open(self.file, "w+") as f:
                f.write(self.toStr(self.root))
        else:
            print(self.toStr(self.root))


class Calculator:
    """Recursive descent evaluator for one line of integer arithmetic.

        expression = term {("+" | "-") term}
        term       = factor {("*" | "/") factor}
        factor     = ("+" | "-") factor | number | "(" expression ")"

    Values are folded as soon as each operand is known, which keeps every
    operator left associative. The rules are generators driven by _run()
    with an explicit stack, so deeply nested parentheses never hit the
    interpreter's recursion limit.
    """
    text: str
    debug: CalcDebug
    arith: Arith
    tokenizer: Tokenizer
    inputSym: Token

    BINARY_OPS = {
        Token.PLUS: OP.ADD,
        Token.MINUS: OP.SUB,
        Token.TIMES: OP.MUL,
        Token.DIV: OP.DIV,
    }

    UNARY_OPS = {
        Token.PLUS: OP.POS,
        Token.MINUS: OP.NEG,
    }

    def __init__(self, text: str, debug: CalcDebug = None,
                 arith: Arith = None, echo: TextIO = None):
        self.text = text
        self.debug = debug
        self.arith = arith if arith else Arith()
        self.tokenizer = Tokenizer(self.text, echo=echo)
        self.inputSym = None

    def _next(self) -> None:
        if self.debug and self.inputSym:
            self.debug.add(self.inputSym)
        self.inputSym = self.tokenizer.getNext()

    def _check_token(self, token: int) -> None:
        if self.inputSym.type != token:
            raise ParseError(token, self.inputSym, self.text)

    def consume(self, token: int) -> Token:
        self._check_token(token)
        sym = self.inputSym
        self._next()
        return sym

    def _apply(self, sym: Token, x: int, y: int = None) -> int:
        if y is None:
            op = self.UNARY_OPS[sym.type]
        else:
            op = self.BINARY_OPS[sym.type]

        try:
            return self.arith.apply(op, x, y)
        except CalcError as e:
            e.locate(sym, self.text)
            raise

    def _enter(self, rule: Callable[[], Rule]) -> Rule:
        if self.debug:
            self.debug.push(rule.__name__)
        return rule()

    def _run(self, rule: Callable[[], Rule]) -> int:
        stack = [self._enter(rule)]
        value = None

        while stack:
            try:
                sub = stack[-1].send(value)
            except StopIteration as ret:
                stack.pop()
                value = ret.value
                if self.debug:
                    self.debug.pop(value)
                continue

            stack.append(self._enter(sub))
            value = None

        return value

    def factor(self) -> Rule:
        # factor = ("+" | "-") factor | number | "(" expression ")"

        if self.inputSym.type in self.UNARY_OPS:
            sign = self.inputSym
            self._next()
            val = yield self.factor
            return self._apply(sign, val)

        elif self.inputSym.type == Token.OPENPAREN:
            self._next()
            val = yield self.expression
            self.consume(Token.CLOSEPAREN)
            return val

        else:
            num = self.consume(Token.NUMBER)
            try:
                return self.arith.check(num.value)
            except CalcError as e:
                e.locate(num, self.text)
                raise

    def term(self) -> Rule:
        # term = factor { ("*" | "/") factor}

        val = yield self.factor

        while self.inputSym.type in (Token.TIMES, Token.DIV):
            op = self.inputSym
            self._next()
            operand = yield self.factor
            val = self._apply(op, val, operand)

        return val

    def expression(self) -> Rule:
        # expression = term {("+" | "-") term}

        val = yield self.term

        while self.inputSym.type in (Token.PLUS, Token.MINUS):
            op = self.inputSym
            self._next()
            operand = yield self.term
            val = self._apply(op, val, operand)

        return val

    def calculate(self) -> int:
        assert self.inputSym is None, "A Calculator evaluates its line once"

        # Read the first token
        self._next()

        result = self._run(self.expression)

        # Nothing may follow the expression
        self._check_token(Token.EOF)
        if self.debug:
            self.debug.add(self.inputSym)

        return result


def evaluate(text: str, debug: CalcDebug = None, arith: Arith = None,
             echo: TextIO = None) -> int:
    return Calculator(text, debug=debug, arith=arith, echo=echo).calculate()
