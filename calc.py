#! /bin/env python3

from Calculator import Calculator, CalcDebug
from Arith import Arith
from Errors import CalcError
from ParseTreeVis import ParseTreeVis

import argparse
import os
import sys


def intWidth(arg: str) -> int:
    bits = int(arg)
    if bits < 0 or bits == 1:
        raise argparse.ArgumentTypeError(f"invalid integer width {arg}")
    return bits


def getArgs(argv=None):
    parser = argparse.ArgumentParser(description="Integer calculator")
    parser.add_argument("-e", dest="expr", type=str, action="append",
                        help="evaluate this expression instead of reading "
                        "stdin (repeatable)")
    parser.add_argument("-d", dest="debug", type=str,
                        help="write the parse trace of every line to a file")
    parser.add_argument("-g", dest="graph", type=str,
                        help="directory for parse tree graphs")
    parser.add_argument("-v", action="store_true",
                        dest="verbose", default=False,
                        help="echo tokens to stderr")
    parser.add_argument("-D", action="store_true",
                        dest="graph_debug", default=False,
                        help="label graph tokens with columns and show EOF")
    parser.add_argument("-k", "--keep-going", action="store_true",
                        dest="keep_going", default=False,
                        help="continue with the next line after an error")
    parser.add_argument("-b", "--bits", type=intWidth, default=64,
                        help="integer width, 0 for unbounded (default 64)")
    parser.add_argument("-p", "--prompt", type=str, default="calc> ",
                        help="prompt shown on a terminal")
    return parser.parse_args(argv)


def readLines(args, stdin, stdout):
    if args.expr:
        yield from args.expr
        return

    interactive = stdin.isatty()
    while True:
        if interactive:
            print(args.prompt, end="", file=stdout, flush=True)
        line = stdin.readline()
        if not line:
            return
        yield line


def calcLine(text: str, lineno: int, args, arith: Arith,
             stdout, stderr, trace=None) -> bool:
    debug = CalcDebug() if args.debug or args.graph else None
    echo = stderr if args.verbose else None

    try:
        result = Calculator(text, debug=debug, arith=arith,
                            echo=echo).calculate()
    except CalcError as e:
        print(e.report(), file=stderr)
        ok = False
    else:
        print(result, file=stdout)
        ok = True

    if trace:
        trace.write(f"line {lineno}: {text.strip()}\n")
        trace.write(debug.toStr(debug.root))

    # Visualization of the parse tree
    if ok and args.graph:
        vis = ParseTreeVis(
            filename=os.path.join(args.graph, f"line{lineno}.dot"),
            debug=args.graph_debug)
        vis.tree(debug)
        vis.render()

    return ok


def main(argv=None, stdin=None, stdout=None, stderr=None) -> int:
    stdin = stdin if stdin else sys.stdin
    stdout = stdout if stdout else sys.stdout
    stderr = stderr if stderr else sys.stderr

    # Get args
    args = getArgs(argv)
    arith = Arith(bits=args.bits if args.bits else None)

    trace = open(args.debug, "w") if args.debug else None
    status = 0
    try:
        lines = readLines(args, stdin, stdout)
        for lineno, text in enumerate(lines, start=1):
            if not text.strip():
                continue
            if not calcLine(text, lineno, args, arith, stdout, stderr, trace):
                status = 1
                if not args.keep_going:
                    break
    finally:
        if trace:
            trace.close()

    return status


if __name__ == "__main__":
    sys.exit(main())
