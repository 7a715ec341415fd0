#!/usr/bin/env python3
"""
Command line driver: parse an expression, print its first and second
derivatives and evaluate the second derivative at a point.
"""

import argparse
import sys
from typing import List, Optional

from .configuration import init, shutdown
from .expression_tree.core.node import format_number
from .expression_tree.expression import Expression
from .logging_system import LogLevel, configure_logging


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Symbolic differentiation of a math expression")
    parser.add_argument("expression", nargs="?", help="Expression to differentiate (prompted when omitted)")
    parser.add_argument("--variable", default="x", help="Variable to differentiate with respect to")
    parser.add_argument("--value", type=float, default=12.46,
                        help="Point at which the second derivative is evaluated")
    parser.add_argument("--strict", action="store_true", help="Reject tokens left over after the expression")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print debug logging to stderr")
    args = parser.parse_args(argv)

    configure_logging(LogLevel.VERBOSE if args.verbose else LogLevel.MINIMAL)

    text = args.expression
    if text is None:
        print("Enter math expression: ", end="", flush=True)
        text = sys.stdin.readline().rstrip("\n")

    init()
    try:
        expression = Expression.parse(text, strict=args.strict)
        print(expression.to_string())

        first = expression.differentiate(args.variable)
        print(first.to_string())

        second = first.differentiate(args.variable)
        print(second.to_string())

        print(format_number(float(second.evaluate({args.variable: args.value}))))
    finally:
        shutdown()

    return 1 if expression.is_error else 0


if __name__ == "__main__":
    sys.exit(main())
