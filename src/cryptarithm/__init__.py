"""Cryptarithm Puzzle Solver.

Finds every assignment of distinct digits to letters that makes an equation such as
SEND + MORE = MONEY true, with no number starting with a zero.  The solver works column by
column from the units up and abandons a partial assignment as soon as its low-order digits
stop adding (or multiplying) up.

Examples:
    >>> from cryptarithm import solve
    >>> solve(["SEND", "MORE", "MONEY"], "+", lambda mapping, expression, pretty: None)
    1
"""

import argparse
import sys

from cryptarithm.general import solve_general
from cryptarithm.puzzle import (
    CryptarithmError,
    Equation,
    InvalidPuzzle,
    Operator,
    UnsupportedOperator,
    load_puzzles,
    parse_equation,
)
from cryptarithm.solver.config import config as solver_config
from cryptarithm.solver.solver import print_sink, run, solve

__all__ = [
    "CryptarithmError",
    "Equation",
    "InvalidPuzzle",
    "Operator",
    "UnsupportedOperator",
    "load_puzzles",
    "main",
    "parse_equation",
    "solve",
    "solve_general",
]


def positive_int(value: str) -> int:
    """argparse type for a strictly positive integer."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cryptarithm",
        description="Find all digit assignments solving a cryptarithm such as SEND+MORE=MONEY.",
    )
    parser.add_argument(
        "words",
        nargs="*",
        help="Operand words followed by the result word (e.g. SEND MORE MONEY)",
    )
    parser.add_argument(
        "--op",
        default=solver_config.default_operator,
        help="Operator combining the operands: '+' or '*' (default: %(default)s)",
    )
    parser.add_argument("-e", "--equation", help="Equation string, e.g. 'SEND+MORE=MONEY'")
    parser.add_argument("-f", "--file", help="File with one equation per line")
    parser.add_argument(
        "--window",
        type=positive_int,
        help="Validation window of the final check (default: longest word x number of words)",
    )
    parser.add_argument(
        "--general",
        action="store_true",
        help="Use the (slow) exhaustive solver instead of the column-wise search",
    )
    parser.add_argument(
        "--no-log",
        action="store_true",
        help=f"Do not write a log file under {solver_config.log_dir}/",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the cryptarithm solver."""
    parser = build_parser()
    args = parser.parse_args(argv)

    sources = sum(bool(source) for source in (args.words, args.equation, args.file))
    if sources != 1:
        parser.error("give exactly one of: WORDS, --equation or --file")

    try:
        if args.file:
            equations = load_puzzles(args.file)
        elif args.equation:
            equations = [parse_equation(args.equation)]
        else:
            equations = [Equation.from_words(args.words, args.op)]
    except CryptarithmError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    for equation in equations:
        print(equation)
        if args.general:
            total = solve_general(equation, print_sink)
        elif args.no_log:
            total = solve(equation, sink=print_sink, window=args.window)
        else:
            total = run(equation, window=args.window)
        print("No results." if total == 0 else f"{total} results.")
        print()
