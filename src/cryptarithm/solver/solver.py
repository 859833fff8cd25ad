"""Main solver module: the `solve` entry point and the logged `run` driver."""

import numbers
import re
import sys
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from time import time
from typing import Any, TextIO, TypeAlias

from cryptarithm.format import elapsed_str, flat_expression, mapping_str, pretty_print
from cryptarithm.puzzle import Equation, Operator
from cryptarithm.solver.config import config as solver_config
from cryptarithm.solver.search import CancelCheck, ColumnSearch, SearchStats

TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S.%f %Z%z"

Sink: TypeAlias = Callable[[dict[str, int], str, str], Any]
"""Called once per solution with (assignment, flat expression, pretty layout)."""


def print_sink(assignment: Mapping[str, int], expression: str, pretty: str) -> None:
    """Default sink: print the mapping and the formatted equation."""
    print(f"{mapping_str(assignment)}\n{pretty}")


def hit_count(result: Any) -> int:
    """Number of hits a sink's return value stands for.

    A real number (int, float, Decimal, numpy scalar...) is truncated to an int and used as
    is.  Anything else (None, a bool, a string, NaN...) counts as one hit.
    """
    if isinstance(result, bool) or not isinstance(result, (numbers.Real, Decimal)):
        return 1
    try:
        return int(result)
    except (ValueError, OverflowError):
        # NaN or infinity
        return 1


def report_solution(equation: Equation, assignment: Mapping[str, int], sink: Sink) -> int:
    """Render a solution, pass it to `sink`, and return the number of hits it reports."""
    words = equation.words
    result = sink(
        dict(assignment),
        flat_expression(words, equation.operator, assignment),
        pretty_print(words, equation.operator, assignment),
    )
    return hit_count(result)


def solve(
    words: Sequence[str] | Equation,
    operator: Operator | str = "+",
    sink: Sink | None = None,
    *,
    window: int | None = None,
    cancel: CancelCheck | None = None,
    logf: TextIO | None = None,
    stats: SearchStats | None = None,
) -> int:
    """Find every digit assignment that solves the equation.

    Args:
        words: Operand words followed by the result word (e.g. ["SEND", "MORE", "MONEY"]),
            or an Equation.
        operator: "+" or "*".  Ignored if `words` is an Equation.
        sink: Called once per solution as `sink(assignment, expression, pretty)`.  Its return
            value is the number of hits for that solution (non-numeric values count as one).
            Defaults to printing each solution.
        window: Validation window of the final check.  Defaults to the longest word length
            times the number of words, which makes the final check exact.
        cancel: Optional callable; the search stops as soon as it returns True.
        logf: Optional stream for progress and debug output.
        stats: Optional SearchStats to collect statistics into.

    Returns:
        The total number of hits, 0 if there is no solution.

    Raises:
        InvalidPuzzle: If the words do not form a valid puzzle.
        UnsupportedOperator: If the operator is neither "+" nor "*".
        ValueError: If `window` is less than 1.
    """
    equation = words if isinstance(words, Equation) else Equation.from_words(words, operator)
    if sink is None:
        sink = print_sink

    search = ColumnSearch(equation, window=window, cancel=cancel, logf=logf, stats=stats)
    total = 0
    for assignment in search.solutions():
        total += report_solution(equation, assignment, sink)
    return total


def log_filename(equation: Equation) -> str:
    """File name for the log of `equation`, e.g. "SEND_plus_MORE_eq_MONEY.log"."""
    name = equation.expression.replace("+", "_plus_").replace("*", "_times_")
    name = name.replace("=", "_eq_")
    return re.sub(r"[^A-Z_]", "", name) + ".log"


def run(equation: Equation, *, window: int | None = None, sink: Sink | None = None) -> int:
    """Solve `equation`, printing solutions and writing a log file.

    Args:
        equation: The equation to solve.
        window: Optional validation window of the final check.
        sink: Called for every solution in addition to logging it.  Defaults to printing.

    Returns:
        The total number of hits.
    """
    logfile = Path(solver_config.log_dir) / log_filename(equation)
    print(f"Log file: {logfile}")
    logfile.parent.mkdir(parents=True, exist_ok=True)

    with open(logfile, "w", encoding="utf-8") as logf:
        try:
            return solve_one(equation, logf=logf, window=window, sink=sink or print_sink)
        except KeyboardInterrupt:
            print("Solver interrupted by user.", file=logf, flush=True)
            print("Solver interrupted by user.")
            sys.exit(1)


def solve_one(
    equation: Equation,
    *,
    logf: TextIO,
    window: int | None = None,
    sink: Sink = print_sink,
) -> int:
    """Solve one equation, logging the puzzle, every solution and a summary to `logf`."""
    stats = SearchStats()
    print(f"Puzzle: {equation}", file=logf, flush=True)
    print(f"Operator: {equation.operator.name}", file=logf, flush=True)
    print(
        f"Letters ({len(equation.letters)}): {''.join(equation.letters)}",
        file=logf,
        flush=True,
    )
    print(f"Columns: {equation.max_word_length}", file=logf, flush=True)
    final_window = window if window is not None else equation.default_window
    print(f"Final window: {final_window}", file=logf, flush=True)
    start_time_str = datetime.fromtimestamp(stats.start_time).astimezone().strftime(TIMESTAMP_FMT)
    print(f"Start time: {start_time_str}", file=logf, flush=True)
    print("", file=logf, flush=True)

    def logging_sink(assignment: dict[str, int], expression: str, pretty: str) -> Any:
        print(mapping_str(assignment), file=logf, flush=True)
        print(pretty, file=logf, flush=True)
        print("", file=logf, flush=True)
        return sink(assignment, expression, pretty)

    total = solve(equation, sink=logging_sink, window=window, logf=logf, stats=stats)

    if total == 0:
        print("No results.", file=logf, flush=True)
    else:
        print(f"{total} results.", file=logf, flush=True)
    print(f"Bindings tried: {stats.nodes:,}", file=logf, flush=True)
    print(f"Column checks: {stats.column_checks:,}", file=logf, flush=True)
    print(f"Time taken: {elapsed_str(time() - stats.start_time)}", file=logf, flush=True)
    return total
