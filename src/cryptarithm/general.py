"""General (brute-force) solver.

Tries every permutation of digits for the letters of an equation and evaluates the equation
exactly.  Any "operand(+|*)operand...=result" equation can be solved this way, but with 10
letters that is 3,628,800 permutations, so the column-wise search in `cryptarithm.solver`
should be preferred.  This solver mainly serves as a cross-check for it.
"""

from collections.abc import Iterator
from itertools import permutations
from time import time
from typing import TextIO

from cryptarithm.format import elapsed_str
from cryptarithm.puzzle import DIGITS, Equation, parse_equation
from cryptarithm.solver.columns import check_equal
from cryptarithm.solver.config import config as solver_config
from cryptarithm.solver.solver import Sink, print_sink, report_solution


def iter_general(
    equation: Equation,
    *,
    allow_leading_zero: bool = False,
    logf: TextIO | None = None,
) -> Iterator[dict[str, int]]:
    """Yield every mapping of letters to distinct digits that makes the equation true.

    Args:
        equation: The equation to solve.
        allow_leading_zero: Also accept mappings where a word starts with a zero.
        logf: Optional stream for progress output.
    """
    letters = equation.letters
    leading = equation.leading_letters
    start_time = time()
    interval = solver_config.general_report_interval

    for n_tries, values in enumerate(permutations(DIGITS, len(letters)), start=1):
        if interval and logf is not None and n_tries % interval == 0:
            print(
                f"{n_tries:,} tries, elapsed {elapsed_str(time() - start_time)}",
                file=logf,
                flush=True,
            )
        mapping = dict(zip(letters, values))
        if not allow_leading_zero and any(mapping[letter] == 0 for letter in leading):
            continue
        if check_equal(equation.words, equation.operator, None, mapping):
            yield mapping


def solve_general(
    equation: Equation | str,
    sink: Sink | None = None,
    *,
    first_only: bool = False,
    allow_leading_zero: bool = False,
    logf: TextIO | None = None,
) -> int:
    """Solve an equation by exhaustive search.

    Args:
        equation: An Equation, or a string such as "TSHIRT+SKIRT==CLOTHES".
        sink: Called once per solution, as for `cryptarithm.solver.solve`.
        first_only: Stop after the first solution.
        allow_leading_zero: Also accept mappings where a word starts with a zero.
        logf: Optional stream for progress output.

    Returns:
        The total number of hits.

    Raises:
        InvalidPuzzle, UnsupportedOperator: If the equation cannot be parsed.
    """
    if isinstance(equation, str):
        equation = parse_equation(equation)
    if sink is None:
        sink = print_sink

    total = 0
    for mapping in iter_general(equation, allow_leading_zero=allow_leading_zero, logf=logf):
        total += report_solution(equation, mapping, sink)
        if first_only:
            break
    return total
