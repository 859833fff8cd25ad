"""Column-wise backtracking search for cryptarithm solutions.

The search works one column (place value) at a time, starting with the units.  To satisfy
the lowest D columns, it takes every assignment satisfying the lowest D-1 columns and binds
the letters that first appear in column D.  Once all of them are bound, the sum or product
of the operands' low-order D digits must agree with the result's low-order D digits,
otherwise the branch is pruned right away.  Wrong digits are therefore rejected at the
lowest column where they cause a mismatch, instead of after a full permutation is built.

A single assignment dict is shared by the whole search.  Every binding is removed again as
soon as the branch that made it is exhausted, so sibling branches never see each other's
bindings.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from time import time
from typing import TextIO

from cryptarithm.format import elapsed_str, mapping_str
from cryptarithm.puzzle import Equation
from cryptarithm.solver.candidates import candidates
from cryptarithm.solver.columns import check_equal
from cryptarithm.solver.config import config as solver_config

CancelCheck = Callable[[], bool]
"""Zero-argument callable; the search stops as soon as it returns True."""


@dataclass
class SearchStats:
    """Statistics collected during a search."""

    nodes: int = 0
    """Number of letter -> digit bindings tried."""

    column_checks: int = 0
    """Number of column checks performed."""

    solutions: int = 0
    """Number of complete, valid assignments found."""

    max_depth_reached: int = 0
    """Highest column reached."""

    cancelled: bool = False
    """Whether the search was stopped by its cancel check."""

    start_time: float = field(default_factory=time)
    """Timestamp when the search started."""


class ColumnSearch:
    """Enumerates every valid assignment of an equation, column by column."""

    def __init__(
        self,
        equation: Equation,
        *,
        window: int | None = None,
        cancel: CancelCheck | None = None,
        logf: TextIO | None = None,
        stats: SearchStats | None = None,
    ) -> None:
        """Prepare a search.

        Args:
            equation: The (already validated) equation to solve.
            window: Validation window for the final check.  Defaults to
                `equation.default_window`, which makes the final check exact.
            cancel: Optional callable checked before every binding.
            logf: Optional stream for progress and debug output.
            stats: Optional stats object to update (a new one is created otherwise).

        Raises:
            ValueError: If `window` is less than 1.
        """
        self.equation = equation
        self.words = equation.words
        self.depth = equation.max_word_length
        if window is not None and window < 1:
            raise ValueError(
                f"Validation window must be a positive number of digits, got {window}"
            )
        self.window = window if window is not None else equation.default_window
        self.cancel = cancel
        self.logf = logf
        self.stats = stats if stats is not None else SearchStats()

        self.assignment: dict[str, int] = {}
        """The partial assignment being built.  Only valid while a solution is being yielded."""

    def solutions(self) -> Iterator[dict[str, int]]:
        """Yield the live assignment once per valid, complete assignment.

        The yielded dict is mutated as the search continues; copy it to keep it.  Solutions
        come in the order the search produces them: letters in order of discovery (words
        scanned left to right, columns from the units up) and digits in ascending order.
        """
        self.assignment.clear()
        for assignment in self._satisfy(self.depth, self.window):
            self.stats.solutions += 1
            yield assignment

    def _satisfy(self, depth: int, window: int) -> Iterator[dict[str, int]]:
        """Yield assignments satisfying the lowest `depth` columns, checked over `window`."""
        if depth == 0:
            # No columns to satisfy
            yield self.assignment
            return
        for _ in self._satisfy(depth - 1, depth - 1):
            yield from self._fill_column(depth, window)

    def _fill_column(self, depth: int, window: int) -> Iterator[dict[str, int]]:
        """Bind the unbound letters of column `depth`, then check the lowest columns."""
        if self.stats.cancelled:
            return
        self.stats.max_depth_reached = max(self.stats.max_depth_reached, depth)

        letter = self._next_unbound(depth)
        if letter is None:
            self.stats.column_checks += 1
            ok = check_equal(self.words, self.equation.operator, window, self.assignment)
            if solver_config.debug:
                self._log(
                    f"check: depth={depth} window={window} "
                    f"{mapping_str(self.assignment)} -> {ok}"
                )
            if ok:
                yield self.assignment
            return

        for digit in candidates(letter, self.words, self.assignment):
            if self._should_stop():
                return
            self.stats.nodes += 1
            self._report_progress()
            self.assignment[letter] = digit
            try:
                yield from self._fill_column(depth, window)
            finally:
                del self.assignment[letter]

    def _next_unbound(self, depth: int) -> str | None:
        """Return the first unbound letter in column `depth`, scanning words left to right.

        Words shorter than `depth` have no letter in that column.
        """
        for word in self.words:
            if len(word) >= depth:
                letter = word[-depth]
                if letter not in self.assignment:
                    return letter
        return None

    def _should_stop(self) -> bool:
        """Consult the cancel check, remembering a positive answer."""
        if not self.stats.cancelled and self.cancel is not None and self.cancel():
            self.stats.cancelled = True
            self._log(f"Search cancelled after {self.stats.nodes:,} bindings.")
        return self.stats.cancelled

    def _report_progress(self) -> None:
        interval = solver_config.report_interval
        if interval and self.stats.nodes % interval == 0:
            self._log(
                f"{self.stats.nodes:,} bindings tried, {self.stats.solutions} solutions, "
                f"elapsed {elapsed_str(time() - self.stats.start_time)}"
            )

    def _log(self, message: str) -> None:
        if self.logf is not None:
            print(message, file=self.logf, flush=True)
