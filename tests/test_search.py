"""Tests for the column-wise search and the `solve` entry point."""

import io
from decimal import Decimal
from fractions import Fraction

import pytest

from cryptarithm.general import iter_general
from cryptarithm.puzzle import Equation, InvalidPuzzle, UnsupportedOperator
from cryptarithm.solver.columns import check_equal
from cryptarithm.solver.config import config as solver_config
from cryptarithm.solver.search import ColumnSearch, SearchStats
from cryptarithm.solver.solver import hit_count, solve

CLASSIC = {"O": 0, "M": 1, "Y": 2, "E": 5, "N": 6, "D": 7, "R": 8, "S": 9}


class Collector:
    """Sink recording every call."""

    def __init__(self, result=None):
        self.calls = []
        self.result = result

    def __call__(self, assignment, expression, pretty):
        self.calls.append((assignment, expression, pretty))
        return self.result

    @property
    def assignments(self):
        return [assignment for assignment, _, _ in self.calls]


def solution_set(assignments):
    return {tuple(sorted(a.items())) for a in assignments}


def test_send_more_money():
    sink = Collector()
    assert solve(["SEND", "MORE", "MONEY"], "+", sink) == 1
    (assignment, expression, pretty) = sink.calls[0]
    assert assignment == CLASSIC
    assert expression == "9567+1085=10652"
    assert pretty == "   9567\n + 1085\n-------\n  10652"


def test_ab_ab_ba_has_no_solution():
    sink = Collector()
    assert solve(["AB", "AB", "BA"], "+", sink) == 0
    assert sink.calls == []


def test_single_letter_words_never_zero():
    sink = Collector()
    assert solve(["A", "A", "A"], "+", sink) == 0


def test_too_few_words_raises():
    with pytest.raises(InvalidPuzzle):
        solve(["AB"], "+", Collector())


def test_non_letter_raises_before_search():
    sink = Collector()
    with pytest.raises(InvalidPuzzle):
        solve(["A1", "BB", "CC"], "+", sink)
    assert sink.calls == []


def test_unsupported_operator_raises():
    with pytest.raises(UnsupportedOperator):
        solve(["AB", "CD", "EF"], "-", Collector())


def test_cp_is_fun_true():
    sink = Collector()
    assert solve(["CP", "IS", "FUN", "TRUE"], "+", sink) == 72
    assert len(solution_set(sink.assignments)) == 72


def test_single_column_count():
    # Ordered pairs of distinct nonzero digits with a sum of at most 9.
    assert solve(["A", "B", "C"], "+", Collector()) == 32


def test_narrow_window_allows_wraparound():
    # Only the units digit is compared, so A+B may overflow (but C may not be 0).
    assert solve(["A", "B", "C"], "+", Collector(), window=1) == 64


@pytest.mark.parametrize(
    "words, operator",
    [
        (["TO", "GO", "OUT"], "+"),
        (["AB", "AB", "BA"], "+"),
        (["ONE", "ONE", "TWO"], "+"),
        (["I", "BB", "ILL"], "+"),
        (["A", "B", "C"], "+"),
        (["AB", "C", "DE"], "*"),
        (["AB", "CD", "EFA"], "*"),
        (["A", "B", "C", "DE"], "+"),
    ],
)
def test_matches_exhaustive_search(words, operator):
    equation = Equation.from_words(words, operator)
    sink = Collector()
    total = solve(equation, sink=sink)
    expected = solution_set(iter_general(equation))
    assert solution_set(sink.assignments) == expected
    assert total == len(expected)


def test_multiplication_known_solution():
    sink = Collector()
    solve(["AB", "C", "DE"], "*", sink)
    assert {"A": 1, "B": 3, "C": 4, "D": 5, "E": 2} in sink.assignments


def test_solutions_satisfy_invariants():
    equation = Equation.from_words(["AB", "CD", "EFA"], "*")
    sink = Collector()
    solve(equation, sink=sink)
    assert sink.calls
    for assignment, _, _ in sink.calls:
        assert set(assignment) == set(equation.letters)
        assert len(set(assignment.values())) == len(assignment)
        assert all(assignment[word[0]] != 0 for word in equation.words)
        assert check_equal(equation.words, equation.operator, None, assignment)


def test_enumeration_order():
    sink = Collector()
    solve(["A", "B", "C"], "+", sink)
    firsts = [(a["A"], a["B"], a["C"]) for a in sink.assignments[:3]]
    assert firsts == [(1, 2, 3), (1, 3, 4), (1, 4, 5)]
    assert list(sink.assignments[0]) == ["A", "B", "C"]


def test_sink_gets_a_copy():
    sink = Collector()
    solve(["TO", "GO", "OUT"], "+", sink)
    assert sink.assignments == [{"O": 1, "T": 2, "U": 0, "G": 8}]


@pytest.mark.parametrize(
    "result, expected",
    [
        (None, 1),
        (True, 1),
        (False, 1),
        ("found", 1),
        ("2", 1),
        (2, 2),
        (0, 0),
        (2.0, 2),
        (Decimal("3"), 3),
        (Fraction(5, 2), 2),
        (float("nan"), 1),
        (float("inf"), 1),
    ],
)
def test_sink_return_value(result, expected):
    assert solve(["SEND", "MORE", "MONEY"], "+", Collector(result)) == expected


def test_hit_count():
    assert hit_count(None) == 1
    assert hit_count(3) == 3
    assert hit_count(True) == 1


def test_default_sink_prints(capsys):
    assert solve(["TO", "GO", "OUT"], "+") == 1
    out = capsys.readouterr().out
    assert "O:1,T:2,G:8,U:0" in out
    assert "   21\n + 81\n-----\n  102" in out


def test_assignment_is_unwound_after_search():
    search = ColumnSearch(Equation.from_words(["SEND", "MORE", "MONEY"]))
    assert len(list(search.solutions())) == 1
    assert search.assignment == {}


def test_abandoned_search_is_unwound():
    search = ColumnSearch(Equation.from_words(["A", "B", "C"]))
    solutions = search.solutions()
    next(solutions)
    solutions.close()
    assert search.assignment == {}


def test_stats():
    stats = SearchStats()
    solve(["SEND", "MORE", "MONEY"], "+", Collector(), stats=stats)
    assert stats.solutions == 1
    assert stats.nodes > 0
    assert stats.column_checks > 0
    assert stats.max_depth_reached == 5
    assert not stats.cancelled


def test_cancel_immediately():
    stats = SearchStats()
    assert solve(["A", "B", "C"], "+", Collector(), cancel=lambda: True, stats=stats) == 0
    assert stats.cancelled
    assert stats.nodes == 0


def test_cancel_after_first_solution():
    sink = Collector()
    stats = SearchStats()
    logf = io.StringIO()
    total = solve(
        ["A", "B", "C"], "+", sink, cancel=lambda: bool(sink.calls), stats=stats, logf=logf
    )
    assert total == 1
    assert sink.assignments == [{"A": 1, "B": 2, "C": 3}]
    assert stats.cancelled
    assert logf.getvalue().count("Search cancelled") == 1


def test_progress_report(monkeypatch):
    monkeypatch.setattr(solver_config, "report_interval", 10)
    logf = io.StringIO()
    solve(["TO", "GO", "OUT"], "+", Collector(), logf=logf)
    assert "bindings tried" in logf.getvalue()


def test_debug_trace(monkeypatch):
    monkeypatch.setattr(solver_config, "debug", True)
    logf = io.StringIO()
    solve(["TO", "GO", "OUT"], "+", Collector(), logf=logf)
    assert "check: depth=3 window=9 O:1,T:2,G:8,U:0 -> True" in logf.getvalue()


@pytest.mark.parametrize("window", [0, -1, -5])
def test_window_must_be_positive(window):
    sink = Collector()
    with pytest.raises(ValueError, match="window"):
        solve(["SEND", "MORE", "MONEY"], "+", sink, window=window)
    assert sink.calls == []


def test_window_wider_than_words_is_exact():
    assert solve(["SEND", "MORE", "MONEY"], "+", Collector(), window=5) == 1
