"""Arithmetic check of the low-order columns of an equation."""

from collections.abc import Mapping, Sequence

from cryptarithm.format import substitute
from cryptarithm.puzzle import BASE, Operator


def word_value(word: str, assignment: Mapping[str, int], window: int | None = None) -> int:
    """Return the number spelled by the trailing `window` letters of `word`.

    A word shorter than the window is used whole (it is implicitly zero-padded on the left).
    If `window` is None or 0 the whole word is used.  Empty text has the value 0.
    """
    if window:
        word = word[-window:]
    digits = substitute(word, assignment)
    return int(digits) if digits else 0


def check_equal(
    words: Sequence[str],
    operator: Operator | str,
    window: int | None,
    assignment: Mapping[str, int],
) -> bool:
    """Check whether `assignment` satisfies the lowest `window` columns of the equation.

    The operands' low-order digits are combined with the operator and reduced modulo
    10**window, then compared with the result's low-order digits.  The low-order digits of
    a sum or product only depend on the low-order digits of its operands, so a failure here
    rules out every extension of the assignment.  With a window wider than any possible
    result the comparison is exact.

    All letters in the lowest `window` columns must be bound.

    Raises:
        UnsupportedOperator: If the operator is neither "+" nor "*".
        ValueError: If `window` is negative.
    """
    if window is not None and window < 0:
        raise ValueError(f"Validation window must not be negative, got {window}")
    op = Operator.parse(operator)
    operands = [word_value(word, assignment, window) for word in words[:-1]]
    combined = op.apply(operands)
    if window:
        combined %= BASE**window
    return combined == word_value(words[-1], assignment, window)
