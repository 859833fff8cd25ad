"""Candidate digits for a letter under a partial assignment."""

from collections.abc import Iterable, Mapping

from bitarray.util import ones
from sortedcontainers import SortedSet

from cryptarithm.puzzle import BASE


def leading_letters(words: Iterable[str]) -> frozenset[str]:
    """Return the letters which start some word, and so may not stand for zero."""
    return frozenset(word[0] for word in words if word)


def candidates(letter: str, words: Iterable[str], assignment: Mapping[str, int]) -> SortedSet:
    """Return the digits still usable for `letter`.

    Starts from all digits, removes every digit bound to some *other* letter (letters stand
    for distinct digits), and removes 0 if `letter` is the first letter of any word (numbers
    have no leading zeros, single-letter words included).

    Args:
        letter: The letter to find digits for.
        words: All words of the equation.
        assignment: The current partial letter -> digit mapping.

    Returns:
        A SortedSet of digits, so candidates are always tried in ascending order.
    """
    available = ones(BASE)
    for other, digit in assignment.items():
        if other != letter:
            available[digit] = 0
    if letter in leading_letters(words):
        available[0] = 0
    return SortedSet(available.search(1))
