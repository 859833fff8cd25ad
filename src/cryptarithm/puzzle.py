"""Puzzle model: operators, equations and their structural validation."""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from math import prod
from os import PathLike
from pathlib import Path

BASE = 10
"""Number base of the puzzles."""

DIGITS = range(BASE)
"""All digits a letter may stand for."""

MAX_LETTERS = BASE
"""An injective letter -> digit mapping cannot cover more letters than there are digits."""

VALID_WORD_PATTERN = re.compile(r"[A-Z]*")
"""Regex pattern for validating (uppercased) words; use with `fullmatch`."""

OPERATOR_CHARS = frozenset("+-*/%^")
"""Characters recognized as arithmetic operators when parsing an equation string."""


class CryptarithmError(ValueError):
    """Base class for errors raised before a search starts."""


class InvalidPuzzle(CryptarithmError):
    """The words do not describe a solvable-shaped puzzle."""


class UnsupportedOperator(CryptarithmError):
    """The operator is neither addition nor multiplication."""


class Operator(Enum):
    """Operator combining the operand words of an equation."""

    ADD = "+"
    MULTIPLY = "*"

    @classmethod
    def parse(cls, value: "Operator | str") -> "Operator":
        """Return the operator for `value`, which may already be an Operator.

        Raises:
            UnsupportedOperator: If `value` is not "+" or "*".
        """
        if isinstance(value, Operator):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedOperator(
                f"Invalid operation {value!r} should be either '+' or '*'"
            ) from None

    @property
    def symbol(self) -> str:
        return self.value

    def apply(self, values: Iterable[int]) -> int:
        """Combine operand values: the sum for ADD, the product for MULTIPLY."""
        if self is Operator.ADD:
            return sum(values)
        return prod(values)


@dataclass(frozen=True)
class Equation:
    """A cryptarithm: operand words combined by one operator, equal to a result word.

    Words are stored uppercased, so they may be given in any case.
    """

    operands: tuple[str, ...]
    """Operand words, most significant letter first."""

    result: str
    """The result word."""

    operator: Operator = Operator.ADD
    """Operator combining the operands."""

    def __post_init__(self) -> None:
        """Validate the structure of the equation."""
        # Frozen dataclass: normalize fields through object.__setattr__
        object.__setattr__(self, "operands", tuple(word.upper() for word in self.operands))
        object.__setattr__(self, "result", self.result.upper())
        object.__setattr__(self, "operator", Operator.parse(self.operator))

        if len(self.operands) < 2:
            raise InvalidPuzzle(f"Not enough words specified: {','.join(self.words)}")
        if not self.result:
            raise InvalidPuzzle("No result specified")

        invalid = [word for word in self.words if not VALID_WORD_PATTERN.fullmatch(word)]
        if invalid:
            raise InvalidPuzzle(f"Words have invalid characters: {','.join(invalid)}")

        if len(self.letters) > MAX_LETTERS:
            raise InvalidPuzzle(f"Too many different letters used: {', '.join(self.letters)}")

    @classmethod
    def from_words(cls, words: Sequence[str], operator: Operator | str = "+") -> "Equation":
        """Build an equation from a word list whose last word is the result.

        Words are case-normalized to uppercase.

        Args:
            words: At least two operand words followed by the result word.
            operator: "+" or "*" (or an Operator).

        Raises:
            InvalidPuzzle: If there are fewer than 3 words, the result is empty, a word
                contains something other than letters, or more than 10 letters are used.
            UnsupportedOperator: If the operator is neither "+" nor "*".
        """
        if len(words) < 3:
            raise InvalidPuzzle(f"Not enough words specified: {','.join(words)}")
        if len(words[-1]) < 1:
            raise InvalidPuzzle("No result specified")
        return cls(
            operands=tuple(words[:-1]),
            result=words[-1],
            operator=Operator.parse(operator),
        )

    @property
    def words(self) -> tuple[str, ...]:
        """All words: the operands followed by the result."""
        return (*self.operands, self.result)

    @property
    def letters(self) -> list[str]:
        """Distinct letters, in order of first appearance."""
        return list(dict.fromkeys("".join(self.words)))

    @property
    def leading_letters(self) -> frozenset[str]:
        """Letters which are the first letter of some word, and so cannot be zero."""
        return frozenset(word[0] for word in self.words if word)

    @property
    def max_word_length(self) -> int:
        return max(len(word) for word in self.words)

    @property
    def default_window(self) -> int:
        """Validation window for the final check.

        Multiplying W numbers of N digits gives on the order of W*N digits, so a window
        this wide is never truncated and the final check is an exact comparison.
        """
        return self.max_word_length * len(self.words)

    @property
    def expression(self) -> str:
        """The equation on a single line, e.g. "SEND+MORE=MONEY"."""
        return f"{self.operator.symbol.join(self.operands)}={self.result}"

    def __str__(self) -> str:
        return self.expression

    def to_dict(self) -> dict:
        """Return a dictionary representation of the Equation."""
        return {
            "operands": list(self.operands),
            "result": self.result,
            "operator": self.operator.symbol,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Equation":
        """Create an Equation from its dictionary representation."""
        return cls.from_words([*data["operands"], data["result"]], data["operator"])


def clean(text: str) -> str:
    """Remove all whitespace from an equation string and convert letters to uppercase."""
    return "".join(text.split()).upper()


def parse_equation(text: str) -> Equation:
    """Parse an equation string such as "SEND + MORE = MONEY".

    Either "=" or "==" is accepted as the equality sign.  All operands must be joined by
    the same operator.

    Raises:
        InvalidPuzzle: If the text is not of the form "operand(+|*)operand...=result".
        UnsupportedOperator: If an operator other than "+" or "*" is used, or both are mixed.
    """
    expression = clean(text).replace("==", "=")
    sides = expression.split("=")
    if len(sides) != 2:
        raise InvalidPuzzle(f"Expected exactly one '=' in equation: {text!r}")
    left, result = sides
    if not left or not result:
        raise InvalidPuzzle(f"Both sides of the equation must be given: {text!r}")

    symbols = {ch for ch in left if ch in OPERATOR_CHARS}
    unsupported = symbols - {Operator.ADD.symbol, Operator.MULTIPLY.symbol}
    if unsupported:
        raise UnsupportedOperator(
            f"Invalid operation {''.join(sorted(unsupported))!r} should be either '+' or '*'"
        )
    if len(symbols) > 1:
        raise UnsupportedOperator(f"Mixed operators are not supported: {text!r}")
    if not symbols:
        raise InvalidPuzzle(f"No operator found in equation: {text!r}")

    (symbol,) = symbols
    operands = left.split(symbol)
    if not all(operands):
        raise InvalidPuzzle(f"Empty operand in equation: {text!r}")
    return Equation.from_words([*operands, result], symbol)


def load_puzzles(path: str | PathLike) -> list[Equation]:
    """Load equations from a text file, one per line.

    Blank lines and lines starting with '#' are skipped.

    Raises:
        InvalidPuzzle, UnsupportedOperator: For the first bad line, with its line number.
    """
    puzzles: list[Equation] = []
    puzzle_path = Path(path)
    with open(puzzle_path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                puzzles.append(parse_equation(line))
            except CryptarithmError as e:
                raise type(e)(f"{puzzle_path}:{lineno}: {e}") from None
    return puzzles
