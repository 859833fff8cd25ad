"""Rendering of assignments and equations as text."""

from collections.abc import Mapping, Sequence

from cryptarithm.puzzle import Operator


def substitute(text: str, assignment: Mapping[str, int]) -> str:
    """Replace every bound letter in `text` with its digit.

    Letters without a binding are left as they are, so partial assignments can be rendered
    too.  Applying this to text which is already fully substituted changes nothing.
    """
    if not assignment:
        return text
    return text.translate({ord(letter): str(digit) for letter, digit in assignment.items()})


def flat_expression(
    words: Sequence[str],
    operator: Operator | str,
    assignment: Mapping[str, int] | None = None,
) -> str:
    """Render the equation on one line, e.g. "9567+1085=10652"."""
    symbol = Operator.parse(operator).symbol
    expression = f"{symbol.join(words[:-1])}={words[-1]}"
    return substitute(expression, assignment or {})


def pretty_print(
    words: Sequence[str],
    operator: Operator | str,
    assignment: Mapping[str, int] | None = None,
) -> str:
    """Format the equation so that the place values line up, e.g.::

           9567
         + 1085
        -------
          10652

    Every line is right-aligned to the width of the longest rendered word plus 2.
    """
    symbol = Operator.parse(operator).symbol
    lines = [substitute(word, assignment or {}) for word in words]
    width = max(len(line) for line in lines) + 2
    lines[-2] = f"{symbol} {lines[-2]}"
    lines.insert(-1, "-" * width)
    return "\n".join(line.rjust(width) for line in lines)


def mapping_str(assignment: Mapping[str, int]) -> str:
    """Render an assignment as "S:9,E:5,N:6,..." in binding order."""
    return ",".join(f"{letter}:{digit}" for letter, digit in assignment.items())


def elapsed_str(seconds: float) -> str:
    """Format a duration in seconds as "HH:MM:SS.ss"."""
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{int(hours):02}:{int(minutes):02}:{secs:05.2f}"
