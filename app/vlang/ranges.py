"""Numeric range expressions used to select pluralized variants.

Range expression format:

- "1,2" is [1, 2]
- "1," is [1, +inf]
- ",1" is [-inf, 1]
- ",!1" is [-inf, 1[
- "!0,!5" is ]0, 5[
- "1" is [1, 1]

A "!" before a bound makes it exclusive. A missing bound is infinite and
inclusive. A bound is an optional "-" followed by decimal digits. Anything
else (signs, underscores, whitespace, more than one comma) is malformed and
never matches.
"""

import math
import operator
import re
from dataclasses import dataclass
from typing import Callable, Optional, Union

Number = Union[int, float]

_EXCLUSIVE_MARK = "!"
_BOUND_PATTERN = re.compile(r"-?[0-9]+")


@dataclass(frozen=True)
class RangeExpression:
    """Parsed range expression.

    Attributes:
        lower: Lower bound, -inf when open.
        upper: Upper bound, +inf when open.
        lower_exclusive: True if the lower bound is excluded.
        upper_exclusive: True if the upper bound is excluded.
    """

    lower: float
    upper: float
    lower_exclusive: bool = False
    upper_exclusive: bool = False

    @classmethod
    def parse(cls, expression: str) -> Optional["RangeExpression"]:
        """Parse a range expression.

        Args:
            expression: Range expression (e.g., "0,1", "2,", "1,!5").

        Returns:
            RangeExpression, or None if the expression is malformed.
        """
        parts = expression.split(",")
        if len(parts) > 2:
            return None

        bounds = []
        for idx, part in enumerate(parts):
            bound = _parse_bound(part, -math.inf if idx == 0 else math.inf)
            if bound is None:
                return None
            bounds.append(bound)

        if len(bounds) == 1:
            bounds.append(bounds[0])

        (lower, lower_excl), (upper, upper_excl) = bounds
        return cls(
            lower=lower,
            upper=upper,
            lower_exclusive=lower_excl,
            upper_exclusive=upper_excl,
        )

    def contains(self, n: Number) -> bool:
        """Check whether n is within the range."""
        lower_op: Callable = operator.lt if self.lower_exclusive else operator.le
        upper_op: Callable = operator.lt if self.upper_exclusive else operator.le
        return lower_op(self.lower, n) and upper_op(n, self.upper)


def _parse_bound(part: str, open_value: float):
    """Parse one bound into (value, exclusive), or None if malformed."""
    if part == "":
        return open_value, False

    exclusive = part.startswith(_EXCLUSIVE_MARK)
    if exclusive:
        part = part[len(_EXCLUSIVE_MARK):]

    if not _BOUND_PATTERN.fullmatch(part):
        return None
    return int(part), exclusive


def is_valid_range(expression: str) -> bool:
    """Check whether a range expression is well-formed."""
    return RangeExpression.parse(expression) is not None


def is_in_range(expression: str, n: Number) -> bool:
    """Test if n is comprised inside a range expression.

    Args:
        expression: Range expression (see module docstring).
        n: Number to test.

    Returns:
        True if n is in range. Malformed expressions are never matched.
    """
    parsed = RangeExpression.parse(expression)
    if parsed is None:
        return False
    return parsed.contains(n)
