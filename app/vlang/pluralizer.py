"""Selection of pluralized message variants."""

from typing import Mapping

from vlang.models import NO_PLURALIZED_OPTIONS
from vlang.ranges import Number, is_in_range

PLACEHOLDER = "{}"


def format_count(n: Number) -> str:
    """Decimal form of a count, without a trailing ".0" for whole floats."""
    if isinstance(n, float) and n.is_integer():
        return str(int(n))
    return str(n)


def pluralize(entries: Mapping[str, str], n: Number) -> str:
    """Return the variant of a pluralized entry matching n.

    Ranges are tried in definition order and the first match wins. Integer
    keys (as YAML loads "1:") are read as single-value ranges. Only the
    first "{}" of the selected text is replaced by n.

    Args:
        entries: Range expression -> text.
        n: Count to pluralize for.

    Returns:
        Selected text with the count substituted, or the
        NO_PLURALIZED_OPTIONS sentinel if no range matches.
    """
    selected = NO_PLURALIZED_OPTIONS

    for expression, text in entries.items():
        if is_in_range(str(expression), n):
            selected = text if isinstance(text, str) else str(text)
            break

    return selected.replace(PLACEHOLDER, format_count(n), 1)
