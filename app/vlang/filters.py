"""Language-specific text filters applied to imported translations."""

import re
from typing import Callable, Dict, List, Mapping, Optional

from vlang.exceptions import MessageBlockError

NARROW_NBSP = "\u202f"
NBSP = "\xa0"

FRENCH_RULES = [
    (re.compile(r"([^ ]) ([;!?])"), rf"\1{NARROW_NBSP}\2"),
    (re.compile(r"([^ ]) (:)"), rf"\1{NBSP}\2"),
    (re.compile(r"« ([^»]+) »"), rf"«{NBSP}\1{NBSP}»"),
]


def french_punctuation(text: str) -> str:
    """Replace regular spaces with non-breaking ones where French requires it."""
    if not isinstance(text, str):
        return text

    for pattern, replacement in FRENCH_RULES:
        text = pattern.sub(replacement, text)

    return text


FILTERS: Dict[str, Callable[[str], str]] = {
    "french_punctuation": french_punctuation,
}


def filter_message(
    message: Optional[str],
    lang: str,
    filters: Optional[Mapping[str, List[str]]] = None,
) -> str:
    """Clean a translated message before writing it to a `.vlg` file.

    The text is trimmed, so that a lone space cannot pass for a
    translation, then the filters configured for lang are applied.

    Args:
        message: Translated text (None is treated as empty).
        lang: Language of the message.
        filters: Language -> filter names.

    Returns:
        Filtered message.

    Raises:
        MessageBlockError: If a configured filter does not exist.
    """
    text = (message or "").strip()

    for name in (filters or {}).get(lang, []):
        func = FILTERS.get(name)
        if func is None:
            raise MessageBlockError(f'Filter "{name}" is not available')
        text = func(text)

    return text
