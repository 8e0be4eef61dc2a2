"""vlang - runtime message resolution for component translations.

Main components:
- ranges: range expressions selecting pluralized variants
- pluralizer: pluralized variant selection and count substitution
- resolvers: active locale resolution and best locale matching
- translator: Translator resolving keys against component message tables
- parser, dictionary, filters: extraction and import of messages
"""

from vlang.exceptions import ConfigurationError, MessageBlockError, VlangError
from vlang.models import LocaleParts, MessageTable
from vlang.pluralizer import pluralize
from vlang.ranges import RangeExpression, is_in_range
from vlang.resolvers import (
    LocaleChanged,
    LocaleSession,
    LocaleSuggestions,
    best_locale_match,
    compare_locales,
    resolve_active_locale,
    split_locale,
)
from vlang.translator import (
    Translator,
    bind_messages,
    get_current_translator,
    use_translator,
)

__all__ = [
    "VlangError",
    "ConfigurationError",
    "MessageBlockError",
    "LocaleParts",
    "MessageTable",
    "RangeExpression",
    "is_in_range",
    "pluralize",
    "LocaleChanged",
    "LocaleSession",
    "LocaleSuggestions",
    "best_locale_match",
    "compare_locales",
    "resolve_active_locale",
    "split_locale",
    "Translator",
    "bind_messages",
    "get_current_translator",
    "use_translator",
]
