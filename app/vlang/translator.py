"""Translation service resolving message keys for the active locale.

Given a key, a component's message table and an optional count, the
Translator picks the locale bucket, looks the key up and either returns
the static text or delegates to the pluralizer. Misses and misuse are
reported as sentinel strings, never raised, so that one bad entry does
not break the rendering of a whole page.
"""

import math
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Callable, Dict, Generator, Literal, Optional, Tuple, Union

from core.logging import bind_locale_context, get_module_logger
from vlang.exceptions import ConfigurationError
from vlang.models import (
    EXPECTED_PLURALIZED,
    EXPECTED_STATIC,
    MISSING_KEY,
    NO_TRANSLATOR,
    MessageTable,
    RawMessageTable,
    is_pluralized,
)
from vlang.pluralizer import pluralize
from vlang.ranges import Number
from vlang.resolvers import LocaleSession, best_locale_match

logger = get_module_logger()

LocaleStrategy = Literal["exact", "best_match"]

_MISSING = object()

TABLE_CACHE_SIZE = 256


def coerce_count(n: Any) -> Optional[Number]:
    """Turn a count argument into a number, or None for "no count".

    Numeric strings are parsed. Booleans, non-numeric strings and anything
    else are treated as no count.
    """
    if isinstance(n, bool):
        return None
    if isinstance(n, (int, float)):
        return n
    if isinstance(n, str):
        try:
            value = float(n)
        except ValueError:
            return None
        return None if math.isnan(value) else value
    return None


class Translator:
    """Service resolving translation keys against component message tables.

    Attributes:
        session: LocaleSession providing the active locale. Optional when
            every call passes an explicit locale.
        debug: When True, missing keys render as MISSING_KEY. When False,
            the key itself is returned.
        strategy: "exact" uses the bucket of the active locale as-is.
            "best_match" picks the table locale closest to the active one.
        use_cache: Keep the normalized form of raw message tables, keyed by
            object identity. Raw tables must not be mutated once used;
            call clear_cache() if they are.
        cache: Normalized tables (id of raw table -> (raw table, table)).
    """

    def __init__(
        self,
        session: Optional[LocaleSession] = None,
        debug: bool = True,
        strategy: LocaleStrategy = "exact",
        use_cache: bool = True,
    ):
        if strategy not in ("exact", "best_match"):
            raise ConfigurationError(f"Unknown locale strategy: {strategy}")

        self.session = session
        self.debug = debug
        self.strategy = strategy
        self.use_cache = use_cache
        self.cache: Dict[int, Tuple[Any, MessageTable]] = {}
        logger.debug(
            "initialized_translator",
            debug=debug,
            strategy=strategy,
            has_session=session is not None,
        )

    def get_locale(self) -> Optional[str]:
        """Active locale of the session, or None without a session.

        Raises:
            ConfigurationError: If the session has no locale enabled.
        """
        return self.session.locale if self.session else None

    def set_locale(self, locale: str) -> str:
        """Record the user's locale choice on the session.

        Raises:
            ConfigurationError: If the translator has no session.
        """
        if self.session is None:
            raise ConfigurationError("Cannot set locale on a translator without session")
        return self.session.set_locale(locale)

    def get_table(self, messages: Union[MessageTable, RawMessageTable]) -> MessageTable:
        """Normalized form of a message table.

        A raw table is normalized once and then served from the cache for as
        long as the same object is passed. The raw table is held by the cache
        so its id cannot be reused by another object.
        """
        if isinstance(messages, MessageTable) or messages is None or not self.use_cache:
            return MessageTable.from_raw(messages)

        cached = self.cache.get(id(messages))
        if cached is not None and cached[0] is messages:
            return cached[1]

        table = MessageTable.from_raw(messages)
        if len(self.cache) >= TABLE_CACHE_SIZE:
            self.clear_cache()
        self.cache[id(messages)] = (messages, table)
        return table

    def clear_cache(self) -> None:
        """Forget every normalized table."""
        self.cache.clear()
        logger.debug("cleared_table_cache")

    def resolve_locale(
        self,
        table: MessageTable,
        locale: Optional[str] = None,
    ) -> Optional[str]:
        """Locale whose bucket should be used for this table.

        Args:
            table: Normalized message table.
            locale: Explicit requested locale. Defaults to the session's.

        Returns:
            Locale key of the bucket to use.
        """
        requested = locale if locale is not None else self.get_locale()

        if self.strategy == "best_match":
            return best_locale_match(table.locales, requested)
        return requested

    def translate(
        self,
        key: str,
        n: Any = None,
        messages: Union[MessageTable, RawMessageTable] = None,
        locale: Optional[str] = None,
    ) -> str:
        """Return the translation of key.

        Args:
            key: Message key.
            n: Count for a pluralized entry. Numeric strings are accepted.
                When None (or not numeric) a static entry is expected.
            messages: Message table of the calling component, in mapping or
                record form. Raw forms are normalized once, see
                get_table().
            locale: Explicit locale overriding the session's.

        Returns:
            Translated text, or a sentinel string describing the problem.

        Raises:
            ConfigurationError: If no locale can be resolved.
        """
        table = self.get_table(messages)
        resolved = self.resolve_locale(table, locale)
        entry = table.messages_for(resolved).get(key, _MISSING)
        count = coerce_count(n)

        if entry is _MISSING or entry is None:
            logger.warning("translation_key_missing", key=key, locale=resolved)
            return MISSING_KEY.format(key=key) if self.debug else key

        if count is not None:
            if not is_pluralized(entry):
                logger.warning(
                    "translation_form_mismatch",
                    key=key,
                    locale=resolved,
                    expected="pluralized",
                )
                return EXPECTED_PLURALIZED.format(key=key)
            return pluralize(entry, count)

        if is_pluralized(entry):
            logger.warning(
                "translation_form_mismatch",
                key=key,
                locale=resolved,
                expected="static",
            )
            return EXPECTED_STATIC.format(key=key)

        return entry if isinstance(entry, str) else str(entry)

    def has_message(
        self,
        key: str,
        messages: Union[MessageTable, RawMessageTable],
        locale: Optional[str] = None,
    ) -> bool:
        """Check if key exists for the locale that would be used."""
        table = self.get_table(messages)
        entry = table.messages_for(self.resolve_locale(table, locale)).get(key)
        return entry is not None


_current_translator: ContextVar[Optional[Translator]] = ContextVar(
    "vlang_translator", default=None
)


def get_current_translator() -> Optional[Translator]:
    """Translator bound to the current context by use_translator()."""
    return _current_translator.get()


@contextmanager
def use_translator(translator: Translator) -> Generator[Translator, None, None]:
    """Bind a translator to the current request or task.

    Functions created by bind_messages() without an explicit translator use
    the one bound here. The binding is a context variable, so concurrent
    requests each see their own translator.

    Example:
        session = create_session(cookies=request.cookies)
        with use_translator(Translator(session)):
            body = render_page()
    """
    token = _current_translator.set(translator)
    try:
        try:
            locale = translator.get_locale()
        except ConfigurationError:
            locale = None
        with bind_locale_context(locale=locale):
            yield translator
    finally:
        _current_translator.reset(token)


def bind_messages(
    messages: Union[MessageTable, RawMessageTable],
    translator: Optional[Translator] = None,
) -> Callable[..., str]:
    """Create a translate function for a module owning its own messages.

    Args:
        messages: Message table of the module.
        translator: Translator to use. Defaults to the one bound with
            use_translator() at call time.

    Returns:
        Function t(key, n=None) -> str.

    Example:
        t = bind_messages([{"locale": "en", "messages": {"HELLO": "Hello"}}])
        t("HELLO")
    """
    table = MessageTable.from_raw(messages)

    def t(key: str, n: Any = None) -> str:
        active = translator or get_current_translator()
        if active is None:
            return NO_TRANSLATOR
        return active.translate(key, n, table)

    return t
