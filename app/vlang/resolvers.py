"""Locale resolution logic.

Two concerns live here:

- resolving the single active locale of a session from prioritized
  suggestions (resolve_active_locale, LocaleSession);
- scoring the locales available in a message table against a requested
  locale (compare_locales, best_locale_match).
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence

import structlog
from vlang.exceptions import ConfigurationError
from vlang.models import LocaleParts

logger = structlog.get_logger().bind(component="vlang.resolver")

EXACT_MATCH = 2
LANGUAGE_MATCH = 1
NO_MATCH = 0


def split_locale(locale: str) -> LocaleParts:
    """Split a locale into lowercase lang/country parts."""
    return LocaleParts.from_string(locale)


def compare_locales(a: Optional[str], b: Optional[str]) -> int:
    """Score how well two locales match.

    Returns:
        EXACT_MATCH (2) for the same lang and country, LANGUAGE_MATCH (1)
        for the same lang only, NO_MATCH (0) otherwise. When either side is
        missing, two missing locales are an exact match and anything else
        is no match.
    """
    if not a or not b:
        return EXACT_MATCH if a == b else NO_MATCH

    sa = split_locale(a)
    sb = split_locale(b)

    if sa == sb:
        return EXACT_MATCH
    if sa.lang == sb.lang:
        return LANGUAGE_MATCH
    return NO_MATCH


def best_locale_match(available: Sequence[str], requested: Optional[str]) -> Optional[str]:
    """Find the available locale closest to the requested one.

    Ties are broken by order: the first locale reaching the best score
    wins. When nothing matches, the first available locale is returned.

    Args:
        available: Available locales in preference order.
        requested: Requested locale (e.g., "fr-CA"), or None.

    Returns:
        Best matching locale, or None if nothing is available.
    """
    if not available:
        return None

    best_choice = available[0]
    best_score = NO_MATCH

    for candidate in available:
        score = compare_locales(requested, candidate)
        if score > best_score:
            best_score = score
            best_choice = candidate

    return best_choice


@dataclass
class LocaleSuggestions:
    """Locale suggestions of a session, highest priority first.

    Attributes:
        chosen: Locale explicitly selected by the user.
        server_suggested: Locale handed over by the server render.
        persisted: Locale read from the persisted preference (cookie).
    """

    chosen: Optional[str] = None
    server_suggested: Optional[str] = None
    persisted: Optional[str] = None

    def in_priority_order(self) -> List[tuple]:
        return [
            ("chosen", self.chosen),
            ("server_suggested", self.server_suggested),
            ("persisted", self.persisted),
        ]


def sanitize_locale(
    locale: Optional[str],
    locales: Sequence[str],
    warn_unknown: bool = False,
    source: str = "suggestion",
) -> Optional[str]:
    """Keep a suggestion only if it is one of the enabled locales.

    Args:
        locale: Suggested locale.
        locales: Enabled locales.
        warn_unknown: Log a warning when a non-empty suggestion is dropped.
        source: Name of the suggestion, for logging.

    Returns:
        The locale, or None if it is not enabled.
    """
    if locale is not None and locale in locales:
        return locale

    if locale is not None and warn_unknown:
        logger.warning(
            "locale_suggestion_discarded",
            locale=locale,
            source=source,
            enabled_locales=list(locales),
        )
    return None


def resolve_active_locale(
    locales: Sequence[str],
    suggestions: Optional[LocaleSuggestions] = None,
    warn_unknown: bool = False,
) -> str:
    """Resolve the active locale from prioritized suggestions.

    Resolution order:
    1. Chosen locale (if enabled)
    2. Server-suggested locale (if enabled)
    3. Persisted locale (if enabled)
    4. First enabled locale

    Args:
        locales: Enabled locales, the first one being the default.
        suggestions: Locale suggestions of the session.
        warn_unknown: Log a warning for each discarded suggestion.

    Returns:
        Active locale.

    Raises:
        ConfigurationError: If no locale is enabled.
    """
    suggestions = suggestions or LocaleSuggestions()

    for source, suggested in suggestions.in_priority_order():
        sane = sanitize_locale(suggested, locales, warn_unknown, source)
        if sane is not None:
            return sane

    if not locales:
        logger.error("no_locale_configured")
        raise ConfigurationError("No locale configured and no valid suggestion")

    return locales[0]


@dataclass(frozen=True)
class LocaleChanged:
    """Emitted when the active locale of a session changes.

    Attributes:
        locale: New active locale.
        previous: Active locale before the change.
        timestamp: When the change happened.
    """

    locale: str
    previous: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    event_type = "vlang.locale.changed"

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "event_type": self.event_type,
            "locale": self.locale,
            "previous": self.previous,
            "timestamp": self.timestamp.isoformat(),
        }


LocaleListener = Callable[[LocaleChanged], None]


class LocaleSession:
    """Locale state owned by one user session.

    Holds the enabled locales and the three suggestions, and computes the
    active locale on demand. Each request or session must own its own
    instance: the chosen locale of one user must never leak into the
    response of another.

    Listeners registered with on_locale_change() are called synchronously,
    in registration order, whenever a mutation changes the active locale.
    A failing listener is logged and does not prevent the others from
    running.

    Attributes:
        locales: Enabled locales, the first one being the default.
        suggestions: Current locale suggestions.
        warn_unknown: Log a suggestion that is not enabled once, when it is
            recorded. Reading the active locale never logs.
    """

    def __init__(
        self,
        locales: Sequence[str],
        server_suggested: Optional[str] = None,
        persisted: Optional[str] = None,
        warn_unknown: bool = False,
    ):
        self.locales: List[str] = list(locales)
        self.suggestions = LocaleSuggestions(
            server_suggested=server_suggested,
            persisted=persisted,
        )
        self.warn_unknown = warn_unknown
        self._listeners: List[LocaleListener] = []
        self.log = logger.bind(enabled_locales=self.locales)

        self._check_suggestion("server_suggested", server_suggested)
        self._check_suggestion("persisted", persisted)

    @property
    def locale(self) -> str:
        """Active locale.

        Raises:
            ConfigurationError: If no locale is enabled.
        """
        return resolve_active_locale(self.locales, self.suggestions)

    @property
    def default_locale(self) -> Optional[str]:
        return self.locales[0] if self.locales else None

    def set_locale(self, locale: Optional[str]) -> str:
        """Record the user's explicit locale choice.

        Args:
            locale: Chosen locale. Unknown locales are ignored when
                resolving; None clears the choice.

        Returns:
            Active locale after the change.
        """
        return self._update("chosen", locale)

    def suggest_server_locale(self, locale: Optional[str]) -> str:
        """Record the locale handed over by the server render."""
        return self._update("server_suggested", locale)

    def suggest_persisted_locale(self, locale: Optional[str]) -> str:
        """Record the locale read from the persisted preference."""
        return self._update("persisted", locale)

    def on_locale_change(self, listener: LocaleListener) -> Callable[[], None]:
        """Register a listener for active locale changes.

        Args:
            listener: Called with a LocaleChanged event.

        Returns:
            Function removing the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> Dict[str, str]:
        """State handed from a server render to the client session."""
        return {"locale": self.locale}

    def _update(self, source: str, locale: Optional[str]) -> str:
        previous = self._current_or_none()
        # Resolve first so a rejected update leaves the session untouched
        updated = replace(self.suggestions, **{source: locale})
        current = resolve_active_locale(self.locales, updated)
        self.suggestions = updated
        self._check_suggestion(source, locale)

        if current != previous:
            self._notify(LocaleChanged(locale=current, previous=previous))

        return current

    def _check_suggestion(self, source: str, locale: Optional[str]) -> None:
        if self.warn_unknown:
            sanitize_locale(locale, self.locales, warn_unknown=True, source=source)

    def _current_or_none(self) -> Optional[str]:
        try:
            return self.locale
        except ConfigurationError:
            return None

    def _notify(self, event: LocaleChanged) -> None:
        log = self.log.bind(locale=event.locale, previous=event.previous)
        log.info("locale_changed", listener_count=len(self._listeners))

        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:  # pylint: disable=broad-except
                log.error(
                    "locale_listener_failed",
                    listener=getattr(listener, "__name__", repr(listener)),
                    error=str(e),
                )
