"""Factory functions for creating vlang components.

Provides convenience functions building sessions and translators from the
application settings.
"""

from typing import Mapping, MutableMapping, Optional

import structlog
from core.config import VlangSettings, settings
from vlang.resolvers import LocaleChanged, LocaleListener, LocaleSession
from vlang.translator import Translator

logger = structlog.get_logger()


def create_session(
    server_suggested: Optional[str] = None,
    persisted: Optional[str] = None,
    config: Optional[VlangSettings] = None,
    cookies: Optional[Mapping[str, str]] = None,
) -> LocaleSession:
    """Create the locale session of one request or user.

    Args:
        server_suggested: Locale handed over by the server render.
        persisted: Locale read from the persisted preference (cookie).
        config: Settings to use (default: settings.vlang).
        cookies: Request cookies. When persisted is not given, it is read
            from the cookie named by config.COOKIE_NAME.

    Returns:
        LocaleSession: New session, never shared between users.

    Usage:
        session = create_session(cookies=request.cookies)
        session.on_locale_change(persist_locale(response_cookies))
    """
    config = config or settings.vlang
    if persisted is None and cookies is not None:
        persisted = cookies.get(config.COOKIE_NAME)
    return LocaleSession(
        locales=config.LOCALES,
        server_suggested=server_suggested,
        persisted=persisted,
        warn_unknown=config.WARN_UNKNOWN_LOCALE,
    )


def persist_locale(
    cookies: MutableMapping[str, str],
    config: Optional[VlangSettings] = None,
) -> LocaleListener:
    """Listener writing the new active locale to the locale cookie.

    Args:
        cookies: Cookies to send back with the response.
        config: Settings to use (default: settings.vlang).

    Returns:
        Listener for LocaleSession.on_locale_change().
    """
    config = config or settings.vlang
    cookie_name = config.COOKIE_NAME

    def listener(event: LocaleChanged) -> None:
        cookies[cookie_name] = event.locale

    return listener


def create_translator(
    session: Optional[LocaleSession] = None,
    config: Optional[VlangSettings] = None,
) -> Translator:
    """Create and configure a Translator instance.

    Args:
        session: Locale session (default: a new session from settings).
        config: Settings to use (default: settings.vlang).

    Returns:
        Translator: Configured translator instance.
    """
    config = config or settings.vlang
    session = session or create_session(config=config)

    translator = Translator(
        session=session,
        debug=config.DEBUG,
        strategy=config.LOCALE_STRATEGY,
    )
    logger.info(
        "translator_created",
        locales=session.locales,
        debug=config.DEBUG,
        strategy=config.LOCALE_STRATEGY,
    )
    return translator
