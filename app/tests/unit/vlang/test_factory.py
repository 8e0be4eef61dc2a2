"""Tests for vlang.factory module."""

from core.config import VlangSettings
from vlang import LocaleSession, Translator
from vlang.factory import create_session, create_translator, persist_locale


class TestCreateSession:
    """Tests for create_session()."""

    def test_uses_configured_locales(self):
        """The session uses the configured locales."""
        config = VlangSettings(LOCALES=["fr", "en"])
        session = create_session(config=config)
        assert isinstance(session, LocaleSession)
        assert session.locales == ["fr", "en"]
        assert session.locale == "fr"

    def test_suggestions(self):
        """Server and persisted suggestions are passed along."""
        config = VlangSettings(LOCALES=["en", "fr", "de"])
        session = create_session(server_suggested="de", persisted="fr", config=config)
        assert session.locale == "de"

    def test_warn_unknown_flag(self):
        """WARN_UNKNOWN_LOCALE is carried to the session."""
        config = VlangSettings(LOCALES=["en"], WARN_UNKNOWN_LOCALE=True)
        assert create_session(config=config).warn_unknown

    def test_new_session_each_call(self):
        """Every call returns a distinct session."""
        config = VlangSettings(LOCALES=["en", "fr"])
        first = create_session(config=config)
        second = create_session(config=config)
        first.set_locale("fr")
        assert second.locale == "en"

    def test_persisted_from_cookie(self):
        """The persisted locale is read from the configured cookie."""
        config = VlangSettings(LOCALES=["en", "fr"], COOKIE_NAME="lang")
        session = create_session(config=config, cookies={"lang": "fr", "vlang": "en"})
        assert session.suggestions.persisted == "fr"
        assert session.locale == "fr"

    def test_missing_cookie(self):
        """Without the locale cookie the default locale is used."""
        config = VlangSettings(LOCALES=["en", "fr"])
        session = create_session(config=config, cookies={"other": "fr"})
        assert session.suggestions.persisted is None
        assert session.locale == "en"

    def test_explicit_persisted_wins_over_cookie(self):
        """An explicit persisted locale is not overridden by cookies."""
        config = VlangSettings(LOCALES=["en", "fr", "de"])
        session = create_session(persisted="de", config=config, cookies={"vlang": "fr"})
        assert session.locale == "de"


class TestPersistLocale:
    """Tests for persist_locale()."""

    def test_writes_cookie_on_change(self):
        """A locale change is written to the configured cookie."""
        config = VlangSettings(LOCALES=["en", "fr"], COOKIE_NAME="lang")
        response_cookies = {}
        session = create_session(config=config)
        session.on_locale_change(persist_locale(response_cookies, config=config))

        session.set_locale("fr")

        assert response_cookies == {"lang": "fr"}

    def test_round_trip_through_cookie(self):
        """A cookie written by one session restores the locale of the next."""
        config = VlangSettings(LOCALES=["en", "fr"])
        cookies = {}
        first = create_session(config=config)
        first.on_locale_change(persist_locale(cookies, config=config))
        first.set_locale("fr")

        assert create_session(config=config, cookies=cookies).locale == "fr"


class TestCreateTranslator:
    """Tests for create_translator()."""

    def test_defaults_from_settings(self):
        """The translator follows the configured flags."""
        config = VlangSettings(LOCALES=["en"], DEBUG=False, LOCALE_STRATEGY="best_match")
        translator = create_translator(config=config)
        assert isinstance(translator, Translator)
        assert translator.debug is False
        assert translator.strategy == "best_match"
        assert translator.get_locale() == "en"

    def test_given_session(self):
        """A given session is used as-is."""
        session = LocaleSession(["fr"])
        translator = create_translator(session=session, config=VlangSettings(LOCALES=["en"]))
        assert translator.session is session
        assert translator.translate("A", None, {"fr": {"messages": {"A": "à"}}}) == "à"
