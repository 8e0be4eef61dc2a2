"""Tests for vlang.models module."""

import pytest

from vlang.models import (
    MISSING_KEY,
    LocaleParts,
    MessageTable,
    is_pluralized,
    is_sentinel,
)


class TestLocaleParts:
    """Tests for LocaleParts."""

    @pytest.mark.parametrize(
        "locale,expected",
        [
            ("en", LocaleParts("en")),
            ("en-US", LocaleParts("en", "us")),
            ("fr_CA", LocaleParts("fr", "ca")),
            ("ZH-hant-TW", LocaleParts("zh", "hant")),
        ],
    )
    def test_from_string(self, locale, expected):
        """from_string() lowercases and splits on "-" or "_"."""
        assert LocaleParts.from_string(locale) == expected


class TestMessageTable:
    """Tests for MessageTable normalization."""

    def test_from_mapping(self, message_table):
        """from_raw() accepts the mapping form."""
        table = MessageTable.from_raw(message_table)
        assert table.locales == ["en", "fr"]
        assert table.messages_for("en")["HELLO"] == "Hi"

    def test_from_records(self, message_records):
        """from_raw() accepts the record form."""
        table = MessageTable.from_raw(message_records)
        assert table.locales == ["en", "fr"]
        assert table.messages_for("fr")["HELLO"] == "Bonjour"

    def test_records_with_lang_field(self):
        """from_raw() reads "lang" when "locale" is absent."""
        table = MessageTable.from_raw([{"lang": "en", "messages": {"A": "a"}}])
        assert table.messages_for("en") == {"A": "a"}

    def test_both_forms_equivalent(self, message_table, message_records):
        """Both forms normalize to the same buckets."""
        assert MessageTable.from_raw(message_table) == MessageTable.from_raw(
            message_records
        )

    def test_duplicate_record_first_wins(self):
        """The first record of a locale wins, as a linear search would."""
        table = MessageTable.from_raw(
            [
                {"locale": "en", "messages": {"A": "first"}},
                {"locale": "en", "messages": {"A": "second"}},
            ]
        )
        assert table.messages_for("en")["A"] == "first"

    def test_missing_bucket_is_empty(self, message_table):
        """messages_for() returns an empty mapping for unknown locales."""
        table = MessageTable.from_raw(message_table)
        assert dict(table.messages_for("de")) == {}
        assert dict(table.messages_for(None)) == {}

    def test_bucket_without_messages(self):
        """Buckets without a messages mapping are empty."""
        table = MessageTable.from_raw({"en": {}, "fr": None})
        assert dict(table.messages_for("en")) == {}
        assert dict(table.messages_for("fr")) == {}

    def test_none_is_empty(self):
        """from_raw(None) is an empty table."""
        assert len(MessageTable.from_raw(None)) == 0

    def test_from_raw_returns_same_table(self, message_table):
        """from_raw() passes a MessageTable through."""
        table = MessageTable.from_raw(message_table)
        assert MessageTable.from_raw(table) is table

    def test_table_is_read_only(self, message_table):
        """Normalized buckets cannot be mutated."""
        table = MessageTable.from_raw(message_table)
        with pytest.raises(TypeError):
            table.messages_for("en")["HELLO"] = "changed"

    def test_source_mutation_does_not_leak(self):
        """Changing the raw table after normalization has no effect."""
        raw = {"en": {"messages": {"A": "a"}}}
        table = MessageTable.from_raw(raw)
        raw["en"]["messages"]["A"] = "changed"
        assert table.messages_for("en")["A"] == "a"

    def test_invalid_raw(self):
        """from_raw() rejects strings and non-mapping records."""
        with pytest.raises(TypeError):
            MessageTable.from_raw("en")
        with pytest.raises(TypeError):
            MessageTable.from_raw(["en"])


class TestHelpers:
    """Tests for entry and sentinel helpers."""

    def test_is_pluralized(self):
        """is_pluralized() is True for range mappings only."""
        assert is_pluralized({"1": "one"})
        assert not is_pluralized("text")

    def test_is_sentinel(self):
        """is_sentinel() recognizes diagnostic strings."""
        assert is_sentinel(MISSING_KEY.format(key="X"))
        assert not is_sentinel("Hello!!!")
