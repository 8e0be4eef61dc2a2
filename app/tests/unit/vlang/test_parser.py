"""Tests for vlang.parser module."""

from pathlib import Path

import pytest

from vlang import MessageBlockError
from vlang.parser import (
    extract,
    file_kind,
    load_blocks,
    merge_translations,
    parse_component,
    parse_vljs,
)


class TestParse:
    """Tests for parse_vljs() and parse_component()."""

    def test_parse_vljs(self, script_source):
        """parse_vljs() reads the VLANG comment."""
        assert parse_vljs(script_source) == [{"lang": "en", "messages": {"BYE": "Goodbye"}}]

    def test_parse_vljs_without_comment(self):
        """parse_vljs() returns None without VLANG comment."""
        assert parse_vljs("/* regular comment */\nconst a = 1;") is None

    def test_parse_component(self, component_source):
        """parse_component() reads the messages block."""
        data = parse_component(component_source)
        assert data[0]["lang"] == "en"
        assert data[1]["messages"] == {"HELLO": "Bonjour"}

    def test_parse_component_with_attributes(self):
        """The messages tag may carry attributes."""
        source = '<messages lang="yaml">\n- lang: en\n  messages: {A: a}\n</messages>'
        assert parse_component(source) == [{"lang": "en", "messages": {"A": "a"}}]

    def test_parse_component_without_block(self):
        """parse_component() returns None without messages block."""
        assert parse_component("<template><p/></template>") is None

    def test_invalid_yaml(self):
        """Invalid YAML raises MessageBlockError."""
        with pytest.raises(MessageBlockError):
            parse_component("<messages>\n- lang: [en\n</messages>")


class TestExtract:
    """Tests for extract()."""

    def test_extract_component(self, component_source):
        """extract() returns locale records."""
        records = extract(component_source, "component")
        assert [r["locale"] for r in records] == ["en", "fr"]
        assert records[0]["messages"]["ITEMS"] == {"0,1": "{} item", "2,": "{} items"}

    def test_extract_script(self, script_source):
        """extract() handles script files."""
        assert extract(script_source, "script") == [
            {"locale": "en", "messages": {"BYE": "Goodbye"}}
        ]

    def test_extract_nothing(self):
        """Files without messages yield []."""
        assert extract("const a = 1;", "script") == []

    def test_extract_invalid_block(self):
        """Invalid blocks yield [] instead of raising."""
        source = "<messages>\n- lang: en\n  messages:\n    N: {'x,y': bad}\n</messages>"
        assert extract(source, "component") == []

    def test_extract_invalid_yaml(self):
        """Invalid YAML yields [] instead of raising."""
        assert extract("<messages>\n- lang: [en\n</messages>", "component") == []

    def test_file_kind(self):
        """file_kind() maps suffixes to kinds."""
        assert file_kind(Path("a/B.vue")) == "component"
        assert file_kind(Path("a/b.JS")) == "script"
        assert file_kind(Path("a/b.py")) is None


class TestLoadBlocks:
    """Tests for load_blocks()."""

    def test_load_blocks(self):
        """load_blocks() returns validated records."""
        assert load_blocks("- lang: fr\n  messages:\n    A: b\n") == [
            {"locale": "fr", "messages": {"A": "b"}}
        ]

    def test_load_empty(self):
        """Empty content raises MessageBlockError."""
        with pytest.raises(MessageBlockError):
            load_blocks("")

    def test_load_invalid(self):
        """Invalid content raises MessageBlockError."""
        with pytest.raises(MessageBlockError):
            load_blocks("- messages: {}\n")


class TestMergeTranslations:
    """Tests for merge_translations()."""

    def test_later_sources_override(self):
        """Keys of later sources override earlier ones."""
        local = [{"locale": "en", "messages": {"A": "a", "B": "b"}}]
        external = [{"locale": "en", "messages": {"B": "B!"}}]
        assert merge_translations(local, external) == [
            {"locale": "en", "messages": {"A": "a", "B": "B!"}}
        ]

    def test_new_locales_appended(self):
        """Locales keep their order of first appearance."""
        merged = merge_translations(
            [{"locale": "en", "messages": {"A": "a"}}],
            [{"lang": "fr", "messages": {"A": "à"}}, {"locale": "en", "messages": {}}],
        )
        assert [r["locale"] for r in merged] == ["en", "fr"]

    def test_inputs_not_mutated(self):
        """merge_translations() does not modify its inputs."""
        local = [{"locale": "en", "messages": {"A": "a"}}]
        merge_translations(local, [{"locale": "en", "messages": {"A": "z"}}])
        assert local[0]["messages"] == {"A": "a"}

    def test_nothing_to_merge(self):
        """Merging nothing yields []."""
        assert merge_translations([], []) == []
