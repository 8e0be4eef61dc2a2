"""Feature-level fixtures for vlang tests."""

import pytest

from tests.factories.vlang import (
    make_message_records,
    make_message_table,
    make_session,
    make_translator,
)


@pytest.fixture
def message_table():
    """Message table in mapping form for en and fr."""
    return make_message_table()


@pytest.fixture
def message_records():
    """Message table in record form for en and fr."""
    return make_message_records()


@pytest.fixture
def session():
    """LocaleSession with en and fr enabled and no suggestion."""
    return make_session()


@pytest.fixture
def translator():
    """Translator resolving to en."""
    return make_translator(locale="en")


@pytest.fixture
def component_source():
    """Component file with a messages block."""
    return """<template>
  <p>{{ $t("HELLO") }}</p>
</template>

<messages>
- lang: en
  messages:
    HELLO: "Hello"
    ITEMS:
      "0,1": "{} item"
      "2,": "{} items"
- lang: fr
  messages:
    HELLO: "Bonjour"
</messages>
"""


@pytest.fixture
def script_source():
    """Script file with a VLANG comment."""
    return """import { vljs } from "vlang";

const $t = vljs(/* VLANG
- lang: en
  messages:
    BYE: "Goodbye"
*/);

export default $t;
"""
