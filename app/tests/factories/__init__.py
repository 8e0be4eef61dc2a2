"""Test data factories for deterministic test data generation."""

from tests.factories.vlang import (
    make_dictionary_row,
    make_message_records,
    make_message_table,
    make_messages,
    make_session,
    make_translator,
)

__all__ = [
    "make_dictionary_row",
    "make_message_records",
    "make_message_table",
    "make_messages",
    "make_session",
    "make_translator",
]
