"""Message table models for the vlang runtime.

Defines the locale structure, the normalized message table and the
sentinel strings returned when a translation is missing or misused.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional, Union

# Sentinel strings. Rendered output is scanned for SENTINEL_MARKER by tests
# and developer tooling, so these values must stay stable.
SENTINEL_MARKER = "!!!"
MISSING_KEY = '!!! MISSING KEY "{key}" !!!'
EXPECTED_PLURALIZED = '!!! USING "{key}" AS PLURALIZABLE STRING, BUT IT\'S NOT !!!'
EXPECTED_STATIC = '!!! USING "{key}" AS REGULAR STRING, BUT IT\'S PLURALIZABLE !!!'
NO_PLURALIZED_OPTIONS = "!!! MISSING (no pluralized options) !!!"
NO_TRANSLATOR = "!!! COULD NOT GET VLANG INSTANCE !!!"

_EMPTY: Mapping[str, Any] = MappingProxyType({})


def is_sentinel(text: str) -> bool:
    """Check whether a rendered string is a vlang diagnostic."""
    return text.startswith(SENTINEL_MARKER) and text.endswith(SENTINEL_MARKER)


def is_pluralized(entry: Any) -> bool:
    """A pluralized entry maps range expressions to text."""
    return isinstance(entry, Mapping)


@dataclass(frozen=True)
class LocaleParts:
    """Language and optional country of a locale identifier.

    Both parts are lowercase. "fr_CA", "fr-ca" and "FR-CA" all split to
    LocaleParts(lang="fr", country="ca").

    Attributes:
        lang: Language part (e.g., "fr").
        country: Country part (e.g., "ca"), or None when absent.
    """

    lang: str
    country: Optional[str] = None

    @classmethod
    def from_string(cls, locale: str) -> "LocaleParts":
        """Split a locale on the first "-" or "_".

        Args:
            locale: Locale identifier (e.g., "en", "en-US", "fr_CA").

        Returns:
            LocaleParts instance.
        """
        lowered = locale.lower().replace("_", "-")
        lang, sep, rest = lowered.partition("-")
        if not sep:
            return cls(lang=lang)
        # Anything after a second separator is ignored
        return cls(lang=lang, country=rest.split("-", 1)[0])


RawMessageTable = Union[Mapping[str, Any], Iterable[Mapping[str, Any]], None]


@dataclass(frozen=True)
class MessageTable:
    """Read-only translations of one component, keyed by locale.

    Both historical shapes are accepted by from_raw() and normalized to an
    ordered locale -> messages mapping:

    - mapping form: {"en": {"messages": {...}}, "fr": {"messages": {...}}}
    - record form: [{"locale": "en", "messages": {...}}, ...]

    Record form also accepts "lang" as the locale field, which is what the
    extraction blocks use. When a locale appears twice in record form, the
    first record wins, as a linear search would.

    Attributes:
        buckets: Locale -> messages (key -> static or pluralized entry).
    """

    buckets: Mapping[str, Mapping[str, Any]] = field(default_factory=lambda: _EMPTY)

    @classmethod
    def from_raw(cls, raw: Union["MessageTable", RawMessageTable]) -> "MessageTable":
        """Normalize a raw message table.

        Args:
            raw: MessageTable, mapping form, record form or None.

        Returns:
            MessageTable instance.

        Raises:
            TypeError: If raw is neither a mapping nor an iterable of records.
        """
        if isinstance(raw, MessageTable):
            return raw
        if raw is None:
            return cls()

        buckets = {}

        if isinstance(raw, Mapping):
            for locale, bucket in raw.items():
                buckets[locale] = _bucket_messages(bucket)
        elif isinstance(raw, (str, bytes)):
            raise TypeError("Message table must be a mapping or a list of records")
        else:
            for record in raw:
                if not isinstance(record, Mapping):
                    raise TypeError(f"Invalid message table record: {record!r}")
                locale = record.get("locale", record.get("lang"))
                if locale in buckets:
                    continue
                buckets[locale] = _bucket_messages(record)

        return cls(buckets=MappingProxyType(buckets))

    @property
    def locales(self) -> List[str]:
        """Locales present in the table, in definition order."""
        return [locale for locale in self.buckets if locale is not None]

    def messages_for(self, locale: Optional[str]) -> Mapping[str, Any]:
        """Messages for a locale, or an empty mapping if the bucket is missing."""
        return self.buckets.get(locale, _EMPTY)

    def __len__(self) -> int:
        return len(self.buckets)


def _bucket_messages(bucket: Any) -> Mapping[str, Any]:
    if not isinstance(bucket, Mapping):
        return _EMPTY
    messages = bucket.get("messages")
    if not isinstance(messages, Mapping):
        return _EMPTY
    return MappingProxyType(dict(messages))
