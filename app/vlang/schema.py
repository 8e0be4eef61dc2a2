"""Schema of message blocks found in source files and `.vlg` files.

A message block is a YAML list of:

    - lang: en
      messages:
        HELLO: "Hello"
        ITEMS:
          "0,1": "{} item"
          "2,": "{} items"

"locale" is accepted in place of "lang".
"""

from typing import Any, Dict, List, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError, field_validator

from vlang.exceptions import MessageBlockError
from vlang.ranges import is_valid_range

MessageEntry = Union[str, Dict[str, str]]


class MessageBlock(BaseModel):
    """Messages of one locale.

    Attributes:
        locale: Locale identifier (read from "lang" or "locale").
        messages: Key -> static text or (range expression -> text).
    """

    locale: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("locale", "lang"),
        description="Locale identifier",
    )
    messages: Dict[str, MessageEntry] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("messages", mode="before")
    @classmethod
    def _stringify_ranges(cls, value: Any) -> Any:
        # YAML loads "1: one item" with an integer key
        if not isinstance(value, dict):
            return value
        out = {}
        for key, entry in value.items():
            if isinstance(entry, dict):
                entry = {str(r): text for r, text in entry.items()}
            out[str(key)] = entry
        return out

    @field_validator("messages")
    @classmethod
    def _check_ranges(cls, value: Dict[str, MessageEntry]) -> Dict[str, MessageEntry]:
        for key, entry in value.items():
            if isinstance(entry, str):
                continue
            if not entry:
                raise ValueError(f'Pluralized message "{key}" has no range')
            for expression in entry:
                if not is_valid_range(expression):
                    raise ValueError(
                        f'Invalid range "{expression}" in pluralized message "{key}"'
                    )
        return value

    def to_record(self, locale_field: str = "locale") -> Dict[str, Any]:
        """Plain dict form, using locale_field as the locale key."""
        return {locale_field: self.locale, "messages": dict(self.messages)}


_blocks_adapter = TypeAdapter(List[MessageBlock])


def validate_blocks(data: Any) -> List[MessageBlock]:
    """Validate a parsed message block.

    Args:
        data: Parsed YAML content.

    Returns:
        List of MessageBlock.

    Raises:
        MessageBlockError: If data does not match the schema.
    """
    try:
        return _blocks_adapter.validate_python(data)
    except ValidationError as e:
        raise MessageBlockError(f"Invalid message block: {e}") from e


def is_valid_block(data: Any) -> bool:
    """Check whether data is a valid message block."""
    try:
        validate_blocks(data)
    except MessageBlockError:
        return False
    return True
