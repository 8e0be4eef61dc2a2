"""Extraction of message blocks embedded in source files.

Script files carry their messages in a `/* VLANG ... */` comment and
component files in a `<messages>` custom block. In both cases the
content is a YAML message block (see vlang.schema).
"""

import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Literal, Optional

import yaml

import structlog
from vlang.exceptions import MessageBlockError
from vlang.schema import validate_blocks

logger = structlog.get_logger().bind(component="vlang.parser")

FileKind = Literal["script", "component"]

VLJS_PATTERN = re.compile(r"/\*\s*VLANG((?:[^*]|\*[^/])*)\*/", re.MULTILINE)
COMPONENT_PATTERN = re.compile(
    r"<messages(?:\s[^>]*)?>(.*?)</messages>", re.DOTALL | re.IGNORECASE
)

_KIND_BY_SUFFIX = {".js": "script", ".vue": "component"}


def _load_yaml(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise MessageBlockError(f"Messages syntax does not seem valid: {e}") from e


def parse_vljs(source: str) -> Optional[Any]:
    """Parse the first VLANG comment of a script file.

    Args:
        source: Script source code.

    Returns:
        Parsed YAML content, or None if the file has no VLANG comment.

    Raises:
        MessageBlockError: If the comment is not valid YAML.
    """
    match = VLJS_PATTERN.search(source)
    if not match:
        return None
    return _load_yaml(match.group(1))


def parse_component(source: str) -> Optional[Any]:
    """Parse the first `<messages>` block of a component file.

    Args:
        source: Component source code.

    Returns:
        Parsed YAML content, or None if the file has no messages block.

    Raises:
        MessageBlockError: If the block is not valid YAML.
    """
    match = COMPONENT_PATTERN.search(source)
    if not match:
        return None
    return _load_yaml(match.group(1))


def file_kind(path: Path) -> Optional[FileKind]:
    """Kind of a source file from its suffix, or None if not handled."""
    return _KIND_BY_SUFFIX.get(Path(path).suffix.lower())


def extract(content: str, kind: FileKind) -> List[Dict[str, Any]]:
    """Extract the message blocks of a source file.

    Files without messages, or with messages that are not valid, yield an
    empty list. Invalid blocks are logged and skipped so that a single bad
    file does not stop a whole extraction run.

    Args:
        content: File content.
        kind: "script" or "component".

    Returns:
        List of {"locale": ..., "messages": ...} records.
    """
    parser = parse_vljs if kind == "script" else parse_component

    try:
        data = parser(content)
        if not data:
            return []
        blocks = validate_blocks(data)
    except MessageBlockError as e:
        logger.warning("message_block_invalid", kind=kind, error=str(e))
        return []

    return [block.to_record() for block in blocks]


def load_blocks(source: str) -> List[Dict[str, Any]]:
    """Load a standalone message block (`<messages>` content or `.vlg` file).

    Unlike extract(), errors are raised: this is used when building, where
    an invalid block must stop the build.

    Raises:
        MessageBlockError: If the content is empty, not YAML or invalid.
    """
    data = _load_yaml(source)
    if not data:
        raise MessageBlockError("Messages syntax does not seem valid")
    return [block.to_record() for block in validate_blocks(data)]


def merge_translations(*sources: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Merge several lists of records.

    Records of the same locale are merged key by key, later sources
    overriding earlier ones. Locales keep the order of first appearance.

    Args:
        *sources: Lists of {"locale", "messages"} records.

    Returns:
        Merged list of records.
    """
    merged: Dict[str, Dict[str, Any]] = {}

    for source in sources:
        for record in source:
            locale = record.get("locale", record.get("lang"))
            if locale not in merged:
                merged[locale] = {"locale": locale, "messages": {}}
            merged[locale]["messages"].update(record.get("messages") or {})

    return list(merged.values())
