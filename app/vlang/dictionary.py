"""Global translation dictionary used to sync messages with external sources.

The global dictionary flattens every message of a project under a
JSON-encoded key `["<lang>", "<component path>", "<message key>"]`:

- static messages map to {"original": text} (plus "translation" once
  imported from an external source);
- pluralized messages map to {range: {"original": text}, ...}.

The functions here are pure transformations between source blocks, that
dictionary and the `.vlg` files holding imported translations. Talking to
the external source itself is left to the sync backend.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import yaml

from core.logging import get_module_logger
from vlang.exceptions import MessageBlockError
from vlang.filters import filter_message
from vlang.parser import FileKind, extract, file_kind, load_blocks, merge_translations
from vlang.schema import is_valid_block

logger = get_module_logger()

VLG_SUFFIX = ".vlg"
_SOURCE_SUFFIX = re.compile(r"\.(vue|js)$", re.IGNORECASE)

Dictionary = Dict[str, Dict[str, Any]]


def make_global_key(lang: str, component: str, key: str) -> str:
    """Encode a global dictionary key."""
    return json.dumps([lang, component, key], separators=(",", ":"), ensure_ascii=False)


def parse_global_key(global_key: str) -> Tuple[str, str, str]:
    """Decode a global dictionary key into (lang, component, key)."""
    lang, component, key = json.loads(global_key)
    return lang, component, key


def component_path(i18n_root: Path, component: str) -> Path:
    """Path of the `.vlg` file holding the imported translations of a component.

    Example:
        component_path(Path("i18n"), "components/Header.vue")
        # Path("i18n/components/Header.vlg")
    """
    return Path(i18n_root) / (_SOURCE_SUFFIX.sub("", component) + VLG_SUFFIX)


def extract_file_dict(component: str, records: Iterable[Mapping[str, Any]]) -> Dictionary:
    """Flatten the message records of one component into dictionary rows."""
    out: Dictionary = {}

    for record in records:
        lang = record.get("locale", record.get("lang"))
        for key, message in (record.get("messages") or {}).items():
            global_key = make_global_key(lang, component, key)
            if isinstance(message, str):
                out[global_key] = {"original": message}
            else:
                out[global_key] = {
                    rng: {"original": original} for rng, original in message.items()
                }

    return out


def extract_file(root: Path, file_path: Path) -> Dictionary:
    """Extract the dictionary rows of one source file.

    Args:
        root: Project root, used to compute the component path.
        file_path: Path to a `.vue` or `.js` file.

    Returns:
        Dictionary rows, empty if the file has no valid messages.
    """
    kind = file_kind(file_path)
    if kind is None:
        return {}

    with open(file_path, "r", encoding="utf-8") as f:
        records = extract(f.read(), kind)

    component = Path(file_path).resolve().relative_to(Path(root).resolve()).as_posix()
    return extract_file_dict(component, records)


def dict_from_files(root: Path, files: Iterable[Path]) -> Dictionary:
    """Extract and merge the dictionary rows of several files."""
    out: Dictionary = {}
    count = 0

    for file_path in files:
        out.update(extract_file(root, file_path))
        count += 1

    logger.info("extracted_dictionary", file_count=count, row_count=len(out))
    return out


def new_lines_to_sync(
    internal: Mapping[str, Any],
    external: Mapping[str, Any],
    languages: Iterable[str],
) -> Dictionary:
    """Rows to add to the external source.

    Every internal row missing from the external dictionary is added, and
    is also copied to every supported language that the external
    dictionary does not have yet, so translators get a row to fill.

    Args:
        internal: Dictionary extracted from the source code.
        external: Dictionary read from the external source.
        languages: Languages the project supports.

    Returns:
        New rows, keyed by global key.
    """
    languages = list(languages)
    out: Dictionary = {}

    for global_key, message in internal.items():
        if global_key not in external:
            out[global_key] = message

        _, component, key = parse_global_key(global_key)
        for lang in languages:
            new_key = make_global_key(lang, component, key)
            if new_key not in out and new_key not in external:
                out[new_key] = message

    logger.info("computed_new_lines", row_count=len(out))
    return out


def _is_static_row(message: Mapping[str, Any]) -> bool:
    return "original" in message or "translation" in message


def sort_dict_by_file(
    dictionary: Mapping[str, Mapping[str, Any]],
    i18n_root: Path,
    filters: Optional[Mapping[str, List[str]]] = None,
) -> Dict[Path, Dict[str, Dict[str, Any]]]:
    """Group translated rows by `.vlg` file and language.

    Rows with an empty translation are dropped, so the text from the source
    code keeps being used until someone actually translates it.

    Args:
        dictionary: Global dictionary with "translation" fields.
        i18n_root: Directory holding the `.vlg` files.
        filters: Language -> filter names.

    Returns:
        {vlg path: {lang: {key: static text or {range: text}}}}.
    """
    files: Dict[Path, Dict[str, Dict[str, Any]]] = {}

    for global_key, message in dictionary.items():
        lang, component, key = parse_global_key(global_key)

        if _is_static_row(message):
            real_message: Any = filter_message(message.get("translation"), lang, filters)
        else:
            real_message = {}
            for rng, text in message.items():
                clean = filter_message((text or {}).get("translation"), lang, filters)
                if clean:
                    real_message[rng] = clean

        if not real_message:
            continue

        path = component_path(i18n_root, component)
        files.setdefault(path, {}).setdefault(lang, {})[key] = real_message

    return files


def generate_file_content(file_dict: Mapping[str, Mapping[str, Any]], file_path: Path) -> str:
    """Render the YAML content of a `.vlg` file.

    Raises:
        MessageBlockError: If the generated block is invalid, which most
            likely means a translator wrote a malformed range.
    """
    out = [{"lang": lang, "messages": dict(messages)} for lang, messages in file_dict.items()]

    if not is_valid_block(out):
        raise MessageBlockError(
            f'Cannot validate generated translation for "{file_path}". '
            "Most likely the source document has a weird range somewhere."
        )

    return yaml.safe_dump(out, allow_unicode=True, sort_keys=False)


def save_external_dict(
    i18n_root: Path,
    dictionary: Mapping[str, Mapping[str, Any]],
    filters: Optional[Mapping[str, List[str]]] = None,
) -> List[Path]:
    """Write the imported translations to `.vlg` files.

    Returns:
        Paths of the written files.
    """
    written = []

    for path, file_dict in sort_dict_by_file(dictionary, i18n_root, filters).items():
        content = generate_file_content(file_dict, path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        written.append(path)

    logger.info("saved_external_dictionary", file_count=len(written))
    return written


def load_external(i18n_root: Path, component: str) -> List[Dict[str, Any]]:
    """Records of a component's `.vlg` file, or [] if it has none."""
    path = component_path(i18n_root, component)
    if not path.exists():
        return []

    with open(path, "r", encoding="utf-8") as f:
        return load_blocks(f.read())


def load_component_messages(
    content: str,
    kind: FileKind,
    i18n_root: Path,
    component: str,
) -> List[Dict[str, Any]]:
    """Build the message table attached to a component.

    Messages embedded in the source come first and imported translations
    override them key by key.

    Args:
        content: Source of the component or script.
        kind: "script" or "component".
        i18n_root: Directory holding the `.vlg` files.
        component: Component path relative to the project root.

    Returns:
        Message table in record form.
    """
    return merge_translations(extract(content, kind), load_external(i18n_root, component))
