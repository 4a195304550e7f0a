"""Structure-preserving edits of the config file.

Edits go through ``tomlkit`` on the raw file text, never through the typed
``Config`` snapshot, so comments, spacing and ordering of everything that is
not touched survive byte for byte.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from pathlib import Path
from typing import Sequence, Union

import tomlkit
from tomlkit.exceptions import TOMLKitError
from tomlkit.items import String

from .config import COLLECTIONS_KEY
from .errors import IOFailure, StructureMismatch

Value = Union[str, String]


def read_text(path: Path) -> str:
    try:
        return path.read_text()
    except OSError as exc:
        raise IOFailure(f"Cannot read config file {path}: {exc}") from exc


def write_text(path: Path, text: str) -> None:
    # Plain overwrite: a crash halfway through the write leaves a truncated file.
    try:
        path.write_text(text)
    except OSError as exc:
        raise IOFailure(f"Cannot write config file {path}: {exc}") from exc


def parse_document(text: str) -> tomlkit.TOMLDocument:
    try:
        return tomlkit.parse(text)
    except TOMLKitError as exc:
        raise StructureMismatch(f"Cannot parse config file: {exc}") from exc


def load_document(path: Path) -> tomlkit.TOMLDocument:
    return parse_document(read_text(path))


def save_document(path: Path, doc: tomlkit.TOMLDocument) -> None:
    write_text(path, tomlkit.dumps(doc))


def command_string(value: str) -> String:
    """Literal (single-quoted) TOML string when possible, so `$1` and backslashes read as typed."""

    if "'" not in value and value.isprintable():
        return tomlkit.string(value, literal=True)
    return tomlkit.string(value)


def _table_at(doc: MutableMapping, path: Sequence[str]) -> MutableMapping:
    node = doc
    for depth, key in enumerate(path):
        if key not in node:
            raise StructureMismatch(f"'{'.'.join(path[: depth + 1])}' does not exist in the config file")
        node = node[key]
        if not isinstance(node, MutableMapping):
            raise StructureMismatch(f"'{'.'.join(path[: depth + 1])}' is not a table")
    return node


def set_value(doc: tomlkit.TOMLDocument, path: Sequence[str], value: Value) -> None:
    """Create or replace the scalar at ``path``; missing parent tables are created."""

    if not path:
        raise StructureMismatch("Empty key path")
    *parents, leaf = path

    node: MutableMapping = doc
    for depth, key in enumerate(parents):
        if key not in node:
            node[key] = tomlkit.table()
        node = node[key]
        if not isinstance(node, MutableMapping):
            raise StructureMismatch(f"'{'.'.join(parents[: depth + 1])}' is not a table")

    if isinstance(node.get(leaf), MutableMapping):
        raise StructureMismatch(f"'{'.'.join(path)}' is a table, not a value")
    node[leaf] = value


def remove_key(doc: tomlkit.TOMLDocument, path: Sequence[str], key: str) -> None:
    table = _table_at(doc, path)
    if key not in table:
        raise StructureMismatch(f"'{key}' does not exist in '{'.'.join(path)}'")
    del table[key]


def collection_header(name: str) -> str:
    return f"[{COLLECTIONS_KEY}.{tomlkit.string(name).as_string()}]"


def append_collection_block(text: str, name: str) -> str:
    """Add an empty ``[collections."<name>"]`` table at the very end of ``text``.

    Appending as text keeps every existing section exactly where and how it was.
    """

    if text and not text.endswith("\n"):
        text += "\n"
    updated = f"{text}{collection_header(name)}\n\n"
    parse_document(updated)
    return updated
