"""Rendering entries back to BibTeX text and to JSON."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

import msgspec

from .exceptions import FileOperationError, InvalidDataError
from .model import Document, Entry

logger = logging.getLogger(__name__)

INDENT = "  "


class EntryRecord(msgspec.Struct):
    """JSON shape of a single entry."""

    type_name: str
    keys: list[str] = []
    fields: dict[str, str] = {}


def format_entry(entry: Entry) -> str:
    """Render an entry as BibTeX.

    Each bare key goes on its own line followed by a comma, then every
    field as ``name = value,`` in the entry's field order. Values are
    written exactly as stored, delimiters included.

    Parsing the output gives back an equal entry as long as the values are
    what the parser produces. Whitespace runs in bare (undelimited) values
    are read back as a single space, so ``{"note": "a  b"}`` returns as
    ``"a b"``; wrap such values in braces to keep them exact.

    Args:
        entry: Entry to render

    Returns:
        BibTeX text without a trailing newline
    """
    lines = [f"@{entry.type_name}{{"]
    lines.extend(f"{INDENT}{key}," for key in entry.keys)
    lines.extend(f"{INDENT}{name} = {value}," for name, value in entry.fields.items())
    lines.append("}")
    return "\n".join(lines)


def iterdump(document: Iterable[Entry]) -> Iterator[str]:
    """Yield formatted BibTeX blocks, one per entry."""
    for entry in document:
        yield format_entry(entry) + "\n"


def write_string(document: Iterable[Entry]) -> str:
    """Format a document as BibTeX text with a blank line between entries."""
    return "\n".join(iterdump(document))


def write_file(document: Iterable[Entry], path: Path) -> None:
    """Write a document to a .bib file.

    Raises:
        FileOperationError: If the file cannot be written
    """
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(write_string(document))
    except OSError as e:
        raise FileOperationError(f"Failed to write {path}: {e}") from e

    logger.info(f"Wrote {path}")


def to_json(document: Iterable[Entry]) -> bytes:
    """Encode a document as a JSON array of entry records."""
    records = [
        EntryRecord(entry.type_name, list(entry.keys), dict(entry.fields)) for entry in document
    ]
    return msgspec.json.encode(records)


def from_json(data: bytes | str) -> Document:
    """Decode a JSON array of entry records produced by :func:`to_json`.

    Raises:
        InvalidDataError: If the JSON is malformed or has the wrong shape
    """
    try:
        records = msgspec.json.decode(data, type=list[EntryRecord])
    except (msgspec.DecodeError, msgspec.ValidationError) as e:
        raise InvalidDataError(f"Invalid entry JSON: {e}") from e

    try:
        return [Entry(record.type_name, tuple(record.keys), record.fields) for record in records]
    except ValueError as e:
        raise InvalidDataError(f"Invalid entry JSON: {e}") from e
