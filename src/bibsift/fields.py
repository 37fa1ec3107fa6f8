"""Parser for the body of a BibTeX entry."""

from __future__ import annotations

import logging

from .exceptions import FieldSyntaxError
from .spans import extract_span
from .tokens import TokenKind, next_token

logger = logging.getLogger(__name__)

# Concatenation is kept as text, never resolved
CONCAT_MARKER = " # "


def _finalize(
    keys: list[str], fields: dict[str, str], pending: str | None, parts: list[str]
) -> None:
    """Store the unit collected so far as a field or a bare key."""
    value = "".join(parts)
    if pending is not None:
        if pending in fields:
            logger.debug("Field %r repeated, keeping the last value", pending)
        fields[pending] = value
    elif value:
        keys.append(value)


def parse_entry_body(body: str, line: int = 1) -> tuple[list[str], dict[str, str]]:
    """Split an entry body into bare keys and tagged fields.

    The body is the text between the entry's outer braces. Units are
    separated by commas at the top level. A unit containing ``=`` becomes a
    field, any other non-empty unit becomes a bare key. Brace and quote
    delimited values are copied verbatim with their delimiters, and ``#``
    concatenation is preserved as `` # ``.

    Args:
        body: Entry body with the outer braces already removed
        line: Line number where the body starts

    Returns:
        A tuple ``(keys, fields)``. ``keys`` lists bare keys in the order they
        appear, ``fields`` maps field names to values. A repeated field name
        keeps the last value.

    Raises:
        FieldSyntaxError: If ``=`` is not preceded by a field name
        UnterminatedSpanError: If a nested brace or quote group never closes
    """
    keys: list[str] = []
    fields: dict[str, str] = {}
    pending: str | None = None
    parts: list[str] = []
    spaced = False
    pos = 0

    while pos < len(body):
        token, end = next_token(body, pos)
        kind = token.kind

        if kind is TokenKind.SPACE:
            line += token.text.count("\n")
            spaced = bool(parts)
            pos = end
            continue

        if kind is TokenKind.COMMA:
            _finalize(keys, fields, pending, parts)
            pending, parts, spaced = None, [], False
            pos = end
            continue

        if kind is TokenKind.EQUAL_SIGN and pending is None:
            name = "".join(parts).strip()
            if not name:
                raise FieldSyntaxError("expected field name before '='", line)
            if name[0] in "{\"":
                raise FieldSyntaxError(f"invalid field name {name!r}", line)
            pending, parts, spaced = name, [], False
            pos = end
            continue

        if kind is TokenKind.HASH:
            parts.append(CONCAT_MARKER)
            spaced = False
            pos = end
            continue

        if kind is TokenKind.OPEN_CURLY:
            text, end = extract_span(body, pos, "{", "}", line)
            piece = "{" + text + "}"
        elif kind is TokenKind.DOUBLE_QUOTE:
            text, end = extract_span(body, pos, '"', '"', line)
            piece = '"' + text + '"'
        else:
            piece = token.text

        if spaced and not parts[-1].endswith(" "):
            parts.append(" ")
        parts.append(piece)
        spaced = False
        line += piece.count("\n")
        pos = end

    if parts or pending is not None:
        _finalize(keys, fields, pending, parts)

    return keys, fields
