"""Document scanner: turns BibTeX text into a list of entries."""

from __future__ import annotations

import logging
from pathlib import Path

from .exceptions import FileOperationError, MalformedHeaderError, NoEntriesError, ParseError
from .fields import parse_entry_body
from .model import Document, Entry
from .spans import extract_span
from .tokens import Token, TokenKind, next_token

logger = logging.getLogger(__name__)


class _Scanner:
    """Cursor over the input that keeps track of the current line."""

    def __init__(self, data: str) -> None:
        self.data = data
        self.pos = 0
        self.line = 1

    @property
    def eof(self) -> bool:
        return self.pos >= len(self.data)

    def take(self) -> Token:
        """Consume the next token."""
        token, self.pos = next_token(self.data, self.pos)
        self.line += token.text.count("\n")
        return token

    def peek(self) -> Token | None:
        """Return the next token without consuming it."""
        if self.eof:
            return None
        return next_token(self.data, self.pos)[0]

    def skip_space(self) -> None:
        while not self.eof and self.data[self.pos].isspace():
            self.take()

    def advance_to_at_sign(self) -> bool:
        """Skip to just after the next ``@``, returning False at end of input."""
        while not self.eof:
            if self.take().kind is TokenKind.AT_SIGN:
                return True
        return False

    def header(self) -> str:
        """Read ``<type>{`` after an ``@`` and return the type name.

        Nothing past the offending token is consumed when the header is
        malformed, so a following ``@`` is still found by the next search.
        """
        at_line = self.line
        self.skip_space()
        token = self.peek()
        if token is None or token.kind is not TokenKind.ALPHANUMERIC:
            raise MalformedHeaderError("expected entry type after '@'", at_line)
        type_name = self.take().text
        self.skip_space()
        token = self.peek()
        if token is None or token.kind is not TokenKind.OPEN_CURLY:
            raise MalformedHeaderError("expected '{' after entry type", self.line)
        return type_name


def _decode(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        line = raw.count(b"\n", 0, e.start) + 1
        raise ParseError(f"input is not valid UTF-8 (byte {e.start})", line) from e


def parse(data: str | bytes) -> Document:
    """Parse BibTeX text into a list of entries.

    Text outside ``@type{...}`` headers, such as comments, is ignored. A
    header that is not followed by a type name and an open brace is skipped
    and scanning resumes from there.

    Args:
        data: BibTeX source; bytes are decoded as UTF-8

    Returns:
        Entries in source order. Empty or whitespace-only input gives an
        empty list.

    Raises:
        UnterminatedSpanError: If an entry body or value never closes
        FieldSyntaxError: If an entry body contains an unusable field
        NoEntriesError: If non-empty input contains no entry
        ParseError: If bytes input is not valid UTF-8
    """
    if isinstance(data, bytes):
        data = _decode(data)

    scanner = _Scanner(data)
    entries: Document = []

    while scanner.advance_to_at_sign():
        at_line = scanner.line
        try:
            type_name = scanner.header()
        except MalformedHeaderError as e:
            logger.debug("Skipping malformed header: %s", e)
            continue

        body_line = scanner.line
        body, scanner.pos = extract_span(data, scanner.pos, "{", "}", body_line)
        scanner.line += body.count("\n")

        keys, fields = parse_entry_body(body, body_line)
        entries.append(Entry(type_name, tuple(keys), fields, at_line))

    if not entries and data.strip():
        raise NoEntriesError("no BibTeX entries found", scanner.line)

    logger.debug("Parsed %d entries", len(entries))
    return entries


def parse_file(path: Path) -> Document:
    """Parse a BibTeX file.

    Args:
        path: Path to the .bib file

    Returns:
        Entries in file order

    Raises:
        FileOperationError: If the file cannot be read
        ParseError: If the contents cannot be parsed
    """
    logger.debug("Parsing .bib file: %s", path)

    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise FileOperationError(f"Failed to read {path}: {e}") from e

    entries = parse(data)
    logger.info("Found %d entries in %s", len(entries), Path(path).name)
    return entries
