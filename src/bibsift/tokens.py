"""Token classification for BibTeX input.

Scanning happens in two layers. ``scan_primitive`` classifies a single
character as a letter, numeral, space or punctuation mark. ``reclassify``
turns that primitive into a token the entry grammar understands: letter and
numeral runs collapse into one alphanumeric token, whitespace runs collapse
into one space token, and the structural marks get their own kinds.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum
from typing import NamedTuple


class TokenKind(Enum):
    """Kinds of tokens produced by the scanner."""

    # primitive kinds
    LETTER = "Letter"
    NUMERAL = "Numeral"
    SPACE = "Space"
    PUNCTUATION = "Punctuation"

    # reclassified kinds
    ALPHANUMERIC = "AlphaNumeric"
    AT_SIGN = "AtSign"
    OPEN_CURLY = "OpenCurlyBracket"
    CLOSE_CURLY = "CloseCurlyBracket"
    EQUAL_SIGN = "EqualSign"
    DOUBLE_QUOTE = "DoubleQuote"
    SINGLE_QUOTE = "SingleQuote"
    COMMA = "Comma"
    HASH = "Hash"


class Token(NamedTuple):
    """A scanned token and the text it covers."""

    kind: TokenKind
    text: str


# Single characters with a meaning in the entry grammar
MARKS: dict[str, TokenKind] = {
    "@": TokenKind.AT_SIGN,
    "{": TokenKind.OPEN_CURLY,
    "}": TokenKind.CLOSE_CURLY,
    "=": TokenKind.EQUAL_SIGN,
    '"': TokenKind.DOUBLE_QUOTE,
    "'": TokenKind.SINGLE_QUOTE,
    ",": TokenKind.COMMA,
    "#": TokenKind.HASH,
}

_WORD_KINDS = (TokenKind.LETTER, TokenKind.NUMERAL)


def _classify(char: str) -> TokenKind:
    if char.isalpha():
        return TokenKind.LETTER
    if char.isdigit():
        return TokenKind.NUMERAL
    if char.isspace():
        return TokenKind.SPACE
    return TokenKind.PUNCTUATION


def scan_primitive(buf: str, pos: int) -> tuple[Token, int]:
    """Scan the single character at ``pos``.

    Args:
        buf: Input text
        pos: Offset of the character to scan, must be inside ``buf``

    Returns:
        The primitive token and the offset just after it
    """
    char = buf[pos]
    return Token(_classify(char), char), pos + 1


def reclassify(token: Token, buf: str, pos: int) -> tuple[Token, int]:
    """Turn a primitive token into a grammar token.

    Letters and numerals absorb any following letters and numerals, spaces
    absorb following whitespace. Punctuation is never merged; the structural
    marks become their own kinds and anything else stays punctuation.

    Args:
        token: Primitive token returned by :func:`scan_primitive`
        buf: Input text the token was scanned from
        pos: Offset just after ``token``

    Returns:
        The (possibly merged) token and the offset just after it
    """
    if token.kind in _WORD_KINDS:
        end = pos
        while end < len(buf) and _classify(buf[end]) in _WORD_KINDS:
            end += 1
        return Token(TokenKind.ALPHANUMERIC, token.text + buf[pos:end]), end

    if token.kind is TokenKind.SPACE:
        end = pos
        while end < len(buf) and buf[end].isspace():
            end += 1
        return Token(TokenKind.SPACE, token.text + buf[pos:end]), end

    if token.kind is TokenKind.PUNCTUATION and token.text in MARKS:
        return Token(MARKS[token.text], token.text), pos

    return token, pos


def next_token(buf: str, pos: int) -> tuple[Token, int]:
    """Scan and reclassify the token starting at ``pos``."""
    token, pos = scan_primitive(buf, pos)
    return reclassify(token, buf, pos)


def tokenize(buf: str) -> Iterator[Token]:
    """Yield every grammar token in ``buf``."""
    pos = 0
    while pos < len(buf):
        token, pos = next_token(buf, pos)
        yield token
