"""Balanced delimiter extraction."""

from __future__ import annotations

from .exceptions import SpanError, UnterminatedSpanError


def extract_span(
    buf: str, pos: int, open_mark: str, close_mark: str, line: int
) -> tuple[str, int]:
    """Extract the text between ``open_mark`` and its matching ``close_mark``.

    Whitespace before the opening mark is skipped. Nesting is tracked with a
    depth counter. When both marks are the same character (a double quote),
    the span ends at the first closing mark found outside any brace group, so
    ``"a {"} b"`` is a single span.

    Args:
        buf: Input text
        pos: Offset at or before the opening mark
        open_mark: Opening delimiter
        close_mark: Closing delimiter
        line: Line number of ``pos``, used in error messages

    Returns:
        The text strictly between the delimiters and the offset just after
        the closing mark

    Raises:
        SpanError: If the next non-space character is not ``open_mark``
        UnterminatedSpanError: If the input ends before the span closes
    """
    while pos < len(buf) and buf[pos].isspace():
        if buf[pos] == "\n":
            line += 1
        pos += 1

    if buf[pos : pos + 1] != open_mark:
        raise SpanError(f"expected {open_mark!r}", line)

    start = pos + 1
    depth = 0
    symmetric = open_mark == close_mark

    for index in range(start, len(buf)):
        char = buf[index]
        if symmetric:
            if char == close_mark and depth == 0:
                return buf[start:index], index + 1
            if char == "{":
                depth += 1
            elif char == "}" and depth > 0:
                depth -= 1
        elif char == open_mark:
            depth += 1
        elif char == close_mark:
            if depth == 0:
                return buf[start:index], index + 1
            depth -= 1

    raise UnterminatedSpanError(line, close_mark)
