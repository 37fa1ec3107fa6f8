"""Tests for balanced span extraction."""

import pytest

from bibsift.exceptions import SpanError, UnterminatedSpanError
from bibsift.spans import extract_span


def test_extract_nested_braces():
    """Nested braces are kept inside the outermost span."""
    text, end = extract_span("{a {b} c} rest", 0, "{", "}", 1)

    assert text == "a {b} c"
    assert end == 9


def test_extract_skips_leading_whitespace():
    """Whitespace before the opening mark is skipped."""
    assert extract_span("  {x}", 0, "{", "}", 1) == ("x", 5)


def test_extract_quoted_span_ignores_quotes_inside_braces():
    """A double quote inside a brace group does not close a quoted span."""
    text, end = extract_span('"a {"} b" x', 0, '"', '"', 1)

    assert text == 'a {"} b'
    assert end == 9


def test_extract_empty_span():
    """Adjacent delimiters give an empty span."""
    assert extract_span("{}", 0, "{", "}", 1) == ("", 2)
    assert extract_span('""', 0, '"', '"', 1) == ("", 2)


def test_unterminated_brace_reports_line_and_delimiter():
    """Running out of input inside a brace span fails with the start line."""
    with pytest.raises(UnterminatedSpanError) as excinfo:
        extract_span("{never {closed}", 0, "{", "}", 3)

    assert excinfo.value.line == 3
    assert excinfo.value.expected == "}"
    assert str(excinfo.value).startswith("line 3:")


def test_unterminated_quote():
    """Running out of input inside a quoted span fails too."""
    with pytest.raises(UnterminatedSpanError) as excinfo:
        extract_span('"abc', 0, '"', '"', 1)

    assert excinfo.value.expected == '"'


def test_line_counts_skipped_newlines():
    """The reported line accounts for newlines skipped before the span."""
    with pytest.raises(UnterminatedSpanError) as excinfo:
        extract_span("\n\n{", 0, "{", "}", 1)

    assert excinfo.value.line == 3


def test_missing_opening_mark():
    """A span must start with the opening mark."""
    with pytest.raises(SpanError):
        extract_span("x{}", 0, "{", "}", 1)


def test_deep_nesting_does_not_recurse():
    """Very deep nesting is handled without exhausting the call stack."""
    depth = 5000
    text, end = extract_span("{" * depth + "}" * depth, 0, "{", "}", 1)

    assert text == "{" * (depth - 1) + "}" * (depth - 1)
    assert end == 2 * depth
