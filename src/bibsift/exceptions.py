"""Custom exception types for bibsift operations."""


class BibsiftError(Exception):
    """Base exception for all bibsift operations."""


class ParseError(BibsiftError, ValueError):
    """Raised when BibTeX input cannot be parsed.

    Args:
        message: Description of the problem
        line: 1-based line number where the problem starts
    """

    def __init__(self, message: str, line: int) -> None:
        super().__init__(f"line {line}: {message}")
        self.line = line


class UnterminatedSpanError(ParseError):
    """Raised when a brace or quote span never closes."""

    def __init__(self, line: int, expected: str) -> None:
        super().__init__(f"unterminated span, expected {expected!r}", line)
        self.expected = expected


class SpanError(ParseError):
    """Raised when a span is requested where no opening mark is found."""


class FieldSyntaxError(ParseError):
    """Raised when an entry body contains an unusable field."""


class MalformedHeaderError(ParseError):
    """Raised when an @ mark is not followed by a type name and an open brace."""


class NoEntriesError(ParseError):
    """Raised when non-empty input contains no BibTeX entry."""


class FileOperationError(BibsiftError):
    """Raised when file I/O operations fail."""


class InvalidDataError(BibsiftError):
    """Raised when data validation fails."""


class ViewError(InvalidDataError):
    """Raised when a typed view cannot be built from an entry."""
