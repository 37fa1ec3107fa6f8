"""BibTeX parsing, filtering and merging tools package."""

import logging

from .exceptions import BibsiftError, NoEntriesError, ParseError, UnterminatedSpanError
from .model import Document, Entry
from .parser import parse, parse_file
from .serialize import format_entry, write_file, write_string

__version__ = "0.1.0"

__all__ = [
    "BibsiftError",
    "Document",
    "Entry",
    "NoEntriesError",
    "ParseError",
    "UnterminatedSpanError",
    "format_entry",
    "parse",
    "parse_file",
    "write_file",
    "write_string",
]

# Install a NullHandler to avoid emitting logs unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())
