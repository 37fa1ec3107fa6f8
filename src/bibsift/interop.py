"""Conversion to bibtexparser's object model."""

from __future__ import annotations

from collections.abc import Iterable

import bibtexparser
from bibtexparser.model import Entry as BibtexparserEntry
from bibtexparser.model import Field

from .model import Entry


def to_bibtexparser_entry(entry: Entry) -> BibtexparserEntry:
    """Convert one entry; values are passed on with their delimiters."""
    fields = [Field(name, value) for name, value in entry.fields.items()]
    return BibtexparserEntry(entry.type_name, entry.citation_key or "", fields)


def to_library(document: Iterable[Entry]) -> bibtexparser.Library:
    """Build a :class:`bibtexparser.Library` holding every entry of a document.

    Only the citation key is carried over; further bare keys have no place
    in bibtexparser's model and are dropped.
    """
    return bibtexparser.Library([to_bibtexparser_entry(entry) for entry in document])
