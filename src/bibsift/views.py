"""Typed views over parsed entries.

Entries store their fields in a plain mapping. For callers that prefer
attribute access, :func:`view` converts an entry into the struct for its
type, checking the required fields on the way. Views are read-only
snapshots; field values keep their original delimiters.
"""

from __future__ import annotations

import msgspec

from .exceptions import ViewError
from .model import Entry


class EntryView(msgspec.Struct, kw_only=True, frozen=True):
    """Common base of all typed views."""

    citation_key: str | None = None
    key: str | None = None
    note: str | None = None
    month: str | None = None


def _require_one_of(view: EntryView, *names: str) -> None:
    if all(getattr(view, name) is None for name in names):
        raise ValueError(f"Expected one of {'/'.join(names)}")


class Article(EntryView, kw_only=True):
    author: str
    title: str
    journal: str
    year: str
    volume: str
    number: str | None = None
    pages: str | None = None


class Book(EntryView, kw_only=True):
    author: str | None = None
    editor: str | None = None
    title: str
    publisher: str
    year: str
    volume: str | None = None
    number: str | None = None
    series: str | None = None
    address: str | None = None
    edition: str | None = None

    def __post_init__(self) -> None:
        _require_one_of(self, "author", "editor")


class Booklet(EntryView, kw_only=True):
    title: str
    author: str | None = None
    howpublished: str | None = None
    address: str | None = None
    year: str | None = None


class InBook(EntryView, kw_only=True):
    author: str | None = None
    editor: str | None = None
    title: str
    chapter: str | None = None
    pages: str | None = None
    publisher: str
    year: str
    volume: str | None = None
    number: str | None = None
    series: str | None = None
    type: str | None = None
    address: str | None = None
    edition: str | None = None

    def __post_init__(self) -> None:
        _require_one_of(self, "author", "editor")
        _require_one_of(self, "chapter", "pages")


class InCollection(EntryView, kw_only=True):
    author: str
    title: str
    booktitle: str
    publisher: str
    year: str
    editor: str | None = None
    volume: str | None = None
    number: str | None = None
    series: str | None = None
    type: str | None = None
    chapter: str | None = None
    pages: str | None = None
    address: str | None = None
    edition: str | None = None


class _ProceedingsPaper(EntryView, kw_only=True):
    author: str
    title: str
    booktitle: str
    year: str
    editor: str | None = None
    volume: str | None = None
    number: str | None = None
    series: str | None = None
    pages: str | None = None
    address: str | None = None
    organization: str | None = None
    publisher: str | None = None


class InProceedings(_ProceedingsPaper, kw_only=True):
    pass


class Conference(_ProceedingsPaper, kw_only=True):
    pass


class Manual(EntryView, kw_only=True):
    title: str
    author: str | None = None
    organization: str | None = None
    address: str | None = None
    edition: str | None = None
    year: str | None = None


class _Thesis(EntryView, kw_only=True):
    author: str
    title: str
    school: str
    year: str
    type: str | None = None
    address: str | None = None


class MastersThesis(_Thesis, kw_only=True):
    pass


class Misc(EntryView, kw_only=True):
    author: str | None = None
    title: str | None = None
    howpublished: str | None = None
    year: str | None = None


class PhdThesis(_Thesis, kw_only=True):
    pass


class Proceedings(EntryView, kw_only=True):
    title: str
    year: str
    editor: str | None = None
    volume: str | None = None
    number: str | None = None
    series: str | None = None
    address: str | None = None
    publisher: str | None = None
    organization: str | None = None


class TechReport(EntryView, kw_only=True):
    author: str
    title: str
    institution: str
    year: str
    type: str | None = None
    number: str | None = None
    address: str | None = None


class Unpublished(EntryView, kw_only=True):
    author: str
    title: str
    note: str
    year: str | None = None


VIEW_TYPES: dict[str, type[EntryView]] = {
    "article": Article,
    "book": Book,
    "booklet": Booklet,
    "inbook": InBook,
    "incollection": InCollection,
    "inproceedings": InProceedings,
    "conference": Conference,
    "manual": Manual,
    "mastersthesis": MastersThesis,
    "misc": Misc,
    "phdthesis": PhdThesis,
    "proceedings": Proceedings,
    "techreport": TechReport,
    "unpublished": Unpublished,
}


def view(entry: Entry) -> EntryView:
    """Build the typed view for an entry.

    Field names are matched case-insensitively. Fields the view does not
    declare are ignored.

    Args:
        entry: Parsed entry of one of the standard types

    Returns:
        An instance of the view struct registered for the entry's type

    Raises:
        ViewError: If the type has no view or a required field is missing
    """
    view_type = VIEW_TYPES.get(entry.kind)
    if view_type is None:
        raise ViewError(f"No typed view for entry type '{entry.type_name}'")

    data: dict[str, str | None] = {name.lower(): value for name, value in entry.fields.items()}
    data["citation_key"] = entry.citation_key

    try:
        return msgspec.convert(data, type=view_type)
    except (msgspec.ValidationError, ValueError) as e:
        label = entry.citation_key or entry.type_name
        raise ViewError(f"Cannot build {entry.kind} view for '{label}': {e}") from e
