"""Advisory schema of the standard BibTeX entry types.

The parser accepts any entry type and any field. This table only records
which fields each standard type is expected to carry, so that callers can
report incomplete entries or build typed views.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from types import MappingProxyType
from typing import NamedTuple

from .model import Entry

logger = logging.getLogger(__name__)


class RecordKind(NamedTuple):
    """Expected fields of one entry type.

    Attributes:
        name: Lower-case entry type
        required: Fields that must be present
        optional: Fields that may be present
        one_of: Groups of alternatives; at least one field of each group
            must be present
    """

    name: str
    required: frozenset[str]
    optional: frozenset[str]
    one_of: tuple[frozenset[str], ...] = ()

    @property
    def known_fields(self) -> frozenset[str]:
        return self.required | self.optional | frozenset().union(*self.one_of)


def _kind(name: str, required: str, optional: str, *one_of: str) -> tuple[str, RecordKind]:
    return name, RecordKind(
        name,
        frozenset(required.split()),
        frozenset(optional.split()),
        tuple(frozenset(group.split()) for group in one_of),
    )


_INPROCEEDINGS_REQUIRED = "author title booktitle year"
_INPROCEEDINGS_OPTIONAL = (
    "editor volume number series pages address month organization publisher note key"
)

RECORD_KINDS = MappingProxyType(
    dict(
        [
            _kind(
                "article",
                "author title journal year volume",
                "number pages month note key",
            ),
            _kind(
                "book",
                "title publisher year",
                "volume number series address edition month note key",
                "author editor",
            ),
            _kind(
                "booklet",
                "title",
                "author howpublished address month year note key",
            ),
            _kind(
                "inbook",
                "title publisher year",
                "volume number series type address edition month note key",
                "author editor",
                "chapter pages",
            ),
            _kind(
                "incollection",
                "author title booktitle publisher year",
                "editor volume number series type chapter pages address edition month note key",
            ),
            _kind("inproceedings", _INPROCEEDINGS_REQUIRED, _INPROCEEDINGS_OPTIONAL),
            _kind("conference", _INPROCEEDINGS_REQUIRED, _INPROCEEDINGS_OPTIONAL),
            _kind(
                "manual",
                "title",
                "author organization address edition month year note key",
            ),
            _kind(
                "mastersthesis",
                "author title school year",
                "type address month note key",
            ),
            _kind(
                "misc",
                "",
                "author title howpublished month year note key",
            ),
            _kind(
                "phdthesis",
                "author title school year",
                "type address month note key",
            ),
            _kind(
                "proceedings",
                "title year",
                "editor volume number series address month publisher organization note key",
            ),
            _kind(
                "techreport",
                "author title institution year",
                "type number address month note key",
            ),
            _kind(
                "unpublished",
                "author title note",
                "month year key",
            ),
        ]
    )
)

# Entry types kept by default when filtering
DEFAULT_INCLUDE: tuple[str, ...] = tuple(RECORD_KINDS)


def lookup(type_name: str) -> RecordKind | None:
    """Return the schema for an entry type, ignoring case."""
    return RECORD_KINDS.get(type_name.lower())


def check_entry(entry: Entry) -> list[str]:
    """List advisory problems with an entry.

    Args:
        entry: Parsed entry

    Returns:
        Human-readable problems, empty when the entry satisfies its schema.
        Entries of unknown types produce a single problem.
    """
    kind = lookup(entry.type_name)
    if kind is None:
        return [f"unknown entry type '{entry.type_name}'"]

    present = {name.lower() for name in entry.fields}
    problems = [
        f"missing required field '{name}'" for name in sorted(kind.required - present)
    ]
    for group in kind.one_of:
        if not group & present:
            problems.append(f"missing one of {'/'.join(sorted(group))}")
    return problems


def check_document(document: Iterable[Entry]) -> dict[int, list[str]]:
    """Check every entry of a document against the schema.

    Args:
        document: Parsed entries

    Returns:
        Problems keyed by the entry's position in ``document``; entries
        without problems are left out
    """
    report: dict[int, list[str]] = {}
    for index, entry in enumerate(document):
        problems = check_entry(entry)
        if problems:
            label = entry.citation_key or f"#{index}"
            for problem in problems:
                logger.warning(f"{entry.type_name} {label} (line {entry.line}): {problem}")
            report[index] = problems

    if not report:
        logger.info("✓ All entries match their advisory schema")
    return report
