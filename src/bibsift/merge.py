"""Set operations over two parsed documents.

Entries are matched by :func:`entry_identity`: the citation key when the
entry has one, otherwise its type and field contents. Results list entries
from the first document before entries from the second, and never contain
two entries with the same identity.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable

from .model import Document, Entry

logger = logging.getLogger(__name__)


def entry_identity(entry: Entry) -> Hashable:
    """Return the value used to match entries across documents."""
    if entry.citation_key is not None:
        return entry.citation_key
    return (entry.kind, tuple(entry.fields.items()))


def _unique(entries: Iterable[Entry]) -> Document:
    seen: set[Hashable] = set()
    result: Document = []
    for entry in entries:
        identity = entry_identity(entry)
        if identity in seen:
            logger.debug(f"Dropping duplicate entry '{identity}'")
            continue
        seen.add(identity)
        result.append(entry)
    return result


def _identities(document: Iterable[Entry]) -> set[Hashable]:
    return {entry_identity(entry) for entry in document}


def join(a: Document, b: Document) -> Document:
    """Entries found in either document."""
    return _unique([*a, *b])


def diff(a: Document, b: Document) -> Document:
    """Entries of ``a`` that are not in ``b``."""
    b_keys = _identities(b)
    return _unique(entry for entry in a if entry_identity(entry) not in b_keys)


def intersect(a: Document, b: Document) -> Document:
    """Entries of ``a`` that are also in ``b``."""
    b_keys = _identities(b)
    return _unique(entry for entry in a if entry_identity(entry) in b_keys)


def exclusive(a: Document, b: Document) -> Document:
    """Entries found in exactly one of the documents."""
    return [*diff(a, b), *diff(b, a)]


OPERATIONS = {
    "join": join,
    "diff": diff,
    "intersect": intersect,
    "exclusive": exclusive,
}
