"""Selecting entries by type name."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .model import Document, Entry

logger = logging.getLogger(__name__)


def _normalize(names: Iterable[str] | None) -> frozenset[str] | None:
    if names is None:
        return None
    return frozenset(name.strip().lower() for name in names if name.strip())


def filter_entries(
    document: Iterable[Entry],
    include: Iterable[str] | None = None,
    exclude: Iterable[str] | None = None,
) -> Document:
    """Keep entries whose type is included and not excluded.

    Type names are compared case-insensitively.

    Args:
        document: Parsed entries
        include: Types to keep; ``None`` keeps every type
        exclude: Types to drop, applied after ``include``

    Returns:
        Matching entries in their original order
    """
    wanted = _normalize(include)
    unwanted = _normalize(exclude) or frozenset()

    selected: Document = []
    for entry in document:
        if wanted is not None and entry.kind not in wanted:
            continue
        if entry.kind in unwanted:
            continue
        selected.append(entry)

    logger.debug("Selected %d entries", len(selected))
    return selected
