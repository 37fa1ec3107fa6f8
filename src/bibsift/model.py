"""Data model for parsed BibTeX entries."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class Entry:
    """A single BibTeX entry.

    Attributes:
        type_name: Entry type as written after ``@`` (e.g. ``article``)
        keys: Bare keys in source order; the first one is conventionally
            the citation key
        fields: Field names mapped to their values. Values keep their
            original delimiters (``{...}``, ``"..."``) and concatenation
            markers. Iteration order is the order names were first seen.
        line: Line number of the entry's ``@`` in the source, 0 if unknown
    """

    type_name: str
    keys: tuple[str, ...] = ()
    fields: Mapping[str, str] = field(default_factory=dict)
    line: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        if not self.type_name:
            raise ValueError("Entry type name must not be empty")
        object.__setattr__(self, "keys", tuple(self.keys))
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @classmethod
    def create(
        cls, type_name: str, keys: Iterable[str] = (), line: int = 0, **fields: str
    ) -> Entry:
        """Build an entry from keyword fields."""
        return cls(type_name, tuple(keys), fields, line)

    @property
    def citation_key(self) -> str | None:
        """First bare key, or ``None`` for an entry without keys."""
        return self.keys[0] if self.keys else None

    @property
    def kind(self) -> str:
        """Lower-cased type name, used for schema lookups."""
        return self.type_name.lower()

    def get(self, name: str, default: str | None = None) -> str | None:
        """Look up a field value ignoring the case of the field name."""
        if name in self.fields:
            return self.fields[name]
        wanted = name.lower()
        for field_name, value in self.fields.items():
            if field_name.lower() == wanted:
                return value
        return default

    def __hash__(self) -> int:
        return hash((self.type_name, self.keys, tuple(self.fields.items())))

    def __str__(self) -> str:
        from .serialize import format_entry

        return format_entry(self)


# A document is the ordered list of entries found in one input
Document = list[Entry]
