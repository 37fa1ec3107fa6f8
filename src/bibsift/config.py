"""Filter configuration for bibsift commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import msgspec

from .exceptions import FileOperationError, InvalidDataError
from .schema import DEFAULT_INCLUDE
from .types import FilterSettings, OutputFormat, TypeNameList

logger = logging.getLogger(__name__)


def split_names(value: str | None) -> TypeNameList | None:
    """Split a comma separated list of type names, ``None`` if not given."""
    if value is None:
        return None
    return [name.strip() for name in value.split(",") if name.strip()]


def default_include() -> TypeNameList:
    """Standard entry types, kept when no include list is configured."""
    return list(DEFAULT_INCLUDE)


@dataclass
class FilterConfig:
    """Which entry types to keep and how to write them.

    When no include list is given only the standard entry types are kept,
    so @string, @preamble and @comment blocks are dropped unless named.
    ``include=None`` keeps every type.
    """

    include: TypeNameList | None = field(default_factory=default_include)
    exclude: TypeNameList | None = None
    output_format: OutputFormat = "bibtex"

    @classmethod
    def from_strings(
        cls,
        include: str | None = None,
        exclude: str | None = None,
        output_format: OutputFormat = "bibtex",
    ) -> FilterConfig:
        """Create configuration from comma separated type lists.

        Args:
            include: Types to keep, e.g. ``"article,book"``; ``None`` keeps
                the standard types
            exclude: Types to drop
            output_format: ``"bibtex"`` or ``"json"``

        Returns:
            FilterConfig with the parsed lists
        """
        names = split_names(include)
        return cls(
            names if names is not None else default_include(),
            split_names(exclude),
            output_format,
        )

    @classmethod
    def from_file(cls, path: Path) -> FilterConfig:
        """Load configuration from a JSON file.

        The file holds an object with optional ``include`` and ``exclude``
        arrays and an optional ``format`` string. A missing ``include``
        keeps the standard types.

        Args:
            path: Path to the JSON configuration file

        Returns:
            FilterConfig with the file's settings

        Raises:
            FileOperationError: If the file cannot be read
            InvalidDataError: If the file is not valid configuration JSON
        """
        logger.debug(f"Reading filter configuration: {path}")

        try:
            raw = Path(path).read_bytes()
        except OSError as e:
            raise FileOperationError(f"Failed to read {path}: {e}") from e

        try:
            settings = msgspec.json.decode(raw, type=FilterSettings)
        except (msgspec.DecodeError, msgspec.ValidationError) as e:
            raise InvalidDataError(f"Invalid filter configuration in {path}: {e}") from e

        return cls(
            include=settings.get("include", default_include()),
            exclude=settings.get("exclude"),
            output_format=settings.get("format", "bibtex"),
        )

    def override(
        self,
        include: str | None = None,
        exclude: str | None = None,
        output_format: OutputFormat | None = None,
    ) -> FilterConfig:
        """Return a copy with any given command line values taking precedence."""
        return FilterConfig(
            include=split_names(include) if include is not None else self.include,
            exclude=split_names(exclude) if exclude is not None else self.exclude,
            output_format=output_format or self.output_format,
        )
