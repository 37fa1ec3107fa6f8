"""Type definitions for bibsift data structures."""

from typing import Literal, TypedDict

# Type aliases for common data structures
OutputFormat = Literal["bibtex", "json"]
TypeNameList = list[str]


class FilterSettings(TypedDict, total=False):
    """Structure of a filter configuration file."""

    include: TypeNameList
    exclude: TypeNameList
    format: OutputFormat
