"""
Configuration constants for the compound tree.

Defines the Doxygen kind strings the tree understands and the default
category orders used when filtering members and child compounds.
"""

from dataclasses import dataclass, field
from typing import List, Set

# Synthetic root of the tree (index.xml)
INDEX_KIND: str = "index"

NAMESPACE_KIND: str = "namespace"
GROUP_KIND: str = "group"
PAGE_KIND: str = "page"
FILE_KIND: str = "file"

# Compound kinds that own a qualified namespace prefix
SCOPED_KINDS: Set[str] = {
    "class",
    "struct",
    "union",
    "typedef",
}

# Member sections in output order. Anything not listed is dropped.
DEFAULT_MEMBER_SECTIONS: List[str] = [
    "define",
    "enum",
    # "enumvalue",
    "func",
    # "variable",
    "property",
    "public-attrib",
    "public-func",
    "protected-attrib",
    "protected-func",
    "signal",
    "public-slot",
    "protected-slot",
    "public-type",
    "private-attrib",
    "private-func",
    "private-slot",
    "public-static-func",
    "private-static-func",
]

# Child compound kinds in output order. Anything not listed is dropped.
DEFAULT_COMPOUND_KINDS: List[str] = [
    "namespace",
    "class",
    "struct",
    "union",
    "typedef",
    "interface",
    # "file",
]


@dataclass
class Filters:
    """Category orders applied by the filter engine.

    Attributes:
        members: Member sections to keep, in output order.
        compounds: Child compound kinds to keep, in output order.
    """

    members: List[str] = field(default_factory=lambda: list(DEFAULT_MEMBER_SECTIONS))
    compounds: List[str] = field(default_factory=lambda: list(DEFAULT_COMPOUND_KINDS))
