"""
Doxygen XML reader.

Builds the raw compound tree (namespaces, classes, groups, pages and their
members) from a Doxygen XML output directory, converting descriptions to
Markdown along the way.
"""

from parsing.doxygen_xml import DoxygenIndexParser, DoxygenParseError, load_index
from parsing.description import REF_PLACEHOLDER, ref_link, summarize, to_markdown
from parsing.prototypes import build_compound_proto, build_member_proto

__all__ = [
    # Tree construction
    "DoxygenIndexParser",
    "DoxygenParseError",
    "load_index",
    # Descriptions
    "REF_PLACEHOLDER",
    "ref_link",
    "summarize",
    "to_markdown",
    # Prototypes
    "build_compound_proto",
    "build_member_proto",
]
