"""
Compound tree: model, traversal queries and filter engine.

The in-memory documentation hierarchy built from a Doxygen export, plus the
rules that decide which members and child compounds survive into the
rendered output and in which order.
"""

from compound.config import (
    DEFAULT_COMPOUND_KINDS,
    DEFAULT_MEMBER_SECTIONS,
    Filters,
)
from compound.models import (
    BaseCompoundRef,
    Compound,
    EnumValue,
    FilteredView,
    Member,
)
from compound.traversal import collect_by_kind, collect_filtered
from compound.filtering import filter_children, filter_collection

__all__ = [
    # Configuration
    "DEFAULT_COMPOUND_KINDS",
    "DEFAULT_MEMBER_SECTIONS",
    "Filters",
    # Data models
    "BaseCompoundRef",
    "Compound",
    "EnumValue",
    "FilteredView",
    "Member",
    # Queries
    "collect_by_kind",
    "collect_filtered",
    # Filtering
    "filter_children",
    "filter_collection",
]
