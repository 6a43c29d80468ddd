"""
Data models for the compound tree.

A ``Compound`` is one documentable container (namespace, class, group,
page, ...). Compounds own their children through ``compounds`` and their
leaf items through ``members``; the ``parent`` link is a weak reference so
ownership only ever flows from parent to child.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from compound.traversal import collect_by_kind, collect_filtered


@dataclass
class FilteredView:
    """Ordered survivors of the last filter pass over a compound."""

    members: List[Any] = field(default_factory=list)
    compounds: List["Compound"] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.members and not self.compounds


@dataclass
class BaseCompoundRef:
    """A base type reference of a class-like compound."""

    name: str
    prot: str = "public"
    refid: Optional[str] = None


@dataclass
class EnumValue:
    """A single enumerator of an enum member."""

    name: str
    briefdescription: str = ""
    detaileddescription: str = ""
    summary: str = ""


@dataclass
class Member:
    """A documentable leaf item attached to a compound.

    Attributes:
        refid: Doxygen identifier of the member.
        name: Unqualified member name.
        kind: Doxygen member kind (function, variable, enum, define, ...).
        section: Category the member was declared in (public-func, enum, ...).
        compound_refid: Identifier of the compound that declares the member.
        groupid: Identifier of the group the member was declared under.
        groupname: Name of that group.
        prot: Protection level (public, protected, private).
        static: Whether the member is static.
        briefdescription: Brief description as Markdown.
        detaileddescription: Detailed description as Markdown.
        summary: First sentence of the description.
        proto: One-line Markdown prototype.
        enumvalue: Enumerators, for enum members.
    """

    refid: str
    name: str
    kind: str = ""
    section: Optional[str] = None
    compound_refid: Optional[str] = None
    groupid: Optional[str] = None
    groupname: Optional[str] = None
    prot: str = ""
    static: bool = False
    briefdescription: str = ""
    detaileddescription: str = ""
    summary: str = ""
    proto: str = ""
    enumvalue: List[EnumValue] = field(default_factory=list)


class Compound:
    """A node in the documentation tree."""

    def __init__(self, parent: Optional[Compound], id: str, name: str = "") -> None:
        self._parent_ref: Optional[weakref.ReferenceType[Compound]] = None
        self.parent = parent
        self.id = id
        self.name = name
        self.kind = ""
        self.refid: Optional[str] = None
        self.groupid: Optional[str] = None
        self.groupname: Optional[str] = None
        self.compounds: Dict[str, Compound] = {}
        self.members: List[Member] = []
        self.basecompoundref: List[BaseCompoundRef] = []
        self.filtered: Optional[FilteredView] = None

        # Descriptive attributes filled in by the XML reader
        self.fullname = name
        self.language = ""
        self.namespace = ""
        self.title = ""
        self.briefdescription = ""
        self.detaileddescription = ""
        self.summary = ""
        self.proto = ""
        self.innernamespaces: List[str] = []

    @property
    def parent(self) -> Optional[Compound]:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @parent.setter
    def parent(self, value: Optional[Compound]) -> None:
        self._parent_ref = weakref.ref(value) if value is not None else None

    def __repr__(self) -> str:
        return f"Compound(kind={self.kind!r}, id={self.id!r}, name={self.name!r})"

    def find(self, id: str, name: str = "", create: bool = False) -> Optional[Compound]:
        """Look up a direct child by id, optionally creating it.

        Args:
            id: Child identifier.
            name: Name given to the child when it is created.
            create: Insert a new child when none exists.

        Returns:
            The child compound, or None when missing and ``create`` is False.
        """
        compound = self.compounds.get(id)
        if compound is None and create:
            compound = Compound(self, id, name)
            self.compounds[id] = compound
        return compound

    def adopt(self, child: Compound) -> None:
        """Move ``child`` under this compound, detaching it from its old parent."""
        previous = child.parent
        if previous is not None and previous is not self:
            previous.compounds.pop(child.id, None)
        self.compounds[child.id] = child
        child.parent = self

    def ancestors(self) -> Iterator[Compound]:
        """Yield the parent chain, nearest first."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def collect_by_kind(self, container: str = "compounds", kind: Optional[str] = None) -> List[Any]:
        return collect_by_kind(self, container, kind)

    def collect_filtered(self, container: str = "compounds") -> List[Any]:
        return collect_filtered(self, container)

    def filter_children(self, filters: Any, groupid: Optional[str] = None) -> None:
        from compound.filtering import filter_children

        filter_children(self, filters, groupid)

    def filter(
        self,
        collection: Any,
        key: str,
        category_order: List[str],
        groupid: Optional[str] = None,
    ) -> List[Any]:
        from compound.filtering import filter_collection

        return filter_collection(collection, key, category_order, groupid)
