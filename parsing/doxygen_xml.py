"""
Doxygen XML reader.

Builds the raw compound tree from a Doxygen XML output directory:
``index.xml`` lists every compound and member, and each compound has its
own ``<refid>.xml`` file with descriptions, sections and inner compounds.
"""

import logging
import os
from typing import Dict, Union

from lxml import etree

from compound.config import FILE_KIND, GROUP_KIND, INDEX_KIND, NAMESPACE_KIND, SCOPED_KINDS
from compound.models import BaseCompoundRef, Compound, Member
from parsing.description import summarize, to_markdown
from parsing.prototypes import build_compound_proto, build_enum_values, build_member_proto

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.xml"

# Owners that only list members declared elsewhere
_LISTING_KINDS = {FILE_KIND, GROUP_KIND, "dir"}

Reference = Union[Compound, Member]


class DoxygenParseError(RuntimeError):
    """Raised when the Doxygen index cannot be read."""


class DoxygenIndexParser:
    """Reads a Doxygen XML directory into a compound tree.

    Attributes:
        directory: Directory holding ``index.xml`` and the compound files.
        root: Synthetic root compound of kind ``index``.
        references: Every compound and member by Doxygen id.
    """

    def __init__(self, directory: str):
        self.directory = directory
        self.root = Compound(None, INDEX_KIND, INDEX_KIND)
        self.root.kind = INDEX_KIND
        self.references: Dict[str, Reference] = {}
        self.files_parsed = 0
        self.files_failed = 0

    def _read_xml(self, filename: str) -> etree._Element:
        path = os.path.join(self.directory, filename)
        logger.debug("Parsing %s", path)
        return etree.parse(path).getroot()

    def load_index(self) -> Compound:
        """Parse ``index.xml`` and every compound file it lists.

        Returns:
            The root compound.

        Raises:
            DoxygenParseError: If the index is missing or malformed.
        """
        try:
            index = self._read_xml(INDEX_FILENAME)
        except (OSError, etree.XMLSyntaxError) as exc:
            raise DoxygenParseError(
                f"Failed to load doxygen index from {self.directory}: {exc}"
            ) from exc

        # register everything first so inner compounds resolve in any order
        entries = []
        for element in index.findall("compound"):
            entries.append(self._register_index_entry(element))

        for compound in entries:
            self._parse_compound_file(compound)

        for compound in entries:
            if compound.kind == GROUP_KIND:
                self._drop_listings_inside_namespaces(compound)

        logger.info(
            "Loaded %d compounds, %d references (%d files parsed, %d failed)",
            len(entries),
            len(self.references),
            self.files_parsed,
            self.files_failed,
        )
        return self.root

    def _register_index_entry(self, element: etree._Element) -> Compound:
        refid = element.get("refid", "")
        name = (element.findtext("name") or "").strip()
        compound = self.root.find(refid, name, create=True)
        compound.kind = element.get("kind", "")
        compound.refid = refid
        self.references[refid] = compound

        for member_element in element.findall("member"):
            member_refid = member_element.get("refid", "")
            member = self.references.get(member_refid)
            if not isinstance(member, Member):
                member = Member(
                    refid=member_refid,
                    name=(member_element.findtext("name") or "").strip(),
                    kind=member_element.get("kind", ""),
                )
                self.references[member_refid] = member
            self._claim_member(member, compound)
            compound.members.append(member)
        return compound

    def _claim_member(self, member: Member, compound: Compound) -> None:
        """Record the compound that documents ``member`` (scopes win over listings)."""
        if member.compound_refid is None:
            member.compound_refid = compound.id
            return
        owner = self.references.get(member.compound_refid)
        if isinstance(owner, Compound) and owner.kind in _LISTING_KINDS and compound.kind not in _LISTING_KINDS:
            member.compound_refid = compound.id

    def _is_free_member(self, member: Member) -> bool:
        owner = self.references.get(member.compound_refid or "")
        return isinstance(owner, Compound) and owner.kind in _LISTING_KINDS

    def _parse_compound_file(self, compound: Compound) -> None:
        try:
            document = self._read_xml(f"{compound.refid}.xml")
        except (OSError, etree.XMLSyntaxError) as exc:
            self.files_failed += 1
            logger.warning("Skipping unreadable compound file for %s: %s", compound.refid, exc)
            return

        compounddef = document.find("compounddef")
        if compounddef is None:
            self.files_failed += 1
            logger.warning("No compounddef in %s.xml", compound.refid)
            return

        self.files_parsed += 1
        self.parse_compound(compound, compounddef)

    def parse_compound(self, compound: Compound, compounddef: etree._Element) -> None:
        """Fill ``compound`` from its ``compounddef`` element."""
        logger.debug("Processing compound %s %s", compound.kind, compound.name)
        compound.kind = compounddef.get("kind", compound.kind)
        compound.language = compounddef.get("language", "")
        compound.fullname = (compounddef.findtext("compoundname") or compound.name).strip()
        compound.briefdescription = to_markdown(compounddef.find("briefdescription"))
        compound.detaileddescription = to_markdown(compounddef.find("detaileddescription"))
        compound.summary = summarize(compound.briefdescription, compound.detaileddescription)
        compound.title = (compounddef.findtext("title") or compound.name).strip()

        for base in compounddef.findall("basecompoundref"):
            compound.basecompoundref.append(
                BaseCompoundRef(
                    name=(base.text or "").strip(),
                    prot=base.get("prot", "public"),
                    refid=base.get("refid"),
                )
            )

        for section in compounddef.findall("sectiondef"):
            for memberdef in section.findall("memberdef"):
                self._parse_section_member(compound, section.get("kind", ""), memberdef)

        compound.proto = build_compound_proto(compound)

        if compound.kind in SCOPED_KINDS:
            compound.namespace = "::".join(compound.name.split("::")[:-1])
        elif compound.kind in (NAMESPACE_KIND, GROUP_KIND):
            self._parse_inner_compounds(compound, compounddef)

    def _parse_section_member(self, compound: Compound, section: str, memberdef: etree._Element) -> None:
        refid = memberdef.get("id", "")
        member = self.references.get(refid)
        if not isinstance(member, Member):
            member = Member(
                refid=refid,
                name=(memberdef.findtext("name") or "").strip(),
                kind=memberdef.get("kind", ""),
            )
            self.references[refid] = member
            self._claim_member(member, compound)
            compound.members.append(member)

        if compound.kind == GROUP_KIND:
            member.groupid = compound.id
            member.groupname = compound.name
        elif compound.kind == FILE_KIND and self._is_free_member(member):
            # free members of the global namespace
            if member not in self.root.members:
                self.root.members.append(member)

        # a listing never overrides the declaring scope's section
        if member.section is None or compound.kind not in _LISTING_KINDS:
            self.parse_member(member, section, memberdef)

    def parse_member(self, member: Member, section: str, memberdef: etree._Element) -> None:
        """Fill ``member`` from its ``memberdef`` element."""
        logger.debug("Processing member %s %s", member.kind, member.name)
        member.section = section
        member.kind = memberdef.get("kind", member.kind)
        member.prot = memberdef.get("prot", "")
        member.static = memberdef.get("static") == "yes"
        member.briefdescription = to_markdown(memberdef.find("briefdescription"))
        member.detaileddescription = to_markdown(memberdef.find("detaileddescription"))
        member.summary = summarize(member.briefdescription, member.detaileddescription)
        if member.kind == "enum":
            member.enumvalue = build_enum_values(memberdef)
        member.proto = build_member_proto(member, memberdef)

    def _parse_inner_compounds(self, compound: Compound, compounddef: etree._Element) -> None:
        if compound.kind == GROUP_KIND:
            compound.groupid = compound.id
            compound.groupname = compound.name

        for inner in compounddef.findall("innerclass"):
            child = self.references.get(inner.get("refid", ""))
            if not isinstance(child, Compound):
                logger.debug("Unknown inner class %s in %s", inner.get("refid"), compound.name)
                continue
            if compound.kind == NAMESPACE_KIND:
                self.assign_to_namespace(compound, child)
            else:
                self.assign_class_to_group(compound, child)

        for inner in compounddef.findall("innernamespace"):
            compound.innernamespaces.append((inner.text or "").strip())
            child = self.references.get(inner.get("refid", ""))
            if compound.kind == GROUP_KIND and isinstance(child, Compound):
                self.assign_namespace_to_group(compound, child)

    def assign_to_namespace(self, namespace: Compound, child: Compound) -> None:
        """Namespaces take ownership of their inner classes."""
        if child.namespace and child.namespace != namespace.name:
            logger.warning("Namespace mismatch: %s != %s", namespace.name, child.namespace)
        namespace.adopt(child)

    def assign_class_to_group(self, group: Compound, child: Compound) -> None:
        """List a class under a group; the declaring namespace keeps ownership."""
        group.compounds[child.id] = child
        child.groupid = group.id
        child.groupname = group.name

    def assign_namespace_to_group(self, group: Compound, child: Compound) -> None:
        """List a namespace under a group without taking ownership."""
        group.compounds[child.id] = child
        child.groupid = group.id
        child.groupname = group.name

    def _drop_listings_inside_namespaces(self, group: Compound) -> None:
        """Unlist compounds the group already reaches through a listed namespace."""
        namespaces = [child for child in group.compounds.values() if child.kind == NAMESPACE_KIND]
        for namespace in namespaces:
            for child_id in namespace.compounds:
                if child_id in group.compounds and group.compounds[child_id] is not namespace:
                    logger.debug("Group %s reaches %s through %s", group.name, child_id, namespace.name)
                    del group.compounds[child_id]


def load_index(directory: str) -> DoxygenIndexParser:
    """Parse a Doxygen XML directory and return the populated parser.

    The tree is available as ``parser.root`` and the id lookup table as
    ``parser.references``.
    """
    parser = DoxygenIndexParser(directory)
    parser.load_index()
    return parser
