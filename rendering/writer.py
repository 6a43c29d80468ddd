"""
Output file placement and reference resolution.

Rendered text carries ``{#ref REFID #}`` placeholders. They are resolved
only when the file they land in is known: a target in the same file becomes
a bare ``#REFID`` anchor, a target in another file is prefixed with that
file's path relative to the current one.
"""

import logging
import os
import re
from typing import Any, Dict, List, Optional, Union

from compound.config import GROUP_KIND, INDEX_KIND, NAMESPACE_KIND, PAGE_KIND
from compound.models import Compound, Member
from core.options import NAME_PLACEHOLDER

logger = logging.getLogger(__name__)

_REF_RE = re.compile(r"\{#ref ([^\s#}]+) #\}")

Reference = Union[Compound, Member]


def _class_file_name(name: str) -> str:
    return name.replace(":", "-").replace("<", "(").replace(">", ")")


def _enclosing_namespace(compound: Compound) -> Optional[Compound]:
    """The compound itself when it is a namespace, else its nearest namespace ancestor."""
    if compound.kind == NAMESPACE_KIND:
        return compound
    for parent in compound.ancestors():
        if parent.kind == NAMESPACE_KIND:
            return parent
    return None


def _owning_compound(ref: Reference, references: Dict[str, Reference]) -> Optional[Compound]:
    if isinstance(ref, Compound):
        return ref
    owner = references.get(ref.compound_refid) if ref.compound_refid else None
    return owner if isinstance(owner, Compound) else None


def compound_path(ref: Reference, options: Any, references: Optional[Dict[str, Reference]] = None) -> Optional[str]:
    """Output file a compound (or the compound holding a member) is written to.

    Returns None when the location cannot be determined, for example a
    member with no group in groups mode.
    """
    output = options.output
    references = references or {}

    if isinstance(ref, Compound) and ref.kind == PAGE_KIND:
        return os.path.join(os.path.dirname(output), f"page-{ref.name}.md")

    if options.groups:
        groupname = ref.groupname
        if not groupname and isinstance(ref, Compound) and ref.kind == GROUP_KIND:
            groupname = ref.name
        if not groupname:
            return None
        return output.replace(NAME_PLACEHOLDER, groupname, 1)

    if options.classes:
        owner = _owning_compound(ref, references)
        if owner is None or owner.kind == INDEX_KIND:
            return None
        namespace = _enclosing_namespace(owner)
        if namespace is None:
            return None
        return output.replace(NAME_PLACEHOLDER, _class_file_name(namespace.name), 1)

    return output


def resolve_refs(content: str, compound: Compound, references: Dict[str, Reference], options: Any) -> str:
    """Replace ref placeholders in ``content`` written for ``compound``'s file."""
    current = compound_path(compound, options, references)

    def _replace(match: "re.Match[str]") -> str:
        refid = match.group(1)
        ref = references.get(refid)
        if ref is None:
            logger.debug("Unresolved reference %s", refid)
            return f"#{refid}"
        target = compound_path(ref, options, references)
        if target is None or current is None or os.path.abspath(target) == os.path.abspath(current):
            return f"#{refid}"
        relative = os.path.relpath(target, os.path.dirname(current) or ".")
        return f"{relative.replace(os.sep, '/')}#{refid}"

    return _REF_RE.sub(_replace, content)


def write_compound(
    compound: Compound,
    contents: List[Optional[str]],
    references: Dict[str, Reference],
    options: Any,
) -> Optional[str]:
    """Write the non-empty rendered blocks of one output unit.

    Returns:
        The path written, or None when every block was empty.
    """
    blocks = [block for block in contents if block]
    if not blocks:
        logger.info("Nothing to write for %s %s", compound.kind, compound.name)
        return None

    path = compound_path(compound, options, references)
    if path is None:
        logger.warning("No output location for %s %s; skipping", compound.kind, compound.name)
        return None

    text = resolve_refs("\n".join(blocks), compound, references, options)
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)

    logger.info("Wrote %s (%d blocks)", path, len(blocks))
    return path
