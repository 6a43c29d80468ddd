"""
Doxygen description markup to Markdown conversion.

Handles the subset of the Doxygen ``descriptionType`` schema that shows up in
brief/detailed descriptions: paragraphs, inline styles, references, lists,
code listings, simple sections and parameter lists.
"""

import logging
import re
from typing import List, Optional

from lxml import etree

logger = logging.getLogger(__name__)

_SPACE_RE = re.compile(r"[ \t]+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")
_SENTENCE_END_RE = re.compile(r"(?<=[.!?])\s")

# Markdown link target placeholder, resolved once output paths are known
REF_PLACEHOLDER = "{{#ref {refid} #}}"

SIMPLESECT_TITLES = {
    "return": "Returns",
    "see": "See also",
    "note": "Note",
    "warning": "Warning",
    "attention": "Attention",
    "since": "Since",
    "deprecated": "Deprecated",
    "pre": "Precondition",
    "post": "Postcondition",
    "author": "Author",
    "version": "Version",
}

PARAMETERLIST_TITLES = {
    "param": "Parameters",
    "retval": "Return values",
    "exception": "Exceptions",
    "templateparam": "Template parameters",
}


def ref_link(text: str, refid: str) -> str:
    """Markdown link to a Doxygen id, resolved later by the writer."""
    return f"[{text}]({REF_PLACEHOLDER.format(refid=refid)})"


def _children(element: etree._Element) -> str:
    parts: List[str] = [element.text or ""]
    for child in element:
        parts.append(_convert(child))
        parts.append(child.tail or "")
    return "".join(parts)


def _inline(element: etree._Element) -> str:
    return _SPACE_RE.sub(" ", _children(element).replace("\n", " ")).strip()


def _list(element: etree._Element, ordered: bool) -> str:
    lines = []
    for index, item in enumerate(element.findall("listitem"), start=1):
        bullet = f"{index}." if ordered else "*"
        body = _children(item).strip().replace("\n", "\n  ")
        lines.append(f"{bullet} {body}")
    return "\n" + "\n".join(lines) + "\n"


def _programlisting(element: etree._Element) -> str:
    lines = []
    for codeline in element.findall("codeline"):
        lines.append("".join(_code_text(part) for part in codeline))
    language = (element.get("filename") or "").lstrip(".")
    return "\n```" + language + "\n" + "\n".join(lines) + "\n```\n"


def _code_text(element: etree._Element) -> str:
    if element.tag == "sp":
        return " " + (element.tail or "")
    parts = [element.text or ""]
    for child in element:
        parts.append(_code_text(child))
    parts.append(element.tail or "")
    return "".join(parts)


def _parameterlist(element: etree._Element) -> str:
    title = PARAMETERLIST_TITLES.get(element.get("kind", ""), "Parameters")
    lines = [f"\n#### {title}"]
    for item in element.findall("parameteritem"):
        names = [_inline(name) for name in item.iter("parametername")]
        description = item.find("parameterdescription")
        text = _inline(description) if description is not None else ""
        lines.append(f"* `{', '.join(names)}` {text}".rstrip())
    return "\n".join(lines) + "\n"


def _simplesect(element: etree._Element) -> str:
    kind = element.get("kind", "")
    title = SIMPLESECT_TITLES.get(kind)
    if title is None:
        title_element = element.find("title")
        title = _inline(title_element) if title_element is not None else kind.capitalize()
    body = "".join(_convert(child) for child in element if child.tag != "title").strip()
    return f"\n#### {title}\n{body}\n"


def _convert(element: etree._Element) -> str:
    tag = element.tag
    if not isinstance(tag, str):  # comments, processing instructions
        return ""

    if tag == "para":
        return _children(element).strip() + "\n\n"
    if tag == "bold":
        return f"**{_inline(element)}**"
    if tag == "emphasis":
        return f"*{_inline(element)}*"
    if tag == "computeroutput":
        return f"`{_inline(element)}`"
    if tag == "ref":
        return ref_link(_inline(element), element.get("refid", ""))
    if tag == "ulink":
        return f"[{_inline(element)}]({element.get('url', '')})"
    if tag == "linebreak":
        return "\n"
    if tag == "ndash":
        return "&ndash;"
    if tag == "mdash":
        return "&mdash;"
    if tag == "itemizedlist":
        return _list(element, ordered=False)
    if tag == "orderedlist":
        return _list(element, ordered=True)
    if tag == "programlisting":
        return _programlisting(element)
    if tag == "verbatim":
        return "\n```\n" + (element.text or "") + "\n```\n"
    if tag == "parameterlist":
        return _parameterlist(element)
    if tag == "simplesect":
        return _simplesect(element)
    if tag == "heading":
        level = int(element.get("level", "2") or 2)
        return "\n" + "#" * level + " " + _inline(element) + "\n"
    if tag in ("sect1", "sect2", "sect3", "sect4"):
        level = int(tag[-1]) + 1
        title_element = element.find("title")
        title = _inline(title_element) if title_element is not None else ""
        body = "".join(_convert(child) for child in element if child.tag != "title")
        return f"\n{'#' * level} {title}\n\n{body}"
    if tag in ("title", "anchor", "xrefsect", "internal"):
        return ""

    # Unknown markup: keep the text
    return _children(element)


def to_markdown(element: Optional[etree._Element]) -> str:
    """Convert a Doxygen description element into Markdown text.

    Args:
        element: ``briefdescription``/``detaileddescription`` or any nested
            description element. ``None`` gives an empty string.

    Returns:
        Markdown text with at most one blank line between blocks.
    """
    if element is None:
        return ""
    text = _children(element)
    text = "\n".join(line.rstrip() for line in text.split("\n"))
    return _BLANK_LINES_RE.sub("\n\n", text).strip()


def summarize(*descriptions: str) -> str:
    """First sentence of the first non-empty description, on one line."""
    for description in descriptions:
        text = " ".join(description.split())
        if not text:
            continue
        return _SENTENCE_END_RE.split(text, maxsplit=1)[0]
    return ""
