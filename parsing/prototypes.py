"""
One-line Markdown prototypes for members and compounds.
"""

import re
from typing import List

from lxml import etree

from compound.models import Compound, EnumValue, Member
from parsing.description import ref_link, summarize, to_markdown

_SPACE_RE = re.compile(r"\s+")


def inline(parts: List[str]) -> str:
    """Join prototype fragments and collapse whitespace."""
    return _SPACE_RE.sub(" ", "".join(parts)).strip()


def _type(memberdef: etree._Element) -> str:
    return to_markdown(memberdef.find("type")).replace("\n", " ")


def _template_params(memberdef: etree._Element) -> List[str]:
    paramlist = memberdef.find("templateparamlist")
    if paramlist is None:
        return []
    params = []
    for param in paramlist.findall("param"):
        text = to_markdown(param.find("type"))
        declname = param.findtext("declname")
        if declname:
            text += " " + declname
        params.append(text)
    return ["template<", ", ".join(params), "> "]


def _params(memberdef: etree._Element) -> List[str]:
    params = []
    for param in memberdef.findall("param"):
        text = to_markdown(param.find("type"))
        declname = param.findtext("declname")
        if declname:
            text += " " + declname
        defval = param.find("defval")
        if defval is not None:
            text += " = " + to_markdown(defval)
        params.append(text)
    return params


def build_member_proto(member: Member, memberdef: etree._Element) -> str:
    """Build the prototype of ``member`` from its ``memberdef`` element."""
    link = ref_link(member.name, member.refid)
    prot = memberdef.get("prot", "")
    parts: List[str] = []

    if member.kind in ("function", "signal", "slot"):
        if member.kind != "function":
            parts += ["{", member.kind, "} "]
        parts += [prot, " "]
        parts += _template_params(memberdef)
        if memberdef.get("virt") in ("virtual", "pure-virtual"):
            parts.append("virtual ")
        if memberdef.get("static") == "yes":
            parts.append("static ")
        parts += [_type(memberdef), " "]
        if memberdef.get("explicit") == "yes":
            parts.append("explicit ")
        parts += [link, "(", ", ".join(_params(memberdef)), ")"]
        if memberdef.get("const") == "yes":
            parts.append(" const")
        if memberdef.get("virt") == "pure-virtual":
            parts.append(" = 0")
    elif member.kind == "variable":
        parts += [prot, " "]
        if memberdef.get("static") == "yes":
            parts.append("static ")
        if memberdef.get("mutable") == "yes":
            parts.append("mutable ")
        parts += [_type(memberdef), " ", link]
    elif member.kind == "property":
        parts += ["{", member.kind, "} ", _type(memberdef), " ", link]
    elif member.kind == "enum":
        parts += [prot, " enum ", link]
    elif member.kind == "friend":
        parts += ["friend ", _type(memberdef), " ", link]
        if memberdef.find("param") is not None:
            parts += ["(", ", ".join(_params(memberdef)), ")"]
    elif member.kind == "define":
        parts += ["#define ", link]
        names = [param.findtext("defname") or "" for param in memberdef.findall("param")]
        if names:
            parts += ["(", ", ".join(names), ")"]
        initializer = memberdef.find("initializer")
        if initializer is not None:
            parts += [" ", to_markdown(initializer)]
    elif member.kind == "typedef":
        parts += [prot, " typedef ", _type(memberdef), " ", link]
        argsstring = memberdef.findtext("argsstring")
        if argsstring:
            parts.append(argsstring)
    else:
        parts += [member.kind, " ", member.name]

    return inline(parts)


def build_enum_values(memberdef: etree._Element) -> List[EnumValue]:
    """Collect the enumerators of an enum ``memberdef``."""
    values = []
    for enumvalue in memberdef.findall("enumvalue"):
        brief = to_markdown(enumvalue.find("briefdescription"))
        detailed = to_markdown(enumvalue.find("detaileddescription"))
        values.append(
            EnumValue(
                name=(enumvalue.findtext("name") or "").strip(),
                briefdescription=brief,
                detaileddescription=detailed,
                summary=summarize(brief, detailed),
            )
        )
    return values


def build_compound_proto(compound: Compound) -> str:
    """Prototype of a compound: its kind and a bold link to it."""
    return inline([compound.kind, " ", ref_link(f"**{compound.name}**", compound.refid or compound.id)])
