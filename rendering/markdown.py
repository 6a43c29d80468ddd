"""
Markdown rendering of compounds.

Each compound kind maps to a Jinja2 template family through a dispatch
table: ``index``, ``page``, ``namespace`` (also used for groups) and
``class`` (also used for structs and interfaces). Kinds without a family are
skipped.

Templates are looked up in the user's templates directory first (when one is
configured), then in the built-in set for the configured language, so a
custom directory may override only some of them.
"""

import logging
import os
import re
from typing import Any, Dict, List, Optional

import jinja2

from compound.config import NAMESPACE_KIND
from compound.models import Compound, FilteredView
from core.options import ConfigValidationError

logger = logging.getLogger(__name__)

BUILTIN_TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")
TEMPLATE_SUFFIX = ".md.jinja2"

# Compound kind -> template family
TEMPLATE_FAMILIES: Dict[str, str] = {
    "index": "index",
    "page": "page",
    "namespace": "namespace",
    "group": "namespace",
    "class": "class",
    "struct": "class",
    "interface": "class",
}

_EXCESS_NEWLINES_RE = re.compile(r"(\r\n|\r|\n){3,}")


class TemplateRenderError(RuntimeError):
    """Raised when a template cannot be loaded or rendered."""


def cell(text: Optional[str]) -> str:
    """Escape text for a Markdown table cell."""
    return (text or "").replace("|", "\\|").replace("\n", "<br/>")


def title(text: Optional[str]) -> str:
    """Keep a heading on one line."""
    return (text or "").replace("\n", "<br/>")


def anchor(refid: Optional[str], options: Any) -> str:
    """Anchor markup for internal links, per the anchor options."""
    if not refid:
        return ""
    if getattr(options, "anchors", False):
        return "{#" + refid + "}"
    if getattr(options, "html_anchors", False):
        return f'<a id="{refid}"></a>'
    return ""


def available_languages() -> List[str]:
    return sorted(
        name for name in os.listdir(BUILTIN_TEMPLATES_DIR) if os.path.isdir(os.path.join(BUILTIN_TEMPLATES_DIR, name))
    )


def template_search_path(options: Any) -> List[str]:
    """Directories searched for templates, highest priority first.

    Raises:
        ConfigValidationError: Unknown language or missing templates directory.
    """
    search_path = []
    custom = getattr(options, "templates", None)
    if custom:
        if not os.path.isdir(custom):
            raise ConfigValidationError(f"Templates directory not found: {custom}")
        search_path.append(custom)

    language = getattr(options, "language", "cpp")
    builtin = os.path.join(BUILTIN_TEMPLATES_DIR, language)
    if not os.path.isdir(builtin):
        if not custom:
            raise ConfigValidationError(
                f"No built-in templates for language '{language}' "
                f"(available: {', '.join(available_languages())})"
            )
        logger.warning("No built-in templates for language '%s'; using %s only", language, custom)
    else:
        search_path.append(builtin)
    return search_path


class MarkdownRenderer:
    """Renders compounds to Markdown text.

    Args:
        options: Run options; the anchor settings, ``language`` and
            ``templates`` are read.
    """

    def __init__(self, options: Any):
        self.options = options
        self.search_path = template_search_path(options)
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(self.search_path),
            undefined=jinja2.StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )
        self.env.filters["cell"] = cell
        self.env.filters["title"] = title
        self.env.filters["anchor"] = lambda refid: anchor(refid, self.options)
        self._templates: Dict[str, jinja2.Template] = {}

    def _template(self, family: str) -> jinja2.Template:
        if family not in self._templates:
            name = family + TEMPLATE_SUFFIX
            try:
                self._templates[family] = self.env.get_template(name)
            except jinja2.TemplateNotFound as exc:
                raise TemplateRenderError(
                    f"Template '{name}' not found in {', '.join(self.search_path)}"
                ) from exc
            except jinja2.TemplateError as exc:
                raise TemplateRenderError(f"Template error in '{name}': {exc}") from exc
        return self._templates[family]

    def render(self, compound: Compound) -> Optional[str]:
        """Render one compound, or return None when it has nothing to show.

        Raises:
            TemplateRenderError: The template is missing or fails to render.
        """
        family = TEMPLATE_FAMILIES.get(compound.kind)
        if family is None:
            logger.warning("Cannot render %s %s", compound.kind, compound.fullname or compound.name)
            return None

        if family == "namespace" and self._only_wraps_namespace(compound):
            return None

        logger.debug("Rendering %s %s", compound.kind, compound.fullname or compound.name)
        template = self._template(family)
        try:
            text = template.render(compound=compound, view=compound.filtered or FilteredView(), options=self.options)
        except jinja2.TemplateError as exc:
            raise TemplateRenderError(f"Template error in '{template.name}': {exc}") from exc
        return _EXCESS_NEWLINES_RE.sub(r"\1\n", text).strip() + "\n"

    def render_array(self, compounds: List[Compound]) -> List[Optional[str]]:
        return [self.render(compound) for compound in compounds]

    @staticmethod
    def _only_wraps_namespace(compound: Compound) -> bool:
        children = list(compound.compounds.values())
        return len(children) == 1 and children[0].kind == NAMESPACE_KIND
