"""
Markdown output: per-kind rendering and file writing.
"""

from rendering.markdown import MarkdownRenderer, TemplateRenderError, anchor, cell, title
from rendering.writer import compound_path, resolve_refs, write_compound

__all__ = [
    "MarkdownRenderer",
    "TemplateRenderError",
    "anchor",
    "cell",
    "title",
    "compound_path",
    "resolve_refs",
    "write_compound",
]
