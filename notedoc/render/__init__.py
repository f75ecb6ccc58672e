"""Documentation rendering and clipboard copy."""

from notedoc.render.clipboard import copy_raw_text
from notedoc.render.renderer import (
    CodeBlock,
    Heading,
    ListItem,
    Paragraph,
    Quote,
    RenderedDocument,
    Rule,
    Span,
    render,
    render_for_display,
    resolve_lexer,
    strip_markers,
    to_renderable,
)

__all__ = [
    "CodeBlock",
    "Heading",
    "ListItem",
    "Paragraph",
    "Quote",
    "RenderedDocument",
    "Rule",
    "Span",
    "copy_raw_text",
    "render",
    "render_for_display",
    "resolve_lexer",
    "strip_markers",
    "to_renderable",
]
