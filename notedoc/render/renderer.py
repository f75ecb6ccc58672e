"""Render generated documentation text for the terminal.

render() parses markdown into a tuple of plain blocks (headings, paragraphs,
list items, code blocks, quotes, rules). to_renderable() turns that document
into rich renderables, sending language-tagged code blocks through
rich.syntax.Syntax. Both are pure: the same text always yields an equal
document.

strip_markers() is the legacy display mode that only removes "### " and "**"
markers. It is used instead of, never together with, the markdown path.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from markdown_it import MarkdownIt
from markdown_it.token import Token
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound
from rich.console import Group, RenderableType
from rich.rule import Rule as RichRule
from rich.syntax import Syntax
from rich.text import Text

CODE_THEME = "monokai"
PLAIN_LEXER = "text"

# Identifiers that notebooks and LLM output use but pygments does not know.
LEXER_ALIASES: dict[str, str] = {
    "ipython": "python",
    "ipython3": "python",
    "py3": "python",
    "shell": "bash",
    "sh": "bash",
    "console": "bash",
    "jsonc": "json",
}

HEADING_STYLES: dict[int, str] = {
    1: "bold magenta underline",
    2: "bold cyan",
    3: "bold",
}

_md = MarkdownIt("commonmark")


# ═══════════════════════════════════════════════════════════════════════════ #
#  Document model
# ═══════════════════════════════════════════════════════════════════════════ #


@dataclass(frozen=True)
class Span:
    """A run of inline text with its emphasis."""

    text: str
    bold: bool = False
    italic: bool = False
    code: bool = False


@dataclass(frozen=True)
class Heading:
    level: int
    text: str


@dataclass(frozen=True)
class Paragraph:
    spans: tuple[Span, ...]

    @property
    def text(self) -> str:
        return "".join(s.text for s in self.spans)


@dataclass(frozen=True)
class ListItem:
    depth: int
    marker: str
    spans: tuple[Span, ...]

    @property
    def text(self) -> str:
        return "".join(s.text for s in self.spans)


@dataclass(frozen=True)
class CodeBlock:
    """Fenced or indented code. language is None when the fence has no tag."""

    language: str | None
    code: str


@dataclass(frozen=True)
class Quote:
    spans: tuple[Span, ...]


@dataclass(frozen=True)
class Rule:
    pass


Block = Union[Heading, Paragraph, ListItem, CodeBlock, Quote, Rule]


@dataclass(frozen=True)
class RenderedDocument:
    blocks: tuple[Block, ...]

    def headings(self, level: int | None = None) -> list[Heading]:
        return [
            b
            for b in self.blocks
            if isinstance(b, Heading) and (level is None or b.level == level)
        ]

    def code_blocks(self) -> list[CodeBlock]:
        return [b for b in self.blocks if isinstance(b, CodeBlock)]


# ═══════════════════════════════════════════════════════════════════════════ #
#  Parsing
# ═══════════════════════════════════════════════════════════════════════════ #


def _inline_spans(token: Token) -> tuple[Span, ...]:
    """Flatten an inline token's children into styled spans."""
    spans: list[Span] = []
    bold = italic = False
    for child in token.children or []:
        if child.type == "strong_open":
            bold = True
        elif child.type == "strong_close":
            bold = False
        elif child.type == "em_open":
            italic = True
        elif child.type == "em_close":
            italic = False
        elif child.type == "code_inline":
            spans.append(Span(child.content, code=True))
        elif child.type in ("softbreak", "hardbreak"):
            spans.append(Span("\n" if child.type == "hardbreak" else " "))
        elif child.type == "image":
            spans.append(Span(child.content or "image", italic=True))
        elif child.content:
            spans.append(Span(child.content, bold=bold, italic=italic))
    return tuple(spans)


def _fence_language(info: str) -> str | None:
    tag = info.strip().split(maxsplit=1)[0] if info.strip() else ""
    return tag.lower() or None


def render(text: str) -> RenderedDocument:
    """Parse documentation markdown into a structured document."""
    tokens = _md.parse(text)
    blocks: list[Block] = []
    list_stack: list[list] = []  # [ordered, next_number]
    pending_marker: str | None = None
    quote_depth = 0
    heading_level: int | None = None

    for token in tokens:
        kind = token.type
        if kind == "heading_open":
            heading_level = int(token.tag[1:])
        elif kind == "heading_close":
            heading_level = None
        elif kind in ("bullet_list_open", "ordered_list_open"):
            start = int(token.attrs.get("start", 1)) if token.attrs else 1
            list_stack.append([kind == "ordered_list_open", start])
        elif kind in ("bullet_list_close", "ordered_list_close"):
            list_stack.pop()
        elif kind == "list_item_open":
            ordered, number = list_stack[-1]
            pending_marker = f"{number}." if ordered else "•"
            list_stack[-1][1] = number + 1
        elif kind == "list_item_close":
            # An item with no text of its own (only a fence, say) uses no marker.
            pending_marker = None
        elif kind == "blockquote_open":
            quote_depth += 1
        elif kind == "blockquote_close":
            quote_depth -= 1
        elif kind == "inline":
            if heading_level is not None:
                spans = _inline_spans(token)
                blocks.append(Heading(heading_level, "".join(s.text for s in spans)))
            elif pending_marker is not None:
                blocks.append(
                    ListItem(len(list_stack) - 1, pending_marker, _inline_spans(token))
                )
                pending_marker = None
            elif quote_depth:
                blocks.append(Quote(_inline_spans(token)))
            else:
                blocks.append(Paragraph(_inline_spans(token)))
        elif kind == "fence":
            blocks.append(CodeBlock(_fence_language(token.info), token.content))
        elif kind == "code_block":
            blocks.append(CodeBlock(None, token.content))
        elif kind == "hr":
            blocks.append(Rule())
        elif kind == "html_block":
            blocks.append(Paragraph((Span(token.content.rstrip("\n")),)))

    return RenderedDocument(tuple(blocks))


# ═══════════════════════════════════════════════════════════════════════════ #
#  Rich output
# ═══════════════════════════════════════════════════════════════════════════ #


def resolve_lexer(language: str | None) -> str:
    """Map a fence tag to a pygments lexer name, falling back to plain text."""
    if not language:
        return PLAIN_LEXER
    name = LEXER_ALIASES.get(language, language)
    try:
        get_lexer_by_name(name)
    except ClassNotFound:
        return PLAIN_LEXER
    return name


def _spans_to_text(spans: tuple[Span, ...], base_style: str = "") -> Text:
    text = Text(style=base_style)
    for span in spans:
        if span.code:
            text.append(span.text, style="markdown.code")
            continue
        style = " ".join(
            s for s in ("bold" if span.bold else "", "italic" if span.italic else "") if s
        )
        text.append(span.text, style=style or None)
    return text


def _block_renderable(block: Block) -> RenderableType:
    if isinstance(block, Heading):
        return Text(block.text, style=HEADING_STYLES.get(block.level, "bold dim"))
    if isinstance(block, Paragraph):
        return _spans_to_text(block.spans)
    if isinstance(block, ListItem):
        line = Text("  " * block.depth + f"{block.marker} ")
        line.append_text(_spans_to_text(block.spans))
        return line
    if isinstance(block, CodeBlock):
        if block.language is None:
            return Text(block.code.rstrip("\n"), style="markdown.code_block")
        return Syntax(
            block.code.rstrip("\n"),
            resolve_lexer(block.language),
            theme=CODE_THEME,
            word_wrap=True,
        )
    if isinstance(block, Quote):
        line = Text("▌ ", style="dim")
        line.append_text(_spans_to_text(block.spans, base_style="italic"))
        return line
    return RichRule(style="dim")


def to_renderable(document: RenderedDocument) -> Group:
    """Build a rich renderable for a parsed document."""
    parts: list[RenderableType] = []
    for i, block in enumerate(document.blocks):
        if i and not isinstance(block, ListItem):
            parts.append(Text(""))
        parts.append(_block_renderable(block))
    return Group(*parts)


def strip_markers(text: str) -> str:
    """Legacy display: blank out "###" heading markers and "**" emphasis."""
    text = re.sub(r"###\s*", " ", text)
    return re.sub(r"\*\*", " ", text)


def render_for_display(text: str, mode: str = "markdown") -> RenderableType:
    """Render documentation in the configured mode (markdown or plain)."""
    if mode == "plain":
        return Text(strip_markers(text))
    return to_renderable(render(text))
