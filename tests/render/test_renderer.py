"""Tests for documentation rendering."""

from io import StringIO

from rich.console import Console
from rich.syntax import Syntax
from rich.text import Text

from notedoc.render.renderer import (
    CodeBlock,
    Heading,
    ListItem,
    Paragraph,
    Quote,
    Rule,
    Span,
    render,
    render_for_display,
    resolve_lexer,
    strip_markers,
    to_renderable,
)

SAMPLE = """# Notebook Overview

This notebook trains a **classifier** with `sklearn`.

## Setup

```python
import pandas as pd
df = pd.read_csv("data.csv")
```

```
plain block
```

- load data
- train
  - fit model

1. first
2. second

> Note: results vary.

---
"""


def render_to_string(renderable) -> str:
    console = Console(file=StringIO(), width=80, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


class TestRender:
    """Tests for render()."""

    def test_top_level_heading(self):
        document = render("# Title\ntext")
        assert document.blocks == (
            Heading(1, "Title"),
            Paragraph((Span("text"),)),
        )
        assert document.headings(1) == [Heading(1, "Title")]

    def test_heading_levels(self):
        document = render(SAMPLE)
        assert [(h.level, h.text) for h in document.headings()] == [
            (1, "Notebook Overview"),
            (2, "Setup"),
        ]

    def test_emphasis_and_inline_code_spans(self):
        paragraph = render("Trains a **classifier** with `sklearn`.").blocks[0]
        assert paragraph.spans == (
            Span("Trains a "),
            Span("classifier", bold=True),
            Span(" with "),
            Span("sklearn", code=True),
            Span("."),
        )
        assert paragraph.text == "Trains a classifier with sklearn."

    def test_tagged_fence_keeps_language(self):
        blocks = render(SAMPLE).code_blocks()
        assert blocks[0] == CodeBlock(
            "python", 'import pandas as pd\ndf = pd.read_csv("data.csv")\n'
        )

    def test_untagged_fence_has_no_language(self):
        blocks = render(SAMPLE).code_blocks()
        assert blocks[1] == CodeBlock(None, "plain block\n")

    def test_fence_info_uses_first_word(self):
        block = render("```Python title=x\nx = 1\n```").blocks[0]
        assert block.language == "python"

    def test_lists_quotes_and_rules(self):
        blocks = render(SAMPLE).blocks
        items = [b for b in blocks if isinstance(b, ListItem)]
        assert [(i.depth, i.marker, i.text) for i in items] == [
            (0, "•", "load data"),
            (0, "•", "train"),
            (1, "•", "fit model"),
            (0, "1.", "first"),
            (0, "2.", "second"),
        ]
        assert any(isinstance(b, Quote) for b in blocks)
        assert isinstance(blocks[-1], Rule)

    def test_ordered_list_start_number(self):
        items = render("3. three\n4. four").blocks
        assert [i.marker for i in items] == ["3.", "4."]

    def test_item_holding_only_a_fence_does_not_leak_marker(self):
        blocks = render("- ```py\n  x = 1\n  ```\n\nAfter the list.\n").blocks
        assert blocks == (
            CodeBlock("py", "x = 1\n"),
            Paragraph((Span("After the list."),)),
        )

    def test_is_idempotent(self):
        assert render(SAMPLE) == render(SAMPLE)

    def test_empty_text(self):
        assert render("").blocks == ()


class TestResolveLexer:
    """Tests for lexer lookup."""

    def test_known_language(self):
        assert resolve_lexer("python") == "python"

    def test_alias(self):
        assert resolve_lexer("ipython3") == "python"
        assert resolve_lexer("sh") == "bash"

    def test_unknown_language_falls_back_to_text(self):
        assert resolve_lexer("no-such-lang") == "text"

    def test_missing_language_is_text(self):
        assert resolve_lexer(None) == "text"


class TestToRenderable:
    """Tests for rich output."""

    def test_tagged_code_goes_through_syntax(self):
        group = to_renderable(render("```python\nx = 1\n```"))
        syntaxes = [r for r in group.renderables if isinstance(r, Syntax)]
        assert len(syntaxes) == 1
        assert syntaxes[0].code == "x = 1"

    def test_untagged_code_is_plain_text(self):
        group = to_renderable(render("```\nx = 1\n```"))
        assert not any(isinstance(r, Syntax) for r in group.renderables)
        assert isinstance(group.renderables[0], Text)

    def test_heading_text_rendered_without_markers(self):
        output = render_to_string(to_renderable(render("# Title\ntext")))
        assert "Title" in output
        assert "#" not in output


class TestLegacyMode:
    """Tests for the marker-stripping display mode."""

    def test_strip_markers(self):
        assert strip_markers("### Setup\n**bold**") == " Setup\n bold "

    def test_plain_mode_does_not_parse_markdown(self):
        output = render_to_string(render_for_display("# Title\n**x**", mode="plain"))
        assert "# Title" in output
        assert "**" not in output

    def test_markdown_mode_is_default(self):
        output = render_to_string(render_for_display("### Setup"))
        assert "Setup" in output
        assert "###" not in output
