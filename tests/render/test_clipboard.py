"""Tests for the copy-raw-text action."""

from unittest.mock import patch

import pyperclip
import pytest

from notedoc.render.clipboard import copy_raw_text
from notedoc.utils.exceptions import ClipboardUnavailable


class TestCopyRawText:
    """Tests for copy_raw_text."""

    def test_copies_text_unchanged(self):
        raw = "### Heading\n**bold** `code`\n\n```python\nx = 1\n```\n"
        with patch("notedoc.render.clipboard.pyperclip.copy") as mock_copy:
            chars = copy_raw_text(raw)
        mock_copy.assert_called_once_with(raw)
        assert chars == len(raw)

    def test_missing_clipboard_raises(self):
        with patch(
            "notedoc.render.clipboard.pyperclip.copy",
            side_effect=pyperclip.PyperclipException("no mechanism"),
        ):
            with pytest.raises(ClipboardUnavailable) as exc:
                copy_raw_text("text")
        assert exc.value.stage == "copy"
        assert "no mechanism" in exc.value.message
