"""Copy the unrendered documentation text to the system clipboard."""

import logging

import pyperclip

from notedoc.utils.exceptions import ClipboardUnavailable

logger = logging.getLogger(__name__)


def copy_raw_text(text: str) -> int:
    """Copy text exactly as received and return the number of characters copied.

    Raises:
        ClipboardUnavailable: If pyperclip finds no clipboard mechanism.
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise ClipboardUnavailable(f"Clipboard not available: {e}") from e
    logger.info("raw_text_copied", extra={"chars": len(text)})
    return len(text)
