"""Best-effort clipboard access."""

from __future__ import annotations

import logging

import pyperclip

logger = logging.getLogger(__name__)


def copy_to_clipboard(text: str) -> bool:
    """Copy text to the system clipboard.

    Headless systems often have no clipboard mechanism; that is not
    an error for callers.

    Args:
        text: Text to copy

    Returns:
        True if the text was copied, False otherwise
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.debug("Clipboard unavailable: %s", e)
        return False
    return True
