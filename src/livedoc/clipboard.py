"""System clipboard access."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def copy_to_clipboard(text: str) -> bool:
    """Copy text to system clipboard. Returns True on success."""
    try:
        import pyperclip
        pyperclip.copy(text)
        logger.info("Note copied to clipboard.")
        return True
    except Exception as exc:
        logger.warning("Could not copy to clipboard: %s", exc)
        return False
