"""Logging configuration for livedoc.

Logs to both:
- ~/.config/livedoc/livedoc.log (persistent, 1 MB cap, 2 backups)
- stderr (only warnings and above unless --debug)
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_DIR = Path.home() / ".config" / "livedoc"
LOG_FILE = LOG_DIR / "livedoc.log"

_LOG_MAX_BYTES = 1024 * 1024
_LOG_BACKUP_COUNT = 2


def setup_logging(debug: bool = False, console: bool = True) -> None:
    """Configure the ``livedoc`` logger. Safe to call more than once."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger("livedoc")
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    fh = RotatingFileHandler(
        str(LOG_FILE),
        maxBytes=_LOG_MAX_BYTES,
        backupCount=_LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root.addHandler(fh)

    # The TUI owns the terminal, so it turns the stderr handler off.
    if console:
        sh = logging.StreamHandler()
        sh.setLevel(logging.DEBUG if debug else logging.WARNING)
        sh.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        root.addHandler(sh)
