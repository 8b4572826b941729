"""Error taxonomy for note commands.

I/O failures are not wrapped: callers see the underlying ``OSError``.
"""

from __future__ import annotations


class LivedocError(Exception):
    """Base class for livedoc errors."""


class NoWorkspace(LivedocError):
    """No usable workspace root."""

    def __init__(self, root: object = None) -> None:
        self.root = root
        if root is None:
            msg = "Open a folder first to save notes."
        else:
            msg = f"Workspace folder not found: {root}"
        super().__init__(msg)


class NoActiveTarget(LivedocError):
    """No current file/line to attach a note to."""

    def __init__(self, reason: str = "Open a file and place the cursor to log a note.") -> None:
        super().__init__(reason)


class UserCancelled(LivedocError):
    """The input prompt was dismissed without text."""


class NotFound(LivedocError):
    """No record exists for the requested key."""

    def __init__(self, path: str, line: int) -> None:
        self.path = path
        self.line = line
        super().__init__(f"No note at {path}:{line}")
