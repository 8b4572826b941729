"""Per-session context: workspace root, note store and location index.

The hosting application (CLI command or TUI) builds one ``NoteSession`` and
passes it to whatever renders annotations. Commands that need text from the
user take an ``ask`` callable; it is the only point where a command waits,
and a ``None`` answer aborts before the note file is touched.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator, Optional

from livedoc import operations
from livedoc.config import load_config
from livedoc.errors import NoActiveTarget, NoWorkspace, UserCancelled
from livedoc.index import EditorPosition, LocationIndex
from livedoc.notes import Note, NoteKey
from livedoc.store import NoteStore

logger = logging.getLogger(__name__)

# (prompt, default) -> text, or None when dismissed
Ask = Callable[[str, str], Optional[str]]
Confirm = Callable[[str], bool]

ADD_PROMPT = "Write your note here…"
EDIT_PROMPT = "Edit your note…"


def resolve_workspace(explicit: str | Path | None = None) -> Path:
    """Priority: explicit argument > config workspace_root > current directory."""
    if explicit:
        return Path(explicit).expanduser()
    configured = load_config().get("workspace_root")
    if configured:
        return Path(configured).expanduser()
    return Path.cwd()


class NoteSession:
    def __init__(
        self,
        workspace_root: str | Path,
        notes_file: str | None = None,
        index: LocationIndex | None = None,
    ) -> None:
        self.workspace_root = Path(workspace_root)
        self.notes_file = notes_file or load_config().get("notes_file") or operations.NOTES_FILE
        self.index = index if index is not None else LocationIndex()

    @classmethod
    def open(cls, workspace: str | Path | None = None) -> "NoteSession":
        """Build a session from config and load existing notes into the index."""
        session = cls(resolve_workspace(workspace))
        session.rebuild()
        return session

    @property
    def store(self) -> NoteStore:
        return operations.store_for(self.workspace_root, self.notes_file)

    @property
    def notes_path(self) -> Path:
        return self.store.notes_path

    def key_for(self, file_path: str | Path, line0: int) -> NoteKey:
        return operations.resolve_key(self.workspace_root, file_path, line0)

    def rebuild(self) -> None:
        if not self.workspace_root.is_dir():
            self.index.clear()
            return
        self.index.rebuild(self.store.notes(), self.workspace_root)
        logger.debug("Location index rebuilt: %d entries", len(self.index))

    def create(self, file_path: str | Path, line0: int, ask: Ask, text: str | None = None) -> Note:
        key = self.key_for(file_path, line0)
        if text is None:
            text = ask(ADD_PROMPT, "")
        if text is None:
            raise UserCancelled()
        if self.store.find(key.path, key.line) is not None:
            logger.warning("A note already exists at %s; appending a duplicate", key)
        note = operations.create_note(
            self.workspace_root, file_path, line0, text, notes_file=self.notes_file,
        )
        self.index.record(key.path, key.line, EditorPosition(Path(file_path), line0))
        return note

    def find(self, file_path: str | Path, line0: int) -> int:
        return operations.find_note(self.workspace_root, file_path, line0, notes_file=self.notes_file)

    def read(self, file_path: str | Path, line0: int) -> Note:
        return operations.read_note(self.workspace_root, file_path, line0, notes_file=self.notes_file)

    def edit(self, file_path: str | Path, line0: int, ask: Ask, text: str | None = None) -> Note:
        current = self.read(file_path, line0)
        if text is None:
            text = ask(EDIT_PROMPT, current.text)
        if text is None:
            raise UserCancelled()
        operations.edit_note(self.workspace_root, file_path, line0, text, notes_file=self.notes_file)
        current.text = text
        return current

    def delete(self, file_path: str | Path, line0: int, confirm: Confirm | None = None) -> None:
        key = self.key_for(file_path, line0)
        self.find(file_path, line0)
        if confirm is not None and not confirm(f"Delete note at {key}?"):
            raise UserCancelled()
        operations.delete_note(self.workspace_root, file_path, line0, notes_file=self.notes_file)
        self.index.forget(key.path, key.line)

    def annotations(self, file_path: str | Path) -> Iterator[tuple[NoteKey, EditorPosition]]:
        """Index entries for *file_path*; empty when it lies outside the workspace."""
        try:
            key = self.key_for(file_path, 0)
        except (NoActiveTarget, NoWorkspace):
            return iter(())
        return self.index.query(key.path)
