"""Location Index: in-memory map from note key to last-known editor position.

Only a rendering hint. The Note Store never reads it, and it may be stale
relative to the note file (e.g. after manual edits).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from livedoc.notes import Note, NoteKey


@dataclass(frozen=True)
class EditorPosition:
    file: Path
    line: int  # 0-based, as the editor reports it


class LocationIndex:
    def __init__(self) -> None:
        self._entries: dict[NoteKey, EditorPosition] = {}

    def record(self, path: str, line: int, position: EditorPosition) -> None:
        self._entries[NoteKey(path, line)] = position

    def forget(self, path: str, line: int) -> None:
        self._entries.pop(NoteKey(path, line), None)

    def query(self, path: str) -> Iterator[tuple[NoteKey, EditorPosition]]:
        """Lazily yield ``(key, position)`` for every entry on *path*.

        Each call returns a fresh iterator over a snapshot of the entries.
        """
        entries = list(self._entries.items())
        return ((key, pos) for key, pos in entries if key.path == path)

    def rebuild(self, notes: Iterable[Note], workspace_root: str | Path) -> None:
        """Repopulate from parsed note records."""
        root = Path(workspace_root)
        self._entries.clear()
        for note in notes:
            self.record(note.path, note.line, EditorPosition(root / note.path, note.line - 1))

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
